"""
Auth Blueprint

Signup, login and logout, plus the access policy used by other blueprints.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from geschichten.auth import routes  # noqa: E402, F401
