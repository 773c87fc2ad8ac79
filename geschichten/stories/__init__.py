"""
Stories Blueprint

Public story listing, story pages and the admin authoring forms.
"""

from flask import Blueprint

stories_bp = Blueprint('stories', __name__)

from geschichten.stories import routes  # noqa: E402, F401
