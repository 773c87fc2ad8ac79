"""
Learning Blueprint

Vocabulary entries and grammar topics.
"""

from flask import Blueprint

learning_bp = Blueprint('learning', __name__)

from geschichten.learning import routes  # noqa: E402, F401
