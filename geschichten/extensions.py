"""
Flask Extensions

Shared extension instances, bound to the app in the factory.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager backing the signed session identity
login_manager = LoginManager()
