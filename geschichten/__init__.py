"""
Geschichten - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask
from sqlalchemy import event
from flask_login import current_user

from geschichten.extensions import db, login_manager
from geschichten.config import Config
from geschichten.errors import register_error_handlers

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Register blueprints
    from geschichten.auth import auth_bp
    from geschichten.stories import stories_bp
    from geschichten.learning import learning_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(stories_bp)
    app.register_blueprint(learning_bp, url_prefix='/learning')

    register_error_handlers(app)

    # Context processor for the session identity
    @app.context_processor
    def inject_identity():
        """Inject `current_user` flags and the level list into templates."""
        is_admin = bool(current_user.is_authenticated and current_user.is_admin)
        return dict(is_admin=is_admin, story_levels=app.config['STORY_LEVELS'])

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from geschichten.models import User
        try:
            return db.session.get(User, int(user_id))
        except ValueError:
            return None

    # Template filter for answer labels
    @app.template_filter('answer_letter')
    def answer_letter_filter(index):
        return 'ABCD'[index] if index is not None and 0 <= index < 4 else '?'

    # Create database tables
    with app.app_context():
        database_uri = app.config['SQLALCHEMY_DATABASE_URI']
        if database_uri.startswith('sqlite'):
            event.listen(db.engine, 'connect', _enable_sqlite_foreign_keys)
            db_path = database_uri.split('sqlite:///', 1)[-1]
            if os.path.isabs(db_path):
                os.makedirs(os.path.dirname(db_path), exist_ok=True)
        os.makedirs(app.config['AUDIO_UPLOAD_FOLDER'], exist_ok=True)
        db.create_all()
        _ensure_admin_role(app)

    return app


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def _ensure_admin_role(app):
    """Ensure only the configured admin account holds the admin role."""
    from geschichten.services.accounts import sync_admin_role
    from sqlalchemy.exc import SQLAlchemyError

    try:
        sync_admin_role(app.config['ADMIN_EMAIL'])
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Could not synchronize the admin role')
