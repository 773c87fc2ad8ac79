"""
Configuration settings for the Geschichten story platform
"""
import os
from datetime import timedelta


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'geschichten.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session cookie lives for one day
    PERMANENT_SESSION_LIFETIME = timedelta(days=1)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # The only account allowed to author content
    ADMIN_EMAIL = (os.environ.get('ADMIN_EMAIL') or 'admin@example.com').strip().lower()

    # Werkzeug hash method, the cost factor is part of the method string
    PASSWORD_HASH_METHOD = os.environ.get('PASSWORD_HASH_METHOD') or 'pbkdf2:sha256:600000'
    MIN_PASSWORD_LENGTH = 8

    STORY_LEVELS = ('A1', 'A2', 'B1', 'B2', 'C1', 'C2')

    # Audio uploads for quiz questions
    AUDIO_UPLOAD_FOLDER = os.environ.get('AUDIO_UPLOAD_FOLDER') or \
        os.path.join(os.path.abspath(os.path.dirname(__file__)), 'static', 'uploads', 'questions')
    AUDIO_URL_PREFIX = 'uploads/questions'
    ALLOWED_AUDIO_EXTENSIONS = {'.mp3'}
    MAX_AUDIO_BYTES = int(os.environ.get('MAX_AUDIO_BYTES') or 10 * 1024 * 1024)

    # Whole request body, checked by Werkzeug before the form is parsed
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH') or 64 * 1024 * 1024)

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
    ADMIN_EMAIL = 'admin@example.com'
