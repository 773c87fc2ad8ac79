"""
Error Taxonomy

User-correctable errors carry the message shown on the re-rendered form.
Infrastructure failures surface as UnexpectedError with a generic message.
"""

import logging

from flask import render_template

logger = logging.getLogger(__name__)


class GeschichtenError(Exception):
    """Base class for errors that are reported back to the user."""
    status_code = 400
    default_message = 'Something went wrong with your request.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(GeschichtenError):
    status_code = 400
    default_message = 'Please check the form and try again.'


class ConflictError(GeschichtenError):
    status_code = 409
    default_message = 'An account already exists for that email.'


class AuthError(GeschichtenError):
    # Same message for unknown email and wrong password
    status_code = 400
    default_message = 'Email or password is incorrect.'


class ForbiddenError(GeschichtenError):
    status_code = 403
    default_message = 'You do not have permission to view this page.'


class NotFoundError(GeschichtenError):
    status_code = 404
    default_message = 'The requested page could not be found.'


class UnexpectedError(GeschichtenError):
    status_code = 500
    default_message = 'An unexpected error occurred.'


REQUEST_TOO_LARGE_MESSAGE = 'The submitted files are too large.'


def register_error_handlers(app):
    """Render error pages for forbidden, missing, oversized and failed requests."""

    @app.errorhandler(ForbiddenError)
    def handle_forbidden_error(error):
        return render_template('errors/403.html', message=error.message), 403

    @app.errorhandler(NotFoundError)
    def handle_not_found_error(error):
        return render_template('errors/404.html', message=error.message), 404

    @app.errorhandler(403)
    def forbidden(error):
        return render_template('errors/403.html', message=ForbiddenError.default_message), 403

    @app.errorhandler(404)
    def not_found(error):
        return render_template('errors/404.html', message=NotFoundError.default_message), 404

    @app.errorhandler(413)
    def request_too_large(error):
        logger.info('Rejected request body over %s bytes', app.config['MAX_CONTENT_LENGTH'])
        return render_template('errors/413.html', message=REQUEST_TOO_LARGE_MESSAGE), 413

    @app.errorhandler(500)
    def internal_error(error):
        original = getattr(error, 'original_exception', None)
        logger.error('Unhandled exception: %s', original or error, exc_info=original)
        return render_template('errors/500.html', message=UnexpectedError.default_message), 500
