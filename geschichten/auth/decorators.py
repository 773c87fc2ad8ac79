"""
Access Decorators

Apply the access policy to a view. Anonymous visitors are redirected to the
login page with the requested path remembered in ``session['return_to']``;
authenticated non-admins on admin views get a 403.
"""

import logging
from functools import wraps

from flask import session, redirect, url_for, request
from flask_login import current_user

from geschichten.auth.policy import Decision, require_admin, require_authenticated
from geschichten.errors import ForbiddenError

logger = logging.getLogger(__name__)


def _requested_path():
    if request.query_string:
        return request.full_path
    return request.path


def _enforce(decision):
    if decision is Decision.LOGIN:
        # Only a GET can be replayed by the post-login redirect
        if request.method == 'GET':
            session['return_to'] = _requested_path()
        logger.debug('Anonymous request to %s redirected to login', request.path)
        return redirect(url_for('auth.login'))
    if decision is Decision.FORBIDDEN:
        logger.debug('User %s refused access to %s', current_user.get_id(), request.path)
        raise ForbiddenError()
    return None


def login_required(f):
    """Decorator to ensure the request comes from a logged-in user."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        response = _enforce(require_authenticated(current_user))
        if response is not None:
            return response
        return f(*args, **kwargs)
    return wrapper


def admin_required(f):
    """Decorator to ensure the request comes from the admin account."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        response = _enforce(require_admin(current_user))
        if response is not None:
            return response
        return f(*args, **kwargs)
    return wrapper
