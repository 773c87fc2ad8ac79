"""
Auth Routes

User signup, login and logout using Flask-Login.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, session, current_app
from flask_login import login_user, logout_user, current_user

from geschichten.auth import auth_bp
from geschichten.auth.policy import safe_return_path
from geschichten.errors import AuthError, ConflictError, ValidationError
from geschichten.services import accounts

logger = logging.getLogger(__name__)


def _start_session(user):
    """Log the user in and return the redirect to the remembered path."""
    session.permanent = True
    login_user(user)
    target = safe_return_path(session.pop('return_to', None))
    return redirect(target or url_for('stories.index'))


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    """User registration route"""
    if request.method == 'GET':
        if current_user.is_authenticated:
            return redirect(url_for('stories.index'))
        return render_template('auth/signup.html', error=None, values={'email': ''})

    email = request.form.get('email', '')
    password = request.form.get('password', '')
    confirm_password = request.form.get('confirmPassword', '')
    values = {'email': email}
    normalized_email = accounts.normalize_email(email)

    try:
        if not normalized_email or not password or not confirm_password:
            raise ValidationError('Please fill in all fields.')
        if password != confirm_password:
            raise ValidationError('Passwords do not match.')
        min_length = current_app.config['MIN_PASSWORD_LENGTH']
        if len(password) < min_length:
            raise ValidationError(f'Password must be at least {min_length} characters.')

        user_id = accounts.create_user(normalized_email, accounts.hash_password(password))
    except (ValidationError, ConflictError) as exc:
        return render_template('auth/signup.html', error=exc.message, values=values), exc.status_code

    user = accounts.find_user_by_email(normalized_email)
    logger.info('User %s signed up', user_id)
    return _start_session(user)


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login route"""
    if request.method == 'GET':
        if current_user.is_authenticated:
            return redirect(url_for('stories.index'))
        return render_template('auth/login.html', error=None, values={'email': ''})

    email = request.form.get('email', '')
    password = request.form.get('password', '')
    values = {'email': email}

    try:
        if not accounts.normalize_email(email) or not password:
            raise ValidationError('Please enter your email and password.')
        user = accounts.authenticate(email, password)
    except (ValidationError, AuthError) as exc:
        return render_template('auth/login.html', error=exc.message, values=values), exc.status_code

    logger.info('User %s logged in', user.id)
    return _start_session(user)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """User logout route"""
    logout_user()
    session.clear()
    flash('You have been logged out successfully.', 'info')
    return redirect(url_for('stories.index'))
