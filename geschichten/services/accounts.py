"""
Account Service

Credential storage and verification. Hashing is delegated to werkzeug;
this module only stores and compares the resulting hashes.
"""

import logging

from flask import current_app
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from geschichten.errors import AuthError, ConflictError
from geschichten.extensions import db
from geschichten.models import User

logger = logging.getLogger(__name__)


def normalize_email(email):
    """Trim and lowercase an email before any lookup or insert."""
    return (email or '').strip().lower()


def find_user_by_email(normalized_email):
    if not normalized_email:
        return None
    return User.query.filter_by(email=normalized_email).first()


def hash_password(plain):
    return generate_password_hash(plain, method=current_app.config['PASSWORD_HASH_METHOD'])


def create_user(normalized_email, password_hash):
    """Insert a user and return the new id.

    Raises ConflictError when the email is already registered, whether the
    pre-check catches it or the unique constraint does.
    """
    if find_user_by_email(normalized_email):
        raise ConflictError()

    user = User(
        email=normalized_email,
        password_hash=password_hash,
        is_admin=normalized_email == current_app.config['ADMIN_EMAIL'],
    )
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConflictError() from exc

    logger.info('Created user %s (id=%s, admin=%s)', user.email, user.id, user.is_admin)
    return user.id


def authenticate(email, password):
    """Return the user for valid credentials, raise AuthError otherwise."""
    user = find_user_by_email(normalize_email(email))
    if user is None or not check_password_hash(user.password_hash, password or ''):
        logger.info('Failed login for %s', normalize_email(email))
        raise AuthError()
    return user


def sync_admin_role(admin_email):
    """Make the configured admin the only account holding the admin role."""
    changed = 0
    for user in User.query.filter(or_(User.is_admin.is_(True), User.email == admin_email)).all():
        should_be_admin = user.email == admin_email
        if user.is_admin != should_be_admin:
            user.is_admin = should_be_admin
            changed += 1
    if changed:
        db.session.commit()
        logger.info('Synchronized admin role for %d account(s)', changed)
    return changed
