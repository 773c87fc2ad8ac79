"""
Access Policy

Pure decisions over a session identity. No request or database access
happens here; the decorators turn decisions into responses.
"""

import enum


class Decision(enum.Enum):
    ALLOW = 'allow'
    LOGIN = 'login'
    FORBIDDEN = 'forbidden'


def _is_authenticated(identity):
    return bool(identity is not None and getattr(identity, 'is_authenticated', False))


def require_authenticated(identity):
    """Allow any logged-in identity; send everyone else to login."""
    if _is_authenticated(identity):
        return Decision.ALLOW
    return Decision.LOGIN


def require_admin(identity):
    """Allow the admin; send anonymous visitors to login, forbid the rest."""
    if not _is_authenticated(identity):
        return Decision.LOGIN
    if not getattr(identity, 'is_admin', False):
        return Decision.FORBIDDEN
    return Decision.ALLOW


def safe_return_path(value):
    """Return ``value`` if it is a local absolute path, else None."""
    if not value or not isinstance(value, str):
        return None
    if not value.startswith('/') or value.startswith('//') or '\\' in value:
        return None
    return value
