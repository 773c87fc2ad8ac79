"""
User Model
"""

from datetime import datetime

from flask_login import UserMixin

from geschichten.extensions import db


class User(UserMixin, db.Model):
    """Account used for login; email is stored normalized"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    # Role flag, held by the configured admin account only
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<User {self.email}>'
