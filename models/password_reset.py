"""Persisted password reset requests."""

from . import db, utcnow


class PasswordResetRequest(db.Model):
    """Pending one-time reset code for an email address.

    Only used when the application is configured with the database-backed
    reset code store; the default store keeps these in process memory.
    """

    __tablename__ = "password_reset_requests"

    email = db.Column(db.String(255), primary_key=True)
    code = db.Column(db.String(6), nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
