"""Reset code storage backed by the application database."""

from __future__ import annotations

from datetime import datetime

from models import db
from models.password_reset import PasswordResetRequest

from .abstract_storage import AbstractResetCodeStore, PendingReset


class DatabaseResetCodeStore(AbstractResetCodeStore):
    """Persist pending codes in the ``password_reset_requests`` table.

    Must be used inside an application context.
    """

    def get(self, email: str) -> PendingReset | None:
        record = db.session.get(PasswordResetRequest, email)
        if record is None:
            return None
        return PendingReset(email=record.email, code=record.code, expires_at=record.expires_at)

    def set(self, email: str, code: str, expires_at: datetime) -> PendingReset:
        record = db.session.get(PasswordResetRequest, email)
        if record is None:
            record = PasswordResetRequest(email=email)
            db.session.add(record)
        record.code = code
        record.expires_at = expires_at
        db.session.commit()
        return PendingReset(email=email, code=code, expires_at=expires_at)

    def delete(self, email: str) -> None:
        record = db.session.get(PasswordResetRequest, email)
        if record is not None:
            db.session.delete(record)
            db.session.commit()
