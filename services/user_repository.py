"""Persistence operations the credential manager needs from the user table."""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError

from models import db, utcnow
from models.user import User

from .errors import DuplicateUser, EmailTaken, UserNotFound


class UserRepository:
    """Look up and mutate users through the Flask-SQLAlchemy session.

    Email uniqueness is left to the database constraint; a violation on
    insert is reported as ``DuplicateUser``.
    """

    def find_user_by_email(self, email: str) -> User | None:
        return User.query.filter_by(email=email).first()

    def find_user_by_id(self, user_id: int) -> User | None:
        return db.session.get(User, user_id)

    def insert_user(self, fields: dict[str, Any]) -> User:
        now = utcnow()
        user = User(**fields)
        user.created_at = now
        user.updated_at = now
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise DuplicateUser() from exc
        return user

    def update_user(self, user_id: int, fields: dict[str, Any]) -> User:
        """Apply ``fields`` to the user and refresh ``updated_at``.

        Only ``email`` carries a unique constraint, so a violation on commit
        is reported as ``EmailTaken``.
        """

        user = self.find_user_by_id(user_id)
        if user is None:
            raise UserNotFound()
        for key, value in fields.items():
            setattr(user, key, value)
        user.updated_at = utcnow()
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise EmailTaken() from exc
        return user
