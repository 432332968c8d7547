"""Database initialization and model exports."""

from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime, matching stored columns."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


# Import models to register them with SQLAlchemy metadata.
from .user import User  # noqa: E402,F401
from .building import Building  # noqa: E402,F401
from .room import Room  # noqa: E402,F401
from .cctv import Cctv  # noqa: E402,F401
from .contact import Contact  # noqa: E402,F401
from .message import Message  # noqa: E402,F401
from .notification import Notification  # noqa: E402,F401
from .password_reset import PasswordResetRequest  # noqa: E402,F401

__all__ = [
    "db",
    "utcnow",
    "User",
    "Building",
    "Room",
    "Cctv",
    "Contact",
    "Message",
    "Notification",
    "PasswordResetRequest",
]
