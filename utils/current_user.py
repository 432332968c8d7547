"""Resolve the authenticated user for JWT-protected routes."""

from __future__ import annotations

from flask_jwt_extended import get_jwt_identity
from werkzeug.exceptions import Forbidden

from models import db
from models.user import User
from services.errors import AccountDeactivated, UserNotFound


def get_current_user() -> User | None:
    try:
        identity = get_jwt_identity()
    except RuntimeError:
        return None
    if identity is None:
        return None
    try:
        user_id = int(identity)
    except (TypeError, ValueError):
        return None
    return db.session.get(User, user_id)


def require_user() -> User:
    user = get_current_user()
    if user is None:
        raise UserNotFound()
    if not user.is_active:
        raise AccountDeactivated()
    return user


def require_admin() -> User:
    user = require_user()
    if not user.is_admin:
        raise Forbidden("Admin privileges required.")
    return user


def require_self_or_admin(user_id: int) -> User:
    """Return the caller when it may act on ``user_id``'s account."""

    user = require_user()
    if user.id != user_id and not user.is_admin:
        raise Forbidden("You can only manage your own account.")
    return user
