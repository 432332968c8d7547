"""User management blueprint."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from models import db
from models.user import THEMES, User
from services.errors import (
    CurrentPasswordIncorrect,
    EmailTaken,
    PasswordMismatch,
    UserNotFound,
)
from services.user_repository import UserRepository
from utils.current_user import require_admin, require_self_or_admin, require_user
from utils.passwords import hash_password, verify_password
from utils.request_validation import is_valid_email, parse_json_request, raise_for_errors

users_bp = Blueprint("users", __name__)
users = UserRepository()

MIN_PASSWORD_LENGTH = 6


def _get_user_or_404(user_id: int) -> User:
    user = users.find_user_by_id(user_id)
    if user is None:
        raise UserNotFound()
    return user


@users_bp.route("", methods=["GET"])
@jwt_required()
def list_users():
    require_admin()
    return jsonify([user.to_dict() for user in User.query.order_by(User.id.asc()).all()])


@users_bp.route("/me", methods=["GET"])
@jwt_required()
def current_user_profile():
    return jsonify(require_user().to_dict())


@users_bp.route("/<int:user_id>", methods=["GET"])
@jwt_required()
def get_user(user_id: int):
    require_user()
    return jsonify(_get_user_or_404(user_id).to_dict())


@users_bp.route("/<int:user_id>", methods=["PATCH"])
@jwt_required()
def update_user(user_id: int):
    """Update the profile fields a user controls: name, email and theme."""

    require_self_or_admin(user_id)
    user = _get_user_or_404(user_id)
    data = parse_json_request(request)

    errors: list[str] = []
    fields: dict = {}
    if "name" in data:
        if not isinstance(data["name"], str) or not data["name"].strip():
            errors.append("name must be a non-empty string")
        else:
            fields["name"] = data["name"].strip()
    if "email" in data:
        if not is_valid_email(data["email"]):
            errors.append("email must be a valid email address")
        else:
            fields["email"] = data["email"].strip()
    if "theme" in data:
        if data["theme"] not in THEMES:
            errors.append("theme must be one of LIGHT, DARK, SYSTEM")
        else:
            fields["theme"] = data["theme"]
    raise_for_errors(errors)

    new_email = fields.get("email")
    if new_email and new_email != user.email and users.find_user_by_email(new_email):
        raise EmailTaken()

    updated = users.update_user(user.id, fields)
    return jsonify(updated.to_dict())


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@jwt_required()
def delete_user(user_id: int):
    require_admin()
    user = _get_user_or_404(user_id)
    db.session.delete(user)
    db.session.commit()
    return jsonify({"message": "User deleted successfully."})


@users_bp.route("/<int:user_id>/change-password", methods=["POST"])
@jwt_required()
def change_password(user_id: int):
    """Change a password after re-checking the current one."""

    require_self_or_admin(user_id)
    data = parse_json_request(request)
    current_password = data.get("current_password")
    new_password = data.get("new_password")
    confirm_password = data.get("confirm_password")

    errors: list[str] = []
    if not isinstance(current_password, str) or not current_password:
        errors.append("current_password is required")
    for field, value in (("new_password", new_password), ("confirm_password", confirm_password)):
        if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
            errors.append(f"{field} must be at least {MIN_PASSWORD_LENGTH} characters")
    raise_for_errors(errors)

    if new_password != confirm_password:
        raise PasswordMismatch()

    user = _get_user_or_404(user_id)
    if not verify_password(current_password, user.password):
        raise CurrentPasswordIncorrect()

    users.update_user(user.id, {"password": hash_password(new_password)})
    return jsonify({"message": "Password changed successfully."})


@users_bp.route("/<int:user_id>/toggle-status", methods=["POST"])
@jwt_required()
def toggle_user_status(user_id: int):
    """Activate a deactivated account or deactivate an active one."""

    require_admin()
    user = _get_user_or_404(user_id)
    updated = users.update_user(user.id, {"is_active": not user.is_active})
    return jsonify(updated.to_dict())
