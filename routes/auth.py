"""Authentication blueprint: registration, login, password reset and verification."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import BadRequest

from models.user import USER_ROLES
from services import get_credential_manager
from services.notifications import create_login_notification
from utils.request_validation import (
    is_valid_email,
    parse_bool,
    parse_json_request,
    raise_for_errors,
)

MIN_PASSWORD_LENGTH = 6
auth_bp = Blueprint("auth", __name__)


def _normalize_email(raw_email: str | None) -> str:
    """Strip surrounding whitespace; stored emails keep their case."""
    return (raw_email or "").strip() if isinstance(raw_email, str) else ""


def _validate_email(email: str, errors: list[str]) -> None:
    if not email:
        errors.append("email is required")
    elif not is_valid_email(email):
        errors.append("email must be a valid email address")


def _validate_password(value, field: str, errors: list[str]) -> None:
    if not isinstance(value, str) or not value:
        errors.append(f"{field} is required")
    elif len(value) < MIN_PASSWORD_LENGTH:
        errors.append(f"{field} must be at least {MIN_PASSWORD_LENGTH} characters")


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new user with a name, email, password confirmation and optional role."""
    payload = parse_json_request(request)
    name = payload.get("name")
    name = name.strip() if isinstance(name, str) else ""
    email = _normalize_email(payload.get("email"))
    password = payload.get("password")
    confirm_password = payload.get("confirm_password")
    role = payload.get("role")

    errors: list[str] = []
    if not name:
        errors.append("name is required")
    _validate_email(email, errors)
    _validate_password(password, "password", errors)
    _validate_password(confirm_password, "confirm_password", errors)
    if role is not None and role not in USER_ROLES:
        errors.append("role must be one of USER, ADMIN")
    raise_for_errors(errors)

    result = get_credential_manager().register(
        name=name,
        email=email,
        password=password,
        confirm_password=confirm_password,
        role=role,
    )

    return (
        jsonify({"message": result.message, "user": result.user.to_dict()}),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a JWT access token."""
    payload = parse_json_request(request)
    email = _normalize_email(payload.get("email"))
    password = payload.get("password")

    if not email or not isinstance(password, str) or not password:
        raise BadRequest("Email and password are required.")

    remember_me = None
    if "remember_me" in payload and payload["remember_me"] is not None:
        remember_me = parse_bool(payload["remember_me"])
        if remember_me is None:
            raise BadRequest("remember_me must be boolean")

    result = get_credential_manager().login(email, password, remember_me=remember_me)
    create_login_notification(result.user.id)

    return (
        jsonify({"access_token": result.token, "user": result.user.to_dict()}),
        HTTPStatus.OK,
    )


@auth_bp.route("/forgot-password", methods=["POST"])
def forgot_password() -> tuple:
    """Send a one-time reset code to the account's email address."""
    payload = parse_json_request(request)
    email = _normalize_email(payload.get("email"))

    errors: list[str] = []
    _validate_email(email, errors)
    raise_for_errors(errors)

    message = get_credential_manager().forgot_password(email)
    return jsonify({"message": message}), HTTPStatus.OK


@auth_bp.route("/reset-password", methods=["POST"])
def reset_password() -> tuple:
    """Replace the password of an account holding a valid reset code."""
    payload = parse_json_request(request)
    email = _normalize_email(payload.get("email"))
    otp_code = payload.get("otp_code")
    new_password = payload.get("new_password")
    confirm_password = payload.get("confirm_password")

    errors: list[str] = []
    _validate_email(email, errors)
    if not isinstance(otp_code, str) or len(otp_code) != 6:
        errors.append("otp_code must be exactly 6 characters")
    _validate_password(new_password, "new_password", errors)
    if confirm_password is not None and not isinstance(confirm_password, str):
        errors.append("confirm_password must be a string")
    raise_for_errors(errors)

    message = get_credential_manager().reset_password(
        email, otp_code, new_password, confirm_password=confirm_password
    )
    return jsonify({"message": message}), HTTPStatus.OK


@auth_bp.route("/verify-email", methods=["POST"])
def verify_email() -> tuple:
    """Mark the account named by a verification token as verified."""
    payload = parse_json_request(request)
    token = payload.get("token")
    if not isinstance(token, str) or not token:
        raise BadRequest("token is required")

    message = get_credential_manager().verify_email(token)
    return jsonify({"message": message}), HTTPStatus.OK


@auth_bp.route("/verify-email/<token>", methods=["GET"])
def verify_email_link(token: str) -> tuple:
    """Same as ``verify_email`` for tokens delivered as links."""
    message = get_credential_manager().verify_email(token)
    return jsonify({"message": message}), HTTPStatus.OK


@auth_bp.route("/logout", methods=["POST"])
def logout() -> tuple:
    """Tokens are stateless; the client discards its copy."""
    return jsonify({"message": get_credential_manager().logout()}), HTTPStatus.OK
