"""Registration, login, password reset and email verification.

The manager owns no tables of its own. It reads and writes users through a
``UserRepository`` and keeps pending reset codes in an injected
``AbstractResetCodeStore`` so the same flow works with in-process or
database-backed storage.

E-mail delivery is outside this module: messages go to an injected mailer,
which only logs the dispatch by default.
"""

from __future__ import annotations

import hmac
import logging
import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from flask import current_app
from flask_jwt_extended import create_access_token
from werkzeug.exceptions import BadRequest

from models import utcnow
from models.user import USER_ROLES, User
from storage import AbstractResetCodeStore
from utils.passwords import hash_password, verify_password

from .errors import (
    UNKNOWN_EMAIL,
    AccountDeactivated,
    DuplicateUser,
    InvalidCredentials,
    InvalidResetCode,
    InvalidToken,
    NoResetRequest,
    PasswordMismatch,
    ResetCodeExpired,
    UserNotFound,
)
from .user_repository import UserRepository

logger = logging.getLogger(__name__)

RESET_CODE_TTL = timedelta(minutes=15)
RESET_CODE_DIGITS = 6
# Largest id a 64-bit signed INTEGER primary key can hold.
MAX_USER_ID = 2**63 - 1

REGISTERED_MESSAGE = "Registration successful. Please check your email for verification."
RESET_CODE_SENT_MESSAGE = "Password reset code sent to your email."
PASSWORD_RESET_MESSAGE = "Password reset successful. You can now login with your new password."
EMAIL_VERIFIED_MESSAGE = "Email verified successfully."
ALREADY_VERIFIED_MESSAGE = "Email is already verified."
LOGGED_OUT_MESSAGE = "Logged out successfully."

_VERIFICATION_TOKEN = re.compile(r"verify_email_(\d+)(?:_(\d+))?", re.ASCII)


@dataclass
class RegistrationResult:
    user: User
    message: str


@dataclass
class LoginResult:
    user: User
    token: str


def build_verification_token(user_id: int, issued_at: datetime | None = None) -> str:
    """Return the ``verify_email_{id}_{millis}`` token mailed after registration."""

    moment = issued_at or datetime.now(timezone.utc)
    return f"verify_email_{user_id}_{int(moment.timestamp() * 1000)}"


def parse_verification_token(token: str) -> int:
    """Return the user id embedded in a verification token.

    The token carries no signature and its timestamp is not checked.
    """

    match = _VERIFICATION_TOKEN.fullmatch(token or "")
    if match is None:
        raise InvalidToken()
    return int(match.group(1))


def generate_reset_code() -> str:
    return f"{secrets.randbelow(10 ** RESET_CODE_DIGITS):0{RESET_CODE_DIGITS}d}"


def log_mailer(recipient: str, subject: str, body: str) -> None:
    """Stand-in for outbound e-mail; records the dispatch without the body."""

    logger.info("Email queued for %s: %s", recipient, subject)


def issue_access_token(user: User, remember_me: bool = False) -> str:
    """Sign a JWT for ``user``; every call yields a distinct ``jti``."""

    expires_delta = None
    if remember_me:
        expires_delta = current_app.config.get("JWT_REMEMBER_ME_EXPIRES")
    return create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.role},
        expires_delta=expires_delta,
    )


class CredentialManager:
    """Credential and session lifecycle for application users."""

    def __init__(
        self,
        users: UserRepository,
        reset_codes: AbstractResetCodeStore,
        *,
        issue_token: Callable[[User, bool], str] = issue_access_token,
        mailer: Callable[[str, str, str], None] = log_mailer,
        clock: Callable[[], datetime] = utcnow,
        reset_code_ttl: timedelta = RESET_CODE_TTL,
    ) -> None:
        self.users = users
        self.reset_codes = reset_codes
        self.issue_token = issue_token
        self.mailer = mailer
        self.clock = clock
        self.reset_code_ttl = reset_code_ttl

    def register(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        role: str | None = None,
    ) -> RegistrationResult:
        if password != confirm_password:
            raise PasswordMismatch()

        if self.users.find_user_by_email(email) is not None:
            raise DuplicateUser()

        if role is not None and role not in USER_ROLES:
            raise BadRequest("Role must be one of: USER, ADMIN.")

        user = self.users.insert_user(
            {
                "name": name,
                "email": email,
                "password": hash_password(password),
                "role": role or "USER",
                "is_verified": False,
                "is_active": True,
                "remember_me": False,
                "theme": "SYSTEM",
            }
        )
        self._dispatch_verification(user)
        return RegistrationResult(user=user, message=REGISTERED_MESSAGE)

    def login(self, email: str, password: str, remember_me: bool | None = None) -> LoginResult:
        user = self.users.find_user_by_email(email)
        if user is None:
            raise InvalidCredentials()
        if not user.is_active:
            raise AccountDeactivated()
        if not verify_password(password, user.password):
            raise InvalidCredentials()

        if remember_me is not None:
            user = self.users.update_user(user.id, {"remember_me": remember_me})

        token = self.issue_token(user, bool(user.remember_me))
        logger.info("User %s logged in", user.id)
        return LoginResult(user=user, token=token)

    def forgot_password(self, email: str) -> str:
        user = self.users.find_user_by_email(email)
        if user is None:
            raise UserNotFound(UNKNOWN_EMAIL)
        if not user.is_active:
            raise AccountDeactivated()

        code = generate_reset_code()
        self.reset_codes.set(email, code, self.clock() + self.reset_code_ttl)
        minutes = int(self.reset_code_ttl.total_seconds() // 60)
        self.mailer(
            email,
            "Password reset code",
            f"Your password reset code is {code}. It expires in {minutes} minutes.",
        )
        logger.info("Password reset code issued for user %s", user.id)
        return RESET_CODE_SENT_MESSAGE

    def reset_password(
        self,
        email: str,
        otp_code: str,
        new_password: str,
        confirm_password: str | None = None,
    ) -> str:
        if confirm_password is not None and new_password != confirm_password:
            raise PasswordMismatch()

        user = self.users.find_user_by_email(email)
        if user is None:
            raise UserNotFound(UNKNOWN_EMAIL)

        pending = self.reset_codes.get(email)
        if pending is None:
            raise NoResetRequest()

        if self.reset_codes.is_expired(pending, self.clock()):
            self.reset_codes.delete(email)
            raise ResetCodeExpired()

        if not hmac.compare_digest(pending.code.encode(), (otp_code or "").encode()):
            raise InvalidResetCode()

        self.users.update_user(user.id, {"password": hash_password(new_password)})
        self.reset_codes.delete(email)
        logger.info("Password reset completed for user %s", user.id)
        return PASSWORD_RESET_MESSAGE

    def verify_email(self, token: str) -> str:
        user_id = parse_verification_token(token)

        user = self.users.find_user_by_id(user_id) if user_id <= MAX_USER_ID else None
        if user is None:
            raise UserNotFound()

        if user.is_verified:
            return ALREADY_VERIFIED_MESSAGE

        self.users.update_user(user.id, {"is_verified": True})
        return EMAIL_VERIFIED_MESSAGE

    def logout(self) -> str:
        return LOGGED_OUT_MESSAGE

    def _dispatch_verification(self, user: User) -> None:
        token = build_verification_token(user.id, self.clock().replace(tzinfo=timezone.utc))
        self.mailer(
            user.email,
            "Verify your email",
            f"Use this token to verify your account: {token}",
        )
