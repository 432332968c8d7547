"""Credential lifecycle errors.

Each error is a werkzeug HTTP exception so it reaches the JSON error handler
with the right status code, while direct callers can still catch the
specific class.
"""

from werkzeug.exceptions import BadRequest, Conflict, Forbidden, NotFound, Unauthorized


class PasswordMismatch(BadRequest):
    description = "Passwords don't match."


class DuplicateUser(Conflict):
    description = "User with this email already exists."


class EmailTaken(Conflict):
    description = "Email is already taken."


class InvalidCredentials(Unauthorized):
    description = "Invalid email or password."


class CurrentPasswordIncorrect(BadRequest):
    description = "Current password is incorrect."


class AccountDeactivated(Forbidden):
    description = "Account is deactivated. Please contact an administrator."


class UserNotFound(NotFound):
    description = "User not found."


class NoResetRequest(BadRequest):
    description = "No password reset request found for this email."


class ResetCodeExpired(BadRequest):
    description = "Password reset code has expired. Please request a new one."


class InvalidResetCode(BadRequest):
    description = "Invalid password reset code."


class InvalidToken(BadRequest):
    description = "Invalid verification token."


UNKNOWN_EMAIL = "User with this email does not exist."
