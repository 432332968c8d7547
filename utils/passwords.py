"""Password hashing helpers.

Hashes are stored as ``salt:derived_key`` where both parts are hex encoded.
The key is derived with PBKDF2-HMAC-SHA512, so existing records stay
verifiable as long as the iteration count and key length do not change.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

SALT_BYTES = 32
ITERATIONS = 10_000
KEY_LENGTH = 64
DIGEST = "sha512"
SEPARATOR = ":"


def _derive(password: str, salt: str) -> str:
    return hashlib.pbkdf2_hmac(
        DIGEST,
        password.encode("utf-8"),
        salt.encode("utf-8"),
        ITERATIONS,
        dklen=KEY_LENGTH,
    ).hex()


def hash_password(password: str) -> str:
    """Return a salted hash of ``password``; a fresh salt is drawn on every call."""

    salt = secrets.token_hex(SALT_BYTES)
    return f"{salt}{SEPARATOR}{_derive(password, salt)}"


def verify_password(password: str, encoded: str | None) -> bool:
    """Return True if ``password`` matches the stored ``encoded`` hash.

    Malformed hashes never raise; they simply fail verification.
    """

    if not encoded or SEPARATOR not in encoded:
        return False

    salt, expected = encoded.split(SEPARATOR, 1)
    if not salt or not expected:
        return False

    return hmac.compare_digest(_derive(password, salt), expected)
