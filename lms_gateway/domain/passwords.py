"""Password hashing, verification and strength policy"""

import re

import bcrypt

from lms_gateway.domain.exceptions import PasswordMismatchError, PasswordTooLongError, WeakPasswordError

MIN_PASSWORD_LENGTH = 8
BCRYPT_MAX_BYTES = 72

# Checked in order; only the first violation is reported
STRENGTH_RULES = [
    (lambda p: len(p) >= MIN_PASSWORD_LENGTH, f"password must be at least {MIN_PASSWORD_LENGTH} characters long"),
    (lambda p: re.search(r"[A-Z]", p) is not None, "password must contain at least one uppercase letter"),
    (lambda p: re.search(r"[0-9]", p) is not None, "password must contain at least one number"),
]


def hash_password(password: str) -> str:
    """
    Hash a plaintext password with bcrypt and a fresh random salt.

    Raises:
        PasswordTooLongError: Password exceeds bcrypt's 72-byte input limit
    """
    raw = password.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        raise PasswordTooLongError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("utf-8")


def verify_password(hashed: str, password: str) -> None:
    """
    Check a plaintext against a stored hash.

    Raises:
        PasswordMismatchError: Wrong password, empty hash, or unrecognizable hash
    """
    raw = password.encode("utf-8")
    # Older bcrypt releases truncate silently past 72 bytes
    if not hashed or len(raw) > BCRYPT_MAX_BYTES:
        raise PasswordMismatchError()
    try:
        matched = bcrypt.checkpw(raw, hashed.encode("utf-8"))
    except ValueError as e:
        raise PasswordMismatchError() from e
    if not matched:
        raise PasswordMismatchError()


def validate_password_strength(password: str) -> None:
    """Raise WeakPasswordError naming the first strength rule the password breaks"""
    for check, message in STRENGTH_RULES:
        if not check(password):
            raise WeakPasswordError(message)
