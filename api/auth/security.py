"""
Auth security helpers: password hashing and refresh values.
"""

from __future__ import annotations

import secrets

import bcrypt

from core.errors import CredentialMismatch, HashMalformed, ValidationFailed

# bcrypt only looks at the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72
REFRESH_TOKEN_BYTES = 32


def _password_bytes(plain_password: str) -> bytes:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise ValidationFailed("password is empty")
    if len(password) > MAX_PASSWORD_BYTES:
        raise ValidationFailed(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


def hash_password(plain_password: str) -> str:
    return bcrypt.hashpw(_password_bytes(plain_password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password_hash: str, plain_password: str) -> None:
    """
    Raise `CredentialMismatch` if the password does not match the hash.

    A hash bcrypt cannot parse raises `HashMalformed` instead, so callers can
    tell "did not match" apart from "could not compare".
    """
    hashed = (password_hash or "").encode("utf-8")
    if not hashed:
        raise HashMalformed("stored password hash is empty")

    try:
        password = _password_bytes(plain_password)
    except ValidationFailed as exc:
        # Anything we would refuse to hash can never have produced a stored hash.
        raise CredentialMismatch() from exc

    try:
        matched = bcrypt.checkpw(password, hashed)
    except ValueError as exc:
        raise HashMalformed() from exc

    if not matched:
        raise CredentialMismatch()


def build_refresh_token() -> str:
    # Opaque placeholder; nothing in this service redeems it.
    return secrets.token_hex(REFRESH_TOKEN_BYTES)
