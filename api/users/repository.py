"""
User persistence (raw SQL).

This is the user store the auth service depends on: it owns uniqueness of
username and email and maps constraint violations to error kinds.
"""

from __future__ import annotations

import uuid
from datetime import date

import asyncpg

from core import db
from core.errors import DuplicateCredential

_USER_COLUMNS = "id, username, email, password_hash, bio, birthday, created_at, updated_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(*, username: str, email: str, password_hash: str) -> dict:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO social.users (username, email, password_hash)
            VALUES ($1, $2, $3)
            RETURNING {_USER_COLUMNS}
            """,
            username.strip(),
            normalize_email(email),
            password_hash,
        )
    except asyncpg.UniqueViolationError as exc:
        raise DuplicateCredential() from exc
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_id(user_id: uuid.UUID) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_USER_COLUMNS}
        FROM social.users
        WHERE id = $1
        """,
        user_id,
    )


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_USER_COLUMNS}
        FROM social.users
        WHERE email = $1
        """,
        normalize_email(email),
    )


async def update_user(
    user_id: uuid.UUID,
    *,
    username: str,
    email: str,
    bio: str | None,
    birthday: date | None,
) -> dict | None:
    try:
        return await db.fetch_one(
            f"""
            UPDATE social.users
            SET username = $1,
                email = $2,
                bio = $3,
                birthday = $4,
                updated_at = now()
            WHERE id = $5
            RETURNING {_USER_COLUMNS}
            """,
            username.strip(),
            normalize_email(email),
            bio,
            birthday,
            user_id,
        )
    except asyncpg.UniqueViolationError as exc:
        raise DuplicateCredential() from exc
