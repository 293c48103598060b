"""
Follow relationships (raw SQL).
"""

from __future__ import annotations

import uuid

import asyncpg

from core import db
from core.errors import UserNotFound

_PUBLIC_USER_COLUMNS = "u.id, u.username, u.email, u.bio, u.birthday, u.created_at"


async def follow(follower_id: uuid.UUID, followee_id: uuid.UUID) -> None:
    try:
        await db.execute(
            """
            INSERT INTO social.followers (follower_id, followee_id)
            VALUES ($1, $2)
            ON CONFLICT DO NOTHING
            """,
            follower_id,
            followee_id,
        )
    except asyncpg.ForeignKeyViolationError as exc:
        raise UserNotFound() from exc


async def unfollow(follower_id: uuid.UUID, followee_id: uuid.UUID) -> bool:
    deleted = await db.execute_rowcount(
        """
        DELETE FROM social.followers
        WHERE follower_id = $1
          AND followee_id = $2
        """,
        follower_id,
        followee_id,
    )
    return deleted > 0


async def list_followers(user_id: uuid.UUID) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_PUBLIC_USER_COLUMNS}
        FROM social.users u
        JOIN social.followers f ON u.id = f.follower_id
        WHERE f.followee_id = $1
        ORDER BY f.created_at DESC
        """,
        user_id,
    )


async def list_following(user_id: uuid.UUID) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_PUBLIC_USER_COLUMNS}
        FROM social.users u
        JOIN social.followers f ON u.id = f.followee_id
        WHERE f.follower_id = $1
        ORDER BY f.created_at DESC
        """,
        user_id,
    )
