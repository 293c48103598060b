"""
Post persistence (raw SQL).
"""

from __future__ import annotations

import uuid

from core import db

_POST_COLUMNS = "id, user_id, content, created_at, updated_at"


async def create_post(*, user_id: uuid.UUID, content: str) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO social.posts (user_id, content)
        VALUES ($1, $2)
        RETURNING {_POST_COLUMNS}
        """,
        user_id,
        content,
    )
    if row is None:
        raise RuntimeError("Failed to create post.")
    return row


async def get_post_by_id(post_id: uuid.UUID) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_POST_COLUMNS}
        FROM social.posts
        WHERE id = $1
        """,
        post_id,
    )


async def update_post(post_id: uuid.UUID, *, content: str) -> dict | None:
    return await db.fetch_one(
        f"""
        UPDATE social.posts
        SET content = $1,
            updated_at = now()
        WHERE id = $2
        RETURNING {_POST_COLUMNS}
        """,
        content,
        post_id,
    )


async def delete_post(post_id: uuid.UUID) -> bool:
    deleted = await db.execute_rowcount(
        """
        DELETE FROM social.posts
        WHERE id = $1
        """,
        post_id,
    )
    return deleted > 0
