"""
Post business logic.

Only the author may change or remove a post; anyone authenticated may read it.
"""

from __future__ import annotations

import logging
import uuid

from core.errors import Forbidden, PostNotFound

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_post_response(row: dict) -> schemas.PostResponse:
    return schemas.PostResponse(
        id=row["id"],
        user_id=row["user_id"],
        content=str(row["content"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


async def _get_owned_post(user_id: uuid.UUID, post_id: uuid.UUID) -> dict:
    row = await repository.get_post_by_id(post_id)
    if row is None:
        raise PostNotFound()
    if row["user_id"] != user_id:
        raise Forbidden()
    return row


async def create(user_id: uuid.UUID, content: str) -> uuid.UUID:
    row = await repository.create_post(user_id=user_id, content=content)
    logger.info("post_created post_id=%s user_id=%s", row["id"], user_id)
    return row["id"]


async def get_by_id(post_id: uuid.UUID) -> schemas.PostResponse:
    row = await repository.get_post_by_id(post_id)
    if row is None:
        raise PostNotFound()
    return _to_post_response(row)


async def update(user_id: uuid.UUID, post_id: uuid.UUID, content: str) -> schemas.PostResponse:
    await _get_owned_post(user_id, post_id)
    row = await repository.update_post(post_id, content=content)
    if row is None:
        raise PostNotFound()
    return _to_post_response(row)


async def delete(user_id: uuid.UUID, post_id: uuid.UUID) -> None:
    await _get_owned_post(user_id, post_id)
    if not await repository.delete_post(post_id):
        raise PostNotFound()
    logger.info("post_deleted post_id=%s user_id=%s", post_id, user_id)
