"""
Follow/unfollow business logic.
"""

from __future__ import annotations

import logging
import uuid

from core.errors import RelationshipNotFound, ValidationFailed
from users import schemas as user_schemas
from users.service import to_user_response

from . import repository

logger = logging.getLogger(__name__)


async def follow(follower_id: uuid.UUID, followee_id: uuid.UUID) -> None:
    if follower_id == followee_id:
        raise ValidationFailed("cannot follow yourself")
    # Following twice is a no-op.
    await repository.follow(follower_id, followee_id)
    logger.info("user_followed follower_id=%s followee_id=%s", follower_id, followee_id)


async def unfollow(follower_id: uuid.UUID, followee_id: uuid.UUID) -> None:
    if not await repository.unfollow(follower_id, followee_id):
        raise RelationshipNotFound()
    logger.info("user_unfollowed follower_id=%s followee_id=%s", follower_id, followee_id)


async def get_followers(user_id: uuid.UUID) -> list[user_schemas.UserResponse]:
    rows = await repository.list_followers(user_id)
    return [to_user_response(row) for row in rows]


async def get_following(user_id: uuid.UUID) -> list[user_schemas.UserResponse]:
    rows = await repository.list_following(user_id)
    return [to_user_response(row) for row in rows]
