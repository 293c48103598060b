"""
Profile business logic.
"""

from __future__ import annotations

import logging
import uuid

from core.errors import UserNotFound

from . import repository, schemas

logger = logging.getLogger(__name__)


def to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=user_row["id"],
        username=str(user_row["username"]),
        email=str(user_row["email"]),
        bio=user_row.get("bio"),
        birthday=user_row.get("birthday"),
        created_at=user_row["created_at"],
    )


async def get_profile(user_id: uuid.UUID) -> schemas.UserResponse:
    user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        raise UserNotFound()
    return to_user_response(user_row)


async def update_profile(
    user_id: uuid.UUID,
    payload: schemas.UpdateUserRequest,
) -> schemas.UserResponse:
    user_row = await repository.get_user_by_id(user_id)
    if user_row is None:
        raise UserNotFound()

    updated = await repository.update_user(
        user_id,
        username=payload.username if payload.username is not None else str(user_row["username"]),
        email=payload.email if payload.email is not None else str(user_row["email"]),
        bio=payload.bio if payload.bio is not None else user_row.get("bio"),
        birthday=payload.birthday if payload.birthday is not None else user_row.get("birthday"),
    )
    if updated is None:
        # Deleted between the read and the write.
        raise UserNotFound()

    logger.info("profile_updated user_id=%s", user_id)
    return to_user_response(updated)
