"""
Follower API endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from users import schemas as user_schemas

from . import service

router = APIRouter(prefix="/users")


@router.post("/{user_id}/follow")
async def follow_user(
    user_id: uuid.UUID,
    current_user_id: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> dict:
    await service.follow(current_user_id, user_id)
    return {"ok": True}


@router.delete("/{user_id}/follow")
async def unfollow_user(
    user_id: uuid.UUID,
    current_user_id: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> dict:
    await service.unfollow(current_user_id, user_id)
    return {"ok": True}


@router.get("/{user_id}/followers", response_model=list[user_schemas.UserResponse])
async def get_followers(
    user_id: uuid.UUID,
    _: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> list[user_schemas.UserResponse]:
    return await service.get_followers(user_id)


@router.get("/{user_id}/following", response_model=list[user_schemas.UserResponse])
async def get_following(
    user_id: uuid.UUID,
    _: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> list[user_schemas.UserResponse]:
    return await service.get_following(user_id)
