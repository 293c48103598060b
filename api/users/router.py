"""
Profile API endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/users")


@router.get("/me", response_model=schemas.UserResponse)
async def get_profile(
    user_id: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> schemas.UserResponse:
    return await service.get_profile(user_id)


@router.patch("/me", response_model=schemas.UserResponse)
async def update_profile(
    request: schemas.UpdateUserRequest,
    user_id: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> schemas.UserResponse:
    return await service.update_profile(user_id, request)
