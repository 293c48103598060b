"""
Post API endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(prefix="/posts")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.CreatePostResponse,
)
async def create_post(
    request: schemas.CreatePostRequest,
    user_id: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> schemas.CreatePostResponse:
    post_id = await service.create(user_id, request.content)
    return schemas.CreatePostResponse(id=post_id)


@router.get("/{post_id}", response_model=schemas.PostResponse)
async def get_post(
    post_id: uuid.UUID,
    _: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> schemas.PostResponse:
    return await service.get_by_id(post_id)


@router.patch("/{post_id}", response_model=schemas.PostResponse)
async def update_post(
    post_id: uuid.UUID,
    request: schemas.UpdatePostRequest,
    user_id: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> schemas.PostResponse:
    return await service.update(user_id, post_id, request.content)


@router.delete("/{post_id}")
async def delete_post(
    post_id: uuid.UUID,
    user_id: uuid.UUID = Depends(auth_dependencies.get_current_user_id),
) -> dict:
    await service.delete(user_id, post_id)
    return {"ok": True}
