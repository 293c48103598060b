"""
Post API schemas.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreatePostRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class UpdatePostRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class CreatePostResponse(BaseModel):
    id: uuid.UUID


class PostResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    content: str
    created_at: datetime
    updated_at: datetime
