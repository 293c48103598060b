"""
User API schemas (request/response models).
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UpdateUserRequest(BaseModel):
    # Omitted (or null) fields are left unchanged.
    username: str | None = Field(default=None, min_length=3, max_length=32)
    email: str | None = Field(default=None, max_length=320, pattern=EMAIL_PATTERN)
    bio: str | None = Field(default=None, max_length=500)
    birthday: date | None = None


class UserResponse(BaseModel):
    id: uuid.UUID
    username: str
    email: str
    bio: str | None = None
    birthday: date | None = None
    created_at: datetime
