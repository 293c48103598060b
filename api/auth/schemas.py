"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

from users.schemas import EMAIL_PATTERN


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=32)
    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1, max_length=128)


class RegisterResponse(BaseModel):
    id: uuid.UUID


class TokenPairResponse(BaseModel):
    access_token: str
    refresh_token: str
