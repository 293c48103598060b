"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import schemas
from .dependencies import get_auth_service
from .service import AuthService

router = APIRouter(prefix="/auth")


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.RegisterResponse,
)
async def register(
    request: schemas.RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> schemas.RegisterResponse:
    user_id = await auth_service.sign_up(
        username=request.username,
        email=request.email,
        password=request.password,
    )
    return schemas.RegisterResponse(id=user_id)


@router.post("/login", response_model=schemas.TokenPairResponse)
async def login(
    request: schemas.LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> schemas.TokenPairResponse:
    return await auth_service.sign_in(email=request.email, password=request.password)
