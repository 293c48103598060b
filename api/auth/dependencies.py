"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

import uuid

from fastapi import Depends, Header, Request

from core.errors import AppError, Unauthenticated

from .service import AuthService

BEARER_SCHEME = "Bearer"


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def _extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise Unauthenticated("empty auth header")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        raise Unauthenticated("invalid auth header")

    if not parts[1]:
        raise Unauthenticated("token is empty")
    return parts[1]


async def get_current_user_id(
    authorization: str | None = Header(default=None),
    auth_service: AuthService = Depends(get_auth_service),
) -> uuid.UUID:
    """
    Resolve the caller's user id from `Authorization: Bearer <token>`.

    Every request is verified from scratch; handlers receive the id as a
    plain parameter and never re-verify.
    """
    token = _extract_bearer_token(authorization)
    try:
        return auth_service.parse_token(token)
    except AppError as exc:
        raise Unauthenticated(exc.message) from exc
