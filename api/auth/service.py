"""
Auth business logic.

`AuthService` composes the password hasher, the token issuer/verifier and the
user store. It is built once in `create_app()` and shared by all requests; it
holds no mutable state.
"""

from __future__ import annotations

import logging
import uuid
from typing import Protocol

from core.errors import CredentialMismatch, InvalidPassword, UserNotFound

from . import schemas, security
from .tokens import TokenIssuer, TokenVerifier

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    async def create_user(self, *, username: str, email: str, password_hash: str) -> dict: ...

    async def get_user_by_email(self, email: str) -> dict | None: ...


class AuthService:
    def __init__(self, users: UserStore, issuer: TokenIssuer, verifier: TokenVerifier) -> None:
        self._users = users
        self._issuer = issuer
        self._verifier = verifier

    async def sign_up(self, *, username: str, email: str, password: str) -> uuid.UUID:
        password_hash = security.hash_password(password)
        # Uniqueness is enforced by the store (DuplicateCredential).
        user_row = await self._users.create_user(
            username=username,
            email=email,
            password_hash=password_hash,
        )
        user_id = uuid.UUID(str(user_row["id"]))
        logger.info("user_registered user_id=%s", user_id)
        return user_id

    async def sign_in(self, *, email: str, password: str) -> schemas.TokenPairResponse:
        # NOTE: "user not found" and "invalid password" are reported separately,
        # which tells a caller whether an email is registered.
        user_row = await self._users.get_user_by_email(email)
        if user_row is None:
            raise UserNotFound()

        try:
            security.verify_password(str(user_row.get("password_hash") or ""), password)
        except CredentialMismatch as exc:
            raise InvalidPassword() from exc

        user_id = uuid.UUID(str(user_row["id"]))
        access_token = self._issuer.issue(user_id)
        logger.info("user_signed_in user_id=%s", user_id)
        return schemas.TokenPairResponse(
            access_token=access_token,
            refresh_token=security.build_refresh_token(),
        )

    def parse_token(self, access_token: str) -> uuid.UUID:
        return self._verifier.verify(access_token)
