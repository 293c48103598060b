"""
Application error kinds.

Every failure the services raise carries an `ErrorKind`. The HTTP layer maps
kinds to status codes through `STATUS_BY_KIND`; message text is never used for
branching.
"""

from __future__ import annotations

import enum
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    KEY_LOAD = "key_load"
    SIGNING = "signing"
    HASH_MALFORMED = "hash_malformed"
    TOKEN_MALFORMED = "token_malformed"
    TOKEN_SIGNATURE_INVALID = "token_signature_invalid"
    TOKEN_EXPIRED = "token_expired"
    UNAUTHENTICATED = "unauthenticated"
    CREDENTIAL_MISMATCH = "credential_mismatch"
    INVALID_PASSWORD = "invalid_password"
    DUPLICATE_CREDENTIAL = "duplicate_credential"
    USER_NOT_FOUND = "user_not_found"
    POST_NOT_FOUND = "post_not_found"
    RELATIONSHIP_NOT_FOUND = "relationship_not_found"
    FORBIDDEN = "forbidden"
    VALIDATION = "validation"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.KEY_LOAD: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.SIGNING: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.HASH_MALFORMED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.TOKEN_MALFORMED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_SIGNATURE_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.CREDENTIAL_MISMATCH: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_PASSWORD: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.DUPLICATE_CREDENTIAL: status.HTTP_409_CONFLICT,
    ErrorKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.POST_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.RELATIONSHIP_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
}

# Kinds whose message stays server-side.
INTERNAL_KINDS = frozenset({ErrorKind.KEY_LOAD, ErrorKind.SIGNING, ErrorKind.HASH_MALFORMED})


class AppError(Exception):
    kind: ErrorKind = ErrorKind.VALIDATION
    default_message: str = "request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class KeyLoadError(AppError):
    kind = ErrorKind.KEY_LOAD
    default_message = "could not load key material"


class SigningError(AppError):
    kind = ErrorKind.SIGNING
    default_message = "could not sign token"


class HashMalformed(AppError):
    kind = ErrorKind.HASH_MALFORMED
    default_message = "stored password hash is malformed"


class TokenMalformed(AppError):
    kind = ErrorKind.TOKEN_MALFORMED
    default_message = "token is malformed"


class TokenSignatureInvalid(AppError):
    kind = ErrorKind.TOKEN_SIGNATURE_INVALID
    default_message = "token signature is invalid"


class TokenExpired(AppError):
    kind = ErrorKind.TOKEN_EXPIRED
    default_message = "token is expired"


class Unauthenticated(AppError):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "unauthorized"


class CredentialMismatch(AppError):
    kind = ErrorKind.CREDENTIAL_MISMATCH
    default_message = "credentials do not match"


class InvalidPassword(AppError):
    kind = ErrorKind.INVALID_PASSWORD
    default_message = "invalid password"


class DuplicateCredential(AppError):
    kind = ErrorKind.DUPLICATE_CREDENTIAL
    default_message = "user already exists"


class UserNotFound(AppError):
    kind = ErrorKind.USER_NOT_FOUND
    default_message = "user not found"


class PostNotFound(AppError):
    kind = ErrorKind.POST_NOT_FOUND
    default_message = "post not found"


class RelationshipNotFound(AppError):
    kind = ErrorKind.RELATIONSHIP_NOT_FOUND
    default_message = "relationship not found"


class Forbidden(AppError):
    kind = ErrorKind.FORBIDDEN
    default_message = "forbidden"


class ValidationFailed(AppError):
    kind = ErrorKind.VALIDATION
    default_message = "invalid input"


async def _app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    if exc.kind in INTERNAL_KINDS:
        logger.exception("internal_error kind=%s message=%s", exc.kind.value, exc.message, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": "internal error"})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
