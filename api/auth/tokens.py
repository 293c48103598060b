"""
Access token issuance and verification (RS256 JWTs).

Claims are limited to `sub` (user id), `iat` and `exp`. The issuer only ever
sees the private key and the verifier only the public key; both come from the
`KeyPair` injected at construction.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt

from core.errors import SigningError, TokenExpired, TokenMalformed, TokenSignatureInvalid

from .keys import KeyPair

ALGORITHM = "RS256"
# `sub` is checked after expiry, in the subject step.
REQUIRED_CLAIMS = ["exp", "iat"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    def __init__(self, key_pair: KeyPair, ttl: timedelta) -> None:
        ttl_s = int(ttl.total_seconds())
        if ttl_s <= 0:
            raise ValueError("token ttl must be at least one second")
        self._private_key = key_pair.private_key
        self._ttl_s = ttl_s

    @property
    def ttl(self) -> timedelta:
        return timedelta(seconds=self._ttl_s)

    def issue(self, user_id: uuid.UUID, *, now: datetime | None = None) -> str:
        issued_at = int((now or _utc_now()).timestamp())
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._ttl_s,
        }
        try:
            return jwt.encode(payload, self._private_key, algorithm=ALGORITHM)
        except (jwt.PyJWTError, ValueError, TypeError) as exc:
            raise SigningError(f"could not sign access token: {exc}") from exc


class TokenVerifier:
    """
    Validate an access token and return its subject.

    Checks run in a fixed order: segment count, declared algorithm,
    signature, expiry, subject. The first failing check decides the error.
    """

    def __init__(self, key_pair: KeyPair, *, leeway: timedelta = timedelta(0)) -> None:
        self._public_key = key_pair.public_key
        self._leeway = leeway

    def verify(self, token: str) -> uuid.UUID:
        if token.count(".") != 2:
            raise TokenMalformed("token contains an invalid number of segments")

        try:
            header = jwt.get_unverified_header(token)
        except jwt.PyJWTError as exc:
            raise TokenMalformed("token header is malformed") from exc

        # Pin the algorithm before the key is used, so an HS256 token can
        # never be checked against the public key as an HMAC secret.
        if header.get("alg") != ALGORITHM:
            raise TokenMalformed("unexpected signing method")

        try:
            claims = jwt.decode(
                token,
                self._public_key,
                algorithms=[ALGORITHM],
                leeway=self._leeway,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidSignatureError as exc:
            raise TokenSignatureInvalid() from exc
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except jwt.MissingRequiredClaimError as exc:
            raise TokenMalformed(f"token is missing the {exc.claim} claim") from exc
        except jwt.InvalidTokenError as exc:
            raise TokenMalformed() from exc

        subject = claims.get("sub")
        if not subject:
            raise TokenMalformed("token is missing the sub claim")
        try:
            return uuid.UUID(str(subject))
        except ValueError as exc:
            raise TokenMalformed("token subject is not a valid user id") from exc
