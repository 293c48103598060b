"""
Pytest fixtures.

API tests run the real app against in-memory stand-ins for the repository
modules, so no database is needed. RSA keys are generated once per session.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from httpx import ASGITransport, AsyncClient

from auth.keys import KeyPair, load_key_pair
from auth.service import AuthService
from auth.tokens import TokenIssuer, TokenVerifier
from core.errors import DuplicateCredential, UserNotFound
from followers import repository as followers_repository
from main import create_app
from posts import repository as posts_repository
from users import repository as users_repository

TOKEN_TTL = timedelta(hours=1)


def write_key_pair(
    out_dir: Path,
    *,
    private_format: serialization.PrivateFormat = serialization.PrivateFormat.PKCS8,
    public_format: serialization.PublicFormat = serialization.PublicFormat.SubjectPublicKeyInfo,
) -> tuple[Path, Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_path = out_dir / "private.pem"
    public_path = out_dir / "public.pem"
    private_path.write_bytes(
        private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=private_format,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    public_path.write_bytes(
        private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=public_format,
        )
    )
    return private_path, public_path


@pytest.fixture(scope="session")
def key_paths(tmp_path_factory) -> tuple[Path, Path]:
    return write_key_pair(tmp_path_factory.mktemp("keys"))


@pytest.fixture(scope="session")
def key_pair(key_paths) -> KeyPair:
    return load_key_pair(*key_paths)


@pytest.fixture(scope="session")
def other_key_pair(tmp_path_factory) -> KeyPair:
    return load_key_pair(*write_key_pair(tmp_path_factory.mktemp("other_keys")))


@pytest.fixture
def issuer(key_pair) -> TokenIssuer:
    return TokenIssuer(key_pair, TOKEN_TTL)


@pytest.fixture
def verifier(key_pair) -> TokenVerifier:
    return TokenVerifier(key_pair)


class InMemoryStore:
    """Dict-backed replacement for the users/posts/followers repositories."""

    def __init__(self) -> None:
        self.users: dict[uuid.UUID, dict] = {}
        self.posts: dict[uuid.UUID, dict] = {}
        self.follows: dict[tuple[uuid.UUID, uuid.UUID], datetime] = {}

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _check_unique(self, username: str, email: str, *, exclude: uuid.UUID | None = None) -> None:
        for user in self.users.values():
            if user["id"] == exclude:
                continue
            if user["username"] == username or user["email"] == email:
                raise DuplicateCredential()

    # users
    async def create_user(self, *, username: str, email: str, password_hash: str) -> dict:
        email = users_repository.normalize_email(email)
        username = username.strip()
        self._check_unique(username, email)
        now = self._now()
        row = {
            "id": uuid.uuid4(),
            "username": username,
            "email": email,
            "password_hash": password_hash,
            "bio": None,
            "birthday": None,
            "created_at": now,
            "updated_at": now,
        }
        self.users[row["id"]] = row
        return dict(row)

    async def get_user_by_id(self, user_id: uuid.UUID) -> dict | None:
        row = self.users.get(user_id)
        return dict(row) if row is not None else None

    async def get_user_by_email(self, email: str) -> dict | None:
        email = users_repository.normalize_email(email)
        for row in self.users.values():
            if row["email"] == email:
                return dict(row)
        return None

    async def update_user(self, user_id, *, username, email, bio, birthday) -> dict | None:
        row = self.users.get(user_id)
        if row is None:
            return None
        email = users_repository.normalize_email(email)
        self._check_unique(username, email, exclude=user_id)
        row.update(username=username, email=email, bio=bio, birthday=birthday, updated_at=self._now())
        return dict(row)

    # posts
    async def create_post(self, *, user_id: uuid.UUID, content: str) -> dict:
        now = self._now()
        row = {"id": uuid.uuid4(), "user_id": user_id, "content": content, "created_at": now, "updated_at": now}
        self.posts[row["id"]] = row
        return dict(row)

    async def get_post_by_id(self, post_id: uuid.UUID) -> dict | None:
        row = self.posts.get(post_id)
        return dict(row) if row is not None else None

    async def update_post(self, post_id: uuid.UUID, *, content: str) -> dict | None:
        row = self.posts.get(post_id)
        if row is None:
            return None
        row.update(content=content, updated_at=self._now())
        return dict(row)

    async def delete_post(self, post_id: uuid.UUID) -> bool:
        return self.posts.pop(post_id, None) is not None

    # followers
    async def follow(self, follower_id: uuid.UUID, followee_id: uuid.UUID) -> None:
        if follower_id not in self.users or followee_id not in self.users:
            raise UserNotFound()
        self.follows.setdefault((follower_id, followee_id), self._now())

    async def unfollow(self, follower_id: uuid.UUID, followee_id: uuid.UUID) -> bool:
        return self.follows.pop((follower_id, followee_id), None) is not None

    async def list_followers(self, user_id: uuid.UUID) -> list[dict]:
        return [dict(self.users[a]) for (a, b) in self.follows if b == user_id]

    async def list_following(self, user_id: uuid.UUID) -> list[dict]:
        return [dict(self.users[b]) for (a, b) in self.follows if a == user_id]


@pytest.fixture
def store(monkeypatch) -> InMemoryStore:
    fake = InMemoryStore()
    for name in ("create_user", "get_user_by_id", "get_user_by_email", "update_user"):
        monkeypatch.setattr(users_repository, name, getattr(fake, name))
    for name in ("create_post", "get_post_by_id", "update_post", "delete_post"):
        monkeypatch.setattr(posts_repository, name, getattr(fake, name))
    for name in ("follow", "unfollow", "list_followers", "list_following"):
        monkeypatch.setattr(followers_repository, name, getattr(fake, name))
    return fake


@pytest.fixture
def auth_service(store, issuer, verifier) -> AuthService:
    return AuthService(users=users_repository, issuer=issuer, verifier=verifier)


@pytest_asyncio.fixture
async def client(auth_service):
    app = create_app(auth_service=auth_service)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http


@pytest.fixture
def signup(client):
    """Register + log in a user through the API; returns (user_id, headers)."""

    async def _signup(username: str, password: str = "password123") -> tuple[uuid.UUID, dict]:
        email = f"{username}@example.com"
        resp = await client.post(
            "/api/v1/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        user_id = uuid.UUID(resp.json()["id"])

        resp = await client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return user_id, {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _signup
