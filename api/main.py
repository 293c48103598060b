from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI

from auth import router as auth_router
from auth.keys import load_key_pair
from auth.service import AuthService
from auth.tokens import TokenIssuer, TokenVerifier
from core import db, migrate
from core.errors import install_error_handlers
from core.log import configure_logging
from core.settings import Settings, load_settings
from followers import router as followers_router
from posts import router as posts_router
from users import repository as users_repository
from users import router as users_router

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


def build_auth_service(settings: Settings) -> AuthService:
    # Keys are loaded exactly once; a failure here aborts startup.
    key_pair = load_key_pair(settings.private_key_path, settings.public_key_path)
    return AuthService(
        users=users_repository,
        issuer=TokenIssuer(key_pair, settings.token_ttl),
        verifier=TokenVerifier(key_pair),
    )


def create_app(
    settings: Settings | None = None,
    *,
    auth_service: AuthService | None = None,
) -> FastAPI:
    """
    Build the ASGI app.

    With no arguments, settings come from the environment and the lifespan
    manages the DB pool. Passing `auth_service` without `settings` skips the
    DB lifespan entirely (used by tests that stub the repositories).
    """
    if auth_service is None:
        settings = settings or load_settings()
        configure_logging(settings.log_level)
        auth_service = build_auth_service(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if settings is None:
            yield
            return
        # Initialize the DB pool once per process.
        await db.init_pool(settings.database_url, attempts=settings.db_connect_attempts)
        try:
            await migrate.apply_migrations(settings.migrations_dir, settings.database_url)
            logger.info("service_started")
            yield
        finally:
            await db.close_pool()
            logger.info("service_stopped")

    app = FastAPI(title="Social Network API", version="1.0", lifespan=lifespan)
    app.state.auth_service = auth_service
    install_error_handlers(app)

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(auth_router.router, tags=["auth"])
    api.include_router(users_router.router, tags=["users"])
    api.include_router(followers_router.router, tags=["followers"])
    api.include_router(posts_router.router, tags=["posts"])
    app.include_router(api)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:create_app",
        factory=True,
        host=os.environ.get("HTTP_HOST", "0.0.0.0"),
        port=int(os.environ.get("HTTP_PORT", "8080")),
    )
