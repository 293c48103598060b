"""
Process settings read from the environment.

`load_settings()` is called once by `create_app()`; the resulting object is
passed explicitly to whatever needs it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from urllib.parse import quote

DEFAULT_TOKEN_TTL_MIN = 12 * 60


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _require(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise RuntimeError(f"{name} is not set.")
    return value


@dataclass(frozen=True)
class Settings:
    database_url: str
    private_key_path: str
    public_key_path: str
    token_ttl: timedelta
    migrations_dir: str = "migrations"
    db_connect_attempts: int = 3
    log_level: str = "INFO"


def database_url() -> str:
    """
    DATABASE_URL wins; otherwise build a DSN from the POSTGRES_* variables.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return url

    user = _require("POSTGRES_USER")
    password = _require("POSTGRES_PASSWORD")
    db_name = _require("POSTGRES_DB")
    port = _env_int("POSTGRES_PORT", 5432)
    host = _env_str("POSTGRES_HOST", "localhost")
    ssl_mode = _env_str("POSTGRES_SSL_MODE", "disable")
    return (
        f"postgresql://{quote(user, safe='')}:{quote(password, safe='')}"
        f"@{host}:{port}/{db_name}?sslmode={ssl_mode}"
    )


def load_settings() -> Settings:
    ttl_minutes = _env_int("TOKEN_TTL_MIN", DEFAULT_TOKEN_TTL_MIN)
    if ttl_minutes <= 0:
        raise RuntimeError("TOKEN_TTL_MIN must be positive.")

    return Settings(
        database_url=database_url(),
        private_key_path=_require("JWT_PRIVATE_KEY_PATH"),
        public_key_path=_require("JWT_PUBLIC_KEY_PATH"),
        token_ttl=timedelta(minutes=ttl_minutes),
        migrations_dir=_env_str("MIGRATIONS_DIR", "migrations"),
        db_connect_attempts=max(1, _env_int("DB_CONNECT_ATTEMPTS", 3)),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )
