"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. The app lifespan initializes it on
startup and closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import asyncpg

logger = logging.getLogger(__name__)

CONNECT_RETRY_DELAY_S = 5.0

_pool: asyncpg.Pool | None = None


async def _connect(dsn: str) -> asyncpg.Pool:
    pool = await asyncpg.create_pool(
        dsn=dsn,
        min_size=1,
        max_size=10,
        command_timeout=30,
    )
    async with pool.acquire() as conn:
        await conn.execute("SELECT 1")
    return pool


async def init_pool(dsn: str, *, attempts: int = 3, delay_s: float = CONNECT_RETRY_DELAY_S) -> None:
    """
    Open the pool, retrying while the database is still coming up.

    The DSN is handed to asyncpg as-is; asyncpg reads `sslmode` from it.
    """
    global _pool
    if _pool is not None:
        return None

    last_exc: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            _pool = await _connect(dsn)
            return None
        except (OSError, asyncpg.PostgresError) as exc:
            last_exc = exc
            logger.warning("db_connect_failed attempt=%s/%s error=%s", attempt, attempts, exc)
            if attempt < attempts:
                await asyncio.sleep(delay_s)

    raise RuntimeError(f"Could not connect to database after {attempts} attempts.") from last_exc


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    await pool().execute(sql, *args)


async def execute_rowcount(sql: str, *args: Any) -> int:
    """
    Run a statement and return the number of affected rows.

    asyncpg returns the command tag as text, e.g. "DELETE 1". A tag without
    a trailing count raises ValueError.
    """
    tag = await pool().execute(sql, *args)
    return int(tag.rsplit(" ", 1)[-1])
