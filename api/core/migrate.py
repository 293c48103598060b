"""
Schema migrations, run through Alembic.

Revisions live in `migrations/versions/`. The app lifespan upgrades the
database to head on startup; `alembic upgrade head` from the repo root does the
same from the command line (see `alembic.ini`).
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

logger = logging.getLogger(__name__)

URL_ATTRIBUTE = "sqlalchemy_url"


def sqlalchemy_url(dsn: str) -> str:
    """
    Turn a libpq-style DSN into a SQLAlchemy URL on the asyncpg driver.

    asyncpg's `connect()` takes the SSL mode as `ssl`, not `sslmode`.
    """
    url = make_url(dsn)
    query = dict(url.query)
    ssl_mode = query.pop("sslmode", None)
    if ssl_mode is not None:
        query["ssl"] = ssl_mode
    url = url.set(drivername="postgresql+asyncpg", query=query)
    return url.render_as_string(hide_password=False)


def build_config(migrations_dir: str | Path, dsn: str) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(Path(migrations_dir)))
    # Passed as an attribute, not an ini option: configparser would try to
    # interpolate the '%' escapes in a quoted password.
    cfg.attributes[URL_ATTRIBUTE] = sqlalchemy_url(dsn)
    return cfg


async def apply_migrations(migrations_dir: str | Path, dsn: str) -> None:
    """
    Upgrade the database to the latest revision.
    """
    cfg = build_config(migrations_dir, dsn)
    # env.py drives its own event loop, so it runs off the app's loop.
    await asyncio.to_thread(command.upgrade, cfg, "head")
    logger.info("migrations_applied dir=%s", migrations_dir)
