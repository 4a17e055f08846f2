"""SQLAlchemy engine and transaction helpers.

The engine targets PostgreSQL in production but supports SQLite for local
development and CI. No declarative models are defined here; repositories in
`hireassess/logic/` issue SQL through SQLAlchemy Core and this module only
manages connection lifecycle.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _db_url() -> str:
    return (
        os.getenv("TEST_DATABASE_URL")
        or os.getenv("DATABASE_URL")
        or "sqlite+pysqlite:///:memory:"
    )


# Module-level cached Engine so repositories share the same pool
_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def get_engine(url: str | None = None) -> Engine:
    """Return the shared SQLAlchemy Engine.

    With no `url`, the engine already in use is returned, or one is built from
    TEST_DATABASE_URL / DATABASE_URL. An explicit, different `url` replaces it.

    For SQLite in-memory URLs, use a StaticPool to keep a single connection
    alive across sessions and threads, otherwise every checkout would see an
    empty database.
    """
    global _ENGINE, _ENGINE_URL
    if url is None and _ENGINE is not None:
        return _ENGINE
    resolved_url = url or _db_url()

    if _ENGINE is None or _ENGINE_URL != resolved_url:
        kwargs: dict = {"future": True, "pool_pre_ping": True}
        if resolved_url.startswith("sqlite") and ":memory:" in resolved_url:
            kwargs.update({
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            })
        elif resolved_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
        if _ENGINE is not None:
            _ENGINE.dispose()
        _ENGINE = create_engine(resolved_url, **kwargs)
        _ENGINE_URL = resolved_url
        logger.info("db_engine_created dialect=%s", _ENGINE.dialect.name)

    return _ENGINE


@contextmanager
def transaction() -> Generator[Connection, None, None]:
    """Yield a connection inside one transaction; roll back and log on error."""
    eng = get_engine()
    try:
        with eng.begin() as conn:
            yield conn
    except SQLAlchemyError:
        logger.error("DB transaction error; transaction rolled back", exc_info=True)
        raise
