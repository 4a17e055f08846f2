"""Lightweight SQL migrations runner.

Applies .sql files in lexical order from the project `migrations/` directory.
Skips rollback files and records applied filenames in a `schema_migrations`
table inside the target database, so a fresh database always receives the
full schema. Intended for local development and CI; production environments
may use Alembic or the platform's migration mechanism instead.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"

_JOURNAL_DDL = (
    "CREATE TABLE IF NOT EXISTS schema_migrations ("
    " filename VARCHAR(255) PRIMARY KEY,"
    " applied_at VARCHAR(32) NOT NULL)"
)


def _iter_sql_files(root: Path) -> Iterable[Path]:
    for p in sorted(root.glob("*.sql")):
        if "rollback" in p.name.lower():
            continue
        yield p


def _strip_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.strip().startswith("--"))


def _exec_sql_compat(conn: Connection, sql: str) -> None:
    """Execute SQL text, tolerating multi-statement files on SQLite.

    SQLite's DB-API (pysqlite) does not allow multiple statements in a single
    execute() call, so statements are split on ';' for SQLite. Other dialects
    receive the full script as-is.
    """
    name = (getattr(conn.dialect, "name", "") or "").lower()
    body = _strip_comments(sql)
    if "sqlite" in name:
        for stmt in body.split(";"):
            s = stmt.strip()
            if not s or s.upper() in {"BEGIN", "COMMIT", "END"}:
                continue
            conn.exec_driver_sql(s)
        return
    conn.exec_driver_sql(body)


def _applied_filenames(conn: Connection) -> set[str]:
    conn.exec_driver_sql(_JOURNAL_DDL)
    rows = conn.execute(sql_text("SELECT filename FROM schema_migrations")).fetchall()
    return {str(r[0]) for r in rows}


def apply_migrations(engine: Engine, migrations_dir: str | os.PathLike[str] | None = None) -> list[str]:
    """Apply pending migrations and return the filenames applied by this call."""
    root = Path(migrations_dir) if migrations_dir is not None else DEFAULT_MIGRATIONS_DIR
    if not root.exists():  # pragma: no cover - optional
        logger.warning("migrations_dir_missing path=%s", root)
        return []

    newly_applied: list[str] = []
    with engine.begin() as conn:
        applied = _applied_filenames(conn)
        for sql_path in _iter_sql_files(root):
            fname = sql_path.name
            if fname in applied:
                continue
            sql = sql_path.read_text(encoding="utf-8")
            if not sql.strip():
                continue
            try:
                _exec_sql_compat(conn, sql)
            except Exception:
                logger.error("migration_failed file=%s", fname, exc_info=True)
                raise
            conn.execute(
                sql_text("INSERT INTO schema_migrations (filename, applied_at) VALUES (:f, :at)"),
                {
                    "f": fname,
                    # ISO-8601 UTC without fractional seconds (e.g., 2024-01-01T00:00:00Z)
                    "at": datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z"),
                },
            )
            newly_applied.append(fname)
            logger.info("migration_applied file=%s", fname)
    return newly_applied
