"""Database bootstrap utilities for the assessment engine.

This module exposes convenience imports for engine construction, the
transaction helper used by repositories and the migrations runner that
applies SQL files from the project migrations/ directory. The DB layer is
intentionally minimal and does not leak ORM models into route handlers.
"""

from hireassess.db.base import get_engine, transaction
from hireassess.db.migrations_runner import apply_migrations

__all__ = [
    "get_engine",
    "transaction",
    "apply_migrations",
]
