from __future__ import annotations

"""Functional test bootstrap.

Points the engine at a file-backed SQLite database before any engine is
built, applies the migrations once per session and empties every table
before each test so tests never observe each other's rows.
"""

import os
import pathlib
from typing import Iterator

import pytest

_ROOT = pathlib.Path(__file__).resolve().parents[2]
_DB_FILE = _ROOT / "tmp" / "functional_tests.db"
_DB_FILE.parent.mkdir(parents=True, exist_ok=True)
if _DB_FILE.exists():
    _DB_FILE.unlink()

os.environ["TEST_DATABASE_URL"] = f"sqlite:///{_DB_FILE}"
os.environ["DATABASE_URL"] = os.environ["TEST_DATABASE_URL"]
# The session fixture applies migrations explicitly
os.environ["AUTO_APPLY_MIGRATIONS"] = "0"

_TABLES = ("question_tags", "questions", "responses", "assessments", "builder_states")


@pytest.fixture(scope="session", autouse=True)
def functional_sqlite_bootstrap() -> Iterator[None]:
    """Session-level bootstrap: apply migrations once for the shared DB."""
    from hireassess.db.base import get_engine
    from hireassess.db.migrations_runner import apply_migrations

    apply_migrations(get_engine(os.environ["TEST_DATABASE_URL"]))
    yield


@pytest.fixture(autouse=True)
def clean_database(functional_sqlite_bootstrap) -> Iterator[None]:
    from sqlalchemy import text as sql_text

    from hireassess.db.base import get_engine
    from hireassess.logic.events import get_buffered_events

    with get_engine(os.environ["TEST_DATABASE_URL"]).begin() as conn:
        for table in _TABLES:
            conn.execute(sql_text(f"DELETE FROM {table}"))
    get_buffered_events(clear=True)
    yield


@pytest.fixture()
def seeded_bank() -> int:
    from hireassess.logic.repository_questions import seed_question_bank

    return seed_question_bank()


@pytest.fixture()
def directory():
    from hireassess.logic.directory import InMemoryDirectory
    from hireassess.models.assessment import Candidate, Job

    return InMemoryDirectory(
        jobs=[
            Job(id=1, title="Frontend Developer"),
            Job(id=2, title="Backend Developer"),
            Job(id=3, title="Product Designer"),
        ],
        candidates=[
            Candidate(id=101, name="Ada Byron", email="ada@example.com", stage="applied", job_id=1),
            Candidate(id=102, name="Grace Hopper", email="grace@example.com", stage="applied", job_id=1),
            Candidate(id=103, name="Alan Turing", email="alan@example.com", stage="screen", job_id=1),
            Candidate(id=104, name="Edsger Dijkstra", email="edsger@example.com", stage="applied", job_id=1),
        ],
    )


@pytest.fixture()
def client(directory):
    from fastapi.testclient import TestClient

    from hireassess.main import create_app

    with TestClient(create_app(directory=directory)) as c:
        yield c
