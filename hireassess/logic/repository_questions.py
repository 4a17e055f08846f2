"""Question bank data access helpers.

The bank is a read-mostly table filled from the static catalog. Question
payloads are stored as JSON next to a few indexed columns (category,
position) and a tag table, so category and tag lookups stay in SQL while the
full record round-trips through the pydantic model.
"""

from __future__ import annotations

import json
import logging
from typing import Iterable, List, Optional

from sqlalchemy import bindparam, text as sql_text

from hireassess.db.base import get_engine, transaction
from hireassess.logic import events
from hireassess.logic.question_catalog import catalog_questions
from hireassess.models.question import Question

logger = logging.getLogger(__name__)


def _row_to_question(payload: str) -> Question:
    return Question.model_validate(json.loads(payload))


def seed_question_bank(questions: Optional[Iterable[Question]] = None) -> int:
    """Replace every stored question with the catalog (or `questions`).

    Clearing and inserting happen in one transaction, so reseeding is
    idempotent and readers never observe a half-filled bank. Returns the
    number of questions stored.
    """
    items = list(questions) if questions is not None else catalog_questions()
    with transaction() as conn:
        conn.execute(sql_text("DELETE FROM question_tags"))
        conn.execute(sql_text("DELETE FROM questions"))
        for position, q in enumerate(items):
            conn.execute(
                sql_text(
                    "INSERT INTO questions (question_id, category, question_type, difficulty, position, payload_json) "
                    "VALUES (:qid, :cat, :qtype, :diff, :pos, :payload)"
                ),
                {
                    "qid": q.id,
                    "cat": q.category,
                    "qtype": q.type,
                    "diff": q.difficulty,
                    "pos": position,
                    "payload": q.model_dump_json(),
                },
            )
            for tag in dict.fromkeys(q.tags):
                conn.execute(
                    sql_text("INSERT INTO question_tags (question_id, tag) VALUES (:qid, :tag)"),
                    {"qid": q.id, "tag": tag},
                )
    logger.info("question_bank_seeded count=%s", len(items))
    events.publish(events.QUESTION_BANK_RESEEDED, {"count": len(items)})
    return len(items)


def count_questions() -> int:
    eng = get_engine()
    with eng.connect() as conn:
        row = conn.execute(sql_text("SELECT COUNT(*) FROM questions")).fetchone()
    return int(row[0]) if row and row[0] is not None else 0


def questions_by_category(category: str) -> List[Question]:
    """Return every question in `category`, in catalog order."""
    eng = get_engine()
    try:
        with eng.connect() as conn:
            rows = conn.execute(
                sql_text("SELECT payload_json FROM questions WHERE category = :cat ORDER BY position"),
                {"cat": category},
            ).fetchall()
    except Exception:
        logger.error("questions_by_category failed category=%s", category, exc_info=True)
        raise
    return [_row_to_question(r[0]) for r in rows]


def questions_by_tags(tags: Iterable[str]) -> List[Question]:
    """Return questions carrying any of `tags`, catalog order, each at most once."""
    wanted = [t for t in tags if t]
    if not wanted:
        return []
    stmt = sql_text(
        "SELECT q.payload_json, q.position FROM questions q "
        "WHERE q.question_id IN (SELECT t.question_id FROM question_tags t WHERE t.tag IN :tags) "
        "ORDER BY q.position"
    ).bindparams(bindparam("tags", expanding=True))
    eng = get_engine()
    try:
        with eng.connect() as conn:
            rows = conn.execute(stmt, {"tags": wanted}).fetchall()
    except Exception:
        logger.error("questions_by_tags failed tags=%s", wanted, exc_info=True)
        raise
    return [_row_to_question(r[0]) for r in rows]


def get_question(question_id: str) -> Optional[Question]:
    eng = get_engine()
    with eng.connect() as conn:
        row = conn.execute(
            sql_text("SELECT payload_json FROM questions WHERE question_id = :qid"),
            {"qid": question_id},
        ).fetchone()
    return _row_to_question(row[0]) if row else None


__all__ = [
    "count_questions",
    "get_question",
    "questions_by_category",
    "questions_by_tags",
    "seed_question_bank",
]
