"""Assessment and builder-state data access helpers.

Sections are stored as one JSON document per assessment; `(job_id, stage)`
is unique at the table level. Builder states hold an in-progress authoring
draft per job and are opaque to the engine.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import text as sql_text

from hireassess.db.base import get_engine, transaction
from hireassess.models.assessment import Assessment, Section

logger = logging.getLogger(__name__)

_COLUMNS = "assessment_id, job_id, stage, title, sections_json, created_at, updated_at"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


def _sections_json(sections: List[Section]) -> str:
    return json.dumps([s.model_dump(mode="json") for s in sections])


def _row_to_assessment(row: Any) -> Assessment:
    return Assessment(
        id=str(row[0]),
        job_id=int(row[1]),
        stage=str(row[2]),
        title=str(row[3]),
        sections=[Section.model_validate(s) for s in json.loads(row[4] or "[]")],
        created_at=row[5],
        updated_at=row[6],
    )


def get_assessment(assessment_id: str) -> Optional[Assessment]:
    eng = get_engine()
    with eng.connect() as conn:
        row = conn.execute(
            sql_text(f"SELECT {_COLUMNS} FROM assessments WHERE assessment_id = :aid"),
            {"aid": str(assessment_id)},
        ).fetchone()
    return _row_to_assessment(row) if row else None


def get_assessment_by_job_stage(job_id: int, stage: str) -> Optional[Assessment]:
    eng = get_engine()
    with eng.connect() as conn:
        row = conn.execute(
            sql_text(f"SELECT {_COLUMNS} FROM assessments WHERE job_id = :jid AND stage = :stage"),
            {"jid": int(job_id), "stage": stage},
        ).fetchone()
    return _row_to_assessment(row) if row else None


def list_assessments_for_job(job_id: int) -> List[Assessment]:
    eng = get_engine()
    with eng.connect() as conn:
        rows = conn.execute(
            sql_text(f"SELECT {_COLUMNS} FROM assessments WHERE job_id = :jid ORDER BY created_at, stage"),
            {"jid": int(job_id)},
        ).fetchall()
    return [_row_to_assessment(r) for r in rows]


def insert_assessment(assessment: Assessment) -> Assessment:
    """Persist a new assessment, assigning an id when it has none.

    Raises `sqlalchemy.exc.IntegrityError` when `(job_id, stage)` already has
    an assessment; callers that race on creation re-read the winner.
    """
    stored = assessment.model_copy(update={"id": assessment.id or str(uuid.uuid4())})
    try:
        with transaction() as conn:
            conn.execute(
                sql_text(
                    f"INSERT INTO assessments ({_COLUMNS}) "
                    "VALUES (:aid, :jid, :stage, :title, :sections, :created, :updated)"
                ),
                {
                    "aid": stored.id,
                    "jid": stored.job_id,
                    "stage": stored.stage,
                    "title": stored.title,
                    "sections": _sections_json(stored.sections),
                    "created": _iso(stored.created_at),
                    "updated": _iso(stored.updated_at),
                },
            )
    except Exception:
        logger.error("insert_assessment failed job_id=%s stage=%s", stored.job_id, stored.stage, exc_info=True)
        raise
    logger.info("assessment_inserted id=%s job_id=%s stage=%s", stored.id, stored.job_id, stored.stage)
    return stored


def update_assessment(assessment: Assessment) -> Optional[Assessment]:
    """Overwrite title and sections; bumps `updated_at`. Returns None when absent."""
    if not assessment.id:
        return None
    updated = assessment.model_copy(update={"updated_at": _now()})
    with transaction() as conn:
        result = conn.execute(
            sql_text(
                "UPDATE assessments SET title = :title, sections_json = :sections, updated_at = :updated "
                "WHERE assessment_id = :aid"
            ),
            {
                "aid": updated.id,
                "title": updated.title,
                "sections": _sections_json(updated.sections),
                "updated": _iso(updated.updated_at),
            },
        )
    if not result.rowcount:
        return None
    return updated


def delete_assessment(assessment_id: str) -> bool:
    with transaction() as conn:
        result = conn.execute(
            sql_text("DELETE FROM assessments WHERE assessment_id = :aid"),
            {"aid": str(assessment_id)},
        )
    return bool(result.rowcount)


def save_builder_state(job_id: int, state: Dict[str, Any]) -> None:
    """Upsert the authoring draft for `job_id`."""
    params = {"jid": int(job_id), "state": json.dumps(state), "ts": _iso(_now())}
    with transaction() as conn:
        result = conn.execute(
            sql_text("UPDATE builder_states SET state_json = :state, last_modified = :ts WHERE job_id = :jid"),
            params,
        )
        if not result.rowcount:
            conn.execute(
                sql_text("INSERT INTO builder_states (job_id, state_json, last_modified) VALUES (:jid, :state, :ts)"),
                params,
            )


def get_builder_state(job_id: int) -> Optional[Dict[str, Any]]:
    eng = get_engine()
    with eng.connect() as conn:
        row = conn.execute(
            sql_text("SELECT state_json, last_modified FROM builder_states WHERE job_id = :jid"),
            {"jid": int(job_id)},
        ).fetchone()
    if not row:
        return None
    state = json.loads(row[0])
    if isinstance(state, dict):
        state.setdefault("last_modified", row[1])
    return state


def clear_builder_state(job_id: int) -> None:
    with transaction() as conn:
        conn.execute(sql_text("DELETE FROM builder_states WHERE job_id = :jid"), {"jid": int(job_id)})


__all__ = [
    "clear_builder_state",
    "delete_assessment",
    "get_assessment",
    "get_assessment_by_job_stage",
    "get_builder_state",
    "insert_assessment",
    "list_assessments_for_job",
    "save_builder_state",
    "update_assessment",
]
