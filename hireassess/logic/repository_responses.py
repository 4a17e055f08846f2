"""Response persistence and the draft/submitted state machine.

Per `(candidate_id, assessment_id)` there is at most one live draft and at
most one submitted row. Saving a draft replaces the previous one; submitting
writes an immutable row and removes the draft, both inside a single
transaction. The partial unique indexes `uq_responses_submitted` and
`uq_responses_draft` back both rules against concurrent writers.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from hireassess.db.base import get_engine, transaction
from hireassess.logic import events
from hireassess.logic.errors import LifecycleViolation
from hireassess.models.response import DraftResponse, SubmittedResponse

logger = logging.getLogger(__name__)

ALREADY_SUBMITTED = "ALREADY_SUBMITTED"

_COLUMNS = (
    "response_id, candidate_id, assessment_id, job_id, stage, answers_json, created_at, updated_at, submitted_at"
)


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="microseconds")


def _row_to_response(row: Any) -> Union[DraftResponse, SubmittedResponse]:
    fields = {
        "id": str(row[0]),
        "candidate_id": int(row[1]),
        "assessment_id": str(row[2]),
        "job_id": int(row[3]) if row[3] is not None else None,
        "stage": row[4],
        "answers": json.loads(row[5] or "{}"),
        "created_at": row[6],
        "updated_at": row[7],
    }
    if row[8] is None:
        return DraftResponse(**fields)
    return SubmittedResponse(submitted_at=row[8], **fields)


def _submitted_exists(conn: Connection, candidate_id: int, assessment_id: str) -> bool:
    row = conn.execute(
        sql_text(
            "SELECT 1 FROM responses WHERE candidate_id = :cid AND assessment_id = :aid "
            "AND submitted_at IS NOT NULL LIMIT 1"
        ),
        {"cid": int(candidate_id), "aid": str(assessment_id)},
    ).fetchone()
    return row is not None


def _delete_drafts(conn: Connection, candidate_id: int, assessment_id: str) -> None:
    conn.execute(
        sql_text(
            "DELETE FROM responses WHERE candidate_id = :cid AND assessment_id = :aid AND submitted_at IS NULL"
        ),
        {"cid": int(candidate_id), "aid": str(assessment_id)},
    )


def _insert(conn: Connection, resp: Union[DraftResponse, SubmittedResponse]) -> None:
    conn.execute(
        sql_text(
            f"INSERT INTO responses ({_COLUMNS}) "
            "VALUES (:rid, :cid, :aid, :jid, :stage, :answers, :created, :updated, :submitted)"
        ),
        {
            "rid": resp.id,
            "cid": resp.candidate_id,
            "aid": resp.assessment_id,
            "jid": resp.job_id,
            "stage": resp.stage,
            "answers": json.dumps(resp.answers),
            "created": _iso(resp.created_at),
            "updated": _iso(resp.updated_at),
            "submitted": _iso(resp.submitted_at) if resp.submitted_at else None,
        },
    )


def _replace_draft(draft: DraftResponse) -> None:
    with transaction() as conn:
        if _submitted_exists(conn, draft.candidate_id, draft.assessment_id):
            raise LifecycleViolation(
                f"candidate {draft.candidate_id} already submitted assessment {draft.assessment_id}",
                code=ALREADY_SUBMITTED,
            )
        _delete_drafts(conn, draft.candidate_id, draft.assessment_id)
        _insert(conn, draft)


def save_draft(
    candidate_id: int,
    assessment_id: str,
    answers: Mapping[str, Any],
    *,
    job_id: Optional[int] = None,
    stage: Optional[str] = None,
) -> DraftResponse:
    """Replace the candidate's draft with `answers`.

    Raises LifecycleViolation once the candidate has submitted, so a late
    autosave can never resurrect a draft next to a submission.
    """
    now = datetime.now(timezone.utc)
    draft = DraftResponse(
        id=str(uuid.uuid4()),
        candidate_id=candidate_id,
        assessment_id=assessment_id,
        job_id=job_id,
        stage=stage,
        answers=dict(answers),
        created_at=now,
        updated_at=now,
    )
    for attempt in (1, 2):
        try:
            _replace_draft(draft)
            break
        except IntegrityError:
            # a concurrent save committed its draft between our delete and insert
            if attempt == 2:
                raise
            logger.info(
                "draft_save_conflict_retry candidate_id=%s assessment_id=%s", candidate_id, assessment_id
            )
    logger.info("draft_saved candidate_id=%s assessment_id=%s answers=%s", candidate_id, assessment_id, len(answers))
    events.publish(
        events.RESPONSE_DRAFT_SAVED,
        {"response_id": draft.id, "candidate_id": candidate_id, "assessment_id": assessment_id},
    )
    return draft


def _select_one(candidate_id: int, assessment_id: str, submitted: bool) -> Optional[Any]:
    clause = "submitted_at IS NOT NULL" if submitted else "submitted_at IS NULL"
    eng = get_engine()
    with eng.connect() as conn:
        return conn.execute(
            sql_text(
                f"SELECT {_COLUMNS} FROM responses WHERE candidate_id = :cid AND assessment_id = :aid "
                f"AND {clause} ORDER BY updated_at DESC LIMIT 1"
            ),
            {"cid": int(candidate_id), "aid": str(assessment_id)},
        ).fetchone()


def get_draft(candidate_id: int, assessment_id: str) -> Optional[DraftResponse]:
    row = _select_one(candidate_id, assessment_id, submitted=False)
    return _row_to_response(row) if row else None  # type: ignore[return-value]


def get_submitted(candidate_id: int, assessment_id: str) -> Optional[SubmittedResponse]:
    row = _select_one(candidate_id, assessment_id, submitted=True)
    return _row_to_response(row) if row else None  # type: ignore[return-value]


def has_submitted(candidate_id: int, assessment_id: str) -> bool:
    eng = get_engine()
    with eng.connect() as conn:
        return _submitted_exists(conn, candidate_id, assessment_id)


def get_current_response(
    candidate_id: int, assessment_id: str
) -> Optional[Union[DraftResponse, SubmittedResponse]]:
    """Return the submission if there is one, otherwise the live draft."""
    return get_submitted(candidate_id, assessment_id) or get_draft(candidate_id, assessment_id)


def submit(
    candidate_id: int,
    assessment_id: str,
    answers: Mapping[str, Any],
    *,
    job_id: Optional[int] = None,
    stage: Optional[str] = None,
) -> SubmittedResponse:
    """Record the final answers and discard the draft.

    Raises LifecycleViolation (code ALREADY_SUBMITTED) when a submission
    exists, including when a concurrent submitter wins the unique index.
    """
    now = datetime.now(timezone.utc)
    existing_draft = get_draft(candidate_id, assessment_id)
    submitted = SubmittedResponse(
        id=str(uuid.uuid4()),
        candidate_id=candidate_id,
        assessment_id=assessment_id,
        job_id=job_id,
        stage=stage,
        answers=dict(answers),
        created_at=existing_draft.created_at if existing_draft else now,
        updated_at=now,
        submitted_at=now,
    )
    try:
        with transaction() as conn:
            if _submitted_exists(conn, candidate_id, assessment_id):
                raise LifecycleViolation(
                    f"candidate {candidate_id} already submitted assessment {assessment_id}",
                    code=ALREADY_SUBMITTED,
                )
            _insert(conn, submitted)
            _delete_drafts(conn, candidate_id, assessment_id)
    except IntegrityError as e:
        raise LifecycleViolation(
            f"candidate {candidate_id} already submitted assessment {assessment_id}",
            code=ALREADY_SUBMITTED,
        ) from e
    logger.info("response_submitted candidate_id=%s assessment_id=%s", candidate_id, assessment_id)
    events.publish(
        events.RESPONSE_SUBMITTED,
        {"response_id": submitted.id, "candidate_id": candidate_id, "assessment_id": assessment_id},
    )
    return submitted


def list_submitted(assessment_id: str) -> List[SubmittedResponse]:
    """Every submitted row for `assessment_id`, oldest submission first."""
    eng = get_engine()
    with eng.connect() as conn:
        rows = conn.execute(
            sql_text(
                f"SELECT {_COLUMNS} FROM responses WHERE assessment_id = :aid AND submitted_at IS NOT NULL "
                "ORDER BY submitted_at, response_id"
            ),
            {"aid": str(assessment_id)},
        ).fetchall()
    return [_row_to_response(r) for r in rows]  # type: ignore[misc]


__all__ = [
    "ALREADY_SUBMITTED",
    "get_current_response",
    "get_draft",
    "get_submitted",
    "has_submitted",
    "list_submitted",
    "save_draft",
    "submit",
]
