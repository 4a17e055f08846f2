"""Functional tests for drafts, submissions and the candidate-facing flow."""

from __future__ import annotations

from datetime import datetime, timezone

import pydantic
import pytest
from sqlalchemy import text as sql_text
from sqlalchemy.exc import IntegrityError

from hireassess.db.base import get_engine, transaction
from hireassess.logic import repository_responses
from hireassess.logic.errors import AssessmentNotFound, LifecycleViolation
from hireassess.logic.events import RESPONSE_DRAFT_SAVED, RESPONSE_SUBMITTED, get_buffered_events
from hireassess.logic.generator import ensure_assessment
from hireassess.logic.lifecycle import STAGE_MISMATCH, autosave, open_assessment, submit_validated
from hireassess.logic.repository_responses import (
    ALREADY_SUBMITTED,
    get_current_response,
    get_draft,
    get_submitted,
    has_submitted,
    list_submitted,
    save_draft,
    submit,
)
from hireassess.models.assessment import Job
from hireassess.models.question import Question, QuestionType
from hireassess.models.response import DraftResponse, SubmittedResponse


def _rows(candidate_id: int, assessment_id: str) -> list:
    with get_engine().connect() as conn:
        return conn.execute(
            sql_text("SELECT submitted_at FROM responses WHERE candidate_id = :c AND assessment_id = :a"),
            {"c": candidate_id, "a": assessment_id},
        ).fetchall()


@pytest.fixture()
def stored_assessment(seeded_bank):
    assessment, _ = ensure_assessment(Job(id=1, title="Frontend Developer"), "applied")
    return assessment


def test_save_draft_replaces_previous_draft():
    first = save_draft(101, "a-1", {"q1": "x"}, job_id=1, stage="applied")
    second = save_draft(101, "a-1", {"q1": "y", "q2": ["A", "B"]}, job_id=1, stage="applied")
    assert first.id != second.id
    draft = get_draft(101, "a-1")
    assert isinstance(draft, DraftResponse)
    assert draft.answers == {"q1": "y", "q2": ["A", "B"]}
    assert draft.job_id == 1 and draft.stage == "applied"
    assert len(_rows(101, "a-1")) == 1
    assert [e["type"] for e in get_buffered_events()] == [RESPONSE_DRAFT_SAVED, RESPONSE_DRAFT_SAVED]


def test_draft_without_saves_is_absent():
    assert get_draft(101, "a-1") is None
    assert get_current_response(101, "a-1") is None
    assert has_submitted(101, "a-1") is False


def test_submit_writes_submission_and_removes_draft():
    save_draft(101, "a-1", {"q1": "draft"})
    submitted = submit(101, "a-1", {"q1": "final", "n": 0}, job_id=1, stage="applied")
    assert isinstance(submitted, SubmittedResponse)
    assert submitted.submitted_at is not None
    assert has_submitted(101, "a-1") is True
    assert get_draft(101, "a-1") is None
    stored = get_submitted(101, "a-1")
    assert stored.id == submitted.id
    assert stored.answers == {"q1": "final", "n": 0}
    assert get_current_response(101, "a-1").id == submitted.id
    assert len(_rows(101, "a-1")) == 1
    assert get_buffered_events()[-1]["type"] == RESPONSE_SUBMITTED


def test_second_submit_is_refused():
    submit(101, "a-1", {"q1": "a"})
    with pytest.raises(LifecycleViolation) as info:
        submit(101, "a-1", {"q1": "b"})
    assert info.value.code == ALREADY_SUBMITTED
    assert get_submitted(101, "a-1").answers == {"q1": "a"}


def test_draft_after_submission_is_refused():
    submit(101, "a-1", {"q1": "a"})
    with pytest.raises(LifecycleViolation):
        save_draft(101, "a-1", {"q1": "late"})
    assert get_draft(101, "a-1") is None


def test_unique_index_guards_racing_submitters(monkeypatch):
    submit(101, "a-1", {"q1": "first"})
    # Pretend the existence check ran before the other submitter committed
    monkeypatch.setattr(repository_responses, "_submitted_exists", lambda conn, c, a: False)
    with pytest.raises(LifecycleViolation) as info:
        submit(101, "a-1", {"q1": "second"})
    assert info.value.code == ALREADY_SUBMITTED
    assert len(_rows(101, "a-1")) == 1


def test_second_live_draft_row_is_rejected_by_index():
    save_draft(101, "a-1", {"q1": "x"})
    stray = DraftResponse(
        id="stray",
        candidate_id=101,
        assessment_id="a-1",
        answers={},
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )
    with pytest.raises(IntegrityError):
        with transaction() as conn:
            repository_responses._insert(conn, stray)
    assert len(_rows(101, "a-1")) == 1


def test_draft_save_retries_after_concurrent_insert(monkeypatch):
    save_draft(101, "a-1", {"q1": "other writer"})
    real_delete = repository_responses._delete_drafts
    calls = []

    def delete_misses_first_time(conn, c, a):
        # first attempt runs as if the other writer committed after our delete
        calls.append(1)
        if len(calls) > 1:
            real_delete(conn, c, a)

    monkeypatch.setattr(repository_responses, "_delete_drafts", delete_misses_first_time)
    saved = save_draft(101, "a-1", {"q1": "mine"})
    assert len(calls) == 2
    assert len(_rows(101, "a-1")) == 1
    assert get_draft(101, "a-1").id == saved.id
    assert get_draft(101, "a-1").answers == {"q1": "mine"}


def test_submissions_are_immutable():
    submitted = submit(101, "a-1", {"q1": "a"})
    with pytest.raises(pydantic.ValidationError):
        submitted.answers = {}


def test_list_submitted_scans_one_assessment():
    submit(101, "a-1", {})
    submit(102, "a-1", {})
    submit(101, "a-2", {})
    save_draft(103, "a-1", {})
    assert sorted(r.candidate_id for r in list_submitted("a-1")) == [101, 102]


def test_open_assessment_for_candidate_stage(directory, stored_assessment):
    opened = open_assessment(directory, 1, 101)
    assert opened.assessment.id == stored_assessment.id
    assert opened.response is None and opened.submitted is False
    autosave(stored_assessment, 101, {"anything": "x"})
    resumed = open_assessment(directory, 1, 101)
    assert isinstance(resumed.response, DraftResponse)


def test_open_assessment_rejects_stage_mismatch(directory, stored_assessment):
    with pytest.raises(LifecycleViolation) as info:
        open_assessment(directory, 1, 101, stage="screen")
    assert info.value.code == STAGE_MISMATCH


def test_stage_mismatch_wins_over_missing_assessment(directory, seeded_bank):
    # no assessment exists at either stage for job 1
    with pytest.raises(LifecycleViolation) as info:
        open_assessment(directory, 1, 101, stage="offer")
    assert info.value.code == STAGE_MISMATCH
    with pytest.raises(AssessmentNotFound):
        open_assessment(directory, 1, 101, stage="applied")


def test_open_assessment_without_assessment_for_stage(directory, stored_assessment):
    # candidate 103 is at "screen", which has no assessment yet
    with pytest.raises(AssessmentNotFound):
        open_assessment(directory, 1, 103)
    with pytest.raises(AssessmentNotFound):
        open_assessment(directory, 1, 999)


def test_submit_validated_returns_issues_without_writing(directory, stored_assessment):
    required = Question(id="must", type=QuestionType.SHORT_TEXT, question="Required", required=True)
    sections = list(stored_assessment.sections)
    sections[0] = sections[0].model_copy(update={"questions": [required, *sections[0].questions]})
    assessment = stored_assessment.model_copy(update={"sections": sections})

    outcome = submit_validated(directory, assessment, 101, {})
    assert outcome.accepted is False
    assert [i.code for i in outcome.issues["must"]] == ["required"]
    assert has_submitted(101, assessment.id) is False

    accepted = submit_validated(directory, assessment, 101, {"must": "done"})
    assert accepted.accepted is True
    assert accepted.response.job_id == 1 and accepted.response.stage == "applied"
    with pytest.raises(LifecycleViolation) as info:
        submit_validated(directory, assessment, 101, {"must": "again"})
    assert info.value.code == ALREADY_SUBMITTED


def test_submit_validated_checks_candidate_stage(directory, stored_assessment):
    with pytest.raises(LifecycleViolation) as info:
        submit_validated(directory, stored_assessment, 103, {})
    assert info.value.code == STAGE_MISMATCH


def test_event_buffer_keeps_only_recent_events():
    from hireassess.logic import events

    for i in range(events.EVENT_BUFFER_LIMIT + 50):
        events.publish(RESPONSE_DRAFT_SAVED, {"n": i})
    save_draft(101, "a-1", {"q1": "x"})
    buffered = get_buffered_events(clear=False)
    assert len(buffered) == events.EVENT_BUFFER_LIMIT
    assert buffered[0]["payload"] == {"n": 51}
    assert buffered[-1]["payload"]["candidate_id"] == 101
