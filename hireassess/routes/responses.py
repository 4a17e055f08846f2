"""Candidate response endpoints: autosave, submission and scoring."""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from hireassess.http.dependencies import get_directory, require_assessment
from hireassess.http.problem import problem_response
from hireassess.logic.directory import JobDirectory
from hireassess.logic.errors import AssessmentNotFound
from hireassess.logic.lifecycle import autosave, check_stage, submit_validated
from hireassess.logic.problem_factory import problem_not_found, problem_validation_failed
from hireassess.logic.repository_responses import get_draft, get_submitted
from hireassess.logic.scoring import grade_question, score_response
from hireassess.logic.validation import progress
from hireassess.models.question import AnswerValue

router = APIRouter()
logger = logging.getLogger(__name__)

_BASE = "/api/v1/assessments/{assessment_id}/candidates/{candidate_id}"


class AnswersPayload(BaseModel):
    answers: Dict[str, AnswerValue] = Field(default_factory=dict)


@router.get(_BASE + "/draft", summary="Get the candidate's current draft", operation_id="getDraft")
def read_draft(assessment_id: str, candidate_id: int):
    assessment = require_assessment(assessment_id)
    draft = get_draft(candidate_id, assessment_id)
    if draft is None:
        return problem_response(problem_not_found("no draft saved", "DRAFT_NOT_FOUND"))
    body = draft.model_dump(mode="json")
    body["progress"] = progress(assessment, draft.answers)
    return body


@router.put(_BASE + "/draft", summary="Autosave the candidate's answers", operation_id="saveDraft")
def write_draft(
    assessment_id: str,
    candidate_id: int,
    payload: AnswersPayload,
    directory: JobDirectory = Depends(get_directory),
):
    assessment = require_assessment(assessment_id)
    candidate = directory.get_candidate(candidate_id)
    if candidate is None:
        raise AssessmentNotFound(f"candidate {candidate_id} not found")
    check_stage(assessment, candidate)
    draft = autosave(assessment, candidate_id, payload.answers)
    body = draft.model_dump(mode="json")
    body["progress"] = progress(assessment, draft.answers)
    return body


@router.post(_BASE + "/submit", summary="Validate and submit final answers", operation_id="submitResponse")
def submit_response(
    assessment_id: str,
    candidate_id: int,
    payload: AnswersPayload,
    directory: JobDirectory = Depends(get_directory),
):
    assessment = require_assessment(assessment_id)
    outcome = submit_validated(directory, assessment, candidate_id, payload.answers)
    if not outcome.accepted:
        return problem_response(problem_validation_failed(outcome.issues))
    return JSONResponse(outcome.response.model_dump(mode="json"), status_code=201)


@router.get(_BASE + "/submission", summary="Get the candidate's submission", operation_id="getSubmission")
def read_submission(assessment_id: str, candidate_id: int):
    require_assessment(assessment_id)
    submitted = get_submitted(candidate_id, assessment_id)
    if submitted is None:
        return problem_response(problem_not_found("no submission", "SUBMISSION_NOT_FOUND"))
    return submitted.model_dump(mode="json")


@router.get(_BASE + "/score", summary="Score the candidate's submission", operation_id="getScore")
def read_score(assessment_id: str, candidate_id: int):
    assessment = require_assessment(assessment_id)
    submitted = get_submitted(candidate_id, assessment_id)
    if submitted is None:
        return problem_response(problem_not_found("no submission", "SUBMISSION_NOT_FOUND"))
    score = score_response(assessment, submitted)
    grades = [grade_question(q, submitted.answers.get(q.id)) for q in assessment.iter_questions()]
    return {
        "response_id": submitted.id,
        "score": score.model_dump(),
        "grades": [g.model_dump() for g in grades],
    }


__all__ = ["router"]
