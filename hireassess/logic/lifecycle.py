"""Candidate-facing flow over the response repository.

Resolves the candidate and the assessment for their current stage, then
drives autosave and validated submission. Stage mismatches and repeat
submissions raise `LifecycleViolation`; validation problems are returned.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel

from hireassess.logic.directory import JobDirectory
from hireassess.logic.errors import AssessmentNotFound, LifecycleViolation
from hireassess.logic.repository_assessments import get_assessment_by_job_stage
from hireassess.logic.repository_responses import (
    ALREADY_SUBMITTED,
    get_current_response,
    has_submitted,
    save_draft,
    submit,
)
from hireassess.logic.validation import progress, validate_assessment
from hireassess.models.assessment import Assessment, Candidate
from hireassess.models.response import DraftResponse, SubmittedResponse
from hireassess.models.results import ValidationIssue

logger = logging.getLogger(__name__)

STAGE_MISMATCH = "STAGE_MISMATCH"


class OpenedAssessment(BaseModel):
    assessment: Assessment
    candidate: Candidate
    response: Optional[Union[SubmittedResponse, DraftResponse]] = None
    submitted: bool = False
    progress: int = 0


class SubmissionOutcome(BaseModel):
    response: Optional[SubmittedResponse] = None
    issues: Dict[str, List[ValidationIssue]] = {}

    @property
    def accepted(self) -> bool:
        return self.response is not None


def _candidate(directory: JobDirectory, candidate_id: int) -> Candidate:
    candidate = directory.get_candidate(candidate_id)
    if candidate is None:
        raise AssessmentNotFound(f"candidate {candidate_id} not found")
    return candidate


def check_stage(assessment: Assessment, candidate: Candidate) -> None:
    if candidate.stage != assessment.stage:
        raise LifecycleViolation(
            f"candidate {candidate.id} is at stage {candidate.stage!r}, assessment is for {assessment.stage!r}",
            code=STAGE_MISMATCH,
        )


def open_assessment(
    directory: JobDirectory,
    job_id: int,
    candidate_id: int,
    stage: Optional[str] = None,
) -> OpenedAssessment:
    """Load the assessment a candidate should take for `job_id`.

    `stage` defaults to the candidate's current stage; an explicit stage that
    differs from it is a mismatch. The candidate's submission, or else their
    draft, is attached so the form can resume.
    """
    candidate = _candidate(directory, candidate_id)
    wanted = stage or candidate.stage
    if wanted != candidate.stage:
        raise LifecycleViolation(
            f"candidate {candidate.id} is at stage {candidate.stage!r}, not {wanted!r}",
            code=STAGE_MISMATCH,
        )
    assessment = get_assessment_by_job_stage(job_id, wanted)
    if assessment is None or assessment.id is None:
        raise AssessmentNotFound(f"no assessment for job {job_id} at stage {wanted!r}")
    check_stage(assessment, candidate)
    current = get_current_response(candidate_id, assessment.id)
    answers = current.answers if current is not None else {}
    return OpenedAssessment(
        assessment=assessment,
        candidate=candidate,
        response=current,
        submitted=isinstance(current, SubmittedResponse),
        progress=progress(assessment, answers),
    )


def autosave(assessment: Assessment, candidate_id: int, answers: Mapping[str, Any]) -> DraftResponse:
    if assessment.id is None:
        raise AssessmentNotFound("assessment has not been stored")
    return save_draft(candidate_id, assessment.id, answers, job_id=assessment.job_id, stage=assessment.stage)


def submit_validated(
    directory: JobDirectory,
    assessment: Assessment,
    candidate_id: int,
    answers: Mapping[str, Any],
) -> SubmissionOutcome:
    """Validate every visible answer, then submit when nothing is wrong.

    Returns the issues without writing anything when validation fails.
    """
    if assessment.id is None:
        raise AssessmentNotFound("assessment has not been stored")
    check_stage(assessment, _candidate(directory, candidate_id))
    if has_submitted(candidate_id, assessment.id):
        raise LifecycleViolation(
            f"candidate {candidate_id} already submitted assessment {assessment.id}",
            code=ALREADY_SUBMITTED,
        )
    issues = validate_assessment(assessment, answers)
    if issues:
        return SubmissionOutcome(issues=issues)
    response = submit(candidate_id, assessment.id, answers, job_id=assessment.job_id, stage=assessment.stage)
    return SubmissionOutcome(response=response)


__all__ = [
    "OpenedAssessment",
    "STAGE_MISMATCH",
    "SubmissionOutcome",
    "autosave",
    "check_stage",
    "open_assessment",
    "submit_validated",
]
