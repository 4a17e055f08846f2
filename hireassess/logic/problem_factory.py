"""Centralised construction of problem+json payloads.

Route modules raise or return these dicts instead of embedding status codes
and error codes inline.
"""

from __future__ import annotations

from typing import Dict, List, Mapping
import logging

from hireassess.logic.errors import AssessmentError, AssessmentNotFound, GenerationError, LifecycleViolation
from hireassess.models.results import ValidationIssue


logger = logging.getLogger(__name__)


def _problem(title: str, status: int, detail: str, code: str) -> Dict[str, object]:
    problem: Dict[str, object] = {
        "title": title,
        "status": status,
        "detail": detail,
        "code": code,
    }
    logger.info("error_handler.handle code=%s status=%s", code, status)
    return problem


def problem_not_found(detail: str, code: str = "ASSESSMENT_NOT_FOUND") -> Dict[str, object]:
    return _problem("Not Found", 404, detail, code)


def problem_validation_failed(issues: Mapping[str, List[ValidationIssue]]) -> Dict[str, object]:
    """Return a 422 problem listing every issue per question id."""
    problem = _problem("Unprocessable Entity", 422, "One or more answers are invalid", "VALIDATION_FAILED")
    problem["errors"] = {qid: [i.model_dump() for i in items] for qid, items in issues.items()}
    return problem


def problem_for_error(exc: AssessmentError) -> Dict[str, object]:
    """Map an engine exception onto a problem payload by type."""
    if isinstance(exc, AssessmentNotFound):
        return problem_not_found(str(exc), exc.code)
    if isinstance(exc, LifecycleViolation):
        return _problem("Conflict", 409, str(exc), exc.code)
    if isinstance(exc, GenerationError):
        return _problem("Unprocessable Entity", 422, str(exc), exc.code)
    return _problem("Bad Request", 400, str(exc), exc.code)


__all__ = ["problem_for_error", "problem_not_found", "problem_validation_failed"]
