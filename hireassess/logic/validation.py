"""Answer validation for assessment responses.

Validation never raises: each check returns a list of `ValidationIssue`
records carrying a stable code (`required`, `max_length`, `not_a_number`,
`below_min`, `above_max`, `file_type`) and a human-readable message. Only
visible questions are validated, so answers hidden by a conditional cannot
block a submission.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, List, Mapping, Optional

from hireassess.logic.visibility_rules import visible_questions
from hireassess.models.assessment import Assessment, Section
from hireassess.models.question import Question, QuestionType
from hireassess.models.results import ValidationIssue

logger = logging.getLogger(__name__)

REQUIRED = "required"
MAX_LENGTH = "max_length"
NOT_A_NUMBER = "not_a_number"
BELOW_MIN = "below_min"
ABOVE_MAX = "above_max"
FILE_TYPE = "file_type"

_NUMBER_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def is_empty(value: Any) -> bool:
    """None, "" and [] count as unanswered; 0 and False do not."""
    if value is None:
        return True
    if isinstance(value, (str, list)) and len(value) == 0:
        return True
    return False


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMBER_RE.fullmatch(text):
            return None
        num = float(text)
    else:
        return None
    return num if math.isfinite(num) else None


def _fmt(bound: float) -> str:
    return f"{bound:g}"


def validate_answer(question: Question, value: Any) -> List[ValidationIssue]:
    """Return every issue with `value` as an answer to `question`."""
    issues: List[ValidationIssue] = []

    def _issue(code: str, message: str) -> None:
        issues.append(ValidationIssue(question_id=question.id, code=code, message=message))

    if is_empty(value):
        if question.required:
            _issue(REQUIRED, "This field is required")
        return issues

    rules = question.validation
    if rules.max_length is not None and isinstance(value, (str, list)) and len(value) > rules.max_length:
        _issue(MAX_LENGTH, f"Maximum {rules.max_length} characters allowed")

    if question.type == QuestionType.NUMERIC:
        num = _as_number(value)
        if num is None:
            _issue(NOT_A_NUMBER, "Must be a valid number")
        else:
            if rules.min is not None and num < rules.min:
                _issue(BELOW_MIN, f"Minimum value is {_fmt(rules.min)}")
            if rules.max is not None and num > rules.max:
                _issue(ABOVE_MAX, f"Maximum value is {_fmt(rules.max)}")

    if question.type == QuestionType.FILE_UPLOAD and rules.allowed_types:
        name = str(value).lower()
        if not any(name.endswith(ext.lower()) for ext in rules.allowed_types):
            _issue(FILE_TYPE, f"File type must be one of {', '.join(rules.allowed_types)}")

    return issues


def validate_section(section: Section, answers: Mapping[str, Any]) -> Dict[str, List[ValidationIssue]]:
    """Map question id to its issues, for visible questions that have any."""
    result: Dict[str, List[ValidationIssue]] = {}
    for q in visible_questions(section, answers):
        issues = validate_answer(q, answers.get(q.id))
        if issues:
            result[q.id] = issues
    return result


def section_is_valid(section: Section, answers: Mapping[str, Any]) -> bool:
    return not validate_section(section, answers)


def validate_assessment(assessment: Assessment, answers: Mapping[str, Any]) -> Dict[str, List[ValidationIssue]]:
    result: Dict[str, List[ValidationIssue]] = {}
    for section in assessment.sections:
        result.update(validate_section(section, answers))
    if result:
        logger.info(
            "assessment_validation_failed assessment_id=%s questions=%s",
            assessment.id,
            sorted(result),
        )
    return result


def progress(assessment: Assessment, answers: Mapping[str, Any]) -> int:
    """Percentage (0-100) of visible questions that have a non-empty answer."""
    visible = [q for s in assessment.sections for q in visible_questions(s, answers)]
    if not visible:
        return 0
    answered = sum(1 for q in visible if not is_empty(answers.get(q.id)))
    return math.floor(answered / len(visible) * 100 + 0.5)


__all__ = [
    "ABOVE_MAX",
    "BELOW_MIN",
    "FILE_TYPE",
    "MAX_LENGTH",
    "NOT_A_NUMBER",
    "REQUIRED",
    "is_empty",
    "progress",
    "section_is_valid",
    "validate_answer",
    "validate_assessment",
    "validate_section",
]
