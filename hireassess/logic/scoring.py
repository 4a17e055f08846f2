"""Scoring of responses against an assessment's answer key.

Answer keys are letters indexing into `options` ("A" is the first option);
candidates answer with option texts. This is the only place that resolves
letters to texts, so the HTTP layer and ranking always agree on a score.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Optional, Union

from hireassess.logic.errors import LifecycleViolation
from hireassess.models.assessment import Assessment
from hireassess.models.question import Question, QuestionType
from hireassess.models.response import DraftResponse, SubmittedResponse
from hireassess.models.results import QuestionGrade, ScoreResult

logger = logging.getLogger(__name__)

_UNGRADED_KEYWORDS = ("experience", "resume")


def is_gradable(question: Question) -> bool:
    """True when `question` counts towards the score.

    File uploads and questions whose text mentions experience or a resume
    are never graded, nor is anything missing an answer key or options.
    """
    if question.type == QuestionType.FILE_UPLOAD:
        return False
    text = (question.question or "").lower()
    if any(word in text for word in _UNGRADED_KEYWORDS):
        return False
    if question.correct_answer is None or question.correct_answer == "":
        return False
    return question.options is not None


def _option_text(options: List[str], letter: Any) -> Optional[str]:
    if not isinstance(letter, str) or not letter:
        return None
    index = ord(letter[0]) - ord("A")
    if 0 <= index < len(options):
        return options[index]
    return None


def expected_texts(question: Question) -> List[str]:
    """Resolve the answer key to option texts, dropping out-of-range letters."""
    key = question.correct_answer
    letters = key if isinstance(key, list) else [key]
    texts = (_option_text(question.options or [], letter) for letter in letters)
    return [t for t in texts if t is not None]


def grade_question(question: Question, answer: Any) -> QuestionGrade:
    if not is_gradable(question):
        return QuestionGrade(question_id=question.id, outcome="not_graded")
    expected = expected_texts(question)
    if question.type == QuestionType.MULTI_CHOICE or isinstance(question.correct_answer, list):
        ok = isinstance(answer, list) and sorted(expected) == sorted(str(a) for a in answer)
    else:
        # A key letter outside the options has no text to match
        ok = bool(expected) and answer == expected[0]
    return QuestionGrade(question_id=question.id, outcome="correct" if ok else "wrong", expected=expected)


def percentage_of(correct: int, total: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when nothing was graded."""
    if total <= 0:
        return 0
    return math.floor(correct / total * 100 + 0.5)


def score_answers(assessment: Assessment, answers: Mapping[str, Any]) -> ScoreResult:
    correct = wrong = 0
    for question in assessment.iter_questions():
        grade = grade_question(question, answers.get(question.id))
        if grade.outcome == "correct":
            correct += 1
        elif grade.outcome == "wrong":
            wrong += 1
    total = correct + wrong
    return ScoreResult(correct=correct, wrong=wrong, total=total, percentage=percentage_of(correct, total))


def score_response(
    assessment: Assessment, response: Union[DraftResponse, SubmittedResponse]
) -> ScoreResult:
    """Score `response`; it must belong to `assessment`."""
    if assessment.id is not None and response.assessment_id != assessment.id:
        raise LifecycleViolation(
            f"response {response.id} belongs to assessment {response.assessment_id}, not {assessment.id}"
        )
    result = score_answers(assessment, response.answers)
    logger.debug(
        "response_scored response_id=%s correct=%s total=%s percentage=%s",
        response.id,
        result.correct,
        result.total,
        result.percentage,
    )
    return result


__all__ = [
    "expected_texts",
    "grade_question",
    "is_gradable",
    "percentage_of",
    "score_answers",
    "score_response",
]
