"""Conditional visibility evaluation.

A question with a `conditional` is shown only when the answer to the
question it depends on satisfies the operator. Rules are single-level: the
dependency's own visibility is not consulted.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Set
import logging

from hireassess.models.assessment import Section
from hireassess.models.question import ConditionOperator, Question

logger = logging.getLogger(__name__)


def should_show(question: Question, answers: Mapping[str, Any]) -> bool:
    """Return True if `question` is visible given the current `answers`.

    - No conditional: always visible.
    - equals / not_equals: strict comparison with the dependency's answer
      (a missing answer is None).
    - contains: the dependency's answer is a list that includes the value.
    - Unknown operators leave the question visible.
    """
    cond = question.conditional
    if cond is None:
        return True
    dependent = answers.get(cond.depends_on_question_id)
    if cond.operator == ConditionOperator.EQUALS:
        return dependent == cond.value
    if cond.operator == ConditionOperator.NOT_EQUALS:
        return dependent != cond.value
    if cond.operator == ConditionOperator.CONTAINS:
        return isinstance(dependent, list) and cond.value in dependent
    logger.warning("unknown_condition_operator question_id=%s operator=%s", question.id, cond.operator)
    return True


def visible_questions(section: Section, answers: Mapping[str, Any]) -> List[Question]:
    return [q for q in section.questions if should_show(q, answers)]


def visible_question_ids(questions: Iterable[Question], answers: Mapping[str, Any]) -> Set[str]:
    return {q.id for q in questions if should_show(q, answers)}


__all__ = ["should_show", "visible_question_ids", "visible_questions"]
