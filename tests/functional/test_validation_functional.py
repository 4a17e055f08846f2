"""Functional tests for conditional visibility and answer validation."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from hireassess.logic.validation import (
    is_empty,
    progress,
    section_is_valid,
    validate_answer,
    validate_assessment,
    validate_section,
)
from hireassess.logic.visibility_rules import should_show, visible_question_ids, visible_questions
from hireassess.models.assessment import Assessment, Section
from hireassess.models.question import Question, QuestionType


def _conditional(operator: str, value, depends_on: str = "parent") -> Question:
    return Question.model_validate(
        {
            "id": "child",
            "type": QuestionType.SHORT_TEXT,
            "question": "Tell us more",
            "conditional": {"dependsOn": depends_on, "condition": operator, "value": value},
        }
    )


def _section() -> Section:
    return Section(
        id=1,
        title="Background",
        questions=[
            Question(id="has_exp", type=QuestionType.SINGLE_CHOICE, question="Prior role?", options=["Yes", "No"], required=True),
            Question.model_validate(
                {
                    "id": "years",
                    "type": QuestionType.NUMERIC,
                    "question": "Years?",
                    "required": True,
                    "validation": {"min": 0, "max": 40},
                    "conditional": {"dependsOnQuestionId": "has_exp", "operator": "equals", "value": "Yes"},
                }
            ),
            Question(id="notes", type=QuestionType.LONG_TEXT, question="Notes", validation={"maxLength": 10}),
        ],
    )


def _assessment() -> Assessment:
    now = datetime.now(timezone.utc)
    return Assessment(id="a-1", job_id=1, stage="applied", title="T", sections=[_section()], created_at=now, updated_at=now)


def test_question_without_conditional_is_always_visible():
    assert should_show(Question(id="q"), {}) is True


@pytest.mark.parametrize(
    "operator,value,answers,expected",
    [
        ("equals", "Yes", {"parent": "Yes"}, True),
        ("equals", "Yes", {"parent": "No"}, False),
        ("equals", "Yes", {}, False),
        ("equals", 3, {"parent": "3"}, False),
        ("not_equals", "Yes", {"parent": "No"}, True),
        ("not_equals", "Yes", {}, True),
        ("not_equals", "Yes", {"parent": "Yes"}, False),
        ("contains", "Python", {"parent": ["Go", "Python"]}, True),
        ("contains", "Python", {"parent": ["Go"]}, False),
        ("contains", "Python", {"parent": "Python"}, False),
        ("greater_than", 1, {}, True),
    ],
)
def test_visibility_operators(operator, value, answers, expected):
    assert should_show(_conditional(operator, value), answers) is expected


def test_visibility_is_single_level():
    # grandchild depends on child's answer even though child itself is hidden
    grandchild = _conditional("equals", "x", depends_on="child")
    hidden_child = _conditional("equals", "Yes")
    answers = {"parent": "No", "child": "x"}
    assert should_show(hidden_child, answers) is False
    assert should_show(grandchild, answers) is True


def test_visible_questions_keep_section_order():
    section = _section()
    assert [q.id for q in visible_questions(section, {"has_exp": "Yes"})] == ["has_exp", "years", "notes"]
    assert [q.id for q in visible_questions(section, {"has_exp": "No"})] == ["has_exp", "notes"]
    assert visible_question_ids(section.questions, {}) == {"has_exp", "notes"}


@pytest.mark.parametrize("value", [None, "", []])
def test_empty_values_fail_required(value):
    q = Question(id="q", type=QuestionType.SHORT_TEXT, required=True)
    issues = validate_answer(q, value)
    assert [i.code for i in issues] == ["required"]
    assert issues[0].message == "This field is required"


def test_zero_is_an_answer_not_empty():
    assert is_empty(0) is False
    q = Question(id="q", type=QuestionType.NUMERIC, required=True, validation={"min": 0, "max": 5})
    assert validate_answer(q, 0) == []


def test_empty_optional_field_has_no_issues():
    q = Question(id="q", type=QuestionType.NUMERIC, validation={"min": 1})
    assert validate_answer(q, "") == []


def test_max_length_applies_to_text():
    q = Question(id="q", type=QuestionType.SHORT_TEXT, validation={"max_length": 5})
    issues = validate_answer(q, "toolong")
    assert [(i.code, i.message) for i in issues] == [("max_length", "Maximum 5 characters allowed")]
    assert validate_answer(q, "short") == []


@pytest.mark.parametrize(
    "value,codes,message",
    [
        ("abc", ["not_a_number"], "Must be a valid number"),
        (True, ["not_a_number"], "Must be a valid number"),
        (float("nan"), ["not_a_number"], "Must be a valid number"),
        (-1, ["below_min"], "Minimum value is 0"),
        ("101", ["above_max"], "Maximum value is 100"),
        (" 42 ", [], None),
        (99.5, [], None),
        ("inf", ["not_a_number"], "Must be a valid number"),
        ("-Infinity", ["not_a_number"], "Must be a valid number"),
        ("nan", ["not_a_number"], "Must be a valid number"),
        ("1_0", ["not_a_number"], "Must be a valid number"),
        ("1e999", ["not_a_number"], "Must be a valid number"),
        (float("inf"), ["not_a_number"], "Must be a valid number"),
        ("-.5", ["below_min"], "Minimum value is 0"),
        ("1e2", [], None),
    ],
)
def test_numeric_rules(value, codes, message):
    q = Question(id="n", type=QuestionType.NUMERIC, validation={"min": 0, "max": 100})
    issues = validate_answer(q, value)
    assert [i.code for i in issues] == codes
    if message:
        assert issues[0].message == message
        assert issues[0].question_id == "n"


def test_file_upload_extension_check():
    q = Question(id="cv", type=QuestionType.FILE_UPLOAD, validation={"allowedTypes": [".pdf", ".docx"]})
    assert validate_answer(q, "Resume.PDF") == []
    assert [i.code for i in validate_answer(q, "resume.exe")] == ["file_type"]


def test_hidden_required_question_does_not_block():
    section = _section()
    assert validate_section(section, {"has_exp": "No"}) == {}
    assert section_is_valid(section, {"has_exp": "No"}) is True


def test_visible_required_question_blocks():
    issues = validate_section(_section(), {"has_exp": "Yes", "notes": "way too long here"})
    assert sorted(issues) == ["notes", "years"]
    assert [i.code for i in issues["years"]] == ["required"]
    assert [i.code for i in issues["notes"]] == ["max_length"]


def test_validate_assessment_spans_sections():
    assessment = _assessment()
    assert sorted(validate_assessment(assessment, {})) == ["has_exp"]
    assert validate_assessment(assessment, {"has_exp": "Yes", "years": 4}) == {}


def test_progress_counts_only_visible_questions():
    assessment = _assessment()
    assert progress(assessment, {}) == 0
    # two visible (has_exp, notes), one answered
    assert progress(assessment, {"has_exp": "No"}) == 50
    # three visible, two answered -> 66.67 rounds to 67
    assert progress(assessment, {"has_exp": "Yes", "years": 3}) == 67


def test_numeric_out_of_range_string_gives_single_issue():
    q = Question(id="n", type=QuestionType.NUMERIC, validation={"min": 0, "max": 100})
    assert [i.code for i in validate_answer(q, "150")] == ["above_max"]
    assert [i.code for i in validate_answer(q, "abc")] == ["not_a_number"]


@pytest.mark.parametrize("value", ["inf", "-infinity", "1_000", "0x10", "1,000"])
def test_unbounded_numeric_rejects_non_decimal_text(value):
    q = Question(id="n", type=QuestionType.NUMERIC)
    assert [i.code for i in validate_answer(q, value)] == ["not_a_number"]
