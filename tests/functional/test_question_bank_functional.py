"""Functional tests for the question bank repository and catalog."""

from __future__ import annotations

from hireassess.logic.events import QUESTION_BANK_RESEEDED, get_buffered_events
from hireassess.logic.question_catalog import CATALOG, GENERAL_TAG, catalog_questions
from hireassess.logic.repository_questions import (
    count_questions,
    get_question,
    questions_by_category,
    questions_by_tags,
    seed_question_bank,
)
from hireassess.models.question import Category, Question, QuestionType


def test_catalog_ids_are_unique_and_keys_in_range():
    questions = catalog_questions()
    assert len({q.id for q in questions}) == len(questions)
    for q in questions:
        keys = q.correct_answer if isinstance(q.correct_answer, list) else [q.correct_answer]
        for letter in keys:
            assert 0 <= ord(letter) - ord("A") < len(q.options), q.id


def test_catalog_keeps_multi_choice_leadership_questions():
    multi = [q for q in catalog_questions() if q.category == Category.MANAGEMENT and q.type == QuestionType.MULTI_CHOICE]
    assert [q.id for q in multi] == ["mgmt-013", "mgmt-014"]
    assert all(q.correct_answer == ["A", "C", "D"] for q in multi)


def test_seed_stores_whole_catalog_and_publishes_event():
    stored = seed_question_bank()
    assert stored == len(CATALOG) == count_questions()
    events = get_buffered_events()
    assert [e["type"] for e in events] == [QUESTION_BANK_RESEEDED]
    assert events[0]["payload"] == {"count": len(CATALOG)}


def test_reseed_replaces_rather_than_appends(seeded_bank):
    seed_question_bank()
    assert count_questions() == seeded_bank


def test_seed_with_explicit_questions_replaces_catalog(seeded_bank):
    custom = [Question(id="x-1", category=Category.APTITUDE, question="Only one", options=["a"], correct_answer="A")]
    assert seed_question_bank(custom) == 1
    assert [q.id for q in questions_by_category(Category.APTITUDE)] == ["x-1"]
    assert questions_by_category(Category.MANAGEMENT) == []


def test_questions_by_category_follows_catalog_order(seeded_bank):
    expected = [e["id"] for e in CATALOG if e["category"] == Category.MANAGEMENT]
    assert [q.id for q in questions_by_category(Category.MANAGEMENT)] == expected


def test_questions_by_tags_matches_any_tag_without_duplicates(seeded_bank):
    q = Question(
        id="dual",
        category=Category.TECHNICAL,
        tags=["Frontend Developer", GENERAL_TAG],
        question="Tagged twice",
        options=["x", "y"],
        correct_answer="B",
    )
    seed_question_bank([*catalog_questions(), q])
    found = [x.id for x in questions_by_tags(["Frontend Developer", GENERAL_TAG])]
    assert found.count("dual") == 1
    assert found[0] == "fe-001"
    assert found[-1] == "dual"
    assert questions_by_tags([]) == []
    assert questions_by_tags(["Nonexistent Role"]) == []


def test_get_question_round_trips_payload(seeded_bank):
    q = get_question("mgmt-013")
    assert q is not None
    assert q.type == QuestionType.MULTI_CHOICE
    assert q.options == ["Empathy", "Micromanagement", "Clear communication", "Adaptability"]
    assert get_question("missing") is None
