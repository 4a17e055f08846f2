"""Assessment generation.

An assessment is a pure function of the job, the stage and the question
bank: three category pools are shuffled with seeds derived from
`(job.id, stage)` and truncated to the configured counts. `ensure_assessment`
adds the at-most-once-per-(job, stage) guarantee on top.
"""

from __future__ import annotations

import logging
import string
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError

from hireassess.config import GenerationConfig, load_config
from hireassess.logic import events
from hireassess.logic.errors import GenerationError
from hireassess.logic.question_catalog import GENERAL_TAG
from hireassess.logic.repository_assessments import get_assessment_by_job_stage, insert_assessment
from hireassess.logic.repository_questions import (
    count_questions,
    questions_by_category,
    questions_by_tags,
    seed_question_bank,
)
from hireassess.logic.shuffle import seeded_shuffle
from hireassess.models.assessment import Assessment, Job, Section
from hireassess.models.question import Category, Question, QuestionType, QuestionValidation

logger = logging.getLogger(__name__)

APTITUDE_SECTION = (1, "Aptitude")
TECHNICAL_SECTION = (2, "Technical")
MANAGEMENT_SECTION = (3, "Management")


def derive_seed(job_id: int, stage: str) -> int:
    return int(job_id) * 1000 + len(stage)


def _merge_unique(*groups: Iterable[Question]) -> List[Question]:
    seen: dict[str, Question] = {}
    for group in groups:
        for q in group:
            seen.setdefault(q.id, q)
    return list(seen.values())


def _technical_pool(role: str, threshold: int) -> List[Question]:
    """Role-tagged technical questions, topped up with general ones when thin."""
    role_questions = [q for q in questions_by_tags([role]) if q.category == Category.TECHNICAL]
    if len(role_questions) >= threshold:
        return role_questions
    general = [q for q in questions_by_tags([GENERAL_TAG]) if q.category == Category.TECHNICAL]
    merged = _merge_unique(role_questions, general)
    logger.info(
        "technical_pool_backfilled role=%s role_count=%s merged_count=%s",
        role,
        len(role_questions),
        len(merged),
    )
    return merged


def _validate_job(job: Job | None, stage: str) -> None:
    if job is None:
        raise GenerationError("job is required")
    if not isinstance(job.id, int) or job.id < 0:
        raise GenerationError(f"job id must be a non-negative integer, got {job.id!r}")
    if not (job.title or "").strip():
        raise GenerationError(f"job {job.id} has no title")
    if not (stage or "").strip():
        raise GenerationError("stage must be a non-empty string")


def generate_assessment(job: Job, stage: str, config: Optional[GenerationConfig] = None) -> Assessment:
    """Build (but do not persist) the assessment for `job` at `stage`.

    An empty question bank is seeded from the catalog first. Categories with
    no questions produce empty sections rather than an error.
    """
    _validate_job(job, stage)
    cfg = config or load_config().generation
    if count_questions() == 0:
        logger.info("question_bank_empty seeding_from_catalog")
        seed_question_bank()

    seed = derive_seed(job.id, stage)
    aptitude = seeded_shuffle(questions_by_category(Category.APTITUDE), seed)[: cfg.aptitude_count]
    technical = seeded_shuffle(
        _technical_pool(job.title, cfg.technical_backfill_threshold), seed + 1
    )[: cfg.technical_count]
    management = seeded_shuffle(questions_by_category(Category.MANAGEMENT), seed + 2)[: cfg.management_count]

    now = datetime.now(timezone.utc)
    sections = [
        Section(id=sid, title=title, questions=questions)
        for (sid, title), questions in (
            (APTITUDE_SECTION, aptitude),
            (TECHNICAL_SECTION, technical),
            (MANAGEMENT_SECTION, management),
        )
    ]
    assessment = Assessment(
        job_id=job.id,
        stage=stage,
        title=f"{job.title} Assessment",
        sections=sections,
        created_at=now,
        updated_at=now,
    )
    logger.info(
        "assessment_generated job_id=%s stage=%s seed=%s counts=%s/%s/%s",
        job.id,
        stage,
        seed,
        len(aptitude),
        len(technical),
        len(management),
    )
    return assessment


def ensure_assessment(
    job: Job, stage: str, config: Optional[GenerationConfig] = None
) -> Tuple[Assessment, bool]:
    """Return the stored assessment for `(job.id, stage)`, creating it if missing.

    The second element is True only when this call created the row. A
    concurrent creator that wins the unique constraint is re-read instead of
    surfacing the conflict.
    """
    _validate_job(job, stage)
    existing = get_assessment_by_job_stage(job.id, stage)
    if existing is not None:
        return existing, False
    generated = generate_assessment(job, stage, config)
    try:
        stored = insert_assessment(generated)
    except IntegrityError:
        winner = get_assessment_by_job_stage(job.id, stage)
        if winner is None:
            raise
        logger.info("assessment_create_race_lost job_id=%s stage=%s", job.id, stage)
        return winner, False
    events.publish(
        events.ASSESSMENT_GENERATED,
        {"assessment_id": stored.id, "job_id": stored.job_id, "stage": stored.stage},
    )
    return stored, True


def backfill_assessments(
    jobs: Iterable[Job], stage: str, config: Optional[GenerationConfig] = None
) -> List[Tuple[Assessment, bool]]:
    """Ensure every job in `jobs` has an assessment for `stage`."""
    results = [ensure_assessment(job, stage, config) for job in jobs]
    created = sum(1 for _, was_created in results if was_created)
    logger.info("assessments_backfilled stage=%s jobs=%s created=%s", stage, len(results), created)
    return results


def new_question(question_type: str, question_id: str) -> Question:
    """Return a question template carrying the type's default constraints.

    Numeric templates start as a years-of-experience prompt, which keeps them
    out of scoring until the text is changed.
    """
    if question_type not in QuestionType.ALL:
        raise GenerationError(f"unknown question type: {question_type}")
    template = Question(id=question_id, type=question_type)
    if template.is_choice:
        return template.model_copy(update={"options": ["Option 1", "Option 2"]})
    update: dict = {}
    if question_type == QuestionType.SHORT_TEXT:
        update["validation"] = QuestionValidation(max_length=100)
    elif question_type == QuestionType.LONG_TEXT:
        update["validation"] = QuestionValidation(max_length=500)
    elif question_type == QuestionType.NUMERIC:
        update["question"] = "How many years of experience do you have?"
        update["validation"] = QuestionValidation(min=0, max=100)
    elif question_type == QuestionType.FILE_UPLOAD:
        update["validation"] = QuestionValidation(allowed_types=[".pdf", ".doc", ".docx"])
    return template.model_copy(update=update)


def _key_letters(key: str | Sequence[str]) -> List[str]:
    return [key] if isinstance(key, str) else list(key)


def check_assessment_integrity(assessment: Assessment) -> List[str]:
    """Return human-readable problems with answer keys and conditionals.

    Flags answer-key letters that fall outside a question's options and
    conditionals that depend on a question not appearing earlier in the
    assessment. An empty list means the assessment is consistent.
    """
    problems: List[str] = []
    seen: set[str] = set()
    for q in assessment.iter_questions():
        if q.correct_answer is not None and q.options is not None:
            for letter in _key_letters(q.correct_answer):
                idx = string.ascii_uppercase.find(letter) if len(letter) == 1 else -1
                if idx < 0 or idx >= len(q.options):
                    problems.append(f"{q.id}: answer key {letter!r} is outside its {len(q.options)} options")
        if q.conditional is not None and q.conditional.depends_on_question_id not in seen:
            problems.append(
                f"{q.id}: depends on {q.conditional.depends_on_question_id!r} which does not appear earlier"
            )
        seen.add(q.id)
    return problems


__all__ = [
    "backfill_assessments",
    "check_assessment_integrity",
    "derive_seed",
    "ensure_assessment",
    "generate_assessment",
    "new_question",
]
