"""Administrative operations: reseeding the bank and backfilling assessments."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from hireassess.config import AppConfig
from hireassess.http.dependencies import get_app_config, get_directory
from hireassess.logic.directory import JobDirectory
from hireassess.logic.generator import backfill_assessments
from hireassess.logic.repository_questions import seed_question_bank

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/api/v1/admin/question-bank/reseed",
    summary="Replace the question bank with the static catalog",
    operation_id="reseedQuestionBank",
)
def reseed_question_bank():
    count = seed_question_bank()
    return {"count": count}


@router.post(
    "/api/v1/admin/assessments/backfill",
    summary="Ensure every known job has an assessment for a stage",
    operation_id="backfillAssessments",
)
def backfill(
    stage: Optional[str] = Query(None),
    directory: JobDirectory = Depends(get_directory),
    config: AppConfig = Depends(get_app_config),
):
    target_stage = stage or config.generation.default_stage
    results = backfill_assessments(directory.list_jobs(), target_stage, config.generation)
    return {
        "stage": target_stage,
        "created": [a.id for a, created in results if created],
        "existing": [a.id for a, created in results if not created],
    }


__all__ = ["router"]
