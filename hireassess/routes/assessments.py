"""Assessment creation and retrieval endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from hireassess.config import AppConfig
from hireassess.http.dependencies import get_app_config, get_directory, require_assessment
from hireassess.http.problem import problem_response
from hireassess.logic.directory import JobDirectory
from hireassess.logic.generator import ensure_assessment
from hireassess.logic.problem_factory import problem_not_found

router = APIRouter()
logger = logging.getLogger(__name__)


@router.put(
    "/api/v1/jobs/{job_id}/assessments/{stage}",
    summary="Get or create the assessment for a job and stage",
    operation_id="ensureAssessment",
)
def put_assessment(
    job_id: int,
    stage: str,
    directory: JobDirectory = Depends(get_directory),
    config: AppConfig = Depends(get_app_config),
):
    job = directory.get_job(job_id)
    if job is None:
        return problem_response(problem_not_found(f"job {job_id} not found", "JOB_NOT_FOUND"))
    assessment, created = ensure_assessment(job, stage, config.generation)
    return JSONResponse(assessment.model_dump(mode="json"), status_code=201 if created else 200)


@router.get(
    "/api/v1/assessments/{assessment_id}",
    summary="Get an assessment with its sections and questions",
    operation_id="getAssessment",
)
def get_assessment(assessment_id: str):
    return require_assessment(assessment_id).model_dump(mode="json")


__all__ = ["router"]
