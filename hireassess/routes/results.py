"""Ranking endpoint for recruiters."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from hireassess.config import AppConfig
from hireassess.http.dependencies import get_app_config, get_directory
from hireassess.logic.directory import JobDirectory
from hireassess.logic.ranking import rank_job

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/api/v1/jobs/{job_id}/rankings",
    summary="Rank candidates by their latest submission score",
    operation_id="getRankings",
)
def get_rankings(
    job_id: int,
    stage: Optional[str] = Query(None),
    directory: JobDirectory = Depends(get_directory),
    config: AppConfig = Depends(get_app_config),
):
    ranking = rank_job(job_id, directory, stage or config.generation.default_stage, config.ranking)
    return ranking.model_dump(mode="json")


__all__ = ["router"]
