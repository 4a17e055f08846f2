"""Request-scoped lookups shared by route modules."""

from __future__ import annotations

from fastapi import Request

from hireassess.config import AppConfig
from hireassess.logic.directory import JobDirectory
from hireassess.logic.errors import AssessmentNotFound
from hireassess.logic.repository_assessments import get_assessment
from hireassess.models.assessment import Assessment


def get_directory(request: Request) -> JobDirectory:
    return request.app.state.directory


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config


def require_assessment(assessment_id: str) -> Assessment:
    assessment = get_assessment(assessment_id)
    if assessment is None:
        raise AssessmentNotFound(f"assessment {assessment_id} not found")
    return assessment


__all__ = ["get_app_config", "get_directory", "require_assessment"]
