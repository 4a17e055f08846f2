"""APIRouter registration for the assessment engine."""

from __future__ import annotations

from fastapi import APIRouter

from hireassess.routes.admin import router as admin_router
from hireassess.routes.assessments import router as assessments_router
from hireassess.routes.responses import router as responses_router
from hireassess.routes.results import router as results_router

api_router = APIRouter()
api_router.include_router(admin_router, tags=["Admin"])
api_router.include_router(assessments_router, tags=["Assessments"])
api_router.include_router(responses_router, tags=["Responses"])
api_router.include_router(results_router, tags=["Results"])

__all__ = ["api_router"]
