"""Problem+JSON utilities and global exception handlers.

Defines the RFC 7807 media type and handler callables that render engine
errors, HTTP errors and request validation failures as
application/problem+json responses.
"""

from __future__ import annotations

import logging
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hireassess.logic.errors import AssessmentError
from hireassess.logic.problem_factory import problem_for_error

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def problem_response(problem: dict) -> JSONResponse:
    return JSONResponse(problem, status_code=int(problem.get("status", 500)), media_type=PROBLEM_MEDIA_TYPE)


async def handle_assessment_error(request: Request, exc: AssessmentError) -> JSONResponse:  # noqa: D401
    logger.info("assessment_error path=%s code=%s", request.url.path, exc.code)
    return problem_response(problem_for_error(exc))


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    if isinstance(exc.detail, dict):
        detail = dict(exc.detail)
        detail.setdefault("status", exc.status_code)
    else:
        detail = {"title": "Error", "status": exc.status_code, "detail": str(exc.detail or "")}
    return JSONResponse(
        detail,
        status_code=exc.status_code,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=exc.headers or None,
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    problem = {
        "title": "Invalid Request",
        "status": 422,
        "detail": "Request validation failed",
        "code": "REQUEST_INVALID",
        "errors": [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in exc.errors()
        ],
    }
    return JSONResponse(problem, status_code=422, media_type=PROBLEM_MEDIA_TYPE)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=True)
    return JSONResponse({"title": "Internal Server Error", "status": 500}, status_code=500, media_type=PROBLEM_MEDIA_TYPE)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "handle_assessment_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
    "problem_response",
]
