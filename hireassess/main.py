"""FastAPI application factory for the assessment engine."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from hireassess.config import AppConfig, load_config
from hireassess.db.base import get_engine
from hireassess.db.migrations_runner import apply_migrations
from hireassess.http.problem import (
    handle_assessment_error,
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from hireassess.logging_setup import configure_logging
from hireassess.logic.directory import InMemoryDirectory, JobDirectory
from hireassess.logic.errors import AssessmentError
from hireassess.routes import api_router

logger = logging.getLogger(__name__)


def create_app(directory: Optional[JobDirectory] = None, config: Optional[AppConfig] = None) -> FastAPI:
    """Build the HTTP app around a job/candidate directory.

    Without a directory an empty in-memory one is used, which is only useful
    for the admin endpoints. Migrations run at startup unless disabled in
    configuration.
    """
    configure_logging()
    cfg = config or load_config()
    app = FastAPI(title="Hiring Assessment Engine")
    app.state.config = cfg
    app.state.directory = directory if directory is not None else InMemoryDirectory()

    engine = get_engine(cfg.database.dsn)
    if cfg.auto_apply_migrations:
        applied = apply_migrations(engine)
        if applied:
            logger.info("startup_migrations_applied files=%s", applied)

    app.add_exception_handler(AssessmentError, handle_assessment_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.include_router(api_router)
    return app


__all__ = ["create_app"]
