"""Central logging configuration for the assessment engine.

Sends every `hireassess.*` logger to one stdout handler. The package level
comes from `HIREASSESS_LOG_LEVEL` (default INFO); SQLAlchemy engine chatter
is held at WARNING.
"""
from __future__ import annotations
import logging
import os
from logging.config import dictConfig
from typing import Any, Dict, Optional

LOG_LEVEL_ENV = "HIREASSESS_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"


def build_logging_config(level: Optional[str] = None) -> Dict[str, Any]:
    """Return the dictConfig mapping for `level` (or the environment's)."""
    resolved = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    if not isinstance(logging.getLevelName(resolved), int):
        raise ValueError(f"unknown log level: {resolved}")
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
        "loggers": {
            "hireassess": {"level": resolved},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging once; later calls only adjust the package level.

    An already-configured root logger (pytest capture, an embedding server)
    keeps its handlers.
    """
    if logging.getLogger().handlers:
        if level is not None:
            logging.getLogger("hireassess").setLevel(level.upper())
        return
    dictConfig(build_logging_config(level))
