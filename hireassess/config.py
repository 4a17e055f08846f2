"""Configuration utilities for the assessment engine.

This module loads application configuration with the following rules:
- Primary source: `hireassess_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("hireassess_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class DatabaseConfig(BaseModel):
    dsn: str

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class GenerationConfig(BaseModel):
    aptitude_count: int = Field(default=10, ge=0)
    technical_count: int = Field(default=20, ge=0)
    management_count: int = Field(default=7, ge=0)
    # Role-tagged technical questions below this count are backfilled with "general" ones
    technical_backfill_threshold: int = Field(default=20, ge=0)
    default_stage: str = "applied"

    @field_validator("default_stage")
    @classmethod
    def stage_must_be_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("generation.default_stage must be a non-empty string")
        return v.strip()


class RankingConfig(BaseModel):
    excellent_threshold: int = Field(default=80, ge=0, le=100)
    pass_threshold: int = Field(default=60, ge=0, le=100)


class AppConfig(BaseModel):
    database: DatabaseConfig
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    auto_apply_migrations: bool = True


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) hireassess_config.json at project root
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    def _setting(env_key: str, file_key: str, json_path: str, default: str) -> str:
        return str(_env(env_key) or _read_config_file(file_key) or _base(json_path, default)).strip()

    dsn = (
        _env("TEST_DATABASE_URL")
        or _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("database.dsn")
        or "sqlite+pysqlite:///:memory:"
    )

    try:
        generation = GenerationConfig(
            aptitude_count=int(_setting("GEN_APTITUDE_COUNT", "generation.aptitude_count", "generation.aptitude_count", "10")),
            technical_count=int(_setting("GEN_TECHNICAL_COUNT", "generation.technical_count", "generation.technical_count", "20")),
            management_count=int(_setting("GEN_MANAGEMENT_COUNT", "generation.management_count", "generation.management_count", "7")),
            technical_backfill_threshold=int(
                _setting(
                    "GEN_TECHNICAL_BACKFILL_THRESHOLD",
                    "generation.technical_backfill_threshold",
                    "generation.technical_backfill_threshold",
                    "20",
                )
            ),
            default_stage=_setting("GEN_DEFAULT_STAGE", "generation.default_stage", "generation.default_stage", "applied"),
        )
        ranking = RankingConfig(
            excellent_threshold=int(_setting("RANK_EXCELLENT_THRESHOLD", "ranking.excellent_threshold", "ranking.excellent_threshold", "80")),
            pass_threshold=int(_setting("RANK_PASS_THRESHOLD", "ranking.pass_threshold", "ranking.pass_threshold", "60")),
        )
        auto_migrate = _setting("AUTO_APPLY_MIGRATIONS", "migrations.auto_apply", "auto_apply_migrations", "1")
        return AppConfig(
            database=DatabaseConfig(dsn=dsn),
            generation=generation,
            ranking=ranking,
            auto_apply_migrations=auto_migrate.lower() in {"1", "true", "yes"},
        )
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "GenerationConfig",
    "RankingConfig",
    "load_config",
]
