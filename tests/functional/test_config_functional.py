"""Functional tests for configuration loading and precedence."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from hireassess import config as config_module
from hireassess.config import load_config


@pytest.fixture()
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config_module, "ROOT_CONFIG", tmp_path / "hireassess_config.json")
    monkeypatch.setattr(config_module, "CONFIG_DIR", tmp_path / "config")
    for key in ("GEN_APTITUDE_COUNT", "GEN_TECHNICAL_COUNT", "GEN_DEFAULT_STAGE", "RANK_PASS_THRESHOLD"):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


def test_defaults_without_sources(isolated_config):
    cfg = load_config()
    assert cfg.generation.aptitude_count == 10
    assert cfg.generation.technical_count == 20
    assert cfg.generation.management_count == 7
    assert cfg.generation.technical_backfill_threshold == 20
    assert cfg.generation.default_stage == "applied"
    assert (cfg.ranking.excellent_threshold, cfg.ranking.pass_threshold) == (80, 60)
    # conftest disables startup migrations through the environment
    assert cfg.auto_apply_migrations is False


def test_json_then_files_then_env(isolated_config, monkeypatch):
    (isolated_config / "hireassess_config.json").write_text(
        json.dumps({"generation": {"aptitude_count": 5, "technical_count": 8}, "ranking": {"pass_threshold": 50}}),
        encoding="utf-8",
    )
    (isolated_config / "config").mkdir()
    (isolated_config / "config" / "generation.technical_count").write_text("9\n", encoding="utf-8")
    monkeypatch.setenv("GEN_APTITUDE_COUNT", "3")

    cfg = load_config()
    assert cfg.generation.aptitude_count == 3
    assert cfg.generation.technical_count == 9
    assert cfg.ranking.pass_threshold == 50


def test_invalid_values_are_rejected(isolated_config, monkeypatch):
    monkeypatch.setenv("RANK_PASS_THRESHOLD", "150")
    with pytest.raises(ValidationError):
        load_config()
