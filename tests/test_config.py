from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from utils.config import DEFAULT_CONFIG, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("TIMING_CONFIG", "TIMING_LOG_LEVEL", "TIMING_LOG_DIR"):
        monkeypatch.delenv(name, raising=False)


def test_default_config_file_loads():
    assert DEFAULT_CONFIG.exists()
    settings = load_settings()
    assert settings.log_level == "INFO"
    assert settings.level == logging.INFO
    assert settings.server_timing_header is True
    assert settings.server_timing_include_marks is False


def test_missing_file_gives_defaults(tmp_path: Path):
    settings = load_settings(tmp_path / "absent.yaml")
    assert settings.log_dir is None
    assert settings.server_timing_header is True


def test_yaml_values_and_env_overrides(tmp_path: Path, monkeypatch):
    cfg = tmp_path / "timing.yaml"
    cfg.write_text("log_level: WARNING\nserver_timing_include_marks: true\n")
    monkeypatch.setenv("TIMING_CONFIG", str(cfg))

    settings = load_settings()
    assert settings.log_level == "WARNING"
    assert settings.server_timing_include_marks is True

    monkeypatch.setenv("TIMING_LOG_LEVEL", "debug")
    monkeypatch.setenv("TIMING_LOG_DIR", str(tmp_path / "logs"))
    settings = load_settings()
    assert settings.level == logging.DEBUG
    assert settings.log_dir == str(tmp_path / "logs")


def test_empty_file_gives_defaults(tmp_path: Path):
    cfg = tmp_path / "empty.yaml"
    cfg.write_text("")
    assert load_settings(cfg).log_level == "INFO"


def test_invalid_level_rejected(tmp_path: Path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("log_level: LOUD\n")
    with pytest.raises(ValidationError):
        load_settings(cfg)
