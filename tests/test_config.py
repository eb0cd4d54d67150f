"""Unit tests for the settings file."""

import json
import logging
from pathlib import Path

import pytest

from sleeptracker.config import DB_ENV_VAR, DEFAULT_CONFIG, Settings
from sleeptracker.data.database import DEFAULT_DB_PATH


@pytest.fixture(autouse=True)
def no_env_override(monkeypatch):
    monkeypatch.delenv(DB_ENV_VAR, raising=False)


def test_defaults_when_file_missing(tmp_path: Path):
    settings = Settings(tmp_path / "settings.json")
    assert settings.config == DEFAULT_CONFIG
    assert settings.db_path == DEFAULT_DB_PATH
    assert settings.log_level == logging.INFO
    assert settings.console_log_level == logging.WARNING


def test_bad_file_falls_back_to_defaults(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert Settings(path).config == DEFAULT_CONFIG


def test_update_saves_and_reloads(tmp_path: Path):
    path = tmp_path / "nested" / "settings.json"
    settings = Settings(path)
    settings.update(db_path=str(tmp_path / "nights.db"), log_level="debug")

    reloaded = Settings(path)
    assert reloaded.db_path == tmp_path / "nights.db"
    assert reloaded.log_level == logging.DEBUG
    assert json.loads(path.read_text(encoding="utf-8"))["log_level"] == "debug"


def test_unknown_keys_ignored_and_rejected(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"volume": 3, "log_file": "x.log"}), encoding="utf-8")
    settings = Settings(path)
    assert "volume" not in settings.config
    assert settings.log_file == "x.log"
    with pytest.raises(KeyError):
        settings.update(volume=4)


def test_env_overrides_db_path(tmp_path: Path, monkeypatch):
    monkeypatch.setenv(DB_ENV_VAR, str(tmp_path / "env.db"))
    settings = Settings(tmp_path / "settings.json")
    assert settings.db_path == tmp_path / "env.db"


def test_unknown_log_level_uses_default(tmp_path: Path):
    settings = Settings(tmp_path / "settings.json")
    settings.config["log_level"] = "chatty"
    assert settings.log_level == logging.INFO
