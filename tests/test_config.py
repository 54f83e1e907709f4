import logging
import pathlib

import pydantic
import pytest

from flashpool.config import (
    DB_PATH,
    Settings,
    apply_logging_settings,
    load_config_from_file,
    save_config_to_file,
)
from flashpool.logging import logger


def test_default_settings():
    config = Settings()
    assert config.database.path == DB_PATH
    assert config.logging.level == "INFO"
    assert config.host.max_call_depth == 32


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("FLASHPOOL_HOST__MAX_CALL_DEPTH", "8")
    monkeypatch.setenv("FLASHPOOL_LOGGING__LEVEL", "DEBUG")

    config = Settings()
    assert config.host.max_call_depth == 8
    assert config.logging.level == "DEBUG"


def test_invalid_settings():
    with pytest.raises(pydantic.ValidationError):
        Settings.model_validate({"host": {"max_call_depth": 0}})
    with pytest.raises(pydantic.ValidationError):
        Settings.model_validate({"logging": {"level": "LOUD"}})


def test_save_and_load(tmp_path: pathlib.Path):
    config_path = tmp_path / "nested" / "config.toml"
    config = Settings.model_validate(
        {
            "database": {"path": str(tmp_path / "pool.db")},
            "host": {"max_call_depth": 5},
        }
    )

    save_config_to_file(config, config_path)
    assert "[database]" in config_path.read_text()

    loaded = load_config_from_file(config_path)
    assert loaded == config
    assert loaded.database.path == tmp_path / "pool.db"
    assert loaded.host.max_call_depth == 5


def test_apply_logging_settings():
    level = logger.level
    try:
        apply_logging_settings(Settings.model_validate({"logging": {"level": "WARNING"}}))
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(level)
