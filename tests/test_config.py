"""Tests for config module."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from shellfs.config import Settings
from shellfs.logger import LogLevel


class TestSettings:
    """Tests for Settings model."""

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.log_level is LogLevel.WARN
        assert settings.start_dir is None

    def test_aliases(self) -> None:
        """Test camelCase aliases are accepted alongside field names."""
        settings = Settings.model_validate({"logLevel": "info", "startDir": "/tmp"})

        assert settings.log_level is LogLevel.INFO
        assert settings.start_dir == Path("/tmp")

    @pytest.mark.parametrize("raw", ["WARN", " warn ", "warning", "Warning"])
    def test_level_normalized(self, raw: str) -> None:
        assert Settings(log_level=raw).log_level is LogLevel.WARN

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="loud")

    def test_frozen(self) -> None:
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.log_level = LogLevel.DEBUG


class TestFromEnv:
    """Tests for Settings.from_env."""

    def test_empty_environment(self) -> None:
        assert Settings.from_env({}) == Settings()

    def test_log_level(self) -> None:
        assert Settings.from_env({"LOG_LEVEL": "debug"}).log_level is LogLevel.DEBUG

    def test_prefixed_variable_wins(self) -> None:
        env = {"LOG_LEVEL": "debug", "SHELLFS_LOG_LEVEL": "off"}

        assert Settings.from_env(env).log_level is LogLevel.OFF

    def test_blank_variable_ignored(self) -> None:
        env = {"SHELLFS_LOG_LEVEL": "", "LOG_LEVEL": "error"}

        assert Settings.from_env(env).log_level is LogLevel.ERROR

    def test_start_dir(self) -> None:
        settings = Settings.from_env({"SHELLFS_START_DIR": "/var/data"})

        assert settings.start_dir == Path("/var/data")

    def test_invalid_value_raises(self) -> None:
        with pytest.raises(ValidationError):
            Settings.from_env({"LOG_LEVEL": "chatty"})

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHELLFS_LOG_LEVEL", "info")

        assert Settings.from_env().log_level is LogLevel.INFO
