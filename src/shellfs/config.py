"""Runtime settings loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shellfs.logger import LogLevel

# Environment variables, most specific first
LOG_LEVEL_VARS = ("SHELLFS_LOG_LEVEL", "LOG_LEVEL")
START_DIR_VAR = "SHELLFS_START_DIR"


class Settings(BaseModel):
    """Settings shared by the CLI and library callers."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    log_level: LogLevel = Field(default=LogLevel.WARN, alias="logLevel")
    start_dir: Path | None = Field(default=None, alias="startDir")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "warning":
                return LogLevel.WARN
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Settings with unset values left at their defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        data: dict[str, object] = {}
        for var in LOG_LEVEL_VARS:
            if env.get(var):
                data["log_level"] = env[var]
                break
        if env.get(START_DIR_VAR):
            data["start_dir"] = env[START_DIR_VAR]
        return cls.model_validate(data)
