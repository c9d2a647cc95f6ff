# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for stylecheck."""

from __future__ import annotations

import math
import os
import shlex
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
STANDALONE_FILENAME: Final[str] = ".stylecheck.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "stylecheck"


def default_parallel_jobs() -> int:
    """Return 75% of available CPU cores (minimum of 1)."""
    cores = os.cpu_count() or 1
    return max(1, math.floor(cores * 0.75))


def _split_csv(value: Any) -> Any:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class LinterSettings(BaseModel):
    """Per-linter options."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    enabled: bool = True
    extensions: list[str] = Field(default_factory=list)
    args: list[str] = Field(default_factory=list)
    prefix: str = ""
    directory: Path = Field(default_factory=Path)

    @field_validator("extensions", mode="before")
    @classmethod
    def _coerce_extensions(cls, value: Any) -> Any:
        """Accept comma separated strings such as ``"c,mm"``."""

        return _split_csv(value)

    @field_validator("args", mode="before")
    @classmethod
    def _coerce_args(cls, value: Any) -> Any:
        if isinstance(value, str):
            return shlex.split(value)
        return value


class ExecutionConfig(BaseModel):
    """Execution behaviour shared by all linters."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    jobs: int = Field(default_factory=default_parallel_jobs, ge=1)
    timeout: float | None = Field(default=None, gt=0)
    auto_fix: bool = False


class OutputConfig(BaseModel):
    """Console presentation switches."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    emoji: bool = True
    color: bool = True


class Config(BaseModel):
    """Top-level stylecheck configuration."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    linters: dict[str, LinterSettings] = Field(default_factory=dict)

    def settings_for(self, name: str, default_extensions: Sequence[str] = ()) -> LinterSettings:
        """Return the settings for linter ``name``.

        Args:
            name: Linter identifier.
            default_extensions: Extensions used when none are configured.

        Returns:
            LinterSettings: Configured settings, or defaults when the linter is absent.
        """

        settings = self.linters.get(name, LinterSettings())
        if not settings.extensions:
            settings = settings.model_copy(update={"extensions": list(default_extensions)})
        return settings

    def enabled_linters(self) -> list[str]:
        """Return configured linter names that are enabled, in declaration order."""

        return [name for name, settings in self.linters.items() if settings.enabled]


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration at {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _extract_section(path: Path, data: Mapping[str, Any]) -> Mapping[str, Any]:
    if path.name != PYPROJECT_FILENAME:
        return data
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if not isinstance(section, Mapping):
        return {}
    return section


def resolve_config_path(root: Path, explicit: Path | None = None) -> Path | None:
    """Return the configuration file to load for ``root``, if any.

    ``explicit`` wins when supplied; otherwise ``.stylecheck.toml`` is preferred
    over ``pyproject.toml``.

    Raises:
        ConfigError: If ``explicit`` does not exist.
    """

    if explicit is not None:
        candidate = explicit if explicit.is_absolute() else root / explicit
        if not candidate.is_file():
            raise ConfigError(f"Configuration file {candidate} does not exist")
        return candidate
    for name in (STANDALONE_FILENAME, PYPROJECT_FILENAME):
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(root: Path, path: Path | None = None) -> Config:
    """Load configuration for the workspace at ``root``.

    Args:
        root: Workspace root used to locate configuration files.
        path: Optional explicit configuration file.

    Returns:
        Config: Validated configuration, defaults when no file is present.

    Raises:
        ConfigError: If the file cannot be read or fails validation.
    """

    config_path = resolve_config_path(root, path)
    if config_path is None:
        return Config()
    section = _extract_section(config_path, _read_toml(config_path))
    try:
        return Config.model_validate(dict(section))
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc


__all__ = [
    "Config",
    "ExecutionConfig",
    "LinterSettings",
    "OutputConfig",
    "default_parallel_jobs",
    "load_config",
    "resolve_config_path",
]
