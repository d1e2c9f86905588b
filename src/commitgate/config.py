# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loading for the quality gate."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .models import DEFAULT_ALLOWED_STATUSES, EMPTY_TREE, FileStatus
from .stages.catalog import default_stages
from .stages.models import StageSpec

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "commitgate"
COLUMNS_ENV: Final[str] = "COLUMNS"


class ManifestSettings(BaseModel):
    """Dependency manifest and lock file pairing."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    manifest_file: str = "composer.json"
    lock_file: str = "composer.lock"


class ExecutionSettings(BaseModel):
    """Subprocess limits and environment applied to every check."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_timeout: float = Field(default=3600.0, gt=0)
    idle_timeout: float = Field(default=60.0, gt=0)
    terminal_width: int = Field(default=80, gt=0)
    env: dict[str, str] = Field(default_factory=dict)

    def environment(self) -> dict[str, str]:
        """Return environment overrides exported to check subprocesses.

        Returns:
            dict[str, str]: Configured variables plus the fixed terminal width.
        """

        return {**self.env, COLUMNS_ENV: str(self.terminal_width)}


class GateConfig(BaseModel):
    """Top-level configuration for a gate run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_dir: str = "src"
    extension: str = "php"
    allowed_statuses: tuple[FileStatus, ...] = DEFAULT_ALLOWED_STATUSES
    empty_tree: str = EMPTY_TREE
    manifest: ManifestSettings = Field(default_factory=ManifestSettings)
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    stages: tuple[StageSpec, ...] = Field(default_factory=default_stages)

    @field_validator("source_dir")
    @classmethod
    def _strip_source_dir(cls, value: str) -> str:
        stripped = value.strip().strip("/")
        if not stripped:
            raise ValueError("source_dir must name a directory")
        return stripped

    @field_validator("extension")
    @classmethod
    def _strip_extension(cls, value: str) -> str:
        stripped = value.strip().lstrip(".")
        if not stripped:
            raise ValueError("extension must not be empty")
        return stripped

    @field_validator("allowed_statuses")
    @classmethod
    def _require_statuses(cls, value: tuple[FileStatus, ...]) -> tuple[FileStatus, ...]:
        if not value:
            raise ValueError("allowed_statuses must list at least one status")
        return tuple(dict.fromkeys(value))


def _read_toml(path: Path) -> Mapping[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _pyproject_section(path: Path) -> Mapping[str, Any]:
    if not path.is_file():
        return {}
    tool_section = _read_toml(path).get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return section


def load_config(root: Path, *, config_path: Path | None = None) -> GateConfig:
    """Load gate configuration for the project rooted at ``root``.

    An explicit ``config_path`` is read as a standalone TOML document. Otherwise
    the ``[tool.commitgate]`` table of ``root/pyproject.toml`` is used, falling
    back to built-in defaults when either is absent.

    Args:
        root: Project root directory.
        config_path: Optional TOML file overriding pyproject discovery.

    Returns:
        GateConfig: Validated configuration.

    Raises:
        ConfigError: If the file is missing, malformed, or fails validation.
    """

    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else root / config_path
        if not resolved.is_file():
            raise ConfigError(f"Configuration file not found: {resolved}")
        data = _read_toml(resolved)
    else:
        data = _pyproject_section(root / PYPROJECT_FILENAME)
    try:
        return GateConfig.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "ExecutionSettings",
    "GateConfig",
    "ManifestSettings",
    "load_config",
]
