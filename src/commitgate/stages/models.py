# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Declarative descriptions of the external checks the gate runs."""

from __future__ import annotations

from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, model_validator

FILE_PLACEHOLDER: Final[str] = "{file}"
COLUMNS_PLACEHOLDER: Final[str] = "{columns}"


class InvocationMode(str, Enum):
    """Enumerate how a stage is invoked against the source file set."""

    PER_FILE = "per_file"
    PROJECT = "project"


class FailureMessage(str, Enum):
    """Enumerate how a failing invocation is turned into failure text."""

    RAW_OUTPUT = "raw_output"
    SYNTHESIZED = "synthesized"


class StageSpec(BaseModel):
    """Describe a single quality check as data.

    ``command`` is an argument template. Per-file stages substitute
    ``{file}`` with the checked path, appending the path when the template has
    no placeholder. ``{columns}`` is replaced by the configured terminal width.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    command: tuple[str, ...] = Field(min_length=1)
    mode: InvocationMode = InvocationMode.PER_FILE
    failure_message: FailureMessage = FailureMessage.RAW_OUTPUT
    stream_output: bool = False

    @model_validator(mode="after")
    def _check_placeholders(self) -> StageSpec:
        if self.mode is InvocationMode.PROJECT and any(FILE_PLACEHOLDER in arg for arg in self.command):
            raise ValueError(f"project-wide stage '{self.name}' cannot reference {FILE_PLACEHOLDER}")
        return self

    def build_command(self, target: str | None = None, *, columns: int = 80) -> list[str]:
        """Return the concrete argument list for ``target``.

        Args:
            target: File path for per-file stages; ignored for project stages.
            columns: Terminal width substituted for ``{columns}``.

        Returns:
            list[str]: Argument vector ready for execution.
        """

        width = str(columns)
        args = [arg.replace(COLUMNS_PLACEHOLDER, width) for arg in self.command]
        if self.mode is InvocationMode.PROJECT or target is None:
            return args
        if not any(FILE_PLACEHOLDER in arg for arg in args):
            return [*args, target]
        return [arg.replace(FILE_PLACEHOLDER, target) for arg in args]


__all__ = [
    "COLUMNS_PLACEHOLDER",
    "FILE_PLACEHOLDER",
    "FailureMessage",
    "InvocationMode",
    "StageSpec",
]
