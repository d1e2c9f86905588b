# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execute stage specifications and collect per-file failures."""

from __future__ import annotations

import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final, Protocol

from ..core.runtime.process import CommandOptions, ProcessResult, StreamName, TimeoutKind, run_command
from ..models import PROJECT_KEY, CheckResult
from .models import FailureMessage, InvocationMode, StageSpec

if TYPE_CHECKING:
    from ..config import ExecutionSettings

StageRunner = Callable[..., ProcessResult]

MISSING_EXECUTABLE_RETURNCODE: Final[int] = 127
TIMEOUT_TAG: Final[str] = "[timeout]"


class StageSink(Protocol):
    """Receive live output and diagnostics emitted while a stage runs."""

    def stream_line(self, stream: StreamName, line: str) -> None:
        """Display a single line of subprocess output as it arrives."""

    def debug(self, message: str) -> None:
        """Display a diagnostic message when debugging is enabled."""


class Stage(Protocol):
    """A check that maps a file set onto its failures."""

    @property
    def name(self) -> str:
        """Return the display name of the stage."""

    def run(self, files: Sequence[str]) -> CheckResult:
        """Return failure text keyed by path; empty when the check passed."""


@dataclass(frozen=True, slots=True)
class StageContext:
    """Shared collaborators handed to every stage."""

    root: Path
    execution: ExecutionSettings
    runner: StageRunner = run_command
    sink: StageSink | None = None


class _SpecStage:
    """Common machinery for stages backed by a :class:`StageSpec`."""

    def __init__(self, spec: StageSpec, context: StageContext) -> None:
        self._spec = spec
        self._context = context

    @property
    def name(self) -> str:
        return self._spec.name

    def _invoke(self, target: str | None) -> ProcessResult:
        execution = self._context.execution
        command = self._spec.build_command(target, columns=execution.terminal_width)
        sink = self._context.sink
        if sink is not None:
            sink.debug(f"stage={self._spec.name!r} command={shlex.join(command)}")
        on_line = sink.stream_line if sink is not None and self._spec.stream_output else None
        options = CommandOptions(
            cwd=self._context.root,
            env=execution.environment(),
            total_timeout=execution.total_timeout,
            idle_timeout=execution.idle_timeout,
            on_line=on_line,
        )
        try:
            return self._context.runner(command, options=options)
        except FileNotFoundError as exc:
            key = target if target is not None else PROJECT_KEY
            return ProcessResult(
                command=tuple(command),
                returncode=MISSING_EXECUTABLE_RETURNCODE,
                stderr=f"{key}: {exc}",
            )

    def _failure_text(self, key: str, result: ProcessResult) -> str:
        if self._spec.failure_message is FailureMessage.SYNTHESIZED:
            text = f"{key}: {self._spec.name} failed with exit status {result.returncode}"
        else:
            text = result.output or f"exited with status {result.returncode}"
        if result.timed_out is None:
            return text
        execution = self._context.execution
        limit = execution.total_timeout if result.timed_out is TimeoutKind.TOTAL else execution.idle_timeout
        return f"{TIMEOUT_TAG} {result.timed_out.value} timeout of {limit:g}s expired; {text}"


class FileStage(_SpecStage):
    """Invoke the tool once per file, sequentially, in file-set order."""

    def run(self, files: Sequence[str]) -> CheckResult:
        failures: dict[str, str] = {}
        for path in files:
            result = self._invoke(path)
            if not result.ok:
                failures[path] = self._failure_text(path, result)
        return failures


class ProjectStage(_SpecStage):
    """Invoke the tool once for the whole project."""

    def run(self, files: Sequence[str]) -> CheckResult:
        del files
        result = self._invoke(None)
        if result.ok:
            return {}
        return {PROJECT_KEY: self._failure_text(PROJECT_KEY, result)}


def build_stage(spec: StageSpec, context: StageContext) -> Stage:
    """Return the stage implementation matching ``spec.mode``."""

    if spec.mode is InvocationMode.PROJECT:
        return ProjectStage(spec, context)
    return FileStage(spec, context)


def build_stages(specs: Sequence[StageSpec], context: StageContext) -> tuple[Stage, ...]:
    """Return stages for ``specs`` preserving their order."""

    return tuple(build_stage(spec, context) for spec in specs)


__all__ = [
    "FileStage",
    "MISSING_EXECUTABLE_RETURNCODE",
    "ProjectStage",
    "Stage",
    "StageContext",
    "StageRunner",
    "StageSink",
    "TIMEOUT_TAG",
    "build_stage",
    "build_stages",
]
