# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compose discovery, checks, and reporting into a single gate run."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import IntEnum
from pathlib import Path
from typing import Final

from .checks.manifest import DependencyManifestChecker
from .config import GateConfig
from .core.runtime.process import run_command
from .discovery.filters import PathFilter
from .discovery.git import GitRunner, StagedFileCollector
from .models import CheckResult
from .reporting import ResultReporter
from .stages.base import Stage, StageContext, StageRunner, build_stages

NOTHING_TO_CHECK: Final[str] = "No staged source files to check."


class ExitCode(IntEnum):
    """Process exit statuses returned to git."""

    SUCCESS = 0
    CHECK_FAILED = 1
    INFRASTRUCTURE = 2


@dataclass(frozen=True, slots=True)
class PipelineState:
    """Accumulated verdict of a run; each stage yields a new state."""

    has_failed: bool = False
    logs: tuple[str, ...] = field(default_factory=tuple)

    def record(self, lines: Sequence[str]) -> PipelineState:
        """Return the state after a stage that produced ``lines`` of failures.

        Args:
            lines: Formatted failure lines for one stage.

        Returns:
            PipelineState: Failed once any stage fails; never reset.
        """

        if not lines:
            return self
        return replace(self, has_failed=True, logs=(*self.logs, *lines))


@dataclass(frozen=True, slots=True)
class GateOutcome:
    """Structured result of :meth:`GatePipeline.execute`."""

    state: PipelineState
    staged: tuple[str, ...] = ()
    checked: tuple[str, ...] = ()
    advisory: str | None = None

    @property
    def passed(self) -> bool:
        return not self.state.has_failed

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.CHECK_FAILED if self.state.has_failed else ExitCode.SUCCESS


class GatePipeline:
    """Run the staged-file checks and decide whether the commit may proceed."""

    def __init__(
        self,
        *,
        collector: StagedFileCollector,
        path_filter: PathFilter,
        manifest_checker: DependencyManifestChecker,
        stages: Sequence[Stage],
        reporter: ResultReporter,
    ) -> None:
        self._collector = collector
        self._path_filter = path_filter
        self._manifest_checker = manifest_checker
        self._stages = tuple(stages)
        self._reporter = reporter

    @classmethod
    def from_config(
        cls,
        root: Path,
        config: GateConfig,
        reporter: ResultReporter,
        *,
        git_runner: GitRunner | None = None,
        stage_runner: StageRunner = run_command,
    ) -> GatePipeline:
        """Assemble a pipeline for ``root`` from ``config``.

        Args:
            root: Project root; every subprocess runs here.
            config: Validated gate configuration.
            reporter: Output sink, also used for live stage output.
            git_runner: Optional replacement for git invocations.
            stage_runner: Callable executing check commands.

        Returns:
            GatePipeline: Ready-to-execute pipeline.
        """

        context = StageContext(root=root, execution=config.execution, runner=stage_runner, sink=reporter)
        return cls(
            collector=StagedFileCollector(
                root,
                allowed_statuses=config.allowed_statuses,
                empty_tree=config.empty_tree,
                runner=git_runner,
            ),
            path_filter=PathFilter.for_source(config.source_dir, config.extension),
            manifest_checker=DependencyManifestChecker(
                manifest_file=config.manifest.manifest_file,
                lock_file=config.manifest.lock_file,
            ),
            stages=build_stages(config.stages, context),
            reporter=reporter,
        )

    @property
    def stages(self) -> tuple[Stage, ...]:
        return self._stages

    def execute(self) -> GateOutcome:
        """Run every stage over the staged source files.

        All stages run even after a failure so the committer sees every
        problem in one pass. Nothing runs when no source file is staged.

        Returns:
            GateOutcome: Final state plus the file sets that were considered.

        Raises:
            InfrastructureError: If staged files cannot be listed.
        """

        reporter = self._reporter
        reporter.title()
        reporter.task("Fetching staged files")
        staged = self._collector.collect()
        checked = self._path_filter.filter(staged)
        reporter.done()

        advisory = self._manifest_checker.check(staged)
        if advisory is not None:
            reporter.advisory(advisory)

        state = PipelineState()
        if not checked:
            reporter.info(NOTHING_TO_CHECK)
            return GateOutcome(state=state, staged=staged, checked=checked, advisory=advisory)

        for stage in self._stages:
            state = self._run_stage(stage, checked, state)

        if state.has_failed:
            reporter.blocked()
        else:
            reporter.passed()
        return GateOutcome(state=state, staged=staged, checked=checked, advisory=advisory)

    def _run_stage(self, stage: Stage, files: tuple[str, ...], state: PipelineState) -> PipelineState:
        self._reporter.task(stage.name)
        result: CheckResult = stage.run(files)
        lines = self._reporter.report(stage.name, result)
        self._reporter.done()
        return state.record(lines)


__all__ = ["ExitCode", "GateOutcome", "GatePipeline", "NOTHING_TO_CHECK", "PipelineState"]
