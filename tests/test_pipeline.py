# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Behavioural tests for the gate pipeline."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from helpers.fakes import FakeRunner, fake_git

from commitgate.config import GateConfig
from commitgate.core.runtime.process import ProcessResult
from commitgate.errors import InfrastructureError
from commitgate.pipeline import NOTHING_TO_CHECK, ExitCode, GatePipeline, PipelineState
from commitgate.reporting import FAILURE_MARKER, ResultReporter
from commitgate.stages import StageSpec

STAGES = (
    StageSpec(name="Lint", command=("lint", "{file}")),
    StageSpec(name="Fixer", command=("fixer", "{file}")),
    StageSpec(name="Sniffer", command=("sniffer", "{file}"), failure_message="synthesized"),
    StageSpec(name="Mess", command=("mess", "{file}")),
    StageSpec(name="Tests", command=("tests",), mode="project", stream_output=True),
)


def _pipeline(
    tmp_path: Path,
    reporter: ResultReporter,
    runner: FakeRunner,
    *,
    staged: str,
) -> GatePipeline:
    config = GateConfig(stages=STAGES)
    return GatePipeline.from_config(
        tmp_path,
        config,
        reporter,
        git_runner=fake_git(diff_stdout=staged),
        stage_runner=runner,
    )


def test_pipeline_state_is_monotonic() -> None:
    state = PipelineState()

    failed = state.record(["x"])
    after = failed.record([])

    assert not state.has_failed
    assert failed.has_failed and after.has_failed
    assert after.logs == ("x",)


def test_empty_staged_set_skips_every_stage(
    tmp_path: Path,
    reporter: ResultReporter,
    console_buffer: io.StringIO,
    fake_runner: FakeRunner,
) -> None:
    outcome = _pipeline(tmp_path, reporter, fake_runner, staged="").execute()

    assert outcome.exit_code is ExitCode.SUCCESS
    assert outcome.staged == ()
    assert outcome.advisory is None
    assert fake_runner.calls == []
    assert NOTHING_TO_CHECK in console_buffer.getvalue()


def test_no_source_files_skips_stages_even_with_advisory(
    tmp_path: Path,
    reporter: ResultReporter,
    console_buffer: io.StringIO,
    fake_runner: FakeRunner,
) -> None:
    outcome = _pipeline(tmp_path, reporter, fake_runner, staged="composer.json\nREADME.md\n").execute()

    assert outcome.passed
    assert outcome.exit_code is ExitCode.SUCCESS
    assert outcome.advisory is not None
    assert fake_runner.calls == []
    output = console_buffer.getvalue()
    assert "composer.lock" in output
    assert NOTHING_TO_CHECK in output


def test_all_stages_pass(
    tmp_path: Path,
    reporter: ResultReporter,
    console_buffer: io.StringIO,
    fake_runner: FakeRunner,
) -> None:
    outcome = _pipeline(tmp_path, reporter, fake_runner, staged="src/A.php\nsrc/B.php\n").execute()

    assert outcome.exit_code is ExitCode.SUCCESS
    assert outcome.checked == ("src/A.php", "src/B.php")
    executables = [cmd[0] for cmd in fake_runner.commands]
    assert executables == ["lint", "lint", "fixer", "fixer", "sniffer", "sniffer", "mess", "mess", "tests"]
    assert FAILURE_MARKER not in console_buffer.getvalue()
    assert "ready to be committed" in console_buffer.getvalue()


def test_lint_failure_blocks_commit_and_later_stages_still_run(
    tmp_path: Path,
    reporter: ResultReporter,
    console_buffer: io.StringIO,
) -> None:
    runner = FakeRunner(
        {
            ("lint", "src/Foo.php"): ProcessResult(
                command=("lint",),
                returncode=255,
                stdout="PHP Parse error: syntax error in src/Foo.php on line 3\nErrors parsing src/Foo.php\n",
            ),
        },
    )

    outcome = _pipeline(tmp_path, reporter, runner, staged="src/Foo.php\nREADME.md\ncomposer.json\n").execute()

    assert outcome.exit_code is ExitCode.CHECK_FAILED
    assert outcome.checked == ("src/Foo.php",)
    assert [cmd[0] for cmd in runner.commands] == ["lint", "fixer", "sniffer", "mess", "tests"]
    output = console_buffer.getvalue()
    expected = f"{FAILURE_MARKER} PHP Parse error: syntax error in src/Foo.php on line 3 Errors parsing src/Foo.php"
    assert expected in output
    assert output.count("failure(s)") == 1
    assert "commit aborted" in output
    assert outcome.state.logs == (expected,)


def test_failures_accumulate_across_stages(tmp_path: Path, reporter: ResultReporter) -> None:
    runner = FakeRunner(
        {
            ("sniffer", "src/A.php"): ProcessResult(command=("sniffer",), returncode=2, stdout="ignored"),
            ("tests", None): ProcessResult(command=("tests",), returncode=1, stdout="FAILURES!\n"),
        },
    )

    outcome = _pipeline(tmp_path, reporter, runner, staged="src/A.php\n").execute()

    assert outcome.exit_code is ExitCode.CHECK_FAILED
    assert outcome.state.logs == (
        f"{FAILURE_MARKER} src/A.php: Sniffer failed with exit status 2",
        f"{FAILURE_MARKER} FAILURES!",
    )


def test_test_runner_failure_alone_blocks(tmp_path: Path, reporter: ResultReporter) -> None:
    runner = FakeRunner({("tests", None): ProcessResult(command=("tests",), returncode=2, stderr="Fatal\n")})

    outcome = _pipeline(tmp_path, reporter, runner, staged="src/A.php\n").execute()

    assert outcome.exit_code is ExitCode.CHECK_FAILED


def test_infrastructure_error_propagates(tmp_path: Path, reporter: ResultReporter, fake_runner: FakeRunner) -> None:
    pipeline = GatePipeline.from_config(
        tmp_path,
        GateConfig(stages=STAGES),
        reporter,
        git_runner=fake_git(diff_returncode=128),
        stage_runner=fake_runner,
    )

    with pytest.raises(InfrastructureError):
        pipeline.execute()
    assert fake_runner.calls == []


def test_default_config_builds_five_stages(tmp_path: Path, reporter: ResultReporter) -> None:
    pipeline = GatePipeline.from_config(tmp_path, GateConfig(), reporter)

    assert len(pipeline.stages) == 5
