# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the subprocess runner and its timeouts."""

from __future__ import annotations

import sys
import time
from pathlib import Path

import pytest

from commitgate.core.runtime.process import TIMEOUT_RETURNCODE, CommandOptions, StreamName, TimeoutKind, run_command

PYTHON = sys.executable


def test_run_command_captures_both_streams(tmp_path: Path) -> None:
    script = "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"

    result = run_command([PYTHON, "-c", script], options=CommandOptions(cwd=tmp_path))

    assert result.returncode == 3
    assert not result.ok
    assert result.stdout == "out\n"
    assert result.stderr == "err\n"
    assert result.timed_out is None


def test_run_command_applies_environment_and_cwd(tmp_path: Path) -> None:
    script = "import os; print(os.environ['COLUMNS']); print(os.getcwd())"

    result = run_command([PYTHON, "-c", script], options=CommandOptions(cwd=tmp_path, env={"COLUMNS": "91"}))

    assert result.ok
    lines = result.stdout.splitlines()
    assert lines[0] == "91"
    assert Path(lines[1]).resolve() == tmp_path.resolve()


def test_run_command_streams_lines_tagged_by_stream() -> None:
    script = "import sys; print('one', flush=True); print('two', file=sys.stderr, flush=True); print('three')"
    seen: list[tuple[StreamName, str]] = []

    run_command(
        [PYTHON, "-c", script],
        options=CommandOptions(on_line=lambda stream, line: seen.append((stream, line))),
    )

    assert [entry for entry in seen if entry[0] == "stdout"] == [("stdout", "one"), ("stdout", "three")]
    assert ("stderr", "two") in seen


def test_idle_timeout_kills_silent_process() -> None:
    script = "import time; print('started', flush=True); time.sleep(30)"

    result = run_command([PYTHON, "-c", script], options=CommandOptions(idle_timeout=0.5, total_timeout=20))

    assert result.timed_out is TimeoutKind.IDLE
    assert result.returncode == TIMEOUT_RETURNCODE
    assert not result.ok
    assert "started" in result.stdout


def test_total_timeout_kills_chatty_process() -> None:
    script = "import time\nwhile True:\n    print('tick', flush=True)\n    time.sleep(0.05)\n"

    result = run_command([PYTHON, "-c", script], options=CommandOptions(idle_timeout=10, total_timeout=0.5))

    assert result.timed_out is TimeoutKind.TOTAL
    assert "tick" in result.stdout


def test_idle_timer_resets_on_output_without_newlines() -> None:
    script = (
        "import sys, time\n"
        "for _ in range(6):\n"
        "    sys.stdout.write('.')\n"
        "    sys.stdout.flush()\n"
        "    time.sleep(0.4)\n"
    )

    result = run_command([PYTHON, "-c", script], options=CommandOptions(idle_timeout=1, total_timeout=20))

    assert result.timed_out is None
    assert result.ok
    assert result.stdout == "......"


def test_total_timeout_applies_after_pipes_close() -> None:
    script = "import os, time; os.close(1); os.close(2); time.sleep(6)"
    started = time.monotonic()

    result = run_command([PYTHON, "-c", script], options=CommandOptions(idle_timeout=10, total_timeout=1))

    assert result.timed_out is TimeoutKind.TOTAL
    assert result.returncode == TIMEOUT_RETURNCODE
    assert time.monotonic() - started < 5


def test_trailing_partial_line_is_streamed() -> None:
    script = "import sys; sys.stdout.write('first\\nlast')"
    seen: list[tuple[StreamName, str]] = []

    result = run_command(
        [PYTHON, "-c", script],
        options=CommandOptions(on_line=lambda stream, line: seen.append((stream, line))),
    )

    assert result.stdout == "first\nlast"
    assert seen == [("stdout", "first"), ("stdout", "last")]


def test_missing_executable_raises() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["commitgate-definitely-missing-tool"])


def test_empty_command_rejected() -> None:
    with pytest.raises(ValueError):
        run_command([])
