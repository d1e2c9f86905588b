# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from helpers.fakes import FakeRunner, git
from rich.console import Console

from commitgate.reporting import ResultReporter


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Return an initialised git repository without commits."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init")
    git(repo, "config", "user.name", "CommitGateTest")
    git(repo, "config", "user.email", "commitgate@example.com")
    git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def console_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(console_buffer: io.StringIO) -> ResultReporter:
    console = Console(file=console_buffer, width=200, no_color=True, force_terminal=False, emoji=False)
    return ResultReporter(console, use_emoji=False)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
