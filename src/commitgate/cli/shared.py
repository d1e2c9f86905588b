# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, consoles)."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console

from ..core.logging import fail as core_fail
from ..core.logging import ok as core_ok
from ..core.logging import warn as core_warn
from ..pipeline import ExitCode
from ..runtime.console import detect_tty, get_console_manager


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = ExitCode.INFRASTRUCTURE) -> None:
        super().__init__(message)
        self.exit_code = int(exit_code)


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI presentation flags."""

    use_emoji: bool
    use_color: bool

    def fail(self, message: str) -> None:
        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji, use_color=self.use_color)


def build_cli_logger(*, emoji: bool, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` honouring emoji and colour preferences.

    Args:
        emoji: Whether log output may include emoji glyphs.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger bound to the shared console manager.
    """

    return CLILogger(use_emoji=emoji, use_color=detect_tty() and not no_color)


def build_console(*, emoji: bool, no_color: bool = False) -> Console:
    """Return the shared Rich console for gate output."""

    return get_console_manager().get(color=not no_color, emoji=emoji)


__all__ = ["CLIError", "CLILogger", "build_cli_logger", "build_console"]
