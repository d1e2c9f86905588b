# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console presentation of stage progress, failures, and the final verdict."""

from __future__ import annotations

from typing import Final

from rich.console import Console
from rich.text import Text

from .core.logging import emoji, section
from .core.runtime.process import StreamName
from .models import CheckResult

FAILURE_MARKER: Final[str] = "✘"
DONE_MESSAGE: Final[str] = "Done!"
TITLE: Final[str] = "Code Quality Tool"


def format_failure(text: str) -> str:
    """Collapse ``text`` onto a single marker-prefixed line.

    Args:
        text: Raw failure output, possibly spanning many lines.

    Returns:
        str: Marker followed by the text with whitespace runs folded to one space.
    """

    return f"{FAILURE_MARKER} {' '.join(text.split())}"


class ResultReporter:
    """Write gate progress to a Rich console.

    The reporter never raises and never decides the outcome; it only renders
    what the pipeline hands it.
    """

    def __init__(
        self,
        console: Console,
        *,
        use_emoji: bool = True,
        use_color: bool = False,
        debug: bool = False,
    ) -> None:
        self._console = console
        self._use_emoji = use_emoji
        self._use_color = use_color
        self._debug = debug

    def title(self, text: str = TITLE) -> None:
        self._console.print(Text(text, style="bold white on blue"))

    def task(self, text: str) -> None:
        section(Text(text, style="underline"), use_color=self._use_color, console=self._console)

    def done(self) -> None:
        self._console.print(Text(DONE_MESSAGE, style="green"))

    def info(self, message: str) -> None:
        prefix = emoji("ℹ️ ", self._use_emoji)
        self._console.print(Text(f"{prefix}{message}", style="cyan"))

    def advisory(self, message: str) -> None:
        prefix = emoji("⚠️ ", self._use_emoji)
        self._console.print(Text(f"{prefix}{message}", style="yellow"))

    def report(self, stage: str, result: CheckResult) -> tuple[str, ...]:
        """Render the failures of ``stage`` and return the formatted lines.

        Args:
            stage: Display name of the stage that produced ``result``.
            result: Failure text keyed by path.

        Returns:
            tuple[str, ...]: One formatted line per failure, in result order.
        """

        lines = tuple(format_failure(text) for text in result.values())
        if lines:
            self._console.print(Text(f"{stage}: {len(lines)} failure(s)", style="bold red"))
        for line in lines:
            self._console.print(Text(line, style="red"))
        return lines

    def stream_line(self, stream: StreamName, line: str) -> None:
        """Echo a live output line, highlighting stderr."""

        style = "red" if stream == "stderr" else None
        self._console.print(Text.from_ansi(line, style=style or ""))

    def debug(self, message: str) -> None:
        if self._debug:
            self._console.print(Text(f"[debug] {message}", style="dim"))

    def blocked(self) -> None:
        prefix = emoji("❌ ", self._use_emoji)
        self._console.print()
        self._console.print(Text(f"{prefix}There are errors in your code; commit aborted.", style="bold white on red"))

    def passed(self) -> None:
        prefix = emoji("✅ ", self._use_emoji)
        self._console.print()
        self._console.print(Text(f"{prefix}Well done! Your code is ready to be committed.", style="bold green"))


__all__ = ["DONE_MESSAGE", "FAILURE_MARKER", "ResultReporter", "TITLE", "format_failure"]
