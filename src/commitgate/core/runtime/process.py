# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution with wall-clock and idle timeouts."""

from __future__ import annotations

import codecs
import os
import queue
import shutil

# Bandit: subprocess usage is intentional—we provide a controlled wrapper around
# external tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
import threading
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final, Literal

StreamName = Literal["stdout", "stderr"]
LineCallback = Callable[[StreamName, str], None]

TIMEOUT_RETURNCODE: Final[int] = 124
_READER_JOIN_SECONDS: Final[float] = 1.0


class TimeoutKind(str, Enum):
    """Describe which ceiling terminated a subprocess."""

    TOTAL = "total"
    IDLE = "idle"


@dataclass(slots=True)
class CommandOptions:
    """Command execution options shared by every subprocess the gate launches."""

    cwd: Path | None = None
    env: Mapping[str, str] = field(default_factory=dict)
    total_timeout: float | None = None
    idle_timeout: float | None = None
    on_line: LineCallback | None = None


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Captured outcome of a finished (or terminated) subprocess."""

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: TimeoutKind | None = None

    @property
    def ok(self) -> bool:
        """Return ``True`` when the process exited cleanly within its timeouts.

        Returns:
            bool: ``True`` for a zero exit status without timeout termination.
        """

        return self.returncode == 0 and self.timed_out is None

    @property
    def output(self) -> str:
        """Return stdout followed by stderr, skipping empty streams.

        Returns:
            str: Combined textual output of the process.
        """

        return "\n".join(part for part in (self.stdout, self.stderr) if part)


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


_CHUNK_SIZE: Final[int] = 4096

ChunkQueue = queue.Queue[tuple[StreamName, bytes | None]]


class _StreamBuffer:
    """Decode raw chunks of one pipe and split them into lines for ``on_line``."""

    def __init__(self, stream: StreamName, on_line: LineCallback | None) -> None:
        self._stream = stream
        self._on_line = on_line
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._chunks: list[str] = []
        self._pending = ""
        self._closed = False

    @property
    def text(self) -> str:
        return "".join(self._chunks)

    def feed(self, data: bytes) -> None:
        self._consume(self._decoder.decode(data))

    def close(self) -> None:
        """Flush the decoder and emit a trailing line without newline."""

        if self._closed:
            return
        self._closed = True
        self._consume(self._decoder.decode(b"", final=True))
        if self._pending:
            self._emit(self._pending)
            self._pending = ""

    def _consume(self, text: str) -> None:
        if not text:
            return
        self._chunks.append(text)
        *complete, self._pending = (self._pending + text).split("\n")
        for line in complete:
            self._emit(line)

    def _emit(self, line: str) -> None:
        if self._on_line is not None:
            self._on_line(self._stream, line.rstrip("\r"))


def _pump(fd: int, stream: StreamName, sink: ChunkQueue) -> None:
    """Forward raw chunks read from ``fd`` into ``sink`` followed by an end marker."""

    try:
        for chunk in iter(lambda: os.read(fd, _CHUNK_SIZE), b""):
            sink.put((stream, chunk))
    except OSError:
        pass
    finally:
        sink.put((stream, None))


def _drain(chunks: ChunkQueue, buffers: dict[StreamName, _StreamBuffer]) -> None:
    """Feed chunks still queued after termination into ``buffers``."""

    while True:
        try:
            stream, chunk = chunks.get_nowait()
        except queue.Empty:
            return
        if chunk is not None:
            buffers[stream].feed(chunk)


def _expired(started: float, last_output: float, options: CommandOptions) -> TimeoutKind | None:
    now = time.monotonic()
    if options.total_timeout is not None and now - started >= options.total_timeout:
        return TimeoutKind.TOTAL
    if options.idle_timeout is not None and now - last_output >= options.idle_timeout:
        return TimeoutKind.IDLE
    return None


def _next_wait(started: float, last_output: float, options: CommandOptions) -> float | None:
    now = time.monotonic()
    waits = []
    if options.total_timeout is not None:
        waits.append(options.total_timeout - (now - started))
    if options.idle_timeout is not None:
        waits.append(options.idle_timeout - (now - last_output))
    if not waits:
        return None
    return max(0.0, min(waits))


def _wait_within_total(
    process: subprocess.Popen[bytes],
    started: float,
    options: CommandOptions,
) -> TimeoutKind | None:
    """Wait for exit after both pipes closed, still honouring the total ceiling."""

    remaining = None
    if options.total_timeout is not None:
        remaining = max(0.0, options.total_timeout - (time.monotonic() - started))
    try:
        process.wait(timeout=remaining)
    except subprocess.TimeoutExpired:
        process.kill()
        process.wait()
        return TimeoutKind.TOTAL
    return None


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> ProcessResult:
    """Execute ``args`` and capture its output as it is produced.

    Both pipes are read concurrently in raw chunks, so any byte written by the
    child counts as activity for the idle ceiling, newline or not. Complete
    lines are forwarded to ``options.on_line`` as they arrive. The process is
    killed once either the total or the idle ceiling elapses, including while
    it keeps running after closing its pipes; the partial output gathered so
    far is preserved in the returned result.

    Args:
        args: Command and arguments. The executable is resolved on ``PATH``.
        options: Execution options; defaults run without timeouts.

    Returns:
        ProcessResult: Exit status, captured streams, and timeout marker.

    Raises:
        FileNotFoundError: If the executable cannot be located.
        ValueError: If ``args`` is empty.
    """

    opts = options or CommandOptions()
    normalized = _normalize_args(args)
    env = os.environ.copy()
    env.update(opts.env)

    buffers: dict[StreamName, _StreamBuffer] = {
        "stdout": _StreamBuffer("stdout", opts.on_line),
        "stderr": _StreamBuffer("stderr", opts.on_line),
    }
    timed_out: TimeoutKind | None = None
    chunks: ChunkQueue = queue.Queue()

    # Bandit: commands originate from vetted stage configurations; we pass
    # argument lists directly without shell expansion.
    with subprocess.Popen(  # nosec B603
        normalized,
        cwd=str(opts.cwd) if opts.cwd is not None else None,
        env=env,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    ) as process:
        assert process.stdout is not None and process.stderr is not None
        readers = [
            threading.Thread(target=_pump, args=(process.stdout.fileno(), "stdout", chunks), daemon=True),
            threading.Thread(target=_pump, args=(process.stderr.fileno(), "stderr", chunks), daemon=True),
        ]
        for reader in readers:
            reader.start()

        started = last_output = time.monotonic()
        open_streams = len(readers)
        while open_streams:
            timed_out = _expired(started, last_output, opts)
            if timed_out is not None:
                process.kill()
                break
            try:
                stream, chunk = chunks.get(timeout=_next_wait(started, last_output, opts))
            except queue.Empty:
                continue
            if chunk is None:
                buffers[stream].close()
                open_streams -= 1
                continue
            last_output = time.monotonic()
            buffers[stream].feed(chunk)

        if timed_out is None:
            timed_out = _wait_within_total(process, started, opts)
        else:
            process.wait()
        for reader in readers:
            reader.join(timeout=_READER_JOIN_SECONDS)
        _drain(chunks, buffers)
        for buffer in buffers.values():
            buffer.close()

    returncode = TIMEOUT_RETURNCODE if timed_out is not None else process.returncode
    return ProcessResult(
        command=tuple(normalized),
        returncode=returncode,
        stdout=buffers["stdout"].text,
        stderr=buffers["stderr"].text,
        timed_out=timed_out,
    )


__all__ = [
    "CommandOptions",
    "LineCallback",
    "ProcessResult",
    "StreamName",
    "TIMEOUT_RETURNCODE",
    "TimeoutKind",
    "run_command",
]
