# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Collect files staged for the next commit."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Final

from ..core.runtime.process import CommandOptions, ProcessResult, run_command
from ..errors import InfrastructureError
from ..models import DEFAULT_ALLOWED_STATUSES, EMPTY_TREE, FileStatus, StagedFileSet, diff_filter

GitRunner = Callable[[Sequence[str], Path], ProcessResult]

HEAD_REF: Final[str] = "HEAD"


def _default_runner(cmd: Sequence[str], root: Path) -> ProcessResult:
    return run_command(cmd, options=CommandOptions(cwd=root))


class StagedFileCollector:
    """List staged paths whose status is in the allowed set.

    Status filtering happens inside git through ``--diff-filter`` so entries
    with other statuses never reach the gate.
    """

    def __init__(
        self,
        root: Path,
        *,
        allowed_statuses: Sequence[FileStatus] = DEFAULT_ALLOWED_STATUSES,
        empty_tree: str = EMPTY_TREE,
        runner: GitRunner | None = None,
    ) -> None:
        self._root = root
        self._allowed = tuple(allowed_statuses)
        self._empty_tree = empty_tree
        self._runner = runner or _default_runner

    def resolve_base(self) -> str:
        """Return the revision staged changes are compared against.

        ``HEAD`` is used when it exists. Repositories without commits, or a
        failing lookup, fall back to the empty tree.

        Returns:
            str: ``HEAD`` or the empty tree object id.
        """

        try:
            result = self._runner(["git", "rev-parse", "--verify", "--quiet", HEAD_REF], self._root)
        except FileNotFoundError:
            return self._empty_tree
        return HEAD_REF if result.returncode == 0 else self._empty_tree

    def diff_command(self, base: str) -> list[str]:
        """Return the git invocation listing staged paths against ``base``."""

        return [
            "git",
            "diff-index",
            "--cached",
            "--name-only",
            f"--diff-filter={diff_filter(self._allowed)}",
            base,
        ]

    def collect(self) -> StagedFileSet:
        """Return the staged paths in git's output order.

        Returns:
            StagedFileSet: Root-relative staged paths; empty when nothing matches.

        Raises:
            InfrastructureError: If git is unavailable or the diff query fails.
        """

        cmd = self.diff_command(self.resolve_base())
        try:
            result = self._runner(cmd, self._root)
        except FileNotFoundError as exc:
            raise InfrastructureError(str(exc), command=cmd) from exc
        if result.returncode != 0:
            raise InfrastructureError(
                f"git diff-index exited with status {result.returncode}: {result.stderr.strip() or '<no stderr>'}",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return tuple(token for token in result.stdout.split() if token)


__all__ = ["GitRunner", "HEAD_REF", "StagedFileCollector"]
