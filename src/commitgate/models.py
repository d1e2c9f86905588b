# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data types shared across discovery, stages, and reporting."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final

PROJECT_KEY: Final[str] = "<project>"
EMPTY_TREE: Final[str] = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

StagedFileSet = tuple[str, ...]
SourceFileSet = tuple[str, ...]
CheckResult = Mapping[str, str]


class FileStatus(str, Enum):
    """Enumerate the change-status codes git reports for diffed paths."""

    ADDED = "A"
    PAIRING_BROKEN = "B"
    COPIED = "C"
    DELETED = "D"
    MODIFIED = "M"
    RENAMED = "R"
    TYPE_CHANGED = "T"
    UNMERGED = "U"
    UNKNOWN = "X"


DEFAULT_ALLOWED_STATUSES: Final[tuple[FileStatus, ...]] = (FileStatus.ADDED, FileStatus.MODIFIED)


def diff_filter(statuses: tuple[FileStatus, ...]) -> str:
    """Return the ``--diff-filter`` argument value for ``statuses``.

    Args:
        statuses: Status codes the diff query should retain.

    Returns:
        str: Concatenation of the status characters in declaration order.
    """

    return "".join(status.value for status in statuses)


__all__ = [
    "CheckResult",
    "DEFAULT_ALLOWED_STATUSES",
    "EMPTY_TREE",
    "FileStatus",
    "PROJECT_KEY",
    "SourceFileSet",
    "StagedFileSet",
    "diff_filter",
]
