# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Narrow staged paths down to checkable source files."""

from __future__ import annotations

import re
from collections.abc import Iterable

from ..models import SourceFileSet


class PathFilter:
    """Keep paths under the source directory carrying the source extension."""

    def __init__(self, pattern: re.Pattern[str]) -> None:
        self._pattern = pattern

    @classmethod
    def for_source(cls, source_dir: str = "src", extension: str = "php") -> PathFilter:
        """Build a filter for ``<source_dir>/**/*.<extension>``.

        Args:
            source_dir: Directory relative to the project root.
            extension: File extension without the leading dot.

        Returns:
            PathFilter: Filter anchored to the given directory and extension.
        """

        directory = re.escape(source_dir.strip("/"))
        suffix = re.escape(extension.lstrip("."))
        return cls(re.compile(rf"^{directory}/(.*)\.{suffix}$"))

    def matches(self, path: str) -> bool:
        return self._pattern.match(path) is not None

    def filter(self, staged: Iterable[str]) -> SourceFileSet:
        """Return the subset of ``staged`` matching the source pattern, in order."""

        return tuple(path for path in staged if self.matches(path))


__all__ = ["PathFilter"]
