# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Warn when a dependency manifest is committed without its lock file."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DependencyManifestChecker:
    """Detect a staged manifest whose lock file was left out of the commit."""

    manifest_file: str = "composer.json"
    lock_file: str = "composer.lock"

    def check(self, staged: Iterable[str]) -> str | None:
        """Return an advisory message when the lock file is missing.

        Args:
            staged: Root-relative staged paths.

        Returns:
            str | None: Advisory text, or ``None`` when nothing needs attention.
        """

        paths = set(staged)
        if self.manifest_file in paths and self.lock_file not in paths:
            return f"{self.manifest_file} is staged without {self.lock_file}; remember to commit the updated lock file."
        return None


__all__ = ["DependencyManifestChecker"]
