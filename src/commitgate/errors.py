# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception types shared across the quality gate."""

from __future__ import annotations

from collections.abc import Sequence


class InfrastructureError(RuntimeError):
    """Raised when the environment prevents the gate from running at all.

    Infrastructure errors are never quality failures: they indicate that a
    required version-control query failed or an executable the gate itself
    depends on is unavailable.
    """

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


__all__ = ["ConfigError", "InfrastructureError"]
