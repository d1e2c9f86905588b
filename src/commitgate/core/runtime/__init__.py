# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process execution primitives."""

from __future__ import annotations

from .process import CommandOptions, LineCallback, ProcessResult, StreamName, TimeoutKind, run_command

__all__ = ["CommandOptions", "LineCallback", "ProcessResult", "StreamName", "TimeoutKind", "run_command"]
