# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Staged file discovery and filtering."""

from __future__ import annotations

from .filters import PathFilter
from .git import GitRunner, StagedFileCollector

__all__ = ["GitRunner", "PathFilter", "StagedFileCollector"]
