# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pre-commit quality gate running external checks against staged files."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
