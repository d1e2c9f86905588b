# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Advisory checks that never block a commit."""

from __future__ import annotations

from .manifest import DependencyManifestChecker

__all__ = ["DependencyManifestChecker"]
