# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Install the gate as the repository's pre-commit hook."""

from __future__ import annotations

from .installer import HOOK_MARKER, HOOK_NAME, InstallResult, install_hook, render_hook_script

__all__ = ["HOOK_MARKER", "HOOK_NAME", "InstallResult", "install_hook", "render_hook_script"]
