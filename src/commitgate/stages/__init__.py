# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Quality check stages driven by :class:`StageSpec` descriptions."""

from __future__ import annotations

from .base import FileStage, ProjectStage, Stage, StageContext, StageRunner, StageSink, build_stage, build_stages
from .catalog import default_stages
from .models import FailureMessage, InvocationMode, StageSpec

__all__ = [
    "FailureMessage",
    "FileStage",
    "InvocationMode",
    "ProjectStage",
    "Stage",
    "StageContext",
    "StageRunner",
    "StageSink",
    "StageSpec",
    "build_stage",
    "build_stages",
    "default_stages",
]
