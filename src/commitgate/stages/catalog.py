# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in stage catalog for PHP projects."""

from __future__ import annotations

from .models import FailureMessage, InvocationMode, StageSpec

LINT = StageSpec(
    name="Running PHPLint",
    command=("php", "-l", "{file}"),
)

STYLE_FIXER = StageSpec(
    name="Checking code style with PHP-CS-Fixer",
    command=(
        "php-cs-fixer",
        "fix",
        "--dry-run",
        "--verbose",
        "--config=.php-cs-fixer.dist.php",
        "{file}",
    ),
)

STATIC_ANALYSIS = StageSpec(
    name="Checking code standard with PHPCS",
    command=("phpcs", "--standard=phpcs.xml", "--report=summary", "-q", "{file}"),
    failure_message=FailureMessage.SYNTHESIZED,
)

MESS_DETECTION = StageSpec(
    name="Checking code mess with PHPMD",
    command=(
        "phpmd",
        "{file}",
        "text",
        "phpmd.xml",
        "--suffixes",
        "php",
        "--reportfile",
        "build/phpmd.txt",
    ),
)

TEST_RUNNER = StageSpec(
    name="Running unit tests with PHPUnit",
    command=(
        "phpunit",
        "-c",
        "phpunit.xml",
        "--log-junit",
        "build/junit.xml",
        "--colors=always",
        "--columns={columns}",
    ),
    mode=InvocationMode.PROJECT,
    stream_output=True,
)


def default_stages() -> tuple[StageSpec, ...]:
    """Return the built-in stages in execution order.

    Returns:
        tuple[StageSpec, ...]: Lint, style fixer, static analysis, mess
        detection, then the project-wide test runner.
    """

    return (LINT, STYLE_FIXER, STATIC_ANALYSIS, MESS_DETECTION, TEST_RUNNER)


__all__ = [
    "LINT",
    "MESS_DETECTION",
    "STATIC_ANALYSIS",
    "STYLE_FIXER",
    "TEST_RUNNER",
    "default_stages",
]
