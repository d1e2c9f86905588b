# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the gate and hook installer."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..config import load_config
from ..errors import ConfigError, InfrastructureError
from ..hooks import install_hook
from ..pipeline import ExitCode, GatePipeline
from ..reporting import ResultReporter
from ..runtime.console.manager import detect_tty
from .shared import CLIError, build_cli_logger, build_console

app = typer.Typer(
    name="commitgate",
    help="Pre-commit quality gate for staged source files.",
    add_completion=False,
)

RootOption = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root (defaults to the current directory).", file_okay=False),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="TOML configuration file overriding [tool.commitgate]."),
]
NoColorOption = Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")]
NoEmojiOption = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in output.")]
DebugOption = Annotated[bool, typer.Option("--debug", help="Print each check command before it runs.")]


def run_gate(
    root: Path,
    *,
    config_path: Path | None = None,
    no_color: bool = False,
    no_emoji: bool = False,
    debug: bool = False,
) -> int:
    """Run the gate for ``root`` and return the process exit status.

    Args:
        root: Project root directory.
        config_path: Optional explicit configuration file.
        no_color: Disable colour output.
        no_emoji: Disable emoji output.
        debug: Print check commands as they run.

    Returns:
        int: ``0`` when the commit may proceed, ``1`` when a check failed.

    Raises:
        CLIError: For configuration or infrastructure failures.
    """

    project_root = root.resolve()
    try:
        config = load_config(project_root, config_path=config_path)
    except ConfigError as exc:
        raise CLIError(f"Invalid configuration: {exc}") from exc

    console = build_console(emoji=not no_emoji, no_color=no_color)
    reporter = ResultReporter(
        console,
        use_emoji=not no_emoji,
        use_color=not no_color and detect_tty(),
        debug=debug,
    )
    pipeline = GatePipeline.from_config(project_root, config, reporter)
    try:
        outcome = pipeline.execute()
    except InfrastructureError as exc:
        raise CLIError(f"Unable to inspect staged files: {exc}") from exc
    return int(outcome.exit_code)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Run the gate when no sub-command is given."""

    if ctx.invoked_subcommand is None:
        run(root=Path.cwd())


@app.command("run")
def run(
    root: RootOption = Path(),
    config: ConfigOption = None,
    no_color: NoColorOption = False,
    no_emoji: NoEmojiOption = False,
    debug: DebugOption = False,
) -> None:
    """Check staged source files and block the commit on failure."""

    logger = build_cli_logger(emoji=not no_emoji, no_color=no_color)
    try:
        code = run_gate(root, config_path=config, no_color=no_color, no_emoji=no_emoji, debug=debug)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=code)


@app.command("install-hook")
def install_hook_command(
    root: RootOption = Path(),
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Report actions without writing files.")] = False,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing foreign hook without keeping a backup."),
    ] = False,
    no_emoji: NoEmojiOption = False,
) -> None:
    """Install commitgate as the repository's pre-commit hook."""

    logger = build_cli_logger(emoji=not no_emoji)
    try:
        install_hook(root, dry_run=dry_run, force=force, use_emoji=not no_emoji)
    except FileNotFoundError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=int(ExitCode.INFRASTRUCTURE)) from exc
    raise typer.Exit(code=int(ExitCode.SUCCESS))


__all__ = ["app", "run_gate"]
