# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Write the pre-commit hook script into ``.git/hooks``."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Final

from ..core.logging import info, ok, warn

HOOK_NAME: Final[str] = "pre-commit"
HOOK_MARKER: Final[str] = "# managed-by: commitgate"

_HOOK_TEMPLATE: Final[str] = """#!{python}
{marker}
from pathlib import Path

from commitgate.cli import app

# The project root is fixed relative to this script: <root>/.git/hooks/pre-commit.
ROOT = Path(__file__).resolve().parents[2]

app(args=["run", "--root", str(ROOT)], prog_name="commitgate")
"""


@dataclass(slots=True)
class InstallResult:
    """Outcome of a hook installation attempt."""

    hook_path: Path
    installed: bool
    backup: Path | None = None


def render_hook_script(python: str | None = None) -> str:
    """Return the hook script body bound to ``python``.

    Args:
        python: Interpreter used in the shebang; defaults to the running one.

    Returns:
        str: Executable hook script source.
    """

    return _HOOK_TEMPLATE.format(python=python or sys.executable, marker=HOOK_MARKER)


def _is_managed(path: Path) -> bool:
    try:
        return HOOK_MARKER in path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return False


def install_hook(
    root: Path,
    *,
    hooks_dir: Path | None = None,
    dry_run: bool = False,
    force: bool = False,
    use_emoji: bool = True,
) -> InstallResult:
    """Install the pre-commit hook for the repository at ``root``.

    A foreign hook already present is renamed with a timestamped backup
    suffix unless ``force`` is set, in which case it is overwritten in place.
    A hook previously written by this installer is always overwritten.

    Args:
        root: Repository root containing ``.git``.
        hooks_dir: Optional override for the target hooks directory.
        dry_run: When ``True`` report actions without touching the filesystem.
        force: Overwrite a foreign hook without keeping a backup.
        use_emoji: Whether log output may include emoji.

    Returns:
        InstallResult: Installed hook location and any backup made.

    Raises:
        FileNotFoundError: If ``root`` is not a git repository.
    """

    project_root = root.resolve()
    git_dir = project_root / ".git"
    if not git_dir.is_dir():
        raise FileNotFoundError(f"Not a git repository (missing .git directory): {project_root}")

    target_dir = hooks_dir or git_dir / "hooks"
    destination = target_dir / HOOK_NAME
    backup: Path | None = None

    if (destination.exists() or destination.is_symlink()) and not _is_managed(destination):
        if force:
            verb = "Would overwrite" if dry_run else "Overwriting"
            warn(f"{verb} existing {HOOK_NAME} hook at {destination} without backup", use_emoji=use_emoji)
            if not dry_run:
                destination.unlink()
        else:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
            backup = destination.with_name(f"{HOOK_NAME}.backup.{timestamp}")
            verb = "Would back up" if dry_run else "Backing up"
            info(f"{verb} existing {HOOK_NAME} hook to {backup}", use_emoji=use_emoji)
            if not dry_run:
                destination.rename(backup)

    if dry_run:
        ok(f"Dry run complete: would install {destination}", use_emoji=use_emoji)
        return InstallResult(hook_path=destination, installed=False, backup=backup)

    target_dir.mkdir(parents=True, exist_ok=True)
    if destination.is_symlink():
        warn(f"Replacing symlinked hook at {destination}", use_emoji=use_emoji)
        destination.unlink()
    destination.write_text(render_hook_script(), encoding="utf-8")
    destination.chmod(0o755)
    ok(f"Installed {HOOK_NAME} hook at {destination}", use_emoji=use_emoji)
    return InstallResult(hook_path=destination, installed=True, backup=backup)


__all__ = ["HOOK_MARKER", "HOOK_NAME", "InstallResult", "install_hook", "render_hook_script"]
