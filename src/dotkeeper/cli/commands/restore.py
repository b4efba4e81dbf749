#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import functools

import typer

from ..core.common import _resolve_common, _run_cli
from ..core.types import RestoreArgs
from ..flows.restore import run_restore_command


def register(app: typer.Typer) -> None:
    app.command(
        help=(
            "Put backed-up files back into the target directory.\n\n"
            "Without --file every file with a backup gets its latest version.\n"
            "A restored backup is removed unless --keep-backups is given.\n\n"
            "Examples:\n"
            "  dotkeeper restore\n"
            "  dotkeeper restore --file .bashrc --version 20260101T120000\n"
        )
    )(restore)


def restore(
    ctx: typer.Context,
    file: str | None = typer.Option(
        None,
        "--file",
        help="Restore only this path (relative to the target directory).",
        rich_help_panel="Selection",
    ),
    version: str | None = typer.Option(
        None,
        "--version",
        help="Backup version or unique prefix (default: latest). Requires --file.",
        rich_help_panel="Selection",
    ),
    keep_backups: bool | None = typer.Option(
        None,
        "--keep-backups/--no-keep-backups",
        help="Keep the restored backup in the store (default: from config, off).",
        show_default=False,
        rich_help_panel="Behavior",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Show what would be restored without touching any file.",
        rich_help_panel="Behavior",
    ),
    no_backup_current: bool = typer.Option(
        False,
        "--no-backup-current",
        help="Do not save the current file before it is replaced.",
        rich_help_panel="Behavior",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this config file.",
        rich_help_panel="Config",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output.",
        rich_help_panel="Output",
    ),
) -> None:
    config_value, quiet_value, debug_value = _resolve_common(ctx, config, quiet)
    args = RestoreArgs(
        config=config_value,
        file=file,
        version=version,
        keep_backups=keep_backups,
        dry_run=dry_run,
        backup_current=not no_backup_current,
        quiet=quiet_value,
    )
    _run_cli(functools.partial(run_restore_command, args), debug=debug_value)
