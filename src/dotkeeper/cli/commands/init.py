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

from pathlib import Path

import typer

from ...config import init_user_config
from ..api import print_completion_panel
from ..core.common import _resolve_common, _run_cli


def register(app: typer.Typer) -> None:
    app.command(
        help=(
            "Write a fresh config file pointing at a source directory.\n\n"
            "Examples:\n"
            "  dotkeeper init --source-dir ~/dotfiles\n"
            "  dotkeeper init --source-dir ~/dotfiles --target-dir /tmp/home --force\n"
        )
    )(init)


def init(
    ctx: typer.Context,
    source_dir: str = typer.Option(
        ...,
        "--source-dir",
        "-s",
        help="Directory holding the dotfiles to install.",
        rich_help_panel="Config",
    ),
    target_dir: str | None = typer.Option(
        None,
        "--target-dir",
        help="Directory to install into (default: home directory).",
        rich_help_panel="Config",
    ),
    backup_dir: str | None = typer.Option(
        None,
        "--backup-dir",
        help="Directory for backups (default: user data directory).",
        rich_help_panel="Config",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing config file.",
        rich_help_panel="Behavior",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Write this config file instead of the default one.",
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

    def _run() -> None:
        path = init_user_config(
            _absolute_dir(source_dir),
            path=config_value,
            force=force,
            target_dir=target_dir,
            backup_dir=backup_dir,
        )
        print_completion_panel(
            "Config written",
            [str(path), "Next: dotkeeper install --dry-run"],
            quiet=quiet_value,
        )

    _run_cli(_run, debug=debug_value)


def _absolute_dir(value: str) -> Path:
    path = Path(value).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"source directory not found: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"source directory is not a directory: {path}")
    return path.resolve()
