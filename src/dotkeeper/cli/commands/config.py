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

import os
import shlex
import subprocess
from pathlib import Path

import typer

from ...config import load_backup_config, resolve_config_path
from ..api import build_kv_table, console, panel
from ..core.common import _resolve_common, _run_cli

_CONFIG_HELP = (
    "Open the dotkeeper config file in an editor.\n\n"
    "The editor is taken from --editor, then $VISUAL / $EDITOR; otherwise the\n"
    "file is opened with the system default application.\n\n"
    "Examples:\n"
    "  dotkeeper config\n"
    "  dotkeeper config --print-path\n"
    "  dotkeeper config --show\n"
    '  dotkeeper config --editor "code -w"\n'
)


def register(app: typer.Typer) -> None:
    app.command(help=_CONFIG_HELP)(config)


def config(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Open this config file (overrides the default).",
        rich_help_panel="Config",
    ),
    editor: str | None = typer.Option(
        None,
        "--editor",
        "-e",
        help="Editor command (defaults to $VISUAL/$EDITOR; use 'default' for system opener).",
        rich_help_panel="Behavior",
    ),
    print_path: bool = typer.Option(
        False,
        "--print-path",
        help="Print the resolved config path and exit.",
        rich_help_panel="Behavior",
    ),
    show: bool = typer.Option(
        False,
        "--show",
        help="Print the effective directories and exit.",
        rich_help_panel="Behavior",
    ),
) -> None:
    config_value, quiet_value, debug_value = _resolve_common(ctx, config, False)

    def _run() -> None:
        path = resolve_config_path(config_value)
        if print_path:
            console.print(str(path), soft_wrap=True)
            return
        if show:
            _show_settings(path)
            return
        _open_in_editor(path, editor=editor, quiet=quiet_value)

    _run_cli(_run, debug=debug_value)


def _show_settings(path: Path) -> None:
    settings = load_backup_config(path)
    rows = [
        ("Config", f"{path}{'' if path.exists() else ' (missing)'}"),
        ("Source", str(settings.source_dir) if settings.source_dir else "-"),
        ("Target", str(settings.target_dir)),
        ("Backups", str(settings.backup_dir)),
        ("Backup on overwrite", "yes" if settings.defaults.enabled else "no"),
        ("Keep restored backups", "yes" if settings.defaults.keep else "no"),
    ]
    console.print(panel("Settings", build_kv_table(rows)))


def _open_in_editor(path: Path, *, editor: str | None, quiet: bool) -> None:
    if not path.exists():
        raise FileNotFoundError(
            f"config file not found: {path}; run `dotkeeper init --source-dir DIR`"
        )

    editor_cmd = _resolve_editor_command(editor)
    if editor_cmd is None:
        if not quiet:
            console.print(f"[dim]Opening {path}...[/dim]")
        typer.launch(str(path))
        return

    if not quiet:
        console.print(f"[dim]Opening {path} with {' '.join(editor_cmd)}...[/dim]")
    subprocess.run([*editor_cmd, str(path)], check=False)


def _resolve_editor_command(editor: str | None) -> list[str] | None:
    value = editor if editor is not None else os.environ.get("VISUAL") or os.environ.get("EDITOR")
    value = (value or "").strip()
    if not value or value.lower() in {"default", "system"}:
        return None
    return shlex.split(value, posix=os.name != "nt")
