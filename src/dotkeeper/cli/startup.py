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

from rich.traceback import install as install_rich_traceback

from ..config import UiDefaults, load_cli_defaults, migrate_legacy_config
from .api import configure_ui, console
from .core.log import _warn


def run_startup(
    *,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: str | None = None,
) -> UiDefaults:
    """Apply global UI flags and config defaults; return the effective UI settings."""
    if debug:
        install_rich_traceback(show_locals=True)
    configure_ui(no_color=no_color)
    migrated = migrate_legacy_config(config)
    try:
        defaults = load_cli_defaults(config).ui
    except ValueError as exc:
        _warn(f"ignoring config defaults: {exc}", quiet=quiet)
        defaults = UiDefaults()
    effective = UiDefaults(quiet=quiet or defaults.quiet, no_color=no_color or defaults.no_color)
    if effective.no_color != no_color:
        configure_ui(no_color=effective.no_color)
    if migrated is not None and not effective.quiet:
        console.print(f"[dim]Migrated legacy config to {migrated}[/dim]")
    return effective
