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

from dataclasses import dataclass


@dataclass
class InstallArgs:
    """Typed container for install command arguments."""

    config: str | None = None
    source: str | None = None
    dry_run: bool = False
    force: bool = False
    backup: bool | None = None
    verbose: bool = False
    quiet: bool = False


@dataclass
class UninstallArgs:
    """Typed container for uninstall command arguments."""

    config: str | None = None
    source: str | None = None
    dry_run: bool = False
    force: bool = False
    verbose: bool = False
    quiet: bool = False


@dataclass
class StatusArgs:
    config: str | None = None
    source: str | None = None
    verbose: bool = False
    quiet: bool = False


@dataclass
class RestoreArgs:
    """Typed container for restore command arguments."""

    config: str | None = None
    file: str | None = None
    version: str | None = None
    keep_backups: bool | None = None
    dry_run: bool = False
    backup_current: bool = True
    quiet: bool = False


@dataclass
class BackupsArgs:
    config: str | None = None
    file: str | None = None
    quiet: bool = False


@dataclass
class ClearBackupsArgs:
    config: str | None = None
    assume_yes: bool = False
    quiet: bool = False
