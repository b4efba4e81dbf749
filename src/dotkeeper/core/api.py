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

"""Functional entry points for the command layer.

Every root directory is passed in explicitly; nothing here reads the
environment or the config file.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .backups import BackupStore
from .models import (
    BackupRecord,
    InstallOptions,
    ReconciliationResult,
    StatusEntry,
    UninstallOptions,
)
from .reconcile import OutcomeCallback, Reconciler
from .restore import Restorer
from .status import StatusReporter


def install(
    source_dir: str | Path,
    target_dir: str | Path,
    backup_dir: str | Path,
    options: InstallOptions = InstallOptions(),
    *,
    exclude: Iterable[str] = (),
    skip_dirs: Iterable[str | Path] = (),
    on_outcome: OutcomeCallback | None = None,
) -> ReconciliationResult:
    reconciler = Reconciler(
        source_dir,
        target_dir,
        BackupStore(backup_dir),
        exclude=exclude,
        skip_dirs=(backup_dir, *skip_dirs),
    )
    return reconciler.install(options, on_outcome=on_outcome)


def uninstall(
    source_dir: str | Path,
    target_dir: str | Path,
    backup_dir: str | Path,
    options: UninstallOptions = UninstallOptions(),
    *,
    exclude: Iterable[str] = (),
    skip_dirs: Iterable[str | Path] = (),
    on_outcome: OutcomeCallback | None = None,
) -> ReconciliationResult:
    reconciler = Reconciler(
        source_dir,
        target_dir,
        BackupStore(backup_dir),
        exclude=exclude,
        skip_dirs=(backup_dir, *skip_dirs),
    )
    return reconciler.uninstall(options, on_outcome=on_outcome)


def status(
    source_dir: str | Path,
    target_dir: str | Path,
    backup_dir: str | Path | None = None,
    *,
    verbose: bool = False,
    exclude: Iterable[str] = (),
    skip_dirs: Iterable[str | Path] = (),
) -> list[StatusEntry]:
    store = BackupStore(backup_dir) if backup_dir is not None else None
    reporter = StatusReporter(
        source_dir,
        target_dir,
        store=store,
        exclude=exclude,
        skip_dirs=(*skip_dirs, backup_dir) if backup_dir is not None else tuple(skip_dirs),
    )
    return list(reporter.report(verbose=verbose).entries)


def list_backups(backup_dir: str | Path, relative_path: str | None = None) -> list[BackupRecord]:
    return BackupStore(backup_dir).list(relative_path)


def clear_backups(backup_dir: str | Path) -> int:
    return BackupStore(backup_dir).clear()


def restore(
    backup_dir: str | Path,
    target_dir: str | Path,
    relative_path: str | None = None,
    version: str | None = None,
    *,
    keep_backup: bool = False,
    dry_run: bool = False,
    source_dir: str | Path | None = None,
    backup_current: bool = True,
    on_outcome: OutcomeCallback | None = None,
) -> ReconciliationResult:
    restorer = Restorer(BackupStore(backup_dir), target_dir, source_root=source_dir)
    return restorer.restore(
        relative_path,
        version,
        keep_backup=keep_backup,
        dry_run=dry_run,
        backup_current=backup_current,
        on_outcome=on_outcome,
    )
