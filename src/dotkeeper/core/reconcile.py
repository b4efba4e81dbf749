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

"""Install/uninstall state machine over the source catalog.

Every file is handled in isolation: an error on one entry is recorded in its
:class:`FileOutcome` and the batch moves on to the next catalog entry.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from .backups import BackupStore
from .catalog import PathCatalog
from .errors import BackupMissingError, BackupWriteError, ConflictError
from .fileops import atomic_copy, atomic_write_bytes, file_mode
from .models import (
    Action,
    BackupRecord,
    FileOutcome,
    FileState,
    InstallOptions,
    ReconciliationResult,
    UninstallOptions,
)
from .state import FileInspection, inspect_file

OutcomeCallback = Callable[[FileOutcome], None]


class Reconciler:
    def __init__(
        self,
        source_root: str | Path,
        target_root: str | Path,
        store: BackupStore,
        *,
        exclude: Iterable[str] = (),
        skip_dirs: Iterable[str | Path] = (),
    ) -> None:
        self.source_root = Path(source_root).expanduser()
        self.target_root = Path(target_root).expanduser()
        self.store = store
        self.catalog = PathCatalog(self.source_root, exclude=exclude, skip_dirs=skip_dirs)

    def install(
        self,
        options: InstallOptions = InstallOptions(),
        *,
        on_outcome: OutcomeCallback | None = None,
    ) -> ReconciliationResult:
        return self._run("install", options.dry_run, self._install_one, options, on_outcome)

    def uninstall(
        self,
        options: UninstallOptions = UninstallOptions(),
        *,
        on_outcome: OutcomeCallback | None = None,
    ) -> ReconciliationResult:
        return self._run("uninstall", options.dry_run, self._uninstall_one, options, on_outcome)

    def _run(
        self,
        operation: str,
        dry_run: bool,
        handler: Callable[[str, Any], FileOutcome],
        options: InstallOptions | UninstallOptions,
        on_outcome: OutcomeCallback | None,
    ) -> ReconciliationResult:
        outcomes: list[FileOutcome] = []
        for relative_path in self.catalog:
            try:
                outcome = handler(relative_path, options)
            except (OSError, ValueError) as exc:
                outcome = FileOutcome(relative_path, Action.SKIP, None, None, error=exc)
            outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
        return ReconciliationResult(operation=operation, outcomes=tuple(outcomes), dry_run=dry_run)

    def _install_one(self, relative_path: str, options: InstallOptions) -> FileOutcome:
        info = inspect_file(relative_path, self.source_root, self.target_root)
        state = info.state

        if state is FileState.UNTRACKED:
            return FileOutcome(relative_path, Action.SKIP, state, state, note=info.note)
        if state is FileState.INSTALLED:
            return FileOutcome(relative_path, Action.SKIP, state, state)
        if state is FileState.MISSING:
            return self._copy(relative_path, info, Action.COPY, options.dry_run)

        if not options.force:
            return FileOutcome(
                relative_path,
                Action.CONFLICT,
                state,
                state,
                error=ConflictError(
                    f"{relative_path} differs from source (use --force to overwrite)"
                ),
            )
        if not options.backup:
            return self._copy(relative_path, info, Action.OVERWRITE, options.dry_run)
        if options.dry_run:
            return FileOutcome(relative_path, Action.BACKUP_OVERWRITE, state, FileState.INSTALLED)
        try:
            record = self.store.save(
                relative_path,
                info.target_path.read_bytes(),
                mode=file_mode(info.target_path),
            )
        except BackupWriteError as exc:
            return FileOutcome(relative_path, Action.BACKUP_OVERWRITE, state, state, error=exc)
        outcome = self._copy(relative_path, info, Action.BACKUP_OVERWRITE, False)
        return FileOutcome(
            outcome.path,
            outcome.action,
            outcome.previous_state,
            outcome.new_state,
            error=outcome.error,
            backup=record,
        )

    def _copy(
        self,
        relative_path: str,
        info: FileInspection,
        action: Action,
        dry_run: bool,
    ) -> FileOutcome:
        if not dry_run:
            try:
                atomic_copy(info.source_path, info.target_path)
            except OSError as exc:
                return FileOutcome(relative_path, action, info.state, info.state, error=exc)
        return FileOutcome(relative_path, action, info.state, FileState.INSTALLED, note=info.note)

    def _uninstall_one(self, relative_path: str, options: UninstallOptions) -> FileOutcome:
        info = inspect_file(relative_path, self.source_root, self.target_root)
        state = info.state

        if state is FileState.MISSING:
            return FileOutcome(relative_path, Action.SKIP, state, state)
        if state is FileState.UNTRACKED:
            return FileOutcome(relative_path, Action.SKIP, state, state, note=info.note)
        if state is FileState.MODIFIED and not options.force:
            return FileOutcome(
                relative_path,
                Action.CONFLICT,
                state,
                state,
                error=ConflictError(
                    f"{relative_path} was modified after install (use --force to remove)"
                ),
            )

        records = self.store.list(relative_path)
        latest = records[-1] if records else None
        saved = any(record.sha256 == info.target_sha256 for record in records)
        data_loss = state is FileState.MODIFIED and not saved
        if latest is not None and latest.sha256 != info.target_sha256:
            return self._restore_backup(relative_path, info, latest, options.dry_run, data_loss)

        if not options.dry_run:
            try:
                info.target_path.unlink()
            except OSError as exc:
                return FileOutcome(relative_path, Action.REMOVE, state, state, error=exc)
        note = "local changes discarded" if data_loss else None
        return FileOutcome(
            relative_path,
            Action.REMOVE,
            state,
            FileState.MISSING,
            note=note,
            data_loss=data_loss,
        )

    def _restore_backup(
        self,
        relative_path: str,
        info: FileInspection,
        record: BackupRecord,
        dry_run: bool,
        data_loss: bool,
    ) -> FileOutcome:
        state = info.state
        restored_state = (
            FileState.INSTALLED if record.sha256 == info.source_sha256 else FileState.MODIFIED
        )
        note = "local changes discarded" if data_loss else None
        if dry_run:
            return FileOutcome(
                relative_path,
                Action.RESTORE,
                state,
                restored_state,
                note=note,
                backup=record,
                data_loss=data_loss,
            )
        try:
            content = self.store.load(record)
            atomic_write_bytes(info.target_path, content, mode=self.store.mode(record))
        except (BackupMissingError, OSError) as exc:
            return FileOutcome(
                relative_path, Action.RESTORE, state, state, error=exc, backup=record
            )
        try:
            self.store.delete(record)
        except (BackupMissingError, OSError) as exc:
            return FileOutcome(
                relative_path,
                Action.RESTORE,
                state,
                restored_state,
                error=exc,
                backup=record,
                data_loss=data_loss,
            )
        return FileOutcome(
            relative_path,
            Action.RESTORE,
            state,
            restored_state,
            note=note,
            backup=record,
            data_loss=data_loss,
        )
