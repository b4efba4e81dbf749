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

import os
import unittest
from unittest import mock

from dotkeeper.core.backups import BackupStore
from dotkeeper.core.errors import BackupWriteError, ConflictError
from dotkeeper.core.models import Action, FileState, InstallOptions
from dotkeeper.core.reconcile import Reconciler
from tests.test_support import (
    BASHRC,
    LOCAL_EDIT,
    NVIM_INIT,
    UNDECODABLE_NAME,
    VIMRC,
    make_sandbox,
    read_tree,
    require_undecodable_names,
    sha256_hex,
)


class TestReconcileInstall(unittest.TestCase):
    def setUp(self) -> None:
        self.sandbox = make_sandbox(self)
        self.store = BackupStore(self.sandbox.backups)
        self.reconciler = Reconciler(self.sandbox.source, self.sandbox.target, self.store)

    def test_fresh_install_copies_everything(self) -> None:
        result = self.reconciler.install()
        self.assertTrue(result.ok)
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(
            [(o.path, o.action) for o in result.outcomes],
            [
                (".bashrc", Action.COPY),
                (".config/nvim/init.lua", Action.COPY),
                (".vimrc", Action.COPY),
            ],
        )
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), BASHRC)
        self.assertEqual(self.sandbox.target_bytes(".vimrc"), VIMRC)
        self.assertEqual(self.sandbox.target_bytes(".config/nvim/init.lua"), NVIM_INIT)
        self.assertTrue(all(o.new_state is FileState.INSTALLED for o in result.outcomes))
        self.assertEqual(self.store.list(), [])

    def test_second_install_is_idempotent(self) -> None:
        self.reconciler.install()
        before = read_tree(self.sandbox.target)
        result = self.reconciler.install()
        self.assertEqual({o.action for o in result.outcomes}, {Action.SKIP})
        self.assertEqual({o.previous_state for o in result.outcomes}, {FileState.INSTALLED})
        self.assertFalse(any(o.changed for o in result.outcomes))
        self.assertEqual(read_tree(self.sandbox.target), before)

    def test_copy_preserves_mode_bits(self) -> None:
        os.chmod(self.sandbox.source / ".bashrc", 0o640)
        self.reconciler.install()
        self.assertEqual(os.stat(self.sandbox.target / ".bashrc").st_mode & 0o777, 0o640)

    def test_modified_without_force_is_conflict(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        result = self.reconciler.install()
        outcome = result.outcome_for(".bashrc")
        self.assertIsNotNone(outcome)
        self.assertIs(outcome.action, Action.CONFLICT)
        self.assertIsInstance(outcome.error, ConflictError)
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), LOCAL_EDIT)
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(result.counts()["conflict"], 1)
        self.assertEqual(result.counts()["copy"], 2)

    def test_conflict_does_not_stop_other_files(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        self.reconciler.install()
        self.assertEqual(self.sandbox.target_bytes(".vimrc"), VIMRC)

    def test_force_with_backup_saves_previous_content(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        result = self.reconciler.install(InstallOptions(force=True, backup=True))
        outcome = result.outcome_for(".bashrc")
        self.assertIs(outcome.action, Action.BACKUP_OVERWRITE)
        self.assertIsNotNone(outcome.backup)
        self.assertEqual(outcome.backup.sha256, sha256_hex(LOCAL_EDIT))
        self.assertEqual(self.store.load(self.store.latest(".bashrc")), LOCAL_EDIT)
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), BASHRC)
        self.assertTrue(result.ok)

    def test_force_without_backup_overwrites(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        result = self.reconciler.install(InstallOptions(force=True, backup=False))
        self.assertIs(result.outcome_for(".bashrc").action, Action.OVERWRITE)
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), BASHRC)
        self.assertEqual(self.store.list(), [])

    def test_backup_failure_leaves_target_untouched(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        with mock.patch.object(
            self.store, "save", side_effect=BackupWriteError("disk full")
        ):
            result = self.reconciler.install(InstallOptions(force=True, backup=True))
        outcome = result.outcome_for(".bashrc")
        self.assertTrue(outcome.failed)
        self.assertIs(outcome.new_state, FileState.MODIFIED)
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), LOCAL_EDIT)
        self.assertEqual(self.sandbox.target_bytes(".vimrc"), VIMRC)
        self.assertEqual(result.counts()["failed"], 1)

    def test_dry_run_changes_nothing(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        before_target = read_tree(self.sandbox.target)
        result = self.reconciler.install(InstallOptions(dry_run=True, force=True, backup=True))
        self.assertTrue(result.dry_run)
        self.assertIs(result.outcome_for(".bashrc").action, Action.BACKUP_OVERWRITE)
        self.assertIs(result.outcome_for(".vimrc").action, Action.COPY)
        self.assertEqual(read_tree(self.sandbox.target), before_target)
        self.assertFalse(self.sandbox.backups.exists())

    def test_untracked_target_is_skipped(self) -> None:
        (self.sandbox.target / ".vimrc").mkdir()
        result = self.reconciler.install(InstallOptions(force=True))
        outcome = result.outcome_for(".vimrc")
        self.assertIs(outcome.action, Action.SKIP)
        self.assertIs(outcome.previous_state, FileState.UNTRACKED)
        self.assertTrue((self.sandbox.target / ".vimrc").is_dir())

    def test_dangling_symlink_is_replaced(self) -> None:
        os.symlink(self.sandbox.root / "gone", self.sandbox.target / ".bashrc")
        result = self.reconciler.install()
        self.assertIs(result.outcome_for(".bashrc").action, Action.COPY)
        self.assertFalse((self.sandbox.target / ".bashrc").is_symlink())
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), BASHRC)

    def test_target_only_files_are_left_alone(self) -> None:
        self.sandbox.write_target({".local_only": b"mine"})
        self.reconciler.install(InstallOptions(force=True, backup=True))
        self.assertEqual(self.sandbox.target_bytes(".local_only"), b"mine")

    def test_per_file_io_errors_are_collected(self) -> None:
        with mock.patch(
            "dotkeeper.core.reconcile.atomic_copy",
            side_effect=[PermissionError("denied"), None, None],
        ):
            result = self.reconciler.install()
        self.assertTrue(result.outcome_for(".bashrc").failed)
        self.assertFalse(result.outcome_for(".vimrc").failed)
        self.assertEqual(result.exit_code, 1)

    def test_missing_source_root_raises(self) -> None:
        reconciler = Reconciler(self.sandbox.root / "missing", self.sandbox.target, self.store)
        with self.assertRaises(FileNotFoundError):
            reconciler.install()

    def test_outcomes_are_streamed(self) -> None:
        seen: list[str] = []
        self.reconciler.install(on_outcome=lambda outcome: seen.append(outcome.path))
        self.assertEqual(seen, [".bashrc", ".config/nvim/init.lua", ".vimrc"])

    def test_value_error_on_one_file_is_recorded_and_batch_continues(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        with mock.patch.object(self.store, "save", side_effect=ValueError("bad backup path")):
            result = self.reconciler.install(InstallOptions(force=True, backup=True))
        outcome = result.outcome_for(".bashrc")
        self.assertIsInstance(outcome.error, ValueError)
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), LOCAL_EDIT)
        self.assertEqual(self.sandbox.target_bytes(".vimrc"), VIMRC)
        self.assertEqual(result.exit_code, 1)

    def test_undecodable_file_name_is_installed_with_backup(self) -> None:
        require_undecodable_names(self, self.sandbox.root)
        self.sandbox.write_source({UNDECODABLE_NAME: b"X", "zz": b"z"})
        self.sandbox.write_target({UNDECODABLE_NAME: b"Y"})
        result = self.reconciler.install(InstallOptions(force=True, backup=True))
        self.assertTrue(result.ok, [o.error for o in result.failures])
        outcome = result.outcome_for(UNDECODABLE_NAME)
        self.assertIs(outcome.action, Action.BACKUP_OVERWRITE)
        self.assertEqual(self.sandbox.target_bytes(UNDECODABLE_NAME), b"X")
        self.assertEqual(self.sandbox.target_bytes("zz"), b"z")
        records = self.store.list(UNDECODABLE_NAME)
        self.assertEqual([r.sha256 for r in records], [sha256_hex(b"Y")])

    def test_undecodable_file_name_conflict_does_not_stop_later_files(self) -> None:
        require_undecodable_names(self, self.sandbox.root)
        self.sandbox.write_source({UNDECODABLE_NAME: b"X", "zz": b"z"})
        self.sandbox.write_target({UNDECODABLE_NAME: b"Y"})
        result = self.reconciler.install()
        self.assertIs(result.outcome_for(UNDECODABLE_NAME).action, Action.CONFLICT)
        self.assertIs(result.outcome_for("zz").new_state, FileState.INSTALLED)
        self.assertEqual(self.sandbox.target_bytes("zz"), b"z")


if __name__ == "__main__":
    unittest.main()
