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

import unittest
from pathlib import Path
from unittest import mock

from dotkeeper.core.backups import BackupStore
from dotkeeper.core.errors import ConflictError
from dotkeeper.core.models import Action, FileState, InstallOptions, UninstallOptions
from dotkeeper.core.reconcile import Reconciler
from tests.test_support import (
    BASHRC,
    LOCAL_EDIT,
    UNDECODABLE_NAME,
    VIMRC,
    make_sandbox,
    read_tree,
    require_undecodable_names,
)


class TestReconcileUninstall(unittest.TestCase):
    def setUp(self) -> None:
        self.sandbox = make_sandbox(self)
        self.store = BackupStore(self.sandbox.backups)
        self.reconciler = Reconciler(self.sandbox.source, self.sandbox.target, self.store)

    def test_installed_files_are_removed(self) -> None:
        self.reconciler.install()
        result = self.reconciler.uninstall()
        self.assertTrue(result.ok)
        self.assertEqual({o.action for o in result.outcomes}, {Action.REMOVE})
        self.assertEqual({o.new_state for o in result.outcomes}, {FileState.MISSING})
        self.assertEqual(read_tree(self.sandbox.target), {})

    def test_missing_files_are_skipped(self) -> None:
        result = self.reconciler.uninstall()
        self.assertEqual({o.action for o in result.outcomes}, {Action.SKIP})
        self.assertTrue(result.ok)

    def test_modified_file_requires_force(self) -> None:
        self.reconciler.install()
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        result = self.reconciler.uninstall()
        outcome = result.outcome_for(".bashrc")
        self.assertIs(outcome.action, Action.CONFLICT)
        self.assertIsInstance(outcome.error, ConflictError)
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), LOCAL_EDIT)
        self.assertFalse((self.sandbox.target / ".vimrc").exists())
        self.assertEqual(result.exit_code, 1)

    def test_forced_removal_of_modified_file_flags_data_loss(self) -> None:
        self.reconciler.install()
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        result = self.reconciler.uninstall(UninstallOptions(force=True))
        outcome = result.outcome_for(".bashrc")
        self.assertIs(outcome.action, Action.REMOVE)
        self.assertTrue(outcome.data_loss)
        self.assertEqual(outcome.note, "local changes discarded")
        self.assertFalse((self.sandbox.target / ".bashrc").exists())

    def test_latest_backup_is_put_back_and_consumed(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        self.reconciler.install(InstallOptions(force=True, backup=True))
        result = self.reconciler.uninstall()
        outcome = result.outcome_for(".bashrc")
        self.assertIs(outcome.action, Action.RESTORE)
        self.assertIs(outcome.new_state, FileState.MODIFIED)
        self.assertFalse(outcome.data_loss)
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), LOCAL_EDIT)
        self.assertEqual(self.store.list(".bashrc"), [])
        self.assertFalse((self.sandbox.target / ".vimrc").exists())

    def test_backup_equal_to_target_is_not_restored(self) -> None:
        self.reconciler.install()
        self.store.save(".vimrc", VIMRC)
        result = self.reconciler.uninstall()
        self.assertIs(result.outcome_for(".vimrc").action, Action.REMOVE)
        self.assertEqual(len(self.store.list(".vimrc")), 1)

    def test_dry_run_changes_nothing(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        self.reconciler.install(InstallOptions(force=True, backup=True))
        target_before = read_tree(self.sandbox.target)
        backups_before = read_tree(self.sandbox.backups)
        result = self.reconciler.uninstall(UninstallOptions(dry_run=True))
        self.assertIs(result.outcome_for(".bashrc").action, Action.RESTORE)
        self.assertIs(result.outcome_for(".vimrc").action, Action.REMOVE)
        self.assertEqual(read_tree(self.sandbox.target), target_before)
        self.assertEqual(read_tree(self.sandbox.backups), backups_before)

    def test_untracked_target_is_left_alone(self) -> None:
        (self.sandbox.target / ".bashrc").mkdir()
        result = self.reconciler.uninstall(UninstallOptions(force=True))
        self.assertIs(result.outcome_for(".bashrc").action, Action.SKIP)
        self.assertTrue((self.sandbox.target / ".bashrc").is_dir())

    def test_install_then_uninstall_restores_original_home(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT, ".profile": b"keep me"})
        original = read_tree(self.sandbox.target)
        self.reconciler.install(InstallOptions(force=True, backup=True))
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), BASHRC)
        self.reconciler.uninstall()
        self.assertEqual(read_tree(self.sandbox.target), original)

    def test_unlink_failure_is_isolated_to_one_file(self) -> None:
        self.reconciler.install()
        real_unlink = Path.unlink

        def failing_unlink(path: Path, missing_ok: bool = False) -> None:
            if path.name == ".bashrc":
                raise PermissionError("denied")
            real_unlink(path, missing_ok=missing_ok)

        with mock.patch.object(Path, "unlink", autospec=True, side_effect=failing_unlink):
            result = self.reconciler.uninstall()
        outcome = result.outcome_for(".bashrc")
        self.assertIsInstance(outcome.error, PermissionError)
        self.assertIs(outcome.new_state, FileState.INSTALLED)
        self.assertEqual(self.sandbox.target_bytes(".bashrc"), BASHRC)
        self.assertIs(result.outcome_for(".vimrc").action, Action.REMOVE)
        self.assertFalse((self.sandbox.target / ".vimrc").exists())
        self.assertEqual(result.exit_code, 1)

    def test_forced_removal_of_backed_up_content_is_not_data_loss(self) -> None:
        self.reconciler.install()
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        self.store.save(".bashrc", LOCAL_EDIT)
        result = self.reconciler.uninstall(UninstallOptions(force=True))
        outcome = result.outcome_for(".bashrc")
        self.assertIs(outcome.action, Action.REMOVE)
        self.assertFalse(outcome.data_loss)
        self.assertIsNone(outcome.note)
        self.assertFalse((self.sandbox.target / ".bashrc").exists())
        self.assertEqual(len(self.store.list(".bashrc")), 1)

    def test_undecodable_file_name_is_removed_with_the_rest(self) -> None:
        require_undecodable_names(self, self.sandbox.root)
        self.sandbox.write_source({UNDECODABLE_NAME: b"X", "zz": b"z"})
        self.reconciler.install()
        result = self.reconciler.uninstall()
        self.assertTrue(result.ok, [o.error for o in result.failures])
        self.assertIs(result.outcome_for(UNDECODABLE_NAME).action, Action.REMOVE)
        self.assertIs(result.outcome_for("zz").action, Action.REMOVE)
        self.assertEqual(read_tree(self.sandbox.target), {})


if __name__ == "__main__":
    unittest.main()
