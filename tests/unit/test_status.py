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
from unittest import mock

from dotkeeper.core.backups import BackupStore
from dotkeeper.core.models import FileState
from dotkeeper.core.status import MAX_DIFF_CHANGES, MAX_LINE_LENGTH, StatusReporter, summarize_diff
from tests.test_support import (
    BASHRC,
    LOCAL_EDIT,
    UNDECODABLE_NAME,
    VIMRC,
    make_sandbox,
    read_tree,
    require_undecodable_names,
)


class TestStatusReporter(unittest.TestCase):
    def setUp(self) -> None:
        self.sandbox = make_sandbox(self)
        self.store = BackupStore(self.sandbox.backups)

    def _report(self, *, verbose: bool = False):
        reporter = StatusReporter(self.sandbox.source, self.sandbox.target, store=self.store)
        return reporter.report(verbose=verbose)

    def test_reports_every_state(self) -> None:
        self.sandbox.write_target({".bashrc": BASHRC, ".vimrc": b"changed\n"})
        (self.sandbox.target / ".config" / "nvim" / "init.lua").mkdir(parents=True)
        report = self._report()
        states = {entry.path: entry.state for entry in report.entries}
        self.assertEqual(
            states,
            {
                ".bashrc": FileState.INSTALLED,
                ".config/nvim/init.lua": FileState.UNTRACKED,
                ".vimrc": FileState.MODIFIED,
            },
        )
        counts = report.counts()
        self.assertEqual(counts[FileState.MISSING], 0)
        self.assertEqual(counts[FileState.MODIFIED], 1)

    def test_status_is_read_only(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        before = read_tree(self.sandbox.target)
        self._report(verbose=True)
        self.assertEqual(read_tree(self.sandbox.target), before)
        self.assertFalse(self.sandbox.backups.exists())

    def test_modified_entry_flags_matching_backup(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        self.store.save(".bashrc", LOCAL_EDIT)
        entry = self._report().entries[0]
        self.assertIs(entry.state, FileState.MODIFIED)
        self.assertTrue(entry.matches_backup)

    def test_verbose_adds_diff_for_modified_only(self) -> None:
        self.sandbox.write_target({".bashrc": BASHRC, ".vimrc": b"set number\nsyntax off\n"})
        entries = {entry.path: entry for entry in self._report(verbose=True).entries}
        self.assertIsNone(entries[".bashrc"].diff)
        diff = entries[".vimrc"].diff
        self.assertIsNotNone(diff)
        self.assertEqual((diff.source_lines, diff.target_lines), (2, 2))
        self.assertEqual(len(diff.changes), 1)
        self.assertEqual(diff.changes[0].line, 2)
        self.assertEqual(diff.changes[0].source, "syntax on")
        self.assertEqual(diff.changes[0].target, "syntax off")

    def test_non_verbose_has_no_diff(self) -> None:
        self.sandbox.write_target({".vimrc": VIMRC + b"extra\n"})
        entries = {entry.path: entry for entry in self._report().entries}
        self.assertIsNone(entries[".vimrc"].diff)

    def test_source_vanishing_after_enumeration_is_missing(self) -> None:
        self.sandbox.write_target({".bashrc": BASHRC, ".ghost": b"left behind"})
        reporter = StatusReporter(self.sandbox.source, self.sandbox.target, store=self.store)
        reporter.catalog = [".bashrc", ".ghost"]
        entries = {entry.path: entry for entry in reporter.report().entries}
        self.assertIs(entries[".bashrc"].state, FileState.INSTALLED)
        self.assertIs(entries[".ghost"].state, FileState.MISSING)
        self.assertEqual(entries[".ghost"].note, "source file disappeared")

    def test_backup_lookup_error_does_not_stop_report(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT, ".vimrc": VIMRC})
        with mock.patch.object(self.store, "latest", side_effect=ValueError("bad backup path")):
            entries = {entry.path: entry for entry in self._report().entries}
        self.assertIs(entries[".bashrc"].state, FileState.MODIFIED)
        self.assertFalse(entries[".bashrc"].matches_backup)
        self.assertIs(entries[".vimrc"].state, FileState.INSTALLED)

    def test_undecodable_file_name_is_reported(self) -> None:
        require_undecodable_names(self, self.sandbox.root)
        self.sandbox.write_source({UNDECODABLE_NAME: b"X", "zz": b"z"})
        self.sandbox.write_target({UNDECODABLE_NAME: b"Y"})
        self.store.save(UNDECODABLE_NAME, b"Y")
        entries = {entry.path: entry for entry in self._report().entries}
        self.assertIs(entries[UNDECODABLE_NAME].state, FileState.MODIFIED)
        self.assertTrue(entries[UNDECODABLE_NAME].matches_backup)
        self.assertIs(entries["zz"].state, FileState.MISSING)


class TestSummarizeDiff(unittest.TestCase):
    def test_changes_are_capped(self) -> None:
        source = b"".join(f"line {i}\n".encode() for i in range(10))
        target = b"".join(f"LINE {i}\n".encode() for i in range(10))
        diff = summarize_diff(source, target)
        self.assertEqual(len(diff.changes), MAX_DIFF_CHANGES)
        self.assertEqual([change.line for change in diff.changes], [1, 2, 3])

    def test_long_lines_are_clipped(self) -> None:
        diff = summarize_diff(b"a\n", ("x" * 100 + "\n").encode())
        target = diff.changes[0].target
        self.assertEqual(target, "x" * MAX_LINE_LENGTH + "...")

    def test_added_lines_have_no_source(self) -> None:
        diff = summarize_diff(b"one\n", b"one\ntwo\n")
        self.assertEqual(diff.target_lines, 2)
        self.assertEqual(diff.changes[0].line, 2)
        self.assertIsNone(diff.changes[0].source)
        self.assertEqual(diff.changes[0].target, "two")

    def test_binary_content(self) -> None:
        diff = summarize_diff(b"\xff\xfe\x00", b"text\n")
        self.assertTrue(diff.binary)
        self.assertEqual(diff.changes, ())


if __name__ == "__main__":
    unittest.main()
