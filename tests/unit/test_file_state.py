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

from dotkeeper.core.models import FileState
from dotkeeper.core.state import classify, inspect_file
from tests.test_support import BASHRC, LOCAL_EDIT, make_sandbox, sha256_hex


class TestFileState(unittest.TestCase):
    def setUp(self) -> None:
        self.sandbox = make_sandbox(self)

    def _classify(self, relative: str) -> FileState:
        return classify(relative, self.sandbox.source, self.sandbox.target)

    def test_missing_when_target_absent(self) -> None:
        self.assertIs(self._classify(".bashrc"), FileState.MISSING)

    def test_installed_when_bytes_match(self) -> None:
        self.sandbox.write_target({".bashrc": BASHRC})
        info = inspect_file(".bashrc", self.sandbox.source, self.sandbox.target)
        self.assertIs(info.state, FileState.INSTALLED)
        self.assertEqual(info.source_sha256, sha256_hex(BASHRC))
        self.assertEqual(info.target_sha256, info.source_sha256)

    def test_modified_when_bytes_differ(self) -> None:
        self.sandbox.write_target({".bashrc": LOCAL_EDIT})
        info = inspect_file(".bashrc", self.sandbox.source, self.sandbox.target)
        self.assertIs(info.state, FileState.MODIFIED)
        self.assertEqual(info.target_sha256, sha256_hex(LOCAL_EDIT))

    def test_mode_and_mtime_are_ignored(self) -> None:
        self.sandbox.write_target({".bashrc": BASHRC})
        target = self.sandbox.target / ".bashrc"
        os.chmod(target, 0o600)
        os.utime(target, (0, 0))
        self.assertIs(self._classify(".bashrc"), FileState.INSTALLED)

    def test_directory_at_target_is_untracked(self) -> None:
        (self.sandbox.target / ".bashrc").mkdir()
        info = inspect_file(".bashrc", self.sandbox.source, self.sandbox.target)
        self.assertIs(info.state, FileState.UNTRACKED)
        self.assertEqual(info.note, "target is not a regular file")

    def test_symlinked_target_is_dereferenced(self) -> None:
        real = self.sandbox.root / "real_bashrc"
        real.write_bytes(BASHRC)
        os.symlink(real, self.sandbox.target / ".bashrc")
        self.assertIs(self._classify(".bashrc"), FileState.INSTALLED)

    def test_dangling_symlink_target_is_missing(self) -> None:
        os.symlink(self.sandbox.root / "nowhere", self.sandbox.target / ".bashrc")
        info = inspect_file(".bashrc", self.sandbox.source, self.sandbox.target)
        self.assertIs(info.state, FileState.MISSING)
        self.assertEqual(info.note, "dangling symlink in target")

    def test_vanished_source_is_untracked(self) -> None:
        self.sandbox.write_target({".bashrc": BASHRC})
        (self.sandbox.source / ".bashrc").unlink()
        info = inspect_file(".bashrc", self.sandbox.source, self.sandbox.target)
        self.assertIs(info.state, FileState.UNTRACKED)
        self.assertEqual(info.note, "source file disappeared")

    def test_nested_paths(self) -> None:
        self.sandbox.write_target({".config/nvim/init.lua": b"other\n"})
        self.assertIs(self._classify(".config/nvim/init.lua"), FileState.MODIFIED)


if __name__ == "__main__":
    unittest.main()
