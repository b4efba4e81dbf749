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

"""Per-file error taxonomy for reconciliation and restore batches."""

from __future__ import annotations


class DotkeeperError(Exception):
    """Base class for errors raised by the sync engine."""


class BackupWriteError(DotkeeperError, OSError):
    """A backup could not be persisted; the destructive step must not run."""


class BackupMissingError(DotkeeperError, LookupError):
    """A backup blob disappeared between listing and use."""


class VersionNotFoundError(DotkeeperError, LookupError):
    """No backup matches the requested version selector."""


class ConflictError(DotkeeperError):
    """The target was modified locally and the action was not forced."""
