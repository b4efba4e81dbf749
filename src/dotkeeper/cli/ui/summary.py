#!/usr/bin/env python3
from __future__ import annotations

from collections.abc import Sequence

from rich.text import Text

from ...core.models import (
    Action,
    BackupRecord,
    FileOutcome,
    FileState,
    ReconciliationResult,
    StatusEntry,
    group_by_path,
)
from . import build_grid_table, build_kv_table, console, console_err, panel

ACTION_STYLES = {
    Action.SKIP: "muted",
    Action.COPY: "success",
    Action.OVERWRITE: "warning",
    Action.BACKUP_OVERWRITE: "warning",
    Action.CONFLICT: "error",
    Action.REMOVE: "warning",
    Action.RESTORE: "accent",
}

STATE_STYLES = {
    FileState.MISSING: "warning",
    FileState.INSTALLED: "success",
    FileState.MODIFIED: "error",
    FileState.UNTRACKED: "muted",
}

_ACTION_WIDTH = max(len(action.value) for action in Action)


def display_text(value: object) -> str:
    """Render file names that are not valid UTF-8 with replacement characters."""
    return str(value).encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def describe_outcome(outcome: FileOutcome, *, dry_run: bool) -> Text:
    line = Text()
    if dry_run and outcome.action is not Action.SKIP:
        line.append("(dry run) ", style="dry_run")
    style = "error" if outcome.failed else ACTION_STYLES[outcome.action]
    line.append(outcome.action.value.ljust(_ACTION_WIDTH), style=style)
    line.append(" ")
    line.append(display_text(outcome.path), style="path")
    if outcome.backup is not None:
        line.append(f" (backup {outcome.backup.version})", style="version")
    if outcome.note:
        line.append(f" [{outcome.note}]", style="muted")
    return line


class OutcomePrinter:
    """Streams one line per file as the engine reports it."""

    def __init__(self, *, dry_run: bool, verbose: bool, quiet: bool) -> None:
        self.dry_run = dry_run
        self.verbose = verbose
        self.quiet = quiet

    def __call__(self, outcome: FileOutcome) -> None:
        if outcome.failed:
            console_err.print(
                f"[red]Error:[/red] {display_text(outcome.path)}: {display_text(outcome.error)}"
            )
            return
        if self.quiet:
            return
        if outcome.action is Action.SKIP and not self.verbose:
            return
        console.print(describe_outcome(outcome, dry_run=self.dry_run))


def print_reconciliation_summary(result: ReconciliationResult, *, quiet: bool) -> None:
    if quiet:
        return
    counts = result.counts()
    rows = [(action, str(count)) for action, count in sorted(counts.items())]
    if not rows:
        rows = [("files", "0")]
    title = f"{result.operation.capitalize()} summary"
    if result.dry_run:
        title += " (dry run)"
    style = "success" if result.ok else "warning"
    console.print()
    console.print(panel(title, build_kv_table(rows), style=style))


def print_status_report(
    entries: Sequence[StatusEntry],
    *,
    verbose: bool,
    quiet: bool,
) -> None:
    if not entries:
        if not quiet:
            console.print("[muted]No tracked files in the source directory.[/muted]")
        return
    rows = []
    for entry in entries:
        notes = []
        if entry.matches_backup:
            notes.append("matches latest backup")
        if entry.note:
            notes.append(display_text(entry.note))
        rows.append(
            [
                display_text(entry.path),
                Text(entry.state.value, style=STATE_STYLES[entry.state]),
                Text(", ".join(notes), style="muted"),
            ]
        )
    console.print(build_grid_table(("Path", "State", "Notes"), rows))

    if verbose:
        for entry in entries:
            if entry.diff is not None:
                _print_diff(entry)

    if quiet:
        return
    summary = ", ".join(
        f"{count} {state.value}"
        for state, count in _state_counts(entries).items()
        if count
    )
    console.print(f"[subtitle]{summary}[/subtitle]")


def _state_counts(entries: Sequence[StatusEntry]) -> dict[FileState, int]:
    counts = {state: 0 for state in FileState}
    for entry in entries:
        counts[entry.state] += 1
    return counts


def _print_diff(entry: StatusEntry) -> None:
    diff = entry.diff
    if diff is None:
        return
    console.print(Text(display_text(entry.path), style="path"))
    if diff.binary:
        console.print("  [muted]binary content differs[/muted]")
        return
    console.print(
        f"  [muted]source: {diff.source_lines} lines, target: {diff.target_lines} lines[/muted]"
    )
    for change in diff.changes:
        console.print(f"  [muted]line {change.line}:[/muted]")
        if change.source is not None:
            console.print(Text(f"    - {change.source}", style="success"))
        if change.target is not None:
            console.print(Text(f"    + {change.target}", style="error"))


def print_backup_list(records: Sequence[BackupRecord], *, quiet: bool) -> None:
    if not records:
        if not quiet:
            console.print("[muted]No backups found.[/muted]")
        return
    rows = []
    grouped = group_by_path(records)
    for path, versions in grouped.items():
        for index, record in enumerate(versions):
            latest = index == len(versions) - 1
            rows.append(
                [
                    display_text(path),
                    Text(record.version, style="version"),
                    f"{record.size} B",
                    record.sha256[:12],
                    Text("latest", style="accent") if latest else Text(""),
                ]
            )
    console.print(build_grid_table(("Path", "Version", "Size", "SHA-256", ""), rows))
    if not quiet:
        suffix = "backup" if len(records) == 1 else "backups"
        console.print(f"[subtitle]{len(records)} {suffix} for {len(grouped)} files[/subtitle]")
