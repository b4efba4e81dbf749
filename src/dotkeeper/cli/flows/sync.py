#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path

from ...config import AppConfig, load_app_config
from ...core import api
from ...core.models import (
    Action,
    InstallOptions,
    ReconciliationResult,
    UninstallOptions,
)
from ..core.log import _warn
from ..core.types import InstallArgs, UninstallArgs
from ..ui.summary import OutcomePrinter, display_text, print_reconciliation_summary


def run_install_command(args: InstallArgs) -> int:
    config = load_app_config(args.config, source_dir=args.source)
    backup = config.cli_defaults.backup.enabled if args.backup is None else args.backup
    options = InstallOptions(
        dry_run=args.dry_run,
        force=args.force,
        backup=backup,
        verbose=args.verbose,
    )
    if options.force and not options.backup and not options.dry_run:
        _warn("--force without backups discards local changes", quiet=args.quiet)
    printer = OutcomePrinter(dry_run=options.dry_run, verbose=options.verbose, quiet=args.quiet)
    result = api.install(
        config.source_dir,
        config.target_dir,
        config.backup_dir,
        options,
        exclude=config.exclude,
        skip_dirs=_extra_skip_dirs(config),
        on_outcome=printer,
    )
    _report(result, quiet=args.quiet)
    return result.exit_code


def run_uninstall_command(args: UninstallArgs) -> int:
    config = load_app_config(args.config, source_dir=args.source)
    options = UninstallOptions(dry_run=args.dry_run, force=args.force, verbose=args.verbose)
    printer = OutcomePrinter(dry_run=options.dry_run, verbose=options.verbose, quiet=args.quiet)
    result = api.uninstall(
        config.source_dir,
        config.target_dir,
        config.backup_dir,
        options,
        exclude=config.exclude,
        skip_dirs=_extra_skip_dirs(config),
        on_outcome=printer,
    )
    _report(result, quiet=args.quiet)
    return result.exit_code


def _extra_skip_dirs(config: AppConfig) -> tuple[Path, ...]:
    return tuple(path for path in config.skip_dirs() if path != config.backup_dir)


def _report(result: ReconciliationResult, *, quiet: bool) -> None:
    verb = "would be" if result.dry_run else "were"
    for outcome in result.outcomes:
        if outcome.data_loss:
            _warn(f"{display_text(outcome.path)}: local changes {verb} discarded", quiet=quiet)
    conflicts = [outcome for outcome in result.outcomes if outcome.action is Action.CONFLICT]
    if conflicts:
        hint = "--force --backup" if result.operation == "install" else "--force"
        _warn(
            f"{len(conflicts)} modified file(s) left untouched; rerun with {hint} to proceed",
            quiet=quiet,
        )
    print_reconciliation_summary(result, quiet=quiet)
