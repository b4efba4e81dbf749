#!/usr/bin/env python3
from __future__ import annotations

from ...config import load_backup_config
from ...core import api
from ..core.log import _warn
from ..core.types import RestoreArgs
from ..ui.summary import OutcomePrinter, print_reconciliation_summary


def run_restore_command(args: RestoreArgs) -> int:
    config = load_backup_config(args.config)
    keep_backup = config.defaults.keep if args.keep_backups is None else args.keep_backups
    printer = OutcomePrinter(dry_run=args.dry_run, verbose=True, quiet=args.quiet)
    result = api.restore(
        config.backup_dir,
        config.target_dir,
        args.file,
        args.version,
        keep_backup=keep_backup,
        dry_run=args.dry_run,
        source_dir=config.source_dir,
        backup_current=args.backup_current,
        on_outcome=printer,
    )
    if not result.outcomes:
        _warn("nothing to restore", quiet=args.quiet)
        return 0
    print_reconciliation_summary(result, quiet=args.quiet)
    return result.exit_code
