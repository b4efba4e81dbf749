#!/usr/bin/env python3
from __future__ import annotations

import sys

from ...config import load_backup_config
from ...core import api
from ..api import console, prompt_yes_no
from ..core.types import BackupsArgs, ClearBackupsArgs
from ..ui.summary import print_backup_list


def run_backups_command(args: BackupsArgs) -> int:
    config = load_backup_config(args.config)
    records = api.list_backups(config.backup_dir, args.file)
    print_backup_list(records, quiet=args.quiet)
    return 0


def run_clear_backups_command(args: ClearBackupsArgs) -> int:
    config = load_backup_config(args.config)
    if not args.assume_yes:
        if not _is_interactive():
            raise ValueError("refusing to clear backups without confirmation; pass --yes")
        confirmed = prompt_yes_no(
            f"Delete every backup in {config.backup_dir}?",
            default=False,
            help_text="Removed backups cannot be restored.",
        )
        if not confirmed:
            if not args.quiet:
                console.print("[muted]Nothing removed.[/muted]")
            return 0
    removed = api.clear_backups(config.backup_dir)
    if not args.quiet:
        suffix = "backup" if removed == 1 else "backups"
        console.print(f"[success]Removed {removed} {suffix}.[/success]")
    return 0


def _is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()
