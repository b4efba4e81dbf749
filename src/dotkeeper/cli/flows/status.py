#!/usr/bin/env python3
from __future__ import annotations

from ...config import load_app_config
from ...core import api
from ..core.types import StatusArgs
from ..ui.summary import print_status_report


def run_status_command(args: StatusArgs) -> int:
    config = load_app_config(args.config, source_dir=args.source)
    entries = api.status(
        config.source_dir,
        config.target_dir,
        config.backup_dir,
        verbose=args.verbose,
        exclude=config.exclude,
        skip_dirs=(config.config_path.parent,),
    )
    print_status_report(entries, verbose=args.verbose, quiet=args.quiet)
    return 0
