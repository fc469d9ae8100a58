#!/usr/bin/env python3
"""
cli_decorators.py
-------------------
Custom Click decorators for Focus Track CLIs.

Usage:
    from focustrack.core.cli_decorators import focustrack_cli_group

    @focustrack_cli_group("cli")
    def cli(ctx):
        '''focustrack - Focus log grids for markdown notes'''
        pass  # Setup handled automatically
"""
from functools import wraps
from pathlib import Path
from typing import Callable

import click

from focustrack.core.cli import setup_logger
from focustrack.core.paths import LOG_DIR, VAULT_DIR


def focustrack_cli_group(component_name: str) -> Callable:
    """
    Decorator factory for creating consistent CLI groups.

    Automatically adds:
    - Click group() decorator
    - --vault option
    - --log-dir option
    - --verbose option
    - Context object setup with logger

    Provides context with:
        ctx.obj["vault"]: Path - Vault directory
        ctx.obj["log_dir"]: Path - Log directory
        ctx.obj["verbose"]: bool - Verbose flag
        ctx.obj["logger"]: FocusTrackLogger - Configured logger instance
    """
    def decorator(f: Callable) -> Callable:
        @click.group()
        @click.option(
            "--vault",
            type=click.Path(file_okay=False),
            default=str(VAULT_DIR),
            show_default=True,
            help="Directory of markdown notes"
        )
        @click.option(
            "--log-dir",
            type=click.Path(),
            default=str(LOG_DIR),
            help="Directory for log files"
        )
        @click.option(
            "-v", "--verbose",
            is_flag=True,
            help="Enable verbose logging"
        )
        @click.pass_context
        @wraps(f)
        def wrapper(ctx: click.Context, vault: str, log_dir: str, verbose: bool):
            ctx.ensure_object(dict)
            ctx.obj["vault"] = Path(vault)
            ctx.obj["log_dir"] = Path(log_dir)
            ctx.obj["verbose"] = verbose
            ctx.obj["logger"] = setup_logger(Path(log_dir), component_name)

            return f(ctx)

        return wrapper
    return decorator
