#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Rotating file logs for tracker renders and cell writes.

Each record is stamped with the tracker scope it was emitted in, so a
line of ``<component>.log`` reads::

    2024-01-10 09:12:03 WARNING [render focal=2024-01-10 days=22] Unreadable note: {"path": "a.md"}

Scopes nest: a step that writes shows ``step ... > write ...``. Errors
also go to ``errors.log`` with their traceback. Warnings and above are
echoed to stderr.

Usage:
    logger = FocusTrackLogger(log_dir, "cli")
    with logger.scope("write", path="projects/alpha.md", date="2024-01-05"):
        logger.log_operation("write_structured_field", {"keys": 3})
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import time
import traceback
from contextlib import contextmanager, nullcontext
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ContextManager, Dict, Iterator, List, Optional

# --- Third party imports ---
import click

FILE_FORMAT = "%(asctime)s %(levelname)-7s [%(scope)s] %(message)s"
CONSOLE_FORMAT = "focustrack %(levelname)s [%(scope)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _with_details(message: str, details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return message
    return f"{message}: {json.dumps(details, default=str, ensure_ascii=False)}"


def _cli_message(error: Exception, show_traceback: bool = False) -> str:
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback and error.__traceback__ is not None:
        trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        message = f"{message}\n\n{trace}"
    return message


class _ScopeFilter(logging.Filter):
    """Copy the logger's open scopes onto every record."""

    def __init__(self, scopes: List[str]) -> None:
        super().__init__()
        self.scopes = scopes

    def filter(self, record: logging.LogRecord) -> bool:
        record.scope = " > ".join(self.scopes) or "-"
        return True


class FocusTrackLogger:
    """
    File-backed logger for one component (``cli``, ``tracker``...).

    Attributes:
        log_dir: Directory for log files
        component_name: Component name, also the main log file's stem
        main_logger: Operations, debug output and warnings
        error_logger: Errors with tracebacks (``errors.log``)
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "focustrack",
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self._scopes: List[str] = []
        self.log_dir.mkdir(parents=True, exist_ok=True)

        rotation = {"maxBytes": max_bytes, "backupCount": backup_count, "encoding": "utf-8"}
        self.main_logger = self._build_logger(
            f"focustrack.{component_name}",
            RotatingFileHandler(self.log_dir / f"{component_name}.log", **rotation),
            logging.DEBUG,
        )
        self.error_logger = self._build_logger(
            f"focustrack.{component_name}.errors",
            RotatingFileHandler(self.log_dir / "errors.log", **rotation),
            logging.ERROR,
        )

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        self.main_logger.addHandler(console)

    def _build_logger(
        self, name: str, handler: logging.Handler, level: int
    ) -> logging.Logger:
        logger = logging.getLogger(name)
        # A new FocusTrackLogger for the same component replaces the old handlers
        for old in logger.handlers:
            old.close()
        logger.handlers = []
        logger.filters = []
        logger.setLevel(level)
        logger.propagate = False
        logger.addFilter(_ScopeFilter(self._scopes))

        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        return logger

    @contextmanager
    def scope(self, kind: str, **fields: Any) -> Iterator[None]:
        """
        Tag records logged inside the block with ``kind`` and ``fields``.

        On exit the scope's duration is logged at debug level.

        Examples:
            >>> with logger.scope("render", focal="2024-01-10"):
            ...     logger.log_info("3 rows")
        """
        label = " ".join([kind] + [f"{key}={value}" for key, value in fields.items()])
        self._scopes.append(label)
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            self.main_logger.debug(f"{kind} done in {elapsed_ms:.1f} ms")
            self._scopes.pop()

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Log a completed render, write or configuration load."""
        self.main_logger.info(_with_details(operation, details))

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(_with_details(message, details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(_with_details(message, details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.warning(_with_details(message, details))

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """Write an error and its traceback to ``errors.log``."""
        self.error_logger.error(
            _with_details(f"{type(error).__name__}: {error}", context), exc_info=error
        )

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log a command failure and return the line to show the user.

        Examples:
            >>> logger.log_cli_error(DocumentNotFoundError("a.md"))
            '❌ DocumentNotFoundError: No document found for path: a.md'
        """
        self.log_error(error, context or {"source": "cli"})
        return _cli_message(error, show_traceback)


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Log a failed command, print one line to stderr and exit.

    Args:
        ctx: Click context object containing logger and verbose flag
        error: Exception that occurred
        operation: Command that failed (e.g., 'show', 'set')
        additional_context: Extra context such as the vault or note path
        exit_code: Exit code for sys.exit() (default: 1)

    Note:
        This function never returns - it always calls sys.exit()
    """
    context = {"operation": operation, **(additional_context or {})}
    error_msg = safe_logger(ctx.obj.get("logger")).log_cli_error(
        error, context, show_traceback=ctx.obj.get("verbose", False)
    )
    click.echo(error_msg, err=True)
    sys.exit(exit_code)


class NullLogger:
    """FocusTrackLogger stand-in for library use without log files."""

    def scope(self, kind: str, **fields: Any) -> ContextManager[None]:
        return nullcontext()

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return _cli_message(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[FocusTrackLogger]) -> FocusTrackLogger:
    """
    Return the provided logger, or the shared NullLogger for None.

    Use:
        safe_logger(self.logger).log_warning("Unreadable note", {"path": path})
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
