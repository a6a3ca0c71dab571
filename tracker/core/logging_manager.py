#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Run logging for the activity tracker.

One ``logging.Logger`` per component writes:
    <log_dir>/<component>.log   every event of the run (DEBUG and up)
    <log_dir>/errors.log        note failures and fatal errors only
    stderr                      warnings and errors

Note failures are the tracker's normal error path: a bad note is logged
with its path, remembered in ``failed_notes`` and skipped. Everything else
that reaches ``log_error`` ends the run.

Usage:
    logger = TrackerLogger(LOG_DIR / "operations", "tracker")
    logger.log_note_failure(path, error)
    logger.failed_notes   # {"/vault/Vibing/Bad.md": "NoteParseError: ..."}
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click


FILE_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"
ERRORS_LOG = "errors.log"


def format_cli_error(error: Exception) -> str:
    """One-line message shown to CLI users, e.g. ``❌ ConfigError: ...``."""
    return f"❌ {type(error).__name__}: {error}"


def _format_details(details: Optional[Dict[str, Any]]) -> str:
    if not details:
        return ""
    return " " + " ".join(f"{key}={value}" for key, value in details.items())


class TrackerLogger:
    """
    File and console logging for one tracker component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Logger name suffix and run log file stem
        failed_notes: Note path -> failure message, for every note logged
            through log_note_failure since construction
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "tracker",
        max_bytes: int = 1024 * 1024,
        backup_count: int = 5,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.failed_notes: Dict[str, str] = {}

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger(f"tracker.{component_name}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self.close()

        file_formatter = logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        for filename, level in (
            (f"{component_name}.log", logging.DEBUG),
            (ERRORS_LOG, logging.ERROR),
        ):
            handler = RotatingFileHandler(
                self.log_dir / filename,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            handler.setLevel(level)
            handler.setFormatter(file_formatter)
            self.logger.addHandler(handler)

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        self.logger.addHandler(console)

    def close(self) -> None:
        """Close and detach every handler of this component's logger."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    # ---- Run events ----
    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.logger.info(f"{operation}{_format_details(details)}")

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.logger.info(f"{message}{_format_details(details)}")

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.logger.warning(f"{message}{_format_details(details)}")

    # ---- Notes ----
    def log_note_parsed(self, path: Path, record_count: int) -> None:
        self.logger.debug(f"parsed note={path} records={record_count}")

    def log_note_failure(self, path: Path, error: Exception) -> None:
        """
        Record a note that could not be parsed.

        The failure goes to errors.log with the note path; the traceback is
        kept only in the run log.
        """
        message = f"{type(error).__name__}: {error}"
        self.failed_notes[str(path)] = message
        self.logger.error(f"skipped note={path} {message}")
        self.logger.debug(
            "traceback", exc_info=(type(error), error, error.__traceback__)
        )

    # ---- Fatal errors ----
    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """Log an error that ends the run, with its traceback."""
        self.logger.error(
            f"{type(error).__name__}: {error}{_format_details(context)}",
            exc_info=(type(error), error, error.__traceback__),
        )

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """Log ``error`` and return the message to print."""
        self.log_error(error, context)
        message = format_cli_error(error)
        if show_traceback and error.__traceback__ is not None:
            message += f"\n(traceback in {self.log_dir / ERRORS_LOG})"
        return message


class NullLogger:
    """Stand-in used when library code is called without a logger."""

    def _ignore(self, *args: Any, **kwargs: Any) -> None:
        return None

    log_operation = log_info = log_warning = _ignore
    log_note_parsed = log_note_failure = log_error = _ignore

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return format_cli_error(error)


_null_logger = NullLogger()


def safe_logger(logger: Optional[TrackerLogger]) -> TrackerLogger:
    """Return ``logger``, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def handle_cli_error(
    ctx: click.Context,
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Log a command failure, print it to stderr and exit with ``exit_code``.

    Never returns.
    """
    obj = ctx.obj or {}
    context = {"operation": operation, **(additional_context or {})}
    message = safe_logger(obj.get("logger")).log_cli_error(
        error, context, show_traceback=obj.get("verbose", False)
    )
    click.echo(message, err=True)
    sys.exit(exit_code)
