"""User-facing progress feedback for CLI operations.

Everything here writes to stderr so stdout stays reserved for query results.

Usage::

    from captally.core.progress import spinner, status

    with spinner("Scanning extensions"):
        load = load_corpus(root, config)  # structlog console output suppressed

    status("Loaded 42 extensions", style="success")  # ✓ Loaded 42 extensions
    status("Skipped 1 extension", style="warning")  # ! Skipped 1 extension
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

# Process-wide: reader threads log while the main thread owns the spinner
_suppress_console_logs = threading.Event()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return _suppress_console_logs.is_set()


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Suppress structlog console output while a live display is running.

    Logs are still written to file handlers.
    """
    _suppress_console_logs.set()
    try:
        yield
    finally:
        _suppress_console_logs.clear()


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from captally.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)

    _get_logger().debug("status", message=message, style=style)


@contextmanager
def spinner(message: str, *, indent: int = 0) -> Iterator[None]:
    """Context manager for a spinner with log suppression.

    On a non-TTY stderr nothing is animated and nothing is printed.
    """
    padding = " " * indent
    if _is_tty():
        with (
            suppress_console_logs(),
            _console.status(f"{padding}[cyan]{message}[/cyan]", spinner="dots"),
        ):
            yield
    else:
        yield
