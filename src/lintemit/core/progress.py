"""User-facing progress feedback on stderr.

Results go to stdout (see ``lintemit.display``), so everything here writes to
stderr and stays out of piped output. In a terminal, linting runs under a
spinner that counts finished linter runs. Elsewhere (CI, pipes) a single
start line is printed instead.

Usage::

    from lintemit.core.progress import lint_progress, status

    with lint_progress("Linting changes in HEAD") as progress:
        ...
        progress.advance(failed=False)

    status("No violations", style="success")  # ✓ No violations
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from rich.status import Status
    from structlog.stdlib import BoundLogger

_console = Console(stderr=True)

_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}

_suppress_console_logs = threading.local()


def is_console_suppressed() -> bool:
    """Check if console logging is currently suppressed."""
    return getattr(_suppress_console_logs, "active", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Suppress structlog console output while a live display is running."""
    _suppress_console_logs.active = True
    try:
        yield
    finally:
        _suppress_console_logs.active = False


def _get_logger() -> BoundLogger:
    from lintemit.core.logging import get_logger

    return get_logger("progress")


def _is_tty() -> bool:
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


def get_console() -> Console:
    """Get the shared stderr console."""
    return _console


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{escape(message)}", highlight=False)
    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Examples:
        pluralize(1, "file") -> "1 file"
        pluralize(3, "file") -> "3 files"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


class LintProgress:
    """Running tally of finished linter runs, mirrored into a live spinner."""

    def __init__(self, message: str, *, indent: int = 0) -> None:
        self.message = message
        self.indent = indent
        self.finished = 0
        self.failed = 0
        self._status: Status | None = None

    def render(self) -> str:
        """Spinner text, e.g. ``Linting changes (4 runs finished, 1 failed)``."""
        text = f"{' ' * self.indent}[cyan]{escape(self.message)}[/cyan]"
        if self.finished:
            tally = f"{pluralize(self.finished, 'run')} finished"
            if self.failed:
                tally += f", {self.failed} failed"
            text += f" [dim]({tally})[/dim]"
        return text

    def advance(self, *, failed: bool = False) -> None:
        self.finished += 1
        if failed:
            self.failed += 1
        if self._status is not None:
            self._status.update(self.render())


@contextmanager
def lint_progress(message: str, *, indent: int = 0) -> Iterator[LintProgress]:
    """Show a spinner while the block runs, with console logs suppressed.

    The spinner is transient. Without a terminal, prints ``message...`` once
    and counts silently.
    """
    progress = LintProgress(message, indent=indent)
    if _is_tty():
        with suppress_console_logs(), _console.status(progress.render(), spinner="dots") as live:
            progress._status = live
            try:
                yield progress
            finally:
                progress._status = None
    else:
        _console.print(f"{' ' * indent}{escape(message)}...", highlight=False)
        yield progress
    _get_logger().debug("lint_progress_done", finished=progress.finished, failed=progress.failed)
