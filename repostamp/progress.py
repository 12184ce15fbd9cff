"""
Progress reporting utilities for repostamp.

Status messages go to stderr so stdout stays clean for data.
"""

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape


class ProgressReporter:
    """Handles progress reporting to stderr while keeping stdout clean for data."""

    def __init__(self, enabled: Optional[bool] = None, console: Optional[Console] = None):
        """
        Initialize progress reporter.

        Args:
            enabled: Explicitly enable/disable progress. None = auto-detect
            console: Console to write to (default: a stderr console)
        """
        if enabled is None:
            # Auto-detect: show progress if stderr is a terminal
            self.enabled = sys.stderr.isatty()
        else:
            self.enabled = enabled

        self.console = console or Console(
            stderr=True,
            no_color=os.environ.get('NO_COLOR') is not None,
            highlight=False
        )

    def __call__(self, message: str, force: bool = False):
        """Report an informational message."""
        if self.enabled or force:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def error(self, message: str):
        """Report an error. Always shown."""
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def get_progress(enabled: Optional[bool] = None) -> ProgressReporter:
    """Create a progress reporter."""
    return ProgressReporter(enabled=enabled)
