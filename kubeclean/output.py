"""
Output utility for kubeclean with colors, spinners, and verbosity control.

Diagnostics are written to stderr through Rich; the ConfigMap names selected
for removal are the only thing written to stdout, unstyled, so they can be
piped into other tools.
"""

from enum import IntEnum
from typing import Iterator, Optional
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape


class Verbosity(IntEnum):
    """Verbosity levels, selected by repeating -v."""

    WARN = 0  # Warnings, errors and the candidate names
    INFO = 1  # Counts, filter decisions, deletions
    DEBUG = 2  # Fetch counts, ownerless objects, exemptions, kubectl commands
    TRACE = 3  # Every ConfigMap reference found in a pod spec

    @classmethod
    def from_count(cls, count: int) -> "Verbosity":
        """Map the number of -v flags to a level, saturating at TRACE."""
        return cls(max(0, min(count, cls.TRACE)))


class OutputManager:
    """
    Output sink shared by the fetcher, reconciler and deletion executor.

    Constructed once by the CLI and passed down explicitly; library callers
    can fall back to the process-wide default from get_output().
    """

    def __init__(self, verbosity: Verbosity = Verbosity.WARN):
        """
        Initialize the output manager.

        Args:
            verbosity: Verbosity level for diagnostics
        """
        self.verbosity = verbosity
        self.console = Console(soft_wrap=True)
        self.error_console = Console(stderr=True, soft_wrap=True)

    def set_verbosity(self, verbosity: Verbosity) -> None:
        """Set the verbosity level."""
        self.verbosity = verbosity

    def error(self, message: str, suggestion: Optional[str] = None) -> None:
        """Print an error message in red to stderr."""
        self.error_console.print(f"[red]✗ {escape(message)}[/red]")
        if suggestion and self.verbosity >= Verbosity.INFO:
            self.error_console.print(f"[yellow]💡 {escape(suggestion)}[/yellow]")

    def warning(self, message: str) -> None:
        """Print a warning message in yellow."""
        self.error_console.print(f"[yellow]⚠ {escape(message)}[/yellow]")

    def success(self, message: str) -> None:
        """Print a success message in green."""
        if self.verbosity >= Verbosity.INFO:
            self.error_console.print(f"[green]✓[/green] {escape(message)}")

    def info(self, message: str) -> None:
        """Print an info message in blue."""
        if self.verbosity >= Verbosity.INFO:
            self.error_console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a debug message (shown from -vv)."""
        if self.verbosity >= Verbosity.DEBUG:
            self.error_console.print(f"[dim]{escape(message)}[/dim]")

    def trace(self, message: str) -> None:
        """Print a trace message (shown from -vvv)."""
        if self.verbosity >= Verbosity.TRACE:
            self.error_console.print(f"[dim italic]{escape(message)}[/dim italic]")

    def result(self, message: str) -> None:
        """Print a result line to stdout regardless of verbosity."""
        self.console.print(message, markup=False, highlight=False)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """
        Context manager for spinner (indeterminate progress).

        Only shown from INFO verbosity so the default output stays clean.

        Args:
            message: Message to display with spinner

        Yields:
            None
        """
        if self.verbosity < Verbosity.INFO:
            yield
            return

        with self.error_console.status(f"[cyan]{escape(message)}[/cyan]"):
            yield


# Global output manager instance
_output_manager: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """
    Get the global output manager instance.

    Returns:
        OutputManager instance
    """
    global _output_manager
    if _output_manager is None:
        _output_manager = OutputManager()
    return _output_manager


def set_output(manager: OutputManager) -> None:
    """Set the global output manager instance."""
    global _output_manager
    _output_manager = manager
