"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=results only, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Comment removed")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=results only, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )
        self.error_console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red on stderr."""
        self.error_console.print(f"[red]✗[/red] {escape(message)}", style="red", soft_wrap=True)

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def result(self, value: object) -> None:
        """Print a command's result verbatim, without markup processing.

        Results (URLs, comment text, tokens) go to stdout unstyled so they
        can be piped into other tools.
        """
        self.console.print(str(value), markup=False, soft_wrap=True)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a remote call runs.

        Example:
            >>> with handler.spinner("Creating page..."):
            ...     wiki.create_page("Muscle")
        """
        if not self.console.is_terminal:
            yield
            return
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield
