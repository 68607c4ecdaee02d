"""User-facing notifications.

Failures in the pipeline surface as non-blocking notifications; nothing
here raises or waits for input.
"""

from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape


class Notifier(ABC):
    """Destination for user-visible status messages."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Report a success or informational message."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Report a failure."""


class ConsoleNotifier(Notifier):
    """Print notifications to the terminal with rich markup."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def info(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}", highlight=False)

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] [red]{escape(message)}[/red]", highlight=False)
