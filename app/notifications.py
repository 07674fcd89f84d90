# app/notifications.py
from typing import Optional, Protocol

from rich.console import Console
from rich.panel import Panel

from .logging import get_logger

logger = get_logger(__name__)


class Notifier(Protocol):
    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Shows errors as a red panel, the terminal version of a toast."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def error(self, message: str) -> None:
        self.console.print(Panel.fit(f"[red]{message}[/red]", title="Error", border_style="red"))


class LoggingNotifier:
    def error(self, message: str) -> None:
        logger.error(message)
