"""User-facing reports for review outcomes."""

from abc import ABC, abstractmethod
from typing import Optional
import logging

from rich.console import Console

logger = logging.getLogger(__name__)


class Reporter(ABC):
    """Channel for informational and error messages shown to the user."""

    @abstractmethod
    def info(self, message: str):
        pass

    @abstractmethod
    def error(self, message: str):
        pass


class ConsoleReporter(Reporter):
    """Prints reports to a rich console and mirrors them to the log."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def info(self, message: str):
        logger.info(message)
        self.console.print(f"[green]{message}[/green]", markup=True, highlight=False)

    def error(self, message: str):
        logger.warning(message)
        self.console.print(f"[red]{message}[/red]", markup=True, highlight=False)
