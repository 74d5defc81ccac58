"""Logging for gqlbind with CLI output helpers."""

import logging

from rich.console import Console
from rich.logging import RichHandler


class GqlbindLogger(logging.Logger):
    """
    Logger that combines Python logging with a few CLI formatting methods.

    Standard levels (debug, info, warning, error, critical) go through a
    RichHandler; ``success`` and ``print`` write straight to the console.
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        """
        Initialize the logger.

        Args:
            name: Logger name
            level: Initial log level
        """
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def print(self, message: str) -> None:
        """Print a plain message (with Rich markup support)."""
        self.console.print(message)

    def success(self, message: str) -> None:
        """Print a success message in green with a checkmark icon."""
        self.print(f"[green]✓[/green] {message}")


def get_logger(name: str = "gqlbind") -> GqlbindLogger:
    """
    Get or create a gqlbind logger instance.

    Args:
        name: Logger name (default: "gqlbind")

    Returns:
        GqlbindLogger instance
    """
    previous_class = logging.getLoggerClass()
    logging.setLoggerClass(GqlbindLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(previous_class)

    return logger  # type: ignore[return-value]
