"""
Unified logging system for the MIDI Bridge application.

This module provides a consistent logging interface across the entire codebase,
matching the CLI's Rich-based console style. Components receive a logger
instance through their constructors instead of reaching for a module global.
"""
import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

# Global console instance
console = Console()

LOG_FILE_ENV = "MIDI_BRIDGE_LOG_FILE"


class BridgeLogger:
    """Enhanced logger with Rich formatting."""

    def __init__(self, name: str, log_file: Optional[str] = None):
        self.name = name
        self.logger = logging.getLogger(name)
        self.log_file = log_file or os.getenv(LOG_FILE_ENV)
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Set up the logger with Rich handler and optional file handler."""
        # Clear existing handlers to avoid duplicates
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        rich_handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_time=False
        )
        rich_handler.setFormatter(logging.Formatter('%(message)s'))
        self.logger.addHandler(rich_handler)

        if self.log_file:
            file_handler = logging.FileHandler(self.log_file, mode='a', encoding='utf-8')
            file_handler.setFormatter(
                logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            )
            self.logger.addHandler(file_handler)

        self.logger.setLevel(logging.INFO)

        # Prevent propagation to avoid duplicate logs
        self.logger.propagate = False

    def set_level(self, level: Union[int, str]) -> None:
        """Set the logging level."""
        if isinstance(level, str):
            level = getattr(logging, level.upper())
        self.logger.setLevel(level)

    def info(self, message: str, **kwargs) -> None:
        self.logger.info(message, **kwargs)

    def success(self, message: str, **kwargs) -> None:
        """Log success message with a checkmark."""
        self.logger.info(f"✅ {message}", **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.logger.warning(f"⚠️  {message}", **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.logger.error(f"❌ {message}", **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        self.logger.critical(f"💥 {message}", **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self.logger.debug(message, **kwargs)

    def exception(self, message: str, exc_info: bool = True) -> None:
        """Log exception with Rich traceback."""
        self.logger.exception(f"💥 {message}", exc_info=exc_info)


def get_logger(name: str, log_file: Optional[str] = None) -> BridgeLogger:
    """Get a configured logger instance."""
    return BridgeLogger(name, log_file)


def set_debug_mode(enabled: bool = True) -> None:
    """Enable or disable debug mode for all loggers."""
    level = logging.DEBUG if enabled else logging.INFO

    for logger_name in list(logging.Logger.manager.loggerDict):
        logger = logging.getLogger(logger_name)
        if hasattr(logger, 'setLevel'):
            logger.setLevel(level)


def print_startup_banner(app_name: str = "MIDI Bridge", version: str = "0.1.0") -> None:
    """Print a startup banner."""
    banner_text = f"🎵 {app_name} v{version}"
    console.print(Panel.fit(banner_text, border_style="cyan", title="[bold cyan]Welcome[/bold cyan]"))
    console.print()


def print_section_header(title: str, description: Optional[str] = None) -> None:
    """Print a section header."""
    content = f"[bold cyan]{title}[/bold cyan]"
    if description:
        content += f"\n[dim]{description}[/dim]"
    console.print(Panel(content, border_style="blue"))
    console.print()
