"""Themed console output for the toolrouter CLI.

Wraps a rich Console with a small set of terminal themes and the status
line helpers the CLI uses.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
import sys

from rich.console import Console, RenderableType
from rich.text import Text
from rich.theme import Theme


class StatusType(Enum):
    """Standard status types with associated symbols."""
    SUCCESS = ("[✓]", "success", "green")
    ERROR = ("[x]", "error", "red")
    INFO = ("[!]", "info", "cyan")


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    info: str
    warning: str
    error: str
    success: str
    highlight: str
    heading: str
    number: str
    dim: str
    accent: str


THEMES = {
    'manhattan': ThemeColors(
        info='cyan',
        warning='yellow',
        error='red',
        success='green',
        highlight='bright_cyan',
        heading='bright_yellow',
        number='bright_blue',
        dim='bright_black',
        accent='cyan',
    ),
    'green': ThemeColors(
        info='green',
        warning='yellow',
        error='red',
        success='bright_green',
        highlight='bold green',
        heading='bright_cyan',
        number='green',
        dim='green',
        accent='bright_green',
    ),
    'sunset': ThemeColors(
        info='orange3',
        warning='yellow',
        error='red3',
        success='green',
        highlight='bold orange1',
        heading='dark_orange3',
        number='orange1',
        dim='grey50',
        accent='dark_orange3',
    ),
}


class ConsoleManager:
    """Console with theme support and status helpers."""

    def __init__(self, theme: str = "manhattan", file: Optional[Any] = None,
                 width: Optional[int] = None):
        """Initialize console.

        Args:
            theme: Theme name from THEMES
            file: Output file (defaults to sys.stdout)
            width: Fixed console width; detected from the terminal when None
        """
        self.theme_name = theme
        self.theme_colors = THEMES.get(theme, THEMES['manhattan'])
        self.file = file or sys.stdout
        self.console = Console(
            theme=self._create_rich_theme(),
            file=self.file,
            width=width,
            highlight=False,
        )

    def _create_rich_theme(self) -> Theme:
        """Create Rich theme from our theme colors."""
        colors = self.theme_colors
        return Theme({
            'info': colors.info,
            'warning': colors.warning,
            'error': colors.error,
            'success': colors.success,
            'highlight': colors.highlight,
            'heading': colors.heading,
            'number': colors.number,
            'dim': colors.dim,
            'accent': colors.accent,
        })

    def print(self, *args, **kwargs):
        self.console.print(*args, **kwargs)

    def render(self, renderable: RenderableType):
        """Print a rich renderable such as a tool result panel."""
        self.console.print(renderable)

    def print_status(self, status: StatusType, message: str, prefix: str = ""):
        """Print a status line with icon."""
        icon, _, color = status.value
        status_text = Text()
        if prefix:
            status_text.append(prefix + " ")
        status_text.append(f"{icon} ", style=color)
        status_text.append(message)
        self.console.print(status_text)

    def print_error(self, message: str):
        self.print_status(StatusType.ERROR, message)

    def print_success(self, message: str):
        self.print_status(StatusType.SUCCESS, message)

    def print_info(self, message: str):
        self.print_status(StatusType.INFO, message)

    def print_info_with_heading(self, heading: str, value: str):
        """Print an info message with a colored heading and regular value."""
        text = Text()
        text.append("i ", style=self.theme_colors.info)
        text.append(heading, style=self.theme_colors.heading)
        text.append(f" {value}", style=self.theme_colors.info)
        self.console.print(text)

    def print_exception(self):
        """Print exception traceback with Rich formatting."""
        self.console.print_exception()
