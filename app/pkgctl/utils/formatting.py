"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.table import Table

from pkgctl.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_package_table(title: str, *, scope_column: bool = False) -> Table:
    """Create a pre-configured table for displaying package names.

    Args:
        title: Table title.
        scope_column: Add a column naming the list a package comes from.

    Returns:
        Rich Table with Source and Package columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("", width=3, justify="center")
    table.add_column("Source", width=8)
    if scope_column:
        table.add_column("Scope", style="scope")
    table.add_column("Package", no_wrap=True)
    return table


def print_command(command: str) -> None:
    """Print a shell command exactly as it will run."""
    console.print(f"  [command]{command}[/]", highlight=False, soft_wrap=True)


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
