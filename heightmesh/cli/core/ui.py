#!/usr/bin/env python3
"""
UI components for heightmesh CLI tools.

This module provides the shared rich console, message helpers and logging
setup used by the command-line tools.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

from heightmesh.exceptions import HeightMeshException

logger = logging.getLogger(__name__)

# Create a custom theme
heightmesh_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "filename": "bold blue",
    "value": "green",
    "key": "cyan",
    "header": "bold magenta",
})

console = Console(theme=heightmesh_theme)


def setup_logging(verbose: bool = False) -> None:
    """
    Route library logging through rich.

    Args:
        verbose: Show INFO messages instead of warnings only
    """
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def print_rich_table(data: List[Dict[str, Any]], title: str,
                     columns: Optional[List[Tuple[str, str]]] = None) -> None:
    """
    Print data as a rich table.
    
    Args:
        data: List of dictionaries with row data.
        title: Table title.
        columns: Optional list of (column_name, style) tuples.
    """
    table = Table(title=title)

    if not columns:
        columns = [(key, "") for key in (data[0].keys() if data else [])]
    for name, style in columns:
        table.add_column(name, style=style or None)

    for row in data:
        table.add_row(*[str(row.get(name, "")) for name, _ in columns])

    console.print(table)


def print_warning(message: str) -> None:
    """
    Print a warning message.
    
    Args:
        message: Warning message text
    """
    console.print(f"[warning]Warning:[/warning] {message}")


def print_error(message: str) -> None:
    """
    Print an error message.
    
    Args:
        message: Error message text
    """
    console.print(f"[error]Error:[/error] {message}")


def print_success(message: str) -> None:
    """
    Print a success message.
    
    Args:
        message: Success message text
    """
    console.print(f"[success]✓[/success] {message}")


def print_info(message: str) -> None:
    """
    Print an informational message.
    
    Args:
        message: Info message text
    """
    console.print(f"[info]{message}[/info]")


@contextmanager
def exit_on_error():
    """Print library errors and exit with status 1 instead of a traceback."""
    try:
        yield
    except HeightMeshException as e:
        logger.debug("Command failed", exc_info=True)
        print_error(str(e))
        raise typer.Exit(code=1)
