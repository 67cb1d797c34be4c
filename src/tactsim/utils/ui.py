"""
User Interface Utilities.
Provides rich console output, log handler setup and board printing.
"""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from ..schemas import TactReport
from .render import render_report

# Initialize a global console instance
console = Console()

_STYLES = {
    "Error": "bold red",
    "Task finished": "bold green",
    "Tact": "bold cyan",
}


def setup_logging(level: str = "WARNING") -> None:
    """Route stdlib logging through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def print_header(title: str, subtitle: str = ""):
    """Prints a styled header."""
    console.rule(f"[bold blue]{title}")
    if subtitle:
        console.print(f"[dim]{subtitle}[/dim]", justify="center")
    console.print()


def print_report(report: TactReport) -> None:
    for line in render_report(report):
        style = next((s for prefix, s in _STYLES.items() if line.startswith(prefix)), None)
        console.print(line, style=style, markup=False, highlight=False, soft_wrap=True)
