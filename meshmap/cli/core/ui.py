#!/usr/bin/env python3
"""
UI components for meshmap CLI tools.

This module provides functions for creating consistent console output
across the CLI commands.
"""

import logging
from typing import Dict, Any

from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.theme import Theme

logger = logging.getLogger(__name__)

meshmap_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "filename": "bold blue",
    "value": "green",
    "key": "cyan",
})

console = Console(theme=meshmap_theme)


def display_properties(properties: Dict[str, Any], title: str) -> None:
    """
    Display a two column Property/Value table.

    Floats are shown with six decimals.
    """
    table = Table(title=title)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    for key, value in properties.items():
        if isinstance(value, float):
            formatted_value = f"{value:.6f}"
        elif isinstance(value, (list, tuple)) and all(isinstance(x, (int, float)) for x in value):
            formatted_value = ", ".join(f"{x:.4f}" if isinstance(x, float) else str(x) for x in value)
        else:
            formatted_value = str(value)
        table.add_row(str(key), formatted_value)

    console.print(table)


def format_height_map_summary(height_map) -> str:
    """
    Format a summary of a 2D height map.

    Args:
        height_map: NumPy array with height data.

    Returns:
        Formatted string with height map summary.
    """
    if height_map is None:
        return "Height map not available"

    return (
        f"Dimensions: {height_map.shape[1]}×{height_map.shape[0]}\n"
        f"Height Range: {height_map.min():.6f} to {height_map.max():.6f}\n"
        f"Mean Height: {height_map.mean():.6f}"
    )


class ProgressContext:
    """Context manager showing a spinner while a step runs."""

    def __init__(self, description: str = "Processing..."):
        self.description = description
        self.progress = None
        self.task = None

    def __enter__(self):
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            console=console,
            transient=True,
        )
        self.progress.start()
        self.task = self.progress.add_task(self.description)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress.stop()

    def update(self, description: str) -> None:
        self.progress.update(self.task, description=description)


def print_error(message: str) -> None:
    console.print(f"[error]Error:[/error] {message}")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/success]")
