#!/usr/bin/env python3
"""MeshMap Command-Line Interface"""
import sys
from rich.console import Console

from meshmap.cli.apps.heightmap_app import create_app

console = Console()

app = create_app()


def main():
    """Run the MeshMap CLI application."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
