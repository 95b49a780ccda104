"""Typer applications for the CLI."""
