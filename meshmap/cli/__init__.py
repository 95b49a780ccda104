"""Command-line tools for meshmap."""

__version__ = "0.1.0"
