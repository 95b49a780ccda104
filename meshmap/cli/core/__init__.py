#!/usr/bin/env python3
"""
Core functionality for meshmap CLI tools.
"""

import logging

from meshmap.cli.core.ui import (
    console,
    print_error,
    print_success,
    display_properties,
    format_height_map_summary,
    ProgressContext,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
