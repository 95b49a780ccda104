"""Utility functions for height grids."""

from .heightmap import (
    as_grid,
    validate_heightmap,
    normalize_heightmap,
    get_heightmap_stats,
    sample_heightmap,
)

__all__ = [
    'as_grid',
    'validate_heightmap',
    'normalize_heightmap',
    'get_heightmap_stats',
    'sample_heightmap',
]
