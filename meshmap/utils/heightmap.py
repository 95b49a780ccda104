"""Heightmap processing utilities."""

import numpy as np
from typing import Tuple
import logging

logger = logging.getLogger(__name__)


def as_grid(height_data: np.ndarray, size: int) -> np.ndarray:
    """
    View a flat ``col + row * size`` array as a 2D grid indexed ``[row, col]``.

    Args:
        height_data: Flat array of size*size heights
        size: Edge length of the grid

    Returns:
        2D array view of shape (size, size)
    """
    return np.asarray(height_data).reshape(size, size)


def validate_heightmap(heightmap: np.ndarray) -> bool:
    """True for a non-empty 2D numeric grid whose heights are all finite."""
    if not isinstance(heightmap, np.ndarray) or heightmap.ndim != 2 or heightmap.size == 0:
        return False
    if not np.issubdtype(heightmap.dtype, np.number):
        return False
    return bool(np.isfinite(heightmap).all())


def normalize_heightmap(heightmap: np.ndarray, value: float = 1.0) -> np.ndarray:
    """
    Normalize heightmap values to range [0, value].

    A flat heightmap becomes all zeros.
    """
    h_min = np.min(heightmap)
    h_max = np.max(heightmap)

    if h_max > h_min:
        return (heightmap - h_min) / (h_max - h_min) * value
    return np.zeros_like(heightmap)


def get_heightmap_stats(heightmap: np.ndarray) -> dict:
    """
    Get statistical information about a heightmap.

    Args:
        heightmap: Input heightmap array

    Returns:
        Dictionary containing heightmap statistics
    """
    return {
        'min': float(np.min(heightmap)),
        'max': float(np.max(heightmap)),
        'mean': float(np.mean(heightmap)),
        'std': float(np.std(heightmap)),
        'shape': heightmap.shape,
        'size': heightmap.size,
        'dtype': str(heightmap.dtype)
    }


def sample_heightmap(heightmap: np.ndarray, x: float, y: float) -> float:
    """
    Sample heightmap at floating point coordinates using bilinear interpolation.

    Coordinates outside the grid are clamped to the border.

    Args:
        heightmap: Input heightmap array indexed [y, x]
        x, y: Coordinates to sample

    Returns:
        Interpolated height value
    """
    h, w = heightmap.shape

    x = min(max(x, 0.0), w - 1.0)
    y = min(max(y, 0.0), h - 1.0)

    # Get integer coordinates
    x0 = int(np.floor(x))
    y0 = int(np.floor(y))
    x1 = min(x0 + 1, w - 1)
    y1 = min(y0 + 1, h - 1)

    fx = x - x0
    fy = y - y0

    h00 = heightmap[y0, x0]
    h10 = heightmap[y0, x1]
    h01 = heightmap[y1, x0]
    h11 = heightmap[y1, x1]

    h0 = h00 * (1 - fx) + h10 * fx
    h1 = h01 * (1 - fx) + h11 * fx

    return float(h0 * (1 - fy) + h1 * fy)


def min_max(heightmap: np.ndarray) -> Tuple[float, float]:
    """Return (min, max) of a heightmap as Python floats."""
    return float(np.min(heightmap)), float(np.max(heightmap))
