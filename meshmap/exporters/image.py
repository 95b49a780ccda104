"""
Heightmap export to grayscale images.
"""

import os
import logging

import numpy as np
from PIL import Image

from ..exceptions import HeightMapFileError
from ..utils.heightmap import normalize_heightmap

# Set up logging
logger = logging.getLogger(__name__)


def to_grayscale(height_map: np.ndarray, bit_depth: int = 16) -> np.ndarray:
    """
    Scale a height map to the full integer range of the given bit depth.

    A flat map becomes all zeros.
    """
    if bit_depth == 16:
        return (normalize_heightmap(height_map.astype(np.float64)) * 65535).astype(np.uint16)
    if bit_depth == 8:
        return (normalize_heightmap(height_map.astype(np.float64)) * 255).astype(np.uint8)
    raise ValueError(f"bit_depth must be 8 or 16, got {bit_depth}")


def export_heightmap_image(height_map: np.ndarray, output_file: str, bit_depth: int = 16) -> str:
    """
    Save a height map as a grayscale image.

    Args:
        height_map: 2D numpy array of height values
        output_file: Path to save the image (format from extension)
        bit_depth: Output bit depth (8 or 16)

    Returns:
        Path to the saved image

    Raises:
        HeightMapFileError: If the image cannot be written
    """
    if height_map.ndim != 2:
        raise ValueError(f"Height map should be 2D, got {height_map.ndim}D array")

    output_file = os.path.abspath(output_file)
    os.makedirs(os.path.dirname(output_file), exist_ok=True)

    pixels = to_grayscale(height_map, bit_depth)
    try:
        Image.fromarray(pixels).save(output_file)
    except (OSError, ValueError, KeyError) as e:
        raise HeightMapFileError(f"Failed to save image {output_file}: {e}") from e

    logger.info(f"Saved {bit_depth}-bit heightmap image to {output_file}")
    return output_file
