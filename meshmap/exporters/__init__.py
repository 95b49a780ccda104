"""
Heightmap exporters.

Exporters are selected by format name or by output file extension.
"""

import os
import logging
from typing import Callable, Dict, Optional

import numpy as np

from ..exceptions import InvalidArgument
from ..utils.heightmap import validate_heightmap
from .raw import export_to_npy, export_to_raw, load_from_npy, load_from_raw
from .image import export_heightmap_image

logger = logging.getLogger(__name__)

FORMAT_EXPORTERS: Dict[str, Callable[[np.ndarray, str], str]] = {
    "npy": export_to_npy,
    "raw": export_to_raw,
    "png": export_heightmap_image,
}

EXTENSION_FORMATS = {
    ".npy": "npy",
    ".raw": "raw",
    ".r32": "raw",
    ".png": "png",
}


def get_format_for_path(output_file: str) -> str:
    """Infer the export format from a file extension."""
    ext = os.path.splitext(output_file)[1].lower()
    if ext not in EXTENSION_FORMATS:
        raise InvalidArgument(
            f"Cannot infer export format from '{ext}', expected one of {sorted(EXTENSION_FORMATS)}"
        )
    return EXTENSION_FORMATS[ext]


def export_heightmap(height_map: np.ndarray, output_file: str, format_type: Optional[str] = None) -> str:
    """
    Export a 2D height map.

    Args:
        height_map: 2D array indexed [row, col]
        output_file: Destination path
        format_type: One of FORMAT_EXPORTERS, inferred from the extension if None

    Returns:
        Path to the written file
    """
    format_type = (format_type or get_format_for_path(output_file)).lower()
    if format_type not in FORMAT_EXPORTERS:
        raise InvalidArgument(f"Unknown export format '{format_type}', expected one of {sorted(FORMAT_EXPORTERS)}")

    if not validate_heightmap(height_map):
        raise InvalidArgument("Height map must be a non-empty 2D numeric array of finite heights")

    logger.debug(f"Exporting {height_map.shape} height map as {format_type}")
    return FORMAT_EXPORTERS[format_type](height_map, output_file)


__all__ = [
    'FORMAT_EXPORTERS',
    'export_heightmap',
    'get_format_for_path',
    'export_to_npy',
    'export_to_raw',
    'load_from_npy',
    'load_from_raw',
    'export_heightmap_image',
]
