"""
Binary export/import of height grids.

Two formats are supported: NumPy ``.npy`` (keeps shape and dtype) and
headerless raw float32 (``.raw`` / ``.r32``), row-major with index
``col + row * size``, as read by most terrain engines.
"""

import os
import logging
from typing import Union

import numpy as np

from ..exceptions import HeightMapFileError

logger = logging.getLogger(__name__)

RAW_DTYPE = np.dtype('<f4')


def _prepare_output(output_path: str) -> str:
    output_path = os.path.abspath(output_path)
    os.makedirs(os.path.dirname(output_path), exist_ok=True)
    return output_path


def export_to_npy(height_map: np.ndarray, output_path: str) -> str:
    """
    Export a height map to NumPy .npy format.

    Args:
        height_map: 2D numpy array
        output_path: Path to save the .npy file

    Returns:
        Path to the saved file

    Raises:
        TypeError: If height map is not a NumPy array
        ValueError: If height map is not 2D
    """
    if not isinstance(height_map, np.ndarray):
        raise TypeError("Height map must be a NumPy array")
    if height_map.ndim != 2:
        raise ValueError(f"Height map should be 2D, got {height_map.ndim}D array")

    output_path = _prepare_output(output_path)
    np.save(output_path, height_map)
    logger.info(f"Height map exported to {output_path}")
    return output_path


def load_from_npy(file_path: str) -> np.ndarray:
    """
    Load a height map from a .npy file.

    Raises:
        HeightMapFileError: If the file does not exist or is unreadable
    """
    if not os.path.exists(file_path):
        raise HeightMapFileError(f"File not found: {file_path}")
    try:
        return np.load(file_path)
    except (OSError, ValueError) as e:
        raise HeightMapFileError(f"Failed to load {file_path}: {e}") from e


def export_to_raw(height_map: np.ndarray, output_path: str) -> str:
    """
    Export a height map as headerless little-endian float32.

    Returns:
        Path to the saved file
    """
    if not isinstance(height_map, np.ndarray):
        raise TypeError("Height map must be a NumPy array")

    output_path = _prepare_output(output_path)
    height_map.astype(RAW_DTYPE).tofile(output_path)
    logger.info(f"Height map exported to {output_path}")
    return output_path


def load_from_raw(file_path: str, size: Union[int, None] = None) -> np.ndarray:
    """
    Load a raw float32 height map.

    Args:
        file_path: Path to the raw file
        size: Edge length; inferred from the file length when omitted

    Returns:
        2D array of shape (size, size)

    Raises:
        HeightMapFileError: If the file is missing or not a square grid
    """
    if not os.path.exists(file_path):
        raise HeightMapFileError(f"File not found: {file_path}")

    data = np.fromfile(file_path, dtype=RAW_DTYPE)
    if size is None:
        size = int(round(np.sqrt(data.size)))
    if size * size != data.size:
        raise HeightMapFileError(f"{file_path} holds {data.size} values, not a {size}x{size} grid")
    return data.reshape(size, size)
