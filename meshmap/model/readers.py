"""
Vertex extraction from mesh and point files.

Only vertex positions are read; faces and other connectivity are dropped.
Mesh formats are read through meshio, point dumps through NumPy.
"""

import os
import logging
from typing import Union
from pathlib import Path

import numpy as np
import meshio

from ..exceptions import HeightMapFileError, InvalidArgument

logger = logging.getLogger(__name__)

POINT_LIST_EXTENSIONS = ['.xyz', '.txt', '.csv']


def orient_points(points: np.ndarray, up_axis: str = 'y') -> np.ndarray:
    """
    Reorder columns so that the vertical axis is Y.

    Args:
        points: (n, 3) array
        up_axis: 'y' if the source is Y-up, 'z' if it is Z-up

    Returns:
        (n, 3) array in x, y (up), z order
    """
    if up_axis == 'y':
        return points
    if up_axis == 'z':
        return points[:, [0, 2, 1]]
    raise InvalidArgument(f"up_axis must be 'y' or 'z', got '{up_axis}'")


def _read_point_list(file_path: str) -> np.ndarray:
    delimiter = ',' if file_path.lower().endswith('.csv') else None
    points = np.loadtxt(file_path, delimiter=delimiter, comments='#', ndmin=2)
    if points.size and points.shape[1] < 3:
        raise HeightMapFileError(f"{file_path} needs at least 3 columns, got {points.shape[1]}")
    return points[:, :3]


def _read_mesh(file_path: str) -> np.ndarray:
    mesh = meshio.read(file_path)
    points = np.asarray(mesh.points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 3:
        raise HeightMapFileError(f"{file_path} does not contain 3D vertices (shape {points.shape})")
    return points


def load_mesh_points(file_path: Union[str, Path], up_axis: str = 'y') -> np.ndarray:
    """
    Load the vertex positions of a mesh or point file.

    Args:
        file_path: Path to a mesh (any meshio format), .npy or point list
        up_axis: Vertical axis of the source data

    Returns:
        (n, 3) float64 array with Y as the vertical axis

    Raises:
        HeightMapFileError: If the file is missing or cannot be parsed
    """
    file_path = str(file_path)
    if not os.path.exists(file_path):
        raise HeightMapFileError(f"File not found: {file_path}")

    ext = os.path.splitext(file_path)[1].lower()
    try:
        if ext == '.npy':
            points = np.load(file_path)
        elif ext in POINT_LIST_EXTENSIONS:
            points = _read_point_list(file_path)
        else:
            points = _read_mesh(file_path)
    except HeightMapFileError:
        raise
    except (meshio.ReadError, OSError, ValueError) as e:
        raise HeightMapFileError(f"Failed to read points from {file_path}: {e}") from e

    points = np.asarray(points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 3:
        raise HeightMapFileError(f"{file_path} must hold an (n, 3) array, got shape {points.shape}")

    logger.info(f"Loaded {len(points)} vertices from {file_path}")
    return orient_points(points, up_axis)
