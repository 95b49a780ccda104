"""Basic types shared by the rasterization pipeline."""

import enum
from typing import Dict, List, NamedTuple, Sequence, Union

import numpy as np

from ..exceptions import InvalidArgument


class Point3D(NamedTuple):
    """A single mesh vertex."""
    x: float
    y: float
    z: float


class GridCoord(NamedTuple):
    """A discrete grid index. Equality is exact integer equality."""
    col: int
    row: int


class Bounds(NamedTuple):
    """Horizontal extent of a point cloud."""
    min_x: float
    max_x: float
    min_z: float
    max_z: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def depth(self) -> float:
        return self.max_z - self.min_z


class HeightMapState(enum.Enum):
    """Lifecycle of a height map."""
    UNLOADED = "unloaded"
    LOADED = "loaded"


# GridCoord -> height samples, and GridCoord -> averaged height
CellGroup = Dict[GridCoord, List[float]]
AveragedGrid = Dict[GridCoord, float]

PointsLike = Union[np.ndarray, Sequence[Point3D], Sequence[Sequence[float]]]


def as_point_array(points: PointsLike) -> np.ndarray:
    """
    Convert caller point data to a read-only ``(n, 3)`` float64 array.

    Args:
        points: Sequence of Point3D, (x, y, z) tuples or an (n, 3) array

    Returns:
        Read-only array view of the points

    Raises:
        InvalidArgument: If the data is not (n, 3) shaped or not finite
    """
    try:
        array = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Points must be numeric (x, y, z) triples: {e}") from e

    # An empty sequence arrives as shape (0,)
    if array.size == 0:
        array = array.reshape(0, 3)

    if array.ndim != 2 or array.shape[1] != 3:
        raise InvalidArgument(f"Points must have shape (n, 3), got {array.shape}")

    if not np.isfinite(array).all():
        raise InvalidArgument("Points contain NaN or infinite coordinates")

    if array is points or array.base is not None:
        array = array.copy()
    array.setflags(write=False)
    return array
