"""
Grid aggregation of 3D points.

Points are binned into a ``size x size`` grid by their horizontal (X, Z)
position inside the bounding box of the cloud, and the vertical (Y)
values landing in each cell are averaged.
"""

import logging
import math
import concurrent.futures
from typing import Optional, Tuple

import numpy as np

from ..exceptions import DegenerateInputError, EmptyInputError, InvalidArgument
from .types import AveragedGrid, Bounds, CellGroup, GridCoord, PointsLike, as_point_array

logger = logging.getLogger(__name__)


def validate_size(size: int) -> int:
    """Return ``size`` if it is a positive integer, raise InvalidArgument otherwise."""
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size <= 0:
        raise InvalidArgument(f"size must be a positive integer, got {size!r}")
    return int(size)


def compute_bounds(points: np.ndarray) -> Bounds:
    """
    Compute the horizontal bounding box of a point array.

    Args:
        points: (n, 3) array of x, y, z coordinates

    Returns:
        Bounds over X and Z

    Raises:
        EmptyInputError: If there are no points
        DegenerateInputError: If X or Z has zero extent or an extent too large to represent
    """
    if len(points) == 0:
        raise EmptyInputError("Cannot compute bounds of an empty point set")

    min_x, _, min_z = points.min(axis=0)
    max_x, _, max_z = points.max(axis=0)
    bounds = Bounds(float(min_x), float(max_x), float(min_z), float(max_z))

    if bounds.width == 0:
        raise DegenerateInputError(f"All points share the same X coordinate ({bounds.min_x})")
    if bounds.depth == 0:
        raise DegenerateInputError(f"All points share the same Z coordinate ({bounds.min_z})")
    if not (math.isfinite(bounds.width) and math.isfinite(bounds.depth)):
        raise DegenerateInputError(f"Horizontal extent overflows: width={bounds.width}, depth={bounds.depth}")

    return bounds


def cell_indices(points: np.ndarray, bounds: Bounds, size: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map every point to its (col, row) grid cell.

    Points lying exactly on the upper bound would floor to ``size``;
    they are clamped into the last cell.

    Returns:
        Tuple of (cols, rows) integer arrays
    """
    cols = np.floor((points[:, 0] - bounds.min_x) / bounds.width * size).astype(np.int64)
    rows = np.floor((points[:, 2] - bounds.min_z) / bounds.depth * size).astype(np.int64)
    np.clip(cols, 0, size - 1, out=cols)
    np.clip(rows, 0, size - 1, out=rows)
    return cols, rows


def _accumulate(heights: np.ndarray, flat_index: np.ndarray, cells: int) -> Tuple[np.ndarray, np.ndarray]:
    """Per-cell sum and count of heights for one partition."""
    sums = np.bincount(flat_index, weights=heights, minlength=cells)
    counts = np.bincount(flat_index, minlength=cells)
    return sums, counts


class GridAggregator:
    """
    Bins points into a square grid and averages the heights per cell.

    Args:
        size: Edge length of the grid
        workers: Number of threads used to accumulate partitions of the
            point array. Partial sums are merged after all threads finish.
    """

    def __init__(self, size: int, workers: int = 1):
        self.size = validate_size(size)
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise InvalidArgument(f"workers must be a positive integer, got {workers!r}")
        self.workers = workers
        self.bounds: Optional[Bounds] = None

    def _prepare(self, points: PointsLike) -> Tuple[np.ndarray, np.ndarray]:
        array = as_point_array(points)
        self.bounds = compute_bounds(array)
        cols, rows = cell_indices(array, self.bounds, self.size)
        return array[:, 1], cols + rows * self.size

    def accumulate(self, points: PointsLike) -> Tuple[np.ndarray, np.ndarray]:
        """
        Reduce points to dense per-cell sum and count arrays.

        Returns:
            Tuple of (sums, counts), both flat arrays of length size*size
            indexed ``col + row * size``
        """
        heights, flat_index = self._prepare(points)
        cells = self.size * self.size

        if self.workers == 1 or len(heights) < 2 * self.workers:
            return _accumulate(heights, flat_index, cells)

        chunk = math.ceil(len(heights) / self.workers)
        sums = np.zeros(cells, dtype=np.float64)
        counts = np.zeros(cells, dtype=np.int64)

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [
                executor.submit(_accumulate, heights[start:start + chunk], flat_index[start:start + chunk], cells)
                for start in range(0, len(heights), chunk)
            ]
            # Merge in submission order so the summation order is fixed
            for future in futures:
                part_sums, part_counts = future.result()
                sums += part_sums
                counts += part_counts

        return sums, counts

    def group_heights(self, points: PointsLike) -> CellGroup:
        """Group the Y value of every point by its grid cell."""
        heights, flat_index = self._prepare(points)
        groups: CellGroup = {}
        for height, index in zip(heights.tolist(), flat_index.tolist()):
            coord = GridCoord(index % self.size, index // self.size)
            groups.setdefault(coord, []).append(height)
        return groups

    def aggregate(self, points: PointsLike) -> AveragedGrid:
        """
        Average the heights of all points per occupied grid cell.

        Returns:
            Mapping of every occupied GridCoord to its mean height
        """
        sums, counts = self.accumulate(points)
        occupied = np.flatnonzero(counts)
        means = sums[occupied] / counts[occupied]

        logger.debug(f"Aggregated points into {len(occupied)} of {self.size * self.size} cells")

        return {
            GridCoord(int(index % self.size), int(index // self.size)): float(mean)
            for index, mean in zip(occupied, means)
        }


def aggregate(points: PointsLike, size: int, workers: int = 1) -> AveragedGrid:
    """
    Bin points into a ``size x size`` grid and average heights per cell.

    Args:
        points: Point cloud as Point3D sequence, tuples or (n, 3) array
        size: Edge length of the grid
        workers: Threads used for accumulation

    Returns:
        AveragedGrid mapping occupied cells to mean heights

    Raises:
        EmptyInputError: If no points are supplied
        DegenerateInputError: If X or Z has zero extent
        InvalidArgument: If size or the point data is invalid
    """
    return GridAggregator(size, workers=workers).aggregate(points)


def group_heights(points: PointsLike, size: int) -> CellGroup:
    """Group heights by cell without averaging."""
    return GridAggregator(size).group_heights(points)
