"""
Gap filling for sparse height grids.

Cells that received no samples are estimated from the mean of the
occupied cells inside a square lookaround window centred on them.
"""

import logging

import numpy as np
from scipy import ndimage

from ..exceptions import InvalidArgument
from .aggregate import validate_size
from .types import AveragedGrid

logger = logging.getLogger(__name__)

DEFAULT_LOOK_AROUND_MATRIX_SIZE = 4


def validate_neighborhood(neighborhood: int) -> int:
    """
    Check a lookaround matrix size.

    Raises:
        InvalidArgument: If the value is not a positive even integer
    """
    if isinstance(neighborhood, bool) or not isinstance(neighborhood, (int, np.integer)):
        raise InvalidArgument(f"lookAroundMatrixSize must be an integer, got {neighborhood!r}")
    if neighborhood <= 0 or neighborhood % 2 != 0:
        raise InvalidArgument(f"lookAroundMatrixSize must be a positive even number, got {neighborhood}")
    return int(neighborhood)


class GapFiller:
    """
    Densifies an AveragedGrid into a full ``size * size`` height array.

    The window spans ``neighborhood / 2`` cells on each side of the target,
    inclusive, so it is ``neighborhood + 1`` cells wide.
    """

    def __init__(self, size: int, neighborhood: int = DEFAULT_LOOK_AROUND_MATRIX_SIZE):
        self.size = validate_size(size)
        self.neighborhood = validate_neighborhood(neighborhood)

    @property
    def half_width(self) -> int:
        return self.neighborhood // 2

    def fill(self, sparse: AveragedGrid) -> np.ndarray:
        """
        Produce the dense height grid.

        Args:
            sparse: Mapping of occupied cells to their averaged height

        Returns:
            Flat float32 array of length size*size, index ``col + row * size``
        """
        size = self.size
        half = self.half_width
        padded = size + 2 * half

        # Keys outside the grid still count when they fall inside a window
        window_values = np.zeros((padded, padded), dtype=np.float64)
        window_counts = np.zeros((padded, padded), dtype=np.float64)
        grid = np.zeros((size, size), dtype=np.float64)
        occupied = np.zeros((size, size), dtype=bool)

        for (col, row), height in sparse.items():
            col, row = int(col), int(row)
            if 0 <= col + half < padded and 0 <= row + half < padded:
                window_values[row + half, col + half] = height
                window_counts[row + half, col + half] = 1.0
            if 0 <= col < size and 0 <= row < size:
                grid[row, col] = height
                occupied[row, col] = True

        kernel = np.ones((self.neighborhood + 1, self.neighborhood + 1), dtype=np.float64)
        sums = ndimage.convolve(window_values, kernel, mode='constant', cval=0.0)[half:half + size, half:half + size]
        counts = ndimage.convolve(window_counts, kernel, mode='constant', cval=0.0)[half:half + size, half:half + size]

        estimated = np.divide(sums, counts, out=np.zeros_like(sums), where=counts > 0)
        result = np.where(occupied, grid, estimated)

        empty = int(np.count_nonzero(~occupied & (counts == 0)))
        if empty:
            logger.debug(f"{empty} cells have no occupied neighbour and default to 0")

        return result.astype(np.float32).ravel()


def fill(sparse: AveragedGrid, size: int, neighborhood: int = DEFAULT_LOOK_AROUND_MATRIX_SIZE) -> np.ndarray:
    """
    Fill a sparse AveragedGrid into a dense row-major height array.

    Args:
        sparse: Mapping of occupied cells to averaged heights
        size: Edge length of the grid
        neighborhood: Positive even lookaround matrix size

    Returns:
        Flat float32 array of length size*size

    Raises:
        InvalidArgument: If size or neighborhood is invalid
    """
    return GapFiller(size, neighborhood).fill(sparse)
