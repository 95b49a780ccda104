"""
Height map built from the vertices of a mesh.

``MeshHeightMap`` holds a dense ``size x size`` grid of heights and fills it
from a point cloud in one aggregate-then-fill pass. Useful to derive a
collision shape for a terrain model that is far too detailed to be used
directly.
"""

import time
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from scipy import ndimage, signal

from ..exceptions import HeightMapException, InvalidArgument
from ..utils.heightmap import as_grid, get_heightmap_stats, min_max, normalize_heightmap, sample_heightmap
from ..utils.logging import pipeline_logger
from .aggregate import GridAggregator, validate_size
from .fill import DEFAULT_LOOK_AROUND_MATRIX_SIZE, GapFiller, validate_neighborhood
from .types import Bounds, HeightMapState, PointsLike, as_point_array

logger = logging.getLogger(__name__)


class MeshHeightMap:
    """
    Heightmap generated from a point cloud.

    Args:
        points: Mesh vertices as Point3D sequence, (x, y, z) tuples or (n, 3) array.
            Y is the vertical axis.
        size: Edge length of the heightmap
        look_around_matrix_size: Width of the window searched to fill empty cells
        workers: Threads used while aggregating points
    """

    def __init__(
        self,
        points: PointsLike,
        size: int,
        look_around_matrix_size: int = DEFAULT_LOOK_AROUND_MATRIX_SIZE,
        workers: int = 1,
    ):
        self._size = validate_size(size)
        self._look_around_matrix_size = validate_neighborhood(look_around_matrix_size)
        self._points = as_point_array(points)
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise InvalidArgument(f"workers must be a positive integer, got {workers!r}")
        self.workers = workers

        self._height_data = np.zeros(self._size * self._size, dtype=np.float32)
        self._state = HeightMapState.UNLOADED
        self._height_scale = 1.0
        self._filter = 0.5
        self._bounds: Optional[Bounds] = None
        self._occupied_cells = 0

    @classmethod
    def from_file(cls, file_path: Union[str, Path], size: int, up_axis: str = 'y', **kwargs) -> 'MeshHeightMap':
        """Create a height map from the vertices of a mesh or point file."""
        from ..model.readers import load_mesh_points
        return cls(load_mesh_points(file_path, up_axis=up_axis), size, **kwargs)

    @classmethod
    def from_config(cls, points: PointsLike, config) -> 'MeshHeightMap':
        """Create a height map from a HeightMapConfig."""
        height_map = cls(
            points,
            config.size,
            look_around_matrix_size=config.look_around_matrix_size,
            workers=config.workers,
        )
        height_map.set_height_scale(config.height_scale)
        height_map.set_magnification_filter(config.magnification_filter)
        return height_map

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def state(self) -> HeightMapState:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is HeightMapState.LOADED

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def look_around_matrix_size(self) -> int:
        return self._look_around_matrix_size

    @look_around_matrix_size.setter
    def look_around_matrix_size(self, value: int) -> None:
        self.set_look_around_matrix_size(value)

    def set_look_around_matrix_size(self, look_around_matrix_size: int) -> None:
        """
        Set the width of the window searched around empty cells.

        Meshes made of large triangles leave many cells without a vertex;
        those cells take the average of the occupied cells in this window.
        Takes effect on the next load.

        Raises:
            InvalidArgument: If the value is not a positive even number
        """
        self._look_around_matrix_size = validate_neighborhood(look_around_matrix_size)

    @property
    def height_scale(self) -> float:
        return self._height_scale

    def set_height_scale(self, scale: float) -> None:
        self._height_scale = float(scale)

    @property
    def magnification_filter(self) -> float:
        return self._filter

    def set_magnification_filter(self, filter_value: float) -> None:
        """
        Set the coefficient used by erode_terrain.

        Raises:
            InvalidArgument: If the value is outside [0, 1)
        """
        if not 0 <= filter_value < 1:
            raise InvalidArgument(f"Filter must be in [0, 1), got {filter_value}")
        self._filter = float(filter_value)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """
        Rasterize the points into the height grid.

        Each call recomputes from scratch. The grid is only replaced once
        the whole pass succeeded.

        Returns:
            True on success

        Raises:
            EmptyInputError: If there are no points
            DegenerateInputError: If the points have zero extent along X or Z
        """
        start_time = time.time()
        pipeline_logger.info(
            "Loading height map",
            size=self._size,
            points=len(self._points),
            look_around_matrix_size=self._look_around_matrix_size,
        )

        try:
            aggregator = GridAggregator(self._size, workers=self.workers)
            averaged = aggregator.aggregate(self._points)
            height_data = GapFiller(self._size, self._look_around_matrix_size).fill(averaged)
        except HeightMapException as e:
            pipeline_logger.error("Height map load failed", error=str(e))
            raise

        self._height_data = height_data
        self._bounds = aggregator.bounds
        self._occupied_cells = len(averaged)
        self._state = HeightMapState.LOADED

        pipeline_logger.info(
            "Height map loaded",
            bounds=self._bounds._asdict(),
            occupied_cells=self._occupied_cells,
            elapsed=round(time.time() - start_time, 4),
        )
        return True

    def unload(self) -> None:
        """Discard the height data."""
        self._height_data = np.zeros(self._size * self._size, dtype=np.float32)
        self._bounds = None
        self._occupied_cells = 0
        self._state = HeightMapState.UNLOADED

    @property
    def bounds(self) -> Optional[Bounds]:
        """Horizontal extent of the points used by the last load."""
        return self._bounds

    @property
    def occupied_cells(self) -> int:
        return self._occupied_cells

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def _index(self, col: int, row: int) -> int:
        if not (0 <= col < self._size and 0 <= row < self._size):
            raise InvalidArgument(f"Point ({col}, {row}) is outside a {self._size}x{self._size} height map")
        return col + row * self._size

    def get_true_height_at_point(self, col: int, row: int) -> float:
        return float(self._height_data[self._index(col, row)])

    def get_scaled_height_at_point(self, col: int, row: int) -> float:
        return self.get_true_height_at_point(col, row) * self._height_scale

    def set_height_at_point(self, height: float, col: int, row: int) -> None:
        self._height_data[self._index(col, row)] = height

    def get_interpolated_height(self, x: float, z: float) -> float:
        """Bilinear height between cells; x is the column axis, z the row axis."""
        return sample_heightmap(self.as_array(), x, z)

    def get_height_map(self) -> np.ndarray:
        """Copy of the flat height data, index ``col + row * size``."""
        return self._height_data.copy()

    def get_scaled_height_map(self) -> np.ndarray:
        return self._height_data * np.float32(self._height_scale)

    def as_array(self) -> np.ndarray:
        """2D view of the height data indexed ``[row, col]``."""
        return as_grid(self._height_data, self._size)

    def stats(self) -> dict:
        """Summary statistics of the current grid."""
        stats = get_heightmap_stats(self.as_array())
        stats['occupied_cells'] = self._occupied_cells
        stats['state'] = self._state.value
        return stats

    # ------------------------------------------------------------------
    # Terrain processing
    # ------------------------------------------------------------------

    def find_min_max_heights(self) -> Tuple[float, float]:
        return min_max(self._height_data)

    def normalize_terrain(self, value: float) -> None:
        """Rescale heights to the range [0, value]."""
        self._height_data = normalize_heightmap(self._height_data, value).astype(np.float32)

    def erode_terrain(self) -> None:
        """
        Apply a first-order FIR erosion in four directions.

        Every cell becomes ``filter * previous + (1 - filter) * height``,
        sweeping left to right, right to left, top to bottom and bottom to top.
        """
        grid = self.as_array().astype(np.float64)
        for axis in (1, 0):
            grid = self._sweep(grid, axis)
            grid = np.flip(self._sweep(np.flip(grid, axis), axis), axis)
        self._height_data = grid.astype(np.float32).ravel()

    def _sweep(self, grid: np.ndarray, axis: int) -> np.ndarray:
        f = self._filter
        zi = f * np.take(grid, [0], axis=axis)
        swept, _ = signal.lfilter([1 - f], [1, -f], grid, axis=axis, zi=zi)
        return swept

    def smooth(self, weight: float, radius: int = 1) -> None:
        """
        Blend each cell with the mean of its in-bounds neighbours.

        Args:
            weight: Share kept from the original height, in [0, 1]
            radius: Neighbourhood radius in cells
        """
        if not 0 <= weight <= 1:
            raise InvalidArgument(f"weight must be in [0, 1], got {weight}")
        if radius < 1:
            raise InvalidArgument(f"radius must be at least 1, got {radius}")

        grid = self.as_array().astype(np.float64)
        kernel = np.ones((2 * radius + 1, 2 * radius + 1))
        kernel[radius, radius] = 0.0

        sums = ndimage.convolve(grid, kernel, mode='constant', cval=0.0)
        counts = ndimage.convolve(np.ones_like(grid), kernel, mode='constant', cval=0.0)
        neighbour_mean = np.divide(sums, counts, out=grid.copy(), where=counts > 0)

        self._height_data = (grid * weight + neighbour_mean * (1 - weight)).astype(np.float32).ravel()

    def flatten(self, flattening: int) -> None:
        """
        Flatten low areas and sharpen peaks with a power curve.

        Values of 1 or less leave the terrain untouched.
        """
        if flattening <= 1:
            return

        min_height, max_height = self.find_min_max_heights()
        if max_height == min_height:
            return

        height_range = max_height - min_height
        normalized = (self._height_data.astype(np.float64) - min_height) / height_range
        self._height_data = (normalized ** flattening * height_range + min_height).astype(np.float32)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def save(self, output_file: Union[str, Path], format_type: Optional[str] = None) -> str:
        """
        Write the grid to disk; the format follows the file extension by default.

        Returns:
            Path to the written file
        """
        from ..exporters import export_heightmap

        if not self.is_loaded:
            logger.warning("Saving a height map that has not been loaded")
        return export_heightmap(self.as_array(), str(output_file), format_type)

    def __repr__(self) -> str:
        return (f"MeshHeightMap(size={self._size}, points={len(self._points)}, "
                f"look_around_matrix_size={self._look_around_matrix_size}, state={self._state.value})")
