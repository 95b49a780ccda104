"""Property checks of the full rasterization pipeline."""

import math

import numpy as np
import pytest

from meshmap.core import MeshHeightMap, aggregate, fill


class TestPipelineProperties:
    """Invariants that hold for any non-degenerate point cloud."""

    @pytest.mark.parametrize("size,neighborhood", [(4, 2), (16, 4), (33, 8)])
    def test_every_cell_is_finite(self, random_points, size, neighborhood):
        height_map = MeshHeightMap(random_points, size, look_around_matrix_size=neighborhood)
        height_map.load()

        data = height_map.get_height_map()
        assert data.shape == (size * size,)
        assert np.isfinite(data).all()

    def test_occupied_cells_hold_exact_means(self, random_points):
        size = 10
        xs, zs = random_points[:, 0], random_points[:, 2]
        samples = {}
        for x, y, z in random_points.tolist():
            col = min(math.floor((x - xs.min()) / (xs.max() - xs.min()) * size), size - 1)
            row = min(math.floor((z - zs.min()) / (zs.max() - zs.min()) * size), size - 1)
            samples.setdefault((col, row), []).append(y)

        dense = fill(aggregate(random_points, size), size, 4)
        for (col, row), heights in samples.items():
            assert dense[col + row * size] == pytest.approx(np.mean(heights), rel=1e-6, abs=1e-6)

    def test_repeated_loads_are_identical(self, random_points):
        height_map = MeshHeightMap(random_points, 20)
        height_map.load()
        first = height_map.get_height_map()
        height_map.load()
        assert np.array_equal(first, height_map.get_height_map())

    def test_unit_square(self, unit_square_points):
        height_map = MeshHeightMap(unit_square_points, 2)
        assert height_map.load() is True
        assert height_map.get_height_map().tolist() == [0.0, 1.0, 0.0, 1.0]
