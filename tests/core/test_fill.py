"""Unit tests for gap filling."""

import unittest
import numpy as np

from meshmap.core.aggregate import aggregate
from meshmap.core.fill import GapFiller, fill, validate_neighborhood
from meshmap.core.types import GridCoord
from meshmap.exceptions import InvalidArgument


def brute_force_fill(sparse, size, neighborhood):
    """Reference fill written as nested lookups."""
    half = neighborhood // 2
    result = np.zeros(size * size)
    for col in range(size):
        for row in range(size):
            if (col, row) in sparse:
                result[col + row * size] = sparse[(col, row)]
                continue
            found = [
                sparse[(col + i, row + j)]
                for i in range(-half, half + 1)
                for j in range(-half, half + 1)
                if (col + i, row + j) in sparse
            ]
            result[col + row * size] = sum(found) / len(found) if found else 0.0
    return result


class TestValidateNeighborhood(unittest.TestCase):

    def test_even_values_accepted(self):
        for value in (2, 4, 10):
            self.assertEqual(validate_neighborhood(value), value)

    def test_invalid_values_rejected(self):
        for value in (3, 1, 0, -2, 2.0, True, "4"):
            with self.assertRaises(InvalidArgument):
                validate_neighborhood(value)


class TestGapFiller(unittest.TestCase):
    """Test class for the dense fill."""

    def test_occupied_cells_copied(self):
        sparse = {GridCoord(0, 0): 1.5, GridCoord(1, 1): -2.0}
        result = fill(sparse, 2)

        self.assertEqual(result.shape, (4,))
        self.assertEqual(result.dtype, np.float32)
        self.assertEqual(result[0], 1.5)
        self.assertEqual(result[3], -2.0)

    def test_empty_cells_average_window(self):
        sparse = {GridCoord(0, 0): 1.0, GridCoord(2, 0): 3.0}
        result = fill(sparse, 3, neighborhood=2)

        # (1, 0) sees both occupied cells
        self.assertAlmostEqual(result[1], 2.0)
        # (0, 1) only reaches (0, 0)
        self.assertAlmostEqual(result[0 + 1 * 3], 1.0)
        # (0, 2) reaches nothing
        self.assertEqual(result[0 + 2 * 3], 0.0)

    def test_window_is_inclusive(self):
        """A window of 2 reaches exactly one cell to each side."""
        sparse = {GridCoord(0, 0): 4.0}
        result = fill(sparse, 5, neighborhood=2).reshape(5, 5)

        self.assertEqual(result[1, 1], 4.0)
        self.assertEqual(result[0, 2], 0.0)
        self.assertEqual(result[2, 0], 0.0)

    def test_corners_scenario(self):
        """Occupied corners reach nearby cells; the centre stays at zero."""
        sparse = {
            GridCoord(0, 0): 1.0,
            GridCoord(9, 0): 2.0,
            GridCoord(0, 9): 3.0,
            GridCoord(9, 9): 4.0,
        }
        grid = fill(sparse, 10, neighborhood=4).reshape(10, 10)

        self.assertEqual(grid[2, 2], 1.0)
        self.assertEqual(grid[2, 7], 2.0)
        self.assertEqual(grid[7, 2], 3.0)
        self.assertEqual(grid[8, 8], 4.0)
        self.assertEqual(grid[5, 5], 0.0)
        self.assertEqual(grid[4, 4], 0.0)

    def test_out_of_range_keys(self):
        """Keys outside the grid contribute when within reach."""
        sparse = {GridCoord(-1, 0): 5.0, GridCoord(10, 10): 7.0}
        result = fill(sparse, 3, neighborhood=2)

        self.assertEqual(result[0], 5.0)
        self.assertEqual(result[0 + 1 * 3], 5.0)
        self.assertEqual(result[1], 0.0)
        self.assertTrue(np.isfinite(result).all())

    def test_plain_tuple_keys(self):
        result = fill({(0, 0): 2.0}, 2, neighborhood=2)
        np.testing.assert_array_equal(result, [2.0, 2.0, 2.0, 2.0])

    def test_empty_sparse(self):
        """Nothing occupied yields an all-zero grid."""
        np.testing.assert_array_equal(fill({}, 4), np.zeros(16))

    def test_matches_brute_force(self):
        rng = np.random.default_rng(3)
        points = rng.uniform(0.0, 1.0, size=(40, 3))
        for size, neighborhood in ((12, 2), (12, 4), (7, 6)):
            sparse = aggregate(points, size)
            expected = brute_force_fill(sparse, size, neighborhood)
            np.testing.assert_allclose(fill(sparse, size, neighborhood), expected, rtol=1e-6, atol=1e-6)

    def test_deterministic(self):
        rng = np.random.default_rng(11)
        sparse = aggregate(rng.normal(size=(200, 3)), 16)
        np.testing.assert_array_equal(fill(sparse, 16, 4), fill(sparse, 16, 4))

    def test_half_width(self):
        self.assertEqual(GapFiller(8, 6).half_width, 3)

    def test_invalid_construction(self):
        with self.assertRaises(InvalidArgument):
            GapFiller(8, 3)
        with self.assertRaises(InvalidArgument):
            GapFiller(0, 4)


if __name__ == '__main__':
    unittest.main()
