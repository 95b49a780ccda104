"""Unit tests for point conversion and basic types."""

import unittest
import numpy as np

from meshmap.core.types import Point3D, GridCoord, Bounds, as_point_array
from meshmap.exceptions import InvalidArgument


class TestPointConversion(unittest.TestCase):
    """Test class for as_point_array."""

    def test_point3d_sequence(self):
        """Point3D tuples convert to an (n, 3) array."""
        points = as_point_array([Point3D(1.0, 2.0, 3.0), Point3D(4.0, 5.0, 6.0)])

        self.assertEqual(points.shape, (2, 3))
        self.assertEqual(points.dtype, np.float64)
        np.testing.assert_array_equal(points[1], [4.0, 5.0, 6.0])

    def test_result_is_read_only(self):
        """The converted array cannot be written to."""
        points = as_point_array([(0.0, 0.0, 0.0)])
        with self.assertRaises(ValueError):
            points[0, 0] = 1.0

    def test_caller_array_is_not_shared(self):
        """The caller's array is copied, not frozen."""
        source = np.zeros((3, 3))
        points = as_point_array(source)

        source[0, 0] = 5.0
        self.assertEqual(points[0, 0], 0.0)
        self.assertTrue(source.flags.writeable)

    def test_empty_sequence(self):
        """An empty sequence becomes a (0, 3) array."""
        self.assertEqual(as_point_array([]).shape, (0, 3))

    def test_wrong_shape(self):
        """Points must have three coordinates."""
        with self.assertRaises(InvalidArgument):
            as_point_array([(1.0, 2.0)])
        with self.assertRaises(InvalidArgument):
            as_point_array(np.zeros(6))

    def test_non_finite(self):
        """NaN and infinite coordinates are rejected."""
        with self.assertRaises(InvalidArgument):
            as_point_array([(0.0, np.nan, 0.0)])
        with self.assertRaises(InvalidArgument):
            as_point_array([(np.inf, 0.0, 0.0)])

    def test_non_numeric(self):
        with self.assertRaises(InvalidArgument):
            as_point_array([("a", "b", "c")])


class TestTypes(unittest.TestCase):

    def test_grid_coord_equality(self):
        """GridCoords compare by exact integer components."""
        self.assertEqual(GridCoord(1, 2), GridCoord(1, 2))
        self.assertNotEqual(GridCoord(1, 2), GridCoord(2, 1))
        self.assertEqual({GridCoord(1, 2): 3.0}[GridCoord(1, 2)], 3.0)

    def test_bounds_extent(self):
        bounds = Bounds(min_x=-1.0, max_x=3.0, min_z=2.0, max_z=2.5)
        self.assertEqual(bounds.width, 4.0)
        self.assertEqual(bounds.depth, 0.5)


if __name__ == '__main__':
    unittest.main()
