"""Unit tests for heightmap utility functions."""

import logging
import unittest

import numpy as np

from meshmap.utils.heightmap import (
    as_grid,
    get_heightmap_stats,
    normalize_heightmap,
    sample_heightmap,
    validate_heightmap,
)
from meshmap.utils.logging import StructuredLogger


class TestHeightmapUtils(unittest.TestCase):
    """Test class for heightmap helpers."""

    def test_as_grid_layout(self):
        grid = as_grid(np.arange(9.0), 3)
        self.assertEqual(grid.shape, (3, 3))
        # index col + row * size
        self.assertEqual(grid[2, 1], 7.0)

    def test_validate(self):
        self.assertTrue(validate_heightmap(np.zeros((2, 2))))
        self.assertFalse(validate_heightmap(None))
        self.assertFalse(validate_heightmap(np.zeros(4)))
        self.assertFalse(validate_heightmap(np.array([[np.nan, 0.0]])))
        self.assertFalse(validate_heightmap(np.array([[np.inf, 0.0]])))
        self.assertFalse(validate_heightmap(np.array([["a", "b"]])))

    def test_normalize(self):
        result = normalize_heightmap(np.array([2.0, 4.0, 6.0]), 10.0)
        np.testing.assert_allclose(result, [0.0, 5.0, 10.0])

    def test_stats(self):
        stats = get_heightmap_stats(np.array([[1.0, 3.0]]))
        self.assertEqual(stats['min'], 1.0)
        self.assertEqual(stats['max'], 3.0)
        self.assertEqual(stats['mean'], 2.0)
        self.assertEqual(stats['size'], 2)

    def test_sample_clamps(self):
        grid = np.array([[0.0, 2.0], [4.0, 6.0]])
        self.assertAlmostEqual(sample_heightmap(grid, 0.5, 0.5), 3.0)
        self.assertAlmostEqual(sample_heightmap(grid, -3.0, 0.0), 0.0)
        self.assertAlmostEqual(sample_heightmap(grid, 5.0, 5.0), 6.0)


class TestStructuredLogger(unittest.TestCase):

    def test_context_is_appended(self):
        structured = StructuredLogger("meshmap.test")
        with self.assertLogs("meshmap.test", level="INFO") as captured:
            structured.info("Loaded", cells=4)

        self.assertEqual(captured.records[0].getMessage(), 'Loaded | {"cells": 4}')

    def test_plain_message(self):
        structured = StructuredLogger("meshmap.test")
        with self.assertLogs("meshmap.test", level="DEBUG") as captured:
            structured.debug("plain")
            structured.warning("careful", path="a.obj")

        self.assertEqual(captured.records[0].getMessage(), "plain")
        self.assertEqual(captured.records[1].levelno, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
