"""
Pytest fixtures shared across test modules.
"""
import numpy as np
import pytest


@pytest.fixture
def unit_square_points():
    """Four corners of the unit square; height equals X."""
    return [(0.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 0.0, 1.0), (1.0, 1.0, 1.0)]


@pytest.fixture
def random_points():
    """A reproducible random point cloud."""
    rng = np.random.default_rng(42)
    points = rng.uniform(-5.0, 5.0, size=(500, 3))
    points[:, 1] = np.sin(points[:, 0]) + np.cos(points[:, 2])
    return points
