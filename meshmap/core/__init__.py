"""
Core rasterization pipeline: point aggregation, gap filling and the height map object.
"""

from .types import Point3D, GridCoord, Bounds, HeightMapState, as_point_array
from .aggregate import GridAggregator, aggregate, group_heights, compute_bounds, cell_indices
from .fill import GapFiller, fill, validate_neighborhood, DEFAULT_LOOK_AROUND_MATRIX_SIZE
from .heightmap import MeshHeightMap

__all__ = [
    'Point3D',
    'GridCoord',
    'Bounds',
    'HeightMapState',
    'as_point_array',
    'GridAggregator',
    'aggregate',
    'group_heights',
    'compute_bounds',
    'cell_indices',
    'GapFiller',
    'fill',
    'validate_neighborhood',
    'DEFAULT_LOOK_AROUND_MATRIX_SIZE',
    'MeshHeightMap',
]
