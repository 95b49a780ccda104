"""
MeshMap Package.

Converts the vertices of a 3D surface mesh into a regular square
heightmap suitable for terrain collision or level-of-detail rendering.
"""

__version__ = "0.1.0"

# Import the main exception classes for easy access
from meshmap.exceptions import (
    HeightMapException,
    InvalidArgument,
    EmptyInputError,
    DegenerateInputError,
    HeightMapFileError,
    ConfigError,
)

from meshmap.core import MeshHeightMap, Point3D, GridCoord, aggregate, fill
from meshmap.model import HeightMapConfig, load_mesh_points
