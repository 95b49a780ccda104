"""Configuration and mesh input for height map generation."""

from .config import HeightMapConfig, ConfigManager
from .readers import load_mesh_points, orient_points

__all__ = ['HeightMapConfig', 'ConfigManager', 'load_mesh_points', 'orient_points']
