"""Heightmap generation commands."""
from pathlib import Path
from typing import Optional

import numpy as np

from ..core.ui import (
    ProgressContext,
    display_properties,
    format_height_map_summary,
    print_error,
    print_success,
    console,
)
from ...core import MeshHeightMap, compute_bounds
from ...exceptions import HeightMapException
from ...model import ConfigManager, HeightMapConfig, load_mesh_points


def build_config(
    config_file: Optional[Path] = None,
    size: Optional[int] = None,
    look_around: Optional[int] = None,
    up_axis: Optional[str] = None,
    workers: Optional[int] = None,
    height_scale: Optional[float] = None,
) -> HeightMapConfig:
    """Combine an optional JSON config file with command-line overrides."""
    base = ConfigManager.load_config(str(config_file)) if config_file else HeightMapConfig()
    return ConfigManager.merge_configs(base, {
        'size': size,
        'look_around_matrix_size': look_around,
        'up_axis': up_axis,
        'workers': workers,
        'height_scale': height_scale,
    })


def _load_height_map(mesh_file: Path, config: HeightMapConfig) -> MeshHeightMap:
    with ProgressContext(f"Reading {mesh_file.name}") as progress:
        points = load_mesh_points(mesh_file, up_axis=config.up_axis)
        progress.update(f"Rasterizing {len(points)} vertices into {config.size}x{config.size} cells")
        height_map = MeshHeightMap.from_config(points, config)
        height_map.load()
    return height_map


def convert_mesh_command(
    mesh_file: Path,
    output_file: Path,
    config: HeightMapConfig,
    normalize: Optional[float] = None,
) -> bool:
    """Build a heightmap from a mesh and write it to disk."""
    try:
        height_map = _load_height_map(mesh_file, config)

        if normalize is not None:
            height_map.normalize_terrain(normalize)

        saved = height_map.save(output_file)

        stats = height_map.stats()
        display_properties({
            "Input": str(mesh_file),
            "Vertices": height_map.point_count,
            "Grid Size": f"{height_map.size}x{height_map.size}",
            "Look-around Matrix": height_map.look_around_matrix_size,
            "Occupied Cells": stats['occupied_cells'],
            "Min Height": stats['min'],
            "Max Height": stats['max'],
            "Mean Height": stats['mean'],
        }, title="Heightmap")
        print_success(f"Heightmap saved to {saved}")
        return True

    except HeightMapException as e:
        print_error(f"Failed to convert {mesh_file}: {e}")
        return False


def info_command(mesh_file: Path, up_axis: str = 'y') -> bool:
    """Show vertex count and horizontal extent of a mesh."""
    try:
        points = load_mesh_points(mesh_file, up_axis=up_axis)
        properties = {"File": str(mesh_file), "Vertices": len(points)}

        if len(points):
            properties["Height Range"] = (float(np.min(points[:, 1])), float(np.max(points[:, 1])))
        bounds = compute_bounds(points)
        properties["X Range"] = (bounds.min_x, bounds.max_x)
        properties["Z Range"] = (bounds.min_z, bounds.max_z)

        display_properties(properties, title="Mesh Information")
        return True

    except HeightMapException as e:
        print_error(f"Failed to inspect {mesh_file}: {e}")
        return False


def preview_command(
    mesh_file: Path,
    output_file: Path,
    config: HeightMapConfig,
    mode: str = "2d",
) -> bool:
    """Render a heightmap preview image with matplotlib."""
    from ...plotters.matplotlib import plot_heightmap
    import matplotlib.pyplot as plt

    try:
        height_map = _load_height_map(mesh_file, config)
        fig = plot_heightmap(height_map.as_array(), str(output_file), mode=mode, title=mesh_file.name)
        plt.close(fig)
        console.print(format_height_map_summary(height_map.as_array()))
        print_success(f"Preview saved to {output_file}")
        return True

    except (HeightMapException, ValueError) as e:
        print_error(f"Failed to preview {mesh_file}: {e}")
        return False
