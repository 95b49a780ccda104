#!/usr/bin/env python3
"""
Matplotlib preview of height grids.

Renders a loaded height map as a 2D heatmap or a 3D surface and saves it
to an image file. The non-interactive Agg backend is used so previews
work without a display.
"""

import os
import logging
from typing import Optional, Tuple

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  registers the 3d projection

logger = logging.getLogger(__name__)

COLORBAR_LABEL = "Height"
SUPPORTED_MODES = ["2d", "3d"]


def plot_heightmap(
    height_map: np.ndarray,
    output_file: Optional[str] = None,
    mode: str = "2d",
    colormap: str = "terrain",
    title: str = "Height Map",
    figsize: Tuple[float, float] = (8, 6),
):
    """
    Plot a 2D height map indexed [row, col].

    Args:
        height_map: 2D numpy array
        output_file: Image path to save to; the figure is returned either way
        mode: "2d" heatmap or "3d" surface
        colormap: Matplotlib colormap name
        title: Figure title
        figsize: Figure size in inches

    Returns:
        Matplotlib Figure object
    """
    mode = mode.lower()
    if mode not in SUPPORTED_MODES:
        raise ValueError(f"mode must be one of {SUPPORTED_MODES}, got '{mode}'")

    fig = plt.figure(figsize=figsize)

    if mode == "3d":
        ax = fig.add_subplot(111, projection="3d")
        rows, cols = height_map.shape
        x, z = np.meshgrid(np.arange(cols), np.arange(rows))
        surface = ax.plot_surface(x, z, height_map, cmap=colormap, linewidth=0, antialiased=True)
        ax.set_xlabel("Column")
        ax.set_ylabel("Row")
        ax.set_zlabel(COLORBAR_LABEL)
        fig.colorbar(surface, ax=ax, shrink=0.6, label=COLORBAR_LABEL)
    else:
        ax = fig.add_subplot(111)
        image = ax.imshow(height_map, cmap=colormap, origin="lower")
        ax.set_xlabel("Column")
        ax.set_ylabel("Row")
        fig.colorbar(image, ax=ax, label=COLORBAR_LABEL)

    ax.set_title(title)

    if output_file:
        output_file = os.path.abspath(output_file)
        os.makedirs(os.path.dirname(output_file), exist_ok=True)
        fig.savefig(output_file, dpi=100, bbox_inches="tight")
        logger.info(f"Saved preview to {output_file}")

    return fig
