#!/usr/bin/env python3
"""
Matplotlib plotter for rectangle merge results.

Draws the height grid as a background image, outlines the rectangles a merge
pass emitted and marks every vertex of the reduced mesh.
"""

import logging
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from heightmesh.grid import HeightGrid
from heightmesh.model.triangulation.rect import Rect
from heightmesh.plotters.base import BasePlotter

# Set up logger
logger = logging.getLogger(__name__)


class MatplotlibMergePlotter(BasePlotter):
    """Matplotlib implementation of the merge result plotter."""

    NAME = "matplotlib"
    DEFAULT_COLORMAP = "terrain"

    def __init__(self) -> None:
        """Initialize the Matplotlib plotter."""
        super().__init__()
        # Lazy load matplotlib modules
        try:
            import matplotlib.pyplot as plt
            from matplotlib.patches import Rectangle
        except ImportError:
            raise ImportError("matplotlib is required for MatplotlibMergePlotter")
        self.plt = plt
        self.Rectangle = Rectangle

    def plot(
        self,
        grid: HeightGrid,
        rects: Iterable[Rect] = (),
        vertices: Optional[Sequence[Sequence[float]]] = None,
        cell_quads: Iterable[Rect] = (),
        **kwargs
    ) -> Any:
        """
        Plot a merge result over its height grid.

        Args:
            grid: Height grid the mesh was built from
            rects: Merged rectangles (drawn as solid outlines)
            vertices: Result vertices as (x, y, z); drawn as points in the x-z plane
            cell_quads: Single-cell quads (drawn as thin dashed outlines)
            **kwargs: Options such as:
                - colormap: Colormap name (default: "terrain")
                - figsize: Figure size (default: (8, 8))
                - title: Plot title (default: "Rectangle merge")

        Returns:
            Matplotlib Figure object.
        """
        figsize = kwargs.get("figsize", (8, 8))
        title = kwargs.get("title", "Rectangle merge")
        cmap = kwargs.get("colormap", self.DEFAULT_COLORMAP)

        fig, ax = self.plt.subplots(figsize=figsize)

        if grid.size:
            # Cells are centred on integer coordinates; rows of the image are z
            image = ax.imshow(
                grid.values.T,
                origin="lower",
                cmap=cmap,
                extent=(-0.5, grid.width - 0.5, -0.5, grid.height - 0.5)
            )
            fig.colorbar(image, ax=ax, label="Height")

        rect_count = 0
        for rect in rects:
            ax.add_patch(self.Rectangle(
                (rect.x_min, rect.z_min),
                rect.x_max - rect.x_min,
                rect.z_max - rect.z_min,
                fill=False, edgecolor="red", linewidth=1.5
            ))
            rect_count += 1

        for rect in cell_quads:
            ax.add_patch(self.Rectangle(
                (rect.x_min, rect.z_min),
                rect.x_max - rect.x_min,
                rect.z_max - rect.z_min,
                fill=False, edgecolor="black", linewidth=0.5, linestyle="--"
            ))

        if vertices is not None and len(vertices):
            points = np.asarray(vertices, dtype=np.float32)
            ax.scatter(points[:, 0], points[:, 2], s=12, c="white", edgecolors="black", zorder=3)

        ax.set_xlim(-0.5, max(grid.width, 1) - 0.5)
        ax.set_ylim(-0.5, max(grid.height, 1) - 0.5)
        ax.set_xlabel("x")
        ax.set_ylabel("z")
        ax.set_aspect("equal")
        ax.set_title(title)

        logger.debug(f"Plotted {rect_count} merged rects over {grid!r}")
        return fig

    def save(self, plot_obj: Any, filename: str, **kwargs) -> Optional[str]:
        """
        Save a figure to a file.

        Args:
            plot_obj: Matplotlib Figure returned by plot()
            filename: Output filename
            **kwargs: Options such as dpi (default: 150)

        Returns:
            Filename if saved successfully, None otherwise.
        """
        try:
            plot_obj.savefig(filename, dpi=kwargs.get("dpi", 150), bbox_inches="tight")
            logger.info(f"Saved merge plot to {filename}")
            return filename
        except (OSError, ValueError) as e:
            logger.error(f"Error saving plot to {filename}: {e}")
            return None
        finally:
            self.plt.close(plot_obj)
