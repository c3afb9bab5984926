"""
Regular grid triangulation.

Builds the full-resolution mesh with one quad per grid cell. This is the
unmerged baseline the rectangle merger is compared against.
"""

import time
import logging
from typing import Tuple, Optional, Callable, Union

import numpy as np

from heightmesh.grid import HeightGrid
from .base import BaseTriangulator, VertexList, TriangleList

logger = logging.getLogger(__name__)


class RegularTriangulator(BaseTriangulator):
    """One vertex per cell, two triangles per interior cell."""

    name = "regular"

    def triangulate(self) -> Tuple[VertexList, TriangleList]:
        self.start_time = time.time()
        self.stats = self._init_stats()

        width, height = self.grid.width, self.grid.height
        if width <= 0 or height <= 0:
            logger.warning(f"Empty grid {width}x{height}, nothing to triangulate")
            self.finalize_stats([], [])
            return [], []

        vertices = [tuple(v) for v in self.grid.vertices(self.height_scale).tolist()]
        triangles = []

        # Cells in the last column and the last row of each column are skipped
        last_column_start = height * (width - 1)
        for index in range(last_column_start):
            if (index + 1) % height == 0:
                continue
            triangles.append((index, index + 1, index + height + 1))
            triangles.append((index + height + 1, index + height, index))

            if index % height == 0:
                self.report_progress(index / last_column_start)

        self.report_progress(1.0)
        self.finalize_stats(vertices, triangles)
        return vertices, triangles


def triangulate_regular(
    grid: Union[HeightGrid, np.ndarray],
    height_scale: float = 1.0,
    progress_callback: Optional[Callable[[float], None]] = None
) -> Tuple[VertexList, TriangleList]:
    """
    Triangulate a height grid with one quad per cell.

    Args:
        grid: HeightGrid or 2D array indexed [x, z]
        height_scale: Multiplier applied to sampled heights
        progress_callback: Optional progress callback

    Returns:
        Tuple of (vertices, triangles)
    """
    return RegularTriangulator(grid, height_scale, progress_callback).triangulate()
