"""
Rectangle merging triangulator for height grids.

This module provides the RectangleMerger, which produces a reduced mesh by
scanning the grid once in linear index order and replacing runs of cells with
equal height by single rectangular quads. Cells that cannot be merged fall
back to one quad per cell, or to a lone point on the grid boundary.

The growth policy is greedy and single-direction: from each seed cell the
rectangle grows along z inside the seed's column, then column by column in
increasing x, stopping at the first column that does not match. The result is
not a minimal rectangle decomposition. A candidate is emitted whenever no
saved rectangle contains it, so a later rectangle may still cut across an
earlier one.
"""

import time
import logging
from typing import List, Tuple, Optional, Callable, Union

import numpy as np

from heightmesh.exceptions import ConfigError
from heightmesh.grid import HeightGrid
from .base import BaseTriangulator, Vertex, VertexList, TriangleList
from .rect import Rect, SavedRects
from ..utils.logging import mesh_logger

# Set up logging
logger = logging.getLogger(__name__)

# Smallest positive float32, so only equal heights merge by default
EPSILON = float(np.finfo(np.float32).smallest_subnormal)


class RectangleMerger(BaseTriangulator):
    """
    Greedy scan-and-merge triangulator.

    After ``triangulate()`` the merged rectangles of the pass are available in
    ``saved_rects`` and the single-cell quads in ``cell_quads``.
    """

    name = "optimized"

    def __init__(
        self,
        grid: Union[HeightGrid, np.ndarray],
        height_scale: float = 1.0,
        epsilon: float = EPSILON,
        bucket_size: int = 16,
        progress_callback: Optional[Callable[[float], None]] = None
    ):
        """
        Initialize the rectangle merger.

        Args:
            grid: HeightGrid (or 2D array indexed [x, z]) to triangulate
            height_scale: Multiplier applied to sampled heights
            epsilon: Height tolerance for treating two cells as equal
            bucket_size: Bucket edge length of the saved-rectangle index
            progress_callback: Optional callback receiving progress in [0, 1]
        """
        if epsilon < 0:
            raise ConfigError(f"epsilon must be non-negative, got {epsilon}")

        super().__init__(grid=grid, height_scale=height_scale, progress_callback=progress_callback)
        self.epsilon = epsilon
        self.saved_rects = SavedRects(bucket_size=bucket_size)
        self.cell_quads: List[Rect] = []
        self._points: VertexList = []
        self._heights: List[float] = []

        logger.debug(f"RectangleMerger initialized for {self.grid.width}x{self.grid.height} grid, epsilon={epsilon}")

    def _init_stats(self):
        stats = super()._init_stats()
        stats.update({"rectangles": 0, "cell_quads": 0, "lone_points": 0})
        return stats

    def probe_rect_size(self, index: int, current_x: int) -> Tuple[int, int]:
        """
        Measure the rectangle of equal height that can grow from a seed cell.

        Args:
            index: Linear index of the seed cell
            current_x: Column of the seed cell

        Returns:
            Tuple of (z_size, x_size). The rectangle spans ``z_size + 1`` cells
            along z and ``x_size + 1`` cells along x; either being zero means
            no rectangle can be built from this seed.
        """
        width, height = self.grid.width, self.grid.height
        heights = self._heights
        eps = self.epsilon
        last_height = heights[index]
        last_column_start = height * (width - 1)

        # Grow along z inside the seed's column, never into the last column
        z_size = 0
        for z in range(index + 1, height + current_x * height):
            if z < last_column_start and abs(heights[z] - last_height) < eps:
                z_size += 1
            else:
                break

        x_size = 0
        if z_size > 0:
            start_z = index % height
            for x in range(current_x + 1, width):
                possible_z = 0
                is_rect = True
                for z in range(start_z, start_z + z_size + 1):
                    cell = x * height + z
                    if cell >= height * width or abs(heights[cell] - last_height) > eps:
                        is_rect = False
                        break
                    possible_z += 1

                if is_rect:
                    x_size += 1
                    continue

                # Keep the partial column, shrinking the rectangle to fit it
                if possible_z > 0:
                    x_size += 1
                    z_size = possible_z - 1
                break

        return z_size, x_size

    def _emit_quad(self, result: VertexList, triangles: TriangleList, corners: Tuple[Vertex, ...]) -> None:
        """Append quad corners (missing from ``result``) and its two triangles."""
        first = len(result) - (4 - len(corners))
        result.extend(corners)
        triangles.append((first, first + 1, first + 3))
        triangles.append((first, first + 3, first + 2))

    def triangulate(self) -> Tuple[VertexList, TriangleList]:
        """
        Run one merge pass over the grid.

        Returns:
            Tuple of (vertices, triangles) for the reduced mesh
        """
        self.start_time = time.time()
        self.stats = self._init_stats()
        self.saved_rects.clear()
        self.cell_quads = []

        width, height = self.grid.width, self.grid.height
        total = width * height
        if total == 0:
            logger.warning(f"Empty grid {width}x{height}, nothing to triangulate")
            self.finalize_stats([], [])
            return [], []

        # Each cell is sampled once per pass
        points = [tuple(v) for v in self.grid.vertices(self.height_scale).tolist()]
        self._points = points
        self._heights = [p[1] for p in points]

        saved = self.saved_rects
        result: VertexList = []
        triangles: TriangleList = []
        last_column_start = height * (width - 1)
        progress_step = max(1, total // 100)

        index = 0
        current_x = 0
        next_report = progress_step
        while index < total:
            x, _, z = points[index]
            if saved.any_surrounds(x, z):
                index += 1
                continue

            z_size, x_size = self.probe_rect_size(index, current_x)

            candidate = None
            if z_size > 0 and x_size > 0:
                p1 = points[index]
                p2 = points[index + z_size]
                p3 = points[index + height * x_size]
                p4 = points[index + height * x_size + z_size]
                candidate = Rect(x_min=p1[0], x_max=p3[0], z_min=p1[2], z_max=p4[2])

            if candidate is not None and saved.any_contains(candidate):
                index += 1
            elif candidate is not None:
                self._emit_quad(result, triangles, (p1, p2, p3, p4))
                saved.add(candidate)
                self.stats["rectangles"] += 1
                logger.debug(f"Merged rect at index {index}: z_size={z_size}, x_size={x_size}")
                # A rect spanning the whole column jumps to its far column
                index += z_size if z_size < height - 1 else (z_size + 1) * x_size
            else:
                if index < last_column_start and index % height < height - 1:
                    p1 = points[index]
                    p2 = points[index + 1]
                    p3 = points[index + height]
                    p4 = points[index + height + 1]
                    rect = Rect(x_min=p1[0], x_max=p3[0], z_min=p1[2], z_max=p2[2])

                    # The seed point is kept even when the cell is already covered
                    result.append(p1)
                    if not saved.any_contains(rect):
                        self._emit_quad(result, triangles, (p2, p3, p4))
                        self.cell_quads.append(rect)
                        self.stats["cell_quads"] += 1
                    else:
                        self.stats["lone_points"] += 1
                elif index > last_column_start or index % height == 0:
                    if not saved.any_includes(x, z):
                        result.append(points[index])
                        self.stats["lone_points"] += 1

                index += 1

            current_x = index // height

            if index >= next_report:
                self.report_progress(index / total)
                next_report = index + progress_step

        self.report_progress(1.0)
        self.finalize_stats(result, triangles)
        mesh_logger.info(
            "Merge pass complete",
            width=width,
            height=height,
            rectangles=self.stats["rectangles"],
            cell_quads=self.stats["cell_quads"],
            vertices=len(result),
            triangles=len(triangles)
        )
        return result, triangles


def optimize_heightmap(
    grid: Union[HeightGrid, np.ndarray],
    height_scale: float = 1.0,
    epsilon: float = EPSILON,
    progress_callback: Optional[Callable[[float], None]] = None
) -> Tuple[VertexList, TriangleList]:
    """
    Triangulate a height grid, merging equal-height regions into rectangles.

    Args:
        grid: HeightGrid or 2D array indexed [x, z]
        height_scale: Multiplier applied to sampled heights
        epsilon: Height tolerance for treating two cells as equal
        progress_callback: Optional progress callback

    Returns:
        Tuple of (vertices, triangles)
    """
    merger = RectangleMerger(
        grid,
        height_scale=height_scale,
        epsilon=epsilon,
        progress_callback=progress_callback
    )
    return merger.triangulate()
