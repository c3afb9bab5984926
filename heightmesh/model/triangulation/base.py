"""
Base triangulator module for height grid triangulation.

This module provides an abstract base class for triangulation algorithms,
defining a common interface for the regular and merging triangulators.
"""

import time
import logging
from abc import ABC, abstractmethod
from typing import List, Tuple, Dict, Any, Optional, Callable, Union

import numpy as np

from heightmesh.grid import HeightGrid, as_height_grid

# Set up logging
logger = logging.getLogger(__name__)

# Type definitions
Vertex = Tuple[float, float, float]
Triangle = Tuple[int, int, int]
VertexList = List[Vertex]
TriangleList = List[Triangle]


def regular_triangle_count(width: int, height: int) -> int:
    """Number of triangles the one-quad-per-cell baseline produces."""
    return 2 * max(0, width - 1) * max(0, height - 1)


class BaseTriangulator(ABC):
    """Abstract base class for height grid triangulation algorithms."""

    name = "base"

    def __init__(
        self,
        grid: Union[HeightGrid, np.ndarray],
        height_scale: float = 1.0,
        progress_callback: Optional[Callable[[float], None]] = None
    ):
        """
        Initialize the base triangulator.

        Args:
            grid: HeightGrid (or 2D array indexed [x, z]) to triangulate
            height_scale: Multiplier applied to sampled heights
            progress_callback: Optional callback receiving progress in [0, 1]
        """
        self.grid = as_height_grid(grid)
        self.height_scale = height_scale
        self.progress_callback = progress_callback
        self.stats = self._init_stats()
        self.start_time = time.time()

    def _init_stats(self) -> Dict[str, Any]:
        """Initialize statistics dictionary."""
        return {
            "method": self.name,
            "grid_cells": self.grid.size,
            "final_vertices": 0,
            "final_triangles": 0,
            "processing_time": 0.0,
            "reduction_ratio": 0.0
        }

    @abstractmethod
    def triangulate(self) -> Tuple[VertexList, TriangleList]:
        """
        Run triangulation algorithm.

        Returns:
            Tuple of (vertices, triangles) where vertices is a list of (x, y, z)
            coordinates and triangles is a list of (a, b, c) indices.
        """
        pass

    def finalize_stats(self, vertices: VertexList, triangles: TriangleList) -> None:
        """Update statistics after triangulation is complete."""
        self.stats["final_triangles"] = len(triangles)
        self.stats["final_vertices"] = len(vertices)
        self.stats["processing_time"] = time.time() - self.start_time

        # Triangle count relative to the unmerged baseline
        baseline = regular_triangle_count(self.grid.width, self.grid.height)
        if baseline > 0:
            self.stats["reduction_ratio"] = 1.0 - len(triangles) / baseline

        logger.info(
            f"{self.name} triangulation complete. Generated {len(triangles)} triangles and "
            f"{len(vertices)} vertices from {self.grid.size} cells in "
            f"{self.stats['processing_time']:.3f}s"
        )

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about the triangulation.

        Returns:
            Dictionary with statistics
        """
        return self.stats.copy()

    def report_progress(self, progress: float) -> None:
        """
        Report progress to callback if provided.

        Args:
            progress: Progress value between 0.0 and 1.0
        """
        if self.progress_callback:
            self.progress_callback(max(0.0, min(1.0, progress)))
