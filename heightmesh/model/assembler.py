"""
Mesh assembly.

The MeshAssembler turns the (vertices, triangles) pair produced by either
triangulator into a validated MeshData with normals, bounds and a suitable
index type.
"""

import logging
from typing import Optional, Sequence, Union, Callable

import numpy as np

from heightmesh.grid import HeightGrid, as_height_grid
from .config import MeshConfig
from .core.mesh import MeshData
from .triangulation.base import BaseTriangulator
from .triangulation.merger import RectangleMerger
from .triangulation.regular import RegularTriangulator

# Set up logging
logger = logging.getLogger(__name__)


class MeshAssembler:
    """Build MeshData objects from triangulator output."""

    def __init__(self, config: Optional[MeshConfig] = None):
        """
        Initialize the assembler.

        Args:
            config: Mesh configuration; defaults to MeshConfig()
        """
        self.config = config or MeshConfig()
        self.last_statistics = {}

    def create_triangulator(
        self,
        grid: Union[HeightGrid, np.ndarray],
        progress_callback: Optional[Callable[[float], None]] = None
    ) -> BaseTriangulator:
        """Create the triangulator selected by ``config.method``."""
        if self.config.method == 'regular':
            return RegularTriangulator(
                grid,
                height_scale=self.config.height_scale,
                progress_callback=progress_callback
            )
        return RectangleMerger(
            grid,
            height_scale=self.config.height_scale,
            epsilon=self.config.epsilon,
            progress_callback=progress_callback
        )

    def assemble(self, vertices: Sequence, triangles: Sequence) -> MeshData:
        """
        Validate a (vertices, triangles) pair and finish it into a mesh.

        Args:
            vertices: Sequence of (x, y, z) positions
            triangles: Sequence of (a, b, c) index triples, or a flat index list

        Returns:
            MeshData with normals computed when configured

        Raises:
            MeshValidationError: If the indices do not fit the vertex list
        """
        faces = np.asarray(triangles, dtype=np.int64)
        if faces.ndim == 1 and faces.size % 3 == 0:
            faces = faces.reshape(-1, 3)

        mesh = MeshData(
            vertices=np.asarray(vertices, dtype=np.float32),
            faces=faces,
            index_format=self.config.index_format
        )

        if self.config.optimize:
            mesh.optimize()
        if self.config.calculate_normals:
            mesh.ensure_normals(force_recalculate=True)

        bounds_min, bounds_max = mesh.bounds
        logger.debug(
            f"Assembled {mesh!r}, bounds {bounds_min.tolist()} - {bounds_max.tolist()}"
        )
        return mesh

    def build(
        self,
        grid: Union[HeightGrid, np.ndarray],
        progress_callback: Optional[Callable[[float], None]] = None
    ) -> MeshData:
        """
        Triangulate a grid with the configured method and assemble the result.

        Args:
            grid: HeightGrid or 2D array indexed [x, z]
            progress_callback: Optional progress callback

        Returns:
            Assembled MeshData
        """
        grid = as_height_grid(grid)
        triangulator = self.create_triangulator(grid, progress_callback)
        vertices, triangles = triangulator.triangulate()
        self.last_statistics = triangulator.get_statistics()

        logger.info(
            f"Built {self.config.method} mesh for {grid.width}x{grid.height} grid: "
            f"{len(vertices)} vertices, {len(triangles)} triangles"
        )
        return self.assemble(vertices, triangles)


def build_mesh(grid: Union[HeightGrid, np.ndarray], **kwargs) -> MeshData:
    """
    Build a mesh from a height grid.

    Args:
        grid: HeightGrid or 2D array indexed [x, z]
        **kwargs: MeshConfig parameters

    Returns:
        Assembled MeshData
    """
    config = MeshConfig.from_dict(kwargs)
    return MeshAssembler(config).build(grid)
