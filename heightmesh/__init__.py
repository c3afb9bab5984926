"""
heightmesh Package.

A package for turning 2D height grids into triangulated surface meshes,
with a greedy rectangle-merging optimizer that replaces equal-height regions
by single quads.
"""

__version__ = "0.1.0"

# Import the main exception classes for easy access
from heightmesh.exceptions import (
    HeightMeshException,
    GridError,
    MeshError,
    MeshValidationError,
    ExportError,
    ConfigError
)

from heightmesh.grid import HeightGrid, load_grid
from heightmesh.model import (
    MeshAssembler,
    MeshConfig,
    MeshData,
    RectangleMerger,
    RegularTriangulator,
    build_mesh,
    export_mesh,
    optimize_heightmap,
    triangulate_regular
)
