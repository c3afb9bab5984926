"""Mesh generation package."""
from .config import MeshConfig
from .core.mesh import MeshData
from .assembler import MeshAssembler, build_mesh
from .base import MeshExporter, export_mesh
from .registry import get_available_formats, get_exporter
from .triangulation import (
    RectangleMerger,
    RegularTriangulator,
    optimize_heightmap,
    triangulate_regular
)

__all__ = [
    'MeshConfig',
    'MeshData',
    'MeshAssembler',
    'MeshExporter',
    'RectangleMerger',
    'RegularTriangulator',
    'build_mesh',
    'export_mesh',
    'get_available_formats',
    'get_exporter',
    'optimize_heightmap',
    'triangulate_regular'
]
