"""Core mesh data structures."""
from .mesh import MeshData, UINT16_VERTEX_LIMIT

__all__ = ['MeshData', 'UINT16_VERTEX_LIMIT']
