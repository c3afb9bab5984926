"""
Height grid triangulation algorithms.

This package provides the regular one-quad-per-cell triangulation and the
rectangle-merging optimizer.
"""

from .base import BaseTriangulator, regular_triangle_count
from .rect import Rect, SavedRects
from .regular import RegularTriangulator, triangulate_regular
from .merger import EPSILON, RectangleMerger, optimize_heightmap

# Define package exports
__all__ = [
    'BaseTriangulator',
    'EPSILON',
    'Rect',
    'RectangleMerger',
    'RegularTriangulator',
    'SavedRects',
    'optimize_heightmap',
    'regular_triangle_count',
    'triangulate_regular'
]
