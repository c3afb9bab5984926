"""Mesh exporters package."""
from ..registry import get_available_formats, get_exporter, register_format

# Import format modules to register them via decorators
from . import stl
from . import obj
from . import ply

__all__ = [
    'get_available_formats',
    'get_exporter'
]
