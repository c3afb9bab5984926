"""Model utility functions."""

from .logging import StructuredLogger, mesh_logger
from .validation import validate_vertices, validate_faces, ensure_directory_exists

# Define package exports
__all__ = [
    'StructuredLogger',
    'mesh_logger',
    'validate_vertices',
    'validate_faces',
    'ensure_directory_exists'
]
