#!/usr/bin/env python3
"""
heightmesh Exceptions

This module defines custom exceptions used throughout the heightmesh library.
"""

class HeightMeshException(Exception):
    """Base class for all heightmesh exceptions."""
    pass

class GridError(HeightMeshException):
    """Exception raised when height grid data is invalid or cannot be read."""
    pass

class MeshError(HeightMeshException):
    """Base class for mesh-related exceptions."""
    pass

class MeshValidationError(MeshError):
    """Raised when mesh data fails validation."""
    pass

class ExportError(HeightMeshException):
    """Exception raised when a mesh cannot be written to a file."""
    pass

class ConfigError(HeightMeshException, ValueError):
    """Exception raised when a configuration value is invalid."""
    pass
