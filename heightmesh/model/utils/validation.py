"""Validation utilities for mesh export operations."""

import os
import logging
from typing import Union, List

import numpy as np

# Set up logging
logger = logging.getLogger(__name__)


def validate_vertices(vertices: Union[np.ndarray, List[List[float]]]) -> bool:
    """
    Validate vertex array or list.
    
    Args:
        vertices: Array/list of 3D vertices to validate
        
    Returns:
        True if valid, False otherwise
    """
    if vertices is None:
        return False

    vertices = np.asarray(vertices, dtype=np.float64)
    if vertices.size == 0:
        return True
    if vertices.ndim != 2 or vertices.shape[1] != 3:
        return False
    return bool(np.isfinite(vertices).all())


def validate_faces(faces: Union[np.ndarray, List[List[int]]], vertex_count: int) -> bool:
    """
    Validate triangle index array or list against a vertex count.
    
    Args:
        faces: Array/list of triangle indices to validate
        vertex_count: Number of vertices the indices refer to
        
    Returns:
        True if valid, False otherwise
    """
    if faces is None:
        return False

    faces = np.asarray(faces)
    if faces.size == 0:
        return True
    if faces.ndim != 2 or faces.shape[1] != 3:
        return False
    if not np.issubdtype(faces.dtype, np.integer):
        return False
    return bool(np.all(faces >= 0) and np.all(faces < vertex_count))


def ensure_directory_exists(filepath: str) -> bool:
    """
    Ensure the directory for a file path exists.
    
    Args:
        filepath: Path to a file
        
    Returns:
        True if the directory exists or was created, False otherwise
    """
    try:
        directory = os.path.dirname(os.path.abspath(filepath))
        os.makedirs(directory, exist_ok=True)
        return True
    except OSError as e:
        logger.error(f"Failed to create directory for {filepath}: {e}")
        return False
