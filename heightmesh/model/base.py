"""Base classes for mesh exporters."""

import os
import logging
from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional

from heightmesh.exceptions import ExportError
from .core.mesh import MeshData
from .utils.validation import ensure_directory_exists

# Set up logging
logger = logging.getLogger(__name__)


class MeshExporter(ABC):
    """
    Abstract base class for all mesh exporters.
    
    Concrete exporters implement ``write`` and register themselves with the
    exporter registry through the ``register_exporter`` decorator.
    """
    # Class attributes to be defined by subclasses
    format_name: ClassVar[str] = ""
    file_extensions: ClassVar[List[str]] = []
    binary_supported: ClassVar[bool] = False

    @classmethod
    @abstractmethod
    def write(cls, mesh: MeshData, filename: str, **kwargs) -> None:
        """
        Write mesh data to a file.
        
        Args:
            mesh: Mesh to write
            filename: Output filename (extension already normalized)
            **kwargs: Format-specific options
        """
        pass

    @classmethod
    def export(cls, mesh: MeshData, filename: str, **kwargs) -> str:
        """
        Export a mesh to a file of this format.
        
        Args:
            mesh: Mesh to export
            filename: Output filename
            **kwargs: Format-specific options
            
        Returns:
            Path to the created file
            
        Raises:
            ExportError: If the file cannot be written
        """
        filename = cls.ensure_extension(filename)
        if not ensure_directory_exists(filename):
            raise ExportError(f"Failed to create directory for: {filename}")

        try:
            cls.write(mesh, filename, **kwargs)
        except OSError as e:
            raise ExportError(f"{cls.format_name.upper()} export failed for {filename}: {e}") from e

        logger.info(f"Exported {mesh!r} to {filename}")
        return filename

    @classmethod
    def ensure_extension(cls, filename: str) -> str:
        """
        Ensure filename has the correct extension for this format.
        
        Args:
            filename: Original filename
            
        Returns:
            Filename with correct extension
        """
        # Use the first extension if multiple are supported
        if not cls.file_extensions:
            return filename

        ext = cls.file_extensions[0]
        if not any(filename.lower().endswith(f".{e.lower()}") for e in cls.file_extensions):
            filename = f"{os.path.splitext(filename)[0]}.{ext}"

        return filename


def export_mesh(mesh: MeshData, filename: str, format_name: Optional[str] = None, **kwargs) -> str:
    """
    Export a mesh to a file.

    Args:
        mesh: Mesh to export
        filename: Output filename
        format_name: Format name (e.g., 'stl', 'obj', 'ply'); taken from the
            file extension when omitted
        **kwargs: Format-specific options

    Returns:
        Path to the created file
    """
    # Import here to avoid circular imports
    from .registry import get_exporter

    if format_name is None:
        format_name = os.path.splitext(filename)[1].lstrip('.')
        if not format_name:
            raise ExportError(f"Cannot infer export format from filename: {filename}")

    exporter_class = get_exporter(format_name)
    return exporter_class.export(mesh, filename, **kwargs)
