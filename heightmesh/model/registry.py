"""
Registry for mesh exporters.

Exporters register themselves with the ``register_exporter`` decorator and
are looked up by format name or file extension.
"""

import logging
from typing import Dict, Type, List

from heightmesh.exceptions import ExportError
from .base import MeshExporter

# Set up logging
logger = logging.getLogger(__name__)

# Format registry
_FORMAT_REGISTRY: Dict[str, Type[MeshExporter]] = {}
_EXTENSION_MAP: Dict[str, str] = {}

def register_format(format_name: str, exporter_class: Type[MeshExporter]) -> None:
    """Register a format exporter."""
    format_name = format_name.lower()  # Ensure lowercase for consistent lookup
    _FORMAT_REGISTRY[format_name] = exporter_class
    for ext in exporter_class.file_extensions:
        _EXTENSION_MAP[ext.lower()] = format_name
    logger.debug(f"Registered format exporter: {format_name} ({exporter_class.__name__})")

def _load_builtin_formats() -> None:
    """Import the formats package, which registers the built-in exporters."""
    from . import formats  # noqa: F401

def get_exporter(format_name: str) -> Type[MeshExporter]:
    """Get exporter class for a format name or file extension."""
    _load_builtin_formats()

    format_name = format_name.lower().lstrip('.')
    format_name = _EXTENSION_MAP.get(format_name, format_name)
    
    if format_name not in _FORMAT_REGISTRY:
        raise ExportError(f"Unknown format: {format_name}. Available formats: {get_available_formats()}")
    return _FORMAT_REGISTRY[format_name]

def get_available_formats() -> List[str]:
    """Get list of available export formats."""
    _load_builtin_formats()
    return sorted(_FORMAT_REGISTRY.keys())

def register_exporter(cls: Type[MeshExporter]) -> Type[MeshExporter]:
    """Decorator to register a mesh exporter."""
    register_format(cls.format_name, cls)
    return cls
