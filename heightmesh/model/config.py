"""
Configuration classes for mesh generation.

This module provides the MeshConfig dataclass used by the mesh assembler,
with validation, defaults, and dictionary serialization.
"""

import logging
from typing import Dict, Any
from dataclasses import dataclass, field, asdict, fields

from heightmesh.exceptions import ConfigError
from .triangulation.merger import EPSILON

# Set up logging
logger = logging.getLogger(__name__)

METHODS = ('optimized', 'regular')
INDEX_FORMATS = ('auto', 'uint16', 'uint32')


@dataclass
class MeshConfig:
    """
    Configuration for building a mesh from a height grid.

    Attributes:
        height_scale: Multiplier applied to sampled heights
        method: Triangulation method, 'optimized' (rectangle merge) or 'regular'
        epsilon: Height tolerance for the rectangle merge
        calculate_normals: Whether to compute vertex normals
        optimize: Whether to weld duplicate vertices and drop unreferenced ones
        index_format: Triangle index type, 'auto', 'uint16' or 'uint32'
    """
    height_scale: float = 1.0
    method: str = 'optimized'
    epsilon: float = EPSILON
    calculate_normals: bool = True
    optimize: bool = False
    index_format: str = 'auto'

    # Optional parameters (stored as dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.method = str(self.method).lower()
        self.index_format = str(self.index_format).lower()
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ConfigError: If configuration is invalid
        """
        if self.method not in METHODS:
            raise ConfigError(f"method must be one of {list(METHODS)}, got '{self.method}'")

        if self.epsilon < 0:
            raise ConfigError(f"epsilon cannot be negative, got {self.epsilon}")

        if self.index_format not in INDEX_FORMATS:
            raise ConfigError(
                f"index_format must be one of {list(INDEX_FORMATS)}, "
                f"got '{self.index_format}'"
            )

    def as_dict(self) -> Dict[str, Any]:
        """
        Get configuration as a dictionary.

        Returns:
            Dictionary representation of configuration
        """
        result = asdict(self)
        # Remove extra if empty
        if not result['extra']:
            del result['extra']
        return result

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MeshConfig':
        """
        Create configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            New MeshConfig instance
        """
        field_names = [f.name for f in fields(cls)]

        # Extract known parameters
        known_params = {
            k: v for k, v in config_dict.items()
            if k in field_names
        }

        # Store remaining parameters in extra
        extra_params = {
            k: v for k, v in config_dict.items()
            if k not in known_params
        }

        config = cls(**known_params)
        config.extra.update(extra_params)
        if extra_params:
            logger.debug(f"Unknown mesh config keys stored in extra: {sorted(extra_params)}")

        return config
