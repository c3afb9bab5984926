#!/usr/bin/env python3
"""
Base Plotter Abstract Class

This module defines the abstract base class for heightmesh plotters.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from heightmesh.grid import HeightGrid
from heightmesh.model.triangulation.rect import Rect

logger = logging.getLogger(__name__)


class BasePlotter(ABC):
    """Abstract base class for merge result plotters."""

    def __init__(self):
        """Initialize plotter."""
        pass

    @abstractmethod
    def plot(self, grid: HeightGrid, rects: Iterable[Rect] = (), **kwargs) -> Any:
        """
        Draw a height grid with the rectangles a merge pass produced.

        Returns:
            Implementation-specific plot object.
        """
        pass

    @abstractmethod
    def save(self, plot_obj: Any, filename: str, **kwargs) -> Optional[str]:
        """
        Save a plot to a file.
        
        Args:
            plot_obj: Implementation-specific plot object.
            filename: Output filename.
            **kwargs: Additional save options specific to the implementation.
            
        Returns:
            Filename if saved successfully, None otherwise.
        """
        pass
