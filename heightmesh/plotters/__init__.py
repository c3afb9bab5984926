"""Plotters for visualising merge results."""
from .base import BasePlotter

__all__ = ['BasePlotter']
