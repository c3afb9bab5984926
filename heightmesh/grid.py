"""
Height grid data source.

This module provides the HeightGrid class, a read-only wrapper around a 2-D
array of height samples indexed by (x, z), and helpers to load grids from
plain numeric files.
"""

import os
import logging
from typing import Tuple, Union

import numpy as np

from heightmesh.exceptions import GridError

# Set up logging
logger = logging.getLogger(__name__)

ArrayLike = Union[np.ndarray, list, tuple]


class HeightGrid:
    """
    Width x height grid of scalar heights.

    Cells are addressed by ``(x, z)`` with ``0 <= x < width`` and
    ``0 <= z < height``. The linear index runs column by column with z
    varying fastest: ``index(x, z) = x * height + z``.
    """

    def __init__(self, values: ArrayLike):
        """
        Initialize the grid.

        Args:
            values: 2D array-like of shape (width, height), indexed [x, z]

        Raises:
            GridError: If the values are not a finite 2D array
        """
        try:
            data = np.array(values, dtype=np.float32)
        except (TypeError, ValueError) as e:
            raise GridError(f"Height values are not numeric: {e}") from e

        if data.ndim != 2:
            raise GridError(f"Height grid must be 2D, got {data.ndim} dimension(s)")
        if data.size and not np.isfinite(data).all():
            raise GridError("Height grid contains NaN or infinite values")

        # Source values are clamped to non-negative before use
        self._data = np.maximum(data, 0.0)
        self._data.setflags(write=False)

    @property
    def width(self) -> int:
        """Number of cells along x."""
        return self._data.shape[0]

    @property
    def height(self) -> int:
        """Number of cells along z."""
        return self._data.shape[1]

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self._data.size

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the clamped heights, indexed [x, z]."""
        return self._data

    def sample(self, x: int, z: int) -> float:
        """Return the (non-negative) height at cell (x, z)."""
        return float(self._data[x, z])

    def index(self, x: int, z: int) -> int:
        """Linear index of cell (x, z)."""
        return x * self.height + z

    def coords(self, index: int) -> Tuple[int, int]:
        """Cell (x, z) for a linear index."""
        return divmod(index, self.height)

    def vertices(self, height_scale: float = 1.0) -> np.ndarray:
        """
        Build one vertex per cell in linear index order.

        Each cell is read exactly once.

        Args:
            height_scale: Multiplier applied to the sampled heights

        Returns:
            (width * height, 3) float32 array of (x, h * height_scale, z)
        """
        xs, zs = np.meshgrid(
            np.arange(self.width, dtype=np.float32),
            np.arange(self.height, dtype=np.float32),
            indexing='ij'
        )
        ys = self._data * np.float32(height_scale)
        return np.column_stack([xs.ravel(), ys.ravel(), zs.ravel()]).astype(np.float32)

    def resample(self, size_x: int, size_z: int) -> 'HeightGrid':
        """
        Resample the grid to a defined size using nearest-neighbour lookup.

        Target cell (x, z) reads source cell
        ``(int(x / size_x * width), int(z / size_z * height))``.

        Args:
            size_x: Number of target cells along x
            size_z: Number of target cells along z

        Returns:
            New HeightGrid of shape (size_x, size_z)
        """
        if size_x < 0 or size_z < 0:
            raise GridError(f"Resample size must be non-negative, got {size_x}x{size_z}")
        if self.size == 0 and size_x * size_z > 0:
            raise GridError("Cannot resample an empty grid to a non-empty size")

        src_x = (np.arange(size_x) / size_x * self.width).astype(np.int64) if size_x else np.zeros(0, np.int64)
        src_z = (np.arange(size_z) / size_z * self.height).astype(np.int64) if size_z else np.zeros(0, np.int64)
        resampled = self._data[np.ix_(src_x, src_z)]

        logger.debug(f"Resampled grid from {self.shape} to {resampled.shape}")
        return HeightGrid(resampled)

    def __eq__(self, other) -> bool:
        if not isinstance(other, HeightGrid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._data, other._data)

    def __repr__(self) -> str:
        return f"HeightGrid(width={self.width}, height={self.height})"


def as_height_grid(values: Union['HeightGrid', ArrayLike]) -> HeightGrid:
    """Wrap an array in a HeightGrid unless it already is one."""
    if isinstance(values, HeightGrid):
        return values
    return HeightGrid(values)


def load_grid(path: str) -> HeightGrid:
    """
    Load a height grid from a numeric file.

    Supported files are ``.npy``, ``.npz`` (``heights`` key or the first
    array) and ``.csv``/``.txt`` (comma or whitespace separated). Rows of the
    file map to x and columns to z.

    Args:
        path: Path to the grid file

    Returns:
        Loaded HeightGrid

    Raises:
        GridError: If the file does not exist or cannot be parsed
    """
    if not os.path.exists(path):
        raise GridError(f"Grid file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    try:
        if ext == '.npy':
            values = np.load(path, allow_pickle=False)
        elif ext == '.npz':
            with np.load(path, allow_pickle=False) as archive:
                if not archive.files:
                    raise GridError(f"No arrays found in {path}")
                key = 'heights' if 'heights' in archive.files else archive.files[0]
                values = archive[key]
        elif ext in ('.csv', '.txt'):
            delimiter = ',' if ext == '.csv' else None
            values = np.loadtxt(path, delimiter=delimiter, dtype=np.float32, ndmin=2)
        else:
            raise GridError(f"Unsupported grid file type: {ext or path}")
    except (OSError, ValueError) as e:
        raise GridError(f"Could not read grid file {path}: {e}") from e

    grid = HeightGrid(values)
    logger.info(f"Loaded {grid.width}x{grid.height} height grid from {path}")
    return grid
