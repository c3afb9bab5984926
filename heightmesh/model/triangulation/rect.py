"""
Axis-aligned rectangles in the x-z plane and the saved-rectangle index.

The merger records every rectangle it emits in a SavedRects instance and
queries it for containment and point membership before emitting more
geometry.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box in continuous (x, z) space."""
    x_min: float
    x_max: float
    z_min: float
    z_max: float

    def contains(self, other: 'Rect') -> bool:
        """True if ``other`` is fully nested inside this rect (edges may touch)."""
        return (self.x_min <= other.x_min and self.z_min <= other.z_min
                and self.x_max >= other.x_max and self.z_max >= other.z_max)

    def includes_point(self, x: float, z: float) -> bool:
        """Boundary-inclusive membership."""
        return self.x_min <= x <= self.x_max and self.z_min <= z <= self.z_max

    def surrounds_point(self, x: float, z: float) -> bool:
        """Boundary-exclusive membership."""
        return self.x_min < x < self.x_max and self.z_min < z < self.z_max

    def overlaps(self, other: 'Rect') -> bool:
        """True if the interiors of the two rects intersect."""
        return (self.x_min < other.x_max and other.x_min < self.x_max
                and self.z_min < other.z_max and other.z_min < self.z_max)

    @property
    def area(self) -> float:
        return (self.x_max - self.x_min) * (self.z_max - self.z_min)


class SavedRects:
    """
    Append-only set of rectangles emitted during one merge pass.

    Rects are bucketed on a coarse grid keyed by their bounds, so point and
    containment queries only look at the rects registered in one bucket.
    Answers are the same as testing every saved rect in turn.
    """

    def __init__(self, bucket_size: int = 16):
        if bucket_size <= 0:
            raise ValueError(f"bucket_size must be positive, got {bucket_size}")
        self.bucket_size = bucket_size
        self._rects: List[Rect] = []
        self._members = set()
        self._buckets: Dict[Tuple[int, int], List[Rect]] = {}

    def _bucket(self, x: float, z: float) -> Tuple[int, int]:
        return math.floor(x / self.bucket_size), math.floor(z / self.bucket_size)

    def add(self, rect: Rect) -> None:
        """Add a rect; adding an equal rect twice is a no-op."""
        if rect in self._members:
            return
        self._members.add(rect)
        self._rects.append(rect)

        bx_min, bz_min = self._bucket(rect.x_min, rect.z_min)
        bx_max, bz_max = self._bucket(rect.x_max, rect.z_max)
        for bx in range(bx_min, bx_max + 1):
            for bz in range(bz_min, bz_max + 1):
                self._buckets.setdefault((bx, bz), []).append(rect)

    def clear(self) -> None:
        self._rects.clear()
        self._members.clear()
        self._buckets.clear()

    def _candidates(self, x: float, z: float) -> List[Rect]:
        return self._buckets.get(self._bucket(x, z), [])

    def any_contains(self, rect: Rect) -> bool:
        """True if a saved rect fully contains ``rect``."""
        # A containing rect must include the candidate's min corner
        return any(saved.contains(rect) for saved in self._candidates(rect.x_min, rect.z_min))

    def any_includes(self, x: float, z: float) -> bool:
        """True if a saved rect includes the point, boundary included."""
        return any(saved.includes_point(x, z) for saved in self._candidates(x, z))

    def any_surrounds(self, x: float, z: float) -> bool:
        """True if the point lies strictly inside a saved rect."""
        return any(saved.surrounds_point(x, z) for saved in self._candidates(x, z))

    def __contains__(self, rect: Rect) -> bool:
        return rect in self._members

    def __iter__(self) -> Iterator[Rect]:
        return iter(self._rects)

    def __len__(self) -> int:
        return len(self._rects)

    def __repr__(self) -> str:
        return f"SavedRects(count={len(self._rects)}, bucket_size={self.bucket_size})"
