"""Core mesh data structure."""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple
import logging

from heightmesh.exceptions import MeshValidationError
from ..utils.validation import validate_vertices, validate_faces

logger = logging.getLogger(__name__)

# Largest vertex count addressable with 16-bit indices
UINT16_VERTEX_LIMIT = 65535


@dataclass(eq=False)
class MeshData:
    """Container for mesh geometry and attributes."""
    vertices: np.ndarray  # Nx3 array of vertex positions
    faces: np.ndarray     # Mx3 array of vertex indices
    normals: Optional[np.ndarray] = None  # Nx3 array of vertex normals
    index_format: str = 'auto'

    def __post_init__(self):
        """Validate mesh data on creation."""
        self.vertices = np.asarray(self.vertices, dtype=np.float32).reshape(-1, 3)
        faces = np.asarray(self.faces)
        if faces.size == 0:
            faces = np.zeros((0, 3), dtype=np.int64)
        self.faces = faces

        if not validate_vertices(self.vertices):
            raise MeshValidationError("Invalid vertex data")
        if not validate_faces(self.faces, len(self.vertices)):
            raise MeshValidationError(
                f"Invalid face data for {len(self.vertices)} vertices"
            )
        self.faces = self.faces.astype(self.index_dtype)

        if self.normals is not None:
            self.normals = np.asarray(self.normals, dtype=np.float32)
            if self.normals.shape != self.vertices.shape:
                raise MeshValidationError("Normal array shape doesn't match vertices")

    @property
    def vertex_count(self) -> int:
        """Get number of vertices."""
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        """Get number of faces."""
        return len(self.faces)

    @property
    def triangle_count(self) -> int:
        """Get number of triangles (alias for face_count)."""
        return self.face_count

    @property
    def is_empty(self) -> bool:
        return self.vertex_count == 0

    @property
    def index_dtype(self) -> np.dtype:
        """
        Index type for the faces array.

        'auto' picks 32-bit indices once the vertex count exceeds the
        16-bit range.

        Raises:
            MeshValidationError: If 16-bit indices are requested for too many vertices
        """
        if self.index_format == 'uint32':
            return np.dtype(np.uint32)
        if self.index_format == 'uint16':
            if self.vertex_count > UINT16_VERTEX_LIMIT:
                raise MeshValidationError(
                    f"{self.vertex_count} vertices cannot be addressed with 16-bit indices"
                )
            return np.dtype(np.uint16)
        return np.dtype(np.uint32 if self.vertex_count > UINT16_VERTEX_LIMIT else np.uint16)

    @property
    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """Axis-aligned bounding box as (min, max); zeros for an empty mesh."""
        if self.is_empty:
            return np.zeros(3, dtype=np.float32), np.zeros(3, dtype=np.float32)
        return np.min(self.vertices, axis=0), np.max(self.vertices, axis=0)

    def ensure_normals(self, force_recalculate: bool = False) -> None:
        """Ensure vertex normals are calculated."""
        if self.normals is None or force_recalculate:
            self.normals = self.calculate_vertex_normals()

    def calculate_face_normals(self) -> np.ndarray:
        """Calculate unit face normals; degenerate faces get a zero normal."""
        if self.face_count == 0:
            return np.zeros((0, 3), dtype=np.float32)

        faces = self.faces.astype(np.int64)
        v0 = self.vertices[faces[:, 0]]
        v1 = self.vertices[faces[:, 1]]
        v2 = self.vertices[faces[:, 2]]
        face_normals = np.cross(v1 - v0, v2 - v0)

        norms = np.linalg.norm(face_normals, axis=1, keepdims=True)
        norms[norms < 1e-10] = 1.0  # Avoid division by zero
        return (face_normals / norms).astype(np.float32)

    def calculate_vertex_normals(self) -> np.ndarray:
        """
        Calculate vertex normals from face geometry.

        Vertices not referenced by any face get a zero normal.
        """
        vertex_normals = np.zeros_like(self.vertices)
        if self.face_count == 0:
            return vertex_normals

        # Accumulate face normals at their vertices
        face_normals = self.calculate_face_normals()
        faces = self.faces.astype(np.int64)
        for corner in range(3):
            np.add.at(vertex_normals, faces[:, corner], face_normals)

        norms = np.linalg.norm(vertex_normals, axis=1, keepdims=True)
        norms[norms < 1e-10] = 1.0
        return (vertex_normals / norms).astype(np.float32)

    def remove_unreferenced(self) -> int:
        """
        Drop vertices that no face refers to.

        Returns:
            Number of vertices removed
        """
        used = np.zeros(self.vertex_count, dtype=bool)
        used[self.faces.astype(np.int64).ravel()] = True
        removed = int(self.vertex_count - used.sum())
        if removed == 0:
            return 0

        remap = np.cumsum(used) - 1
        self.vertices = self.vertices[used]
        self.faces = remap[self.faces.astype(np.int64)].astype(self.index_dtype)
        if self.normals is not None:
            self.normals = self.normals[used]
        return removed

    def optimize(self) -> None:
        """Weld duplicate vertices and remove unreferenced ones."""
        original_count = self.vertex_count
        if original_count == 0:
            return

        unique_vertices, inverse = np.unique(self.vertices, axis=0, return_inverse=True)
        inverse = np.asarray(inverse).reshape(-1)
        self.vertices = unique_vertices
        self.faces = inverse[self.faces.astype(np.int64)].astype(self.index_dtype)
        # Welded vertices invalidate per-vertex normals
        self.normals = None

        self.remove_unreferenced()
        logger.info(f"Optimized mesh: {original_count} -> {self.vertex_count} vertices")

    def __repr__(self) -> str:
        attrs = [f"vertices={self.vertex_count}", f"faces={self.face_count}",
                 f"index_dtype={self.index_dtype.name}"]
        if self.normals is not None:
            attrs.append("normals=True")
        return f"MeshData({', '.join(attrs)})"
