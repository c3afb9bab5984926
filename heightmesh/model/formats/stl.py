"""STL exporter module for meshes."""

import struct
import logging

import numpy as np

from ..base import MeshExporter
from ..core.mesh import MeshData
from ..registry import register_exporter

logger = logging.getLogger(__name__)

STL_HEADER = b'heightmesh STL exporter'


@register_exporter
class STLExporter(MeshExporter):
    """STL format exporter."""
    format_name = "stl"
    file_extensions = ["stl"]
    binary_supported = True

    @classmethod
    def write(cls, mesh: MeshData, filename: str, binary: bool = True, **kwargs) -> None:
        """Write the mesh as binary (default) or ASCII STL."""
        if mesh.face_count == 0:
            logger.warning(f"Mesh has no triangles, {filename} will contain no facets")
        if binary:
            write_binary_stl(mesh, filename)
        else:
            write_ascii_stl(mesh, filename)


def write_binary_stl(mesh: MeshData, filename: str) -> None:
    """Write mesh data to a binary STL file."""
    normals = mesh.calculate_face_normals()
    faces = mesh.faces.astype(np.int64)

    with open(filename, 'wb') as f:
        # Write header
        f.write(STL_HEADER + b' ' * (80 - len(STL_HEADER)))

        # Write triangle count
        f.write(struct.pack('<I', mesh.face_count))

        # Write each triangle
        for normal, face in zip(normals, faces):
            f.write(struct.pack('<fff', *normal))
            for vertex_index in face:
                f.write(struct.pack('<fff', *mesh.vertices[vertex_index]))
            f.write(struct.pack('<H', 0))


def write_ascii_stl(mesh: MeshData, filename: str) -> None:
    """Write mesh data to an ASCII STL file."""
    normals = mesh.calculate_face_normals()
    faces = mesh.faces.astype(np.int64)

    with open(filename, 'w') as f:
        f.write("solid heightmesh\n")

        for normal, face in zip(normals, faces):
            f.write(f"  facet normal {normal[0]:.6e} {normal[1]:.6e} {normal[2]:.6e}\n")
            f.write("    outer loop\n")
            for vertex_index in face:
                v = mesh.vertices[vertex_index]
                f.write(f"      vertex {v[0]:.6e} {v[1]:.6e} {v[2]:.6e}\n")
            f.write("    endloop\n")
            f.write("  endfacet\n")

        f.write("endsolid heightmesh\n")
