"""
OBJ exporter implementation.

This module provides the OBJExporter class for writing meshes to Wavefront
OBJ, which is widely supported across 3D modeling software.
"""

import os
import logging

import numpy as np

from ..base import MeshExporter
from ..core.mesh import MeshData
from ..registry import register_exporter

# Set up logging
logger = logging.getLogger(__name__)


@register_exporter
class OBJExporter(MeshExporter):
    """Exporter for OBJ format."""
    format_name = "obj"
    file_extensions = ["obj"]
    binary_supported = False

    @classmethod
    def write(cls, mesh: MeshData, filename: str, include_materials: bool = False, **kwargs) -> None:
        """
        Write mesh data to an OBJ file.

        Args:
            mesh: Mesh to write
            filename: Output filename
            include_materials: Whether to write and reference an MTL file
        """
        write_obj(mesh, filename, include_materials)


def write_obj(mesh: MeshData, filename: str, include_materials: bool = False) -> None:
    """
    Write mesh data to an OBJ file.
    
    Args:
        mesh: Mesh to write
        filename: Output filename
        include_materials: Whether to include material definitions
    """
    has_normals = mesh.normals is not None
    faces = mesh.faces.astype(np.int64)

    with open(filename, 'w') as f:
        # Write header
        f.write("# OBJ file generated by heightmesh\n")
        f.write(f"# {mesh.vertex_count} vertices, {mesh.face_count} triangles\n")

        # Reference material file if needed
        if include_materials:
            mtl_filename = os.path.splitext(os.path.basename(filename))[0] + ".mtl"
            f.write(f"mtllib {mtl_filename}\n")
            create_mtl_file(os.path.join(os.path.dirname(filename), mtl_filename))

        f.write("o HeightMesh\n")

        for v in mesh.vertices:
            f.write(f"v {v[0]:.6f} {v[1]:.6f} {v[2]:.6f}\n")

        if has_normals:
            for n in mesh.normals:
                f.write(f"vn {n[0]:.6f} {n[1]:.6f} {n[2]:.6f}\n")

        if include_materials:
            f.write("usemtl TerrainMaterial\n")

        # Write faces (OBJ uses 1-based indexing)
        for face in faces + 1:
            if has_normals:
                f.write(f"f {face[0]}//{face[0]} {face[1]}//{face[1]} {face[2]}//{face[2]}\n")
            else:
                f.write(f"f {face[0]} {face[1]} {face[2]}\n")


def create_mtl_file(mtl_filename: str) -> None:
    """
    Create a simple MTL material file for the OBJ.
    
    Args:
        mtl_filename: Path to the MTL file
    """
    with open(mtl_filename, 'w') as f:
        f.write("# MTL file generated by heightmesh\n")
        f.write("newmtl TerrainMaterial\n")
        f.write("Ka 0.2 0.2 0.2\n")  # Ambient color
        f.write("Kd 0.8 0.8 0.8\n")  # Diffuse color
        f.write("Ks 0.1 0.1 0.1\n")  # Specular color
        f.write("Ns 100.0\n")        # Specular exponent (shininess)
        f.write("illum 2\n")         # Illumination model (2 = highlight on)
