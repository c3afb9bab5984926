#!/usr/bin/env python3
"""
PLY exporter module for meshes.

Writes ASCII PLY files with optional per-vertex normals.
"""

import logging

import numpy as np

from ..base import MeshExporter
from ..core.mesh import MeshData
from ..registry import register_exporter

# Set up logging
logger = logging.getLogger(__name__)


@register_exporter
class PLYExporter(MeshExporter):
    """Exporter for ASCII PLY format."""
    format_name = "ply"
    file_extensions = ["ply"]
    binary_supported = False

    @classmethod
    def write(cls, mesh: MeshData, filename: str, **kwargs) -> None:
        write_ascii_ply(mesh, filename)


def write_ascii_ply(mesh: MeshData, filename: str) -> None:
    """Write mesh data to an ASCII PLY file."""
    has_normals = mesh.normals is not None
    faces = mesh.faces.astype(np.int64)

    with open(filename, 'w') as f:
        f.write("ply\n")
        f.write("format ascii 1.0\n")
        f.write("comment generated by heightmesh\n")
        f.write(f"element vertex {mesh.vertex_count}\n")
        f.write("property float x\n")
        f.write("property float y\n")
        f.write("property float z\n")
        if has_normals:
            f.write("property float nx\n")
            f.write("property float ny\n")
            f.write("property float nz\n")
        f.write(f"element face {mesh.face_count}\n")
        f.write("property list uchar uint vertex_indices\n")
        f.write("end_header\n")

        for i, v in enumerate(mesh.vertices):
            line = f"{v[0]:.6f} {v[1]:.6f} {v[2]:.6f}"
            if has_normals:
                n = mesh.normals[i]
                line += f" {n[0]:.6f} {n[1]:.6f} {n[2]:.6f}"
            f.write(line + "\n")

        for face in faces:
            f.write(f"3 {face[0]} {face[1]} {face[2]}\n")
