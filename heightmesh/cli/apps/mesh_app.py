#!/usr/bin/env python3
"""Mesh building commands for the heightmesh CLI."""

import logging
from enum import Enum
from pathlib import Path
from time import time
from typing import Optional

import typer
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn, TimeElapsedColumn
from rich.table import Table

from heightmesh.cli.core import console, exit_on_error, load_config, print_success, print_info
from heightmesh.grid import HeightGrid, load_grid
from heightmesh.exceptions import ConfigError
from heightmesh.model import MeshAssembler, MeshConfig, export_mesh
from heightmesh.model.triangulation import EPSILON, RectangleMerger, RegularTriangulator

# Set up logging
logger = logging.getLogger(__name__)


class MeshMethod(str, Enum):
    """Mesh generation methods."""
    OPTIMIZED = "optimized"
    REGULAR = "regular"


def parse_size(size: str):
    """
    Parse a 'WIDTHxHEIGHT' string.

    Raises:
        ConfigError: If the string is not two positive integers separated by 'x'
    """
    parts = size.lower().split("x")
    if len(parts) != 2 or not all(part.strip().isdigit() for part in parts):
        raise ConfigError(f"Size must look like WIDTHxHEIGHT, got '{size}'")
    size_x, size_z = (int(part) for part in parts)
    if size_x <= 0 or size_z <= 0:
        raise ConfigError(f"Size must be positive, got '{size}'")
    return size_x, size_z


def load_input_grid(input_file: Path, size: Optional[str]) -> HeightGrid:
    """Load a grid file and resample it when a size is given."""
    grid = load_grid(str(input_file))
    if size:
        size_x, size_z = parse_size(size)
        grid = grid.resample(size_x, size_z)
        logger.info(f"Resampled grid to {size_x}x{size_z}")
    return grid


def build_command(
    input_file: Path = typer.Argument(..., help="Height grid file (.npy, .npz, .csv, .txt)", exists=True, dir_okay=False),
    output_file: Path = typer.Argument(..., help="Output mesh file"),
    method: Optional[MeshMethod] = typer.Option(None, "--method", "-m", help="Triangulation method"),
    height_scale: Optional[float] = typer.Option(None, "--height-scale", "-s", help="Height multiplier"),
    epsilon: float = typer.Option(EPSILON, "--epsilon", help="Height tolerance for merging"),
    size: Optional[str] = typer.Option(None, "--size", help="Resample grid to WIDTHxHEIGHT first"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format (obj, stl, ply)"),
    ascii: bool = typer.Option(False, "--ascii", help="Write ASCII instead of binary STL"),
    optimize: bool = typer.Option(False, "--optimize", help="Weld duplicate vertices after triangulation"),
    plot: Optional[Path] = typer.Option(None, "--plot", help="Save a PNG of the merged rectangles"),
):
    """Build a mesh from a height grid and write it to a file."""
    with exit_on_error():
        start_time = time()
        defaults = load_config()

        config = MeshConfig(
            height_scale=height_scale if height_scale is not None else defaults["height_scale"],
            method=method.value if method is not None else defaults["method"],
            epsilon=epsilon,
            calculate_normals=defaults["calculate_normals"],
            optimize=optimize,
            index_format=defaults["index_format"]
        )
        if format is None and not output_file.suffix:
            format = defaults["format"]

        grid = load_input_grid(input_file, size)
        assembler = MeshAssembler(config)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(complete_style="green"),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True
        ) as progress:
            task = progress.add_task(f"[cyan]Triangulating ({config.method})...", total=1.0)
            triangulator = assembler.create_triangulator(
                grid, progress_callback=lambda fraction: progress.update(task, completed=fraction)
            )
            vertices, triangles = triangulator.triangulate()

        mesh = assembler.assemble(vertices, triangles)
        written = export_mesh(mesh, str(output_file), format_name=format, binary=not ascii)

        if plot is not None:
            if isinstance(triangulator, RectangleMerger):
                from heightmesh.plotters.matplotlib import MatplotlibMergePlotter
                plotter = MatplotlibMergePlotter()
                fig = plotter.plot(grid, triangulator.saved_rects, vertices, cell_quads=triangulator.cell_quads)
                plotter.save(fig, str(plot), dpi=defaults["dpi"])
            else:
                print_info("Merge plot is only available for the optimized method")

        stats = triangulator.get_statistics()
        console.print(Panel.fit(
            f"Grid: [value]{grid.width} x {grid.height}[/value]\n"
            f"Vertices: [value]{mesh.vertex_count}[/value]  Triangles: [value]{mesh.triangle_count}[/value]\n"
            f"Reduction vs regular: [value]{stats['reduction_ratio']:.1%}[/value]\n"
            f"Time: [cyan]{time() - start_time:.2f}[/cyan] seconds",
            title="Mesh Built",
            border_style="green"
        ))
        print_success(f"Wrote [filename]{written}[/filename]")


def stats_command(
    input_file: Path = typer.Argument(..., help="Height grid file (.npy, .npz, .csv, .txt)", exists=True, dir_okay=False),
    height_scale: Optional[float] = typer.Option(None, "--height-scale", "-s", help="Height multiplier"),
    epsilon: float = typer.Option(EPSILON, "--epsilon", help="Height tolerance for merging"),
    size: Optional[str] = typer.Option(None, "--size", help="Resample grid to WIDTHxHEIGHT first"),
):
    """Compare the regular and optimized triangulations of a height grid."""
    with exit_on_error():
        defaults = load_config()
        scale = height_scale if height_scale is not None else defaults["height_scale"]
        grid = load_input_grid(input_file, size)

        regular = RegularTriangulator(grid, height_scale=scale)
        regular_vertices, regular_triangles = regular.triangulate()
        merger = RectangleMerger(grid, height_scale=scale, epsilon=epsilon)
        merged_vertices, merged_triangles = merger.triangulate()
        merged_stats = merger.get_statistics()

        table = Table(title=f"{input_file.name} ({grid.width} x {grid.height})", show_header=True)
        table.add_column("Method", style="cyan")
        table.add_column("Vertices", style="green", justify="right")
        table.add_column("Triangles", style="green", justify="right")
        table.add_column("Rectangles", style="yellow", justify="right")
        table.add_row("regular", str(len(regular_vertices)), str(len(regular_triangles)), "-")
        table.add_row(
            "optimized",
            str(len(merged_vertices)),
            str(len(merged_triangles)),
            str(merged_stats["rectangles"])
        )
        console.print(table)
        console.print(f"Triangle reduction: [value]{merged_stats['reduction_ratio']:.1%}[/value]")
