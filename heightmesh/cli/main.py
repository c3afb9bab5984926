#!/usr/bin/env python3
"""heightmesh Command-Line Interface"""

import typer

from heightmesh import __version__
from heightmesh.cli.core import console, setup_logging
from heightmesh.cli.apps.config_app import create_config_app
from heightmesh.cli.apps.mesh_app import build_command, stats_command

# Create main app
app = typer.Typer(
    help="heightmesh - turn height grids into reduced triangle meshes",
    add_completion=False
)

app.command(name="build", help="Build a mesh from a height grid file")(build_command)
app.command(name="stats", help="Compare regular and optimized triangle counts")(stats_command)
app.add_typer(create_config_app(), name="config", help="Configuration management")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show informational log messages")
):
    """heightmesh command line tools."""
    setup_logging(verbose)


@app.command(name="version", help="Show heightmesh version")
def version_command():
    """Print the package version."""
    console.print(f"heightmesh [bold]{__version__}[/bold]")


def main():
    """Entry point for the heightmesh console script."""
    app()


if __name__ == "__main__":
    main()
