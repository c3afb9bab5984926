"""Command-line interface for heightmesh."""
