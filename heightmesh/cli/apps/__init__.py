"""Command groups for the heightmesh CLI."""
