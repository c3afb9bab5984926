"""
Pytest fixtures shared across test modules.
"""
import numpy as np
import pytest
import matplotlib

# Plots are only ever written to files in the test suite
matplotlib.use("Agg")

from heightmesh.grid import HeightGrid


@pytest.fixture(autouse=True)
def isolated_cli_config(tmp_path, monkeypatch):
    """Point the CLI configuration file at a per-test location."""
    config_path = tmp_path / "heightmesh_config.json"
    monkeypatch.setenv("HEIGHTMESH_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def flat_grid():
    """5x4 grid of constant height."""
    return HeightGrid(np.full((5, 4), 2.0, dtype=np.float32))


@pytest.fixture
def bump_grid():
    """3x3 grid, all zero except the far corner."""
    values = np.zeros((3, 3), dtype=np.float32)
    values[2, 2] = 5.0
    return HeightGrid(values)


@pytest.fixture
def distinct_grid():
    """4x5 grid where every cell has its own height."""
    values = np.arange(20, dtype=np.float32).reshape(4, 5)
    return HeightGrid(values)


@pytest.fixture
def two_plateau_grid():
    """4x4 grid with a low half (x < 2) and a high half (x >= 2)."""
    values = np.zeros((4, 4), dtype=np.float32)
    values[2:, :] = 1.0
    return HeightGrid(values)


@pytest.fixture
def terrain_grid():
    """Small terraced terrain with several plateaus."""
    x = np.arange(12)[:, None]
    z = np.arange(10)[None, :]
    values = np.floor((x + z) / 5.0) + (x > 8)
    return HeightGrid(values.astype(np.float32))


@pytest.fixture
def grid_file(tmp_path, terrain_grid):
    """Terrain grid saved as .npy."""
    path = tmp_path / "terrain.npy"
    np.save(path, terrain_grid.values)
    return path
