"""Tests for the matplotlib merge plotter."""

import numpy as np
import pytest

from heightmesh.model.triangulation import RectangleMerger
from heightmesh.plotters.base import BasePlotter
from heightmesh.plotters.matplotlib import MatplotlibMergePlotter


@pytest.fixture
def plotter():
    return MatplotlibMergePlotter()


@pytest.fixture
def merge_result(two_plateau_grid):
    merger = RectangleMerger(two_plateau_grid)
    vertices, _ = merger.triangulate()
    return two_plateau_grid, merger, vertices


class TestMatplotlibMergePlotter:
    """Tests for MatplotlibMergePlotter."""

    def test_is_plotter(self, plotter):
        assert isinstance(plotter, BasePlotter)
        assert plotter.NAME == "matplotlib"

    def test_plot_draws_rects_and_points(self, plotter, merge_result):
        grid, merger, vertices = merge_result
        fig = plotter.plot(grid, merger.saved_rects, vertices, cell_quads=merger.cell_quads, title="Plateaus")

        ax = fig.axes[0]
        assert ax.get_title() == "Plateaus"
        # Two merged rects and three cell quads
        assert len(ax.patches) == 5
        assert len(ax.collections) == 1
        assert len(ax.collections[0].get_offsets()) == len(vertices)
        plotter.plt.close(fig)

    def test_plot_without_vertices(self, plotter, merge_result):
        grid, merger, _ = merge_result
        fig = plotter.plot(grid, merger.saved_rects)
        assert len(fig.axes[0].patches) == 2
        plotter.plt.close(fig)

    def test_plot_empty_grid(self, plotter):
        from heightmesh.grid import HeightGrid
        fig = plotter.plot(HeightGrid(np.zeros((0, 0))))
        assert fig is not None
        plotter.plt.close(fig)

    def test_save(self, plotter, merge_result, tmp_path):
        grid, merger, vertices = merge_result
        fig = plotter.plot(grid, merger.saved_rects, vertices)

        filename = str(tmp_path / "merge.png")
        assert plotter.save(fig, filename, dpi=50) == filename
        assert (tmp_path / "merge.png").stat().st_size > 0

    def test_save_failure_returns_none(self, plotter, merge_result, tmp_path):
        grid, merger, _ = merge_result
        fig = plotter.plot(grid, merger.saved_rects)

        filename = str(tmp_path / "missing" / "merge.png")
        assert plotter.save(fig, filename) is None
