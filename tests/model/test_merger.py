"""Unit tests for the rectangle merging triangulator."""

import unittest

import numpy as np
import pytest

from heightmesh.exceptions import ConfigError
from heightmesh.grid import HeightGrid
from heightmesh.model.triangulation import (
    EPSILON,
    Rect,
    RectangleMerger,
    optimize_heightmap,
    regular_triangle_count,
    triangulate_regular
)


def columns(*cols):
    """Build a grid from a list of columns (each column runs along z)."""
    return HeightGrid(np.array(cols, dtype=np.float32))


class TestRectangleMerger(unittest.TestCase):
    """Test class for the merge pass on hand-checked grids."""

    def test_constant_grid_collapses_to_one_quad(self):
        for width, height in [(2, 2), (5, 4), (3, 7), (16, 16)]:
            merger = RectangleMerger(np.full((width, height), 1.5))
            vertices, triangles = merger.triangulate()

            self.assertEqual(len(vertices), 4)
            self.assertEqual(triangles, [(0, 1, 3), (0, 3, 2)])
            self.assertEqual(list(merger.saved_rects), [Rect(0, width - 1, 0, height - 1)])
            self.assertEqual(merger.cell_quads, [])

    def test_constant_grid_corners(self):
        vertices, _ = optimize_heightmap(np.full((5, 4), 2.0), height_scale=0.5)
        self.assertEqual(vertices, [
            (0.0, 1.0, 0.0),
            (0.0, 1.0, 3.0),
            (4.0, 1.0, 0.0),
            (4.0, 1.0, 3.0)
        ])

    def test_single_bump(self):
        """A raised corner cell splits the grid into a strip, cell quads and a lone point."""
        values = np.zeros((3, 3), dtype=np.float32)
        values[2, 2] = 5.0
        merger = RectangleMerger(values)
        vertices, triangles = merger.triangulate()

        self.assertEqual(len(vertices), 13)
        self.assertEqual(len(triangles), 6)
        self.assertEqual(list(merger.saved_rects), [Rect(0, 2, 0, 1)])
        self.assertEqual(merger.cell_quads, [Rect(0, 1, 1, 2), Rect(1, 2, 1, 2)])
        # The raised corner is kept as a point
        self.assertEqual(vertices[-1], (2.0, 5.0, 2.0))

        _, regular_triangles = triangulate_regular(values)
        self.assertEqual(len(regular_triangles), 8)

    def test_distinct_heights_fall_back_to_cell_quads(self):
        values = np.arange(20, dtype=np.float32).reshape(4, 5)
        merger = RectangleMerger(values)
        vertices, triangles = merger.triangulate()

        self.assertEqual(len(triangles), regular_triangle_count(4, 5))
        self.assertEqual(len(merger.saved_rects), 0)
        self.assertEqual(len(merger.cell_quads), 12)
        # 12 cell quads of 4 vertices plus the points of the last column
        self.assertEqual(len(vertices), 12 * 4 + 5)

    def test_two_plateaus(self):
        values = np.zeros((4, 4), dtype=np.float32)
        values[2:, :] = 1.0
        merger = RectangleMerger(values)
        vertices, triangles = merger.triangulate()

        self.assertEqual(list(merger.saved_rects), [Rect(0, 1, 0, 3), Rect(2, 3, 0, 3)])
        self.assertEqual(merger.cell_quads, [Rect(1, 2, 0, 1), Rect(1, 2, 1, 2), Rect(1, 2, 2, 3)])
        self.assertEqual(len(vertices), 20)
        self.assertEqual(len(triangles), 10)
        self.assertLess(len(triangles), regular_triangle_count(4, 4))

    def test_crossing_rect_is_still_emitted(self):
        """A rect that is not contained by an earlier one is emitted even if it cuts across it."""
        merger = RectangleMerger(columns(
            [0, 0, 1, 1],
            [0, 0, 0, 0],
            [0, 0, 0, 0]
        ))
        vertices, triangles = merger.triangulate()

        first, second = list(merger.saved_rects)
        self.assertEqual((first, second), (Rect(0, 2, 0, 1), Rect(1, 2, 0, 3)))
        # Partial overlap: neither rect contains the other
        self.assertTrue(first.overlaps(second))
        self.assertFalse(first.contains(second) or second.contains(first))

        self.assertEqual(merger.cell_quads, [Rect(0, 1, 1, 2), Rect(0, 1, 2, 3)])
        self.assertEqual(len(vertices), 16)
        self.assertEqual(len(triangles), 8)
        self.assertEqual(vertices[12:], [(1.0, 0.0, 0.0), (1.0, 0.0, 3.0), (2.0, 0.0, 0.0), (2.0, 0.0, 3.0)])
        self.assertEqual(triangles[-2:], [(12, 13, 15), (12, 15, 14)])
        self.assertEqual(merger.get_statistics()["lone_points"], 0)

    def test_adjacent_float32_heights_do_not_merge(self):
        low = np.float32(0.1)
        high = np.nextafter(low, np.float32(1.0))
        grid = columns([low, low], [low, high])

        vertices, triangles = optimize_heightmap(grid)
        self.assertEqual(len(vertices), 6)
        self.assertEqual(len(triangles), 2)

        vertices, triangles = optimize_heightmap(grid, epsilon=1e-6)
        self.assertEqual(len(vertices), 4)
        self.assertEqual(len(triangles), 2)

    def test_covered_seed_point_is_kept_unreferenced(self):
        """A seed inside a saved rect is emitted even though its cell quad is not."""
        merger = RectangleMerger(columns(
            [0.5, 0.5, 0.5, 2.0],
            [0.25, 0.75, 0.5, 2.0],
            [0.5, 0.5, 0.5, 2.0]
        ), epsilon=0.5)
        vertices, triangles = merger.triangulate()

        self.assertEqual(list(merger.saved_rects), [Rect(0, 2, 0, 2)])
        self.assertEqual(len(vertices), 14)
        self.assertEqual(len(triangles), 6)

        self.assertEqual(vertices[8], (1.0, 0.25, 0.0))
        referenced = {i for triangle in triangles for i in triangle}
        self.assertNotIn(8, referenced)
        # Boundary cell already on the saved rect is not repeated
        self.assertNotIn((2.0, 0.5, 1.0), vertices)
        self.assertEqual(merger.get_statistics()["lone_points"], 2)

    def test_tolerance_is_strict_along_z_and_inclusive_along_x(self):
        along_x = RectangleMerger(columns(
            [1.0, 1.0, 9.0],
            [1.5, 1.5, 9.0],
            [9.0, 9.0, 9.0]
        ), epsilon=0.5)
        along_x.triangulate()
        self.assertEqual(along_x.probe_rect_size(0, 0), (1, 1))

        along_z = RectangleMerger(columns(
            [1.0, 1.5, 9.0],
            [1.0, 1.5, 9.0],
            [9.0, 9.0, 9.0]
        ), epsilon=0.5)
        along_z.triangulate()
        self.assertEqual(along_z.probe_rect_size(0, 0), (0, 0))

    def test_probe_shrinks_to_partial_column(self):
        merger = RectangleMerger(columns(
            [0, 0, 0, 7],
            [0, 0, 0, 7],
            [0, 0, 5, 7],
            [0, 0, 0, 7]
        ))
        merger.triangulate()
        # Column 2 only matches two cells: it is kept and the rect shrinks to fit
        self.assertEqual(merger.probe_rect_size(0, 0), (1, 2))

    def test_degenerate_grids_emit_points_only(self):
        for shape in [(1, 5), (5, 1), (1, 1)]:
            vertices, triangles = optimize_heightmap(np.arange(shape[0] * shape[1]).reshape(shape))
            self.assertEqual(len(vertices), shape[0] * shape[1])
            self.assertEqual(triangles, [])

    def test_empty_grid(self):
        vertices, triangles = optimize_heightmap(np.zeros((0, 0)))
        self.assertEqual(vertices, [])
        self.assertEqual(triangles, [])

    def test_statistics(self):
        values = np.zeros((3, 3), dtype=np.float32)
        values[2, 2] = 5.0
        merger = RectangleMerger(values)
        merger.triangulate()
        stats = merger.get_statistics()

        self.assertEqual(stats["method"], "optimized")
        self.assertEqual(stats["grid_cells"], 9)
        self.assertEqual(stats["final_vertices"], 13)
        self.assertEqual(stats["final_triangles"], 6)
        self.assertEqual(stats["rectangles"], 1)
        self.assertEqual(stats["cell_quads"], 2)
        self.assertEqual(stats["lone_points"], 1)
        self.assertAlmostEqual(stats["reduction_ratio"], 0.25)

    def test_negative_epsilon(self):
        with self.assertRaises(ConfigError):
            RectangleMerger(np.zeros((2, 2)), epsilon=-1.0)
        with self.assertRaises(ValueError):
            RectangleMerger(np.zeros((2, 2)), epsilon=-EPSILON)


class TestMergerProperties:
    """Properties that hold for any grid."""

    @pytest.fixture(params=[0, 1, 2, 3])
    def random_grid(self, request):
        rng = np.random.RandomState(request.param)
        shape = (rng.randint(1, 12), rng.randint(1, 12))
        # Few distinct levels so that plateaus form
        return HeightGrid(rng.randint(0, 3, size=shape).astype(np.float32))

    def test_indices_in_range(self, random_grid):
        vertices, triangles = optimize_heightmap(random_grid)
        for triangle in triangles:
            assert len(triangle) == 3
            assert all(0 <= i < len(vertices) for i in triangle)

    def test_vertices_are_grid_points(self, random_grid):
        vertices, _ = optimize_heightmap(random_grid, height_scale=3.0)
        for x, y, z in vertices:
            assert x == int(x) and z == int(z)
            assert 0 <= x < random_grid.width
            assert 0 <= z < random_grid.height
            assert y == pytest.approx(random_grid.sample(int(x), int(z)) * 3.0)

    def test_never_more_triangles_than_regular(self, random_grid):
        _, triangles = optimize_heightmap(random_grid)
        _, regular = triangulate_regular(random_grid)
        assert len(triangles) <= len(regular)

    def test_repeated_passes_are_identical(self, random_grid):
        merger = RectangleMerger(random_grid)
        first = merger.triangulate()
        first_rects = list(merger.saved_rects)
        second = merger.triangulate()

        assert first == second
        assert list(merger.saved_rects) == first_rects

    def test_grid_is_read_once_per_pass(self, bump_grid):
        class CountingGrid(HeightGrid):
            vertex_reads = 0
            sample_reads = 0

            def vertices(self, height_scale=1.0):
                CountingGrid.vertex_reads += 1
                return super().vertices(height_scale)

            def sample(self, x, z):
                CountingGrid.sample_reads += 1
                return super().sample(x, z)

        grid = CountingGrid(bump_grid.values)
        merger = RectangleMerger(grid)

        first = merger.triangulate()
        assert (CountingGrid.vertex_reads, CountingGrid.sample_reads) == (1, 0)

        # Probing after the pass works from the heights read for it
        merger.probe_rect_size(0, 0)
        assert CountingGrid.vertex_reads == 1

        assert merger.triangulate() == first
        assert (CountingGrid.vertex_reads, CountingGrid.sample_reads) == (2, 0)

    def test_merged_rects_have_uniform_height(self, random_grid):
        merger = RectangleMerger(random_grid)
        merger.triangulate()
        values = random_grid.values
        for rect in merger.saved_rects:
            block = values[int(rect.x_min):int(rect.x_max) + 1, int(rect.z_min):int(rect.z_max) + 1]
            assert block.max() - block.min() <= EPSILON

    def test_every_cell_is_covered(self, random_grid):
        """Each grid cell lies in a merged rect or a cell quad."""
        merger = RectangleMerger(random_grid)
        merger.triangulate()
        cover = np.zeros((max(random_grid.width - 1, 0), max(random_grid.height - 1, 0)), dtype=int)
        for rect in list(merger.saved_rects) + merger.cell_quads:
            cover[int(rect.x_min):int(rect.x_max), int(rect.z_min):int(rect.z_max)] += 1
        assert (cover >= 1).all()

    def test_terraced_terrain_is_reduced(self, terrain_grid):
        _, triangles = optimize_heightmap(terrain_grid)
        _, regular = triangulate_regular(terrain_grid)
        assert len(triangles) < len(regular)

    def test_large_tolerance_merges_everything(self):
        grid = HeightGrid(np.random.RandomState(7).rand(6, 5))
        vertices, triangles = optimize_heightmap(grid, epsilon=2.0)
        assert len(vertices) == 4
        assert len(triangles) == 2

    def test_height_scale_does_not_change_structure(self, bump_grid):
        base_vertices, base_triangles = optimize_heightmap(bump_grid)
        scaled_vertices, scaled_triangles = optimize_heightmap(bump_grid, height_scale=2.0)

        assert scaled_triangles == base_triangles
        assert [(x, z) for x, _, z in scaled_vertices] == [(x, z) for x, _, z in base_vertices]
        assert scaled_vertices[-1] == (2.0, 10.0, 2.0)

    def test_progress_callback(self, terrain_grid):
        progress = []
        RectangleMerger(terrain_grid, progress_callback=progress.append).triangulate()

        assert progress[-1] == 1.0
        assert progress == sorted(progress)
        assert all(0.0 <= p <= 1.0 for p in progress)
