"""Tests for seam search, removal and insertion."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarver.grid import Grid, PixelPoint
from seamcarver.energy import calculate_pixel_energy
from seamcarver.seam import (calculate_energy, get_path_start, find_path, find_seam,
                             remove_seam, average_pixels, add_point, insert_seam_points)

from conftest import (make_uniform_bitmap, make_random_bitmap, make_gray_row_bitmap,
                      make_index_bitmap)


def grid_with_path_costs(costs):
    """Grid whose path costs are set directly from a list of rows."""
    H, W = len(costs), len(costs[0])
    grid = Grid.from_bitmap(make_uniform_bitmap(H, W))
    grid.path_cost.copy_(torch.tensor(costs, dtype=torch.int64))
    return grid


class TestCalculateEnergy:
    def test_matches_parent_recurrence(self, random_grid):
        """path_cost = energy + min(parent path costs), computed cell by cell."""
        calculate_energy(random_grid)
        for y in range(random_grid.height):
            for x in range(random_grid.width):
                point = random_grid.get(x, y)
                assert point.energy == calculate_pixel_energy(random_grid, x, y)
                parents = random_grid.get_parents(x, y)
                if parents:
                    expected = point.energy + min(p.path_cost for _, _, p in parents)
                else:
                    expected = point.energy
                assert point.path_cost == expected

    def test_top_row_cost_is_energy(self, random_grid):
        calculate_energy(random_grid)
        assert torch.equal(random_grid.path_cost[0], random_grid.energy[0])

    def test_single_column(self):
        bitmap = make_gray_row_bitmap([0, 50, 60]).permute(0, 2, 1)
        grid = Grid.from_bitmap(bitmap)
        calculate_energy(grid)
        energies = [grid.get(0, y).energy for y in range(3)]
        costs = [grid.get(0, y).path_cost for y in range(3)]
        assert costs == [energies[0], energies[0] + energies[1], sum(energies)]

    def test_path_cost_nondecreasing_down_columns_minimum(self, random_grid):
        """The cheapest cost of each row never decreases going down."""
        calculate_energy(random_grid)
        row_minima = random_grid.path_cost.min(dim=1).values
        assert (row_minima[1:] >= row_minima[:-1]).all()


class TestPathStart:
    def test_picks_minimum_of_bottom_row(self):
        grid = grid_with_path_costs([[0, 0, 0, 0],
                                     [9, 4, 7, 5]])
        assert get_path_start(grid) == (1, 1)

    def test_ties_resolve_leftmost(self):
        grid = grid_with_path_costs([[0, 0, 0, 0],
                                     [9, 3, 7, 3]])
        assert get_path_start(grid) == (1, 1)


class TestFindPath:
    def test_follows_cheapest_parents(self):
        grid = grid_with_path_costs([[5, 1, 5, 5],
                                     [5, 5, 2, 5],
                                     [5, 5, 5, 3]])
        assert find_path(grid, (3, 2)) == [(3, 2), (2, 1), (1, 0)]

    def test_parent_ties_resolve_leftmost(self):
        grid = grid_with_path_costs([[1, 1, 1],
                                     [2, 2, 2],
                                     [0, 0, 0]])
        assert find_path(grid, (1, 2)) == [(1, 2), (0, 1), (0, 0)]

    def test_stays_in_bounds_at_edges(self):
        grid = grid_with_path_costs([[0, 9, 9],
                                     [9, 9, 0],
                                     [9, 9, 0]])
        assert find_path(grid, (2, 2)) == [(2, 2), (2, 1), (1, 0)]

    def test_uniform_image_seam_is_leftmost_column(self):
        grid = Grid.from_bitmap(make_uniform_bitmap(6, 5))
        assert find_seam(grid) == [(0, y) for y in range(5, -1, -1)]

    def test_follows_zero_energy_column(self):
        """A column of black between noise is the cheapest seam."""
        bitmap = make_random_bitmap(10, 9)
        bitmap[0:3, :, 3:6] = 0
        grid = Grid.from_bitmap(bitmap)
        seam = find_seam(grid)
        assert all(x == 4 for x, _ in seam)

    def test_seam_is_connected(self):
        grid = Grid.from_bitmap(make_random_bitmap(40, 30, seed=7))
        seam = find_seam(grid)
        assert len(seam) == 40
        assert [y for _, y in seam] == list(range(39, -1, -1))
        for (x0, _), (x1, _) in zip(seam, seam[1:]):
            assert abs(x1 - x0) <= 1

    def test_seam_cost_is_bottom_minimum(self, random_grid):
        """The energies along the seam add up to its starting path cost."""
        seam = find_seam(random_grid)
        total = sum(random_grid.get(x, y).energy for x, y in seam)
        start_x, start_y = seam[0]
        assert total == random_grid.get(start_x, start_y).path_cost
        assert total == random_grid.path_cost[-1].min().item()


class TestRemoveSeam:
    def test_preserves_non_seam_pixels(self):
        grid = Grid.from_bitmap(make_index_bitmap(3, 6))
        seam = [(3, 2), (2, 1), (2, 0)]
        remove_seam(grid, seam)

        assert grid.width == 5
        assert [p.pixel[0] for p in grid.get_row(0)] == [0, 1, 3, 4, 5]
        assert [p.pixel[0] for p in grid.get_row(1)] == [0, 1, 3, 4, 5]
        assert [p.pixel[0] for p in grid.get_row(2)] == [0, 1, 2, 4, 5]

    def test_records_removed_points_in_order(self):
        grid = Grid.from_bitmap(make_index_bitmap(3, 6))
        removed = [(9, 9)]
        seam = [(0, 2), (1, 1), (0, 0)]
        remove_seam(grid, seam, removed)
        assert removed == [(9, 9), (0, 2), (1, 1), (0, 0)]

    def test_remove_last_column_seam(self):
        grid = Grid.from_bitmap(make_index_bitmap(2, 3))
        remove_seam(grid, [(2, 1), (2, 0)])
        assert grid.width == 2
        assert [p.pixel[0] for p in grid.get_row(1)] == [0, 1]


class TestInsertion:
    def test_average_pixels_floors(self):
        assert average_pixels((10, 11, 0, 255), (20, 20, 255, 255)) == (15, 15, 127, 255)

    def test_add_point_inserts_right_of_point(self):
        grid = Grid.from_bitmap(make_gray_row_bitmap([1, 2, 3]))
        grid.add_last_column()
        add_point(grid, 0, 0, (9, 9, 9, 255))
        assert [p.pixel[0] for p in grid.get_row(0)] == [1, 9, 2, 3]
        assert grid.get(1, 0) == PixelPoint((9, 9, 9, 255), 0, 0)

    def test_insert_seam_points_blends_with_right_neighbor(self):
        grid = Grid.from_bitmap(make_gray_row_bitmap([10, 20, 200, 40]))
        grid.add_last_column()
        grid.add_last_column()
        insert_seam_points(grid, [(2, 0), (0, 0)])
        assert [p.pixel[0] for p in grid.get_row(0)] == [10, 15, 20, 200, 120, 40]

    def test_insert_at_last_column_blends_with_replicated_edge(self):
        grid = Grid.from_bitmap(make_gray_row_bitmap([10, 20, 30]))
        grid.add_last_column()
        insert_seam_points(grid, [(2, 0)])
        assert [p.pixel[0] for p in grid.get_row(0)] == [10, 20, 30, 30]
