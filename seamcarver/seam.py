"""
Seam search and seam mechanics.

Seams run top to bottom, one pixel per row. The search is the classic
dynamic program (Avidan & Shamir 2007): path_cost(x, y) is the pixel energy
plus the cheapest path_cost among its (up to three) parents in row y - 1.
The seam is backtracked from the cheapest bottom-row cell.

Ties are always broken towards the leftmost candidate, both when picking
the bottom-row start and when stepping to a parent, so carving is fully
reproducible.
"""

import torch
from typing import List, Optional, Tuple
from .grid import Grid, Pixel, PixelPoint
from .energy import gradient_energy

Seam = List[Tuple[int, int]]


def _first_min(values: torch.Tensor) -> int:
    """Index of the first (leftmost) minimal value of a 1-D tensor."""
    return int((values == values.min()).nonzero()[0, 0])


def calculate_energy(grid: Grid):
    """
    Fill in energy and path_cost for every cell of the grid.

    Rows are processed top to bottom; every row only depends on the row above
    it, so the columns of a row are computed together.
    """
    energy = gradient_energy(grid.pixels)
    grid.energy.copy_(energy)

    cost = grid.path_cost
    cost[0] = energy[0]
    for y in range(1, grid.height):
        prev = cost[y - 1]
        best = prev.clone()
        if grid.width > 1:
            best[1:] = torch.minimum(best[1:], prev[:-1])
            best[:-1] = torch.minimum(best[:-1], prev[1:])
        cost[y] = energy[y] + best


def get_path_start(grid: Grid) -> Tuple[int, int]:
    """Bottom-row cell with the lowest path cost (leftmost on ties)."""
    y = grid.height - 1
    return _first_min(grid.path_cost[y]), y


def find_path(grid: Grid, start: Tuple[int, int]) -> Seam:
    """
    Backtrack a seam from `start` up to the top row.

    At each step the parent (columns x - 1, x, x + 1 of the row above) with
    the lowest path cost is taken, the leftmost one on ties.

    Args:
        grid: Grid with path costs computed by calculate_energy
        start: (x, y) to start from, normally get_path_start(grid)

    Returns:
        List of (x, y) pairs, one per row, ordered from `start` upwards
    """
    x, y = start
    cost = grid.path_cost
    path = [(x, y)]

    while y > 0:
        lo = max(x - 1, 0)
        hi = min(x + 1, grid.width - 1)
        x = lo + _first_min(cost[y - 1, lo:hi + 1])
        y -= 1
        path.append((x, y))

    return path


def find_seam(grid: Grid) -> Seam:
    """Recompute energies on the current grid and return its cheapest seam."""
    calculate_energy(grid)
    return find_path(grid, get_path_start(grid))


def remove_seam(grid: Grid, seam: Seam,
                removed_points: Optional[List[Tuple[int, int]]] = None):
    """
    Remove one pixel per row along `seam`, making the grid one column narrower.

    Args:
        grid: Grid to carve (modified in place)
        seam: One (x, y) pair per row
        removed_points: If given, every removed coordinate is appended to it
    """
    for x, y in seam:
        if removed_points is not None:
            removed_points.append((x, y))
        grid.shift_row_left_from_point(x, y)
    grid.remove_last_column()


def average_pixels(a: Pixel, b: Pixel) -> Pixel:
    """Channel-wise floor average of two pixels."""
    return tuple((int(ca) + int(cb)) // 2 for ca, cb in zip(a, b))


def add_point(grid: Grid, x: int, y: int, pixel: Pixel):
    """Insert `pixel` directly to the right of (x, y), dropping the row's last cell."""
    grid.shift_row_right_from_point(x, y)
    grid.set(x + 1, y, PixelPoint(pixel))


def insert_seam_points(grid: Grid, points: Seam):
    """
    Insert a blended pixel to the right of each point.

    The new pixel is the average of the point and its right neighbor. Points
    must be ordered by descending x so that earlier insertions never move the
    pixels later points refer to, and the grid must already have been widened
    by one column per seam the points came from.
    """
    for x, y in points:
        left = grid.get(x, y).pixel
        right = grid.get(x + 1, y).pixel
        add_point(grid, x, y, average_pixels(left, right))
