"""
High-level carving: orientation handling, grow/shrink dispatch and
rebuilding the output bitmap.
"""

import torch
from typing import List, Tuple
from .config import Mode, Orientation
from .grid import Grid
from .seam import find_seam, remove_seam, insert_seam_points

RED = (255, 0, 0, 255)


class InvalidDistanceError(ValueError):
    """
    Raised when a resize distance does not fit the current grid.

    Shrinking by `distance` needs at least `distance + 1` pixels along the
    processing axis; growing has the same limit because it simulates a shrink
    of the same distance to find where to insert.
    """

    def __init__(self, requested_distance: int, current_dimension: int):
        self.requested_distance = requested_distance
        self.current_dimension = current_dimension
        super().__init__(
            f"Cannot carve {requested_distance} seams from a dimension of "
            f"{current_dimension} pixels (at most {current_dimension - 1})")


class Carver:
    """
    Seam carver owning a mutable pixel grid.

    Example:
        carver = Carver(bitmap)
        smaller = carver.resize(50, Orientation.HORIZONTAL, Mode.SHRINK)
        taller = carver.resize(20, 'vertical', 'grow')

    Every resize works on the result of the previous one. Coordinates returned
    by get_removed_points are in processing space: for vertical resizes the
    grid is transposed, so x and y are swapped relative to the image.
    """

    def __init__(self, bitmap: torch.Tensor):
        self.grid = Grid.from_bitmap(bitmap)
        self.removed_points: List[Tuple[int, int]] = []

    @classmethod
    def _from_grid(cls, grid: Grid) -> 'Carver':
        carver = cls.__new__(cls)
        carver.grid = grid
        carver.removed_points = []
        return carver

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def resize(self, distance: int, orientation=Orientation.HORIZONTAL,
               mode=Mode.SHRINK) -> torch.Tensor:
        """
        Grow or shrink the image by `distance` pixels along one axis.

        Args:
            distance: Number of seams to remove or insert (>= 0)
            orientation: 'horizontal' changes the width, 'vertical' the height
            mode: 'shrink' or 'grow'

        Returns:
            Resized bitmap (4, H, W) uint8
        """
        orientation = Orientation.coerce(orientation)
        mode = Mode.coerce(mode)

        if orientation == Orientation.HORIZONTAL:
            self._check_distance(distance, self.grid.width)
            self.resize_distance(distance, mode)
        else:
            self._check_distance(distance, self.grid.height)
            self.grid.rotate()
            self.resize_distance(distance, mode)
            self.grid.rotate()

        return self.rebuild_image()

    def get_removed_points(self) -> List[Tuple[int, int]]:
        return list(self.removed_points)

    @staticmethod
    def _check_distance(distance: int, dimension: int):
        if isinstance(distance, bool) or not isinstance(distance, int):
            raise ValueError(f"Distance must be an integer, got {distance!r}")
        if distance < 0:
            raise ValueError(f"Distance must be non-negative, got {distance}")
        if distance >= dimension:
            raise InvalidDistanceError(distance, dimension)

    def resize_distance(self, distance: int, mode=Mode.SHRINK):
        """Grow or shrink the grid along its width."""
        mode = Mode.coerce(mode)
        if mode == Mode.GROW:
            self.grow_distance(distance)
        else:
            self.shrink_distance(distance)

    def shrink_distance(self, distance: int):
        """Remove `distance` seams one at a time, each from the already-carved grid."""
        self._check_distance(distance, self.grid.width)
        for _ in range(distance):
            seam = find_seam(self.grid)
            remove_seam(self.grid, seam, self.removed_points)

    def grow_distance(self, distance: int):
        """
        Widen the grid by `distance` columns.

        A disposable copy of the grid is shrunk by the same distance to find
        the least important pixels; a blended pixel is then inserted to the
        right of each of them in the live grid.
        """
        points = self.get_points_removed_by_shrink(distance)

        for _ in range(distance):
            self.grid.add_last_column()

        insert_seam_points(self.grid, points)
        self.removed_points.extend(points)

    def get_points_removed_by_shrink(self, distance: int) -> List[Tuple[int, int]]:
        """Points a shrink by `distance` would remove, sorted by descending x."""
        shrinker = Carver._from_grid(self.grid.clone())
        shrinker.shrink_distance(distance)
        return sorted(shrinker.removed_points, key=lambda p: p[0], reverse=True)

    def rebuild_image(self) -> torch.Tensor:
        """Bitmap (4, height, width) of the current grid."""
        return self.grid.to_bitmap()


def create_debug_image(bitmap: torch.Tensor,
                       points: List[Tuple[int, int]]) -> torch.Tensor:
    """
    Copy of `bitmap` with every (x, y) in `points` painted opaque red.

    Args:
        bitmap: (4, H, W) uint8 RGBA tensor
        points: Pixel coordinates, e.g. Carver.get_removed_points()

    Returns:
        New bitmap; the input is not modified
    """
    image = bitmap.clone()
    red = torch.tensor(RED[:image.shape[0]], dtype=image.dtype, device=image.device)
    for x, y in points:
        image[:, y, x] = red
    return image
