"""
Mutable pixel grid that seam carving operates on.

The grid stores per-pixel state (color, energy, cumulative path cost) in
three row-major tensors that share a column capacity:

- pixels:    (height, capacity, 4) uint8, RGBA
- energy:    (height, capacity)    int64
- path_cost: (height, capacity)    int64

Only columns [0, width) are live. Removing or inserting a pixel in a row is a
bounded in-row slice copy; the storage itself is only reallocated when the
capacity runs out or when the grid is transposed.
"""

import torch
from typing import Iterator, List, NamedTuple, Tuple

Pixel = Tuple[int, int, int, int]


class PixelPoint(NamedTuple):
    """A single grid cell."""
    pixel: Pixel
    energy: int = 0
    path_cost: int = 0


def _to_rgba(bitmap: torch.Tensor) -> torch.Tensor:
    """Convert a (C, H, W) or (H, W) bitmap to an (H, W, 4) uint8 tensor."""
    bitmap = torch.as_tensor(bitmap)
    if bitmap.dim() == 2:
        bitmap = bitmap.unsqueeze(0)
    if bitmap.dim() != 3 or bitmap.shape[0] not in (1, 3, 4):
        raise ValueError(f"Expected a (C, H, W) bitmap with C in (1, 3, 4), "
                         f"got shape {tuple(bitmap.shape)}")
    if bitmap.shape[1] == 0 or bitmap.shape[2] == 0:
        raise ValueError("Bitmap must be at least 1x1")

    if bitmap.is_floating_point():
        # Float images are expected in [0, 1]
        bitmap = (bitmap * 255.0).round().clamp(0, 255)
    bitmap = bitmap.to(torch.uint8)

    C, H, W = bitmap.shape
    if C == 1:
        bitmap = bitmap.expand(3, H, W)
    if bitmap.shape[0] == 3:
        alpha = torch.full((1, H, W), 255, dtype=torch.uint8, device=bitmap.device)
        bitmap = torch.cat([bitmap, alpha], dim=0)

    return bitmap.permute(1, 2, 0).contiguous().cpu()


class Grid:
    """
    Rectangular, mutable container of PixelPoints addressed as (x, y).

    Coordinates outside [0, width) x [0, height) are precondition violations
    and raise IndexError. Negative indices are never wrapped.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")
        self._width = width
        self._height = height
        self._pixels = torch.zeros(height, width, 4, dtype=torch.uint8)
        self._energy = torch.zeros(height, width, dtype=torch.int64)
        self._path_cost = torch.zeros(height, width, dtype=torch.int64)

    @classmethod
    def from_bitmap(cls, bitmap: torch.Tensor) -> 'Grid':
        """
        Build a grid by copying pixel data out of a bitmap.

        Args:
            bitmap: (4, H, W) uint8 RGBA tensor. (H, W) grayscale and
                    (1 | 3, H, W) tensors are accepted and converted to RGBA;
                    floating point tensors are read as values in [0, 1].

        Returns:
            Grid of size W x H with zeroed energy and path cost
        """
        pixels = _to_rgba(bitmap)
        H, W, _ = pixels.shape
        grid = cls(W, H)
        grid._pixels.copy_(pixels)
        return grid

    def to_bitmap(self) -> torch.Tensor:
        """Return the live pixels as a new (4, height, width) uint8 tensor."""
        return self.pixels.permute(2, 0, 1).contiguous()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def capacity(self) -> int:
        return self._pixels.shape[1]

    @property
    def pixels(self) -> torch.Tensor:
        """View of the live pixels, (height, width, 4)."""
        return self._pixels[:, :self._width]

    @property
    def energy(self) -> torch.Tensor:
        """View of the live energies, (height, width)."""
        return self._energy[:, :self._width]

    @property
    def path_cost(self) -> torch.Tensor:
        """View of the live path costs, (height, width)."""
        return self._path_cost[:, :self._width]

    def _check(self, x: int, y: int):
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"({x}, {y}) is outside of the "
                             f"{self._width}x{self._height} grid")

    def get(self, x: int, y: int) -> PixelPoint:
        self._check(x, y)
        return PixelPoint(tuple(self._pixels[y, x].tolist()),
                          int(self._energy[y, x]),
                          int(self._path_cost[y, x]))

    def set(self, x: int, y: int, point: PixelPoint):
        self._check(x, y)
        self._pixels[y, x] = torch.tensor(point.pixel, dtype=torch.uint8)
        self._energy[y, x] = point.energy
        self._path_cost[y, x] = point.path_cost

    def set_pixel(self, x: int, y: int, pixel: Pixel):
        self._check(x, y)
        self._pixels[y, x] = torch.tensor(pixel, dtype=torch.uint8)

    def get_adjacent(self, x: int, y: int) -> Tuple[PixelPoint, PixelPoint,
                                                     PixelPoint, PixelPoint]:
        """
        Left, right, up and down neighbors of (x, y).

        At the boundary the missing neighbor is replaced by the cell itself,
        so a gradient across the edge never needs special-casing.
        """
        self._check(x, y)
        left = self.get(max(x - 1, 0), y)
        right = self.get(min(x + 1, self._width - 1), y)
        up = self.get(x, max(y - 1, 0))
        down = self.get(x, min(y + 1, self._height - 1))
        return left, right, up, down

    def get_parents(self, x: int, y: int) -> List[Tuple[int, int, PixelPoint]]:
        """
        Cells in row y - 1 at columns x - 1, x, x + 1 that exist, left to right.

        Empty for the top row.
        """
        self._check(x, y)
        if y == 0:
            return []
        lo = max(x - 1, 0)
        hi = min(x + 1, self._width - 1)
        return [(px, y - 1, self.get(px, y - 1)) for px in range(lo, hi + 1)]

    def get_row(self, y: int) -> List[PixelPoint]:
        self._check(0, y)
        return [self.get(x, y) for x in range(self._width)]

    def coord_iter(self) -> Iterator[Tuple[int, int, PixelPoint]]:
        """Lazily yield (x, y, cell) for every live cell in row-major order."""
        for y in range(self._height):
            for x in range(self._width):
                yield x, y, self.get(x, y)

    def rotate(self):
        """Transpose the grid in place: (x, y) moves to (y, x)."""
        self._pixels = self.pixels.transpose(0, 1).contiguous()
        self._energy = self.energy.transpose(0, 1).contiguous()
        self._path_cost = self.path_cost.transpose(0, 1).contiguous()
        self._width, self._height = self._height, self._width

    def _reserve(self, extra: int):
        """Grow the column capacity by `extra`, keeping the live region."""
        H, W = self._height, self._width
        capacity = self.capacity + extra

        pixels = torch.zeros(H, capacity, 4, dtype=torch.uint8)
        energy = torch.zeros(H, capacity, dtype=torch.int64)
        path_cost = torch.zeros(H, capacity, dtype=torch.int64)
        pixels[:, :W] = self.pixels
        energy[:, :W] = self.energy
        path_cost[:, :W] = self.path_cost

        self._pixels, self._energy, self._path_cost = pixels, energy, path_cost

    def add_last_column(self):
        """Append one column on the right, replicating the current last column."""
        if self._width == self.capacity:
            self._reserve(self.capacity)
        w = self._width
        self._pixels[:, w] = self._pixels[:, w - 1]
        self._energy[:, w] = 0
        self._path_cost[:, w] = 0
        self._width += 1

    def remove_last_column(self):
        if self._width == 1:
            raise IndexError("Cannot remove the only column of a grid")
        self._width -= 1

    def shift_row_left_from_point(self, x: int, y: int):
        """
        Move cells right of x in row y one position left, overwriting (x, y).

        The last live cell of the row keeps a stale copy until the column is
        removed.
        """
        self._check(x, y)
        w = self._width
        if x < w - 1:
            for storage in (self._pixels, self._energy, self._path_cost):
                storage[y, x:w - 1] = storage[y, x + 1:w].clone()

    def shift_row_right_from_point(self, x: int, y: int):
        """
        Move cells at or right of x in row y one position right.

        The last live cell of the row is dropped and (x, y) keeps its value,
        so the caller is expected to write the new cell at (x + 1, y).
        """
        self._check(x, y)
        w = self._width
        if x < w - 1:
            for storage in (self._pixels, self._energy, self._path_cost):
                storage[y, x + 1:w] = storage[y, x:w - 1].clone()

    def clone(self) -> 'Grid':
        """Independent deep copy; nothing is shared with this grid."""
        grid = Grid.__new__(Grid)
        grid._width = self._width
        grid._height = self._height
        grid._pixels = self._pixels.clone()
        grid._energy = self._energy.clone()
        grid._path_cost = self._path_cost.clone()
        return grid

    def __repr__(self):
        return f"Grid(width={self._width}, height={self._height})"
