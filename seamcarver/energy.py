"""
Energy function for seam carving.

The energy of a pixel is the squared color gradient across it:

    E(x, y) = |I(x+1, y) - I(x-1, y)|^2 + |I(x, y+1) - I(x, y-1)|^2

summed over all four RGBA channels, with neighbors clamped to the image
border. High energy marks detail that carving should avoid; low energy
pixels are removed first.
"""

import torch
from .grid import Grid, PixelPoint


def square_gradient(a: PixelPoint, b: PixelPoint) -> int:
    """Sum over channels of the squared difference between two pixel points."""
    return sum((int(ca) - int(cb)) ** 2 for ca, cb in zip(a.pixel, b.pixel))


def calculate_pixel_energy(grid: Grid, x: int, y: int) -> int:
    """Energy of a single cell from its (clamped) left/right and up/down neighbors."""
    left, right, up, down = grid.get_adjacent(x, y)
    return square_gradient(left, right) + square_gradient(up, down)


def gradient_energy(pixels: torch.Tensor) -> torch.Tensor:
    """
    Compute the energy of every pixel at once.

    Produces the same values as calculate_pixel_energy for each cell.

    Args:
        pixels: Pixel tensor (H, W, C), any integer dtype

    Returns:
        Energy map (H, W), int64
    """
    H, W = pixels.shape[0], pixels.shape[1]
    p = pixels.to(torch.int64)

    # Edge-replicated neighbor indices
    cols = torch.arange(W)
    rows = torch.arange(H)
    left = p[:, (cols - 1).clamp(min=0)]
    right = p[:, (cols + 1).clamp(max=W - 1)]
    up = p[(rows - 1).clamp(min=0)]
    down = p[(rows + 1).clamp(max=H - 1)]

    horizontal = ((right - left) ** 2).sum(dim=-1)
    vertical = ((down - up) ** 2).sum(dim=-1)
    return horizontal + vertical
