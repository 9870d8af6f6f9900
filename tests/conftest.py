"""Shared test fixtures for the seam carving test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarver.grid import Grid


def make_uniform_bitmap(H, W, color=(90, 120, 200, 255)):
    """Single-color RGBA bitmap (4, H, W): zero energy everywhere."""
    return torch.tensor(color, dtype=torch.uint8).view(4, 1, 1).expand(4, H, W).clone()


def make_random_bitmap(H, W, seed=42):
    """Random opaque RGBA bitmap (4, H, W)."""
    gen = torch.Generator().manual_seed(seed)
    bitmap = torch.randint(0, 256, (4, H, W), dtype=torch.uint8, generator=gen)
    bitmap[3] = 255
    return bitmap


def make_gray_row_bitmap(values):
    """One-row opaque gray bitmap, one pixel per value."""
    row = torch.tensor(values, dtype=torch.uint8)
    bitmap = torch.stack([row, row, row, torch.full_like(row, 255)])
    return bitmap.unsqueeze(1)


def make_index_bitmap(H, W):
    """Bitmap whose red channel is the column and green channel the row."""
    bitmap = torch.zeros(4, H, W, dtype=torch.uint8)
    bitmap[0] = torch.arange(W).to(torch.uint8).view(1, W)
    bitmap[1] = torch.arange(H).to(torch.uint8).view(H, 1)
    bitmap[3] = 255
    return bitmap


@pytest.fixture
def index_grid():
    """5x4 grid where pixel (x, y) is (x, y, 0, 255)."""
    return Grid.from_bitmap(make_index_bitmap(4, 5))


@pytest.fixture
def random_grid():
    """Random 12x9 grid."""
    return Grid.from_bitmap(make_random_bitmap(9, 12))
