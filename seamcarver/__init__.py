"""
Content-aware image resizing by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .config import Mode, Orientation
from .grid import Grid, PixelPoint
from .energy import square_gradient, calculate_pixel_energy, gradient_energy
from .seam import (calculate_energy, get_path_start, find_path, find_seam,
                   remove_seam, average_pixels, add_point, insert_seam_points)
from .carving import Carver, InvalidDistanceError, create_debug_image
from .imageio import bitmap_from_image, bitmap_to_image, load_bitmap, save_bitmap

__all__ = [
    'Mode',
    'Orientation',
    'Grid',
    'PixelPoint',
    'square_gradient',
    'calculate_pixel_energy',
    'gradient_energy',
    'calculate_energy',
    'get_path_start',
    'find_path',
    'find_seam',
    'remove_seam',
    'average_pixels',
    'add_point',
    'insert_seam_points',
    'Carver',
    'InvalidDistanceError',
    'create_debug_image',
    'bitmap_from_image',
    'bitmap_to_image',
    'load_bitmap',
    'save_bitmap',
]
