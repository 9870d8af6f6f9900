"""Conversion between PIL images and the (4, H, W) uint8 bitmaps the carver uses."""

import numpy as np
import torch
from PIL import Image


def bitmap_from_image(image: Image.Image) -> torch.Tensor:
    """Convert a PIL image (any mode) to a (4, H, W) uint8 RGBA tensor."""
    img_array = np.array(image.convert('RGBA'), dtype=np.uint8)
    return torch.from_numpy(img_array).permute(2, 0, 1).contiguous()


def bitmap_to_image(bitmap: torch.Tensor) -> Image.Image:
    """Convert a (4, H, W) uint8 tensor to an RGBA PIL image."""
    img_array = bitmap.permute(1, 2, 0).cpu().numpy().astype(np.uint8)
    return Image.fromarray(img_array)


def load_bitmap(path) -> torch.Tensor:
    with Image.open(path) as img:
        return bitmap_from_image(img)


def save_bitmap(bitmap: torch.Tensor, path):
    image = bitmap_to_image(bitmap)
    # Formats without an alpha channel (JPEG) need RGB
    if str(path).lower().endswith(('.jpg', '.jpeg')):
        image = image.convert('RGB')
    image.save(path)
