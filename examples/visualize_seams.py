"""
Visualize seam carving on a synthetic or real image.

Shows the input, its energy map, the first seams found (in red) and the
carved result side by side.

Usage:
    python visualize_seams.py                       # synthetic test image
    python visualize_seams.py --image photo.png -d 40
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import argparse
from pathlib import Path

import torch
import matplotlib
import matplotlib.pyplot as plt

from seamcarver import Carver, create_debug_image, gradient_energy, load_bitmap


def create_test_image(height=80, width=120):
    """Sky/ground image with a bright square the seams should avoid."""
    image = torch.zeros(4, height, width, dtype=torch.uint8)
    image[3] = 255
    image[0:3, :height // 2] = torch.tensor([120, 170, 230],
                                            dtype=torch.uint8).view(3, 1, 1)
    image[0:3, height // 2:] = torch.tensor([70, 130, 60],
                                            dtype=torch.uint8).view(3, 1, 1)

    # Object
    top, left, size = height // 3, width // 2, height // 4
    image[0:3, top:top + size, left:left + size] = torch.tensor(
        [230, 200, 40], dtype=torch.uint8).view(3, 1, 1)

    # Mild texture so the energy map isn't flat
    torch.manual_seed(42)
    noise = torch.randint(0, 8, (3, height, width), dtype=torch.int16)
    image[0:3] = (image[0:3].to(torch.int16) + noise).clamp(0, 255).to(torch.uint8)
    return image


def to_display(bitmap):
    return bitmap.permute(1, 2, 0).numpy()


def main():
    parser = argparse.ArgumentParser(description="Visualize seam carving")
    parser.add_argument('--image', type=str, help='Input image (default: synthetic)')
    parser.add_argument('-d', '--distance', type=int, default=30,
                        help='Number of seams to remove (default: 30)')
    parser.add_argument('--output', type=str, default='../output/seams.png',
                        help='Figure output path')
    parser.add_argument('--show', action='store_true', help='Open a window')
    args = parser.parse_args()

    if not args.show:
        matplotlib.use('Agg')

    if args.image:
        print(f"Loading image: {args.image}")
        bitmap = load_bitmap(args.image)
    else:
        print("Creating synthetic test image...")
        bitmap = create_test_image()

    _, H, W = bitmap.shape
    print(f"Image size: {W} x {H}")

    print("Computing energy...")
    energy = gradient_energy(bitmap.permute(1, 2, 0))

    print(f"Removing {args.distance} seams...")
    carver = Carver(bitmap)
    carved = carver.resize(args.distance, 'horizontal', 'shrink')

    # Only the first seam is in original image coordinates; later seams are
    # relative to the already-carved image, which is close enough for a preview.
    overlay = create_debug_image(bitmap, carver.get_removed_points())

    fig, axes = plt.subplots(1, 4, figsize=(18, 4.5))
    axes[0].imshow(to_display(bitmap))
    axes[0].set_title(f'Input ({W}x{H})')
    axes[1].imshow(energy.float().sqrt().numpy(), cmap='inferno')
    axes[1].set_title('Energy (sqrt)')
    axes[2].imshow(to_display(overlay))
    axes[2].set_title(f'{args.distance} seams')
    axes[3].imshow(to_display(carved))
    axes[3].set_title(f'Carved ({carved.shape[2]}x{carved.shape[1]})')
    for ax in axes:
        ax.axis('off')
    plt.tight_layout()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output, dpi=120, bbox_inches='tight')
    print(f"Saved: {output}")

    if args.show:
        plt.show()
    plt.close(fig)


if __name__ == '__main__':
    main()
