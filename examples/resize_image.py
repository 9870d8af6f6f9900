"""
Resize an image file with seam carving.

Usage:
    python resize_image.py input.png output.png --distance 50
    python resize_image.py input.png output.png -d 30 --orientation vertical --mode grow
    python resize_image.py input.png output.png -d 50 --debug seams.png
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import argparse

from seamcarver import (Carver, Mode, Orientation,
                        create_debug_image, load_bitmap, save_bitmap)


def debug_points(points, orientation):
    """Map processing-space points back to image (x, y) coordinates."""
    if orientation == Orientation.VERTICAL:
        return [(y, x) for x, y in points]
    return points


def main():
    parser = argparse.ArgumentParser(
        description="Content-aware image resizing by seam carving"
    )
    parser.add_argument('input', type=str, help='Input image path')
    parser.add_argument('output', type=str, help='Output image path')
    parser.add_argument(
        '-d', '--distance',
        type=int,
        required=True,
        help='Number of pixels to add or remove'
    )
    parser.add_argument(
        '--orientation',
        choices=[o.value for o in Orientation],
        default=Orientation.HORIZONTAL.value,
        help='horizontal changes the width, vertical the height (default: horizontal)'
    )
    parser.add_argument(
        '--mode',
        choices=[m.value for m in Mode],
        default=Mode.SHRINK.value,
        help='Shrink or grow the image (default: shrink)'
    )
    parser.add_argument(
        '--debug',
        type=str,
        help='Also save the original image with the carved seams painted red'
    )

    args = parser.parse_args()
    orientation = Orientation(args.orientation)

    print(f"Loading image: {args.input}")
    bitmap = load_bitmap(args.input)
    _, H, W = bitmap.shape
    print(f"Image size: {W} x {H}")

    carver = Carver(bitmap)
    print(f"Carving ({args.mode} {args.distance}px, {args.orientation})...")
    try:
        result = carver.resize(args.distance, orientation, args.mode)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    _, H_out, W_out = result.shape
    print(f"Result size: {W_out} x {H_out}")
    save_bitmap(result, args.output)
    print(f"Saved: {args.output}")

    if args.debug:
        points = debug_points(carver.get_removed_points(), orientation)
        save_bitmap(create_debug_image(bitmap, points), args.debug)
        print(f"Saved: {args.debug}")


if __name__ == '__main__':
    main()
