"""
Basic seam carving example.

Shrinks an image to a target size and optionally saves the first few
seams overlaid on the original so you can see what gets removed.

    python basic_seam_carving.py input.jpg --width 300 --height 200
"""

import argparse
import logging
import os
import sys
import time
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
from PIL import Image

from seamcarve import RGBImage, resize, trace_seams, overlay_seams


def load_image(path: str, device='cpu') -> torch.Tensor:
    """Load image as a (3, H, W) uint8 tensor."""
    return RGBImage.from_pil(Image.open(path)).to_tensor(device)


def save_image(tensor: torch.Tensor, path: str):
    """Save a (3, H, W) tensor as an image file."""
    RGBImage.from_tensor(tensor).to_pil().save(path)
    print(f"Saved: {path}")


def main():
    parser = argparse.ArgumentParser(description="Content-aware shrinking with seam carving")
    parser.add_argument('input', type=str, help='Input image path')
    parser.add_argument('--width', type=int, help='Target width (default: keep)')
    parser.add_argument('--height', type=int, help='Target height (default: keep)')
    parser.add_argument('--output', type=str, help='Output path (default: <input>_carved.png)')
    parser.add_argument('--show-seams', type=int, default=0, metavar='N',
                        help='Also save the first N vertical seams drawn on the original')
    parser.add_argument('--border', choices=['replicate', 'zero'], default='replicate',
                        help='Energy border mode (default: replicate)')
    parser.add_argument('--workers', type=int, default=1,
                        help='Threads for energy computation (default: 1)')
    parser.add_argument('--verbose', action='store_true', help='Log every removed seam')
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    device = 'cuda' if torch.cuda.is_available() else 'cpu'
    print(f"Using device: {device}")

    image = load_image(args.input, device=device)
    C, H, W = image.shape
    print(f"Image shape: {C} x {H} x {W}")

    target_w = args.width or W
    target_h = args.height or H
    stem = os.path.splitext(args.input)[0]

    if args.show_seams > 0:
        print(f"Tracing {args.show_seams} seams...")
        seams = trace_seams(image, args.show_seams, original_coordinates=True,
                            border=args.border, workers=args.workers)
        save_image(overlay_seams(image, seams), f"{stem}_seams.png")

    print(f"Carving {W}x{H} -> {target_w}x{target_h}...")
    start = time.time()
    carved = resize(image, target_w, target_h, border=args.border, workers=args.workers)
    print(f"  Done in {time.time() - start:.1f}s, size: {tuple(carved.shape)}")

    save_image(carved, args.output or f"{stem}_carved.png")


if __name__ == '__main__':
    main()
