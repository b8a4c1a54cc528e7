"""
Compare seam carving with a plain rescale.

Shows the original, its energy map, the seam-carved result and a uniform
Pillow rescale side by side.

    python compare_resize.py input.jpg --scale 0.6
"""

import argparse
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib.pyplot as plt
from PIL import Image

from seamcarve import RGBImage, energy_to_image, gradient_magnitude_energy, reduce_width


def main():
    parser = argparse.ArgumentParser(description="Seam carving vs uniform rescale")
    parser.add_argument('input', type=str, help='Input image path')
    parser.add_argument('--scale', type=float, default=0.7,
                        help='Fraction of the width to keep (default: 0.7)')
    parser.add_argument('--output', type=str, default='comparison.png',
                        help='Figure path (default: comparison.png)')
    args = parser.parse_args()

    original = RGBImage.from_pil(Image.open(args.input))
    target_w = max(1, int(round(original.width * args.scale)))

    print(f"Carving {original.width} -> {target_w} columns...")
    carved = reduce_width(original, target_w)
    scaled = original.to_pil().resize((target_w, original.height), Image.LANCZOS)
    energy = energy_to_image(gradient_magnitude_energy(original.to_tensor()))[0]

    fig, axes = plt.subplots(1, 4, figsize=(16, 4))
    panels = [
        (original.to_numpy(), 'Original'),
        (energy.numpy(), 'Energy'),
        (carved.to_numpy(), f'Seam carved ({target_w}px)'),
        (scaled, f'Rescaled ({target_w}px)'),
    ]
    for ax, (img, title) in zip(axes, panels):
        ax.imshow(img, cmap='inferno' if title == 'Energy' else None)
        ax.set_title(title)
        ax.axis('off')

    plt.tight_layout()
    plt.savefig(args.output, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"Saved: {args.output}")


if __name__ == '__main__':
    main()
