#!/usr/bin/env python3
"""
Generate a GIF of seam carving: each frame shows the original image with
every seam removed so far drawn on top, or with --carved, the shrinking
image itself.
"""

import argparse
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from PIL import Image

from seamcarve import RGBImage, overlay_seams, remove_seam, trace_seams


def generate_gif(input_path, n_seams, output_path, fps=10, step=1, carved=False):
    """
    Write an animated GIF with one frame every `step` seams.

    Args:
        input_path: Image to carve
        n_seams: Number of vertical seams to trace
        output_path: Path to save the output GIF
        fps: Frames per second for the GIF
        step: Seams per frame
        carved: If True, frames show the carved image (padded to the
                original width) instead of seams on the original
    """
    source = Image.open(input_path).convert('RGB')
    image = RGBImage.from_pil(source).to_tensor()
    _, H, W = image.shape

    frames = [source]
    shown = []
    current = image

    print(f"Tracing {n_seams} seams on {W}x{H} image...")
    seams = trace_seams(image, n_seams, original_coordinates=not carved)
    for i, seam in enumerate(seams):
        if carved:
            current = remove_seam(current, seam)
        else:
            shown.append(seam)

        if (i + 1) % step == 0 or i + 1 == n_seams:
            if carved:
                frame = Image.new('RGB', (W, H))
                frame.paste(RGBImage.from_tensor(current).to_pil(), (0, 0))
            else:
                frame = RGBImage.from_tensor(overlay_seams(image, shown)).to_pil()
            frames.append(frame)

        if (i + 1) % 20 == 0:
            print(f"  Processed seam {i + 1}/{n_seams}")

    duration = int(1000 / fps)

    print(f"Saving GIF to {output_path}...")
    frames[0].save(
        output_path,
        save_all=True,
        append_images=frames[1:],
        duration=duration,
        loop=0,
        optimize=False
    )
    print(f"  Frames: {len(frames)}, Duration: {len(frames) * duration / 1000:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Generate a seam carving GIF")
    parser.add_argument('input', type=str, help='Input image path')
    parser.add_argument('--seams', type=int, default=50,
                        help='Number of seams to trace (default: 50)')
    parser.add_argument('--output', type=str,
                        help='Output GIF filename (default: <input>_seams.gif)')
    parser.add_argument('--fps', type=int, default=10,
                        help='Frames per second (default: 10)')
    parser.add_argument('--step', type=int, default=1,
                        help='Seams per frame (default: 1)')
    parser.add_argument('--carved', action='store_true',
                        help='Show the shrinking image instead of seam overlays')
    args = parser.parse_args()

    output = args.output or f"{os.path.splitext(args.input)[0]}_seams.gif"
    generate_gif(args.input, args.seams, output, args.fps, args.step, args.carved)


if __name__ == "__main__":
    main()
