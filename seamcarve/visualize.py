"""
Helpers for looking at seams and energy maps.
"""

from typing import Iterable, Tuple

import torch

from .energy import normalize_energy
from .errors import InvariantViolation
from .image import image_shape


def overlay_seams(image: torch.Tensor, seams: Iterable[torch.Tensor],
                  color: Tuple[int, int, int] = (255, 0, 0),
                  direction: str = 'vertical') -> torch.Tensor:
    """
    Paint seams onto a copy of an RGB image.

    Seams must be in the image's own coordinates, e.g. from
    trace_seams(..., original_coordinates=True).

    Args:
        image: RGB image tensor (3, H, W), uint8 or float in [0, 1]
        seams: Seam index tensors
        color: RGB color in 0-255
        direction: 'vertical' or 'horizontal'

    Returns:
        Image tensor with the seam pixels recolored
    """
    C, H, W = image_shape(image)
    if C != 3 or image.dim() != 3:
        raise ValueError(f"Expected an RGB image of shape (3, H, W), got {tuple(image.shape)}")

    img_vis = image.clone()
    paint = torch.tensor(color, dtype=torch.float32, device=image.device)
    if image.is_floating_point():
        paint = paint / 255.0
    paint = paint.to(image.dtype).view(3, 1)

    if direction not in ('vertical', 'horizontal'):
        raise ValueError(f"Invalid direction: {direction}")

    # Seams mapped back to the original image may jump by more than one
    # column, so only length and range are checked.
    length, limit = (H, W) if direction == 'vertical' else (W, H)
    across = torch.arange(length, device=image.device)

    for seam in seams:
        seam = seam.to(image.device)
        if seam.shape != (length,) or seam.min() < 0 or seam.max() >= limit:
            raise InvariantViolation(f"Seam of shape {tuple(seam.shape)} does not fit a {W}x{H} image")
        if direction == 'vertical':
            img_vis[:, across, seam] = paint
        else:
            img_vis[:, seam, across] = paint

    return img_vis


def energy_to_image(energy: torch.Tensor) -> torch.Tensor:
    """Render an energy map (H, W) as a (3, H, W) uint8 grayscale image."""
    gray = torch.round(normalize_energy(energy) * 255.0).clamp(0, 255).to(torch.uint8)
    return gray.unsqueeze(0).expand(3, *gray.shape).clone()
