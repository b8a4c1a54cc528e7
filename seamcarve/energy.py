"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

Energy is the Sobel gradient magnitude of the image luminance:
E(i,j) = sqrt(Gx(i,j)^2 + Gy(i,j)^2)
"""

from concurrent.futures import ThreadPoolExecutor

import torch
import torch.nn.functional as F

from .errors import InvalidDimensions
from .image import image_shape

# Rec. 709 luma weights
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

SOBEL_X = [[1, 0, -1],
           [2, 0, -2],
           [1, 0, -1]]

SOBEL_Y = [[ 1,  2,  1],
           [ 0,  0,  0],
           [-1, -2, -1]]

BORDER_MODES = ('replicate', 'zero')

_PAD_MODES = {
    'replicate': 'replicate',
    'zero': 'constant',
}


def luminance(image: torch.Tensor) -> torch.Tensor:
    """
    Convert an image to a single-channel brightness map.

    Integer images are promoted to the default floating dtype, so uint8
    input yields brightness values in [0, 255].

    Args:
        image: RGB image tensor (3, H, W), single channel (1, H, W)
               or grayscale (H, W)

    Returns:
        Luminance map (H, W)
    """
    C, H, W = image_shape(image)

    if not image.is_floating_point():
        image = image.to(torch.get_default_dtype())

    if image.dim() == 2:
        return image.clone()
    if C == 1:
        return image[0].clone()
    if C == 3:
        r, g, b = LUMA_WEIGHTS
        return r * image[0] + g * image[1] + b * image[2]

    raise ValueError(f"Unsupported channel count: {C} (expected 1 or 3)")


def _sobel_kernels(dtype: torch.dtype, device: torch.device) -> torch.Tensor:
    """Stack both Sobel kernels into a (2, 1, 3, 3) conv2d weight."""
    return torch.tensor([SOBEL_X, SOBEL_Y], dtype=dtype, device=device).unsqueeze(1)


def _band_energy(padded: torch.Tensor, kernels: torch.Tensor,
                 row_start: int, row_end: int) -> torch.Tensor:
    """Energy for output rows [row_start, row_end) of a padded (1, 1, H+2, W+2) map."""
    band = padded[:, :, row_start:row_end + 2, :]
    grads = F.conv2d(band, kernels)
    grad_x, grad_y = grads[0, 0], grads[0, 1]
    return torch.sqrt(grad_x ** 2 + grad_y ** 2)


def gradient_magnitude_energy(image: torch.Tensor, border: str = 'replicate',
                              workers: int = 1) -> torch.Tensor:
    """
    Compute Sobel gradient magnitude energy for an image.

    Args:
        image: RGB image tensor (C, H, W) or grayscale (H, W)
        border: How samples outside the image are filled.
                'replicate' clamps to the nearest edge pixel,
                'zero' pads with zeros.
        workers: Number of threads. With workers > 1 the rows are split
                 into bands which are convolved concurrently and joined
                 before returning. The result does not depend on workers.

    Returns:
        Energy map (H, W), non-negative
    """
    if border not in _PAD_MODES:
        raise ValueError(f"Invalid border mode: {border}")
    if workers < 1:
        raise InvalidDimensions(f"workers must be at least 1, got {workers}")

    gray = luminance(image)
    H, W = gray.shape

    padded = F.pad(gray.reshape(1, 1, H, W), (1, 1, 1, 1), mode=_PAD_MODES[border])
    kernels = _sobel_kernels(gray.dtype, gray.device)

    n_bands = min(workers, H)
    if n_bands == 1:
        return _band_energy(padded, kernels, 0, H)

    band_height = -(-H // n_bands)
    bounds = [(start, min(start + band_height, H)) for start in range(0, H, band_height)]

    with ThreadPoolExecutor(max_workers=n_bands) as pool:
        bands = list(pool.map(lambda b: _band_energy(padded, kernels, *b), bounds))

    return torch.cat(bands, dim=0)


def normalize_energy(energy: torch.Tensor, eps: float = 1e-8) -> torch.Tensor:
    """Remap energy to [0, 1] range.

    This is a monotonic transform so seam positions are unchanged.

    Args:
        energy: Energy map (H, W)
        eps: Small value to avoid division by zero

    Returns:
        Normalized energy map in [0, 1]
    """
    e_min = energy.min()
    e_max = energy.max()
    return (energy - e_min) / (e_max - e_min + eps)
