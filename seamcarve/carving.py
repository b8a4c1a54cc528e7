"""
High-level carving functions that orchestrate the seam carving workflow.

Each removed seam changes the pixels, so every iteration recomputes
energy -> cumulative table -> seam -> removal on the current image.
Height reduction reuses the same pipeline on the transposed image.
"""

import logging
import numbers
from typing import Callable, Iterator, Optional, Union

import torch

from .energy import BORDER_MODES, gradient_magnitude_energy
from .errors import InvalidDimensions
from .image import RGBImage, image_shape, transpose
from .seam import cumulative_energy, remove_seam, seam_cost, trace_seam

logger = logging.getLogger(__name__)

ImageLike = Union[RGBImage, torch.Tensor]
StopCallback = Optional[Callable[[], bool]]


def _to_tensor(image: ImageLike) -> torch.Tensor:
    if isinstance(image, RGBImage):
        return image.to_tensor()
    image_shape(image)
    return image


def _like(original: ImageLike, carved: torch.Tensor) -> ImageLike:
    """Return carved in the same representation as the caller's image."""
    if isinstance(original, RGBImage):
        return RGBImage.from_tensor(carved)
    return carved


def _size(image: ImageLike):
    """(width, height) of an image, validating tensors along the way."""
    if isinstance(image, RGBImage):
        return image.width, image.height
    _, H, W = image_shape(image)
    return W, H


def _check_target(name: str, target: int, current: int) -> None:
    if not isinstance(target, numbers.Integral) or not 1 <= target <= current:
        raise InvalidDimensions(
            f"{name} must be between 1 and {current} (this engine only shrinks), got {target}"
        )


def _check_options(border: str, workers: int) -> None:
    if border not in BORDER_MODES:
        raise ValueError(f"Invalid border mode: {border}")
    if workers < 1:
        raise InvalidDimensions(f"workers must be at least 1, got {workers}")


def _carve_columns(image: torch.Tensor, n_seams: int, border: str, workers: int,
                   should_stop: StopCallback) -> torch.Tensor:
    """Remove n_seams vertical seams, stopping early if should_stop() is true."""
    carved = image

    for i in range(n_seams):
        if should_stop is not None and should_stop():
            logger.info("Carving cancelled after %d of %d seams", i, n_seams)
            break

        energy = gradient_magnitude_energy(carved, border=border, workers=workers)
        seam = trace_seam(cumulative_energy(energy))
        carved = remove_seam(carved, seam)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Seam %d/%d: cost=%.4f, size=%s",
                         i + 1, n_seams, seam_cost(energy, seam), tuple(carved.shape))

    return carved


def reduce_width(image: ImageLike, target_width: int, *, border: str = 'replicate',
                 workers: int = 1, should_stop: StopCallback = None) -> ImageLike:
    """
    Shrink an image to target_width by removing vertical seams.

    Args:
        image: RGBImage, or image tensor (C, H, W) / (H, W)
        target_width: Width of the result, 1 <= target_width <= width
        border: Energy border mode, 'replicate' or 'zero'
        workers: Threads used for each energy computation
        should_stop: Optional callable polled between seams; when it returns
                     True the most recently carved image is returned

    Returns:
        Carved image of the same kind as the input
    """
    W, _ = _size(image)
    _check_target('target_width', target_width, W)
    _check_options(border, workers)

    if target_width == W:
        return image

    carved = _carve_columns(_to_tensor(image), W - target_width, border, workers, should_stop)
    return _like(image, carved)


def reduce_height(image: ImageLike, target_height: int, *, border: str = 'replicate',
                  workers: int = 1, should_stop: StopCallback = None) -> ImageLike:
    """
    Shrink an image to target_height by removing horizontal seams.

    A horizontal seam is a vertical seam of the transposed image, so the
    image is transposed, carved column-wise and transposed back.
    Arguments are as for reduce_width.
    """
    _, H = _size(image)
    _check_target('target_height', target_height, H)
    _check_options(border, workers)

    if target_height == H:
        return image

    carved = _carve_columns(transpose(_to_tensor(image)), H - target_height,
                            border, workers, should_stop)
    return _like(image, transpose(carved).contiguous())


def resize(image: ImageLike, target_width: int, target_height: int, *,
           border: str = 'replicate', workers: int = 1,
           should_stop: StopCallback = None) -> ImageLike:
    """
    Shrink an image to (target_width, target_height).

    Width is reduced first, then height. Both targets are validated before
    any carving starts. If should_stop fires during width reduction, height
    reduction is skipped.
    """
    W, H = _size(image)
    _check_target('target_width', target_width, W)
    _check_target('target_height', target_height, H)
    _check_options(border, workers)

    carved = reduce_width(image, target_width, border=border, workers=workers,
                          should_stop=should_stop)
    if should_stop is not None and should_stop():
        logger.info("Carving cancelled before height reduction")
        return carved

    return reduce_height(carved, target_height, border=border, workers=workers,
                         should_stop=should_stop)


def trace_seams(image: ImageLike, count: int, direction: str = 'vertical', *,
                original_coordinates: bool = False, border: str = 'replicate',
                workers: int = 1) -> Iterator[torch.Tensor]:
    """
    Lazily compute the first count seams that carving would remove.

    Nothing is computed until the returned iterator is advanced, and the
    caller's image is never modified. The iterator is single-use.

    Args:
        image: RGBImage, or image tensor (C, H, W) / (H, W)
        count: Number of seams, 0 <= count < width (or height)
        direction: 'vertical' (remove columns) or 'horizontal' (remove rows)
        original_coordinates: If True, each seam holds column (row) indices
            of the caller's image instead of the shrunken image it was
            found in
        border: Energy border mode
        workers: Threads used for each energy computation

    Returns:
        Iterator of seam tensors; vertical seams have one entry per row,
        horizontal seams one entry per column
    """
    if direction not in ('vertical', 'horizontal'):
        raise ValueError(f"Invalid direction: {direction}")

    W, H = _size(image)
    limit = W if direction == 'vertical' else H
    if not isinstance(count, numbers.Integral) or not 0 <= count < limit:
        raise InvalidDimensions(f"count must be between 0 and {limit - 1}, got {count}")
    _check_options(border, workers)

    pixels = _to_tensor(image)
    if direction == 'horizontal':
        pixels = transpose(pixels)

    return _seam_generator(pixels, count, original_coordinates, border, workers)


def _seam_generator(pixels: torch.Tensor, count: int, original_coordinates: bool,
                    border: str, workers: int) -> Iterator[torch.Tensor]:
    _, H, W = image_shape(pixels)

    # Column of the input each remaining pixel came from
    index_map = torch.arange(W, device=pixels.device).expand(H, W)
    rows = torch.arange(H, device=pixels.device)

    for _ in range(count):
        energy = gradient_magnitude_energy(pixels, border=border, workers=workers)
        seam = trace_seam(cumulative_energy(energy))

        pixels = remove_seam(pixels, seam)

        if original_coordinates:
            mapped = index_map[rows, seam]
            index_map = remove_seam(index_map, seam)
            yield mapped
        else:
            yield seam
