"""
Image representations.

All components work on torch tensors shaped (C, H, W) or (H, W), the same
layout the carving functions return. RGBImage is the plain interchange form:
a flat row-major RGB byte buffer with explicit width and height.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import torch
from PIL import Image

from .errors import EmptyImage, InvariantViolation


def image_shape(image: torch.Tensor) -> Tuple[int, int, int]:
    """
    Return (C, H, W) for an image tensor.

    Args:
        image: Image tensor (C, H, W) or grayscale (H, W)

    Returns:
        Tuple (C, H, W); C is 1 for grayscale input

    Raises:
        ValueError: if the tensor is not 2-D or 3-D
        EmptyImage: if the height or width is zero
    """
    if image.dim() == 2:
        C = 1
        H, W = image.shape
    elif image.dim() == 3:
        C, H, W = image.shape
    else:
        raise ValueError(f"Expected image of shape (C, H, W) or (H, W), got {tuple(image.shape)}")

    if H == 0 or W == 0:
        raise EmptyImage(f"Image has zero size: height={H}, width={W}")

    return C, H, W


def transpose(image: torch.Tensor) -> torch.Tensor:
    """Swap rows and columns of an image tensor, keeping channels first."""
    return image.transpose(-2, -1)


@dataclass(frozen=True)
class RGBImage:
    """
    An 8-bit RGB image stored as a flat row-major byte buffer.

    pixels holds width * height (R, G, B) triples, left to right, top to
    bottom.
    """

    width: int
    height: int
    pixels: bytes

    def __post_init__(self):
        object.__setattr__(self, 'pixels', bytes(self.pixels))
        if self.width <= 0 or self.height <= 0:
            raise EmptyImage(f"Image has zero size: width={self.width}, height={self.height}")
        expected = self.width * self.height * 3
        if len(self.pixels) != expected:
            raise InvariantViolation(
                f"Pixel buffer holds {len(self.pixels)} bytes, expected {expected} "
                f"for a {self.width}x{self.height} RGB image"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def to_tensor(self, device='cpu') -> torch.Tensor:
        """Return a (3, H, W) uint8 tensor that owns its own copy of the pixels."""
        flat = torch.frombuffer(bytearray(self.pixels), dtype=torch.uint8)
        return flat.view(self.height, self.width, 3).permute(2, 0, 1).contiguous().to(device)

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> 'RGBImage':
        """
        Build an RGBImage from a (3, H, W) tensor.

        Floating tensors are read as values in [0, 1]; integer tensors as
        values in [0, 255]. Out-of-range values are clipped.
        """
        C, H, W = image_shape(tensor)
        if C != 3:
            raise ValueError(f"Expected a 3-channel RGB tensor, got {C} channel(s)")

        tensor = tensor.detach().cpu()
        if tensor.is_floating_point():
            tensor = torch.round(tensor * 255.0)
        tensor = tensor.clamp(0, 255).to(torch.uint8)

        array = tensor.permute(1, 2, 0).contiguous().numpy()
        return cls(width=W, height=H, pixels=array.tobytes())

    @classmethod
    def from_pil(cls, image: Image.Image) -> 'RGBImage':
        """Build an RGBImage from a Pillow image, converting to RGB if needed."""
        rgb = image.convert('RGB')
        return cls(width=rgb.width, height=rgb.height, pixels=rgb.tobytes())

    def to_pil(self) -> Image.Image:
        return Image.frombytes('RGB', (self.width, self.height), self.pixels)

    def to_numpy(self) -> np.ndarray:
        """Return an (H, W, 3) uint8 array copy of the pixels."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 3).copy()
