"""
Content-aware image shrinking by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .errors import SeamCarvingError, InvalidDimensions, EmptyImage, InvariantViolation
from .image import RGBImage
from .energy import luminance, gradient_magnitude_energy, normalize_energy
from .seam import (CumulativeTable, cumulative_energy, trace_seam, dp_seam,
                   seam_cost, validate_seam, remove_seam)
from .carving import reduce_width, reduce_height, resize, trace_seams
from .visualize import overlay_seams, energy_to_image

__all__ = [
    'SeamCarvingError',
    'InvalidDimensions',
    'EmptyImage',
    'InvariantViolation',
    'RGBImage',
    'luminance',
    'gradient_magnitude_energy',
    'normalize_energy',
    'CumulativeTable',
    'cumulative_energy',
    'trace_seam',
    'dp_seam',
    'seam_cost',
    'validate_seam',
    'remove_seam',
    'reduce_width',
    'reduce_height',
    'resize',
    'trace_seams',
    'overlay_seams',
    'energy_to_image',
]
