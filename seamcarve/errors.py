"""
Errors raised by the seam carving engine.

User-facing problems (bad targets, empty images) derive from ValueError so
callers can treat them like any other bad argument. InvariantViolation marks
a broken internal contract and derives from RuntimeError.
"""


class SeamCarvingError(Exception):
    """Base class for all seam carving errors."""


class InvalidDimensions(SeamCarvingError, ValueError):
    """A requested size is zero or larger than the source (we only shrink)."""


class EmptyImage(SeamCarvingError, ValueError):
    """The input image has zero width or zero height."""


class InvariantViolation(SeamCarvingError, RuntimeError):
    """An internal contract was broken, e.g. a seam that does not fit the image."""
