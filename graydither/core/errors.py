"""Exceptions raised by the dithering core."""

from __future__ import annotations


class DitherError(ValueError):
    """Base class for rejected dithering input."""


class InvalidBitDepth(DitherError):
    """Raised when ``bits`` is not an integer in [1, 8]."""


class ShapeMismatch(DitherError):
    """Raised when a pixel buffer does not match its declared dimensions."""
