"""Raw RGBA raster container shared by the dithering core and its adapters."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from graydither.core.errors import ShapeMismatch

CHANNELS = 4  # RGBA


@dataclass(frozen=True)
class RasterImage:
    """An immutable RGBA image, 8 bits per channel, row-major, unpadded."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ShapeMismatch(
                f"Image dimensions must be non-negative, got {self.width}x{self.height}"
            )
        # Accept bytearray/memoryview but keep the stored buffer immutable
        object.__setattr__(self, "pixels", bytes(self.pixels))
        expected = self.width * self.height * CHANNELS
        if len(self.pixels) != expected:
            raise ShapeMismatch(
                f"Pixel buffer has {len(self.pixels)} bytes, expected {expected} "
                f"for a {self.width}x{self.height} RGBA image"
            )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the (r, g, b, a) tuple at column ``x``, row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        i = (y * self.width + x) * CHANNELS
        r, g, b, a = self.pixels[i : i + CHANNELS]
        return r, g, b, a

    def to_array(self) -> np.ndarray:
        """Return a writable (H, W, 4) uint8 copy of the pixel buffer."""
        return (
            np.frombuffer(self.pixels, dtype=np.uint8)
            .reshape(self.height, self.width, CHANNELS)
            .copy()
        )

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "RasterImage":
        """Build an image from an (H, W, 4) uint8 array."""
        if rgba.ndim != 3 or rgba.shape[2] != CHANNELS:
            raise ShapeMismatch(f"Expected an (H, W, 4) array, got shape {rgba.shape}")
        if rgba.dtype != np.uint8:
            raise ShapeMismatch(f"Expected a uint8 array, got {rgba.dtype}")
        height, width = rgba.shape[:2]
        return cls(width=width, height=height, pixels=np.ascontiguousarray(rgba).tobytes())

    @classmethod
    def from_pil(cls, img: Image.Image) -> "RasterImage":
        """Build an image from any Pillow image, converting it to RGBA."""
        rgba = img.convert("RGBA")
        return cls(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())

    def to_pil(self) -> Image.Image:
        """Return the image as a Pillow ``RGBA`` image."""
        return Image.frombytes("RGBA", (self.width, self.height), self.pixels)
