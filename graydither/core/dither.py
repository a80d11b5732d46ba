"""Floyd-Steinberg error diffusion dithering to a few gray levels."""

from __future__ import annotations

import numpy as np

from graydither.core.image import CHANNELS, RasterImage
from graydither.core.luma import luma_array
from graydither.core.quantize import DEFAULT_BITS, quantizer_for, validate_bits


def floyd_steinberg(gray: np.ndarray, bits: int = DEFAULT_BITS) -> np.ndarray:
    """Apply Floyd-Steinberg dithering to a luma buffer.

    Args:
        gray: 2D float array of luma values in [0.0, 255.0].
        bits: output bit depth, 1 (black/white) to 8.

    Returns:
        2D uint8 array where every value is one of the ``2**bits`` levels.
    """
    quantize = quantizer_for(validate_bits(bits))
    # Error must accumulate at full precision, never truncated per step
    img = gray.astype(np.float64).copy()
    h, w = img.shape

    for y in range(h):
        for x in range(w):
            old = img[y, x]
            new = quantize(old)
            img[y, x] = new
            err = old - new

            if x + 1 < w:
                img[y, x + 1] += err * 7 / 16
            if y + 1 < h:
                if x - 1 >= 0:
                    img[y + 1, x - 1] += err * 3 / 16
                img[y + 1, x] += err * 5 / 16
                if x + 1 < w:
                    img[y + 1, x + 1] += err * 1 / 16

    return img.astype(np.uint8)


def _to_rgba(levels: np.ndarray) -> np.ndarray:
    """Expand an (H, W) level buffer to opaque gray (H, W, 4) pixels."""
    h, w = levels.shape
    out = np.empty((h, w, CHANNELS), dtype=np.uint8)
    out[..., :3] = levels[..., np.newaxis]
    out[..., 3] = 255
    return out


def dither(image: RasterImage, bits: int = DEFAULT_BITS) -> RasterImage:
    """Dither an RGBA image to ``2**bits`` gray levels.

    Input alpha scales luma (transparent pixels go black) and is not carried
    over: every output pixel is opaque.

    Raises:
        InvalidBitDepth: if ``bits`` is not an integer in [1, 8].
    """
    bits = validate_bits(bits)
    if image.is_empty:
        return RasterImage(width=image.width, height=image.height, pixels=b"")

    gray = luma_array(image.to_array())
    levels = floyd_steinberg(gray, bits)
    return RasterImage.from_array(_to_rgba(levels))
