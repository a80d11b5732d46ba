"""BT.601 luma extraction from RGBA pixels."""

from __future__ import annotations

import numpy as np

# ITU-R BT.601 weights
R_WEIGHT = 0.299
G_WEIGHT = 0.587
B_WEIGHT = 0.114


def luma(r: int, g: int, b: int, a: int = 255) -> float:
    """Return the alpha-scaled luma of one RGBA pixel, in [0.0, 255.0].

    Fully transparent pixels map to 0.0, fully opaque ones are unaffected.
    """
    return (R_WEIGHT * r + G_WEIGHT * g + B_WEIGHT * b) * a / 255


def luma_array(rgba: np.ndarray) -> np.ndarray:
    """Vectorized :func:`luma` over an (H, W, 4) array.

    Returns a float64 array of shape (H, W).
    """
    px = rgba.astype(np.float64)
    r, g, b, a = px[..., 0], px[..., 1], px[..., 2], px[..., 3]
    return (R_WEIGHT * r + G_WEIGHT * g + B_WEIGHT * b) * a / 255
