"""Save dithered rasters to disk with Pillow."""

from __future__ import annotations

from pathlib import Path

from graydither.core.image import RasterImage

# Suffix -> Pillow format name
SUPPORTED_FORMATS = {
    ".png": "PNG",
    ".bmp": "BMP",
    ".gif": "GIF",
    ".tif": "TIFF",
    ".tiff": "TIFF",
    ".webp": "WEBP",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
}

# Encoders without an alpha channel get the RGB image; output is always opaque
_NO_ALPHA = {"BMP", "JPEG", "GIF"}


def save_image(image: RasterImage, output_path: Path) -> None:
    """Save ``image`` in the format implied by the output file extension."""
    suffix = output_path.suffix.lower()
    fmt = SUPPORTED_FORMATS.get(suffix)
    if fmt is None:
        raise ValueError(f"Unsupported output format: {suffix}")
    if image.is_empty:
        raise ValueError("Cannot save an empty image")

    img = image.to_pil()
    if fmt in _NO_ALPHA:
        img = img.convert("RGB")
    if fmt == "WEBP":
        img.save(str(output_path), format=fmt, lossless=True)
    else:
        img.save(str(output_path), format=fmt)
