"""Image loading from local files or HTTP(S) URLs.

Decoding is done by Pillow; the result is always an RGBA ``RasterImage``.
Animated inputs contribute their first frame only.
"""

from __future__ import annotations

import shutil
import tempfile
import urllib.error
import urllib.request
from pathlib import Path
from urllib.parse import urlparse

from PIL import Image, UnidentifiedImageError

from graydither.core.image import RasterImage

SUPPORTED_FORMATS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp")


def detect_format(path: Path) -> str:
    """Detect image format from file extension."""
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported format: {suffix}")
    if suffix == ".jpeg":
        return "jpg"
    if suffix == ".tiff":
        return "tif"
    return suffix.lstrip(".")


def is_url(path: str) -> bool:
    """Check if the input looks like an HTTP(S) URL."""
    parsed = urlparse(str(path))
    return parsed.scheme in ("http", "https")


def _guess_extension_from_url(url: str) -> str:
    suffix = Path(urlparse(url).path).suffix.lower()
    if suffix in SUPPORTED_FORMATS:
        return suffix
    return ".png"


DOWNLOAD_TIMEOUT = 30  # seconds


def download_image(url: str) -> Path:
    """Fetch ``url`` into a temporary file and return its path.

    The caller owns the file. Network failures and empty responses raise
    ``ValueError``; no file is left behind in either case.
    """
    req = urllib.request.Request(url, headers={"User-Agent": "graydither/0.1"})
    fd, name = tempfile.mkstemp(suffix=_guess_extension_from_url(url))
    tmp_path = Path(name)
    try:
        with open(fd, "wb") as out, urllib.request.urlopen(
            req, timeout=DOWNLOAD_TIMEOUT
        ) as resp:
            shutil.copyfileobj(resp, out)
        if tmp_path.stat().st_size == 0:
            raise ValueError(f"Downloaded file is empty: {url}")
    except urllib.error.URLError as e:
        tmp_path.unlink(missing_ok=True)
        raise ValueError(f"Failed to download {url}: {e}") from e
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
    return tmp_path


def load_image(path: Path) -> RasterImage:
    """Decode a local image file into an RGBA raster."""
    try:
        with Image.open(path) as img:
            img.seek(0)
            return RasterImage.from_pil(img)
    except UnidentifiedImageError as e:
        raise ValueError(f"Cannot decode image: {path}") from e


def open_image(path: str | Path) -> RasterImage:
    """Open an image file or URL and return its pixels.

    URLs are downloaded to a temporary file first, which is removed once
    decoded.
    """
    path_str = str(path)
    if is_url(path_str):
        local_path = download_image(path_str)
        try:
            return load_image(local_path)
        finally:
            local_path.unlink(missing_ok=True)

    local_path = Path(path_str)
    if not local_path.exists():
        raise FileNotFoundError(f"File not found: {local_path}")
    detect_format(local_path)
    return load_image(local_path)
