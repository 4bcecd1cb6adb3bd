"""Image utilities for annotation requests."""

import io
from pathlib import Path

from PIL import Image as PILImage

from .config import PASSTHROUGH_IMAGE_SUFFIXES

# Disable decompression bomb check once, globally
PILImage.MAX_IMAGE_PIXELS = None


def load_as_png_bytes(image_path: Path) -> bytes:
    """Convert any image to PNG bytes for API submission.

    Handles:
    - TIFF files (not accepted by the image endpoint)
    - RGBA/LA/P mode images (converted to RGB)
    """
    with PILImage.open(image_path) as img:
        if img.mode in ("RGBA", "LA", "P"):
            img = img.convert("RGB")
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()


def load_image_content(image_path: Path) -> bytes:
    """Read image bytes, re-encoding to PNG when the format is not accepted as-is."""
    image_path = Path(image_path)
    if image_path.suffix.lower() in PASSTHROUGH_IMAGE_SUFFIXES:
        return image_path.read_bytes()
    return load_as_png_bytes(image_path)
