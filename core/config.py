"""Centralized configuration for the Vision client.

This module is the single source of truth for:
- Wait and batching defaults for document OCR
- Supported MIME types and image formats
- Storage URI pattern
- Environment-provided settings
"""

import os
import re

from dotenv import load_dotenv

load_dotenv()

# ===================================================================
# Document OCR defaults
# ===================================================================
DEFAULT_WAIT_TIMEOUT = 180  # seconds

# Pages grouped into each JSON output file written by the service.
DEFAULT_BATCH_SIZE = 2
MAX_BATCH_SIZE = 100

DEFAULT_DOCUMENT_MIME_TYPE = "application/pdf"
DOCUMENT_MIME_TYPES = ("application/pdf", "image/tiff")

# Used when no MIME type is given; a source without a suffix is sent as PDF.
DOCUMENT_SUFFIX_MIME_TYPES = {
    ".pdf": "application/pdf",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
}

# ===================================================================
# Image formats
# ===================================================================
# Sent to the image endpoint as-is; anything else is re-encoded to PNG.
PASSTHROUGH_IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".ico")

# ===================================================================
# Storage URIs
# ===================================================================
# Use with fullmatch; a trailing newline must not be absorbed.
STORAGE_URI_PATTERN = re.compile(
    r"(?P<scheme>[a-z][a-z0-9+.-]*)://(?P<bucket>[^/]+)/(?P<prefix>.+)"
)

# ===================================================================
# Environment
# ===================================================================


def get_api_endpoint() -> str | None:
    """Regional Vision endpoint, e.g. 'eu-vision.googleapis.com'."""
    return os.getenv("VISION_API_ENDPOINT") or None


def get_storage_project() -> str | None:
    """Project used for the storage client (falls back to ADC's project)."""
    return os.getenv("GOOGLE_CLOUD_PROJECT") or None
