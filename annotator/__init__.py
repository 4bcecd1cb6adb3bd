"""Annotator module for the Cloud Vision API.

Provides:
    - Annotator: Abstract base class for annotators
    - AnnotatorRegistry: Registration-based factory (Open/Closed Principle)
    - ImageAnnotator: Synchronous logo/text/image-property detection
    - DocumentTextAnnotator: Asynchronous document OCR via Cloud Storage
    - VisionClientMixin: Mixin for scoped Vision client acquisition
"""

from .base import Annotator
from .client import VisionClientMixin
from .document_annotator import DocumentTextAnnotator
from .factory import AnnotatorRegistry
from .image_annotator import ImageAnnotator, convert_image_response

__all__ = [
    "Annotator",
    "AnnotatorRegistry",
    "DocumentTextAnnotator",
    "ImageAnnotator",
    "VisionClientMixin",
    "convert_image_response",
]
