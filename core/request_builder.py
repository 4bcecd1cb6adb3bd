"""Build annotation requests and convert them to Vision API messages."""

import logging
from pathlib import Path, PurePosixPath

from google.cloud import vision

from .config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_DOCUMENT_MIME_TYPE,
    DOCUMENT_MIME_TYPES,
    DOCUMENT_SUFFIX_MIME_TYPES,
    MAX_BATCH_SIZE,
)
from .errors import RequestError
from .image_utils import load_image_content
from .types import AnalysisRequest, Feature

logger = logging.getLogger(__name__)


def build_request(
    feature: Feature,
    content: bytes | None = None,
    source_uri: str | None = None,
    mime_type: str | None = None,
) -> AnalysisRequest:
    """Create an AnalysisRequest from exactly one input source.

    Args:
        feature: Analysis type to request.
        content: Raw image bytes.
        source_uri: URI of the image or document in storage.
        mime_type: MIME type of the source (document requests); inferred
            from the URI suffix when omitted.

    Returns:
        A well-formed AnalysisRequest.

    Raises:
        RequestError: If neither or both of content/source_uri are given.
    """
    if content is None and source_uri is None:
        raise RequestError("either content or source_uri is required")
    if content is not None and source_uri is not None:
        raise RequestError("content and source_uri are mutually exclusive")
    if source_uri is not None and not source_uri.strip():
        raise RequestError("source_uri must not be empty")
    return AnalysisRequest(
        feature=Feature(feature),
        content=content,
        source_uri=source_uri,
        mime_type=mime_type,
    )


def request_from_file(image_path: Path, feature: Feature) -> AnalysisRequest:
    """Read a local image and build a request for it."""
    content = load_image_content(Path(image_path))
    logger.debug(f"Loaded {len(content)} bytes from {image_path}")
    return build_request(feature, content=content)


def to_image_request(request: AnalysisRequest) -> vision.AnnotateImageRequest:
    """Convert to the synchronous image annotation message."""
    if request.content is not None:
        image = vision.Image(content=request.content)
    else:
        image = vision.Image(source=vision.ImageSource(image_uri=request.source_uri))
    return vision.AnnotateImageRequest(
        image=image,
        features=[vision.Feature(type_=request.feature.service_type)],
    )


def infer_document_mime_type(source_uri: str) -> str:
    """Guess a document MIME type from the source URI's suffix.

    Raises:
        RequestError: If the suffix names a format the files API cannot read.
    """
    suffix = PurePosixPath(source_uri.split("://", 1)[-1]).suffix.lower()
    if not suffix:
        return DEFAULT_DOCUMENT_MIME_TYPE
    if suffix not in DOCUMENT_SUFFIX_MIME_TYPES:
        supported = ", ".join(DOCUMENT_SUFFIX_MIME_TYPES)
        raise RequestError(
            f"Cannot infer a document MIME type for '{suffix}' files. Supported: {supported}"
        )
    return DOCUMENT_SUFFIX_MIME_TYPES[suffix]


def to_file_request(
    request: AnalysisRequest,
    destination_uri: str,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> vision.AsyncAnnotateFileRequest:
    """Convert to an asynchronous file annotation message.

    Args:
        request: Request whose source_uri points at a PDF/TIFF in storage.
        destination_uri: Storage prefix the service writes JSON output to.
        batch_size: Pages grouped into each output file.

    Returns:
        AsyncAnnotateFileRequest ready for async_batch_annotate_files.

    Raises:
        RequestError: On inline content, an unsupported MIME type or a
            batch size outside 1..MAX_BATCH_SIZE.
    """
    if request.source_uri is None:
        raise RequestError("asynchronous file requests need a source_uri, not inline content")

    mime_type = request.mime_type or infer_document_mime_type(request.source_uri)
    if mime_type not in DOCUMENT_MIME_TYPES:
        supported = ", ".join(DOCUMENT_MIME_TYPES)
        raise RequestError(f"Unsupported MIME type: {mime_type}. Supported: {supported}")

    if not 1 <= batch_size <= MAX_BATCH_SIZE:
        raise RequestError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}")

    input_config = vision.InputConfig(
        gcs_source=vision.GcsSource(uri=request.source_uri),
        mime_type=mime_type,
    )
    output_config = vision.OutputConfig(
        gcs_destination=vision.GcsDestination(uri=destination_uri),
        batch_size=batch_size,
    )
    return vision.AsyncAnnotateFileRequest(
        features=[vision.Feature(type_=request.feature.service_type)],
        input_config=input_config,
        output_config=output_config,
    )
