"""Type definitions for the Vision client.

Provides enums, dataclasses and TypedDicts for the request/response
structures passed between the annotators, the job waiter and the output
locator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypedDict

from google.cloud import vision

from .errors import JobFailedError, ServiceError, WaitTimeoutError

# ===================================================================
# Requests
# ===================================================================


class Feature(str, Enum):
    """Analysis type requested from the annotation service."""

    LOGO = "logo"
    TEXT = "text"
    IMAGE_PROPERTIES = "image_properties"
    DOCUMENT_TEXT = "document_text"

    @property
    def service_type(self) -> vision.Feature.Type:
        """Matching Feature.Type of the Vision API."""
        return _SERVICE_TYPES[self]


_SERVICE_TYPES = {
    Feature.LOGO: vision.Feature.Type.LOGO_DETECTION,
    Feature.TEXT: vision.Feature.Type.TEXT_DETECTION,
    Feature.IMAGE_PROPERTIES: vision.Feature.Type.IMAGE_PROPERTIES,
    Feature.DOCUMENT_TEXT: vision.Feature.Type.DOCUMENT_TEXT_DETECTION,
}


@dataclass(frozen=True)
class AnalysisRequest:
    """One feature-tagged request.

    Exactly one of content and source_uri is set; use
    core.request_builder.build_request to construct one.

    Attributes:
        feature: Requested analysis type.
        content: Raw image bytes.
        source_uri: Storage or web URI of the image/document.
        mime_type: MIME type of the source (document requests only).
    """

    feature: Feature
    content: bytes | None = field(default=None, repr=False)
    source_uri: str | None = None
    mime_type: str | None = None


# ===================================================================
# Responses
# ===================================================================


class Vertex(TypedDict):
    """Bounding polygon vertex in pixel coordinates."""

    x: int
    y: int


@dataclass
class EntityAnnotation:
    """A labeled entity: a logo or a detected text span."""

    description: str
    score: float = 0.0
    bounding_poly: list[Vertex] = field(default_factory=list)


@dataclass
class ColorInfo:
    """A dominant color and the fraction of the image it covers."""

    red: float
    green: float
    blue: float
    pixel_fraction: float
    score: float = 0.0


@dataclass
class AnalysisResponse:
    """Result of a single analysis request.

    Carries either a service-reported error or the payload for the
    requested feature. Callers must check ``ok`` (or call
    ``raise_for_error``) before reading payload fields.
    """

    feature: Feature
    error: str | None = None
    entities: list[EntityAnnotation] = field(default_factory=list)
    colors: list[ColorInfo] = field(default_factory=list)
    full_text: str = ""
    # Document OCR only: decoded AnnotateFileResponse and the listed output names.
    document: Any = field(default=None, repr=False)
    output_files: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when the service reported no error."""
        return self.error is None

    def raise_for_error(self) -> "AnalysisResponse":
        """Raise ServiceError if the service reported one, else return self."""
        if self.error is not None:
            raise ServiceError(self.error)
        return self


# ===================================================================
# Long-running jobs
# ===================================================================


class JobState(str, Enum):
    """Lifecycle of an asynchronous annotation job."""

    PENDING = "pending"
    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


@dataclass
class AsyncJobHandle:
    """Handle on a submitted long-running operation.

    Attributes:
        name: Operation name assigned by the service.
        operation: SDK operation future used to wait on completion.
    """

    name: str
    operation: Any = field(repr=False)


@dataclass
class JobOutcome:
    """Completion signal for a waited job (output lives in storage)."""

    state: JobState
    error: str | None = None

    def raise_for_state(self) -> "JobOutcome":
        """Raise WaitTimeoutError/JobFailedError unless the job completed."""
        if self.state is JobState.TIMED_OUT:
            raise WaitTimeoutError(self.error or "operation did not complete in time")
        if self.state is JobState.FAILED:
            raise JobFailedError(self.error or "operation failed")
        return self


# ===================================================================
# Storage
# ===================================================================


@dataclass(frozen=True)
class StorageObjectRef:
    """Bucket plus key prefix resolved from a destination URI."""

    bucket: str
    prefix: str
    scheme: str = "gs"

    @property
    def uri(self) -> str:
        """Rebuilt scheme://bucket/prefix form."""
        return f"{self.scheme}://{self.bucket}/{self.prefix}"


@dataclass
class ObjectMetadata:
    """A listed storage object.

    Attributes:
        name: Object key within the bucket.
        size: Size in bytes, if the listing reported one.
        blob: SDK blob used to read the object's contents.
    """

    name: str
    size: int | None = None
    blob: Any = field(default=None, repr=False)
