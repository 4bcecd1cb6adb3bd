"""Synchronous image annotation (logos, text, image properties).

Sends a single-request batch_annotate_images call and converts the first
response into an AnalysisResponse.
"""

import logging

from google.api_core import exceptions as api_exceptions
from google.cloud import vision

from core.errors import RequestError, ServiceError
from core.request_builder import to_image_request
from core.types import (
    AnalysisRequest,
    AnalysisResponse,
    ColorInfo,
    EntityAnnotation,
    Feature,
    Vertex,
)

from .base import Annotator
from .client import VisionClientMixin

logger = logging.getLogger(__name__)

# DOCUMENT_TEXT goes through the async files API (DocumentTextAnnotator).
IMAGE_FEATURES = (Feature.LOGO, Feature.TEXT, Feature.IMAGE_PROPERTIES)


def _entities(annotations) -> list[EntityAnnotation]:
    return [
        EntityAnnotation(
            description=a.description,
            score=a.score,
            bounding_poly=[Vertex(x=v.x, y=v.y) for v in a.bounding_poly.vertices],
        )
        for a in annotations
    ]


def _colors(response: vision.AnnotateImageResponse) -> list[ColorInfo]:
    return [
        ColorInfo(
            red=c.color.red,
            green=c.color.green,
            blue=c.color.blue,
            pixel_fraction=c.pixel_fraction,
            score=c.score,
        )
        for c in response.image_properties_annotation.dominant_colors.colors
    ]


def convert_image_response(
    feature: Feature, response: vision.AnnotateImageResponse
) -> AnalysisResponse:
    """Convert one AnnotateImageResponse into an AnalysisResponse.

    A response carrying an error message yields an AnalysisResponse with
    ``error`` set and no payload.
    """
    if response.error.message:
        return AnalysisResponse(feature=feature, error=response.error.message)

    if feature is Feature.LOGO:
        return AnalysisResponse(feature=feature, entities=_entities(response.logo_annotations))
    if feature is Feature.TEXT:
        return AnalysisResponse(
            feature=feature,
            entities=_entities(response.text_annotations),
            full_text=response.full_text_annotation.text,
        )
    if feature is Feature.IMAGE_PROPERTIES:
        return AnalysisResponse(feature=feature, colors=_colors(response))
    return AnalysisResponse(feature=feature, full_text=response.full_text_annotation.text)


class ImageAnnotator(VisionClientMixin, Annotator):
    """Synchronous annotator for a single image feature.

    Attributes:
        image_feature: Feature requested for every image.
    """

    def __init__(self, feature: Feature, client_factory=None) -> None:
        """Initialize the image annotator.

        Args:
            feature: One of LOGO, TEXT or IMAGE_PROPERTIES.
            client_factory: Optional callable returning an annotator client.
        """
        feature = Feature(feature)
        if feature not in IMAGE_FEATURES:
            raise RequestError(f"Unsupported image feature: {feature.value}")
        self.image_feature = feature
        self.client_factory = client_factory

    @property
    def name(self) -> str:
        """Human-readable annotator name."""
        return f"Vision {self.image_feature.value} detection"

    @property
    def feature(self) -> Feature:
        """Feature requested from the service."""
        return self.image_feature

    def annotate(self, request: AnalysisRequest) -> AnalysisResponse:
        """Annotate one image.

        Args:
            request: Request whose feature matches this annotator.

        Returns:
            AnalysisResponse with the payload or the service-reported error.

        Raises:
            RequestError: If the request targets another feature.
            ServiceError: If the call itself fails or returns no response.
        """
        if request.feature is not self.image_feature:
            raise RequestError(
                f"{self.name} cannot handle a {request.feature.value} request"
            )

        with self.open_client() as client:
            try:
                batch = client.batch_annotate_images(requests=[to_image_request(request)])
            except api_exceptions.GoogleAPIError as e:
                raise ServiceError(f"Annotation request failed: {e}") from e

        if not batch.responses:
            raise ServiceError("Annotation service returned no responses")

        result = convert_image_response(self.image_feature, batch.responses[0])
        if result.ok:
            logger.info(
                f"{self.name}: {len(result.entities)} entities, {len(result.colors)} colors"
            )
        else:
            logger.warning(f"{self.name} reported an error: {result.error}")
        return result
