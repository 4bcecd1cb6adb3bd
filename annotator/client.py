"""Vision API client utilities.

Provides a mixin for scoped ImageAnnotatorClient acquisition, so every
annotator opens a connection for one call and releases it afterwards.
"""

import contextlib
import logging
from collections.abc import Callable, Iterator

from google.api_core.client_options import ClientOptions
from google.auth import exceptions as auth_exceptions
from google.cloud import vision

from core.config import get_api_endpoint
from core.errors import ServiceError

logger = logging.getLogger(__name__)


def create_client() -> vision.ImageAnnotatorClient:
    """Create a client using Application Default Credentials.

    Honors VISION_API_ENDPOINT for regional endpoints.
    """
    endpoint = get_api_endpoint()
    client_options = ClientOptions(api_endpoint=endpoint) if endpoint else None
    return vision.ImageAnnotatorClient(client_options=client_options)


class VisionClientMixin:
    """Mixin providing scoped access to an ImageAnnotatorClient.

    Subclasses open a client per call with ``with self.open_client()``.
    Tests inject ``client_factory`` to avoid network access.

    Example:
        class MyAnnotator(Annotator, VisionClientMixin):
            def annotate(self, request):
                with self.open_client() as client:
                    return client.batch_annotate_images(...)
    """

    client_factory: Callable[[], vision.ImageAnnotatorClient] | None = None

    @contextlib.contextmanager
    def open_client(self) -> Iterator[vision.ImageAnnotatorClient]:
        """Yield a client whose transport is closed on exit, even on failure.

        Raises:
            ServiceError: If credentials cannot be resolved.
        """
        try:
            client = (self.client_factory or create_client)()
        except auth_exceptions.GoogleAuthError as e:
            raise ServiceError(f"Could not create Vision client: {e}") from e
        try:
            yield client
        finally:
            client.transport.close()
            logger.debug("Closed Vision client transport")
