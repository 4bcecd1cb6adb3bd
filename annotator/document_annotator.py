"""Asynchronous document OCR (PDF/TIFF in Cloud Storage).

Workflow:
1. Resolve the destination URI (fails before any network call)
2. Submit an async_batch_annotate_files job
3. Wait for completion (bounded; timeout is reported, not cancelled)
4. List output objects under the destination prefix and select one
5. Decode the selected JSON and extract the first page's full text
"""

import logging
import sys
from collections.abc import Callable, Iterable, Iterator
from typing import TextIO

from google.cloud import storage

from core.config import DEFAULT_BATCH_SIZE, DEFAULT_WAIT_TIMEOUT
from core.errors import RequestError
from core.jobs import submit_async_job, wait_for_job
from core.request_builder import to_file_request
from core.types import AnalysisRequest, AnalysisResponse, Feature, ObjectMetadata
from outputs import (
    FirstListedSelector,
    OutputSelector,
    decode,
    first_page_text,
    list_objects,
    open_storage_client,
    read_object,
    resolve_destination,
)

from .base import Annotator
from .client import VisionClientMixin

logger = logging.getLogger(__name__)


def _recording(objects: Iterable[ObjectMetadata], names: list[str]) -> Iterator[ObjectMetadata]:
    for meta in objects:
        names.append(meta.name)
        yield meta


class DocumentTextAnnotator(VisionClientMixin, Annotator):
    """Document text OCR through the asynchronous files API.

    The service writes results to storage rather than returning them, so
    this annotator reads them back from the destination prefix.

    Attributes:
        destination_uri: scheme://bucket/prefix the service writes JSON to.
        timeout: Seconds to wait for the job.
        batch_size: Pages grouped into each output file.
        selector: Strategy picking the output object to decode.
    """

    def __init__(
        self,
        destination_uri: str,
        timeout: float = DEFAULT_WAIT_TIMEOUT,
        batch_size: int = DEFAULT_BATCH_SIZE,
        selector: OutputSelector | None = None,
        client_factory=None,
        storage_client_factory: Callable[[], storage.Client] | None = None,
        out: TextIO | None = None,
    ) -> None:
        """Initialize the document annotator.

        Args:
            destination_uri: Storage prefix for the service's output.
            timeout: Seconds to wait for the job to complete.
            batch_size: Pages per output file.
            selector: Output selection strategy (default: first listed).
            client_factory: Optional callable returning an annotator client.
            storage_client_factory: Optional callable returning a storage client.
            out: Stream for progress messages (default: stdout).
        """
        self.destination_uri = destination_uri
        self.timeout = timeout
        self.batch_size = batch_size
        self.selector = selector or FirstListedSelector()
        self.client_factory = client_factory
        self.storage_client_factory = storage_client_factory
        self.out = out

    @property
    def name(self) -> str:
        """Human-readable annotator name."""
        return "Vision document text OCR (async)"

    @property
    def feature(self) -> Feature:
        """Feature requested from the service."""
        return Feature.DOCUMENT_TEXT

    def _print(self, message: str) -> None:
        print(message, file=self.out or sys.stdout)

    def annotate(self, request: AnalysisRequest) -> AnalysisResponse:
        """Run the full OCR workflow for one stored document.

        Args:
            request: DOCUMENT_TEXT request with a source_uri.

        Returns:
            AnalysisResponse with the first page's text, the decoded
            document and the listed output names, or the error reported
            for that page.

        Raises:
            RequestError: For a non-document request or bad options.
            MalformedUriError: If the destination is not scheme://bucket/prefix.
            ServiceError: If submission, listing or reading fails.
            WaitTimeoutError: If the job does not finish within the timeout.
            JobFailedError: If the job finishes with an error.
            NotFoundError: If no output objects are listed.
            ParseError: If the selected output cannot be decoded.
        """
        if request.feature is not Feature.DOCUMENT_TEXT:
            raise RequestError(f"{self.name} cannot handle a {request.feature.value} request")

        ref = resolve_destination(self.destination_uri)
        file_request = to_file_request(request, self.destination_uri, self.batch_size)

        with self.open_client() as client:
            handle = submit_async_job(client, file_request)
            self._print("Waiting for the operation to finish.")
            outcome = wait_for_job(handle, self.timeout)
        outcome.raise_for_state()

        names: list[str] = []
        with open_storage_client(self.storage_client_factory) as storage_client:
            chosen = self.selector.select(_recording(list_objects(storage_client, ref), names), ref)
            self._print("Output files:")
            for name in names:
                self._print(name)
            body = read_object(chosen)

        logger.info(f"Decoding {chosen.name} ({len(body)} bytes)")
        document = decode(body)
        text = first_page_text(document)

        page = document.responses[0]
        if page.error.message:
            return AnalysisResponse(
                feature=Feature.DOCUMENT_TEXT,
                error=page.error.message,
                document=document,
                output_files=names,
            )
        return AnalysisResponse(
            feature=Feature.DOCUMENT_TEXT,
            full_text=text,
            document=document,
            output_files=names,
        )
