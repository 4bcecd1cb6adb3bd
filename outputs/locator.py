"""Resolve destination URIs and list/read output objects in Cloud Storage."""

import contextlib
import logging
from collections.abc import Callable, Iterator

from google.api_core import exceptions as api_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import storage

from core.config import STORAGE_URI_PATTERN, get_storage_project
from core.errors import MalformedUriError, ServiceError
from core.types import ObjectMetadata, StorageObjectRef

logger = logging.getLogger(__name__)


def resolve_destination(uri: str) -> StorageObjectRef:
    """Split a scheme://bucket/prefix URI into bucket and prefix.

    The bucket is everything up to the first '/' after the scheme; the
    rest is the prefix.

    Raises:
        MalformedUriError: If the URI does not have that shape.
    """
    match = STORAGE_URI_PATTERN.fullmatch(uri or "")
    if match is None:
        raise MalformedUriError(f"Destination does not match scheme://bucket/prefix: {uri!r}")
    return StorageObjectRef(
        bucket=match.group("bucket"),
        prefix=match.group("prefix"),
        scheme=match.group("scheme"),
    )


def _default_storage_client() -> storage.Client:
    return storage.Client(project=get_storage_project())


@contextlib.contextmanager
def open_storage_client(
    client_factory: Callable[[], storage.Client] | None = None,
) -> Iterator[storage.Client]:
    """Yield a storage client that is closed on exit, even on failure.

    Raises:
        ServiceError: If credentials cannot be resolved.
    """
    try:
        client = (client_factory or _default_storage_client)()
    except auth_exceptions.GoogleAuthError as e:
        raise ServiceError(f"Could not create storage client: {e}") from e
    try:
        yield client
    finally:
        client.close()


def list_objects(client: storage.Client, ref: StorageObjectRef) -> Iterator[ObjectMetadata]:
    """Lazily list objects under ref.prefix in storage listing order.

    Raises:
        ServiceError: If the listing request fails.
    """
    try:
        for blob in client.list_blobs(ref.bucket, prefix=ref.prefix):
            yield ObjectMetadata(name=blob.name, size=blob.size, blob=blob)
    except api_exceptions.GoogleAPIError as e:
        raise ServiceError(f"Failed to list {ref.uri}: {e}") from e


def read_object(meta: ObjectMetadata) -> bytes:
    """Download an object's full contents (output files are small JSON).

    Raises:
        ServiceError: If the download fails.
    """
    try:
        return meta.blob.download_as_bytes()
    except api_exceptions.GoogleAPIError as e:
        raise ServiceError(f"Failed to read {meta.name}: {e}") from e
