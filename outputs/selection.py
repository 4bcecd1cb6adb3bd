"""Strategies for choosing which listed output object to decode."""

import logging
from collections.abc import Iterable
from typing import Protocol

from core.errors import NotFoundError
from core.types import ObjectMetadata, StorageObjectRef

logger = logging.getLogger(__name__)


class OutputSelector(Protocol):
    """Pick one object out of a destination listing."""

    def select(self, objects: Iterable[ObjectMetadata], ref: StorageObjectRef) -> ObjectMetadata:
        """Return the object to decode or raise NotFoundError."""
        ...


class FirstListedSelector:
    """Select the first object in listing order.

    Only valid for the small-batch document workflow: with batch size 2 the
    first output file holds the first two pages of the input, which is all
    the workflow prints. The rest of the listing is still consumed so the
    caller sees every output name.
    """

    def select(self, objects: Iterable[ObjectMetadata], ref: StorageObjectRef) -> ObjectMetadata:
        """Return the first listed object.

        Raises:
            NotFoundError: If nothing is listed under the prefix.
        """
        first: ObjectMetadata | None = None
        for meta in objects:
            logger.info(f"Output file: {meta.name}")
            if first is None:
                first = meta

        if first is None:
            raise NotFoundError(f"No output objects found under {ref.uri}")
        return first
