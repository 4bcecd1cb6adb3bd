"""Locate, select and decode document OCR output written to storage.

Provides:
    - resolve_destination: Parse scheme://bucket/prefix into a StorageObjectRef
    - open_storage_client: Scoped Cloud Storage client
    - list_objects / read_object: Listing and reading output objects
    - OutputSelector / FirstListedSelector: Which listed object to decode
    - decode / encode / first_page_text: Service JSON <-> AnnotateFileResponse
"""

from .decoder import decode, encode, first_page_text
from .locator import list_objects, open_storage_client, read_object, resolve_destination
from .selection import FirstListedSelector, OutputSelector

__all__ = [
    "FirstListedSelector",
    "OutputSelector",
    "decode",
    "encode",
    "first_page_text",
    "list_objects",
    "open_storage_client",
    "read_object",
    "resolve_destination",
]
