"""Decode the service's JSON output into AnnotateFileResponse messages.

The output schema (responses -> fullTextAnnotation -> pages -> blocks ->
paragraphs -> words -> symbols, with confidence and bounding boxes) is
owned by the Vision API; parsing is strict so that a schema mismatch
surfaces as ParseError.
"""

from google.cloud import vision
from google.protobuf import json_format

from core.errors import ParseError


def decode(json_bytes: bytes | str) -> vision.AnnotateFileResponse:
    """Parse an output file into an AnnotateFileResponse.

    Raises:
        ParseError: On malformed JSON, bad encoding or unknown fields.
    """
    try:
        payload = json_bytes.decode("utf-8") if isinstance(json_bytes, bytes) else json_bytes
        return vision.AnnotateFileResponse.from_json(payload)
    except UnicodeDecodeError as e:
        raise ParseError(f"Output is not UTF-8: {e}") from e
    except json_format.ParseError as e:
        raise ParseError(f"Output does not match AnnotateFileResponse: {e}") from e


def encode(response: vision.AnnotateFileResponse) -> str:
    """Serialize to the service's JSON form (camelCase field names)."""
    return vision.AnnotateFileResponse.to_json(response)


def first_page_text(response: vision.AnnotateFileResponse) -> str:
    """Full text of the first page in the file response.

    Raises:
        ParseError: If the file response holds no page responses.
    """
    if not response.responses:
        raise ParseError("Output contains no page responses")
    return response.responses[0].full_text_annotation.text
