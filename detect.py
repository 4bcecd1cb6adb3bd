#!/usr/bin/env python3
"""
Cloud Vision detection CLI.

Usage:
    python detect.py logos ./logo.png
    python detect.py text ./sign.jpg
    python detect.py properties ./photo.jpg
    python detect.py document gs://source-bucket/doc.pdf gs://dest-bucket/response/

Credentials come from Application Default Credentials
(GOOGLE_APPLICATION_CREDENTIALS or gcloud auth application-default login).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from annotator import AnnotatorRegistry
from core.config import DEFAULT_BATCH_SIZE, DEFAULT_DOCUMENT_MIME_TYPE, DEFAULT_WAIT_TIMEOUT
from core.errors import VisionLabError
from core.request_builder import build_request, request_from_file
from core.types import AnalysisResponse, Feature

logger = logging.getLogger(__name__)


def _format_vertices(vertices) -> str:
    return ", ".join(f"({v['x']}, {v['y']})" for v in vertices)


def _annotate_image(mode: str, file_path: Path, client_factory=None) -> AnalysisResponse:
    annotator = AnnotatorRegistry.create(mode, client_factory=client_factory)
    return annotator.annotate(request_from_file(file_path, annotator.feature))


def _report_error(response: AnalysisResponse, out: TextIO) -> bool:
    if response.ok:
        return False
    out.write(f"Error: {response.error}\n")
    return True


def detect_logos(file_path: Path, out: TextIO, client_factory=None) -> AnalysisResponse:
    """Detect logos in a local image and print their descriptions."""
    response = _annotate_image("logos", file_path, client_factory)
    if _report_error(response, out):
        return response
    for entity in response.entities:
        out.write(f"{entity.description}\n")
    return response


def detect_text(file_path: Path, out: TextIO, client_factory=None) -> AnalysisResponse:
    """Detect text in a local image and print each span with its position."""
    response = _annotate_image("text", file_path, client_factory)
    if _report_error(response, out):
        return response
    for entity in response.entities:
        out.write(f"Text: {entity.description}\n")
        out.write(f"Position : {_format_vertices(entity.bounding_poly)}\n")
    return response


def detect_properties(file_path: Path, out: TextIO, client_factory=None) -> AnalysisResponse:
    """Detect dominant colors in a local image."""
    response = _annotate_image("properties", file_path, client_factory)
    if _report_error(response, out):
        return response
    for color in response.colors:
        out.write(
            f"fraction: {color.pixel_fraction:f}\n"
            f"r: {color.red:f}, g: {color.green:f}, b: {color.blue:f}\n"
        )
    return response


def detect_documents_gcs(
    source_uri: str,
    destination_uri: str,
    out: TextIO,
    timeout: float = DEFAULT_WAIT_TIMEOUT,
    batch_size: int = DEFAULT_BATCH_SIZE,
    mime_type: str | None = None,
    client_factory=None,
    storage_client_factory=None,
) -> AnalysisResponse:
    """OCR a PDF/TIFF in Cloud Storage and print the first page's text.

    Raises:
        VisionLabError: Any failure of the workflow; nothing is printed
            for the text in that case.
    """
    annotator = AnnotatorRegistry.create(
        "document",
        destination_uri=destination_uri,
        timeout=timeout,
        batch_size=batch_size,
        client_factory=client_factory,
        storage_client_factory=storage_client_factory,
        out=out,
    )
    request = build_request(Feature.DOCUMENT_TEXT, source_uri=source_uri, mime_type=mime_type)
    response = annotator.annotate(request)
    if _report_error(response, out):
        return response
    out.write(f"\nText: {response.full_text}\n")
    return response


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Cloud Vision detection and document OCR",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python detect.py logos ./logo.png
  python detect.py document gs://src-bucket/doc.pdf gs://dst-bucket/out/
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("logos", "Detect logos in a local image"),
        ("text", "Detect text in a local image"),
        ("properties", "Detect dominant colors in a local image"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("image", type=Path, help="Path to the local image")

    doc = subparsers.add_parser("document", help="Async OCR of a PDF/TIFF in Cloud Storage")
    doc.add_argument("source", help="Source URI, e.g. gs://bucket/file.pdf")
    doc.add_argument("destination", help="Destination prefix, e.g. gs://bucket/response/")
    doc.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_WAIT_TIMEOUT,
        help=f"Seconds to wait for the job (default: {DEFAULT_WAIT_TIMEOUT})",
    )
    doc.add_argument(
        "--batch-size",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help=f"Pages per output file (default: {DEFAULT_BATCH_SIZE})",
    )
    doc.add_argument(
        "--mime-type",
        default=None,
        help=(
            "Source MIME type (default: inferred from the source suffix, "
            f"else {DEFAULT_DOCUMENT_MIME_TYPE})"
        ),
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the detection CLI."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    out = sys.stdout
    try:
        if args.command == "logos":
            detect_logos(args.image, out)
        elif args.command == "text":
            detect_text(args.image, out)
        elif args.command == "properties":
            detect_properties(args.image, out)
        else:
            detect_documents_gcs(
                args.source,
                args.destination,
                out,
                timeout=args.timeout,
                batch_size=args.batch_size,
                mime_type=args.mime_type,
            )
    except VisionLabError as e:
        logger.debug("Aborted", exc_info=True)
        print(f"Error ({e.kind}): {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
