"""GPX document framing: XML prolog, root element and default namespace.

The entity bindings only know about elements. This module adds what a file
needs around them and owns the streams it opens from a path. Streams passed
in by the caller are read from or written to, never closed.
"""

import io
from pathlib import Path
from typing import IO

from gpxbind.binding import (
    GPXError,
    StartElement,
    StructuralError,
    TokenSource,
    XMLTokenSink,
)
from gpxbind.config import get_logger, resilient_operation, settings
from gpxbind.domain.entities import GPX

logger = get_logger(__name__)


def _read_document(tokens: TokenSource) -> GPX:
    root = tokens.peek()
    if not isinstance(root, StartElement) or root.name != "gpx":
        found = root.name if isinstance(root, StartElement) else root
        raise StructuralError(f"expected <gpx> root element, found {found!r}")

    namespace = root.attributes.get("xmlns")
    if namespace is not None and namespace != settings.xml.namespace:
        logger.warning(f"Reading document with foreign namespace {namespace!r}")

    gpx = GPX.reader().read(tokens)
    logger.debug(
        f"Read GPX document: {len(gpx.waypoints)} waypoints, "
        f"{len(gpx.routes)} routes, {len(gpx.tracks)} tracks"
    )
    return gpx


def _write_document(gpx: GPX, stream: IO, indent: int | None) -> None:
    sink = XMLTokenSink(
        stream,
        encoding=settings.xml.encoding,
        indent=settings.xml.indent if indent is None else indent,
    )
    GPX.writer().write(sink, gpx, {"xmlns": settings.xml.namespace})
    sink.close()
    logger.debug(
        f"Wrote GPX document: {len(gpx.waypoints)} waypoints, "
        f"{len(gpx.routes)} routes, {len(gpx.tracks)} tracks"
    )


def parse_gpx(document: str | bytes) -> GPX:
    """Parse an in-memory GPX document."""
    return _read_document(TokenSource.from_string(document))


@resilient_operation("read_gpx", expected=(GPXError,))
def read_gpx(source: str | Path | IO) -> GPX:
    """Read a GPX document from a path or an open stream."""
    if isinstance(source, str | Path):
        with open(source, "rb") as stream:
            return _read_document(
                TokenSource.from_stream(stream, settings.xml.chunk_size)
            )
    return _read_document(TokenSource.from_stream(source, settings.xml.chunk_size))


def to_xml(gpx: GPX, indent: int | None = None) -> str:
    """Render a document as XML text."""
    buffer = io.StringIO()
    _write_document(gpx, buffer, indent)
    return buffer.getvalue()


@resilient_operation("write_gpx", expected=(GPXError,))
def write_gpx(gpx: GPX, target: str | Path | IO, indent: int | None = None) -> None:
    """Write a document to a path or an open binary/text stream."""
    if isinstance(target, str | Path):
        with open(target, "wb") as stream:
            _write_document(gpx, stream, indent)
        return
    _write_document(gpx, target, indent)
