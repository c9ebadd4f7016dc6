"""Streaming XML tokens: the model, a pull-style source and push-style sinks.

The binding engine never touches XML text directly. It consumes
``StartElement``/``Text``/``EndElement`` tokens from a ``TokenSource`` and
emits the same three kinds into a ``TokenSink``. The concrete source drives an
incremental ``xml.sax`` parser chunk by chunk; the concrete sink renders
through ``xml.sax.saxutils.XMLGenerator``.
"""

from collections import deque
from collections.abc import Iterable, Iterator, Mapping
import io
import re
from typing import IO, Protocol, TypeAlias
import xml.sax
from xml.sax.saxutils import XMLGenerator, escape

from attrs import define, field

from .errors import SinkError, SourceError, StructuralError

DEFAULT_CHUNK_SIZE = 64 * 1024

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(
    "[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


@define(frozen=True, slots=True)
class StartElement:
    """Opening tag with its attributes."""

    name: str
    attributes: Mapping[str, str] = field(factory=dict, hash=False)


@define(frozen=True, slots=True)
class EndElement:
    """Closing tag."""

    name: str


@define(frozen=True, slots=True)
class Text:
    """Character data between tags. Adjacent character events are merged."""

    content: str


Token: TypeAlias = StartElement | EndElement | Text


# -------------------------------------------------------------------------
# TOKEN SOURCE
# -------------------------------------------------------------------------


class _TokenCollector(xml.sax.ContentHandler):
    """SAX handler that queues tokens until the source drains them."""

    def __init__(self) -> None:
        super().__init__()
        self._tokens: deque[Token] = deque()
        self._text: list[str] = []

    def _flush_text(self) -> None:
        if self._text:
            self._tokens.append(Text("".join(self._text)))
            self._text.clear()

    def startElement(self, name, attrs):  # noqa: N802
        self._flush_text()
        self._tokens.append(StartElement(name, dict(attrs.items())))

    def endElement(self, name):  # noqa: N802
        self._flush_text()
        self._tokens.append(EndElement(name))

    def characters(self, content):
        self._text.append(content)

    def drain(self) -> Iterator[Token]:
        while self._tokens:
            yield self._tokens.popleft()


def _sax_tokens(stream: IO, chunk_size: int) -> Iterator[Token]:
    handler = _TokenCollector()
    parser = xml.sax.make_parser()
    parser.setContentHandler(handler)

    try:
        while chunk := stream.read(chunk_size):
            parser.feed(chunk)
            yield from handler.drain()
        parser.close()
    except xml.sax.SAXParseException as e:
        raise SourceError(
            f"malformed XML at line {e.getLineNumber()}, "
            f"column {e.getColumnNumber()}: {e.getMessage()}"
        ) from e

    yield from handler.drain()


class TokenSource:
    """Pull-style token stream with one token of lookahead.

    The source never closes the stream it reads from.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._head: Token | None = None

    @classmethod
    def from_stream(
        cls, stream: IO, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> "TokenSource":
        """Tokenize a binary or text stream incrementally."""
        return cls(_sax_tokens(stream, chunk_size))

    @classmethod
    def from_string(cls, document: str | bytes) -> "TokenSource":
        """Tokenize an in-memory document."""
        stream = (
            io.BytesIO(document) if isinstance(document, bytes) else io.StringIO(document)
        )
        return cls.from_stream(stream)

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at the end."""
        if self._head is None:
            self._head = next(self._tokens, None)
        return self._head

    def next(self) -> Token:
        """Consume and return the next token."""
        token = self.peek()
        if token is None:
            raise StructuralError("unexpected end of document")
        self._head = None
        return token


# -------------------------------------------------------------------------
# TOKEN SINKS
# -------------------------------------------------------------------------


class TokenSink(Protocol):
    """Consumer of emitted tokens."""

    def start(self, name: str, attributes: Mapping[str, str] | None = None) -> None:
        """Open an element."""
        ...

    def text(self, content: str) -> None:
        """Write character data inside the current element."""
        ...

    def end(self, name: str) -> None:
        """Close the current element."""
        ...

    def flush(self) -> None:
        """Push buffered output to the underlying stream."""
        ...

    def close(self) -> None:
        """Flush and refuse further tokens."""
        ...


class ListTokenSink:
    """Sink that records tokens in memory, in emission order."""

    def __init__(self) -> None:
        self.tokens: list[Token] = []
        self._closed = False

    def _record(self, token: Token) -> None:
        if self._closed:
            raise SinkError("write to closed sink")
        self.tokens.append(token)

    def start(self, name: str, attributes: Mapping[str, str] | None = None) -> None:
        self._record(StartElement(name, dict(attributes or {})))

    def text(self, content: str) -> None:
        self._record(Text(content))

    def end(self, name: str) -> None:
        self._record(EndElement(name))

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self._closed = True

    def source(self) -> TokenSource:
        """Replay the recorded tokens."""
        return TokenSource(list(self.tokens))


class XMLTokenSink:
    """Sink that renders tokens as XML text on a binary or text stream.

    Args:
        stream: Destination; never closed by the sink
        encoding: Encoding named in the prolog and used for binary streams
        indent: Spaces per nesting level; 0 writes no whitespace between tags
        prolog: Write the ``<?xml ...?>`` declaration before the first tag
    """

    def __init__(
        self,
        stream: IO,
        encoding: str = "UTF-8",
        indent: int = 0,
        prolog: bool = True,
    ) -> None:
        self._stream = stream
        self._generator = XMLGenerator(stream, encoding, short_empty_elements=True)
        self._indent = indent
        self._prolog = prolog
        self._started = False
        self._closed = False
        # One entry per open element: (name, has child elements)
        self._open: list[list] = []

    def _check_open(self) -> None:
        if self._closed:
            raise SinkError("write to closed sink")

    def _newline(self, depth: int) -> None:
        self._generator.ignorableWhitespace("\n" + " " * (self._indent * depth))

    @staticmethod
    def _check_chars(content: str, where: str) -> None:
        if match := _INVALID_XML_CHARS.search(content):
            raise SinkError(
                f"character {match.group()!r} in {where} cannot be represented in XML"
            )

    def start(self, name: str, attributes: Mapping[str, str] | None = None) -> None:
        self._check_open()
        if not self._started:
            self._started = True
            if self._prolog:
                self._generator.startDocument()
        attributes = dict(attributes or {})
        for key, value in attributes.items():
            self._check_chars(value, f"attribute {key!r} of <{name}>")
        if self._open:
            self._open[-1][1] = True
            if self._indent:
                self._newline(len(self._open))
        # quoteattr already escapes \r, \n and \t in attribute values
        self._generator.startElement(name, attributes)
        self._open.append([name, False])

    def text(self, content: str) -> None:
        self._check_open()
        if not self._open:
            raise SinkError("text outside of the root element")
        self._check_chars(content, f"text of <{self._open[-1][0]}>")
        # Parsers normalise a literal \r to \n, so it goes out as a reference.
        # ignorableWhitespace writes its argument unescaped.
        self._generator.ignorableWhitespace(escape(content, {"\r": "&#13;"}))

    def end(self, name: str) -> None:
        self._check_open()
        if not self._open or self._open[-1][0] != name:
            current = self._open[-1][0] if self._open else None
            raise SinkError(f"cannot close </{name}>, open element is <{current}>")
        _, has_children = self._open.pop()
        if self._indent and has_children:
            self._newline(len(self._open))
        self._generator.endElement(name)
        if not self._open and self._indent:
            self._generator.ignorableWhitespace("\n")

    def flush(self) -> None:
        self._check_open()
        self._stream.flush()

    def close(self) -> None:
        if not self._closed:
            self.flush()
            self._closed = True
