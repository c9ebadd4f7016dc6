"""Tests for the token source and sinks."""

import io

import pytest

from gpxbind.binding import (
    EndElement,
    ListTokenSink,
    SinkError,
    SourceError,
    StartElement,
    StructuralError,
    Text,
    TokenSource,
    XMLTokenSink,
)


def _drain(source: TokenSource) -> list:
    tokens = []
    while source.peek() is not None:
        tokens.append(source.next())
    return tokens


class TestTokenSource:
    """Tokenizing XML text."""

    def test_tokens_in_document_order(self):
        source = TokenSource.from_string('<a x="1"><b>hi</b><c/></a>')

        assert _drain(source) == [
            StartElement("a", {"x": "1"}),
            StartElement("b"),
            Text("hi"),
            EndElement("b"),
            StartElement("c"),
            EndElement("c"),
            EndElement("a"),
        ]

    def test_adjacent_character_data_is_merged(self):
        source = TokenSource.from_string("<a>fish &amp; chips</a>")
        assert _drain(source)[1] == Text("fish & chips")

    def test_small_chunks_produce_same_tokens(self):
        document = b"<a><name>Long enough to be split</name></a>"
        whole = _drain(TokenSource.from_stream(io.BytesIO(document)))
        chunked = _drain(TokenSource.from_stream(io.BytesIO(document), chunk_size=3))
        assert chunked == whole

    def test_peek_does_not_consume(self):
        source = TokenSource([StartElement("a"), EndElement("a")])
        assert source.peek() == StartElement("a")
        assert source.next() == StartElement("a")
        assert source.next() == EndElement("a")
        assert source.peek() is None

    def test_next_past_end_is_structural_error(self):
        source = TokenSource([])
        with pytest.raises(StructuralError, match="unexpected end"):
            source.next()

    def test_malformed_xml_is_source_error(self):
        source = TokenSource.from_string("<a><b></a>")
        with pytest.raises(SourceError, match="malformed XML"):
            _drain(source)

    def test_bytes_input(self):
        source = TokenSource.from_string("<a>ü</a>".encode())
        assert _drain(source)[1] == Text("ü")


class TestListTokenSink:
    def test_records_and_replays(self):
        sink = ListTokenSink()
        sink.start("a", {"k": "v"})
        sink.text("x")
        sink.end("a")

        assert sink.tokens == [StartElement("a", {"k": "v"}), Text("x"), EndElement("a")]
        assert _drain(sink.source()) == sink.tokens

    def test_write_after_close_fails(self):
        sink = ListTokenSink()
        sink.close()
        with pytest.raises(SinkError):
            sink.start("a")


class TestXMLTokenSink:
    """Rendering tokens as XML."""

    def test_compact_output(self):
        buffer = io.StringIO()
        sink = XMLTokenSink(buffer, prolog=False)
        sink.start("a", {"x": "1"})
        sink.start("b")
        sink.text("<&>")
        sink.end("b")
        sink.start("c")
        sink.end("c")
        sink.end("a")
        sink.close()

        assert buffer.getvalue() == '<a x="1"><b>&lt;&amp;&gt;</b><c/></a>'

    def test_indented_output_with_prolog(self):
        buffer = io.StringIO()
        sink = XMLTokenSink(buffer, indent=2)
        sink.start("a")
        sink.start("b")
        sink.text("t")
        sink.end("b")
        sink.end("a")

        assert buffer.getvalue() == (
            '<?xml version="1.0" encoding="UTF-8"?>\n<a>\n  <b>t</b>\n</a>\n'
        )

    def test_binary_stream(self):
        buffer = io.BytesIO()
        sink = XMLTokenSink(buffer, prolog=False)
        sink.start("a")
        sink.text("ü")
        sink.end("a")
        sink.flush()

        assert buffer.getvalue() == "<a>ü</a>".encode()

    def test_mismatched_end_fails(self):
        sink = XMLTokenSink(io.StringIO())
        sink.start("a")
        with pytest.raises(SinkError, match="cannot close"):
            sink.end("b")

    def test_write_after_close_fails(self):
        sink = XMLTokenSink(io.StringIO())
        sink.close()
        with pytest.raises(SinkError):
            sink.start("a")

    def test_close_leaves_stream_open(self):
        buffer = io.StringIO()
        XMLTokenSink(buffer).close()
        assert not buffer.closed

    def test_carriage_return_is_written_as_reference(self):
        """A literal CR would come back as LF after parsing."""
        buffer = io.StringIO()
        sink = XMLTokenSink(buffer, prolog=False)
        sink.start("a", {"k": "x\ry"})
        sink.text("1\r\n2\r3")
        sink.end("a")

        assert buffer.getvalue() == '<a k="x&#13;y">1&#13;\n2&#13;3</a>'
        tokens = _drain(TokenSource.from_string(buffer.getvalue()))
        assert tokens[0].attributes == {"k": "x\ry"}
        assert tokens[1] == Text("1\r\n2\r3")

    @pytest.mark.parametrize("content", ["a\x01b", "\x00", "\x1f", "\ufffe", "\ud800"])
    def test_characters_outside_xml_rejected_in_text(self, content):
        sink = XMLTokenSink(io.StringIO())
        sink.start("a")
        with pytest.raises(SinkError, match="cannot be represented in XML"):
            sink.text(content)

    def test_characters_outside_xml_rejected_in_attributes(self):
        sink = XMLTokenSink(io.StringIO())
        with pytest.raises(SinkError, match="attribute 'k' of <a>"):
            sink.start("a", {"k": "\x07"})

    def test_tab_and_newline_are_allowed(self):
        buffer = io.StringIO()
        sink = XMLTokenSink(buffer, prolog=False)
        sink.start("a")
        sink.text("x\ty\nz")
        sink.end("a")
        assert buffer.getvalue() == "<a>x\ty\nz</a>"
