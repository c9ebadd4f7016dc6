"""Binding properties of the Track conformance fixture.

Covers round trip, absence preservation, list order, fail-fast validation
and tolerance of unknown elements.
"""

import pytest

from gpxbind.binding import (
    EndElement,
    ListTokenSink,
    StartElement,
    StructuralError,
    ValidationError,
)
from gpxbind.domain.entities import Link, Track, TrackSegment, WayPoint


class TestRoundTrip:
    def test_full_track(self, track, reparse):
        assert reparse(track) == track

    def test_empty_track(self, reparse):
        assert reparse(Track()) == Track()

    def test_empty_segment_is_kept(self, reparse):
        track = Track(segments=[TrackSegment(), TrackSegment([WayPoint(lat=0, lon=0)])])
        assert reparse(track) == track

    def test_empty_string_stays_present(self, reparse):
        track = Track(name="")
        assert reparse(track).name == ""

    def test_text_with_markup_characters(self, reparse):
        track = Track(description="a < b && c > d")
        assert reparse(track) == track


class TestAbsencePreservation:
    def test_unset_fields_emit_no_elements(self):
        sink = ListTokenSink()
        Track.builder().name("only name").build().write(sink)

        names = [t.name for t in sink.tokens if isinstance(t, StartElement)]
        assert names == ["trk", "name"]

    def test_unset_fields_read_back_as_none(self, reparse):
        track = reparse(Track(name="only name"))

        assert track.comment is None
        assert track.number is None
        assert track.links == ()


class TestListOrder:
    def test_links_keep_order_and_duplicates(self, reparse):
        a, b, c = (Link(href=f"https://{x}.example") for x in "abc")
        track = Track(links=[a, b, c, a])
        assert reparse(track).links == (a, b, c, a)


class TestReading:
    """Reading Track documents from XML text."""

    def test_element_order_follows_declaration(self, track):
        sink = ListTokenSink()
        track.write(sink)
        children = []
        depth = 0
        for token in sink.tokens:
            match token:
                case StartElement(name=name):
                    if depth == 1:
                        children.append(name)
                    depth += 1
                case EndElement():
                    depth -= 1

        assert children == [
            "name", "cmt", "desc", "src", "link", "number", "type", "trkseg", "trkseg",
        ]

    def test_negative_number_fails(self, read_xml):
        with pytest.raises(ValidationError) as info:
            read_xml(Track, "<trk><name>T</name><number>-3</number></trk>")
        assert info.value.text == "-3"
        assert info.value.path == ("trk", "number")

    @pytest.mark.parametrize(
        ("document", "path"),
        [
            ("<trk><number>1_000</number></trk>", ("trk", "number")),
            ("<trk><number>\u0663</number></trk>", ("trk", "number")),
            ("<trk><number>+</number></trk>", ("trk", "number")),
            (
                "<trk><trkseg><trkpt lat='4_5' lon='0'/></trkseg></trk>",
                ("trk", "trkseg", "trkpt"),
            ),
            (
                "<trk><trkseg><trkpt lat='1' lon='2'><ele>1_0.5</ele></trkpt></trkseg></trk>",
                ("trk", "trkseg", "trkpt", "ele"),
            ),
            (
                "<trk><trkseg><trkpt lat='1' lon='2'><ele>1e3</ele></trkpt></trkseg></trk>",
                ("trk", "trkseg", "trkpt", "ele"),
            ),
            (
                "<trk><trkseg><trkpt lat='1' lon='2'><time>2024-05-17</time></trkpt></trkseg></trk>",
                ("trk", "trkseg", "trkpt", "time"),
            ),
            (
                "<trk><trkseg><trkpt lat='1' lon='2'><time>20240517T083000Z</time>"
                "</trkpt></trkseg></trk>",
                ("trk", "trkseg", "trkpt", "time"),
            ),
        ],
    )
    def test_text_outside_lexical_form_fails(self, read_xml, document, path):
        """Numbers and timestamps must use the plain XML Schema notation."""
        with pytest.raises(ValidationError) as info:
            read_xml(Track, document)
        assert info.value.path == path

    def test_invalid_point_coordinate_fails(self, read_xml):
        document = '<trk><trkseg><trkpt lat="91" lon="0"/></trkseg></trk>'
        with pytest.raises(ValidationError) as info:
            read_xml(Track, document)
        assert info.value.path == ("trk", "trkseg", "trkpt")

    def test_unknown_elements_do_not_change_result(self, read_xml):
        plain = "<trk><name>T</name><trkseg><trkpt lat='1' lon='2'/></trkseg></trk>"
        decorated = (
            "<trk><name>T</name><extensions><speed>3</speed></extensions>"
            "<trkseg><trkpt lat='1' lon='2'><course>90</course></trkpt></trkseg>"
            "<color>red</color></trk>"
        )
        assert read_xml(Track, decorated) == read_xml(Track, plain)

    def test_missing_point_coordinate_fails(self, read_xml):
        with pytest.raises(StructuralError, match="missing required attribute 'lon'"):
            read_xml(Track, "<trk><trkseg><trkpt lat='1'/></trkseg></trk>")

    def test_number_with_surrounding_whitespace(self, read_xml):
        assert int(read_xml(Track, "<trk><number> 4 </number></trk>").number) == 4
