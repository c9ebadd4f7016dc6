"""Tests for Track, TrackSegment and their builders."""

import attrs
import pytest

from gpxbind.domain.entities import Link, Track, TrackSegment, UInt, WayPoint


class TestTrackBuilder:
    """Fluent construction of immutable tracks."""

    def test_builder_sets_every_field(self, track, link):
        assert track.name == "Inn valley loop"
        assert track.comment == "Morning ride"
        assert track.description == "Loop along the river"
        assert track.source == "Garmin Edge"
        assert track.links == (link,)
        assert track.number == UInt(3)
        assert track.type == "cycling"
        assert len(track.segments) == 2

    def test_unset_fields_are_absent(self):
        track = Track.builder().build()

        assert track.name is None
        assert track.number is None
        assert track.links == ()
        assert track.segments == ()

    def test_builder_equals_of_factory(self, link):
        segment = TrackSegment.of([WayPoint(lat=1, lon=2)])
        built = Track.builder().name("T").add_link(link).add_segment(segment).build()
        direct = Track.of(name="T", links=[link], segments=[segment])
        assert built == direct

    def test_add_segment_with_callable(self):
        track = (
            Track.builder()
            .add_segment(lambda s: s.add_point(WayPoint(lat=1, lon=1)).add_point(
                lambda p: p.lat(2).lon(2).name("second")
            ))
            .build()
        )
        assert [p.name for p in track.points()] == [None, "second"]

    def test_add_link_with_callable(self):
        track = Track.builder().add_link(lambda b: b.href("https://a.example").text("A")).build()
        assert track.links == (Link(href="https://a.example", text="A"),)

    def test_replace_then_add_does_not_touch_caller_list(self, link):
        links = [link]
        Track.builder().links(links).add_link(Link(href="https://other")).build()
        assert links == [link]

    def test_builder_reusable_after_build(self, link):
        builder = Track.builder().name("T")
        first = builder.build()
        second = builder.add_link(link).build()

        assert first.links == ()
        assert second.links == (link,)

    def test_add_none_rejected(self):
        with pytest.raises(TypeError):
            Track.builder().add_segment(None)

    def test_negative_number_fails_construction(self):
        with pytest.raises(ValueError):
            Track.builder().number(-3).build()


class TestTrackImmutability:
    def test_mutating_input_list_after_build(self):
        """The entity owns a frozen copy of the segments list."""
        segments = [TrackSegment()]
        track = Track.builder().segments(segments).build()
        segments.append(TrackSegment())
        segments.clear()

        assert track.segments == (TrackSegment(),)

    def test_sequences_are_tuples(self, track):
        assert isinstance(track.links, tuple)
        assert isinstance(track.segments, tuple)
        assert isinstance(track.segments[0].points, tuple)

    def test_attributes_cannot_be_reassigned(self, track):
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            track.name = "changed"

    def test_never_set_equals_empty(self):
        assert Track() == Track(links=[], segments=None)
        assert hash(Track()) == hash(Track(links=[], segments=None))


class TestTrackEquality:
    def test_structural_equality_and_hash(self, link, track_points):
        a = Track(name="T", links=[link], segments=[TrackSegment(track_points)])
        b = Track(name="T", links=(link,), segments=(TrackSegment(list(track_points)),))

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_nested_difference_breaks_equality(self, track_points):
        a = Track(segments=[TrackSegment(track_points)])
        b = Track(segments=[TrackSegment(track_points[:-1])])
        assert a != b

    def test_iteration_over_segments(self, track):
        assert list(track) == list(track.segments)
        assert len(list(track.points())) == 3
