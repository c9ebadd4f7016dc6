"""Track-related domain entities.

A track is an ordered list of segments, each an ordered list of track points.
"""

from collections.abc import Callable, Iterable, Iterator

from attrs import converters, define, field

from gpxbind.binding import EntityBinding, converted, elements, text

from .base import Entity, EntityBuilder
from .link import LINK, Link
from .shared import freeze, optional_str
from .types import UInt
from .waypoint import TRKPT, WayPoint


@define(frozen=True, slots=True)
class TrackSegment(Entity):
    """Track points which are logically connected in order.

    To represent a single GPS track where reception was lost, or the receiver
    was turned off, start a new segment for each continuous span of data.
    """

    points: tuple[WayPoint, ...] = field(factory=tuple, converter=freeze)

    def __iter__(self) -> Iterator[WayPoint]:
        return iter(self.points)

    class Builder(EntityBuilder["TrackSegment"]):
        def points(self, points: Iterable[WayPoint] | None) -> "TrackSegment.Builder":
            return self._replace("points", points)

        def add_point(
            self, point: WayPoint | Callable[[WayPoint.Builder], object]
        ) -> "TrackSegment.Builder":
            return self._append_built("points", point, WayPoint)


TRKSEG = TrackSegment.bind(
    EntityBinding("trkseg", TrackSegment, [elements("points", TRKPT)])
)


@define(frozen=True, slots=True)
class Track(Entity):
    """Immutable GPX track: an ordered list of points describing a path.

    Sequence fields are always tuples; unset optional fields are None.
    """

    name: str | None = field(default=None, validator=optional_str)
    comment: str | None = field(default=None, validator=optional_str)
    description: str | None = field(default=None, validator=optional_str)
    # Gives the user some idea of reliability and accuracy of the data
    source: str | None = field(default=None, validator=optional_str)
    links: tuple[Link, ...] = field(factory=tuple, converter=freeze)
    number: UInt | None = field(default=None, converter=converters.optional(UInt.of))
    type: str | None = field(default=None, validator=optional_str)
    segments: tuple[TrackSegment, ...] = field(factory=tuple, converter=freeze)

    def __iter__(self) -> Iterator[TrackSegment]:
        return iter(self.segments)

    def points(self) -> Iterator[WayPoint]:
        """All track points across segments, in order."""
        for segment in self.segments:
            yield from segment.points

    class Builder(EntityBuilder["Track"]):
        def name(self, name: str | None) -> "Track.Builder":
            return self._set("name", name)

        def comment(self, comment: str | None) -> "Track.Builder":
            return self._set("comment", comment)

        def description(self, description: str | None) -> "Track.Builder":
            return self._set("description", description)

        def source(self, source: str | None) -> "Track.Builder":
            return self._set("source", source)

        def links(self, links: Iterable[Link] | None) -> "Track.Builder":
            return self._replace("links", links)

        def add_link(self, link: Link | Callable[[Link.Builder], object]) -> "Track.Builder":
            return self._append_built("links", link, Link)

        def number(self, number: UInt | int | None) -> "Track.Builder":
            return self._set("number", number)

        def type(self, type: str | None) -> "Track.Builder":
            return self._set("type", type)

        def segments(self, segments: Iterable[TrackSegment] | None) -> "Track.Builder":
            return self._replace("segments", segments)

        def add_segment(
            self, segment: TrackSegment | Callable[[TrackSegment.Builder], object]
        ) -> "Track.Builder":
            return self._append_built("segments", segment, TrackSegment)


TRK = Track.bind(
    EntityBinding(
        "trk",
        Track,
        [
            text("name"),
            text("comment", tag="cmt"),
            text("description", tag="desc"),
            text("source", tag="src"),
            elements("links", LINK),
            converted("number", UInt.parse),
            text("type"),
            elements("segments", TRKSEG),
        ],
    )
)
