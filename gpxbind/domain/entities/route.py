"""Route entity: an ordered list of route points leading to a destination."""

from collections.abc import Callable, Iterable, Iterator

from attrs import converters, define, field

from gpxbind.binding import EntityBinding, converted, elements, text

from .base import Entity, EntityBuilder
from .link import LINK, Link
from .shared import freeze, optional_str
from .types import UInt
from .waypoint import RTEPT, WayPoint


@define(frozen=True, slots=True)
class Route(Entity):
    """Immutable GPX route."""

    name: str | None = field(default=None, validator=optional_str)
    comment: str | None = field(default=None, validator=optional_str)
    description: str | None = field(default=None, validator=optional_str)
    source: str | None = field(default=None, validator=optional_str)
    links: tuple[Link, ...] = field(factory=tuple, converter=freeze)
    number: UInt | None = field(default=None, converter=converters.optional(UInt.of))
    type: str | None = field(default=None, validator=optional_str)
    points: tuple[WayPoint, ...] = field(factory=tuple, converter=freeze)

    def __iter__(self) -> Iterator[WayPoint]:
        return iter(self.points)

    class Builder(EntityBuilder["Route"]):
        def name(self, name: str | None) -> "Route.Builder":
            return self._set("name", name)

        def comment(self, comment: str | None) -> "Route.Builder":
            return self._set("comment", comment)

        def description(self, description: str | None) -> "Route.Builder":
            return self._set("description", description)

        def source(self, source: str | None) -> "Route.Builder":
            return self._set("source", source)

        def links(self, links: Iterable[Link] | None) -> "Route.Builder":
            return self._replace("links", links)

        def add_link(self, link: Link | Callable[[Link.Builder], object]) -> "Route.Builder":
            return self._append_built("links", link, Link)

        def number(self, number: UInt | int | None) -> "Route.Builder":
            return self._set("number", number)

        def type(self, type: str | None) -> "Route.Builder":
            return self._set("type", type)

        def points(self, points: Iterable[WayPoint] | None) -> "Route.Builder":
            return self._replace("points", points)

        def add_point(
            self, point: WayPoint | Callable[[WayPoint.Builder], object]
        ) -> "Route.Builder":
            return self._append_built("points", point, WayPoint)


RTE = Route.bind(
    EntityBinding(
        "rte",
        Route,
        [
            text("name"),
            text("comment", tag="cmt"),
            text("description", tag="desc"),
            text("source", tag="src"),
            elements("links", LINK),
            converted("number", UInt.parse),
            text("type"),
            elements("points", RTEPT),
        ],
    )
)
