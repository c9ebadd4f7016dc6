"""Document metadata and bounds."""

from collections.abc import Callable, Iterable
from datetime import datetime

from attrs import define, field, validators

from gpxbind.binding import (
    EntityBinding,
    attribute,
    converted,
    elements,
    nested,
    text,
)

from .base import Entity, EntityBuilder
from .link import LINK, Link
from .shared import ensure_utc, freeze, optional_str
from .types import Latitude, Longitude, format_time, parse_time


@define(frozen=True, slots=True)
class Bounds(Entity):
    """Two lat/lon pairs defining the extent of an element."""

    min_lat: Latitude = field(converter=Latitude.of)
    min_lon: Longitude = field(converter=Longitude.of)
    max_lat: Latitude = field(converter=Latitude.of)
    max_lon: Longitude = field(converter=Longitude.of)

    class Builder(EntityBuilder["Bounds"]):
        def min_lat(self, value: Latitude | float) -> "Bounds.Builder":
            return self._set("min_lat", value)

        def min_lon(self, value: Longitude | float) -> "Bounds.Builder":
            return self._set("min_lon", value)

        def max_lat(self, value: Latitude | float) -> "Bounds.Builder":
            return self._set("max_lat", value)

        def max_lon(self, value: Longitude | float) -> "Bounds.Builder":
            return self._set("max_lon", value)


BOUNDS = Bounds.bind(
    EntityBinding(
        "bounds",
        Bounds,
        [
            attribute("min_lat", Latitude.parse, name="minlat", required=True),
            attribute("min_lon", Longitude.parse, name="minlon", required=True),
            attribute("max_lat", Latitude.parse, name="maxlat", required=True),
            attribute("max_lon", Longitude.parse, name="maxlon", required=True),
        ],
    )
)


@define(frozen=True, slots=True)
class Metadata(Entity):
    """Information about the GPX document itself."""

    name: str | None = field(default=None, validator=optional_str)
    description: str | None = field(default=None, validator=optional_str)
    links: tuple[Link, ...] = field(factory=tuple, converter=freeze)
    time: datetime | None = field(default=None, converter=ensure_utc)
    keywords: str | None = field(default=None, validator=optional_str)
    bounds: Bounds | None = field(
        default=None, validator=validators.optional(validators.instance_of(Bounds))
    )

    class Builder(EntityBuilder["Metadata"]):
        def name(self, name: str | None) -> "Metadata.Builder":
            return self._set("name", name)

        def description(self, description: str | None) -> "Metadata.Builder":
            return self._set("description", description)

        def links(self, links: Iterable[Link] | None) -> "Metadata.Builder":
            return self._replace("links", links)

        def add_link(self, link: Link | Callable[[Link.Builder], object]) -> "Metadata.Builder":
            return self._append_built("links", link, Link)

        def time(self, time: datetime | None) -> "Metadata.Builder":
            return self._set("time", time)

        def keywords(self, keywords: str | None) -> "Metadata.Builder":
            return self._set("keywords", keywords)

        def bounds(self, bounds: Bounds | None) -> "Metadata.Builder":
            return self._set("bounds", bounds)


METADATA = Metadata.bind(
    EntityBinding(
        "metadata",
        Metadata,
        [
            text("name"),
            text("description", tag="desc"),
            elements("links", LINK),
            converted("time", parse_time, format_time),
            text("keywords"),
            nested("bounds", BOUNDS),
        ],
    )
)
