"""Waypoint, route point and track point entity.

GPX uses the same point type under three element names: ``wpt`` for
standalone waypoints, ``rtept`` inside routes and ``trkpt`` inside track
segments.
"""

from collections.abc import Callable, Iterable
from datetime import datetime

from attrs import converters, define, field

from gpxbind.binding import EntityBinding, attribute, converted, elements, text

from .base import Entity, EntityBuilder
from .link import LINK, Link
from .shared import ensure_utc, freeze, optional_str
from .types import (
    Fix,
    Latitude,
    Longitude,
    UInt,
    format_decimal,
    format_time,
    parse_decimal,
    parse_time,
)

_optional_float = converters.optional(float)


@define(frozen=True, slots=True)
class WayPoint(Entity):
    """A geographic point with optional position metadata."""

    lat: Latitude = field(converter=Latitude.of)
    lon: Longitude = field(converter=Longitude.of)
    elevation: float | None = field(default=None, converter=_optional_float)
    time: datetime | None = field(default=None, converter=ensure_utc)
    name: str | None = field(default=None, validator=optional_str)
    comment: str | None = field(default=None, validator=optional_str)
    description: str | None = field(default=None, validator=optional_str)
    source: str | None = field(default=None, validator=optional_str)
    links: tuple[Link, ...] = field(factory=tuple, converter=freeze)
    symbol: str | None = field(default=None, validator=optional_str)
    type: str | None = field(default=None, validator=optional_str)
    fix: Fix | None = field(default=None, converter=converters.optional(Fix))
    sat: UInt | None = field(default=None, converter=converters.optional(UInt.of))
    hdop: float | None = field(default=None, converter=_optional_float)
    vdop: float | None = field(default=None, converter=_optional_float)
    pdop: float | None = field(default=None, converter=_optional_float)

    @classmethod
    def reader(cls, name: str = "wpt"):
        """Reader for points under ``name`` (wpt, rtept or trkpt)."""
        return _binding_for(name).reader

    @classmethod
    def writer(cls, name: str = "wpt"):
        return _binding_for(name).writer

    def write(self, sink, name: str = "wpt") -> None:
        _binding_for(name).writer.write(sink, self)

    class Builder(EntityBuilder["WayPoint"]):
        def lat(self, lat: Latitude | float) -> "WayPoint.Builder":
            return self._set("lat", lat)

        def lon(self, lon: Longitude | float) -> "WayPoint.Builder":
            return self._set("lon", lon)

        def elevation(self, elevation: float | None) -> "WayPoint.Builder":
            return self._set("elevation", elevation)

        def time(self, time: datetime | None) -> "WayPoint.Builder":
            return self._set("time", time)

        def name(self, name: str | None) -> "WayPoint.Builder":
            return self._set("name", name)

        def comment(self, comment: str | None) -> "WayPoint.Builder":
            return self._set("comment", comment)

        def description(self, description: str | None) -> "WayPoint.Builder":
            return self._set("description", description)

        def source(self, source: str | None) -> "WayPoint.Builder":
            return self._set("source", source)

        def links(self, links: Iterable[Link] | None) -> "WayPoint.Builder":
            return self._replace("links", links)

        def add_link(self, link: Link | Callable[[Link.Builder], object]) -> "WayPoint.Builder":
            return self._append_built("links", link, Link)

        def symbol(self, symbol: str | None) -> "WayPoint.Builder":
            return self._set("symbol", symbol)

        def type(self, type: str | None) -> "WayPoint.Builder":
            return self._set("type", type)

        def fix(self, fix: Fix | str | None) -> "WayPoint.Builder":
            return self._set("fix", fix)

        def sat(self, sat: UInt | int | None) -> "WayPoint.Builder":
            return self._set("sat", sat)

        def hdop(self, hdop: float | None) -> "WayPoint.Builder":
            return self._set("hdop", hdop)

        def vdop(self, vdop: float | None) -> "WayPoint.Builder":
            return self._set("vdop", vdop)

        def pdop(self, pdop: float | None) -> "WayPoint.Builder":
            return self._set("pdop", pdop)


WPT = WayPoint.bind(
    EntityBinding(
        "wpt",
        WayPoint,
        [
            attribute("lat", Latitude.parse, required=True),
            attribute("lon", Longitude.parse, required=True),
            converted("elevation", parse_decimal, format_decimal, tag="ele"),
            converted("time", parse_time, format_time),
            text("name"),
            text("comment", tag="cmt"),
            text("description", tag="desc"),
            text("source", tag="src"),
            elements("links", LINK),
            text("symbol", tag="sym"),
            text("type"),
            converted("fix", Fix),
            converted("sat", UInt.parse),
            converted("hdop", parse_decimal, format_decimal),
            converted("vdop", parse_decimal, format_decimal),
            converted("pdop", parse_decimal, format_decimal),
        ],
    )
)
RTEPT = WPT.renamed("rtept")
TRKPT = WPT.renamed("trkpt")

_BINDINGS = {b.name: b for b in (WPT, RTEPT, TRKPT)}


def _binding_for(name: str) -> EntityBinding[WayPoint]:
    try:
        return _BINDINGS[name]
    except KeyError:
        raise ValueError(f"points are written as wpt, rtept or trkpt, not {name!r}") from None
