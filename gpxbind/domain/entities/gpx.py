"""GPX document root entity."""

from collections.abc import Callable, Iterable

import attrs
from attrs import converters, define, field, validators

from gpxbind.binding import EntityBinding, attribute, elements, nested

from .base import Entity, EntityBuilder
from .metadata import METADATA, Metadata
from .route import RTE, Route
from .shared import freeze
from .track import TRK, Track
from .waypoint import WPT, WayPoint

DEFAULT_VERSION = "1.1"


@define(frozen=True, slots=True)
class GPX(Entity):
    """Root of a GPS exchange document: waypoints, routes and tracks."""

    creator: str = field(validator=validators.instance_of(str))
    version: str = field(
        default=DEFAULT_VERSION,
        converter=converters.default_if_none(DEFAULT_VERSION),
        validator=validators.instance_of(str),
    )
    metadata: Metadata | None = field(
        default=None, validator=validators.optional(validators.instance_of(Metadata))
    )
    waypoints: tuple[WayPoint, ...] = field(factory=tuple, converter=freeze)
    routes: tuple[Route, ...] = field(factory=tuple, converter=freeze)
    tracks: tuple[Track, ...] = field(factory=tuple, converter=freeze)

    def with_track(self, track: Track) -> "GPX":
        """Create a new document with an additional track."""
        return attrs.evolve(self, tracks=(*self.tracks, track))

    def with_route(self, route: Route) -> "GPX":
        """Create a new document with an additional route."""
        return attrs.evolve(self, routes=(*self.routes, route))

    def with_waypoint(self, waypoint: WayPoint) -> "GPX":
        """Create a new document with an additional waypoint."""
        return attrs.evolve(self, waypoints=(*self.waypoints, waypoint))

    class Builder(EntityBuilder["GPX"]):
        def creator(self, creator: str) -> "GPX.Builder":
            return self._set("creator", creator)

        def version(self, version: str) -> "GPX.Builder":
            return self._set("version", version)

        def metadata(
            self, metadata: Metadata | Callable[[Metadata.Builder], object] | None
        ) -> "GPX.Builder":
            if callable(metadata):
                builder = Metadata.builder()
                metadata(builder)
                metadata = builder.build()
            return self._set("metadata", metadata)

        def waypoints(self, waypoints: Iterable[WayPoint] | None) -> "GPX.Builder":
            return self._replace("waypoints", waypoints)

        def add_waypoint(
            self, waypoint: WayPoint | Callable[[WayPoint.Builder], object]
        ) -> "GPX.Builder":
            return self._append_built("waypoints", waypoint, WayPoint)

        def routes(self, routes: Iterable[Route] | None) -> "GPX.Builder":
            return self._replace("routes", routes)

        def add_route(
            self, route: Route | Callable[[Route.Builder], object]
        ) -> "GPX.Builder":
            return self._append_built("routes", route, Route)

        def tracks(self, tracks: Iterable[Track] | None) -> "GPX.Builder":
            return self._replace("tracks", tracks)

        def add_track(
            self, track: Track | Callable[[Track.Builder], object]
        ) -> "GPX.Builder":
            return self._append_built("tracks", track, Track)


GPX_ROOT = GPX.bind(
    EntityBinding(
        "gpx",
        GPX,
        [
            attribute("version"),
            attribute("creator", required=True),
            nested("metadata", METADATA),
            elements("waypoints", WPT),
            elements("routes", RTE),
            elements("tracks", TRK),
        ],
    )
)
