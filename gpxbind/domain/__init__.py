"""gpxbind domain layer - immutable GPX document entities."""

from . import entities

from .entities import (
    GPX,
    Bounds,
    Link,
    Metadata,
    Route,
    Track,
    TrackSegment,
    WayPoint,
    freeze,
)

__all__ = [
    "entities",
    "GPX",
    "Bounds",
    "Link",
    "Metadata",
    "Route",
    "Track",
    "TrackSegment",
    "WayPoint",
    "freeze",
]
