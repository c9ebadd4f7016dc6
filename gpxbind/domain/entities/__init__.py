"""Core domain entities of a GPS exchange document."""

from .base import Entity, EntityBuilder
from .gpx import GPX
from .link import Link
from .metadata import Bounds, Metadata
from .route import Route

# Shared utilities
from .shared import ensure_utc, freeze
from .track import Track, TrackSegment
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
from .waypoint import WayPoint

__all__ = [
    # Entity contract
    "Entity",
    "EntityBuilder",
    # Document entities
    "GPX",
    "Bounds",
    "Link",
    "Metadata",
    "Route",
    "Track",
    "TrackSegment",
    "WayPoint",
    # Value types
    "Fix",
    "Latitude",
    "Longitude",
    "UInt",
    "format_decimal",
    "format_time",
    "parse_decimal",
    "parse_time",
    # Shared utilities
    "ensure_utc",
    "freeze",
]
