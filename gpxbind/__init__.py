"""gpxbind - immutable GPX document model with a declarative XML binding.

Library:
    from gpxbind import read_gpx, write_gpx, Track
    gpx = read_gpx("ride.gpx")
    for track in gpx.tracks:
        print(track.name, sum(1 for _ in track.points()))
"""

__version__ = "0.1.0"

from .domain.entities import (  # noqa: E402
    GPX,
    Bounds,
    Link,
    Metadata,
    Route,
    Track,
    TrackSegment,
    WayPoint,
)
from .infrastructure.document import parse_gpx, read_gpx, to_xml, write_gpx  # noqa: E402

__all__ = [
    "GPX",
    "Bounds",
    "Link",
    "Metadata",
    "Route",
    "Track",
    "TrackSegment",
    "WayPoint",
    "__version__",
    "parse_gpx",
    "read_gpx",
    "to_xml",
    "write_gpx",
]
