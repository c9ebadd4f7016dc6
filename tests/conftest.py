"""Shared fixtures: small GPX documents as text and as entities."""

from datetime import UTC, datetime

import pytest

from gpxbind.domain.entities import GPX, Link, Track, TrackSegment, WayPoint


@pytest.fixture
def test_timestamp():
    """Fixed UTC timestamp for deterministic documents."""
    return datetime(2024, 5, 17, 8, 30, 0, tzinfo=UTC)


@pytest.fixture
def link():
    """Link with every field set."""
    return Link(href="https://example.org/ride", text="Ride report", type="text/html")


@pytest.fixture
def track_points(test_timestamp):
    """Three track points with mixed optional fields."""
    return [
        WayPoint(lat=47.2692, lon=11.4041, elevation=574.0, time=test_timestamp),
        WayPoint(lat=47.2701, lon=11.4102, elevation=580.5, name="Bridge"),
        WayPoint(lat=47.2715, lon=11.4188, sat=7, hdop=1.2),
    ]


@pytest.fixture
def track(link, track_points):
    """Track with links, a number and two segments."""
    return (
        Track.builder()
        .name("Inn valley loop")
        .comment("Morning ride")
        .description("Loop along the river")
        .source("Garmin Edge")
        .add_link(link)
        .number(3)
        .type("cycling")
        .add_segment(TrackSegment(points=track_points[:2]))
        .add_segment(TrackSegment(points=track_points[2:]))
        .build()
    )


@pytest.fixture
def gpx(track, link):
    """Document with metadata, one waypoint, one route and one track."""
    return (
        GPX.builder()
        .creator("gpxbind tests")
        .metadata(lambda m: m.name("Weekend").add_link(link))
        .add_waypoint(WayPoint(lat=47.0, lon=11.0, name="Camp"))
        .add_route(lambda r: r.name("Detour").add_point(WayPoint(lat=47.1, lon=11.1)))
        .add_track(track)
        .build()
    )


@pytest.fixture
def sample_document():
    """Hand-written GPX text as a typical device would export it."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="Device" xmlns="http://www.topografix.com/GPX/1/1">
  <metadata>
    <name>Sample</name>
    <time>2024-05-17T08:30:00Z</time>
    <bounds minlat="47.0" minlon="11.0" maxlat="48.0" maxlon="12.0"/>
  </metadata>
  <wpt lat="47.5" lon="11.5">
    <name>Summit</name>
    <sym>Flag</sym>
  </wpt>
  <trk>
    <name>Morning</name>
    <number>1</number>
    <trkseg>
      <trkpt lat="47.1" lon="11.1"><ele>600.5</ele></trkpt>
      <trkpt lat="47.2" lon="11.2"><ele>610</ele></trkpt>
    </trkseg>
  </trk>
</gpx>
"""
