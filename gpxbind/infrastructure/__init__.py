"""Infrastructure: document files and the command line."""

from .document import parse_gpx, read_gpx, to_xml, write_gpx

__all__ = ["parse_gpx", "read_gpx", "to_xml", "write_gpx"]
