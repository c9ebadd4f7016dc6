"""Value types for GPX fields with a domain constraint.

Each type validates on construction, so an instance always satisfies its
constraint. ``parse`` functions accept the XML Schema lexical form and raise
``ValueError`` on anything else; the matching ``format`` functions produce
text that ``parse`` maps back to an equal value.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from enum import StrEnum
import math
import re

from attrs import define, field, validators

from .shared import ensure_utc

# Lexical forms, ASCII digits only
_NON_NEGATIVE_INTEGER = re.compile(r"\+?[0-9]+")
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")
_DATE_TIME = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?"
    r"(Z|[+-][0-9]{2}:[0-9]{2})?"
)


def _lexical(pattern: re.Pattern, text: str, kind: str) -> str:
    if not pattern.fullmatch(text):
        raise ValueError(f"not an {kind}: {text!r}")
    return text


def parse_decimal(text: str) -> float:
    """Parse an xsd:decimal, e.g. ``-12.5`` but not ``1e3`` or ``nan``."""
    value = float(_lexical(_DECIMAL, text, "xsd:decimal"))
    if not math.isfinite(value):
        raise ValueError(f"decimal out of range: {text!r}")
    return value


def format_decimal(value: float) -> str:
    """Render a float in plain decimal notation without losing precision."""
    return format(Decimal(repr(float(value))), "f")


def parse_time(text: str) -> datetime:
    """Parse an xsd:dateTime; values without an offset are taken as UTC."""
    return ensure_utc(datetime.fromisoformat(_lexical(_DATE_TIME, text, "xsd:dateTime")))


def format_time(value: datetime) -> str:
    """Render an ISO 8601 timestamp, using ``Z`` for UTC."""
    value = ensure_utc(value)
    text = value.isoformat()
    if value.utcoffset() == timedelta(0):
        text = text.removesuffix("+00:00") + "Z"
    return text


def _finite(instance, attribute, value) -> None:
    if not math.isfinite(value):
        raise ValueError(f"{attribute.name} must be finite, got {value!r}")


@define(frozen=True, slots=True, order=True)
class UInt:
    """Non-negative integer, e.g. a track number or satellite count."""

    value: int = field(validator=[validators.instance_of(int), validators.ge(0)])

    @classmethod
    def of(cls, value: "UInt | int") -> "UInt":
        return value if isinstance(value, UInt) else cls(value)

    @classmethod
    def parse(cls, text: str) -> "UInt":
        return cls(int(_lexical(_NON_NEGATIVE_INTEGER, text, "xsd:nonNegativeInteger")))

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@define(frozen=True, slots=True, order=True)
class Latitude:
    """Latitude in decimal degrees, within [-90, 90]."""

    degrees: float = field(
        converter=float,
        validator=[_finite, validators.ge(-90.0), validators.le(90.0)],
    )

    @classmethod
    def of(cls, value: "Latitude | float") -> "Latitude":
        return value if isinstance(value, Latitude) else cls(value)

    @classmethod
    def parse(cls, text: str) -> "Latitude":
        return cls(parse_decimal(text))

    def __float__(self) -> float:
        return self.degrees

    def __str__(self) -> str:
        return format_decimal(self.degrees)


@define(frozen=True, slots=True, order=True)
class Longitude:
    """Longitude in decimal degrees, within [-180, 180]."""

    degrees: float = field(
        converter=float,
        validator=[_finite, validators.ge(-180.0), validators.le(180.0)],
    )

    @classmethod
    def of(cls, value: "Longitude | float") -> "Longitude":
        return value if isinstance(value, Longitude) else cls(value)

    @classmethod
    def parse(cls, text: str) -> "Longitude":
        return cls(parse_decimal(text))

    def __float__(self) -> float:
        return self.degrees

    def __str__(self) -> str:
        return format_decimal(self.degrees)


class Fix(StrEnum):
    """Type of GPS fix."""

    NONE = "none"
    TWO_D = "2d"
    THREE_D = "3d"
    DGPS = "dgps"
    PPS = "pps"
