"""Shared utilities and helper functions for domain entities."""

from collections.abc import Iterable
from typing import TypeVar
from datetime import UTC, datetime

from attrs import validators

T = TypeVar("T")

# Validator for optional text fields
optional_str = validators.optional(validators.instance_of(str))


def freeze(items: Iterable[T] | None) -> tuple[T, ...]:
    """Normalize a caller-supplied sequence into an immutable tuple.

    None and empty input both yield the canonical empty tuple. A tuple is
    returned as-is, anything else is copied, so the result never aliases a
    collection the caller can still mutate.
    """
    if items is None:
        return ()
    return tuple(items)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure datetime is timezone-aware with UTC."""
    if dt is None:
        return None
    return dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt
