"""Canonicalization helpers for identity keys, names and magnitudes."""

import math
from datetime import date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo


def identity_key(value: str) -> str:
    """Return the comparison form of a free-text identity value."""
    return value.strip().lower()


def clean_text(value: str | None) -> str | None:
    """Trim free text, mapping blank input to None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def contains(haystack: str, needle: str) -> bool:
    """Case-insensitive substring match."""
    return identity_key(needle) in haystack.lower()


def round_one(value: float) -> float:
    """Round a magnitude to one decimal place."""
    return round(value, 1)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def today_in_timezone(timezone_name: str) -> date:
    """Return the current calendar day in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()


def resolve_date(explicit: date | None, timezone_name: str) -> date:
    """Return the explicit day or today in the caller's timezone."""
    return explicit or today_in_timezone(timezone_name)


def parse_uuid(value: object) -> UUID | None:
    """Parse an id supplied by the model; malformed ids resolve to None."""
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value.strip())
        except ValueError:
            return None
    return None
