"""Canonical Timestamps — the single string form every Round is keyed by.

Invariants:
    - Canonical form is UTC, second precision: YYYY-MM-DDTHH:MM:SSZ
    - Naive datetimes are read as UTC; sub-second parts are dropped
    - format_timestamp(parse_timestamp(s)) == s for any canonical s

Design Decisions:
    - Fixed-width, zero-padded strings: lexicographic order equals time order,
      so window queries and timeline sorting work on the raw column
    - Round lookup is exact string equality, so every writer and reader goes
      through format_timestamp
"""

from datetime import datetime, timezone


CANONICAL_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def normalize_instant(value: datetime) -> datetime:
    """Return value as an aware UTC datetime with whole seconds."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0)


def format_timestamp(value: datetime) -> str:
    return normalize_instant(value).strftime(CANONICAL_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Parse a canonical (or any ISO-8601) timestamp into aware UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return normalize_instant(datetime.fromisoformat(text))


def floor_to_minute(value: datetime) -> datetime:
    return normalize_instant(value).replace(second=0)
