"""Timestamp parsing for feed dates (RFC 822 and ISO 8601)."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime


def parse_iso8601(value: str) -> datetime:
    """Parse an ISO 8601 timestamp string into a timezone-aware datetime."""
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a feed timestamp in either RFC 822 or ISO 8601 form.

    RSS feeds use RFC 822 dates ("Mon, 19 Oct 2026 08:00:00 +0200") while
    Atom feeds and our own stored datasets use ISO 8601.

    Returns:
        A timezone-aware datetime in UTC, or None if the value is missing or
        cannot be parsed.
    """
    if not value or not value.strip():
        return None
    raw = value.strip()
    try:
        return parse_iso8601(raw).astimezone(timezone.utc)
    except ValueError:
        pass
    try:
        parsed = parsedate_to_datetime(raw)
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an ISO 8601 UTC string with a trailing Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + (
        f"{value.microsecond // 1000:03d}Z"
    )


def normalize_published(raw: str | None, fallback: datetime) -> str:
    """Normalize a feed timestamp for storage.

    Parseable values become ISO 8601 UTC. Unparseable values are kept verbatim
    so they stay visible downstream; they sort last and never survive age
    filtering. A missing value falls back to the fetch time.
    """
    if raw is None or not raw.strip():
        return format_timestamp(fallback)
    parsed = parse_timestamp(raw)
    if parsed is None:
        return raw.strip()
    return format_timestamp(parsed)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
