"""Shared date-formatting helpers for renderers."""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 string; naive values are taken as UTC."""
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def time_label(value: str, tz: tzinfo | None = None) -> str:
    """Short label for a timeline row, e.g. ``Sat 3pm``."""
    dt = parse_instant(value)
    if tz is not None:
        dt = dt.astimezone(tz)
    return f"{dt.strftime('%a')} {dt.strftime('%-I%p').lower()}"


def date_label(value: str | None, tz: tzinfo | None = None) -> str:
    """Label for an upcoming event such as a tide or moon phase.

    Returns e.g. ``Oct 18 3:05pm``, or ``-`` when missing.
    """
    if not value:
        return "-"
    dt = parse_instant(value)
    if tz is not None:
        dt = dt.astimezone(tz)
    return f"{dt.strftime('%b')} {dt.day} {dt.strftime('%-I:%M%p').lower()}"
