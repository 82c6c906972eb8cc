"""Pure moon phase computation (no I/O).

Uses a mean synodic month anchored to a known new moon::

    age          = (t - KNOWN_NEW_MOON) mod SYNODIC_MONTH_DAYS
    illumination = cos(age / SYNODIC_MONTH_DAYS * 2π - π) * 0.5 + 0.5

Accurate to within a day or so, which is plenty for a fishing forecast.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

from fishing_forecast.datasources.moon.models import (
    FULL_MOON_AGE,
    KNOWN_NEW_MOON,
    NEW_MOON_AGE,
    PHASE_THRESHOLDS,
    SYNODIC_MONTH_DAYS,
    MoonPhase,
)

_SECONDS_PER_DAY = 86400.0


def _round_half_up(value: float, ndigits: int = 0) -> float:
    scale = 10**ndigits
    return math.floor(value * scale + 0.5) / scale


def moon_age(instant: datetime) -> float:
    """Days since the most recent new moon, in ``[0, SYNODIC_MONTH_DAYS)``.

    Naive datetimes are treated as UTC.
    """
    instant = _as_utc(instant)
    days = (instant - KNOWN_NEW_MOON).total_seconds() / _SECONDS_PER_DAY
    return days % SYNODIC_MONTH_DAYS


def phase_name(age: float) -> str:
    """Name of the phase for a given moon age.

    Thresholds are exclusive upper bounds: an age exactly on a boundary
    belongs to the following phase.
    """
    for upper, name in PHASE_THRESHOLDS:
        if age < upper:
            return name
    return "New Moon"


def illumination_fraction(age: float) -> float:
    """Illuminated fraction of the disc (0.0-1.0) for a given age."""
    return math.cos((age / SYNODIC_MONTH_DAYS) * 2 * math.pi - math.pi) * 0.5 + 0.5


def next_phase_date(instant: datetime, current_age: float, target_age: float) -> datetime:
    """Next instant at which the moon reaches ``target_age``.

    Args:
        instant: Reference instant the age was computed for.
        current_age: Moon age at ``instant``.
        target_age: Age within the cycle to look for (e.g. ``FULL_MOON_AGE``).
    """
    days_until = target_age - current_age
    if days_until < 0:
        days_until += SYNODIC_MONTH_DAYS
    return _as_utc(instant) + timedelta(days=days_until)


def compute_phase(instant: datetime) -> MoonPhase:
    """Compute the moon phase for an instant.

    Deterministic: the same instant always yields the same ``MoonPhase``,
    including the next full/new moon dates, which are measured forward
    from ``instant`` rather than from the wall clock.
    """
    age = moon_age(instant)
    return MoonPhase(
        phase=phase_name(age),
        illumination=int(_round_half_up(illumination_fraction(age) * 100)),
        age=_round_half_up(age, 1),
        next_full_moon=next_phase_date(instant, age, FULL_MOON_AGE),
        next_new_moon=next_phase_date(instant, age, NEW_MOON_AGE),
    )


def _as_utc(instant: datetime) -> datetime:
    return instant.replace(tzinfo=UTC) if instant.tzinfo is None else instant
