"""Moon phase data model and constants."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

# Mean length of the lunar (synodic) month in days
SYNODIC_MONTH_DAYS = 29.530588853

# Reference new moon used as the cycle anchor
KNOWN_NEW_MOON = datetime(2000, 1, 6, 18, 14, tzinfo=UTC)

# Age (days into the cycle) at which each phase *ends*, in ascending order.
# Ages at or past the last threshold wrap back to "New Moon".
PHASE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (1.84566, "New Moon"),
    (5.53699, "Waxing Crescent"),
    (9.22831, "First Quarter"),
    (12.91963, "Waxing Gibbous"),
    (16.61096, "Full Moon"),
    (20.30228, "Waning Gibbous"),
    (23.99361, "Last Quarter"),
    (27.68493, "Waning Crescent"),
)

FULL_MOON_AGE = 14.765
NEW_MOON_AGE = SYNODIC_MONTH_DAYS


@dataclass(frozen=True)
class MoonPhase:
    """Lunar phase at a single instant."""

    phase: str
    illumination: int  # percent, 0-100
    age: float  # days since last new moon, 1 decimal
    next_full_moon: datetime
    next_new_moon: datetime

    @property
    def is_waxing(self) -> bool:
        """True between new moon and full moon."""
        return self.age < FULL_MOON_AGE
