"""Moon phase calculator.

Not a remote data source: the phase is computed locally from the instant,
but it feeds the timeline alongside weather and tides.

Public API:
  - models: MoonPhase, SYNODIC_MONTH_DAYS, PHASE_THRESHOLDS
  - compute: compute_phase, moon_age, phase_name, next_phase_date
"""

from fishing_forecast.datasources.moon.compute import (
    compute_phase,
    illumination_fraction,
    moon_age,
    next_phase_date,
    phase_name,
)
from fishing_forecast.datasources.moon.models import (
    FULL_MOON_AGE,
    KNOWN_NEW_MOON,
    NEW_MOON_AGE,
    PHASE_THRESHOLDS,
    SYNODIC_MONTH_DAYS,
    MoonPhase,
)

__all__ = [
    "FULL_MOON_AGE",
    "KNOWN_NEW_MOON",
    "NEW_MOON_AGE",
    "PHASE_THRESHOLDS",
    "SYNODIC_MONTH_DAYS",
    "MoonPhase",
    "compute_phase",
    "illumination_fraction",
    "moon_age",
    "next_phase_date",
    "phase_name",
]
