"""Composite fishing score from weather and tide.

Starts from a base of 70 and applies independent additive adjustments,
one rule per factor::

    wind         < 5 mph  +10 | > 20 mph  -20 | > 15 mph  -10
    temperature  60-75 °F +10 | < 45 or > 85  -15 | otherwise  -5
    cloud cover  40-70 %  +10 | > 90 %    -5
    precip       > 50 %   -20 | > 30 %   -10
    pressure     1010-1020 hPa  +5
    tide state   incoming/outgoing  +10
    tide height  0.5-2 m (exclusive)  +5

The total is clamped to 0-100. Each rule yields its points together with
the sentence describing it, so the score and its reasons always agree.
Pressure is the one term that adds points without a reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from fishing_forecast.datasources.tides.models import TideState

if TYPE_CHECKING:
    from fishing_forecast.datasources.tides.models import TideReading
    from fishing_forecast.datasources.weather.models import WeatherSnapshot

BASE_SCORE = 70
MIN_SCORE = 0
MAX_SCORE = 100

GOOD_THRESHOLD = 70
OKAY_THRESHOLD = 40


class FishingCondition(StrEnum):
    """Qualitative bucket for a score."""

    GOOD = "Good"
    OKAY = "Okay"
    POOR = "Poor"


@dataclass(frozen=True)
class Adjustment:
    """Points contributed by one factor and the reason shown for it."""

    points: int
    reason: str | None = None


@dataclass(frozen=True)
class FishingScore:
    """Result of scoring one weather snapshot."""

    score: int
    condition: FishingCondition
    reasons: tuple[str, ...]


# =============================================================================
# Factor rules
# =============================================================================


def wind_adjustment(wind_speed: float) -> Adjustment:
    if wind_speed < 5:
        return Adjustment(10, "Light winds under 5 mph - ideal for fishing")
    if wind_speed > 20:
        return Adjustment(-20, "Strong winds over 20 mph make fishing difficult")
    if wind_speed > 15:
        return Adjustment(-10, "Strong winds may affect fishing conditions")
    return Adjustment(0, "Moderate winds - good for surface activity")


def temperature_adjustment(temperature: float) -> Adjustment:
    if 60 <= temperature <= 75:
        return Adjustment(10, "Optimal water temperature for fish activity")
    if temperature < 45:
        return Adjustment(-15, "Cold temperatures may reduce fish activity")
    if temperature > 85:
        return Adjustment(-15, "Warm temperatures - fish may be deeper in water")
    return Adjustment(-5, "Temperature outside the ideal 60-75°F range")


def cloud_adjustment(cloud_cover: float) -> Adjustment:
    if 40 <= cloud_cover <= 70:
        return Adjustment(10, "Partial cloud cover providing good visibility")
    if cloud_cover > 90:
        return Adjustment(-5, "Heavy cloud cover may affect fish feeding")
    return Adjustment(0)


def precipitation_adjustment(precipitation: float) -> Adjustment:
    if precipitation > 50:
        return Adjustment(-20, "High chance of rain may affect water conditions")
    if precipitation > 30:
        return Adjustment(-10, "Chance of rain may disturb the water")
    if precipitation < 20:
        return Adjustment(0, "Clear weather conditions")
    return Adjustment(0)


def pressure_adjustment(pressure: float) -> Adjustment:
    if 1010 <= pressure <= 1020:
        return Adjustment(5)
    return Adjustment(0)


def tide_adjustments(tide: TideReading) -> list[Adjustment]:
    """State and height terms; the two are independent and both may apply."""
    adjustments: list[Adjustment] = []
    if tide.state == TideState.INCOMING:
        adjustments.append(Adjustment(10, "Incoming tide bringing food sources"))
    elif tide.state == TideState.OUTGOING:
        adjustments.append(Adjustment(10, "Outgoing tide concentrating fish in deeper areas"))
    if 0.5 < tide.height < 2:
        reason = f"Tide height of {tide.height:.1f}m is in the productive 0.5-2m range"
        adjustments.append(Adjustment(5, reason))
    return adjustments


def adjustments_for(weather: WeatherSnapshot, tide: TideReading | None) -> list[Adjustment]:
    """All adjustments in reason order: wind, temperature, clouds, precip, tide.

    Pressure contributes points but no reason.
    """
    adjustments = [
        wind_adjustment(weather.wind_speed),
        temperature_adjustment(weather.temperature),
        cloud_adjustment(weather.cloud_cover),
        precipitation_adjustment(weather.precipitation),
        pressure_adjustment(weather.pressure),
    ]
    if tide is not None:
        adjustments.extend(tide_adjustments(tide))
    return adjustments


# =============================================================================
# Public API
# =============================================================================


def calculate_score(weather: WeatherSnapshot, tide: TideReading | None = None) -> int:
    """Score in ``[0, 100]`` for one snapshot."""
    return score(weather, tide).score


def determine_condition(value: int) -> FishingCondition:
    """Map a score to Good (>= 70), Okay (>= 40) or Poor."""
    if value >= GOOD_THRESHOLD:
        return FishingCondition.GOOD
    if value >= OKAY_THRESHOLD:
        return FishingCondition.OKAY
    return FishingCondition.POOR


def generate_reasons(weather: WeatherSnapshot, tide: TideReading | None = None) -> list[str]:
    """Human-readable reasons, in the same order as the score terms."""
    return [a.reason for a in adjustments_for(weather, tide) if a.reason]


def score(weather: WeatherSnapshot, tide: TideReading | None = None) -> FishingScore:
    """Score a weather snapshot, with the optional tide reading.

    Never fails: without a tide reading the tide terms are skipped.
    """
    adjustments = adjustments_for(weather, tide)
    total = BASE_SCORE + sum(a.points for a in adjustments)
    clamped = max(MIN_SCORE, min(MAX_SCORE, total))
    return FishingScore(
        score=clamped,
        condition=determine_condition(clamped),
        reasons=tuple(a.reason for a in adjustments if a.reason),
    )
