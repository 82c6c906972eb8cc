"""Assemble scored forecast timelines.

Joins three sources per instant: the weather snapshot, the moon phase for
that instant, and one tide reading shared by every point. Tide is
reconstructed once against "now"; future points reuse the present tide
state rather than projecting it forward.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING, Any

from fishing_forecast.analysis.fishing_score import FishingCondition, score
from fishing_forecast.datasources.moon import MoonPhase, compute_phase
from fishing_forecast.datasources.weather.normalize import current_from_raw, forecast_from_raw
from fishing_forecast.errors import MalformedUpstreamData

if TYPE_CHECKING:
    from fishing_forecast.datasources.tides.models import TideReading
    from fishing_forecast.datasources.weather.models import ObservedWeather, WeatherSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredPoint:
    """One scored instant of the timeline."""

    timestamp: datetime
    score: int
    condition: FishingCondition
    weather: WeatherSnapshot
    tide: TideReading | None
    moon_phase: MoonPhase | None
    reasons: tuple[str, ...]


@dataclass(frozen=True)
class ForecastTimeline:
    """Time-ascending scored points; the first one is "now"."""

    points: tuple[ScoredPoint, ...]

    @property
    def current(self) -> ScoredPoint:
        return self.points[0]

    @property
    def forecast(self) -> tuple[ScoredPoint, ...]:
        return self.points[1:]

    def __len__(self) -> int:
        return len(self.points)


def score_point(observed: ObservedWeather, tide: TideReading | None) -> ScoredPoint:
    """Score one observed instant and attach its moon phase."""
    result = score(observed.weather, tide)
    return ScoredPoint(
        timestamp=observed.timestamp,
        score=result.score,
        condition=result.condition,
        weather=observed.weather,
        tide=tide,
        moon_phase=compute_phase(observed.timestamp),
        reasons=result.reasons,
    )


def build_timeline(
    current: ObservedWeather,
    forecast_steps: Sequence[ObservedWeather],
    tide: TideReading | None,
) -> ForecastTimeline:
    """Build a timeline from normalized weather.

    Args:
        current: Current conditions; always the first point.
        forecast_steps: Forecast steps in any order. Steps earlier than the
            current observation are dropped.
        tide: Tide reading shared by every point, or None.

    Returns:
        ``ForecastTimeline`` with the current point followed by the
        forecast points in ascending time order.
    """
    steps = sorted(forecast_steps, key=lambda s: s.timestamp)
    kept: list[ObservedWeather] = []
    for step in steps:
        if step.timestamp < current.timestamp:
            logger.warning(
                "Skipping forecast step at %s, before current observation at %s",
                step.timestamp.isoformat(),
                current.timestamp.isoformat(),
            )
            continue
        kept.append(step)

    points = [score_point(current, tide)]
    points.extend(score_point(step, tide) for step in kept)
    return ForecastTimeline(points=tuple(points))


def build_from_payloads(
    current_raw: Any,
    forecast_raw: Any,
    tide: TideReading | None,
) -> ForecastTimeline:
    """Build a timeline straight from provider payloads.

    Individual malformed forecast steps are skipped with a warning.

    Raises:
        MalformedUpstreamData: If the current conditions or the forecast
            list lack required structure. No partial timeline is returned.
    """
    try:
        current = current_from_raw(current_raw)
        steps = forecast_from_raw(forecast_raw)
    except MalformedUpstreamData as e:
        logger.error("Cannot build forecast timeline: %s", e)
        raise
    return build_timeline(current, steps, tide)
