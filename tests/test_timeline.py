"""Tests for the forecast timeline builder."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from fishing_forecast.analysis.fishing_score import FishingCondition
from fishing_forecast.analysis.timeline import (
    ForecastTimeline,
    build_from_payloads,
    build_timeline,
)
from fishing_forecast.datasources.moon import compute_phase
from fishing_forecast.datasources.tides import TideReading, TideState
from fishing_forecast.datasources.weather import ObservedWeather, WeatherSnapshot
from fishing_forecast.errors import MalformedUpstreamData

NOW = 1792324800  # 2026-10-18 12:00 UTC
STEP = 3 * 3600

TIDE = TideReading(
    height=1.1,
    state=TideState.INCOMING,
    next_high=datetime(2026, 10, 18, 15, 45, tzinfo=UTC),
    next_low=datetime(2026, 10, 18, 21, 58, tzinfo=UTC),
)


def _item(dt: int, **overrides: Any) -> dict[str, Any]:
    item: dict[str, Any] = {
        "dt": dt,
        "main": {"temp": 66, "pressure": 1014},
        "wind": {"speed": 4, "deg": 180},
        "clouds": {"all": 50},
        "pop": 0.1,
    }
    item.update(overrides)
    return item


def _forecast(count: int) -> dict[str, Any]:
    return {"list": [_item(NOW + STEP * (i + 1)) for i in range(count)]}


def _observed(ts: datetime, wind: float = 4) -> ObservedWeather:
    return ObservedWeather(
        timestamp=ts,
        weather=WeatherSnapshot(
            wind_speed=wind,
            wind_direction="S",
            temperature=66,
            precipitation=10,
            cloud_cover=50,
            pressure=1014,
        ),
    )


class TestBuildFromPayloads:
    """Building straight from provider payloads."""

    def test_current_plus_forecast(self) -> None:
        timeline = build_from_payloads(_item(NOW), _forecast(4), TIDE)
        assert isinstance(timeline, ForecastTimeline)
        assert len(timeline) == 5
        assert timeline.current.timestamp == datetime.fromtimestamp(NOW, tz=UTC)

    def test_current_missing_wind_is_fatal(self) -> None:
        current = _item(NOW)
        del current["wind"]
        with pytest.raises(MalformedUpstreamData):
            build_from_payloads(current, _forecast(3), TIDE)

    def test_missing_forecast_list_is_fatal(self) -> None:
        with pytest.raises(MalformedUpstreamData):
            build_from_payloads(_item(NOW), {"cnt": 0}, TIDE)

    def test_one_bad_step_is_skipped(self) -> None:
        forecast = _forecast(5)
        del forecast["list"][2]["clouds"]
        timeline = build_from_payloads(_item(NOW), forecast, TIDE)
        assert len(timeline) == 5
        assert len(timeline.forecast) == 4

    def test_empty_forecast(self) -> None:
        timeline = build_from_payloads(_item(NOW), {"list": []}, None)
        assert len(timeline) == 1

    def test_logs_structural_error(self, caplog: pytest.LogCaptureFixture) -> None:
        current = _item(NOW)
        del current["main"]
        with caplog.at_level("ERROR"), pytest.raises(MalformedUpstreamData):
            build_from_payloads(current, _forecast(1), None)
        assert "Cannot build forecast timeline" in caplog.text


class TestBuildTimeline:
    """Ordering, shared tide and per-point moon phase."""

    def test_current_first_then_ascending(self) -> None:
        start = datetime(2026, 10, 18, 12, tzinfo=UTC)
        steps = [_observed(start + timedelta(hours=h)) for h in (9, 3, 6)]
        timeline = build_timeline(_observed(start), steps, TIDE)
        times = [p.timestamp for p in timeline.points]
        assert times[0] == start
        assert times == sorted(times)

    def test_steps_before_current_dropped(self) -> None:
        start = datetime(2026, 10, 18, 12, tzinfo=UTC)
        steps = [_observed(start - timedelta(hours=3)), _observed(start + timedelta(hours=3))]
        timeline = build_timeline(_observed(start), steps, TIDE)
        assert len(timeline) == 2
        assert timeline.points[1].timestamp == start + timedelta(hours=3)

    def test_tide_shared_by_every_point(self) -> None:
        timeline = build_from_payloads(_item(NOW), _forecast(4), TIDE)
        assert all(p.tide is TIDE for p in timeline.points)

    def test_moon_phase_per_timestamp(self) -> None:
        timeline = build_from_payloads(_item(NOW), _forecast(3), TIDE)
        for point in timeline.points:
            assert point.moon_phase == compute_phase(point.timestamp)

    def test_scores_and_reasons(self) -> None:
        start = datetime(2026, 10, 18, 12, tzinfo=UTC)
        timeline = build_timeline(_observed(start), [_observed(start, wind=25)], TIDE)
        calm, windy = timeline.points
        # 70 + 10 wind + 10 temp + 10 cloud + 5 pressure + 10 tide + 5 tide height
        assert calm.score == 100
        assert calm.condition == FishingCondition.GOOD
        assert windy.score < calm.score
        assert "Incoming tide bringing food sources" in calm.reasons

    def test_no_tide(self) -> None:
        start = datetime(2026, 10, 18, 12, tzinfo=UTC)
        timeline = build_timeline(_observed(start), [], None)
        point = timeline.current
        assert point.tide is None
        assert not any("tide" in reason.lower() for reason in point.reasons)

    def test_timeline_is_immutable(self) -> None:
        start = datetime(2026, 10, 18, 12, tzinfo=UTC)
        timeline = build_timeline(_observed(start), [], None)
        assert isinstance(timeline.points, tuple)
        with pytest.raises(AttributeError):
            timeline.points = ()  # type: ignore[misc]
