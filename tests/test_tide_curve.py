"""Tests for tide curve reconstruction."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from fishing_forecast.datasources.tides import (
    TideReading,
    TideSample,
    TideState,
    TideType,
    determine_state,
    find_next,
    interpolate_height,
    reconstruct,
)
from fishing_forecast.datasources.tides.curve import (
    bracket,
    progress_between,
    round_height,
    valid_samples,
)

T = datetime(2026, 10, 18, 6, 0, tzinfo=UTC)


def _high(hours: float, height: float) -> TideSample:
    return TideSample(time=T + timedelta(hours=hours), height=height, type=TideType.HIGH)


def _low(hours: float, height: float) -> TideSample:
    return TideSample(time=T + timedelta(hours=hours), height=height, type=TideType.LOW)


class TestInterpolateHeight:
    """Smoothstep interpolation."""

    def test_endpoints(self) -> None:
        assert interpolate_height(1.0, 0.2, 0.0) == 1.0
        assert interpolate_height(1.0, 0.2, 1.0) == pytest.approx(0.2)

    def test_midpoint(self) -> None:
        assert interpolate_height(1.0, 0.2, 0.5) == pytest.approx(0.6)

    def test_flat_near_samples(self) -> None:
        # Zero slope at the ends: a small step moves height far less than linearly
        near_start = interpolate_height(0.0, 1.0, 0.05)
        assert near_start < 0.05


class TestReconstruct:
    """Tests for reconstruct."""

    def test_halfway_high_to_low(self) -> None:
        reading = reconstruct([_high(0, 1.0), _low(6, 0.2)], T + timedelta(hours=3))
        assert reading is not None
        assert reading.height == 0.6
        assert reading.state == TideState.OUTGOING
        assert reading.next_low == T + timedelta(hours=6)
        assert reading.next_high is None

    def test_low_to_high_is_incoming(self) -> None:
        reading = reconstruct([_low(0, 0.3), _high(6, 1.8)], T + timedelta(hours=2))
        assert reading is not None
        assert reading.state == TideState.INCOMING

    def test_height_rounded_to_two_decimals(self) -> None:
        reading = reconstruct([_low(0, 0.3), _high(6, 1.8)], T + timedelta(hours=1))
        assert reading is not None
        assert reading.height == round(reading.height, 2)

    def test_exact_tie_rounds_up(self) -> None:
        # smoothstep at p=0.5 gives exactly 0.625
        reading = reconstruct([_high(0, 1.0), _low(6, 0.25)], T + timedelta(hours=3))
        assert reading is not None
        assert reading.height == 0.63

    def test_at_sample_time(self) -> None:
        reading = reconstruct([_high(0, 1.0), _low(6, 0.2)], T)
        assert reading is not None
        assert reading.height == 1.0

    def test_fewer_than_two_samples(self) -> None:
        assert reconstruct([], T) is None
        assert reconstruct([_high(0, 1.0)], T) is None

    def test_invalid_samples_do_not_count(self) -> None:
        samples = [_high(0, 1.0), _low(6, 0.0), _low(12, -0.5), _high(18, float("nan"))]
        assert reconstruct(samples, T + timedelta(hours=3)) is None

    def test_unsorted_input(self) -> None:
        reading = reconstruct([_low(6, 0.2), _high(0, 1.0)], T + timedelta(hours=3))
        assert reading is not None
        assert reading.height == 0.6

    def test_next_high_and_low(self) -> None:
        samples = [_high(0, 1.5), _low(6, 0.4), _high(12, 1.6), _low(18, 0.5)]
        reading = reconstruct(samples, T + timedelta(hours=7))
        assert reading is not None
        assert reading.next_high == T + timedelta(hours=12)
        assert reading.next_low == T + timedelta(hours=18)

    def test_naive_now_is_utc(self) -> None:
        samples = [_high(0, 1.0), _low(6, 0.2)]
        naive = (T + timedelta(hours=3)).replace(tzinfo=None)
        assert reconstruct(samples, naive) == reconstruct(samples, T + timedelta(hours=3))

    def test_returns_reading(self) -> None:
        reading = reconstruct([_high(0, 1.0), _low(6, 0.2)], T + timedelta(hours=1))
        assert isinstance(reading, TideReading)


class TestOutsideSampledWindow:
    """Virtual samples borrowed from the other end of the window."""

    def test_before_first_sample(self) -> None:
        samples = [_low(0, 0.5), _high(6, 1.5)]
        now = T - timedelta(hours=3)
        prev, nxt = bracket(samples, now)
        assert prev.time == T - timedelta(hours=24)
        assert prev.height == 1.5
        assert prev.type == TideType.HIGH
        assert nxt == samples[0]

        reading = reconstruct(samples, now)
        assert reading is not None
        assert reading.state == TideState.OUTGOING
        assert 0.5 < reading.height < 1.5

    def test_after_last_sample(self) -> None:
        samples = [_low(0, 0.5), _high(6, 1.5)]
        now = T + timedelta(hours=9)
        prev, nxt = bracket(samples, now)
        assert prev == samples[-1]
        assert nxt.time == T + timedelta(hours=24)
        assert nxt.type == TideType.LOW

        reading = reconstruct(samples, now)
        assert reading is not None
        assert reading.state == TideState.OUTGOING
        assert reading.next_high is None
        assert reading.next_low is None


class TestDetermineState:
    """Direction from sample types, height difference and hysteresis."""

    def test_types_differ(self) -> None:
        assert determine_state(_high(0, 1.0), _low(6, 0.2), 0.9) == TideState.OUTGOING
        assert determine_state(_low(0, 0.2), _high(6, 1.0), 0.1) == TideState.INCOMING

    def test_same_type_rising(self) -> None:
        assert determine_state(_high(0, 1.0), _high(12, 1.5), 0.8) == TideState.INCOMING

    def test_same_type_falling(self) -> None:
        assert determine_state(_high(0, 1.5), _high(12, 1.0), 0.2) == TideState.OUTGOING

    @pytest.mark.parametrize(
        ("progress", "expected"),
        [(0.0, TideState.INCOMING), (0.49, TideState.INCOMING), (0.5, TideState.OUTGOING)],
    )
    def test_hysteresis_band(self, progress: float, expected: TideState) -> None:
        state = determine_state(_high(0, 1.0), _high(12, 1.05), progress)
        assert state == expected


class TestHelpers:
    """Tests for sample filtering, progress and next-extremum lookup."""

    def test_valid_samples_drops_duplicates(self) -> None:
        samples = [_high(0, 1.0), _high(0, 1.2), _low(6, 0.2)]
        result = valid_samples(samples)
        assert [s.height for s in result] == [1.0, 0.2]

    def test_progress_clamped(self) -> None:
        prev, nxt = _high(0, 1.0), _low(6, 0.2)
        assert progress_between(prev, nxt, T - timedelta(hours=1)) == 0.0
        assert progress_between(prev, nxt, T + timedelta(hours=7)) == 1.0

    def test_progress_zero_length_interval(self) -> None:
        assert progress_between(_high(0, 1.0), _low(0, 0.2), T) == 0.0

    def test_find_next_strictly_after(self) -> None:
        samples = [_high(0, 1.0), _low(6, 0.2), _high(12, 1.1)]
        assert find_next(samples, TideType.HIGH, T) == T + timedelta(hours=12)
        assert find_next(samples, TideType.LOW, T + timedelta(hours=6)) is None

    @pytest.mark.parametrize(
        ("height", "expected"),
        [(0.625, 0.63), (0.125, 0.13), (1.005, 1.0), (0.604, 0.6), (1.8, 1.8)],
    )
    def test_round_height(self, height: float, expected: float) -> None:
        assert round_height(height) == expected
