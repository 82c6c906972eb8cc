"""Tide curve reconstruction from sparse high/low samples (no I/O).

The marine provider only reports extrema. Between a bracketing pair of
samples the height follows a smoothstep curve::

    p      = clamp((now - prev.time) / (next.time - prev.time), 0, 1)
    height = prev.height + (next.height - prev.height) * (-2p³ + 3p²)

which has zero slope at both samples, like the real tide at slack water.

Outside the sampled window the cycle is approximated by borrowing a sample
from the other end of the window, moved by one day.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from fishing_forecast.datasources.tides.models import (
    TideReading,
    TideSample,
    TideState,
    TideType,
)

logger = logging.getLogger(__name__)

MIN_SAMPLES = 2

# Height differences below this (metres) are treated as noise around a
# peak or trough; direction then comes from progress through the interval.
HYSTERESIS_M = 0.1

# Shift applied to a borrowed sample when `now` is outside the sampled window
CYCLE_WRAP = timedelta(hours=24)


def valid_samples(samples: Iterable[TideSample]) -> list[TideSample]:
    """Drop invalid samples and return the rest sorted by time.

    Invalid means a non-numeric, NaN or non-positive height. Samples that
    share a timestamp with an earlier sample are dropped so the result is
    strictly time-ordered.
    """
    kept: list[TideSample] = []
    for s in samples:
        if not isinstance(s.height, (int, float)) or math.isnan(s.height) or s.height <= 0:
            logger.warning("Discarding tide sample at %s with height %r", s.time, s.height)
            continue
        kept.append(s)
    kept.sort(key=lambda s: s.time)

    ordered: list[TideSample] = []
    for s in kept:
        if ordered and s.time == ordered[-1].time:
            logger.warning("Discarding duplicate tide sample at %s", s.time)
            continue
        ordered.append(s)
    return ordered


def bracket(samples: list[TideSample], now: datetime) -> tuple[TideSample, TideSample]:
    """Find the samples on either side of ``now``.

    Returns ``(prev, next)`` with ``prev.time <= now < next.time``. Before the
    first sample, ``prev`` is the last sample placed one day before the first
    sample; after the last sample, ``next`` is the first sample moved one day
    forward.

    Args:
        samples: At least two valid samples, strictly ordered by time.
        now: Query instant.
    """
    for prev, nxt in zip(samples, samples[1:], strict=False):
        if prev.time <= now < nxt.time:
            return prev, nxt

    first, last = samples[0], samples[-1]
    if now < first.time:
        virtual_prev = TideSample(
            time=first.time - CYCLE_WRAP, height=last.height, type=last.type
        )
        return virtual_prev, first
    return last, first.shifted(CYCLE_WRAP)


def progress_between(prev: TideSample, nxt: TideSample, now: datetime) -> float:
    """Fraction of the way from ``prev`` to ``nxt``, clamped to ``[0, 1]``."""
    total = (nxt.time - prev.time).total_seconds()
    if total <= 0:
        return 0.0
    elapsed = (now - prev.time).total_seconds()
    return max(0.0, min(1.0, elapsed / total))


def interpolate_height(h1: float, h2: float, progress: float) -> float:
    """Smoothstep interpolation between two heights."""
    p2 = progress * progress
    p3 = p2 * progress
    return h1 + (h2 - h1) * (-2 * p3 + 3 * p2)


def determine_state(prev: TideSample, nxt: TideSample, progress: float) -> TideState:
    """Direction of the tide between two samples.

    A HIGH→LOW pair is outgoing and LOW→HIGH incoming. For two samples of
    the same type the height difference decides, except inside the
    hysteresis band where the first half of the interval counts as incoming
    and the second half as outgoing.
    """
    if prev.type != nxt.type:
        if prev.type == TideType.HIGH:
            return TideState.OUTGOING
        return TideState.INCOMING

    height_diff = nxt.height - prev.height
    if abs(height_diff) < HYSTERESIS_M:
        return TideState.INCOMING if progress < 0.5 else TideState.OUTGOING
    return TideState.INCOMING if height_diff > 0 else TideState.OUTGOING


def round_height(height: float) -> float:
    """Round to centimetres, ties away from zero on the exact binary value."""
    return float(Decimal(height).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def find_next(samples: Iterable[TideSample], tide_type: TideType, now: datetime) -> datetime | None:
    """Time of the first sample of ``tide_type`` strictly after ``now``."""
    for s in samples:
        if s.type == tide_type and s.time > now:
            return s.time
    return None


def reconstruct(samples: Iterable[TideSample], now: datetime | None = None) -> TideReading | None:
    """Reconstruct the tide at ``now`` from sparse extrema.

    Args:
        samples: Reported high/low tides in any order. Invalid entries are
            ignored.
        now: Query instant (defaults to the current time, UTC). Naive
            datetimes are treated as UTC.

    Returns:
        A ``TideReading``, or None when fewer than two valid samples remain.
    """
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    ordered = valid_samples(samples)
    if len(ordered) < MIN_SAMPLES:
        logger.info("Only %d valid tide samples, no tide reading", len(ordered))
        return None

    prev, nxt = bracket(ordered, now)
    progress = progress_between(prev, nxt, now)
    height = interpolate_height(prev.height, nxt.height, progress)

    return TideReading(
        height=round_height(height),
        state=determine_state(prev, nxt, progress),
        next_high=find_next(ordered, TideType.HIGH, now),
        next_low=find_next(ordered, TideType.LOW, now),
    )
