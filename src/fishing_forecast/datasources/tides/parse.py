"""Tide sample extraction from World Weather Online marine responses."""

from __future__ import annotations

import logging
import math
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from fishing_forecast.datasources.tides.client import TIDE_DAYS
from fishing_forecast.datasources.tides.models import RawMarineResponse, TideSample, TideType
from fishing_forecast.errors import OptionalCollaboratorFailure, SkippableSampleError

logger = logging.getLogger(__name__)


def parse_marine(payload: Any) -> RawMarineResponse:
    """Validate the structure of a marine API response.

    Raises:
        OptionalCollaboratorFailure: If the response is not shaped like
            ``data.weather[*].tides[*].tide_data``.
    """
    try:
        return RawMarineResponse.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "<root>"
        msg = f"Invalid response format from Marine API: {field} ({first['msg']})"
        raise OptionalCollaboratorFailure(msg) from e


def sample_from_raw(raw: Any) -> TideSample:
    """Parse one ``tide_data`` entry.

    Raises:
        SkippableSampleError: If the entry is not an object, its time, height
            or type is unusable, or the height is not a positive number.
    """
    if not isinstance(raw, dict):
        msg = f"Unusable tide entry {raw!r}: not an object"
        raise SkippableSampleError(msg)
    try:
        time = _parse_time(raw["tideDateTime"])
        height = float(raw["tideHeight_mt"])
        tide_type = TideType(str(raw["tide_type"]).upper())
    except (KeyError, TypeError, ValueError) as e:
        msg = f"Unusable tide entry {raw!r}: {e}"
        raise SkippableSampleError(msg) from e

    if math.isnan(height) or height <= 0:
        msg = f"Non-positive tide height {height} at {time.isoformat()}"
        raise SkippableSampleError(msg)

    return TideSample(time=time, height=height, type=tide_type)


def extract_samples(payload: Any) -> list[TideSample]:
    """Pull every valid tide extremum from a marine API payload.

    Reads the first ``TIDE_DAYS`` days of ``data.weather[*].tides[0].tide_data``.
    Invalid entries are logged and dropped. Returns the samples sorted by time.

    Raises:
        OptionalCollaboratorFailure: If the payload structure is invalid.
    """
    if not payload:
        return []

    marine = parse_marine(payload)
    samples: list[TideSample] = []
    for day in marine.data.weather[:TIDE_DAYS]:
        if not day.tides:
            continue
        for raw in day.tides[0].tide_data:
            try:
                samples.append(sample_from_raw(raw))
            except SkippableSampleError as e:
                logger.warning("Skipping tide sample: %s", e)

    return sorted(samples, key=lambda s: s.time)


def _parse_time(value: Any) -> datetime:
    """Parse ``YYYY-MM-DD HH:MM`` (or ISO) timestamps; naive values are UTC."""
    parsed = datetime.fromisoformat(str(value))
    return parsed.replace(tzinfo=UTC) if parsed.tzinfo is None else parsed
