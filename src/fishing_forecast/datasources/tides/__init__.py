"""Marine tide data source and tide curve reconstruction.

Fetches high/low tide extrema from World Weather Online and rebuilds a
continuous tide reading (height + direction) for a query instant.

Public API:
  - models: TideSample, TideReading, TideType, TideState, RawMarineResponse
  - fetch: fetch_marine (raw marine payload)
  - parse: parse_marine, extract_samples, sample_from_raw
  - curve: reconstruct, interpolate_height, determine_state, find_next
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fishing_forecast.datasources.tides.client import MARINE_API
from fishing_forecast.datasources.tides.curve import (
    HYSTERESIS_M,
    determine_state,
    find_next,
    interpolate_height,
    reconstruct,
)
from fishing_forecast.datasources.tides.fetch import fetch_marine
from fishing_forecast.datasources.tides.models import (
    RawMarineResponse,
    TideReading,
    TideSample,
    TideState,
    TideType,
)
from fishing_forecast.datasources.tides.parse import (
    extract_samples,
    parse_marine,
    sample_from_raw,
)

__all__ = [
    "HYSTERESIS_M",
    "MARINE_API",
    "RawMarineResponse",
    "TideReading",
    "TideSample",
    "TideState",
    "TideType",
    "determine_state",
    "extract_samples",
    "fetch_marine",
    "find_next",
    "interpolate_height",
    "parse_marine",
    "reading_from_payload",
    "reconstruct",
    "sample_from_raw",
]


def reading_from_payload(payload: dict[str, Any] | None, now: datetime) -> TideReading | None:
    """Tide reading at ``now`` straight from a raw marine payload.

    Raises:
        OptionalCollaboratorFailure: If the payload structure is invalid.
    """
    return reconstruct(extract_samples(payload), now)
