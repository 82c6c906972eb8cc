"""Tide data models.

``RawMarine*`` models validate the structure of the World Weather Online
marine response at the provider boundary. Individual ``tide_data`` entries
are left unvalidated here so one bad entry can be skipped on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TideType(StrEnum):
    """Kind of tide extremum reported by the marine provider."""

    HIGH = "HIGH"
    LOW = "LOW"


class TideState(StrEnum):
    """Direction the water is moving."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"


@dataclass(frozen=True)
class TideSample:
    """A single reported high or low tide."""

    time: datetime
    height: float  # metres
    type: TideType

    def shifted(self, delta: timedelta) -> TideSample:
        """Copy of this sample moved in time by ``delta``."""
        return replace(self, time=self.time + delta)


@dataclass(frozen=True)
class TideReading:
    """Reconstructed tide at one instant."""

    height: float  # metres, 2 decimals
    state: TideState
    next_high: datetime | None = None
    next_low: datetime | None = None



class RawMarineTides(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tide_data: list[Any] = Field(default_factory=list)


class RawMarineDay(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tides: list[RawMarineTides] = Field(default_factory=list)


class RawMarineData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    weather: list[RawMarineDay] = Field(default_factory=list)


class RawMarineResponse(BaseModel):
    """Marine API response: ``data.weather[*].tides[*].tide_data[*]``."""

    model_config = ConfigDict(extra="ignore")

    data: RawMarineData = Field(default_factory=RawMarineData)
