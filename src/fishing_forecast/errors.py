"""Exceptions raised across the forecast pipeline.

Three failure classes matter to callers:

  - ``MalformedUpstreamData``: the weather provider's current or forecast
    payload lacks required structure. Fatal for the pipeline run.
  - ``SkippableSampleError``: one forecast step or tide sample failed local
    validation. Always caught close to where it is raised; the item is
    logged and dropped.
  - ``OptionalCollaboratorFailure``: the tide fetch failed outright. The
    flow downgrades it to "no tide data".
"""

from __future__ import annotations


class ForecastError(Exception):
    """Base class for forecast pipeline errors."""


class MalformedUpstreamData(ForecastError):
    """Required structural fields are missing from a provider payload."""


class SkippableSampleError(ForecastError):
    """A single forecast step or tide sample is invalid and should be dropped."""


class OptionalCollaboratorFailure(ForecastError):
    """An optional data source (tides) could not be fetched."""


class ProviderConfigurationError(ForecastError):
    """A mandatory provider is missing configuration (e.g. an API key)."""
