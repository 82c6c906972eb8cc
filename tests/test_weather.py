"""Tests for the OpenWeatherMap datasource."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from fishing_forecast.datasources.weather import (
    OWM_CURRENT_API,
    OWM_FORECAST_API,
    current_from_raw,
    fetch_current,
    fetch_forecast,
    forecast_from_raw,
    step_from_raw,
    wind_direction,
)
from fishing_forecast.errors import (
    MalformedUpstreamData,
    ProviderConfigurationError,
    SkippableSampleError,
)
from fishing_forecast.store import MemoryCache

DT = 1792324800  # 2026-10-18 12:00 UTC


def _item(dt: int = DT, **overrides: Any) -> dict[str, Any]:
    item: dict[str, Any] = {
        "dt": dt,
        "main": {"temp": 64.2, "pressure": 1016},
        "wind": {"speed": 6.9, "deg": 290},
        "clouds": {"all": 40},
    }
    item.update(overrides)
    return item


def _mock_response(payload: dict[str, Any]) -> Mock:
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = Mock()
    return mock_response


class TestWindDirection:
    """Bearing to compass octant."""

    @pytest.mark.parametrize(
        ("degrees", "expected"),
        [
            (0, "N"),
            (22.4, "N"),
            (22.5, "NE"),
            (45, "NE"),
            (90, "E"),
            (180, "S"),
            (290, "W"),
            (337.5, "N"),
            (360, "N"),
            (-45, "NW"),
            (None, "N"),
        ],
    )
    def test_octants(self, degrees: float | None, expected: str) -> None:
        assert wind_direction(degrees) == expected


class TestCurrentFromRaw:
    """Normalizing the current-conditions payload."""

    def test_normalizes(self) -> None:
        observed = current_from_raw(_item())
        assert observed.timestamp == datetime.fromtimestamp(DT, tz=UTC)
        w = observed.weather
        assert w.wind_speed == 6.9
        assert w.wind_direction == "W"
        assert w.temperature == 64.2
        assert w.pressure == 1016
        assert w.cloud_cover == 40
        assert w.precipitation == 0

    def test_rain_is_full_precipitation(self) -> None:
        observed = current_from_raw(_item(rain={"1h": 0.4}))
        assert observed.weather.precipitation == 100

    def test_empty_rain_block_counts_as_rain(self) -> None:
        assert current_from_raw(_item(rain={})).weather.precipitation == 100

    def test_null_rain_is_dry(self) -> None:
        assert current_from_raw(_item(rain=None)).weather.precipitation == 0

    def test_missing_values_default(self) -> None:
        observed = current_from_raw(_item(main={}, wind={}, clouds={}))
        w = observed.weather
        assert w.wind_speed == 0
        assert w.wind_direction == "N"
        assert w.temperature == 0
        assert w.cloud_cover == 0
        assert w.pressure == 1013

    @pytest.mark.parametrize("missing", ["dt", "main", "wind", "clouds"])
    def test_missing_structure_is_fatal(self, missing: str) -> None:
        raw = _item()
        del raw[missing]
        with pytest.raises(MalformedUpstreamData, match=missing):
            current_from_raw(raw)

    @pytest.mark.parametrize("raw", [None, [], "weather"])
    def test_not_an_object(self, raw: Any) -> None:
        with pytest.raises(MalformedUpstreamData):
            current_from_raw(raw)


class TestForecastFromRaw:
    """Normalizing the forecast list."""

    def test_pop_as_percentage(self) -> None:
        observed = step_from_raw(_item(pop=0.35))
        assert observed.weather.precipitation == pytest.approx(35)

    def test_no_pop_is_zero(self) -> None:
        assert step_from_raw(_item()).weather.precipitation == 0

    def test_bad_step_is_skippable(self) -> None:
        raw = _item()
        del raw["wind"]
        with pytest.raises(SkippableSampleError):
            step_from_raw(raw)

    def test_skips_bad_steps(self) -> None:
        bad = _item(DT + 3 * 3600)
        del bad["clouds"]
        payload = {"list": [_item(DT), bad, _item(DT + 6 * 3600)]}
        steps = forecast_from_raw(payload)
        assert len(steps) == 2
        assert [s.timestamp.hour for s in steps] == [12, 18]

    def test_empty_list(self) -> None:
        assert forecast_from_raw({"list": []}) == []

    @pytest.mark.parametrize("payload", [None, {}, {"list": None}, {"cod": "200"}])
    def test_missing_list_is_fatal(self, payload: Any) -> None:
        with pytest.raises(MalformedUpstreamData):
            forecast_from_raw(payload)


class TestFetchCurrent:
    """Tests for fetch_current."""

    @patch("fishing_forecast.datasources.weather._request.session.get")
    def test_fetch(self, mock_get: Mock) -> None:
        mock_get.return_value = _mock_response(_item())

        result = fetch_current(36.6, -121.9, api_key="secret")

        assert result["dt"] == DT
        assert mock_get.call_args.args[0] == OWM_CURRENT_API
        params = mock_get.call_args.kwargs["params"]
        assert params["lat"] == 36.6
        assert params["lon"] == -121.9
        assert params["appid"] == "secret"
        assert params["units"] == "imperial"

    @patch("fishing_forecast.datasources.weather._request.session.get")
    def test_missing_key(self, mock_get: Mock) -> None:
        with pytest.raises(ProviderConfigurationError):
            fetch_current(36.6, -121.9, api_key=None)
        mock_get.assert_not_called()

    @patch("fishing_forecast.datasources.weather._request.session.get")
    def test_http_error_propagates(self, mock_get: Mock) -> None:
        mock_response = Mock()
        mock_response.raise_for_status.side_effect = requests.HTTPError("401")
        mock_get.return_value = mock_response
        with pytest.raises(requests.HTTPError):
            fetch_current(36.6, -121.9, api_key="bad")

    @patch("fishing_forecast.datasources.weather._request.session.get")
    def test_timeout_is_passed(self, mock_get: Mock) -> None:
        mock_get.return_value = _mock_response(_item())
        fetch_current(36.6, -121.9, api_key="secret", timeout=7)
        assert mock_get.call_args.kwargs["timeout"] == 7


class TestFetchForecast:
    """Tests for fetch_forecast."""

    @patch("fishing_forecast.datasources.weather._request.session.get")
    def test_fetch(self, mock_get: Mock) -> None:
        mock_get.return_value = _mock_response({"list": [_item()]})

        result = fetch_forecast(36.6, -121.9, api_key="secret")

        assert len(result["list"]) == 1
        assert mock_get.call_args.args[0] == OWM_FORECAST_API

    @patch("fishing_forecast.datasources.weather._request.session.get")
    def test_cache_hit_skips_request(self, mock_get: Mock) -> None:
        mock_get.return_value = _mock_response({"list": [_item()]})
        cache = MemoryCache()

        fetch_forecast(36.6, -121.9, api_key="secret", cache=cache)
        fetch_forecast(36.6, -121.9, api_key="secret", cache=cache)

        mock_get.assert_called_once()

    @patch("fishing_forecast.datasources.weather._request.session.get")
    def test_current_and_forecast_cached_separately(self, mock_get: Mock) -> None:
        mock_get.side_effect = [_mock_response(_item()), _mock_response({"list": []})]
        cache = MemoryCache()

        current = fetch_current(36.6, -121.9, api_key="secret", cache=cache)
        forecast = fetch_forecast(36.6, -121.9, api_key="secret", cache=cache)

        assert "dt" in current
        assert forecast == {"list": []}
        assert len(cache) == 2

    @patch("fishing_forecast.datasources.weather._request.session.get")
    def test_expired_cache_refetches(self, mock_get: Mock) -> None:
        mock_get.return_value = _mock_response({"list": []})
        now = [1000.0]
        cache = MemoryCache(clock=lambda: now[0])

        fetch_forecast(36.6, -121.9, api_key="secret", cache=cache, ttl=60)
        now[0] += 61
        fetch_forecast(36.6, -121.9, api_key="secret", cache=cache, ttl=60)

        assert mock_get.call_count == 2
