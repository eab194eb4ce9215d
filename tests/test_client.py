from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyopenmeteo._constants import AIR_QUALITY_URL, FORECAST_URL
from pyopenmeteo.client import OpenMeteoClient, build_air_quality_params, build_forecast_params
from pyopenmeteo.config import LocationConfig, WeatherConfig
from pyopenmeteo.exceptions import MeteoError, MeteoTransportError
from pyopenmeteo.models import AirField, CurrentField, DailyField


@dataclass
class FakeTransport:
    responses: dict[str, dict[str, Any]] = field(default_factory=dict)
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)
    fail_urls: set[str] = field(default_factory=set)

    async def get_json(self, url: str, params: Mapping[str, Any]) -> dict[str, Any]:
        self.calls.append((url, dict(params)))
        if url in self.fail_urls:
            raise MeteoTransportError(f"HTTP 500 from {url}", status_code=500, url=url)
        return self.responses.get(url, {})


def _location(**kwargs: Any) -> LocationConfig:
    return LocationConfig(name="Berlin", latitude=52.52, longitude=13.41, **kwargs)


def test_forecast_params_metric_without_hourly() -> None:
    location = _location(forecast_days=5)
    params = build_forecast_params(location, WeatherConfig(locations=(location,)))

    assert params["latitude"] == 52.52
    assert params["timezone"] == "Europe/Berlin"
    assert params["forecast_days"] == 5
    assert "time" not in params["current"].split(",")
    assert "temperature_2m" in params["current"].split(",")
    assert "sunrise" in params["daily"].split(",")
    assert "hourly" not in params
    assert "temperature_unit" not in params
    assert "apikey" not in params


def test_forecast_params_hourly_imperial_and_key() -> None:
    location = _location(hourly_forecast=True, forecast_hours=12)
    config = WeatherConfig(locations=(location,), imperial=True, api_key="secret")

    params = build_forecast_params(location, config)

    assert params["forecast_hours"] == 12
    assert "precipitation_probability" in params["hourly"].split(",")
    assert params["temperature_unit"] == "fahrenheit"
    assert params["wind_speed_unit"] == "mph"
    assert params["precipitation_unit"] == "inch"
    assert params["apikey"] == "secret"


def test_air_quality_params_request_pollen_hourly() -> None:
    location = _location(hourly_forecast=True, forecast_hours=6)
    params = build_air_quality_params(location, WeatherConfig(locations=(location,)))

    assert "european_aqi" in params["current"].split(",")
    assert params["hourly"].split(",") == [
        "alder_pollen",
        "birch_pollen",
        "grass_pollen",
        "mugwort_pollen",
        "olive_pollen",
        "ragweed_pollen",
    ]
    assert params["forecast_hours"] == 6


@pytest.mark.asyncio
async def test_fetch_snapshot_with_air_quality() -> None:
    transport = FakeTransport(
        responses={
            FORECAST_URL: {
                "current": {"time": "2026-10-19T12:00", "temperature_2m": 11.0},
                "daily": {"time": ["2026-10-19"], "weather_code": [3]},
            },
            AIR_QUALITY_URL: {"current": {"time": "2026-10-19T12:00", "pm10": 14.2}},
        }
    )
    location = _location(air_quality=True)

    async with OpenMeteoClient(transport=transport) as client:
        snapshot = await client.fetch_snapshot(location, WeatherConfig(locations=(location,)))

    assert [url for url, _ in transport.calls] == [FORECAST_URL, AIR_QUALITY_URL]
    assert snapshot.current[CurrentField.TEMPERATURE_2M] == 11.0
    assert snapshot.daily[0][DailyField.WEATHER_CODE] == 3
    assert snapshot.air_current[AirField.PM10] == 14.2


@pytest.mark.asyncio
async def test_fetch_snapshot_skips_air_quality_when_disabled() -> None:
    transport = FakeTransport()
    location = _location(air_quality=False)

    async with OpenMeteoClient(transport=transport) as client:
        snapshot = await client.fetch_snapshot(location, WeatherConfig(locations=(location,)))

    assert [url for url, _ in transport.calls] == [FORECAST_URL]
    assert snapshot.air_current == {}


@pytest.mark.asyncio
async def test_fetch_snapshot_propagates_transport_errors() -> None:
    transport = FakeTransport(fail_urls={AIR_QUALITY_URL})
    location = _location(air_quality=True)

    async with OpenMeteoClient(transport=transport) as client:
        with pytest.raises(MeteoTransportError) as exc_info:
            await client.fetch_snapshot(location, WeatherConfig(locations=(location,)))

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    location = _location()
    with pytest.raises(MeteoError):
        await OpenMeteoClient().fetch_snapshot(location, WeatherConfig(locations=(location,)))
