"""Async Open-Meteo client: the snapshot fetch collaborator."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyopenmeteo._transport import HttpTransport, Transport
from pyopenmeteo.config import LocationConfig, WeatherConfig
from pyopenmeteo.exceptions import MeteoError
from pyopenmeteo.models.snapshot import AIR_HOURLY_FIELDS, AirField, CurrentField, DailyField, HourlyField, Snapshot

_logger = logging.getLogger(__name__)


def _field_list(fields: Any) -> str:
    """Comma-separated API variable list; ``time`` is always returned by the API."""
    return ",".join(field.value for field in fields if field.value != "time")


def build_forecast_params(location: LocationConfig, config: WeatherConfig) -> dict[str, Any]:
    params: dict[str, Any] = {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "timezone": location.timezone,
        "current": _field_list(CurrentField),
        "daily": _field_list(DailyField),
        "forecast_days": location.forecast_days,
    }
    if location.hourly_forecast and location.forecast_hours > 0:
        params["hourly"] = _field_list(HourlyField)
        params["forecast_hours"] = location.forecast_hours
    if config.imperial:
        params["temperature_unit"] = "fahrenheit"
        params["wind_speed_unit"] = "mph"
        params["precipitation_unit"] = "inch"
    if config.api_key:
        params["apikey"] = config.api_key
    return params


def build_air_quality_params(location: LocationConfig, config: WeatherConfig) -> dict[str, Any]:
    params: dict[str, Any] = {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "timezone": location.timezone,
        "current": _field_list(AirField),
    }
    if location.hourly_forecast and location.forecast_hours > 0:
        params["hourly"] = _field_list(AIR_HOURLY_FIELDS)
        params["forecast_hours"] = location.forecast_hours
    if config.api_key:
        params["apikey"] = config.api_key
    return params


class OpenMeteoClient:
    """Async client for the Open-Meteo forecast and air-quality APIs.

    One request per API and call; no retries. Usage::

        async with OpenMeteoClient() as client:
            snapshot = await client.fetch_snapshot(location, config)
    """

    def __init__(
        self,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._timeout = timeout

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> OpenMeteoClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, timeout=self._timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise MeteoError("Client not initialized. Use 'async with OpenMeteoClient() as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Fetch
    # ------------------------------------------------------------------

    async def fetch_snapshot(self, location: LocationConfig, config: WeatherConfig) -> Snapshot:
        """Fetch weather (and, if enabled, air quality) for *location*.

        Raises :class:`~pyopenmeteo.exceptions.MeteoTransportError` when
        either request fails.
        """
        transport = self._require_transport()

        weather = await transport.get_json(config.forecast_url, build_forecast_params(location, config))
        air: dict[str, Any] | None = None
        if location.air_quality:
            air = await transport.get_json(config.air_quality_url, build_air_quality_params(location, config))

        snapshot = Snapshot.from_api(weather, air)
        _logger.debug(
            "Fetched %s: %d current, %d days, %d hours",
            location.slug,
            len(snapshot.current),
            len(snapshot.daily),
            len(snapshot.hourly),
        )
        return snapshot
