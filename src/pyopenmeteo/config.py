"""Configuration for pyopenmeteo."""

from __future__ import annotations

import dataclasses
import os
import re
from collections.abc import Mapping, Sequence
from typing import Any

from pyopenmeteo._constants import (
    AIR_QUALITY_URL,
    DEFAULT_LANGUAGE,
    FORECAST_URL,
    ICON_BASE_URL,
    INFO_FOLDER,
    MAX_FORECAST_DAYS,
    MAX_FORECAST_HOURS,
)
from pyopenmeteo.exceptions import MeteoConfigError

_SLUG_FORBIDDEN = re.compile(r"[^A-Za-z0-9]")


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def slugify(name: str) -> str:
    """Sanitize a location name into a folder slug (non-alphanumeric -> ``_``)."""
    return _SLUG_FORBIDDEN.sub("_", name)


@dataclasses.dataclass(frozen=True)
class LocationConfig:
    """One configured location.

    Parameters
    ----------
    name : str
        Display name; sanitized into :attr:`slug`, the root of the
        location's subtree.
    latitude, longitude : float
        Coordinates in degrees.
    timezone : str
        IANA time zone used for forecast alignment and moon times.
    air_quality : bool
        Fetch and publish the ``air`` subtree.
    hourly_forecast : bool
        Publish ``weather.hourly`` (and ``air.hourly``).
    forecast_days : int
        Number of ``day<N>`` folders kept below ``weather.forecast``.
    forecast_hours : int
        Number of ``hour<N>`` folders kept below the hourly subtrees.
    """

    name: str
    latitude: float
    longitude: float
    timezone: str = "Europe/Berlin"
    air_quality: bool = True
    hourly_forecast: bool = False
    forecast_days: int = 7
    forecast_hours: int = 24

    @property
    def slug(self) -> str:
        return slugify(self.name)

    def validate(self) -> None:
        slug = self.slug
        if not slug:
            raise MeteoConfigError("location name must be non-empty")
        if slug == INFO_FOLDER:
            raise MeteoConfigError(f"location name {self.name!r} is reserved")
        if not -90.0 <= self.latitude <= 90.0:
            raise MeteoConfigError(f"{self.name}: latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise MeteoConfigError(f"{self.name}: longitude out of range: {self.longitude}")
        if not 1 <= self.forecast_days <= MAX_FORECAST_DAYS:
            raise MeteoConfigError(f"{self.name}: forecast_days must be between 1 and {MAX_FORECAST_DAYS}")
        if not 0 <= self.forecast_hours <= MAX_FORECAST_HOURS:
            raise MeteoConfigError(f"{self.name}: forecast_hours must be between 0 and {MAX_FORECAST_HOURS}")


@dataclasses.dataclass(frozen=True)
class WeatherConfig:
    """Adapter configuration.

    Parameters
    ----------
    locations : tuple of LocationConfig
        Configured locations; synced sequentially in this order.
    imperial : bool
        Request °F / mph / inch from the API and label units accordingly.
    interval_minutes : int
        Minutes between two sync cycles.
    language : str
        Locale for labels and derived texts (``"en"``, ``"de"``).
    night_icons : bool
        Use the night variant of the current/hourly weather icon when
        ``is_day`` is 0.
    wind_direction_icons : bool
        Publish ``wind_direction_icon`` next to every wind-direction field.
    pollen_text : bool
        Publish the ``<species>_pollen_text`` severity points.
    icon_base_url : str
        Prefix for derived icon URLs.
    api_key : str or None
        Open-Meteo commercial API key (sent as ``apikey``).
    forecast_url, air_quality_url : str
        API endpoints.
    request_timeout : float
        Total HTTP timeout in seconds for one request.
    """

    locations: tuple[LocationConfig, ...] = ()
    imperial: bool = False
    interval_minutes: int = 15
    language: str = DEFAULT_LANGUAGE
    night_icons: bool = True
    wind_direction_icons: bool = True
    pollen_text: bool = True
    icon_base_url: str = ICON_BASE_URL
    api_key: str | None = None
    forecast_url: str = FORECAST_URL
    air_quality_url: str = AIR_QUALITY_URL
    request_timeout: float = 30.0

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the config stays hashable.
        if not isinstance(self.locations, tuple):
            object.__setattr__(self, "locations", tuple(self.locations))
        if self.interval_minutes < 1:
            raise MeteoConfigError("interval_minutes must be >= 1")
        seen: set[str] = set()
        for location in self.locations:
            location.validate()
            if location.slug in seen:
                raise MeteoConfigError(f"duplicate location slug {location.slug!r}")
            seen.add(location.slug)

    def location(self, slug: str) -> LocationConfig | None:
        for location in self.locations:
            if location.slug == slug:
                return location
        return None

    @classmethod
    def from_dict(cls, native: Mapping[str, Any]) -> WeatherConfig:
        """Create configuration from an adapter-style native config dict.

        Global feature flags (``airQualityEnabled``, ``hourlyEnabled``,
        ``forecastDays``, ``forecastHours``) act as defaults for every
        location; keys on a location entry override them.
        """
        air_default = bool(native.get("airQualityEnabled", True))
        hourly_default = bool(native.get("hourlyEnabled", False))
        days_default = int(native.get("forecastDays", 7))
        hours_default = int(native.get("forecastHours", 24))

        raw_locations = native.get("locations") or []
        if not isinstance(raw_locations, Sequence) or isinstance(raw_locations, str):
            raise MeteoConfigError("locations must be a list")

        locations: list[LocationConfig] = []
        for entry in raw_locations:
            if not isinstance(entry, Mapping):
                raise MeteoConfigError(f"invalid location entry: {entry!r}")
            try:
                locations.append(
                    LocationConfig(
                        name=str(entry["name"]),
                        latitude=float(entry["lat"]),
                        longitude=float(entry["lon"]),
                        timezone=str(entry.get("tz") or "Europe/Berlin"),
                        air_quality=bool(entry.get("airQualityEnabled", air_default)),
                        hourly_forecast=bool(entry.get("hourlyEnabled", hourly_default)),
                        forecast_days=int(entry.get("forecastDays", days_default)),
                        forecast_hours=int(entry.get("forecastHours", hours_default)),
                    )
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise MeteoConfigError(f"invalid location entry {entry!r}: {exc}") from exc

        kwargs: dict[str, Any] = {
            "locations": tuple(locations),
            "imperial": bool(native.get("imperial", False)),
            "interval_minutes": int(native.get("interval", 15)),
            "language": str(native.get("language") or DEFAULT_LANGUAGE),
            "night_icons": bool(native.get("isNight_icon", True)),
            "wind_direction_icons": bool(native.get("isWinddirection_icon", True)),
            "pollen_text": bool(native.get("pollenEnabled", True)),
        }
        if native.get("apiKey"):
            kwargs["api_key"] = str(native["apiKey"])
        return cls(**kwargs)

    @classmethod
    def from_env(cls, **overrides: Any) -> WeatherConfig:
        """Create a single-location configuration from environment variables.

        Reads ``OPEN_METEO_NAME``, ``OPEN_METEO_LATITUDE`` and
        ``OPEN_METEO_LONGITUDE`` plus optional ``OPEN_METEO_*`` variables.
        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        WeatherConfig
            Populated configuration.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        if "locations" not in overrides:
            lat = env.get("OPEN_METEO_LATITUDE")
            lon = env.get("OPEN_METEO_LONGITUDE")
            if lat is None or lon is None:
                raise MeteoConfigError("OPEN_METEO_LATITUDE and OPEN_METEO_LONGITUDE must be set")
            location = LocationConfig(
                name=env.get("OPEN_METEO_NAME", "home"),
                latitude=float(lat),
                longitude=float(lon),
                timezone=env.get("OPEN_METEO_TIMEZONE", "Europe/Berlin"),
                air_quality=_env_bool(env.get("OPEN_METEO_AIR_QUALITY"), True),
                hourly_forecast=_env_bool(env.get("OPEN_METEO_HOURLY"), False),
                forecast_days=int(env.get("OPEN_METEO_FORECAST_DAYS", "7")),
                forecast_hours=int(env.get("OPEN_METEO_FORECAST_HOURS", "24")),
            )
            config_kwargs["locations"] = (location,)

        _ENV_CONFIG_MAP = {
            "OPEN_METEO_LANGUAGE": "language",
            "OPEN_METEO_API_KEY": "api_key",
            "OPEN_METEO_ICON_BASE_URL": "icon_base_url",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        interval_env = env.get("OPEN_METEO_INTERVAL")
        if interval_env is not None and "interval_minutes" not in overrides:
            config_kwargs["interval_minutes"] = int(interval_env)

        if "imperial" not in overrides:
            config_kwargs["imperial"] = _env_bool(env.get("OPEN_METEO_IMPERIAL"), False)

        if "night_icons" not in overrides:
            config_kwargs["night_icons"] = _env_bool(env.get("OPEN_METEO_NIGHT_ICONS"), True)

        if "wind_direction_icons" not in overrides:
            config_kwargs["wind_direction_icons"] = _env_bool(env.get("OPEN_METEO_WIND_DIRECTION_ICONS"), True)

        if "pollen_text" not in overrides:
            config_kwargs["pollen_text"] = _env_bool(env.get("OPEN_METEO_POLLEN_TEXT"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
