"""Weather and air-quality snapshot model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pyopenmeteo.ingestion.normalize import columns_to_rows
from pyopenmeteo.models._base import SnapshotField, known_fields


class CurrentField(SnapshotField):
    """Fields of the ``current`` block of the forecast API (in write order)."""

    TIME = "time"
    TEMPERATURE_2M = "temperature_2m"
    RELATIVE_HUMIDITY_2M = "relative_humidity_2m"
    APPARENT_TEMPERATURE = "apparent_temperature"
    IS_DAY = "is_day"
    PRECIPITATION = "precipitation"
    RAIN = "rain"
    SHOWERS = "showers"
    SNOWFALL = "snowfall"
    WEATHER_CODE = "weather_code"
    CLOUD_COVER = "cloud_cover"
    PRESSURE_MSL = "pressure_msl"
    SURFACE_PRESSURE = "surface_pressure"
    WIND_SPEED_10M = "wind_speed_10m"
    WIND_DIRECTION_10M = "wind_direction_10m"
    WIND_GUSTS_10M = "wind_gusts_10m"


class DailyField(SnapshotField):
    """Fields of one ``daily`` row of the forecast API."""

    TIME = "time"
    WEATHER_CODE = "weather_code"
    TEMPERATURE_2M_MAX = "temperature_2m_max"
    TEMPERATURE_2M_MIN = "temperature_2m_min"
    APPARENT_TEMPERATURE_MAX = "apparent_temperature_max"
    APPARENT_TEMPERATURE_MIN = "apparent_temperature_min"
    SUNRISE = "sunrise"
    SUNSET = "sunset"
    SUNSHINE_DURATION = "sunshine_duration"
    UV_INDEX_MAX = "uv_index_max"
    PRECIPITATION_SUM = "precipitation_sum"
    RAIN_SUM = "rain_sum"
    SHOWERS_SUM = "showers_sum"
    SNOWFALL_SUM = "snowfall_sum"
    PRECIPITATION_PROBABILITY_MAX = "precipitation_probability_max"
    WIND_SPEED_10M_MAX = "wind_speed_10m_max"
    WIND_GUSTS_10M_MAX = "wind_gusts_10m_max"
    WIND_DIRECTION_10M_DOMINANT = "wind_direction_10m_dominant"
    DEW_POINT_2M_MEAN = "dew_point_2m_mean"


class HourlyField(SnapshotField):
    """Fields of one ``hourly`` row of the forecast API."""

    TIME = "time"
    TEMPERATURE_2M = "temperature_2m"
    RELATIVE_HUMIDITY_2M = "relative_humidity_2m"
    APPARENT_TEMPERATURE = "apparent_temperature"
    IS_DAY = "is_day"
    PRECIPITATION_PROBABILITY = "precipitation_probability"
    PRECIPITATION = "precipitation"
    WEATHER_CODE = "weather_code"
    CLOUD_COVER = "cloud_cover"
    UV_INDEX = "uv_index"
    WIND_SPEED_10M = "wind_speed_10m"
    WIND_DIRECTION_10M = "wind_direction_10m"
    WIND_GUSTS_10M = "wind_gusts_10m"


class AirField(SnapshotField):
    """Fields of the air-quality API (``current`` block and ``hourly`` rows)."""

    TIME = "time"
    EUROPEAN_AQI = "european_aqi"
    PM10 = "pm10"
    PM2_5 = "pm2_5"
    NITROGEN_DIOXIDE = "nitrogen_dioxide"
    OZONE = "ozone"
    ALDER_POLLEN = "alder_pollen"
    BIRCH_POLLEN = "birch_pollen"
    GRASS_POLLEN = "grass_pollen"
    MUGWORT_POLLEN = "mugwort_pollen"
    OLIVE_POLLEN = "olive_pollen"
    RAGWEED_POLLEN = "ragweed_pollen"


# Air hourly rows carry pollen only; the other fields stay at ``air.current``.
AIR_HOURLY_FIELDS: tuple[AirField, ...] = (
    AirField.TIME,
    AirField.ALDER_POLLEN,
    AirField.BIRCH_POLLEN,
    AirField.GRASS_POLLEN,
    AirField.MUGWORT_POLLEN,
    AirField.OLIVE_POLLEN,
    AirField.RAGWEED_POLLEN,
)


class Snapshot(BaseModel):
    """One location's fetched data, valid for a single sync pass.

    Parameters
    ----------
    current : dict
        Current observation.
    daily : list of dict
        One row per forecast day (``daily[0]`` is today).
    hourly : list of dict
        One row per forecast hour; empty unless hourly data was requested.
    air_current : dict
        Current air-quality observation; empty unless requested.
    air_hourly : list of dict
        One air-quality row per forecast hour; empty unless requested.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    current: dict[CurrentField, Any] = Field(default_factory=dict)
    daily: list[dict[DailyField, Any]] = Field(default_factory=list)
    hourly: list[dict[HourlyField, Any]] = Field(default_factory=list)
    air_current: dict[AirField, Any] = Field(default_factory=dict)
    air_hourly: list[dict[AirField, Any]] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _keep_known_fields(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        cleaned = dict(values)
        cleaned["current"] = known_fields(CurrentField, values.get("current"), section="current")
        cleaned["air_current"] = known_fields(AirField, values.get("air_current"), section="air.current")
        for key, field_cls in (("daily", DailyField), ("hourly", HourlyField), ("air_hourly", AirField)):
            rows = values.get(key) or []
            cleaned[key] = [known_fields(field_cls, row, section=key) for row in rows if isinstance(row, Mapping)]
        return cleaned

    @classmethod
    def from_api(
        cls,
        weather: Mapping[str, Any],
        air: Mapping[str, Any] | None = None,
    ) -> Snapshot:
        """Build a snapshot from raw forecast and air-quality API responses.

        The APIs deliver ``daily``/``hourly`` as columns; they are turned
        into one row per day/hour here.
        """
        values: dict[str, Any] = {
            "current": weather.get("current") or {},
            "daily": columns_to_rows(weather.get("daily") or {}),
            "hourly": columns_to_rows(weather.get("hourly") or {}),
        }
        if air is not None:
            values["air_current"] = air.get("current") or {}
            values["air_hourly"] = columns_to_rows(air.get("hourly") or {})
        return cls.model_validate(values)
