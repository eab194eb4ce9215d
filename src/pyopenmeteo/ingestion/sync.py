"""State-tree synchronizer.

Projects one location's :class:`~pyopenmeteo.models.snapshot.Snapshot`
onto the object store:

- every raw field present in a section becomes ``<path>.<field>``
- companion derived points (weather text/icon, wind direction text/icon,
  gust icon, dew point, pollen text) are written right after the raw
  field they are computed from
- each forecast day additionally gets weekday and moon points

Metadata is defined once per id and process (see
:class:`~pyopenmeteo._cache.ObjectCache`); values are written on every
pass. Writes follow field-enum order, so the same snapshot always yields
the same sequence of store calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pyopenmeteo._cache import SyncState
from pyopenmeteo.astro import AstralMoonCalculator, MoonCalculator
from pyopenmeteo.config import LocationConfig, WeatherConfig
from pyopenmeteo.exceptions import MalformedFieldError
from pyopenmeteo.ingestion.normalize import clock_time, parse_day
from pyopenmeteo.metrics import (
    compass_direction,
    dew_point,
    gust_severity_icon,
    lunar_phase,
    pollen_severity,
    sunshine_hours,
    weather_code_key,
    weather_icon,
)
from pyopenmeteo.models._base import SnapshotField
from pyopenmeteo.models.datapoint import DataPointId, DataPointMetadata, declared_type
from pyopenmeteo.models.snapshot import AIR_HOURLY_FIELDS, AirField, CurrentField, DailyField, HourlyField, Snapshot
from pyopenmeteo.naming import DataPointNamer, NamedPoint
from pyopenmeteo.state.store import ObjectStore
from pyopenmeteo.translations import Translator

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DerivedPoint:
    """A point computed from raw readings.

    ``unit=None`` lets the namer infer the unit from *key*.
    """

    key: str
    value: Any
    role: str
    unit: str | None = ""


class TreeSynchronizer:
    """Idempotent create-once/write-always projection of snapshots."""

    def __init__(
        self,
        store: ObjectStore,
        state: SyncState,
        config: WeatherConfig,
        *,
        translator: Translator | None = None,
        moon: MoonCalculator | None = None,
    ) -> None:
        self._store = store
        self._state = state
        self._config = config
        self._translator = translator or Translator(config.language)
        self._moon = moon or AstralMoonCalculator()
        self._namer = DataPointNamer(self._translator, imperial=config.imperial)

    async def sync(self, location: LocationConfig, snapshot: Snapshot) -> int:
        """Write every point implied by *snapshot*; return the number of value writes.

        Malformed fields are skipped with a warning. Store failures
        propagate to the caller.
        """
        root = DataPointId.of(location.slug)
        writes = 0

        writes += await self._sync_row(
            root.child("weather", "current"),
            CurrentField,
            snapshot.current,
            is_day=self._is_day(snapshot.current.get(CurrentField.IS_DAY)),
        )

        for index, row in enumerate(snapshot.daily[: location.forecast_days]):
            path = root.child("weather", "forecast", f"day{index}")
            writes += await self._sync_row(path, DailyField, row, is_day=True)
            writes += await self._sync_day_extras(path, row, location)

        if location.hourly_forecast:
            for index, row in enumerate(snapshot.hourly[: location.forecast_hours]):
                path = root.child("weather", "hourly", f"hour{index}")
                writes += await self._sync_row(path, HourlyField, row, is_day=self._is_day(row.get(HourlyField.IS_DAY)))

        if location.air_quality:
            writes += await self._sync_row(root.child("air", "current"), AirField, snapshot.air_current)
            if location.hourly_forecast:
                for index, row in enumerate(snapshot.air_hourly[: location.forecast_hours]):
                    pollen_row = {field: value for field, value in row.items() if field in AIR_HOURLY_FIELDS}
                    writes += await self._sync_row(root.child("air", "hourly", f"hour{index}"), AirField, pollen_row)

        _logger.debug("Synced %s: %d values written", location.slug, writes)
        return writes

    async def write_point(
        self,
        path: DataPointId,
        key: str,
        value: Any,
        *,
        role: str = "value",
        unit: str | None = None,
    ) -> None:
        """Define (once) and write a single point ``<path>.<key>``."""
        await self._put(self._namer.name(path, key, unit=unit), value, role=role)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _put(self, named: NamedPoint, value: Any, *, role: str) -> None:
        cache = self._state.cache
        if not cache.has_definition(named.id):
            metadata = DataPointMetadata(
                type=declared_type(value),
                role=role,
                unit=named.unit,
                name=named.label,
            )
            await self._store.define(named.id, metadata)
            cache.mark_defined(named.id)
        await self._store.write(named.id, value, ack=True)

    async def _sync_row(
        self,
        path: DataPointId,
        fields: type[SnapshotField],
        row: Mapping[Any, Any],
        *,
        is_day: bool = True,
    ) -> int:
        writes = 0
        for field in fields:
            if field not in row:
                continue
            try:
                value = self._convert(field, field.check(row[field]))
            except MalformedFieldError as exc:
                _logger.warning("Skipping %s: %s", path.child(field.value), exc)
                continue

            await self._put(self._namer.name(path, field.value), value, role="value")
            writes += 1

            for derived in self._companions(field, value, row, is_day=is_day):
                named = self._namer.name(path, derived.key, unit=derived.unit)
                await self._put(named, derived.value, role=derived.role)
                writes += 1
        return writes

    @staticmethod
    def _convert(field: SnapshotField, value: Any) -> Any:
        if field.value == "sunshine_duration":
            return sunshine_hours(value)
        if field.value in ("sunrise", "sunset"):
            return clock_time(value)
        return value

    def _is_day(self, flag: Any) -> bool:
        if not self._config.night_icons:
            return True
        return flag != 0

    def _icon_url(self, name: str) -> str:
        return f"{self._config.icon_base_url.rstrip('/')}/{name}"

    def _companions(
        self,
        field: SnapshotField,
        value: Any,
        row: Mapping[Any, Any],
        *,
        is_day: bool,
    ) -> list[DerivedPoint]:
        key = field.value
        imperial = self._config.imperial
        tr = self._translator

        if key == "weather_code":
            return [
                DerivedPoint("weather_text", tr.translate(weather_code_key(value)), "text"),
                DerivedPoint("icon_url", self._icon_url(weather_icon(value, is_day=is_day)), "url"),
            ]

        if key.startswith("wind_direction"):
            point = compass_direction(value)
            if point is None:
                return []
            points = [DerivedPoint("wind_direction_text", tr.translate(point.translation_key), "text")]
            if self._config.wind_direction_icons:
                points.append(DerivedPoint("wind_direction_icon", self._icon_url(point.icon), "url"))
            return points

        if key.startswith("wind_gusts"):
            icon = gust_severity_icon(value, imperial=imperial)
            if icon is None:
                return []
            return [DerivedPoint("wind_gust_icon", self._icon_url(icon), "url")]

        if key == "relative_humidity_2m":
            result = dew_point(row.get(type(field)("temperature_2m")), value, imperial=imperial)
            if result is None:
                _logger.debug("No dew point: temperature missing or invalid")
                return []
            return [DerivedPoint("dew_point_2m", result, "value.temperature", unit=None)]

        if key.endswith("_pollen") and self._config.pollen_text:
            level = pollen_severity(value, key)
            if level is None:
                return []
            return [DerivedPoint(f"{key}_text", tr.translate(f"pollen.{level}"), "text")]

        return []

    async def _sync_day_extras(self, path: DataPointId, row: Mapping[Any, Any], location: LocationConfig) -> int:
        day = parse_day(row.get(DailyField.TIME))
        if day is None:
            _logger.warning("Skipping moon data for %s: missing or invalid date", path)
            return 0

        tr = self._translator
        times = self._moon.moon_times(day, location.latitude, location.longitude, location.timezone)
        fraction = self._moon.moon_phase(day)
        phase = lunar_phase(fraction)

        points = [DerivedPoint("day_name", tr.translate(f"weekday.{day.weekday()}"), "dayofweek")]
        if times.rise is not None:
            points.append(DerivedPoint("moonrise", times.rise.strftime(tr.time_format), "text"))
        if times.set is not None:
            points.append(DerivedPoint("moonset", times.set.strftime(tr.time_format), "text"))
        points.extend(
            [
                DerivedPoint("moon_phase_value", round(fraction, 2), "value"),
                DerivedPoint("moon_phase_text", tr.translate(phase.translation_key), "text"),
                DerivedPoint("moon_phase_icon", self._icon_url(phase.icon), "url"),
            ]
        )

        for derived in points:
            await self._put(self._namer.name(path, derived.key, unit=derived.unit), derived.value, role=derived.role)
        return len(points)
