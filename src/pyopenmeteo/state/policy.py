"""Deterministic tree-validity policy.

Decides, from the current configuration alone, whether a persisted
data-point id may stay. This module contains no store access; the
reconciliation pass in :mod:`pyopenmeteo.state.reconcile` applies it.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pyopenmeteo._constants import INFO_FOLDER
from pyopenmeteo.config import WeatherConfig
from pyopenmeteo.models.datapoint import DataPointId

_DAY_SEGMENT = re.compile(r"day(\d+)")
_HOUR_SEGMENT = re.compile(r"hour(\d+)")


class StaleReason(StrEnum):
    """Why a subtree is outside the valid tree (rules are checked in this order)."""

    LOCATION_REMOVED = "location_removed"
    AIR_QUALITY_DISABLED = "air_quality_disabled"
    HOURLY_DISABLED = "hourly_disabled"
    DAY_OUT_OF_RANGE = "day_out_of_range"
    HOUR_OUT_OF_RANGE = "hour_out_of_range"
    DERIVED_POINT_DISABLED = "derived_point_disabled"


def _indexed_segment(point_id: DataPointId, pattern: re.Pattern[str]) -> tuple[int, int] | None:
    """Return ``(segment position, index)`` of the first segment matching *pattern*."""
    for position, segment in enumerate(point_id.parts):
        match = pattern.fullmatch(segment)
        if match is not None:
            return position, int(match.group(1))
    return None


class ValidTree:
    """The set of subtrees the current configuration allows to exist."""

    def __init__(self, config: WeatherConfig) -> None:
        self._config = config

    def stale_subtree(self, point_id: DataPointId) -> tuple[DataPointId, StaleReason] | None:
        """Return the subtree to delete for *point_id*, or ``None`` when it is valid.

        The first matching rule wins; the returned id is the root of the
        offending subtree (the whole location, ``<slug>.air``, an hourly
        folder, a ``day<N>`` or an ``hour<N>`` folder) or, for a derived
        point switched off in the configuration, the point itself.
        """
        slug = point_id.root
        if slug == INFO_FOLDER:
            return None

        location = self._config.location(slug)
        if location is None:
            return point_id.prefix(1), StaleReason.LOCATION_REMOVED

        parts = point_id.parts
        if not location.air_quality and len(parts) > 1 and parts[1] == "air":
            return point_id.prefix(2), StaleReason.AIR_QUALITY_DISABLED

        is_hourly = len(parts) > 2 and parts[2] == "hourly"
        if is_hourly and not location.hourly_forecast:
            return point_id.prefix(3), StaleReason.HOURLY_DISABLED

        if not is_hourly:
            day = _indexed_segment(point_id, _DAY_SEGMENT)
            if day is not None and day[1] >= location.forecast_days:
                return point_id.prefix(day[0] + 1), StaleReason.DAY_OUT_OF_RANGE

        if location.hourly_forecast:
            hour = _indexed_segment(point_id, _HOUR_SEGMENT)
            if hour is not None and hour[1] >= location.forecast_hours:
                return point_id.prefix(hour[0] + 1), StaleReason.HOUR_OUT_OF_RANGE

        if self._derived_disabled(point_id.name):
            return point_id, StaleReason.DERIVED_POINT_DISABLED

        return None

    def _derived_disabled(self, name: str) -> bool:
        if not self._config.wind_direction_icons and name == "wind_direction_icon":
            return True
        return not self._config.pollen_text and name.endswith("_pollen_text")

    def is_valid(self, point_id: DataPointId) -> bool:
        return self.stale_subtree(point_id) is None
