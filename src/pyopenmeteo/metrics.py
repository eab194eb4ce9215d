"""Derived metrics computed from raw snapshot readings.

Everything here is pure: no I/O, no state. Functions return ``None``
when an input is absent or not numeric; callers skip the derived point
in that case instead of writing a placeholder.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pyopenmeteo._constants import (
    KMH_PER_MPH,
    POLLEN_THRESHOLDS,
    POLLEN_THRESHOLDS_BY_SPECIES,
    WIND_DIRECTION_ICONS,
    WIND_GUST_ICONS,
    WIND_GUST_THRESHOLDS_KMH,
    celsius_to_fahrenheit,
    fahrenheit_to_celsius,
)
from pyopenmeteo.ingestion.normalize import round_half_up, safe_float

# ---------------------------------------------------------------------------
# Dew point
# ---------------------------------------------------------------------------

_MAGNUS_A = 17.625
_MAGNUS_B = 243.04


def dew_point(temperature: Any, humidity: Any, *, imperial: bool = False) -> float | None:
    """Magnus-formula dew point, rounded to one decimal.

    ``alpha = ln(rh/100) + a*t/(b+t)``, ``dp = b*alpha/(a-alpha)`` with
    ``a=17.625, b=243.04`` (Alduchov & Eskridge 1996). With *imperial*
    the temperature is taken and returned in °F.
    """
    temp = safe_float(temperature)
    rh = safe_float(humidity)
    if temp is None or rh is None or rh <= 0:
        return None
    temp_c = fahrenheit_to_celsius(temp) if imperial else temp
    if temp_c <= -_MAGNUS_B:
        return None
    alpha = math.log(rh / 100.0) + (_MAGNUS_A * temp_c) / (_MAGNUS_B + temp_c)
    result = (_MAGNUS_B * alpha) / (_MAGNUS_A - alpha)
    if imperial:
        result = celsius_to_fahrenheit(result)
    return round(result, 1)


# ---------------------------------------------------------------------------
# Wind
# ---------------------------------------------------------------------------

COMPASS_LABELS: tuple[str, ...] = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


@dataclass(frozen=True, slots=True)
class CompassPoint:
    """One point of the 8-way compass rose."""

    label: str
    index: int

    @property
    def icon(self) -> str:
        return WIND_DIRECTION_ICONS[self.index]

    @property
    def translation_key(self) -> str:
        return f"direction.{self.label.lower()}"


def compass_direction(degrees: Any) -> CompassPoint | None:
    """Map a bearing to the 8-way rose: ``index = round(degrees / 45) mod 8``.

    Sectors are centred on the points, so 22.4° is N and 22.5° is NE.
    """
    value = safe_float(degrees)
    if value is None:
        return None
    index = round_half_up(value / 45.0) % 8
    return CompassPoint(label=COMPASS_LABELS[index], index=index)


def gust_severity(gust: Any, *, imperial: bool = False) -> int | None:
    """Return the gust band 0..5; each threshold is the inclusive lower bound of the next band."""
    value = safe_float(gust)
    if value is None:
        return None
    thresholds = WIND_GUST_THRESHOLDS_KMH
    if imperial:
        thresholds = tuple(t / KMH_PER_MPH for t in thresholds)
    return sum(1 for threshold in thresholds if value >= threshold)


def gust_severity_icon(gust: Any, *, imperial: bool = False) -> str | None:
    band = gust_severity(gust, imperial=imperial)
    if band is None:
        return None
    return WIND_GUST_ICONS[band]


# ---------------------------------------------------------------------------
# Pollen
# ---------------------------------------------------------------------------


class PollenLevel(StrEnum):
    NONE = "none"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


def pollen_thresholds(species: str | None = None) -> tuple[float, float, float]:
    if species is None:
        return POLLEN_THRESHOLDS
    for name, thresholds in POLLEN_THRESHOLDS_BY_SPECIES.items():
        if name in species:
            return thresholds
    return POLLEN_THRESHOLDS


def pollen_severity(concentration: Any, species: str | None = None) -> PollenLevel | None:
    """Classify a pollen concentration (grains/m³).

    Default thresholds are ``[1, 10, 50]``; birch uses ``[10, 100, 500]``.
    *species* may be a bare name (``"birch"``) or a field key
    (``"birch_pollen"``).
    """
    value = safe_float(concentration)
    if value is None:
        return None
    low, moderate, high = pollen_thresholds(species)
    if value >= high:
        return PollenLevel.HIGH
    if value >= moderate:
        return PollenLevel.MODERATE
    if value >= low:
        return PollenLevel.LOW
    return PollenLevel.NONE


# ---------------------------------------------------------------------------
# Moon phase
# ---------------------------------------------------------------------------


class MoonPhase(StrEnum):
    NEW_MOON = "new_moon"
    WAXING_CRESCENT = "waxing_crescent"
    FIRST_QUARTER = "first_quarter"
    WAXING_GIBBOUS = "waxing_gibbous"
    FULL_MOON = "full_moon"
    WANING_GIBBOUS = "waning_gibbous"
    LAST_QUARTER = "last_quarter"
    WANING_CRESCENT = "waning_crescent"

    @property
    def icon(self) -> str:
        return f"moon/{self.value}.png"

    @property
    def translation_key(self) -> str:
        return f"moon.{self.value}"


# Upper bounds (exclusive); anything from .97 on wraps back to new moon.
_MOON_BUCKETS: tuple[tuple[float, MoonPhase], ...] = (
    (0.03, MoonPhase.NEW_MOON),
    (0.22, MoonPhase.WAXING_CRESCENT),
    (0.28, MoonPhase.FIRST_QUARTER),
    (0.47, MoonPhase.WAXING_GIBBOUS),
    (0.53, MoonPhase.FULL_MOON),
    (0.72, MoonPhase.WANING_GIBBOUS),
    (0.78, MoonPhase.LAST_QUARTER),
    (0.97, MoonPhase.WANING_CRESCENT),
)


def lunar_phase(fraction: float) -> MoonPhase:
    """Bucket a lunation fraction in ``[0, 1)`` (0 new, 0.5 full)."""
    value = fraction % 1.0
    for upper, phase in _MOON_BUCKETS:
        if value < upper:
            return phase
    return MoonPhase.NEW_MOON


# ---------------------------------------------------------------------------
# Weather code, sunshine
# ---------------------------------------------------------------------------

# WMO weather interpretation codes published by Open-Meteo.
WEATHER_CODES: frozenset[int] = frozenset(
    {0, 1, 2, 3, 45, 48, 51, 53, 55, 56, 57, 61, 63, 65, 66, 67, 71, 73, 75, 77, 80, 81, 82, 85, 86, 95, 96, 99}
)


def weather_code_key(code: Any) -> str:
    """Translation key for a WMO weather code; ``weather.unknown`` when unrecognized."""
    value = safe_float(code)
    if value is None or not value.is_integer() or int(value) not in WEATHER_CODES:
        return "weather.unknown"
    return f"weather.{int(value)}"


def weather_icon(code: Any, *, is_day: bool = True) -> str:
    """Icon file for a weather code; night variants carry an ``n`` suffix."""
    value = safe_float(code)
    if value is None or not value.is_integer() or int(value) not in WEATHER_CODES:
        return "unknown.png"
    suffix = "" if is_day else "n"
    return f"{int(value)}{suffix}.png"


def sunshine_hours(seconds: float) -> float:
    return round(seconds / 3600.0, 2)
