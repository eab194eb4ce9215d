"""Data-point naming: ids, units and display labels."""

from __future__ import annotations

from dataclasses import dataclass

from pyopenmeteo.models.datapoint import DataPointId
from pyopenmeteo.translations import Translator

# (substring, metric unit, imperial unit), most specific first: the first
# rule whose substring occurs in the field key wins.
UNIT_RULES: tuple[tuple[str, str, str], ...] = (
    ("precipitation_probability", "%", "%"),
    ("dew_point", "°C", "°F"),
    ("temperature", "°C", "°F"),
    ("humidity", "%", "%"),
    ("cloud_cover", "%", "%"),
    ("precipitation", "mm", "inch"),
    ("showers", "mm", "inch"),
    ("rain", "mm", "inch"),
    ("snowfall", "cm", "inch"),
    ("wind_direction", "°", "°"),
    ("wind_gusts", "km/h", "mph"),
    ("wind_speed", "km/h", "mph"),
    ("pressure", "hPa", "hPa"),
    ("sunshine_duration", "h", "h"),
    ("uv_index", "UV", "UV"),
    ("pm10", "µg/m³", "µg/m³"),
    ("pm2_5", "µg/m³", "µg/m³"),
    ("nitrogen_dioxide", "µg/m³", "µg/m³"),
    ("ozone", "µg/m³", "µg/m³"),
    ("pollen", "grains/m³", "grains/m³"),
)


def unit_for(key: str, *, imperial: bool = False) -> str:
    """Unit of a raw field key; empty string for unitless fields."""
    for needle, metric, imperial_unit in UNIT_RULES:
        if needle in key:
            return imperial_unit if imperial else metric
    return ""


@dataclass(frozen=True, slots=True)
class NamedPoint:
    id: DataPointId
    unit: str
    label: str


class DataPointNamer:
    """Resolve id, unit and label for a field below a section path."""

    def __init__(self, translator: Translator, *, imperial: bool = False) -> None:
        self._translator = translator
        self._imperial = imperial

    def name(
        self,
        path: DataPointId,
        key: str,
        *,
        label_key: str | None = None,
        unit: str | None = None,
    ) -> NamedPoint:
        """Name the point *key* below *path*.

        Derived points pass an explicit *unit* (usually ``""``) and a
        *label_key* distinct from the raw field they are computed from.
        """
        return NamedPoint(
            id=path.child(key),
            unit=unit_for(key, imperial=self._imperial) if unit is None else unit,
            label=self._translator.label(label_key or key),
        )
