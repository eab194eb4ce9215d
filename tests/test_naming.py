from __future__ import annotations

import pytest

from pyopenmeteo.config import slugify
from pyopenmeteo.exceptions import InvalidDataPointIdError
from pyopenmeteo.models.datapoint import DataPointId, declared_type
from pyopenmeteo.naming import DataPointNamer, unit_for
from pyopenmeteo.translations import Translator, translate


def test_data_point_id_round_trip_and_navigation() -> None:
    point_id = DataPointId.of("Berlin", "weather", "current").child("temperature_2m")

    assert str(point_id) == "Berlin.weather.current.temperature_2m"
    assert DataPointId.parse(str(point_id)) == point_id
    assert point_id.root == "Berlin"
    assert point_id.name == "temperature_2m"
    assert point_id.prefix(2) == DataPointId.of("Berlin", "weather")
    assert point_id.is_within(DataPointId.of("Berlin"))
    assert point_id.is_within(point_id)
    assert not DataPointId.of("Berlin").is_within(point_id)
    assert not DataPointId.of("Berlin2", "weather").is_within(DataPointId.of("Berlin"))


@pytest.mark.parametrize("segment", ["", "a.b", "a b", "ä"])
def test_data_point_id_rejects_bad_segments(segment: str) -> None:
    with pytest.raises(InvalidDataPointIdError):
        DataPointId.of("Berlin", segment)


def test_data_point_id_requires_a_segment() -> None:
    with pytest.raises(ValueError):
        DataPointId(())


def test_slugify() -> None:
    assert slugify("Berlin") == "Berlin"
    assert slugify("New York!") == "New_York_"
    assert slugify("Bad Tölz") == "Bad_T_lz"
    assert slugify("  Home ") == "__Home_"
    assert slugify(" Berlin") == "_Berlin"


@pytest.mark.parametrize(
    ("key", "metric", "imperial"),
    [
        ("temperature_2m", "°C", "°F"),
        ("apparent_temperature_max", "°C", "°F"),
        ("dew_point_2m", "°C", "°F"),
        ("precipitation_probability_max", "%", "%"),
        ("precipitation_sum", "mm", "inch"),
        ("rain_sum", "mm", "inch"),
        ("snowfall_sum", "cm", "inch"),
        ("wind_gusts_10m_max", "km/h", "mph"),
        ("wind_direction_10m_dominant", "°", "°"),
        ("pressure_msl", "hPa", "hPa"),
        ("sunshine_duration", "h", "h"),
        ("birch_pollen", "grains/m³", "grains/m³"),
        ("pm2_5", "µg/m³", "µg/m³"),
        ("weather_code", "", ""),
        ("european_aqi", "", ""),
    ],
)
def test_unit_for(key: str, metric: str, imperial: str) -> None:
    assert unit_for(key) == metric
    assert unit_for(key, imperial=True) == imperial


def test_namer_infers_unit_and_translated_label() -> None:
    namer = DataPointNamer(Translator("de"))
    named = namer.name(DataPointId.of("Berlin", "weather", "current"), "temperature_2m")

    assert str(named.id) == "Berlin.weather.current.temperature_2m"
    assert named.unit == "°C"
    assert named.label == "Temperatur"


def test_namer_explicit_unit_wins() -> None:
    namer = DataPointNamer(Translator("en"), imperial=True)
    named = namer.name(DataPointId.of("Berlin", "weather", "current"), "wind_direction_text", unit="")

    assert named.unit == ""
    assert named.label == "Wind direction (text)"


def test_translator_fallbacks() -> None:
    assert Translator("de").translate("weather.3") == "Bedeckt"
    # Unknown locale falls back to English, unknown key to the key itself.
    assert Translator("fr").translate("weather.3") == "Overcast"
    assert translate("en", "weather.12345") == "weather.12345"
    assert Translator("en").label("no_such_field") == "no_such_field"


def test_translator_time_format() -> None:
    assert Translator("de").time_format == "%H:%M"
    assert Translator("fr").time_format == Translator("en").time_format


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, "boolean"), (1, "number"), (2.5, "number"), ("x", "string"), (None, "mixed")],
)
def test_declared_type(value: object, expected: str) -> None:
    assert declared_type(value) == expected
