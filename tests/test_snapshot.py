from __future__ import annotations

from datetime import date

import pytest

from pyopenmeteo.exceptions import MalformedFieldError
from pyopenmeteo.ingestion.normalize import clock_time, columns_to_rows, is_number, parse_day
from pyopenmeteo.models import AirField, CurrentField, DailyField, HourlyField, Snapshot


def test_from_api_builds_rows_from_columns() -> None:
    weather = {
        "latitude": 52.52,
        "current": {"time": "2026-10-19T12:00", "temperature_2m": 11.5, "brand_new_field": 1},
        "daily": {
            "time": ["2026-10-19", "2026-10-20"],
            "temperature_2m_max": [14.0, None],
            "sunrise": ["2026-10-19T07:42", "2026-10-20T07:44"],
        },
        "hourly": {"time": ["2026-10-19T00:00"], "temperature_2m": [9.0]},
    }

    snapshot = Snapshot.from_api(weather)

    assert snapshot.current == {CurrentField.TIME: "2026-10-19T12:00", CurrentField.TEMPERATURE_2M: 11.5}
    assert len(snapshot.daily) == 2
    assert snapshot.daily[0][DailyField.TEMPERATURE_2M_MAX] == 14.0
    # Null cells are left out of the row.
    assert DailyField.TEMPERATURE_2M_MAX not in snapshot.daily[1]
    assert snapshot.hourly[0][HourlyField.TEMPERATURE_2M] == 9.0
    assert snapshot.air_current == {}
    assert snapshot.air_hourly == []


def test_from_api_with_air_quality() -> None:
    air = {
        "current": {"time": "2026-10-19T12:00", "european_aqi": 21, "birch_pollen": 3.5},
        "hourly": {"time": ["2026-10-19T00:00", "2026-10-19T01:00"], "birch_pollen": [1.0, 2.0]},
    }

    snapshot = Snapshot.from_api({}, air)

    assert snapshot.air_current[AirField.EUROPEAN_AQI] == 21
    assert [row[AirField.BIRCH_POLLEN] for row in snapshot.air_hourly] == [1.0, 2.0]
    assert snapshot.daily == []


def test_snapshot_is_immutable() -> None:
    snapshot = Snapshot()
    with pytest.raises(Exception):  # noqa: B017
        snapshot.current = {}  # type: ignore[misc]


def test_field_check_rejects_wrong_kinds() -> None:
    assert CurrentField.TEMPERATURE_2M.check(1.5) == 1.5
    assert DailyField.SUNRISE.check("2026-10-19T07:42") == "2026-10-19T07:42"

    with pytest.raises(MalformedFieldError) as exc_info:
        CurrentField.TEMPERATURE_2M.check("warm")
    assert exc_info.value.field == "temperature_2m"

    with pytest.raises(MalformedFieldError):
        CurrentField.IS_DAY.check(True)
    with pytest.raises(MalformedFieldError):
        CurrentField.WIND_DIRECTION_10M.check(float("inf"))
    with pytest.raises(MalformedFieldError):
        DailyField.SUNSET.check(1700000000)


def test_columns_to_rows_follows_time_column() -> None:
    rows = columns_to_rows({"time": ["a", "b"], "x": [1], "y": "not-a-column"})
    assert rows == [{"time": "a", "x": 1}, {"time": "b"}]
    assert columns_to_rows({"x": [1, 2]}) == []


def test_clock_time() -> None:
    assert clock_time("2026-10-19T07:42") == "07:42"
    assert clock_time("2026-10-19T07:42:10") == "07:42"
    assert clock_time("2026-10-19") == "2026-10-19"


def test_parse_day() -> None:
    assert parse_day("2026-10-19") == date(2026, 10, 19)
    assert parse_day("2026-10-19T00:00") == date(2026, 10, 19)
    assert parse_day("yesterday") is None
    assert parse_day(None) is None


def test_is_number() -> None:
    assert is_number(1)
    assert is_number(1.5)
    assert not is_number(True)
    assert not is_number(float("nan"))
    assert not is_number(float("inf"))
    assert not is_number(float("-inf"))
    assert not is_number("1")
