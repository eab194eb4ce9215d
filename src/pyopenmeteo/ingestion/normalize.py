"""Normalization helpers.

Centralizes defensive parsing of Open-Meteo payload values.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any


def is_number(value: Any) -> bool:
    """Return True for real ints and finite floats (bools, NaN and infinities excluded)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def safe_float(value: Any) -> float | None:
    if not is_number(value):
        return None
    return float(value)


def round_half_up(value: float) -> int:
    """Round halves upwards (``0.5 -> 1``, ``-0.5 -> 0``) instead of to even."""
    return math.floor(value + 0.5)


def is_meaningful(value: Any) -> bool:
    """Return True if the value should be carried into a snapshot section."""
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return value != ""


def columns_to_rows(columns: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Turn Open-Meteo's columnar ``{"time": [...], "x": [...]}`` block into rows.

    The row count follows the ``time`` column. Columns that are not lists
    are ignored; missing or null cells are left out of the row.
    """
    times = columns.get("time")
    if not isinstance(times, list):
        return []

    rows: list[dict[str, Any]] = []
    for index in range(len(times)):
        row: dict[str, Any] = {}
        for key, column in columns.items():
            if not isinstance(column, list) or index >= len(column):
                continue
            value = column[index]
            if is_meaningful(value):
                row[key] = value
        rows.append(row)
    return rows


def clock_time(value: str) -> str:
    """Return the ``HH:MM`` part of an ISO timestamp (``2026-10-19T07:42`` -> ``07:42``).

    Values without a time part are returned unchanged.
    """
    _, sep, tail = value.partition("T")
    if not sep or len(tail) < 5:
        return value
    return tail[:5]


def parse_day(value: Any) -> date | None:
    """Parse the ``YYYY-MM-DD`` (or ISO datetime) value of a forecast row."""
    if not isinstance(value, str) or not value:
        return None
    try:
        if "T" in value:
            return datetime.fromisoformat(value).date()
        return date.fromisoformat(value)
    except ValueError:
        return None
