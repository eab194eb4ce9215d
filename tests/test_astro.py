from __future__ import annotations

from datetime import date

import pytest

from pyopenmeteo.astro import AstralMoonCalculator
from pyopenmeteo.metrics import MoonPhase, lunar_phase


@pytest.mark.parametrize("day", [date(2026, 1, 1), date(2026, 6, 15), date(2026, 10, 19)])
def test_moon_phase_is_a_fraction(day: date) -> None:
    fraction = AstralMoonCalculator().moon_phase(day)
    assert 0.0 <= fraction < 1.0


def test_moon_phase_tracks_a_known_full_moon() -> None:
    # Full moon on 2026-03-03.
    assert lunar_phase(AstralMoonCalculator().moon_phase(date(2026, 3, 3))) in {
        MoonPhase.WAXING_GIBBOUS,
        MoonPhase.FULL_MOON,
        MoonPhase.WANING_GIBBOUS,
    }


def test_moon_times_are_local() -> None:
    times = AstralMoonCalculator().moon_times(date(2026, 10, 19), 52.52, 13.41, "Europe/Berlin")

    assert times.rise is not None or times.set is not None
    for moment in (times.rise, times.set):
        if moment is not None:
            assert moment.tzinfo is not None
            assert moment.date() == date(2026, 10, 19)


def test_moon_times_unknown_zone_falls_back_to_utc() -> None:
    times = AstralMoonCalculator().moon_times(date(2026, 10, 19), 52.52, 13.41, "Mars/Olympus_Mons")

    for moment in (times.rise, times.set):
        if moment is not None:
            assert moment.utcoffset() is not None
            assert moment.utcoffset().total_seconds() == 0
