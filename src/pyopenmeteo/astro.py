"""Moon rise/set and phase calculation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from astral import Observer
from astral import moon as _moon

_logger = logging.getLogger(__name__)

# astral.moon.phase() returns the moon's age on a 0..27.99 scale.
_ASTRAL_LUNATION = 28.0


@dataclass(frozen=True, slots=True)
class MoonTimes:
    """Local rise/set times; ``None`` when the moon does not rise/set that day."""

    rise: datetime | None = None
    set: datetime | None = None


class MoonCalculator(Protocol):
    """Structural interface for the astronomical collaborator."""

    def moon_times(self, day: date, latitude: float, longitude: float, timezone: str) -> MoonTimes: ...

    def moon_phase(self, day: date) -> float:
        """Lunation fraction in ``[0, 1)``: 0 new, 0.25 first quarter, 0.5 full."""
        ...


class AstralMoonCalculator:
    """:class:`MoonCalculator` backed by :mod:`astral`."""

    def moon_times(self, day: date, latitude: float, longitude: float, timezone: str) -> MoonTimes:
        try:
            zone: tzinfo = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError):
            _logger.warning("Unknown time zone %r; moon times in UTC", timezone)
            zone = UTC
        observer = Observer(latitude=latitude, longitude=longitude)
        return MoonTimes(
            rise=self._event(_moon.moonrise, observer, day, zone),
            set=self._event(_moon.moonset, observer, day, zone),
        )

    def moon_phase(self, day: date) -> float:
        return (_moon.phase(day) / _ASTRAL_LUNATION) % 1.0

    @staticmethod
    def _event(fn, observer: Observer, day: date, zone: tzinfo) -> datetime | None:  # noqa: ANN001
        try:
            return fn(observer, day, zone)
        except ValueError:
            # astral raises when the event does not happen on that date.
            return None
