from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

import pytest

from pyopenmeteo._cache import SyncState
from pyopenmeteo.astro import MoonTimes
from pyopenmeteo.config import LocationConfig, WeatherConfig
from pyopenmeteo.controller import SyncCycleController
from pyopenmeteo.exceptions import MeteoStoreError, MeteoTransportError
from pyopenmeteo.models import DataPointId, DataPointMetadata, Snapshot
from pyopenmeteo.state.store import InMemoryObjectStore

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@dataclass
class RecordingStore:
    inner: InMemoryObjectStore = field(default_factory=InMemoryObjectStore)
    calls: list[tuple[str, str]] = field(default_factory=list)
    fail_writes_below: str | None = None

    async def exists(self, point_id: DataPointId) -> bool:
        self.calls.append(("exists", str(point_id)))
        return await self.inner.exists(point_id)

    async def define(self, point_id: DataPointId, metadata: DataPointMetadata) -> None:
        self.calls.append(("define", str(point_id)))
        await self.inner.define(point_id, metadata)

    async def write(self, point_id: DataPointId, value: Any, *, ack: bool = True) -> None:
        self.calls.append(("write", str(point_id)))
        if self.fail_writes_below is not None and point_id.root == self.fail_writes_below:
            raise MeteoStoreError(f"write to {point_id} failed")
        await self.inner.write(point_id, value, ack=ack)

    async def enumerate_all(self) -> list[DataPointId]:
        self.calls.append(("enumerate", ""))
        return await self.inner.enumerate_all()

    async def delete_subtree(self, point_id: DataPointId) -> None:
        self.calls.append(("delete", str(point_id)))
        await self.inner.delete_subtree(point_id)


@dataclass
class FakeFetcher:
    failing: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)
    gate: asyncio.Event | None = None

    async def fetch_snapshot(self, location: LocationConfig, config: WeatherConfig) -> Snapshot:
        self.calls.append(location.slug)
        if self.gate is not None:
            await self.gate.wait()
        if location.slug in self.failing:
            raise MeteoTransportError("HTTP 503 from forecast", status_code=503)
        return Snapshot.from_api(
            {
                "current": {"time": "2026-10-19T12:00", "temperature_2m": 11.0, "weather_code": 0},
                "daily": {
                    "time": ["2026-10-19", "2026-10-20", "2026-10-21"],
                    "weather_code": [0, 1, 2],
                },
            }
        )


@dataclass
class FakeMoon:
    def moon_times(self, day: date, latitude: float, longitude: float, timezone: str) -> MoonTimes:
        return MoonTimes()

    def moon_phase(self, day: date) -> float:
        return 0.0


def _location(name: str, **kwargs: Any) -> LocationConfig:
    kwargs.setdefault("air_quality", False)
    return LocationConfig(name=name, latitude=52.52, longitude=13.41, **kwargs)


def _controller(
    config: WeatherConfig,
    *,
    fetcher: FakeFetcher | None = None,
    store: RecordingStore | None = None,
    state: SyncState | None = None,
) -> tuple[SyncCycleController, FakeFetcher, RecordingStore]:
    fetcher = fetcher or FakeFetcher()
    store = store or RecordingStore()
    controller = SyncCycleController(
        config,
        fetcher=fetcher,
        store=store,
        state=state,
        moon=FakeMoon(),
        clock=lambda: NOW,
    )
    return controller, fetcher, store


@pytest.mark.asyncio
async def test_start_is_dropped_while_a_cycle_runs() -> None:
    state = SyncState(running=True)
    controller, fetcher, store = _controller(WeatherConfig(locations=(_location("A"),)), state=state)

    assert await controller.start() is False
    assert fetcher.calls == []
    assert store.calls == []
    assert controller.running is True


@pytest.mark.asyncio
async def test_overlapping_tick_is_dropped_not_queued() -> None:
    gate = asyncio.Event()
    controller, fetcher, store = _controller(
        WeatherConfig(locations=(_location("A"),)),
        fetcher=FakeFetcher(gate=gate),
    )

    first = asyncio.create_task(controller.start())
    while not fetcher.calls:
        await asyncio.sleep(0)
    assert controller.running is True

    assert await controller.start() is False

    gate.set()
    assert await first is True
    assert controller.running is False
    assert fetcher.calls == ["A"]
    assert store.inner.value("A.weather.current.temperature_2m") == 11.0


@pytest.mark.asyncio
async def test_failed_location_does_not_stop_the_cycle(caplog: pytest.LogCaptureFixture) -> None:
    config = WeatherConfig(locations=(_location("A"), _location("B")))
    controller, fetcher, store = _controller(config, fetcher=FakeFetcher(failing={"A"}))

    with caplog.at_level(logging.WARNING, logger="pyopenmeteo.controller"):
        assert await controller.start() is True

    assert fetcher.calls == ["A", "B"]
    assert store.inner.get("A.weather.current.temperature_2m") is None
    assert store.inner.value("B.weather.current.temperature_2m") == 11.0
    assert store.inner.value("info.last_update") == int(NOW.timestamp() * 1000)
    assert "HTTP 503" in caplog.text
    assert controller.running is False


@pytest.mark.asyncio
async def test_store_failure_for_one_location_is_isolated() -> None:
    config = WeatherConfig(locations=(_location("A"), _location("B")))
    controller, _, store = _controller(config, store=RecordingStore(fail_writes_below="A"))

    assert await controller.start() is True

    assert store.inner.value("B.weather.current.temperature_2m") == 11.0
    assert store.inner.value("info.last_update") == int(NOW.timestamp() * 1000)


@pytest.mark.asyncio
async def test_failed_timestamp_write_still_resets_the_guard(caplog: pytest.LogCaptureFixture) -> None:
    config = WeatherConfig(locations=(_location("A"),))
    controller, _, store = _controller(config, store=RecordingStore(fail_writes_below="info"))

    with caplog.at_level(logging.WARNING, logger="pyopenmeteo.controller"):
        assert await controller.start() is True

    assert controller.running is False
    assert store.inner.value("A.weather.current.temperature_2m") == 11.0
    assert "Sync cycle failed" in caplog.text


@pytest.mark.asyncio
async def test_no_locations_is_a_warning_and_no_work(caplog: pytest.LogCaptureFixture) -> None:
    controller, fetcher, store = _controller(WeatherConfig())

    with caplog.at_level(logging.WARNING, logger="pyopenmeteo.controller"):
        await controller.start()

    assert fetcher.calls == []
    assert store.calls == []
    assert "No locations configured" in caplog.text
    assert controller.running is False


@pytest.mark.asyncio
async def test_last_update_metadata() -> None:
    controller, _, store = _controller(WeatherConfig(locations=(_location("A"),)))

    await controller.start()

    point = store.inner.get("info.last_update")
    assert point is not None
    assert point.metadata.role == "value.time"
    assert point.metadata.type == "number"
    assert point.metadata.name == "Last update"
    assert point.ack is True


@pytest.mark.asyncio
async def test_apply_config_reconciles_and_clears_cache() -> None:
    config = WeatherConfig(locations=(_location("A"), _location("B")))
    controller, _, store = _controller(config)
    await controller.start()
    assert len(controller.state.cache) > 0

    deleted = await controller.apply_config(WeatherConfig(locations=(_location("A", forecast_days=1),)))

    # B as a whole, plus A's day1 and day2 folders.
    assert deleted == 3
    assert len(controller.state.cache) == 0
    ids = store.inner.snapshot()
    assert not any(pid.startswith("B.") for pid in ids)
    assert not any(pid.startswith("A.weather.forecast.day1") for pid in ids)
    assert "info.last_update" in ids

    defines_before = sum(1 for op, _ in store.calls if op == "define")
    await controller.start()
    defines_after = sum(1 for op, _ in store.calls if op == "define")
    # Cleared cache: every surviving point is defined once more.
    assert defines_after > defines_before
    assert not any(pid.startswith("A.weather.forecast.day1") for pid in store.inner.snapshot())


@pytest.mark.asyncio
async def test_reconcile_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    @dataclass
    class BrokenStore(RecordingStore):
        async def enumerate_all(self) -> list[DataPointId]:
            raise MeteoStoreError("store offline")

    controller, _, _ = _controller(WeatherConfig(locations=(_location("A"),)), store=BrokenStore())

    with caplog.at_level(logging.WARNING, logger="pyopenmeteo.controller"):
        assert await controller.reconcile() == 0
    assert "store offline" in caplog.text


@pytest.mark.asyncio
async def test_run_reconciles_and_syncs_before_checking_stop() -> None:
    store = RecordingStore()
    await store.inner.define(DataPointId.parse("Gone.weather.current.rain"), DataPointMetadata(type="number"))
    controller, fetcher, _ = _controller(WeatherConfig(locations=(_location("A"),)), store=store)
    stop = asyncio.Event()
    stop.set()

    await asyncio.wait_for(controller.run(stop), timeout=5)

    assert fetcher.calls == ["A"]
    assert store.inner.get("Gone.weather.current.rain") is None
    assert controller.running is False
