"""Sync cycle controller.

Drives one pass over all configured locations (fetch, then synchronize)
and guards against overlapping passes. A timer tick arriving while a
cycle is still running is dropped, not queued.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from pyopenmeteo._cache import SyncState
from pyopenmeteo._constants import INFO_FOLDER, LAST_UPDATE_KEY
from pyopenmeteo.astro import MoonCalculator
from pyopenmeteo.config import LocationConfig, WeatherConfig
from pyopenmeteo.ingestion.sync import TreeSynchronizer
from pyopenmeteo.models.datapoint import DataPointId
from pyopenmeteo.models.snapshot import Snapshot
from pyopenmeteo.state.reconcile import reconcile
from pyopenmeteo.state.store import ObjectStore
from pyopenmeteo.translations import Translator

_logger = logging.getLogger(__name__)


class SnapshotFetcher(Protocol):
    """Structural interface of the fetch collaborator (see :class:`~pyopenmeteo.client.OpenMeteoClient`)."""

    async def fetch_snapshot(self, location: LocationConfig, config: WeatherConfig) -> Snapshot: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SyncCycleController:
    """Run sync cycles and reconciliation for one adapter instance.

    Usage::

        async with OpenMeteoClient() as client:
            controller = SyncCycleController(config, fetcher=client, store=store)
            await controller.run(stop_event)
    """

    def __init__(
        self,
        config: WeatherConfig,
        *,
        fetcher: SnapshotFetcher,
        store: ObjectStore,
        state: SyncState | None = None,
        translator: Translator | None = None,
        moon: MoonCalculator | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._fetcher = fetcher
        self._store = store
        self._state = state or SyncState()
        self._translator = translator
        self._moon = moon
        self._clock = clock
        self._synchronizer = self._build_synchronizer()

    def _build_synchronizer(self) -> TreeSynchronizer:
        return TreeSynchronizer(
            self._store,
            self._state,
            self._config,
            translator=self._translator or Translator(self._config.language),
            moon=self._moon,
        )

    @property
    def config(self) -> WeatherConfig:
        return self._config

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state.running

    # ------------------------------------------------------------------
    # Sync cycle
    # ------------------------------------------------------------------

    async def start(self) -> bool:
        """Run one sync cycle unless one is already in flight.

        Returns ``False`` (after logging) when the overlap guard drops the
        call, ``True`` once a cycle has run. Never raises for fetch or
        store failures.
        """
        if self._state.running:
            _logger.info("Previous sync cycle still running; skipping")
            return False

        self._state.running = True
        try:
            await self._run_cycle()
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Sync cycle failed: %s", exc, exc_info=True)
        finally:
            self._state.running = False
        return True

    async def _run_cycle(self) -> None:
        locations = self._config.locations
        if not locations:
            _logger.warning("No locations configured; nothing to sync")
            return

        _logger.info("Sync cycle started for %d location(s)", len(locations))
        updated = 0
        for location in locations:
            try:
                snapshot = await self._fetcher.fetch_snapshot(location, self._config)
                await self._synchronizer.sync(location, snapshot)
            except Exception as exc:  # noqa: BLE001
                _logger.warning("Update of %s failed: %s", location.name, exc)
                continue
            updated += 1

        stamp = int(self._clock().timestamp() * 1000)
        await self._synchronizer.write_point(
            DataPointId.of(INFO_FOLDER),
            LAST_UPDATE_KEY,
            stamp,
            role="value.time",
            unit="",
        )
        _logger.info("Sync cycle finished: %d/%d location(s) updated", updated, len(locations))

    # ------------------------------------------------------------------
    # Configuration / reconciliation
    # ------------------------------------------------------------------

    async def reconcile(self) -> int:
        """Delete subtrees the current configuration no longer implies.

        Returns the number of deleted subtrees; ``0`` when the store could
        not be enumerated.
        """
        try:
            deleted = await reconcile(self._store, self._config)
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Reconciliation failed: %s", exc)
            return 0
        if deleted:
            _logger.info("Reconciliation removed %d subtree(s)", deleted)
        return deleted

    async def apply_config(self, config: WeatherConfig) -> int:
        """Switch to *config*, forget cached definitions and reconcile.

        Clearing the object cache makes the next cycle redefine every point
        once, so metadata such as units follows the new configuration.
        """
        self._config = config
        self._state.cache.clear()
        self._synchronizer = self._build_synchronizer()
        return await self.reconcile()

    # ------------------------------------------------------------------
    # Timer loop
    # ------------------------------------------------------------------

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """Reconcile, run a first cycle, then tick every ``interval_minutes`` until *stop_event* is set.

        Each tick schedules :meth:`start` as a task, so a tick that fires
        while a cycle is still running is dropped by the overlap guard.
        """
        stop = stop_event or asyncio.Event()
        await self.reconcile()
        await self.start()

        pending: set[asyncio.Task[bool]] = set()
        while not stop.is_set():
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(stop.wait(), timeout=self._config.interval_minutes * 60)
            if stop.is_set():
                break
            task = asyncio.create_task(self.start())
            pending.add(task)
            task.add_done_callback(pending.discard)

        if pending:
            await asyncio.gather(*pending)
