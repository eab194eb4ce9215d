"""Object-store primitives and a deterministic in-memory implementation.

The synchronizer and the reconciliation pass only talk to the
:class:`ObjectStore` protocol, so a host system plugs in its own
persistent tree by implementing these five coroutines.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pyopenmeteo.exceptions import MeteoStoreError
from pyopenmeteo.models.datapoint import DataPoint, DataPointId, DataPointMetadata

_logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    """Structural store interface used by the synchronizer and reconciliation.

    ``define`` must be idempotent: defining an id twice with the same
    metadata is a no-op. ``delete_subtree`` removes the id itself and every
    id below it.
    """

    async def exists(self, point_id: DataPointId) -> bool: ...

    async def define(self, point_id: DataPointId, metadata: DataPointMetadata) -> None: ...

    async def write(self, point_id: DataPointId, value: Any, *, ack: bool = True) -> None: ...

    async def enumerate_all(self) -> list[DataPointId]: ...

    async def delete_subtree(self, point_id: DataPointId) -> None: ...


class InMemoryObjectStore:
    """In-memory object store.

    Deterministic: :meth:`enumerate_all` returns ids in sorted order and
    every operation completes without suspension.
    """

    def __init__(self) -> None:
        self._points: dict[DataPointId, DataPoint] = {}

    async def exists(self, point_id: DataPointId) -> bool:
        return point_id in self._points

    async def define(self, point_id: DataPointId, metadata: DataPointMetadata) -> None:
        point = self._points.get(point_id)
        if point is None:
            self._points[point_id] = DataPoint(metadata=metadata)
            return
        if point.metadata != metadata:
            # Redefinition keeps the current value, like extending an object.
            point.metadata = metadata

    async def write(self, point_id: DataPointId, value: Any, *, ack: bool = True) -> None:
        point = self._points.get(point_id)
        if point is None:
            raise MeteoStoreError(f"write to undefined data point {point_id}")
        point.value = value
        point.ack = ack

    async def enumerate_all(self) -> list[DataPointId]:
        return sorted(self._points)

    async def delete_subtree(self, point_id: DataPointId) -> None:
        doomed = [pid for pid in self._points if pid.is_within(point_id)]
        for pid in doomed:
            del self._points[pid]
        _logger.debug("Deleted %d data points below %s", len(doomed), point_id)

    # ------------------------------------------------------------------
    # Read helpers (not part of the protocol)
    # ------------------------------------------------------------------

    def get(self, point_id: DataPointId | str) -> DataPoint | None:
        if isinstance(point_id, str):
            point_id = DataPointId.parse(point_id)
        return self._points.get(point_id)

    def value(self, point_id: DataPointId | str) -> Any:
        point = self.get(point_id)
        return None if point is None else point.value

    def snapshot(self) -> dict[str, Any]:
        """Flat ``{"a.b.c": value}`` view of the tree, sorted by id."""
        return {str(pid): self._points[pid].value for pid in sorted(self._points)}

    def __len__(self) -> int:
        return len(self._points)
