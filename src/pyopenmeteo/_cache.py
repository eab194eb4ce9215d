"""Process-wide sync state: the object-definition cache and the cycle guard."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from pyopenmeteo.models.datapoint import DataPointId


class ObjectCache:
    """Ids whose metadata has already been defined in this process.

    Only gates ``define`` calls; value writes never consult it. The cache
    never evicts on its own: a restart (or :meth:`clear`) makes the next
    cycle define every point once more, which the store treats as a no-op
    when the metadata is unchanged.
    """

    def __init__(self) -> None:
        self._defined: set[DataPointId] = set()

    def has_definition(self, point_id: DataPointId) -> bool:
        return point_id in self._defined

    def mark_defined(self, point_id: DataPointId) -> None:
        self._defined.add(point_id)

    def clear(self) -> None:
        self._defined.clear()

    def __contains__(self, point_id: object) -> bool:
        return point_id in self._defined

    def __len__(self) -> int:
        return len(self._defined)

    def __iter__(self) -> Iterator[DataPointId]:
        return iter(sorted(self._defined))


@dataclass
class SyncState:
    """State shared by one controller and the synchronizer it drives."""

    cache: ObjectCache = field(default_factory=ObjectCache)
    running: bool = False
