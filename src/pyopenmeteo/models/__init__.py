"""Data models for snapshots and data points."""

from pyopenmeteo.models._base import FieldKind, SnapshotField
from pyopenmeteo.models.datapoint import DataPoint, DataPointId, DataPointMetadata, declared_type
from pyopenmeteo.models.snapshot import AIR_HOURLY_FIELDS, AirField, CurrentField, DailyField, HourlyField, Snapshot

__all__ = [
    "AIR_HOURLY_FIELDS",
    "AirField",
    "CurrentField",
    "DailyField",
    "DataPoint",
    "DataPointId",
    "DataPointMetadata",
    "FieldKind",
    "HourlyField",
    "Snapshot",
    "SnapshotField",
    "declared_type",
]
