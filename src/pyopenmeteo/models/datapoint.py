"""Data-point identifiers and metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from pyopenmeteo.exceptions import InvalidDataPointIdError

_SEGMENT = re.compile(r"[A-Za-z0-9_-]+")


@dataclass(frozen=True, order=True, slots=True)
class DataPointId:
    """Dot-delimited, validated path of a data point (``<slug>.weather.current.<field>``).

    Build ids with :meth:`of`, :meth:`child` or :meth:`parse`; every
    segment must match ``[A-Za-z0-9_-]+`` so a segment can never smuggle a
    separator into the tree.
    """

    parts: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.parts:
            raise InvalidDataPointIdError("data-point id must have at least one segment")
        for segment in self.parts:
            if not isinstance(segment, str) or not _SEGMENT.fullmatch(segment):
                raise InvalidDataPointIdError(f"invalid data-point id segment {segment!r}")

    @classmethod
    def of(cls, *segments: str) -> DataPointId:
        return cls(tuple(segments))

    @classmethod
    def parse(cls, text: str) -> DataPointId:
        return cls(tuple(text.split(".")))

    def child(self, *segments: str) -> DataPointId:
        return DataPointId(self.parts + tuple(segments))

    @property
    def root(self) -> str:
        return self.parts[0]

    @property
    def name(self) -> str:
        return self.parts[-1]

    def prefix(self, length: int) -> DataPointId:
        """Return the id made of the first *length* segments."""
        return DataPointId(self.parts[:length])

    def is_within(self, other: DataPointId) -> bool:
        """True when *self* equals *other* or lies in its subtree."""
        return self.parts[: len(other.parts)] == other.parts

    def __str__(self) -> str:
        return ".".join(self.parts)


class DataPointMetadata(BaseModel):
    """Definition written once per id: declared type, role, unit and label."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str
    role: str = "value"
    unit: str = ""
    name: str = ""
    read: bool = True
    write: bool = False


class DataPoint(BaseModel):
    """A persisted data point as held by a store."""

    model_config = ConfigDict(extra="forbid")

    metadata: DataPointMetadata
    value: Any = None
    ack: bool = False


def declared_type(value: Any) -> str:
    """Infer the declared type of a data point from its value's runtime kind."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "mixed"
