"""Base types for snapshot models.

Every snapshot section is keyed by a closed field enumeration deriving
from :class:`SnapshotField`. Keys outside the enumeration are dropped
when the section is built, so downstream code never iterates arbitrary
payload keys.

:class:`SnapshotField` also knows the *kind* of value each field carries
so the synchronizer can reject malformed values per field.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import Any, TypeVar

from pyopenmeteo.exceptions import MalformedFieldError
from pyopenmeteo.ingestion.normalize import is_meaningful, is_number

_logger = logging.getLogger(__name__)

# Fields carrying ISO date/time strings; everything else is numeric.
_TEXT_FIELDS = frozenset({"time", "sunrise", "sunset"})


class FieldKind(StrEnum):
    NUMBER = "number"
    TEXT = "text"


class SnapshotField(StrEnum):
    """Base for the closed field enumerations of a snapshot section."""

    @property
    def kind(self) -> FieldKind:
        return FieldKind.TEXT if self.value in _TEXT_FIELDS else FieldKind.NUMBER

    def check(self, value: Any) -> Any:
        """Return *value* if it matches this field's kind, else raise :class:`MalformedFieldError`."""
        if self.kind is FieldKind.TEXT:
            if isinstance(value, str) and value:
                return value
            raise MalformedFieldError(self.value, value, "non-empty string")
        if is_number(value):
            return value
        raise MalformedFieldError(self.value, value, "number")


TField = TypeVar("TField", bound=SnapshotField)


def known_fields(field_cls: type[TField], values: Any, *, section: str) -> dict[TField, Any]:
    """Keep the keys of *values* that belong to *field_cls*.

    Unknown keys and empty values are dropped; unknown keys are logged at
    DEBUG so a new API field shows up without breaking the sync.
    """
    if not isinstance(values, Mapping):
        return {}
    kept: dict[TField, Any] = {}
    for key, value in values.items():
        try:
            field = field_cls(key)
        except ValueError:
            _logger.debug("Ignoring unknown %s field %r", section, key)
            continue
        if is_meaningful(value):
            kept[field] = value
    return kept
