"""Custom exception hierarchy for pyopenmeteo."""

from __future__ import annotations

from typing import Any


class MeteoError(Exception):
    """Base exception for all pyopenmeteo errors."""


class MeteoConfigError(MeteoError):
    """Invalid or missing configuration."""


class MeteoTransportError(MeteoError):
    """HTTP-level failure (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class MeteoStoreError(MeteoError):
    """A store primitive (define/write/delete/enumerate) failed."""


class InvalidDataPointIdError(MeteoError, ValueError):
    """A data-point id segment is empty or contains forbidden characters."""


class MalformedFieldError(MeteoError):
    """A snapshot field carries a value of the wrong type.

    The synchronizer catches this per field: the field and its derived
    points are skipped, the rest of the location is still written.
    """

    def __init__(self, field: str, value: Any, expected: str) -> None:
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"{field}: expected {expected}, got {type(value).__name__} {value!r}")
