"""Helpers for safe debug logging.

Commercial Open-Meteo access carries an API key in the query string.
Request parameters pass through :func:`redact_for_log` before they are
emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_PARAMS: frozenset[str] = frozenset({"apikey", "api_key", "key", "token"})


def redact_for_log(params: Mapping[str, Any], *, max_string: int = 256) -> dict[str, Any]:
    """Return a copy of query *params* with secrets masked and long values shortened."""
    redacted: dict[str, Any] = {}
    for key, value in params.items():
        if key.lower() in _SENSITIVE_PARAMS:
            redacted[key] = "<redacted>"
        elif isinstance(value, str) and len(value) > max_string:
            redacted[key] = f"{value[:max_string]}…<truncated>"
        else:
            redacted[key] = value
    return redacted
