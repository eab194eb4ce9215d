"""Ingestion layer.

This package turns fetched snapshots into data-point definitions and
value writes on an object store.
"""

__all__: list[str] = []
