"""Reconciliation (garbage-collection) pass.

Deletes persisted subtrees that the current configuration no longer
implies: removed locations, disabled feature groups, forecast folders
beyond the configured window and derived points switched off in the
configuration. Runs at startup and on configuration changes, not on every
sync cycle.
"""

from __future__ import annotations

import logging

from pyopenmeteo.config import WeatherConfig
from pyopenmeteo.models.datapoint import DataPointId
from pyopenmeteo.state.policy import StaleReason, ValidTree
from pyopenmeteo.state.store import ObjectStore

_logger = logging.getLogger(__name__)


def plan_deletions(point_ids: list[DataPointId], config: WeatherConfig) -> list[tuple[DataPointId, StaleReason]]:
    """Return the subtrees to delete, in enumeration order, without duplicates.

    Every id is evaluated on its own; an id lying inside an already
    planned subtree does not plan another deletion.
    """
    tree = ValidTree(config)
    planned: list[tuple[DataPointId, StaleReason]] = []
    for point_id in point_ids:
        stale = tree.stale_subtree(point_id)
        if stale is None:
            continue
        subtree, reason = stale
        if any(subtree.is_within(existing) for existing, _ in planned):
            continue
        # A wider subtree found later replaces narrower ones planned before.
        planned = [(existing, why) for existing, why in planned if not existing.is_within(subtree)]
        planned.append((subtree, reason))
    return planned


async def reconcile(store: ObjectStore, config: WeatherConfig) -> int:
    """Delete every subtree outside the valid tree; return the number of subtrees deleted.

    Deletion failures are logged and do not stop the pass. Enumeration
    failures propagate.
    """
    point_ids = await store.enumerate_all()
    deleted = 0
    for subtree, reason in plan_deletions(point_ids, config):
        try:
            await store.delete_subtree(subtree)
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Failed to delete %s (%s): %s", subtree, reason, exc)
            continue
        _logger.info("Deleted %s (%s)", subtree, reason)
        deleted += 1
    return deleted
