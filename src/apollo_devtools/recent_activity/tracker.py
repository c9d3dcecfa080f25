"""
Change tracking between consecutive snapshots of a collection.
"""

import logging
from collections.abc import MutableSequence, Sequence
from typing import Any, List, Optional
from uuid import uuid4

from .models import ChangeKind, RecentActivity

logger = logging.getLogger(__name__)


def new_activity_id() -> str:
    """Return a fresh identifier for a recent activity event."""
    return str(uuid4())


def _activity(change: ChangeKind, data: Any) -> RecentActivity:
    return RecentActivity(id=new_activity_id(), change=change, data=data)


def _index_of(items: Sequence, value: Any) -> int:
    """Linear scan, so a tick costs O(len(items) * len(reference)) comparisons."""
    for index, item in enumerate(items):
        if item == value:
            return index
    return -1


def check_snapshot(items: Optional[Sequence]) -> None:
    """
    Reject snapshots that are not sequences of elements.

    Strings and bytes are sequences of characters, not of elements, so
    they are rejected too. None is allowed and means "nothing observed".

    Raises:
        TypeError: If the snapshot has the wrong type
    """
    if items is None:
        return
    if isinstance(items, (str, bytes, bytearray)) or not isinstance(items, Sequence):
        raise TypeError(
            f"items must be a sequence of elements, got {type(items).__name__}"
        )


def get_recent_activities(
    items: Optional[Sequence], last_iteration_items: Optional[MutableSequence]
) -> Optional[List[RecentActivity]]:
    """
    Classify every element as added or removed since the last observation.

    ``items`` is scanned in order. Each element is matched against the
    first unconsumed equal element of ``last_iteration_items``. Elements
    of the reference that were skipped over to reach a match are reported
    as removed before the scan continues, and together with the match they
    are consumed so nothing is matched twice. Whatever is left of the
    reference after the scan is reported as removed.

    ``last_iteration_items`` is updated in place to mirror ``items`` so
    the next call only reports what changed after this one.

    Args:
        items: Current snapshot of the collection
        last_iteration_items: Reference snapshot from the previous tick

    Returns:
        Ordered list of events, or None if either snapshot is empty
        (the reference is then left untouched)

    Raises:
        TypeError: If a snapshot is not a sequence, or the reference is
            not mutable
    """
    check_snapshot(items)
    if last_iteration_items is not None and not isinstance(
        last_iteration_items, MutableSequence
    ):
        raise TypeError(
            "last_iteration_items must be a mutable sequence, "
            f"got {type(last_iteration_items).__name__}"
        )

    if not items or not last_iteration_items:
        return None

    remaining = list(last_iteration_items)
    result: List[RecentActivity] = []

    for value in items:
        index = _index_of(remaining, value)
        if index == -1:
            result.append(_activity(ChangeKind.ADDED, value))
            continue

        # Everything before the match disappeared before it reappeared
        for data in remaining[:index]:
            result.append(_activity(ChangeKind.REMOVED, data))
        del remaining[: index + 1]

    for data in remaining:
        result.append(_activity(ChangeKind.REMOVED, data))

    last_iteration_items[:] = list(items)

    logger.debug(
        f"Recent activities: {sum(a.change == ChangeKind.ADDED for a in result)} added, "
        f"{sum(a.change == ChangeKind.REMOVED for a in result)} removed"
    )

    return result
