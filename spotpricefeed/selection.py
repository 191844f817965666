from __future__ import annotations
import logging
from typing import Any

from . import canon, timestamps
from .exceptions import EmptyData, require
from .types import PriceFrame

logger = logging.getLogger(__name__)


def select_upcoming(
    frame: PriceFrame, now: Any, max_count: int = canon.MAX_INTERVALS
) -> PriceFrame:
    """
    Up to `max_count` intervals starting at or after `now`, ascending.

    When every interval is already in the past (stale upstream data) the
    first `max_count` of the whole frame are returned instead, with a warning.
    """
    require(not frame.empty, "No intervals to select from", EmptyData)
    if max_count < 1:
        raise ValueError("max_count must be at least 1")

    now = timestamps.as_utc(now)
    ordered = frame.sort_index(kind="mergesort")
    upcoming = ordered[ordered.index >= now]
    if upcoming.empty:
        logger.warning(
            "All %d intervals are before %s; falling back to the earliest %d",
            len(frame),
            now.isoformat(),
            min(max_count, len(frame)),
        )
        return ordered.head(max_count)
    return upcoming.head(max_count)
