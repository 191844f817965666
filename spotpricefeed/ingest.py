from __future__ import annotations
import logging
from typing import Any, Iterable, Mapping, Optional, Sequence, cast

import pandas as pd

from . import canon, resolve, timestamps, units, validate
from .config import FeedConfig, default_config
from .exceptions import EmptyData, TimestampUnparseable, require
from .types import NormalizedInterval, PriceFrame, RawInterval

logger = logging.getLogger(__name__)


def normalize_record(
    record: RawInterval, now: pd.Timestamp, config: Optional[FeedConfig] = None
) -> NormalizedInterval:
    """
    One raw record -> NormalizedInterval.

    An unparseable timestamp becomes `now` and a missing/non-numeric value
    becomes 0; both flag the interval as degraded instead of failing the run.
    """
    config = config or default_config()
    if not isinstance(record, Mapping):
        record = {}
    degraded = False

    raw_time = resolve.time_field(record)
    try:
        instant = timestamps.require_timestamp(
            raw_time,
            now,
            lookback_hours=config.lookback_hours,
            horizon_hours=config.horizon_hours,
            fallback_offset=config.fallback_offset,
            local_tz=config.local_tz,
        )
    except TimestampUnparseable as exc:
        logger.warning("%s; substituting current time", exc)
        instant = now
        degraded = True

    raw_value = resolve.value_field(record)
    if units.coerce_decimal(raw_value) is None:
        logger.warning("Unusable price value %r at %s; using 0", raw_value, instant)
        degraded = True

    return NormalizedInterval(
        instant=instant, raw_cents=units.to_cents(raw_value), degraded=degraded
    )


def frame_from_intervals(intervals: Sequence[NormalizedInterval]) -> PriceFrame:
    """Build a PriceFrame; rows keep their input order."""
    idx = pd.DatetimeIndex([i.instant for i in intervals], name=canon.INDEX_NAME)
    if idx.tz is None:
        idx = idx.tz_localize("UTC")
    df = pd.DataFrame(
        {
            "raw_cents": pd.Series([i.raw_cents for i in intervals], dtype=object).to_numpy(),
            "degraded": [bool(i.degraded) for i in intervals],
        },
        index=idx,
    )
    df.__class__ = PriceFrame
    return cast(PriceFrame, df)


def intervals_from_frame(frame: pd.DataFrame) -> list[NormalizedInterval]:
    return [
        NormalizedInterval(instant=ts, raw_cents=row.raw_cents, degraded=bool(row.degraded))
        for ts, row in zip(frame.index, frame.itertuples(index=False))
    ]


def from_records(
    records: Iterable[RawInterval],
    *,
    now: Any,
    config: Optional[FeedConfig] = None,
) -> PriceFrame:
    """Normalise raw interval records to a PriceFrame indexed by UTC instant."""
    now = timestamps.as_utc(now)
    intervals = [normalize_record(r, now, config) for r in records]
    require(bool(intervals), "No interval records to normalise", EmptyData)

    n_bad = sum(i.degraded for i in intervals)
    if n_bad:
        logger.warning("%d of %d intervals were degraded", n_bad, len(intervals))

    frame = frame_from_intervals(intervals)
    validate.assert_price_frame(frame, sorted_index=False)
    return frame


def from_payload(doc: Any, *, now: Any, config: Optional[FeedConfig] = None) -> PriceFrame:
    """Resolve the interval array of a fetched document and normalise it."""
    return from_records(resolve.resolve_intervals(doc), now=now, config=config)
