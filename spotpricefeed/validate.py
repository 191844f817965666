from __future__ import annotations
from decimal import Decimal
from typing import cast

import pandas as pd

from . import canon, exceptions


def assert_price_frame(df: pd.DataFrame, *, sorted_index: bool = True) -> None:
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.SpotFeedError(f"Index must be '{canon.INDEX_NAME}'.")
    if not isinstance(df.index, pd.DatetimeIndex):
        raise exceptions.SpotFeedError("Index must be a DatetimeIndex.")
    tz_index = cast(pd.DatetimeIndex, df.index)
    if tz_index.tz is None:
        raise exceptions.SpotFeedError("Index must be tz-aware.")
    for col in canon.REQUIRED_COLS:
        if col not in df.columns:
            raise exceptions.SpotFeedError(f"Missing required column '{col}'.")
    if sorted_index and not df.index.is_monotonic_increasing:
        raise exceptions.SpotFeedError("Index must be sorted ascending.")
    if not df["raw_cents"].map(lambda v: isinstance(v, Decimal)).all():
        raise exceptions.SpotFeedError("raw_cents must hold Decimal values.")
