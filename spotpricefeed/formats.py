from __future__ import annotations

from typing import Any, Optional

from . import ingest, pricing, timestamps, validate
from .config import FeedConfig, default_config
from .types import OutputDocument, PricedInterval, PriceFrame


def format_instant(ts: Any, offset: Optional[str] = None) -> str:
    """
    Millisecond ISO-8601 string.

    UTC renders with a 'Z' suffix (what small JS clients parse most reliably);
    a fixed `offset` such as '+03:00' renders local wall-clock time instead.
    """
    ts = timestamps.as_utc(ts)
    if offset is not None:
        ts = ts.tz_convert(timestamps.parse_offset(offset))
    out = ts.isoformat(timespec="milliseconds")
    if out.endswith("+00:00"):
        out = out[: -len("+00:00")] + "Z"
    return out


def to_output_document(
    frame: PriceFrame,
    *,
    updated: Any,
    config: Optional[FeedConfig] = None,
) -> OutputDocument:
    """
    Price the selected intervals and wrap them with generation metadata.

    Each row's `v` is the consumer price (VAT + margin) in cents/kWh.
    """
    config = config or default_config()
    validate.assert_price_frame(frame)

    consumer = pricing.price_series(frame["raw_cents"], config.vat_multiplier, config.margin)
    prices: list[PricedInterval] = []
    for interval, price in zip(ingest.intervals_from_frame(frame), consumer):
        v = float(price)
        prices.append(
            PricedInterval(
                t=format_instant(interval.instant, config.output_offset),
                v=v,
                v_alv=v if config.emit_alv else None,
            )
        )

    return OutputDocument(
        updated=format_instant(updated, config.output_offset),
        count=len(prices),
        prices=prices,
    )
