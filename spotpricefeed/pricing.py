from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP

import pandas as pd

from . import canon


def apply_pricing(
    raw_cents: Decimal,
    vat_multiplier: Decimal = canon.VAT_MULTIPLIER,
    margin: Decimal = canon.MARGIN_CENTS,
) -> Decimal:
    """
    Consumer price in cents/kWh: raw * VAT + margin.

    Rounded once, half away from zero, on the unrounded raw value.
    """
    gross = Decimal(raw_cents) * Decimal(vat_multiplier) + Decimal(margin)
    return gross.quantize(canon.CENTS, rounding=ROUND_HALF_UP)


def price_series(
    raw_cents: pd.Series,
    vat_multiplier: Decimal = canon.VAT_MULTIPLIER,
    margin: Decimal = canon.MARGIN_CENTS,
) -> pd.Series:
    """apply_pricing over a Series of Decimals, keeping the index."""
    return raw_cents.map(lambda c: apply_pricing(c, vat_multiplier, margin)).rename(
        "price_cents"
    )
