from __future__ import annotations
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from . import canon


def coerce_decimal(raw: Any) -> Optional[Decimal]:
    """Number or numeric string -> Decimal; None for anything else."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        val = Decimal(raw.strip()) if isinstance(raw, str) else Decimal(str(raw))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not val.is_finite():
        return None
    return val


def to_cents(
    raw: Any,
    *,
    threshold: Decimal = canon.MWH_THRESHOLD,
    divisor: Decimal = canon.MWH_TO_CENTS_KWH_DIVISOR,
) -> Decimal:
    """
    Raw price -> cents/kWh, full precision.

    Approximation: a magnitude above `threshold` is read as currency/MWh
    (EUR/MWh / 10 == c/kWh), anything else as c/kWh already. Unusable values
    give 0.
    """
    val = coerce_decimal(raw)
    if val is None:
        return Decimal(0)
    if abs(val) > threshold:
        return val / divisor
    return val


def normalize_value(raw: Any, **kwargs) -> Decimal:
    """to_cents rounded half away from zero to 2 dp."""
    return to_cents(raw, **kwargs).quantize(canon.CENTS, rounding=ROUND_HALF_UP)
