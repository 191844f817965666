from __future__ import annotations
from typing import Any, Mapping, Optional
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

import pandas as pd
from pydantic import BaseModel, model_validator

from . import canon

RawInterval = Mapping[str, Any]


# Price DataFrame
class PriceFrame(pd.DataFrame):
    """
    Strongly-typed normalised price dataframe.

    Expected:
      - DatetimeIndex named 't', tz-aware (UTC)
      - Columns: ['raw_cents', 'degraded']
    """

    @property
    def _constructor(self):
        return PriceFrame

    @property
    def raw_cents(self) -> pd.Series:
        return self["raw_cents"]

    @property
    def degraded(self) -> pd.Series:
        return self["degraded"]


@dataclass(frozen=True)
class NormalizedInterval:
    instant: pd.Timestamp  # tz-aware UTC
    raw_cents: Decimal  # full precision, cents/kWh
    degraded: bool = False

    @property
    def raw_price(self) -> Decimal:
        return self.raw_cents.quantize(canon.CENTS, rounding=ROUND_HALF_UP)


## Output document
class PricedInterval(BaseModel):
    t: str
    v: float
    v_alv: Optional[float] = None
    model_config = {"frozen": True}


class OutputDocument(BaseModel):
    updated: str
    count: int
    prices: list[PricedInterval]
    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _count_matches(self) -> "OutputDocument":
        if self.count != len(self.prices):
            raise ValueError(
                f"count={self.count} does not match {len(self.prices)} prices"
            )
        return self

    def to_payload(self) -> dict[str, Any]:
        """Plain dict ready for json.dumps; drops absent v_alv fields."""
        return self.model_dump(exclude_none=True)
