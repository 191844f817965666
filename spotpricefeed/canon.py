from __future__ import annotations
from decimal import Decimal
from typing import Final

INDEX_NAME: Final[str] = "t"
REQUIRED_COLS: Final[list[str]] = ["raw_cents", "degraded"]

# Candidate keys, checked in order (case-sensitive)
INTERVAL_KEYS: Final[tuple[str, ...]] = (
    "min15",
    "Min15",
    "data",
    "Prices",
    "prices",
    "PricesList",
)
TIME_KEYS: Final[tuple[str, ...]] = ("time", "StartTime", "t", "Time", "start", "Date")
VALUE_KEYS: Final[tuple[str, ...]] = ("value", "Value", "v", "price", "Price")

DEFAULT_PRIMARY_URL: Final[str] = "https://www.porssisahkoa.fi/api/Prices/GetPrices?mode=1"
DEFAULT_FALLBACK_URL: Final[str] = "https://elspotcontrol.netlify.app/spotprices-v01-FI.json"
DEFAULT_OUTPUT_PATH: Final[str] = "public/spotprices.json"

VAT_MULTIPLIER: Final[Decimal] = Decimal("1.255")
MARGIN_CENTS: Final[Decimal] = Decimal("0.49")
MAX_INTERVALS: Final[int] = 12  # 3 hours of 15 min slots
REQUEST_TIMEOUT_S: Final[float] = 15.0
LOOKBACK_HOURS: Final[float] = 2.0
HORIZON_HOURS: Final[float] = 72.0
FALLBACK_OFFSET: Final[str] = "+03:00"  # Finland, summer time

# Values above this magnitude are taken to be currency/MWh
MWH_THRESHOLD: Final[Decimal] = Decimal("100")
MWH_TO_CENTS_KWH_DIVISOR: Final[Decimal] = Decimal("10")

CENTS: Final[Decimal] = Decimal("0.01")
