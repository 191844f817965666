from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import canon, timestamps

ENV_PREFIX = "SPOTFEED_"


class FeedConfig(BaseSettings):
    """
    Run settings. Every field can be set from a SPOTFEED_* environment
    variable (e.g. SPOTFEED_MAX_INTERVALS=24, SPOTFEED_EMIT_ALV=yes); blank
    variables keep the default.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        frozen=True,
    )

    # Sources
    primary_url: str = canon.DEFAULT_PRIMARY_URL
    fallback_url: Optional[str] = canon.DEFAULT_FALLBACK_URL
    timeout_s: float = canon.REQUEST_TIMEOUT_S

    # Output
    output_path: Path = Path(canon.DEFAULT_OUTPUT_PATH)
    max_intervals: int = canon.MAX_INTERVALS
    output_offset: Optional[str] = None  # None -> UTC with 'Z'
    emit_alv: bool = False  # duplicate v as v_alv for older readers

    # Pricing
    vat_multiplier: Decimal = canon.VAT_MULTIPLIER
    margin: Decimal = canon.MARGIN_CENTS

    # Timestamp acceptance window
    lookback_hours: float = canon.LOOKBACK_HOURS
    horizon_hours: float = canon.HORIZON_HOURS
    fallback_offset: str = canon.FALLBACK_OFFSET
    local_tz: Optional[str] = None  # None -> system local zone

    @field_validator("max_intervals")
    @classmethod
    def _at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("timeout_s")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("lookback_hours", "horizon_hours")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("acceptance window bounds must be non-negative")
        return v

    @field_validator("fallback_offset", "output_offset")
    @classmethod
    def _valid_offset(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            timestamps.parse_offset(v)
        return v

    @field_validator("local_tz")
    @classmethod
    def _known_zone(cls, v: Optional[str]) -> Optional[str]:
        if v:
            try:
                timestamps.local_zone(v)
            except ZoneInfoNotFoundError as exc:
                raise ValueError(f"Unknown time zone {v!r}") from exc
        return v

    @property
    def source_urls(self) -> list[str]:
        return [u for u in (self.primary_url, self.fallback_url) if u]

    def with_overrides(self, **overrides: Any) -> "FeedConfig":
        """Return a validated copy with every non-None override applied."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return type(self)(**values)


def default_config() -> FeedConfig:
    return FeedConfig()
