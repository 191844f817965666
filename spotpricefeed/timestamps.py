"""Timestamp inference for upstream interval records.

The upstream format and zone are not fixed. Strings carrying an explicit
offset are trusted; anything else is tried three ways (local zone, UTC and a
fixed fallback offset) and the reading that lands in a plausible window
around `now` wins.
"""

from __future__ import annotations

import os
import re
from datetime import datetime, timedelta, timezone, tzinfo
from numbers import Real
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pandas as pd

from . import canon
from .exceptions import TimestampUnparseable

_TZ_SUFFIX = re.compile(r"(?:Z|[+-]\d{2}:?\d{2})$", re.IGNORECASE)
_OFFSET = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_LOCALTIME = "/etc/localtime"
# pandas resolves these against the wall clock, not the run's `now`
_RELATIVE_WORDS = frozenset({"now", "today"})


def parse_offset(offset: str) -> tzinfo:
    """'+03:00' / '-0130' / 'Z' / 'UTC' -> fixed-offset tzinfo."""
    s = offset.strip()
    if s.upper() in ("Z", "UTC"):
        return timezone.utc
    m = _OFFSET.match(s)
    if m is None:
        raise ValueError(f"Invalid UTC offset {offset!r}; expected ±HH:MM")
    sign = 1 if m.group(1) == "+" else -1
    hours, minutes = int(m.group(2)), int(m.group(3))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid UTC offset {offset!r}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def system_zone() -> tzinfo:
    """
    The process's zone with its DST rules: $TZ, then /etc/localtime. Only
    when neither names a zone does this fall back to the current fixed offset.
    """
    name = os.environ.get("TZ", "").lstrip(":")
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass
    try:
        with open(_LOCALTIME, "rb") as fh:
            return ZoneInfo.from_file(fh, key="localtime")
    except (OSError, ValueError):
        return datetime.now().astimezone().tzinfo or timezone.utc


def local_zone(name: Optional[str] = None) -> tzinfo:
    if name:
        return ZoneInfo(name)
    return system_zone()


def as_utc(ts: Any) -> pd.Timestamp:
    """Coerce to a tz-aware UTC Timestamp; naive input is taken as UTC."""
    ts = pd.Timestamp(ts)
    return ts.tz_localize("UTC") if ts.tz is None else ts.tz_convert("UTC")


def has_tz_marker(raw: str) -> bool:
    return bool(_TZ_SUFFIX.search(raw.strip()))


def _parse(s: str) -> Optional[pd.Timestamp]:
    if s.strip().lower() in _RELATIVE_WORDS:
        return None
    try:
        ts = pd.Timestamp(s)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts


def _candidates(raw: str, fallback_offset: str, local: tzinfo) -> list[pd.Timestamp]:
    out: list[pd.Timestamp] = []

    # (a) as written, naive readings in the local zone
    as_is = _parse(raw)
    if as_is is not None:
        if as_is.tz is None:
            as_is = as_is.tz_localize(local, ambiguous="NaT", nonexistent="NaT")
        if not pd.isna(as_is):
            out.append(as_utc(as_is))

    # (b) as UTC, (c) as the fixed fallback offset
    for suffix in ("Z", fallback_offset):
        ts = _parse(raw + suffix)
        if ts is not None and ts.tz is not None:
            out.append(as_utc(ts))
    return out


def parse_timestamp(
    raw: Any,
    now: Any,
    *,
    lookback_hours: float = canon.LOOKBACK_HOURS,
    horizon_hours: float = canon.HORIZON_HOURS,
    fallback_offset: str = canon.FALLBACK_OFFSET,
    local_tz: Optional[str] = None,
) -> Optional[pd.Timestamp]:
    """
    Infer the instant for one record's time field. Returns a UTC Timestamp,
    or None if no reading parses.

    Order of preference:
      1. explicit 'Z' / ±HH:MM suffix, parsed directly
      2. candidates inside [now - lookback, now + horizon]: earliest >= now,
         else earliest
      3. otherwise the candidate closest to now
    Numbers are epoch milliseconds.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Real):
        try:
            return pd.Timestamp(int(raw), unit="ms", tz="UTC")
        except (ValueError, OverflowError):
            return None

    s = str(raw).strip()
    if not s:
        return None

    if has_tz_marker(s):
        ts = _parse(s)
        if ts is not None and ts.tz is not None:
            return as_utc(ts)

    now = as_utc(now)
    cands = _candidates(s, fallback_offset, local_zone(local_tz))
    if not cands:
        return None

    lo = now - pd.Timedelta(hours=lookback_hours)
    hi = now + pd.Timedelta(hours=horizon_hours)
    accepted = sorted(c for c in cands if lo <= c <= hi)
    if accepted:
        return next((c for c in accepted if c >= now), accepted[0])

    # sorted() is stable: ties keep as-is / UTC / offset order
    return sorted(cands, key=lambda c: abs(c - now))[0]


def require_timestamp(raw: Any, now: Any, **kwargs) -> pd.Timestamp:
    """parse_timestamp, raising TimestampUnparseable instead of returning None."""
    ts = parse_timestamp(raw, now, **kwargs)
    if ts is None:
        raise TimestampUnparseable(f"Cannot parse timestamp {raw!r}")
    return ts
