from __future__ import annotations
from typing import Any, Iterable, Mapping

from . import canon
from .exceptions import EmptyData
from .types import RawInterval

_MISSING = object()


def resolve_field(
    record: Mapping[str, Any], keys: Iterable[str], *, skip_falsy: bool = False
) -> Any:
    """
    Return the value under the first key that yields one.

    With skip_falsy, empty strings/zeros/empty containers are passed over too
    (time fields); otherwise only missing keys and None are (value fields,
    where 0 is a real price).
    """
    for key in keys:
        val = record.get(key, _MISSING)
        if val is _MISSING or val is None:
            continue
        if skip_falsy and not val:
            continue
        return val
    return None


def resolve_intervals(doc: Any) -> list[RawInterval]:
    """Locate the array of price intervals in a loosely-shaped document."""
    if isinstance(doc, list):
        arr: Any = doc
    elif isinstance(doc, Mapping):
        arr = resolve_field(doc, canon.INTERVAL_KEYS, skip_falsy=True)
    else:
        raise EmptyData(f"Unexpected document type {type(doc).__name__}")

    if arr is None:
        raise EmptyData(
            "No interval array found. Expected one of: " + ", ".join(canon.INTERVAL_KEYS)
        )
    if not isinstance(arr, list):
        raise EmptyData(f"Interval field is {type(arr).__name__}, not an array")
    if len(arr) == 0:
        raise EmptyData("Interval array is empty")
    return arr


def time_field(record: RawInterval) -> Any:
    return resolve_field(record, canon.TIME_KEYS, skip_falsy=True)


def value_field(record: RawInterval) -> Any:
    return resolve_field(record, canon.VALUE_KEYS)
