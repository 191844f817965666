"""Interval array and field lookup over loosely-shaped documents."""

import pytest

from spotpricefeed import resolve
from spotpricefeed.exceptions import EmptyData


def test_first_key_in_order_wins():
    doc = {"Prices": [{"v": 2}], "data": [{"v": 1}]}
    assert resolve.resolve_intervals(doc) == [{"v": 1}]


def test_empty_earlier_key_is_skipped():
    doc = {"min15": [], "Min15": None, "PricesList": [{"v": 3}]}
    assert resolve.resolve_intervals(doc) == [{"v": 3}]


def test_top_level_array_is_used_directly():
    assert resolve.resolve_intervals([{"v": 1}, {"v": 2}]) == [{"v": 1}, {"v": 2}]


def test_keys_are_case_sensitive():
    with pytest.raises(EmptyData):
        resolve.resolve_intervals({"MIN15": [{"v": 1}]})


@pytest.mark.parametrize(
    "doc",
    [
        {},
        {"data": []},
        {"data": {"v": 1}},
        {"prices": "not a list"},
        [],
        "oops",
        None,
    ],
)
def test_missing_or_malformed_array_raises_empty_data(doc):
    with pytest.raises(EmptyData):
        resolve.resolve_intervals(doc)


def test_value_field_keeps_zero():
    assert resolve.value_field({"value": 0, "Price": 9}) == 0


def test_value_field_skips_none():
    assert resolve.value_field({"value": None, "v": "4.2"}) == "4.2"


def test_time_field_skips_empty_strings():
    assert resolve.time_field({"time": "", "StartTime": "2025-10-18T10:00:00Z"}) == (
        "2025-10-18T10:00:00Z"
    )


def test_time_field_missing_returns_none():
    assert resolve.time_field({"value": 1}) is None
