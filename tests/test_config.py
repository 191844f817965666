from decimal import Decimal
from pathlib import Path
import argparse

import pydantic
import pytest

from spotpricefeed import canon, cli
from spotpricefeed.config import FeedConfig, default_config
from spotpricefeed.exceptions import ConfigError


def test_defaults():
    cfg = default_config()
    assert cfg.vat_multiplier == Decimal("1.255")
    assert cfg.margin == Decimal("0.49")
    assert cfg.max_intervals == 12
    assert cfg.output_path == Path("public/spotprices.json")
    assert cfg.source_urls == [canon.DEFAULT_PRIMARY_URL, canon.DEFAULT_FALLBACK_URL]


def test_environment_overrides(monkeypatch):
    env = {
        "SPOTFEED_PRIMARY_URL": "https://a.example/p",
        "SPOTFEED_MAX_INTERVALS": "24",
        "SPOTFEED_VAT_MULTIPLIER": "1.24",
        "SPOTFEED_TIMEOUT_S": "7.5",
        "SPOTFEED_EMIT_ALV": "yes",
        "SPOTFEED_OUTPUT_PATH": "/srv/www/prices.json",
        "SPOTFEED_OUTPUT_OFFSET": "+02:00",
        "SPOTFEED_MARGIN": "",  # blank keeps the default
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    cfg = FeedConfig()
    assert cfg.primary_url == "https://a.example/p"
    assert cfg.max_intervals == 24
    assert cfg.vat_multiplier == Decimal("1.24")
    assert cfg.timeout_s == 7.5
    assert cfg.emit_alv is True
    assert cfg.output_path == Path("/srv/www/prices.json")
    assert cfg.output_offset == "+02:00"
    assert cfg.margin == Decimal("0.49")


def test_keyword_arguments_beat_environment(monkeypatch):
    monkeypatch.setenv("SPOTFEED_MAX_INTERVALS", "24")
    assert FeedConfig(max_intervals=3).max_intervals == 3


@pytest.mark.parametrize(
    "key, value",
    [
        ("SPOTFEED_MAX_INTERVALS", "many"),
        ("SPOTFEED_VAT_MULTIPLIER", "1,255"),
        ("SPOTFEED_EMIT_ALV", "maybe"),
        ("SPOTFEED_MAX_INTERVALS", "0"),
        ("SPOTFEED_TIMEOUT_S", "-1"),
        ("SPOTFEED_LOOKBACK_HOURS", "-2"),
        ("SPOTFEED_OUTPUT_OFFSET", "+3"),
        ("SPOTFEED_LOCAL_TZ", "Mars/Olympus_Mons"),
    ],
)
def test_invalid_environment_is_rejected(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(pydantic.ValidationError):
        FeedConfig()


def _args(**kw):
    base = dict(
        primary_url=None,
        fallback_url=None,
        output_path=None,
        max_intervals=None,
        timeout_s=None,
        output_offset=None,
        emit_alv=None,
    )
    base.update(kw)
    return argparse.Namespace(**base)


def test_load_config_wraps_validation_errors(monkeypatch):
    monkeypatch.setenv("SPOTFEED_EMIT_ALV", "maybe")
    with pytest.raises(ConfigError, match="emit_alv"):
        cli.load_config(_args())


def test_load_config_validates_overrides():
    with pytest.raises(ConfigError, match="max_intervals"):
        cli.load_config(_args(max_intervals=0))


def test_load_config_applies_overrides(monkeypatch):
    monkeypatch.setenv("SPOTFEED_MAX_INTERVALS", "24")
    cfg = cli.load_config(_args(max_intervals=6, output_offset="+03:00"))
    assert cfg.max_intervals == 6
    assert cfg.output_offset == "+03:00"


def test_config_is_frozen():
    cfg = FeedConfig()
    with pytest.raises(pydantic.ValidationError):
        cfg.max_intervals = 5


def test_without_fallback():
    cfg = FeedConfig(fallback_url=None)
    assert cfg.source_urls == [canon.DEFAULT_PRIMARY_URL]


def test_with_overrides_ignores_none():
    cfg = FeedConfig().with_overrides(max_intervals=4, primary_url=None)
    assert cfg.max_intervals == 4
    assert cfg.primary_url == canon.DEFAULT_PRIMARY_URL
