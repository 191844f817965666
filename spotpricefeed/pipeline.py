from __future__ import annotations

import logging
from typing import Any, Optional

import pandas as pd
import requests

from . import fetch, formats, ingest, selection, timestamps, writer
from .config import FeedConfig, default_config
from .types import OutputDocument

logger = logging.getLogger(__name__)


def build_document(
    doc: Any, *, now: Any, config: Optional[FeedConfig] = None
) -> OutputDocument:
    """Fetched JSON -> OutputDocument (resolve, normalise, select, price)."""
    config = config or default_config()
    now = timestamps.as_utc(now)
    frame = ingest.from_payload(doc, now=now, config=config)
    chosen = selection.select_upcoming(frame, now, config.max_intervals)
    return formats.to_output_document(chosen, updated=now, config=config)


def run(
    config: Optional[FeedConfig] = None,
    *,
    now: Any = None,
    session: Optional[requests.Session] = None,
    dry_run: bool = False,
) -> OutputDocument:
    """
    One full pass: fetch (primary, then fallback), build the document and
    write it. Raises a SpotFeedError subclass on any fatal condition; the
    output file is only touched once the whole document exists.
    """
    config = config or default_config()
    now = timestamps.as_utc(pd.Timestamp.now(tz="UTC") if now is None else now)

    payload = fetch.fetch_with_fallback(
        config.source_urls, timeout=config.timeout_s, session=session
    )
    out = build_document(payload, now=now, config=config)

    if dry_run:
        logger.info("Dry run: %d intervals, not writing %s", out.count, config.output_path)
        return out

    path = writer.write_output(out, config.output_path)
    logger.info("Updated %d intervals -> %s", out.count, path)
    return out
