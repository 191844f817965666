"""HTTP access to the price sources.

A source is either available (its decoded JSON document) or not (`None`).
Failures are logged here and never raised; only `fetch_with_fallback`
escalates when every source is down.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import requests

from . import canon
from .exceptions import SourceUnavailable

logger = logging.getLogger(__name__)

USER_AGENT = "spotpricefeed/0.1"


def _create_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT, "Accept": "application/json"})
    return session


def fetch_json(
    url: str,
    timeout: float = canon.REQUEST_TIMEOUT_S,
    session: Optional[requests.Session] = None,
) -> Optional[Any]:
    """
    GET `url` once and decode the JSON body.

    Non-2xx status, timeouts, connection errors and undecodable bodies all
    return None. A literal JSON null is also treated as unavailable.
    """
    if session is None:
        with _create_session() as owned:
            return fetch_json(url, timeout=timeout, session=owned)
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
        doc = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Failed to load %s: %s", url, exc)
        return None
    if doc is None:
        logger.warning("Empty JSON document from %s", url)
    return doc


def fetch_with_fallback(
    urls: Iterable[str],
    timeout: float = canon.REQUEST_TIMEOUT_S,
    session: Optional[requests.Session] = None,
) -> Any:
    """Try each URL once, in order; return the first available document."""
    if session is None:
        with _create_session() as owned:
            return fetch_with_fallback(urls, timeout=timeout, session=owned)
    tried: list[str] = []
    for url in urls:
        if tried:
            logger.warning("Source %s unavailable, trying fallback %s", tried[-1], url)
        else:
            logger.info("Loading prices from %s", url)
        doc = fetch_json(url, timeout=timeout, session=session)
        if doc is not None:
            return doc
        tried.append(url)
    raise SourceUnavailable(
        "No data from any source: " + (", ".join(tried) if tried else "no URLs configured")
    )
