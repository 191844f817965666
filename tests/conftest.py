import pandas as pd
import pytest
import requests

NOW = pd.Timestamp("2025-10-18T10:00:00Z")


class FakeResponse:
    def __init__(self, status_code=200, payload=None, body_error=False):
        self.status_code = status_code
        self._payload = payload
        self._body_error = body_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._body_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Routes url -> FakeResponse (or an exception to raise); records calls."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.closed = True

    def get(self, url, timeout=None):
        self.calls.append(url)
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def quarter_rng():
    # 09:00Z .. 13:45Z, 15 min slots
    return pd.date_range("2025-10-18T09:00:00Z", periods=20, freq="15min")


@pytest.fixture
def min15_payload(quarter_rng):
    return {
        "min15": [
            {"time": ts.strftime("%Y-%m-%dT%H:%M:%SZ"), "value": 5.0 + 0.5 * i}
            for i, ts in enumerate(quarter_rng)
        ]
    }


@pytest.fixture
def mirror_payload(quarter_rng):
    # EUR/MWh values under alternate key names
    return {
        "prices": [
            {"StartTime": ts.strftime("%Y-%m-%dT%H:%M:%SZ"), "Price": 120.0 + i}
            for i, ts in enumerate(quarter_rng)
        ]
    }


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse
