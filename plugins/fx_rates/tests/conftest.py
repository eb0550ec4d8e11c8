import pytest
import requests

from plugins.fx_rates.core import FxSettings, RateClient


class FakeResponse:
    def __init__(self, payload=None, status_code=200, reason="OK", body_error=None):
        self.payload = payload
        self.status_code = status_code
        self.reason = reason
        self.body_error = body_error

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self.body_error is not None:
            raise self.body_error
        return self.payload


class FakeSession:
    """Stands in for :class:`requests.Session`, recording every GET."""

    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.calls = []
        self.headers = {}
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        if self.error is not None:
            raise self.error
        if not self.responses:
            raise AssertionError(f"unexpected request to {url}")
        return self.responses.pop(0)

    def close(self):
        self.closed = True


@pytest.fixture
def settings():
    return FxSettings(provider_url="https://rates.test/v1", timeout=3.0)


@pytest.fixture
def make_client(settings):
    def _make(*responses, error=None):
        session = FakeSession(responses, error=error)
        return RateClient(settings, session=session), session

    return _make


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession
