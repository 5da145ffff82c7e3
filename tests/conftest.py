from __future__ import annotations

import json
import os
from unittest.mock import Mock, patch

import pytest
import requests

from profitbase.client import ProfitbaseClient
from profitbase.transport import Transport


@pytest.fixture
def clean_env(monkeypatch):
    """Clean environment fixture to isolate tests."""
    # Store original values
    original_values = {}
    env_keys = ["PROFITBASE_API_KEY", "PROFITBASE_ENDPOINT", "CUSTOM_KEY"]

    for key in env_keys:
        if key in os.environ:
            original_values[key] = os.environ[key]
        monkeypatch.delenv(key, raising=False)

    yield

    # Restore original values
    for key, value in original_values.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def isolated_env(monkeypatch):
    """Give the test its own copy of os.environ."""
    monkeypatch.setattr(os, "environ", dict(os.environ))


@pytest.fixture(autouse=True)
def fake_time():
    """Replace the throttle's clock and sleep so no test actually waits."""
    with patch("profitbase.throttle.time") as mock_time:
        mock_time.monotonic.return_value = 1000.0
        yield mock_time


@pytest.fixture
def make_response():
    """Build real requests.Response objects with in-memory bodies."""

    def _make(status_code: int = 200, payload=None, text: str | None = None) -> requests.Response:
        res = requests.Response()
        res.status_code = status_code
        body = text if text is not None else json.dumps(payload if payload is not None else {})
        res._content = body.encode("utf-8")
        res._content_consumed = True
        res.encoding = "utf-8"
        return res

    return _make


@pytest.fixture
def token_response(make_response):
    def _make(token: str = "initial-token") -> requests.Response:
        return make_response(200, {"access_token": token})

    return _make


@pytest.fixture
def transport():
    return Mock(spec=Transport)


@pytest.fixture
def client_with(transport):
    """Create a client whose transport replays ``responses`` in order.

    The first response answers the authentication done at construction.
    Exceptions in the sequence are raised by the transport instead.
    """

    def _build(*responses, api_key: str = "test-key") -> ProfitbaseClient:
        transport.send.side_effect = list(responses)
        return ProfitbaseClient(transport, api_key)

    return _build
