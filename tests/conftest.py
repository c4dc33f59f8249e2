"""
Econ Data Explorer — Test Fixtures
In-memory stand-ins for requests.Session so no test touches the network.
"""
import os
import sys

import pytest
import requests

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self.text is not None:
            raise ValueError(f"Expecting value: {self.text!r}")
        return self.payload


class FakeSession:
    """
    Answers GETs with a handler(url, params) -> FakeResponse.

    A handler may raise requests exceptions to simulate network failures.
    Every call is recorded in `calls` as (url, params).
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls = []

    def get(self, url, params=None, timeout=None, headers=None):
        self.calls.append((url, dict(params or {})))
        return self.handler(url, params or {})


@pytest.fixture
def fake_session():
    """Factory: fake_session(handler) -> FakeSession."""
    return FakeSession


@pytest.fixture
def response():
    """Factory: response(payload, status_code=200, text=None) -> FakeResponse."""
    return FakeResponse


@pytest.fixture
def offline_session():
    """A session whose every request fails with a connection error."""

    def handler(url, params):
        raise requests.ConnectionError("network unreachable")

    return FakeSession(handler)
