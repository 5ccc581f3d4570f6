"""Root conftest — shared test configuration and handle doubles."""

import os

import pytest

# Human-readable logs in test output; never pick up a developer's .env flags
os.environ.setdefault("NETBRIDGE_LOG_FORMAT", "text")
os.environ.setdefault("NETBRIDGE_PURGE_ROOMS_ON_DETACH", "false")

from netbridge.core.endpoint_registry import EndpointRegistry  # noqa: E402


class FakeServer:
    """Stand-in for a simulated server."""

    def __init__(self, name: str = "server"):
        self.name = name

    def __repr__(self):
        return f"FakeServer({self.name!r})"


class FakeConnection:
    """Stand-in for a simulated socket; `url` is the address it was opened with."""

    def __init__(self, url: str, name: str = "conn"):
        self.url = url
        self.name = name

    def __repr__(self):
        return f"FakeConnection({self.name!r}, {self.url!r})"


@pytest.fixture
def registry():
    return EndpointRegistry()


@pytest.fixture
def make_server():
    return FakeServer


@pytest.fixture
def make_connection():
    return FakeConnection
