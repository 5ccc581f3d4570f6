"""API test fixtures — FastAPI app bound to a fresh registry per test.

Invariants:
    - Every test gets its own EndpointRegistry (never the process default)
    - httpx AsyncClient talks to the app in-process via ASGITransport
"""

import pytest
from httpx import ASGITransport, AsyncClient

from netbridge.core.endpoint_registry import EndpointRegistry
from netbridge.main import create_app


@pytest.fixture
def api_registry():
    return EndpointRegistry()


@pytest.fixture
async def client(api_registry):
    app = create_app(api_registry)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
