"""Endpoint Inspection API — tests for listing, detail, connections and delete.

Invariants:
    - Unknown endpoints: /detail → 404, /connections → empty list
    - Addresses with an empty key → 400 INVALID_ADDRESS
    - Missing address parameter → 400 VALIDATION_ERROR
"""

import logging

import pytest

URL = "ws://host:1"


@pytest.fixture
def populated(api_registry, make_server, make_connection):
    """Server S on URL with c1, c2 attached and c1 in room 'r'."""
    s = make_server("S")
    c1, c2 = make_connection(URL, "c1"), make_connection(URL, "c2")
    api_registry.register_server(s, URL)
    api_registry.attach_connection(c1, URL)
    api_registry.attach_connection(c2, URL)
    api_registry.join_room(c1, "r")
    # Handles are held weakly; keep them alive for the test
    return s, c1, c2


async def test_health_reports_endpoint_count(client, populated):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["service"] == "netbridge"
    assert body["endpoints"] == 1


async def test_list_endpoints_empty(client):
    res = await client.get("/api/v1/endpoints")
    assert res.status_code == 200
    assert res.json() == []


async def test_list_endpoints(client, populated):
    res = await client.get("/api/v1/endpoints")
    assert res.json() == [{
        "key": URL,
        "server": "S",
        "server_alive": True,
        "connection_count": 2,
        "rooms": {"r": 1},
    }]


async def test_endpoint_detail(client, populated):
    res = await client.get(
        "/api/v1/endpoints/detail", params={"address": "ws://HOST:1/socket"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["key"] == URL
    assert body["connections"] == ["c1", "c2"]


async def test_endpoint_detail_unknown_is_404(client):
    res = await client.get(
        "/api/v1/endpoints/detail", params={"address": "ws://nowhere:9"},
    )
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "ENDPOINT_NOT_FOUND"
    assert error["context"]["endpoint_key"] == "ws://nowhere:9"


async def test_empty_key_address_is_400(client):
    res = await client.get(
        "/api/v1/endpoints/detail", params={"address": "?token=1"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_ADDRESS"


async def test_missing_address_is_validation_error(client):
    res = await client.get("/api/v1/endpoints/connections")
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"][0]["field"] == "query.address"


async def test_connections(client, populated):
    res = await client.get(
        "/api/v1/endpoints/connections", params={"address": URL},
    )
    assert res.json() == {
        "key": URL, "room": None, "connections": ["c1", "c2"], "count": 2,
    }


async def test_connections_in_room(client, populated):
    res = await client.get(
        "/api/v1/endpoints/connections", params={"address": URL, "room": "r"},
    )
    body = res.json()
    assert body["room"] == "r"
    assert body["connections"] == ["c1"]


async def test_connections_unknown_endpoint_is_empty(client):
    res = await client.get(
        "/api/v1/endpoints/connections", params={"address": "ws://nowhere:9", "room": "r"},
    )
    assert res.status_code == 200
    assert res.json()["count"] == 0


async def test_delete_deregisters(client, api_registry, populated):
    res = await client.delete("/api/v1/endpoints", params={"address": URL})
    assert res.status_code == 204
    assert URL not in api_registry
    assert api_registry.list_connections(URL) == []


async def test_delete_unknown_is_idempotent(client):
    res = await client.delete("/api/v1/endpoints", params={"address": "ws://nowhere:9"})
    assert res.status_code == 204


async def test_error_log_carries_address_and_severity(client, caplog):
    with caplog.at_level(logging.INFO, logger="netbridge.api.error_handlers"):
        await client.get("/api/v1/endpoints/detail", params={"address": "?token=1"})
    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.error_code == "INVALID_ADDRESS"
    assert record.address == "?token=1"
    assert record.path == "/api/v1/endpoints/detail"


async def test_not_found_logged_at_error_with_endpoint_key(client, caplog):
    with caplog.at_level(logging.INFO, logger="netbridge.api.error_handlers"):
        await client.get("/api/v1/endpoints/detail", params={"address": "ws://nowhere:9"})
    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert record.endpoint_key == "ws://nowhere:9"
