"""Endpoint Inspection — read registry state, deregister leaked endpoints.

Invariants:
    - GET /detail returns 404 ENDPOINT_NOT_FOUND for unregistered endpoints
    - GET /connections mirrors list_connections(): unknown endpoints give []
    - DELETE is idempotent (204 whether or not the endpoint existed)
    - Addresses that normalize to an empty key are rejected with 400

Design Decisions:
    - Addresses passed as query parameters: they are full URLs
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from netbridge.api.dependencies import get_registry
from netbridge.core.domain_types import EndpointKey
from netbridge.core.endpoint_registry import EndpointRegistry
from netbridge.core.errors import EndpointNotFoundError, InvalidAddressError
from netbridge.core.registry_snapshot import (
    handle_label, snapshot_group, snapshot_registry,
)
from netbridge.schemas.endpoint import (
    ConnectionListResponse, EndpointDetail, EndpointSummary,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/endpoints", tags=["endpoints"])


def _require_key(registry: EndpointRegistry, address: str) -> EndpointKey:
    key = registry.normalize(address)
    if not key:
        raise InvalidAddressError(address)
    return key


@router.get("", response_model=list[EndpointSummary])
async def list_endpoints(registry: EndpointRegistry = Depends(get_registry)):
    """All registered endpoints, in registration order."""
    return [
        EndpointSummary.from_snapshot(snap)
        for snap in snapshot_registry(registry)
    ]


@router.get("/detail", response_model=EndpointDetail)
async def get_endpoint(
    address: str = Query(min_length=1),
    registry: EndpointRegistry = Depends(get_registry),
):
    key = _require_key(registry, address)
    group = registry.lookup_group(address)
    if group is None:
        raise EndpointNotFoundError(key)
    return EndpointDetail.from_snapshot(snapshot_group(group))


@router.get("/connections", response_model=ConnectionListResponse)
async def list_endpoint_connections(
    address: str = Query(min_length=1),
    room: str | None = Query(None),
    registry: EndpointRegistry = Depends(get_registry),
):
    key = _require_key(registry, address)
    connections = registry.list_connections(address, room=room)
    return ConnectionListResponse(
        key=key,
        room=room or None,
        connections=[handle_label(c) for c in connections],
        count=len(connections),
    )


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def deregister_endpoint(
    address: str = Query(min_length=1),
    registry: EndpointRegistry = Depends(get_registry),
):
    key = _require_key(registry, address)
    logger.info(f"Deregistering {key} via API", extra={"endpoint_key": key})
    registry.deregister_server(address)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
