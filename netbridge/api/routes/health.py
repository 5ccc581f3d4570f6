"""Health Probe — liveness endpoint for the inspection API.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up
"""

from fastapi import APIRouter, Depends, status

from netbridge import __version__
from netbridge.api.dependencies import get_registry
from netbridge.core.endpoint_registry import EndpointRegistry

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(registry: EndpointRegistry = Depends(get_registry)):
    """Liveness probe with the number of registered endpoints."""
    return {
        "status": "healthy",
        "service": "netbridge",
        "version": __version__,
        "endpoints": len(registry),
    }
