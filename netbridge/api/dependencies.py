"""API Dependencies — FastAPI dependency providers."""

from fastapi import Request

from netbridge.core.endpoint_registry import EndpointRegistry


def get_registry(request: Request) -> EndpointRegistry:
    """The registry instance bound to the running app."""
    return request.app.state.registry
