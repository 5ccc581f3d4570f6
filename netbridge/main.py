"""netbridge Inspection API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map NetBridgeError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The registry lives on app.state.registry; routes reach it via get_registry

Design Decisions:
    - create_app() factory: tests inject a fresh registry per app
    - Lifespan over @app.on_event for logging setup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from netbridge import __version__
from netbridge.api.error_handlers import register_error_handlers
from netbridge.api.routes import endpoints, health
from netbridge.config import get_settings
from netbridge.core.endpoint_registry import EndpointRegistry
from netbridge.infrastructure.observability import setup_logging
from netbridge.infrastructure.registry_provider import get_default_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("netbridge inspection API started")
    yield
    logger.info("netbridge inspection API shutting down")


def create_app(registry: EndpointRegistry | None = None) -> FastAPI:
    """Build the inspection app around a registry (the default one if omitted)."""
    settings = get_settings()
    app = FastAPI(title="netbridge", version=__version__, lifespan=lifespan)
    app.state.registry = registry if registry is not None else get_default_registry()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(endpoints.router)
    register_error_handlers(app)
    return app


app = create_app()
