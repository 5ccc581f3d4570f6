"""Registry Provider — builds EndpointRegistry instances from settings.

Invariants:
    - get_default_registry() is cached — one default registry per process
    - Tests and embedders construct their own registries instead of sharing it

Design Decisions:
    - Settings stay out of core/: the provider translates them into
      constructor arguments
"""

import logging
from functools import lru_cache

from netbridge.config import Settings, get_settings
from netbridge.core.endpoint_registry import EndpointRegistry

logger = logging.getLogger(__name__)


def build_registry(settings: Settings) -> EndpointRegistry:
    logger.debug(
        f"Building registry (weak_handles={settings.weak_handles}, "
        f"purge_rooms_on_detach={settings.purge_rooms_on_detach})",
    )
    return EndpointRegistry(
        weak_handles=settings.weak_handles,
        purge_rooms_on_detach=settings.purge_rooms_on_detach,
    )


@lru_cache
def get_default_registry() -> EndpointRegistry:
    return build_registry(get_settings())
