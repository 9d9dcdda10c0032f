"""Route Dependencies — resolve the lifespan-built ServiceContainer per request.

Invariants:
    - Container lives on app.state (set in lifespan); routes never build services
    - Orchestrator routes raise FeatureDisabledError when the flag is off

Design Decisions:
    - app.state over module globals: tests build their own app state per client
"""

from fastapi import Depends, Request

from attune.core.errors import FeatureDisabledError
from attune.services.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("Service container not initialized")
    return container


def require_orchestrator(
    container: ServiceContainer = Depends(get_container),
) -> ServiceContainer:
    if not container.settings.enable_environmental_orchestrator:
        raise FeatureDisabledError("environmental_orchestrator")
    return container
