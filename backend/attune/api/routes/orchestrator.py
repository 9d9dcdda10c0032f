"""Orchestrator Routes — device registry, policy store, orchestration, and history.

Invariants:
    - Every route gated by enable_environmental_orchestrator (404 envelope when off)
    - Device-level failures come back inside the result body, never as HTTP errors
    - History limit defaults to settings.history_default_limit, capped at history_max_limit
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from attune.api.dependencies import require_orchestrator
from attune.core.domain_types import PolicyId, UserId
from attune.schemas.orchestrator import (
    DeviceRegistration, DeviceResponse, OrchestrateRequest,
    OrchestrationResultResponse, PolicyCreate, PolicyResponse,
)
from attune.schemas.signals import emotions_to_domain
from attune.services.container import ServiceContainer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/orchestrator", tags=["orchestrator"])


# ─── Devices ─────────────────────────────────────────────────────

@router.post(
    "/devices", response_model=DeviceResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_device(
    body: DeviceRegistration,
    container: ServiceContainer = Depends(require_orchestrator),
):
    """Upsert a device by (userId, deviceId)."""
    device = body.to_domain()
    await container.orchestrator.register_device(device)
    return DeviceResponse.model_validate(device)


@router.get("/devices/{user_id}", response_model=list[DeviceResponse])
async def list_devices(
    user_id: str, container: ServiceContainer = Depends(require_orchestrator),
):
    devices = await container.orchestrator.get_devices(UserId(user_id))
    return [DeviceResponse.model_validate(d) for d in devices]


# ─── Policies ────────────────────────────────────────────────────

@router.post(
    "/policies", response_model=PolicyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_policy(
    body: PolicyCreate,
    container: ServiceContainer = Depends(require_orchestrator),
):
    policy = body.to_domain()
    await container.orchestrator.create_policy(policy)
    return PolicyResponse.from_domain(policy)


@router.get("/policies/{user_id}", response_model=list[PolicyResponse])
async def list_policies(
    user_id: str, container: ServiceContainer = Depends(require_orchestrator),
):
    policies = await container.orchestrator.get_policies(UserId(user_id))
    return [PolicyResponse.from_domain(p) for p in policies]


@router.post(
    "/policies/{user_id}/{policy_id}/deactivate", response_model=PolicyResponse,
)
async def deactivate_policy(
    user_id: str, policy_id: str,
    container: ServiceContainer = Depends(require_orchestrator),
):
    policy = await container.orchestrator.deactivate_policy(
        UserId(user_id), PolicyId(policy_id),
    )
    return PolicyResponse.from_domain(policy)


# ─── Orchestration ───────────────────────────────────────────────

@router.post("/orchestrate", response_model=list[OrchestrationResultResponse])
async def orchestrate(
    body: OrchestrateRequest,
    container: ServiceContainer = Depends(require_orchestrator),
):
    """Evaluate all active policies and execute the matching ones."""
    results = await container.orchestrator.orchestrate(
        UserId(body.user_id),
        emotions_to_domain(body.emotion_vector) or {},
        body.friction_score,
    )
    return [OrchestrationResultResponse.from_domain(r) for r in results]


@router.get(
    "/history/{user_id}", response_model=list[OrchestrationResultResponse],
)
async def history(
    user_id: str,
    limit: int | None = Query(None, ge=1),
    container: ServiceContainer = Depends(require_orchestrator),
):
    settings = container.settings
    effective = min(limit or settings.history_default_limit, settings.history_max_limit)
    results = await container.orchestrator.get_history(UserId(user_id), effective)
    return [OrchestrationResultResponse.from_domain(r) for r in results]
