"""Anchor Routes — store/read the cross-device anchor and request a sync."""

import logging

from fastapi import APIRouter, Depends

from attune.api.dependencies import get_container
from attune.core.domain_types import UserId
from attune.core.errors import ResourceNotFoundError
from attune.schemas.anchor import AnchorStateSchema, SyncRequest, SyncResponse
from attune.services.container import ServiceContainer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/anchor", tags=["anchor"])


@router.put("/state", response_model=AnchorStateSchema)
async def store_state(
    body: AnchorStateSchema, container: ServiceContainer = Depends(get_container),
):
    state = body.to_domain()
    await container.anchors.store_state(state)
    return AnchorStateSchema.model_validate(state)


@router.get("/state/{user_id}", response_model=AnchorStateSchema)
async def get_state(
    user_id: str, container: ServiceContainer = Depends(get_container),
):
    state = await container.anchors.get_state(UserId(user_id))
    if state is None:
        raise ResourceNotFoundError("AnchorState", user_id)
    return AnchorStateSchema.model_validate(state)


@router.post("/sync", response_model=SyncResponse)
async def sync(
    body: SyncRequest, container: ServiceContainer = Depends(get_container),
):
    synced = await container.anchors.sync_across_devices(
        UserId(body.user_id), body.device_ids,
    )
    return SyncResponse(synced=synced)
