"""Decision Routes — collapse decisions, friction scoring, and the decision audit log.

Invariants:
    - Input validated by Pydantic before reaching the services
    - Routes contain no decision logic (delegate to DecisionService)
"""

import logging

from fastapi import APIRouter, Depends, Query

from attune.api.dependencies import get_container
from attune.core.domain_types import UserId
from attune.schemas.decision import (
    DecideRequest, DecisionRecordResponse, DecisionResponse,
    FrictionRequest, FrictionResponse,
)
from attune.services.container import ServiceContainer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/decisions", tags=["decisions"])


@router.post("/decide", response_model=DecisionResponse)
async def decide(
    body: DecideRequest, container: ServiceContainer = Depends(get_container),
):
    """Collapse a feature vector into a routed action."""
    result = await container.decisions.decide(body.to_domain())
    return DecisionResponse.model_validate(result)


@router.post("/friction-score", response_model=FrictionResponse)
async def friction_score(
    body: FrictionRequest, container: ServiceContainer = Depends(get_container),
):
    score = container.decisions.calculate_friction(body.to_domain())
    return FrictionResponse(friction_score=score)


@router.get("/log/{user_id}", response_model=list[DecisionRecordResponse])
async def decision_log(
    user_id: str,
    limit: int = Query(50, ge=1, le=500),
    container: ServiceContainer = Depends(get_container),
):
    records = await container.decisions.get_decision_log(UserId(user_id), limit)
    return [DecisionRecordResponse.model_validate(r) for r in records]
