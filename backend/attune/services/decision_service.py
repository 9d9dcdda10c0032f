"""Decision Service — imperative shell around the collapse engine and friction model.

Invariants:
    - decide() always returns the engine's DecisionResult; audit/sync side effects never alter it
    - Exactly one audit record appended per decide() call
    - ORCHESTRATE_SYNC triggers one anchor sync for the context's device ids
      (skipped, and recorded FAILED, when anchor sync is disabled)

Design Decisions:
    - Impureim sandwich: pure engine in the middle, repositories on both sides
"""

import logging

from attune.core.collapse_engine import CollapseEngine, DecisionContext, DecisionResult
from attune.core.decision_audit import DecisionRecord, build_decision_record
from attune.core.domain_types import DecisionAction, FrictionScore, UserId
from attune.core.friction_model import FrictionMetrics, calculate_friction
from attune.core.repository_protocols import DecisionLogRepository
from attune.services.anchor_service import AnchorService

logger = logging.getLogger(__name__)


class DecisionService:

    def __init__(
        self,
        engine: CollapseEngine,
        decision_log: DecisionLogRepository,
        anchors: AnchorService,
        anchor_sync_enabled: bool = True,
    ):
        self._engine = engine
        self._decision_log = decision_log
        self._anchors = anchors
        self._anchor_sync_enabled = anchor_sync_enabled

    async def decide(self, context: DecisionContext) -> DecisionResult:
        result = self._engine.decide(context)

        synced = None
        if result.action is DecisionAction.ORCHESTRATE_SYNC:
            synced = False
            if self._anchor_sync_enabled:
                synced = await self._anchors.sync_across_devices(
                    context.user_id, list(context.device_ids or []),
                )

        await self._decision_log.append(
            build_decision_record(context, result, synced),
        )
        logger.info(
            f"Decision {result.action.value} ({result.tri_state.value}, "
            f"confidence={result.confidence:.2f})",
            extra={"user_id": context.user_id, "action": result.action.value},
        )
        return result

    def calculate_friction(self, metrics: FrictionMetrics) -> FrictionScore:
        return calculate_friction(metrics)

    async def get_decision_log(
        self, user_id: UserId, limit: int,
    ) -> list[DecisionRecord]:
        return await self._decision_log.tail(user_id, limit)
