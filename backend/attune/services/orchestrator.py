"""Environmental Orchestrator — evaluates a user's active policies and executes matches.

Invariants:
    - Only policies with is_active=True are evaluated
    - Results returned (and logged) for matched policies only, in policy creation order
    - Each matched result is appended to the orchestration log before the next policy runs
    - An executed policy is always returned, even when appending it to the log fails
    - One policy failing (evaluation or execution) never stops the remaining policies
    - get_history returns the last `limit` results, oldest-first

Design Decisions:
    - Stores and executor injected: the orchestrator owns no state of its own
    - Time-of-day clauses see local wall-clock time (clock().astimezone())
"""

import logging
from collections.abc import Callable
from datetime import datetime

from attune.core.domain_types import PolicyId, UserId
from attune.core.environment import (
    OrchestrationResult, Policy, SmartDevice, utc_now,
)
from attune.core.errors import ResourceNotFoundError
from attune.core.policy_evaluator import matches
from attune.core.repository_protocols import (
    DeviceRepository, OrchestrationLogRepository, PolicyRepository,
)
from attune.services.policy_executor import PolicyExecutor

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


class EnvironmentalOrchestrator:

    def __init__(
        self,
        devices: DeviceRepository,
        policies: PolicyRepository,
        history: OrchestrationLogRepository,
        executor: PolicyExecutor,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._devices = devices
        self._policies = policies
        self._history = history
        self._executor = executor
        self._clock = clock

    # ─── Registry passthrough ───────────────────────────────────

    async def register_device(self, device: SmartDevice) -> None:
        if device.last_synced_at is None:
            device.last_synced_at = self._clock()
        await self._devices.upsert(device)
        logger.info(
            "Device registered",
            extra={"user_id": device.user_id, "device_id": device.device_id},
        )

    async def get_devices(self, user_id: UserId) -> list[SmartDevice]:
        return await self._devices.list_for_user(user_id)

    async def create_policy(self, policy: Policy) -> None:
        await self._policies.add(policy)
        logger.info(
            f"Policy created: {policy.policy_name}",
            extra={"user_id": policy.user_id, "policy_id": policy.id},
        )

    async def get_policies(self, user_id: UserId) -> list[Policy]:
        return await self._policies.list_for_user(user_id)

    async def deactivate_policy(self, user_id: UserId, policy_id: PolicyId) -> Policy:
        policy = await self._policies.set_active(user_id, policy_id, False)
        if policy is None:
            raise ResourceNotFoundError("Policy", policy_id)
        return policy

    # ─── Orchestration ──────────────────────────────────────────

    async def orchestrate(
        self,
        user_id: UserId,
        emotion_vector: dict[str, float],
        friction_score: float,
    ) -> list[OrchestrationResult]:
        local_now = self._clock().astimezone()
        results: list[OrchestrationResult] = []

        for policy in await self._policies.list_for_user(user_id):
            if not policy.is_active:
                continue
            try:
                if not matches(
                    policy.condition, emotion_vector, friction_score, local_now,
                ):
                    continue
                result = await self._executor.execute(user_id, policy)
            except Exception as e:
                logger.error(
                    f"Policy '{policy.policy_name}' failed: {e}",
                    exc_info=True,
                    extra={"user_id": user_id, "policy_id": policy.id},
                )
                continue
            results.append(result)
            await self._record(result)

        logger.info(
            f"Orchestration matched {len(results)} policy(ies)",
            extra={"user_id": user_id},
        )
        return results

    async def _record(self, result: OrchestrationResult) -> None:
        try:
            await self._history.append(result)
        except Exception as e:
            logger.error(
                f"Orchestration history append failed: {e}",
                exc_info=True,
                extra={"user_id": result.user_id, "policy_id": result.policy_id},
            )

    async def get_history(
        self, user_id: UserId, limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[OrchestrationResult]:
        return await self._history.tail(user_id, limit)
