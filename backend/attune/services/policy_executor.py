"""Policy Executor — dispatches a matched policy's device commands in order.

Invariants:
    - Actions run in list order; a failed action never aborts the remaining ones
    - Unknown device → DEVICE_NOT_FOUND outcome, dispatcher never called
    - Timeout → TIMEOUT outcome; adapter failure or any other error → EXECUTION_ERROR
    - Device state persisted only after a successful dispatch
    - Each (user_id, device_id) read-dispatch-write runs under its own lock
    - Every outcome of one execute() shares one trigger timestamp

Design Decisions:
    - Broad except per action: per-device isolation is the contract,
      the exception is logged with traceback and recorded inline
"""

import logging
from collections.abc import Callable
from datetime import datetime

from attune.core.domain_types import CommandStatus, UserId
from attune.core.environment import (
    CommandOutcome, DeviceAction, OrchestrationResult, Policy, utc_now,
)
from attune.core.errors import AttuneError, DeviceCommandTimeoutError
from attune.core.repository_protocols import (
    DeviceCommandDispatcher, DeviceRepository,
)
from attune.infrastructure.keyed_locks import KeyedLocks

logger = logging.getLogger(__name__)


class PolicyExecutor:

    def __init__(
        self,
        devices: DeviceRepository,
        dispatcher: DeviceCommandDispatcher,
        locks: KeyedLocks | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._devices = devices
        self._dispatcher = dispatcher
        self._locks = locks if locks is not None else KeyedLocks()
        self._clock = clock

    async def execute(self, user_id: UserId, policy: Policy) -> OrchestrationResult:
        triggered_at = self._clock()
        outcomes = [
            await self._run_action(user_id, action, triggered_at)
            for action in policy.actions
        ]
        return OrchestrationResult(
            user_id=user_id,
            policy_id=policy.id,
            policy_name=policy.policy_name,
            triggered_at=triggered_at,
            actions=outcomes,
        )

    async def _run_action(
        self, user_id: UserId, action: DeviceAction, now: datetime,
    ) -> CommandOutcome:
        async with self._locks.lock(user_id, action.device_id):
            try:
                return await self._dispatch(user_id, action, now)
            except Exception as e:
                logger.error(
                    f"Unexpected error executing {action.command}: {e}",
                    exc_info=True,
                    extra={"user_id": user_id, "device_id": action.device_id},
                )
                return _outcome(action, CommandStatus.EXECUTION_ERROR, str(e))

    async def _dispatch(
        self, user_id: UserId, action: DeviceAction, now: datetime,
    ) -> CommandOutcome:
        device = await self._devices.get(user_id, action.device_id)
        if device is None:
            logger.warning(
                "Policy action targets unregistered device",
                extra={"user_id": user_id, "device_id": action.device_id},
            )
            return _outcome(action, CommandStatus.DEVICE_NOT_FOUND)

        try:
            new_state = await self._dispatcher.send(
                device, action.command, action.parameters, now,
            )
        except DeviceCommandTimeoutError as e:
            return _outcome(action, CommandStatus.TIMEOUT, e.message)
        except AttuneError as e:
            return _outcome(action, CommandStatus.EXECUTION_ERROR, e.message)

        await self._devices.update_state(
            user_id, action.device_id, new_state, last_synced_at=now,
        )
        return _outcome(action, CommandStatus.SUCCESS)


def _outcome(
    action: DeviceAction, status: CommandStatus, detail: str | None = None,
) -> CommandOutcome:
    return CommandOutcome(
        device_id=action.device_id,
        command=action.command,
        status=status,
        detail=detail,
    )
