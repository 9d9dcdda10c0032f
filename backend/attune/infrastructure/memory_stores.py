"""In-Memory Stores — process-local implementations of the core store Protocols.

Invariants:
    - State partitioned by user_id; no method reads another user's partition
    - Reads return copies: callers never alias stored records
    - DeviceRepository.upsert replaces the whole record for an existing (user, device)
    - History stores are append-only, insertion-ordered

Design Decisions:
    - Instances, not module-level dicts: each container/test owns its own state
    - Used for store_backend=memory and for unit tests; SQL stores share the contract
"""

import copy
from collections import defaultdict
from dataclasses import replace
from datetime import datetime
from typing import Any

from attune.core.anchor_state import AnchorState
from attune.core.decision_audit import DecisionRecord
from attune.core.domain_types import DeviceId, PolicyId, UserId
from attune.core.environment import OrchestrationResult, Policy, SmartDevice


def _tail(items: list, limit: int) -> list:
    if limit <= 0:
        return []
    return list(items[-limit:])


class InMemoryDeviceRepository:

    def __init__(self):
        self._devices: dict[UserId, dict[DeviceId, SmartDevice]] = defaultdict(dict)

    async def upsert(self, device: SmartDevice) -> None:
        # dict keeps first-insertion order on replace
        self._devices[device.user_id][device.device_id] = copy.deepcopy(device)

    async def get(self, user_id: UserId, device_id: DeviceId) -> SmartDevice | None:
        device = self._devices.get(user_id, {}).get(device_id)
        return copy.deepcopy(device) if device else None

    async def list_for_user(self, user_id: UserId) -> list[SmartDevice]:
        return [copy.deepcopy(d) for d in self._devices.get(user_id, {}).values()]

    async def update_state(
        self, user_id: UserId, device_id: DeviceId,
        state: dict[str, Any], last_synced_at: datetime,
    ) -> None:
        devices = self._devices.get(user_id, {})
        current = devices.get(device_id)
        if current is None:
            return
        devices[device_id] = replace(
            current, state=copy.deepcopy(state), last_synced_at=last_synced_at,
        )


class InMemoryPolicyRepository:

    def __init__(self):
        self._policies: dict[UserId, list[Policy]] = defaultdict(list)

    async def add(self, policy: Policy) -> None:
        self._policies[policy.user_id].append(copy.deepcopy(policy))

    async def list_for_user(self, user_id: UserId) -> list[Policy]:
        return [copy.deepcopy(p) for p in self._policies.get(user_id, [])]

    async def set_active(
        self, user_id: UserId, policy_id: PolicyId, is_active: bool,
    ) -> Policy | None:
        found = None
        for policy in self._policies.get(user_id, []):
            if policy.id == policy_id:
                policy.is_active = is_active
                found = policy
        return copy.deepcopy(found) if found else None


class InMemoryOrchestrationLog:

    def __init__(self):
        self._history: dict[UserId, list[OrchestrationResult]] = defaultdict(list)

    async def append(self, result: OrchestrationResult) -> None:
        self._history[result.user_id].append(result)

    async def tail(self, user_id: UserId, limit: int) -> list[OrchestrationResult]:
        return _tail(self._history.get(user_id, []), limit)


class InMemoryDecisionLog:

    def __init__(self):
        self._records: dict[UserId, list[DecisionRecord]] = defaultdict(list)

    async def append(self, record: DecisionRecord) -> None:
        self._records[record.user_id].append(record)

    async def tail(self, user_id: UserId, limit: int) -> list[DecisionRecord]:
        return _tail(self._records.get(user_id, []), limit)


class InMemoryAnchorRepository:

    def __init__(self):
        self._states: dict[UserId, AnchorState] = {}

    async def put(self, state: AnchorState) -> None:
        self._states[state.user_id] = state

    async def get(self, user_id: UserId) -> AnchorState | None:
        return self._states.get(user_id)
