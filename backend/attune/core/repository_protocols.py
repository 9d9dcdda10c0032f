"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Every store is keyed by owning user; no method reads across users
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves —
      the shell orchestrates the async calls around the pure logic
"""

from datetime import datetime
from typing import Any, Protocol

from attune.core.anchor_state import AnchorState
from attune.core.decision_audit import DecisionRecord
from attune.core.domain_types import DeviceId, PolicyId, UserId
from attune.core.environment import OrchestrationResult, Policy, SmartDevice


class DeviceRepository(Protocol):
    """Per-user device registry — upsert by (user_id, device_id)."""
    async def upsert(self, device: SmartDevice) -> None: ...
    async def get(self, user_id: UserId, device_id: DeviceId) -> SmartDevice | None: ...
    async def list_for_user(self, user_id: UserId) -> list[SmartDevice]: ...
    async def update_state(
        self, user_id: UserId, device_id: DeviceId,
        state: dict[str, Any], last_synced_at: datetime,
    ) -> None: ...


class PolicyRepository(Protocol):
    """Append-only policy store; only the active flag is mutable."""
    async def add(self, policy: Policy) -> None: ...
    async def list_for_user(self, user_id: UserId) -> list[Policy]: ...
    async def set_active(
        self, user_id: UserId, policy_id: PolicyId, is_active: bool,
    ) -> Policy | None: ...


class OrchestrationLogRepository(Protocol):
    """Append-only orchestration history, insertion-ordered."""
    async def append(self, result: OrchestrationResult) -> None: ...
    async def tail(self, user_id: UserId, limit: int) -> list[OrchestrationResult]: ...


class DecisionLogRepository(Protocol):
    """Audit trail of emitted decisions."""
    async def append(self, record: DecisionRecord) -> None: ...
    async def tail(self, user_id: UserId, limit: int) -> list[DecisionRecord]: ...


class AnchorRepository(Protocol):
    async def put(self, state: AnchorState) -> None: ...
    async def get(self, user_id: UserId) -> AnchorState | None: ...


class DeviceCommandDispatcher(Protocol):
    """Sends one command to one device; returns the device's resulting state.

    Raises DeviceCommandError / DeviceCommandTimeoutError on failure.
    """
    async def send(
        self, device: SmartDevice, command: str,
        parameters: dict[str, Any], now: datetime,
    ) -> dict[str, Any]: ...
