"""Environment Entities — devices, policies, and orchestration outcomes.

Invariants:
    - SmartDevice is unique per (user_id, device_id); re-registration replaces the record
    - Policy is append-created; only is_active may change after creation
    - PolicyCondition clauses are optional; an absent clause always passes
    - CommandOutcome carries a tagged status; success/error are derived, never stored
    - OrchestrationResult.actions preserves the policy's action order

Design Decisions:
    - Plain dataclasses, no ORM: the core never knows how entities are persisted
    - DEVICE_NOT_FOUND message is the public contract string ("Device not found")
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from attune.core.domain_types import (
    CommandStatus, DeviceId, PolicyId, UserId,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SmartDevice:
    id: str
    user_id: UserId
    device_id: DeviceId
    device_name: str
    device_type: str
    state: dict[str, Any] = field(default_factory=dict)
    last_synced_at: datetime | None = None


# ─── Policy ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class FrictionWindow:
    """Inclusive bounds; None means unbounded on that side."""
    min: float | None = None
    max: float | None = None


@dataclass(frozen=True)
class TimeWindow:
    """HH:MM strings compared lexicographically.

    wraps_midnight=False keeps plain [start, end] ordering, which cannot
    express windows like 22:00–06:00.
    """
    start: str
    end: str
    wraps_midnight: bool = False


@dataclass(frozen=True)
class PolicyCondition:
    emotion_vector: dict[str, float] | None = None
    friction_score: FrictionWindow | None = None
    time_of_day: TimeWindow | None = None


@dataclass(frozen=True)
class DeviceAction:
    device_id: DeviceId
    command: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass
class Policy:
    id: PolicyId
    user_id: UserId
    policy_name: str
    condition: PolicyCondition
    actions: list[DeviceAction]
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)


# ─── Orchestration ───────────────────────────────────────────────

OUTCOME_MESSAGES: dict[CommandStatus, str] = {
    CommandStatus.DEVICE_NOT_FOUND: "Device not found",
    CommandStatus.EXECUTION_ERROR: "Device command failed",
    CommandStatus.TIMEOUT: "Device command timed out",
}


@dataclass(frozen=True)
class CommandOutcome:
    device_id: DeviceId
    command: str
    status: CommandStatus
    detail: str | None = None

    @property
    def success(self) -> bool:
        return self.status is CommandStatus.SUCCESS

    @property
    def error(self) -> str | None:
        return OUTCOME_MESSAGES.get(self.status)


@dataclass(frozen=True)
class OrchestrationResult:
    user_id: UserId
    policy_id: PolicyId
    policy_name: str
    triggered_at: datetime
    actions: list[CommandOutcome]

    @property
    def all_succeeded(self) -> bool:
        return all(a.success for a in self.actions)
