"""Orchestrator Schemas — devices, policies, and orchestration results on the wire.

Invariants:
    - Policy commands restricted to the DeviceCommand vocabulary
    - Friction window: min <= max when both set
    - Time window: zero-padded HH:MM; start > end rejected unless wrapsMidnight
    - Device and policy ids generated (uuid4) when the client omits them
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from attune.core.domain_types import (
    CommandStatus, DeviceCommand, DeviceId, DeviceType, PolicyId, UserId,
)
from attune.core.environment import (
    DeviceAction, FrictionWindow, OrchestrationResult, Policy,
    PolicyCondition, SmartDevice, TimeWindow, utc_now,
)
from attune.schemas import CamelModel
from attune.schemas.signals import EmotionVector, UnitFloat, emotions_to_domain


HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


# ─── Devices ─────────────────────────────────────────────────────

class DeviceRegistration(CamelModel):
    id: str | None = None
    user_id: str = Field(min_length=1, max_length=255)
    device_id: str = Field(min_length=1, max_length=255)
    device_name: str = Field(min_length=1, max_length=255)
    device_type: DeviceType
    state: dict[str, Any] = Field(default_factory=dict)
    last_synced_at: datetime | None = None

    def to_domain(self) -> SmartDevice:
        return SmartDevice(
            id=self.id or str(uuid.uuid4()),
            user_id=UserId(self.user_id),
            device_id=DeviceId(self.device_id),
            device_name=self.device_name,
            device_type=self.device_type.value,
            state=dict(self.state),
            last_synced_at=self.last_synced_at,
        )


class DeviceResponse(CamelModel):
    id: str
    user_id: str
    device_id: str
    device_name: str
    device_type: str
    state: dict[str, Any]
    last_synced_at: datetime | None = None


# ─── Policies ────────────────────────────────────────────────────

class FrictionWindowSchema(CamelModel):
    min: UnitFloat | None = None
    max: UnitFloat | None = None

    @model_validator(mode="after")
    def validate_bounds(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("frictionScore.min must be <= frictionScore.max")
        return self


class TimeWindowSchema(CamelModel):
    start: str = Field(pattern=HHMM_PATTERN)
    end: str = Field(pattern=HHMM_PATTERN)
    wraps_midnight: bool = False

    @model_validator(mode="after")
    def validate_order(self):
        if self.start > self.end and not self.wraps_midnight:
            raise ValueError(
                "timeOfDay.start is after timeOfDay.end; set wrapsMidnight "
                "to express a window that crosses midnight",
            )
        return self


class ConditionSchema(CamelModel):
    emotion_vector: EmotionVector | None = None
    friction_score: FrictionWindowSchema | None = None
    time_of_day: TimeWindowSchema | None = None


class DeviceActionSchema(CamelModel):
    device_id: str = Field(min_length=1, max_length=255)
    command: DeviceCommand
    parameters: dict[str, Any] = Field(default_factory=dict)


class PolicyActionSchema(CamelModel):
    devices: list[DeviceActionSchema] = Field(min_length=1)


class PolicyCreate(CamelModel):
    id: str | None = None
    user_id: str = Field(min_length=1, max_length=255)
    policy_name: str = Field(min_length=1, max_length=255)
    condition: ConditionSchema = Field(default_factory=ConditionSchema)
    action: PolicyActionSchema
    is_active: bool = True
    created_at: datetime | None = None

    def to_domain(self) -> Policy:
        c = self.condition
        return Policy(
            id=PolicyId(self.id or str(uuid.uuid4())),
            user_id=UserId(self.user_id),
            policy_name=self.policy_name,
            condition=PolicyCondition(
                emotion_vector=emotions_to_domain(c.emotion_vector),
                friction_score=(
                    FrictionWindow(min=c.friction_score.min, max=c.friction_score.max)
                    if c.friction_score else None
                ),
                time_of_day=(
                    TimeWindow(
                        start=c.time_of_day.start,
                        end=c.time_of_day.end,
                        wraps_midnight=c.time_of_day.wraps_midnight,
                    )
                    if c.time_of_day else None
                ),
            ),
            actions=[
                DeviceAction(
                    device_id=DeviceId(a.device_id),
                    command=a.command.value,
                    parameters=dict(a.parameters),
                )
                for a in self.action.devices
            ],
            is_active=self.is_active,
            created_at=self.created_at or utc_now(),
        )


class PolicyResponse(CamelModel):
    id: str
    user_id: str
    policy_name: str
    condition: dict[str, Any]
    action: dict[str, Any]
    is_active: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, policy: Policy) -> "PolicyResponse":
        c = policy.condition
        condition: dict[str, Any] = {}
        if c.emotion_vector is not None:
            condition["emotionVector"] = dict(c.emotion_vector)
        if c.friction_score is not None:
            condition["frictionScore"] = {
                "min": c.friction_score.min, "max": c.friction_score.max,
            }
        if c.time_of_day is not None:
            condition["timeOfDay"] = {
                "start": c.time_of_day.start,
                "end": c.time_of_day.end,
                "wrapsMidnight": c.time_of_day.wraps_midnight,
            }
        return cls(
            id=policy.id,
            user_id=policy.user_id,
            policy_name=policy.policy_name,
            condition=condition,
            action={
                "devices": [
                    {
                        "deviceId": a.device_id,
                        "command": a.command,
                        "parameters": dict(a.parameters),
                    }
                    for a in policy.actions
                ],
            },
            is_active=policy.is_active,
            created_at=policy.created_at,
        )


# ─── Orchestration ───────────────────────────────────────────────

class OrchestrateRequest(CamelModel):
    user_id: str = Field(min_length=1, max_length=255)
    emotion_vector: EmotionVector = Field(default_factory=dict)
    friction_score: UnitFloat


class ActionOutcomeResponse(CamelModel):
    device_id: str
    command: str
    status: CommandStatus
    success: bool
    error: str | None = None


class OrchestrationResultResponse(CamelModel):
    policy_id: str
    policy_name: str
    triggered_at: datetime
    actions: list[ActionOutcomeResponse]

    @classmethod
    def from_domain(cls, result: OrchestrationResult) -> "OrchestrationResultResponse":
        return cls(
            policy_id=result.policy_id,
            policy_name=result.policy_name,
            triggered_at=result.triggered_at,
            actions=[
                ActionOutcomeResponse(
                    device_id=a.device_id,
                    command=a.command,
                    status=a.status,
                    success=a.success,
                    error=a.error,
                )
                for a in result.actions
            ],
        )
