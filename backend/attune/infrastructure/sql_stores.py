"""SQL Stores — SQLAlchemy implementations of the core store Protocols.

Invariants:
    - One short-lived session per operation (db_manager.session()); commits before returning
    - Rows converted to core dataclasses at this boundary — ORM objects never leak
    - Tail reads order by autoincrement pk (insertion order), returned oldest-first
    - SQLite drops tzinfo on read: naive datetimes are re-tagged as UTC

Design Decisions:
    - Condition/action JSON codecs live here, next to the only code that persists them
    - Upsert via select-then-update: portable across PostgreSQL and SQLite
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select

from attune.core.anchor_state import AnchorState
from attune.core.decision_audit import DecisionRecord
from attune.core.domain_types import (
    CommandStatus, DecisionAction, DecisionOutcome, DeviceId, PolicyId,
    QuatState, Trit, UserId,
)
from attune.core.environment import (
    CommandOutcome, DeviceAction, FrictionWindow, OrchestrationResult,
    Policy, PolicyCondition, SmartDevice, TimeWindow,
)
from attune.infrastructure.database import DatabaseSessionManager
from attune.models.anchor_state import AnchorStateRow
from attune.models.decision_log import DecisionLogRow
from attune.models.environmental_policy import EnvironmentalPolicyRow
from attune.models.orchestration_record import OrchestrationRecordRow
from attune.models.smart_device import SmartDeviceRow


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ─── Codecs ──────────────────────────────────────────────────────

def encode_condition(condition: PolicyCondition) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if condition.emotion_vector is not None:
        data["emotion_vector"] = dict(condition.emotion_vector)
    if condition.friction_score is not None:
        data["friction_score"] = {
            "min": condition.friction_score.min,
            "max": condition.friction_score.max,
        }
    if condition.time_of_day is not None:
        data["time_of_day"] = {
            "start": condition.time_of_day.start,
            "end": condition.time_of_day.end,
            "wraps_midnight": condition.time_of_day.wraps_midnight,
        }
    return data


def decode_condition(data: dict[str, Any]) -> PolicyCondition:
    friction = data.get("friction_score")
    window = data.get("time_of_day")
    return PolicyCondition(
        emotion_vector=data.get("emotion_vector"),
        friction_score=FrictionWindow(**friction) if friction else None,
        time_of_day=TimeWindow(**window) if window else None,
    )


def encode_actions(actions: list[DeviceAction]) -> dict[str, Any]:
    return {
        "devices": [
            {
                "device_id": a.device_id,
                "command": a.command,
                "parameters": dict(a.parameters),
            }
            for a in actions
        ],
    }


def decode_actions(data: dict[str, Any]) -> list[DeviceAction]:
    return [
        DeviceAction(
            device_id=DeviceId(item["device_id"]),
            command=item["command"],
            parameters=item.get("parameters", {}),
        )
        for item in data.get("devices", [])
    ]


def _device_from_row(row: SmartDeviceRow) -> SmartDevice:
    return SmartDevice(
        id=row.id,
        user_id=UserId(row.user_id),
        device_id=DeviceId(row.device_id),
        device_name=row.device_name,
        device_type=row.device_type,
        state=dict(row.state or {}),
        last_synced_at=_as_utc(row.last_synced_at),
    )


def _policy_from_row(row: EnvironmentalPolicyRow) -> Policy:
    return Policy(
        id=PolicyId(row.id),
        user_id=UserId(row.user_id),
        policy_name=row.policy_name,
        condition=decode_condition(row.condition),
        actions=decode_actions(row.action),
        is_active=row.is_active,
        created_at=_as_utc(row.created_at),
    )


# ─── Repositories ────────────────────────────────────────────────

class SqlDeviceRepository:

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def upsert(self, device: SmartDevice) -> None:
        async with self._db.session() as session:
            result = await session.execute(
                select(SmartDeviceRow)
                .where(SmartDeviceRow.user_id == device.user_id)
                .where(SmartDeviceRow.device_id == device.device_id),
            )
            row = result.scalar_one_or_none()
            if row is None:
                row = SmartDeviceRow(
                    user_id=device.user_id, device_id=device.device_id,
                )
                session.add(row)
            row.id = device.id
            row.device_name = device.device_name
            row.device_type = device.device_type
            row.state = dict(device.state)
            row.last_synced_at = device.last_synced_at
            await session.commit()

    async def get(self, user_id: UserId, device_id: DeviceId) -> SmartDevice | None:
        async with self._db.session() as session:
            result = await session.execute(
                select(SmartDeviceRow)
                .where(SmartDeviceRow.user_id == user_id)
                .where(SmartDeviceRow.device_id == device_id),
            )
            row = result.scalar_one_or_none()
            return _device_from_row(row) if row else None

    async def list_for_user(self, user_id: UserId) -> list[SmartDevice]:
        async with self._db.session() as session:
            result = await session.execute(
                select(SmartDeviceRow)
                .where(SmartDeviceRow.user_id == user_id)
                .order_by(SmartDeviceRow.pk),
            )
            return [_device_from_row(r) for r in result.scalars().all()]

    async def update_state(
        self, user_id: UserId, device_id: DeviceId,
        state: dict[str, Any], last_synced_at: datetime,
    ) -> None:
        async with self._db.session() as session:
            result = await session.execute(
                select(SmartDeviceRow)
                .where(SmartDeviceRow.user_id == user_id)
                .where(SmartDeviceRow.device_id == device_id),
            )
            row = result.scalar_one_or_none()
            if row is None:
                return
            row.state = dict(state)
            row.last_synced_at = last_synced_at
            await session.commit()


class SqlPolicyRepository:

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def add(self, policy: Policy) -> None:
        async with self._db.session() as session:
            session.add(EnvironmentalPolicyRow(
                id=policy.id,
                user_id=policy.user_id,
                policy_name=policy.policy_name,
                condition=encode_condition(policy.condition),
                action=encode_actions(policy.actions),
                is_active=policy.is_active,
                created_at=policy.created_at,
            ))
            await session.commit()

    async def list_for_user(self, user_id: UserId) -> list[Policy]:
        async with self._db.session() as session:
            result = await session.execute(
                select(EnvironmentalPolicyRow)
                .where(EnvironmentalPolicyRow.user_id == user_id)
                .order_by(EnvironmentalPolicyRow.pk),
            )
            return [_policy_from_row(r) for r in result.scalars().all()]

    async def set_active(
        self, user_id: UserId, policy_id: PolicyId, is_active: bool,
    ) -> Policy | None:
        async with self._db.session() as session:
            result = await session.execute(
                select(EnvironmentalPolicyRow)
                .where(EnvironmentalPolicyRow.user_id == user_id)
                .where(EnvironmentalPolicyRow.id == policy_id),
            )
            rows = result.scalars().all()
            if not rows:
                return None
            for row in rows:
                row.is_active = is_active
            await session.commit()
            return _policy_from_row(rows[-1])


class SqlOrchestrationLog:

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def append(self, result: OrchestrationResult) -> None:
        async with self._db.session() as session:
            session.add(OrchestrationRecordRow(
                user_id=result.user_id,
                policy_id=result.policy_id,
                policy_name=result.policy_name,
                triggered_at=result.triggered_at,
                actions=[
                    {
                        "device_id": a.device_id,
                        "command": a.command,
                        "status": a.status.value,
                        "detail": a.detail,
                    }
                    for a in result.actions
                ],
            ))
            await session.commit()

    async def tail(self, user_id: UserId, limit: int) -> list[OrchestrationResult]:
        if limit <= 0:
            return []
        async with self._db.session() as session:
            result = await session.execute(
                select(OrchestrationRecordRow)
                .where(OrchestrationRecordRow.user_id == user_id)
                .order_by(OrchestrationRecordRow.pk.desc())
                .limit(limit),
            )
            rows = list(reversed(result.scalars().all()))
        return [
            OrchestrationResult(
                user_id=UserId(r.user_id),
                policy_id=PolicyId(r.policy_id),
                policy_name=r.policy_name,
                triggered_at=_as_utc(r.triggered_at),
                actions=[
                    CommandOutcome(
                        device_id=DeviceId(a["device_id"]),
                        command=a["command"],
                        status=CommandStatus(a["status"]),
                        detail=a.get("detail"),
                    )
                    for a in r.actions
                ],
            )
            for r in rows
        ]


class SqlDecisionLog:

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def append(self, record: DecisionRecord) -> None:
        async with self._db.session() as session:
            session.add(DecisionLogRow(
                user_id=record.user_id,
                decision_context=record.decision_context,
                tri_state=record.tri_state.value,
                quat_state=record.quat_state.value if record.quat_state else None,
                action=record.action.value,
                outcome=record.outcome.value,
                timestamp=record.timestamp,
            ))
            await session.commit()

    async def tail(self, user_id: UserId, limit: int) -> list[DecisionRecord]:
        if limit <= 0:
            return []
        async with self._db.session() as session:
            result = await session.execute(
                select(DecisionLogRow)
                .where(DecisionLogRow.user_id == user_id)
                .order_by(DecisionLogRow.pk.desc())
                .limit(limit),
            )
            rows = list(reversed(result.scalars().all()))
        return [
            DecisionRecord(
                user_id=UserId(r.user_id),
                decision_context=r.decision_context,
                tri_state=Trit(r.tri_state),
                quat_state=QuatState(r.quat_state) if r.quat_state else None,
                action=DecisionAction(r.action),
                outcome=DecisionOutcome(r.outcome),
                timestamp=_as_utc(r.timestamp),
            )
            for r in rows
        ]


class SqlAnchorRepository:

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def put(self, state: AnchorState) -> None:
        async with self._db.session() as session:
            row = await session.get(AnchorStateRow, state.user_id)
            if row is None:
                row = AnchorStateRow(user_id=state.user_id)
                session.add(row)
            row.emotion_vector = dict(state.emotion_vector)
            row.friction_score = state.friction_score
            row.current_task = state.current_task
            row.clipboard_history = list(state.clipboard_history)
            row.timestamp = state.timestamp
            await session.commit()

    async def get(self, user_id: UserId) -> AnchorState | None:
        async with self._db.session() as session:
            row = await session.get(AnchorStateRow, user_id)
            if row is None:
                return None
            return AnchorState(
                user_id=UserId(row.user_id),
                emotion_vector=dict(row.emotion_vector or {}),
                friction_score=row.friction_score,
                current_task=row.current_task,
                clipboard_history=list(row.clipboard_history or []),
                timestamp=_as_utc(row.timestamp),
            )
