"""SQL Stores — repository contract on SQLite via aiosqlite.

Tests cover:
    - Device upsert replaces by (user_id, device_id), state update persists
    - Policy condition/action JSON codecs survive a round trip through the table
    - Orchestration and decision logs tail oldest-first per user
    - Anchor state put/get replaces the previous snapshot
    - Datetimes read back timezone-aware (UTC)
"""

from datetime import datetime, timezone

import pytest

from attune.core.anchor_state import AnchorState
from attune.core.collapse_engine import DecisionContext, DecisionResult
from attune.core.decision_audit import build_decision_record
from attune.core.domain_types import (
    CommandStatus, Confidence, DecisionAction, DecisionOutcome, DeviceId,
    PolicyId, QuatState, Trit, UserId,
)
from attune.core.environment import (
    CommandOutcome, OrchestrationResult, PolicyCondition, TimeWindow,
)
from attune.core.samples import sample_devices, sample_policy
from attune.infrastructure.sql_stores import (
    SqlAnchorRepository, SqlDecisionLog, SqlDeviceRepository,
    SqlOrchestrationLog, SqlPolicyRepository, decode_condition, encode_condition,
)

USER = UserId("user-123")
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


# ─── Devices ─────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_device_upsert_and_update_state(db):
    repo = SqlDeviceRepository(db)
    for device in sample_devices(USER):
        await repo.upsert(device)

    await repo.update_state(
        USER, DeviceId("light-living-room"), {"on": False}, last_synced_at=NOW,
    )

    light = await repo.get(USER, DeviceId("light-living-room"))
    assert light.state == {"on": False}
    assert light.last_synced_at == NOW
    assert [d.device_id for d in await repo.list_for_user(USER)] == [
        "light-living-room", "thermostat-main", "speaker-bedroom",
    ]


@pytest.mark.asyncio
async def test_device_reregistration_replaces_record(db):
    repo = SqlDeviceRepository(db)
    device = sample_devices(USER)[0]
    await repo.upsert(device)
    device.device_name = "Renamed"
    await repo.upsert(device)

    devices = await repo.list_for_user(USER)
    assert len(devices) == 1
    assert devices[0].device_name == "Renamed"


# ─── Policies ────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_policy_round_trip_and_deactivate(db):
    repo = SqlPolicyRepository(db)
    await repo.add(sample_policy(USER))

    [policy] = await repo.list_for_user(USER)
    assert policy.policy_name == "Focus Mode"
    assert policy.condition.emotion_vector == {"focused": 0.7}
    assert policy.condition.friction_score.min == 0.3
    assert [a.command for a in policy.actions] == [
        "set_brightness", "play_playlist", "set_temperature",
    ]

    updated = await repo.set_active(USER, PolicyId("policy-1"), False)
    assert updated.is_active is False
    assert await repo.set_active(USER, PolicyId("missing"), False) is None


def test_condition_codec_keeps_time_window():
    condition = PolicyCondition(
        time_of_day=TimeWindow("22:00", "06:00", wraps_midnight=True),
    )
    assert decode_condition(encode_condition(condition)) == condition


# ─── Logs ────────────────────────────────────────────────────────

def _result(name: str) -> OrchestrationResult:
    return OrchestrationResult(
        user_id=USER, policy_id=PolicyId(name), policy_name=name,
        triggered_at=NOW,
        actions=[CommandOutcome(
            DeviceId("unregistered"), "turn_on", CommandStatus.DEVICE_NOT_FOUND,
        )],
    )


@pytest.mark.asyncio
async def test_orchestration_log_tail(db):
    log = SqlOrchestrationLog(db)
    for name in ("first", "second", "third"):
        await log.append(_result(name))

    tail = await log.tail(USER, 2)
    assert [r.policy_name for r in tail] == ["second", "third"]
    assert tail[0].actions[0].error == "Device not found"
    assert tail[0].triggered_at == NOW
    assert await log.tail(UserId("other"), 5) == []


@pytest.mark.asyncio
async def test_decision_log_round_trip(db):
    log = SqlDecisionLog(db)
    context = DecisionContext(
        user_id=USER, features=[0.2, 0.4],
        multi_device_context=True, device_ids=["a", "b"],
    )
    result = DecisionResult(
        action=DecisionAction.ORCHESTRATE_SYNC, confidence=Confidence(1.0),
        tri_state=Trit.TRUE, quat_state=QuatState.ENTANGLEMENT,
        rationale="Multi-device synchronization required for this action",
    )
    await log.append(build_decision_record(context, result, synced=False))

    [record] = await log.tail(USER, 10)
    assert record.outcome is DecisionOutcome.FAILED
    assert record.quat_state is QuatState.ENTANGLEMENT
    assert record.decision_context["device_ids"] == ["a", "b"]
    assert record.timestamp.tzinfo is not None


# ─── Anchors ─────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_anchor_put_replaces(db):
    repo = SqlAnchorRepository(db)
    await repo.put(AnchorState(user_id=USER, current_task="a", timestamp=NOW))
    await repo.put(AnchorState(
        user_id=USER, current_task="b", clipboard_history=["x"], timestamp=NOW,
    ))

    state = await repo.get(USER)
    assert state.current_task == "b"
    assert state.clipboard_history == ["x"]
    assert state.timestamp == NOW
    assert await repo.get(UserId("other")) is None


@pytest.mark.asyncio
async def test_health_check_passes_on_live_database(db):
    assert await db.health_check() is True
