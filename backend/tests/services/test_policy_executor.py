"""Policy Executor — per-action dispatch, isolation, and tagged outcomes.

Tests cover:
    - Successful actions merge parameters and stamp lastCommand
    - Unknown device → "Device not found", remaining actions still run
    - Adapter timeout → TIMEOUT outcome, state untouched
    - Unexpected adapter exception isolated to its own action
"""

import asyncio
from datetime import datetime, timezone

import pytest

from attune.core.device_commands import LAST_COMMAND_KEY, LAST_COMMAND_TIME_KEY, epoch_ms
from attune.core.domain_types import CommandStatus, DeviceId, UserId
from attune.core.environment import DeviceAction, Policy, PolicyCondition
from attune.core.samples import sample_policy
from attune.infrastructure.device_dispatch import (
    ResilientDeviceDispatcher, StateMutationDispatcher,
)
from attune.infrastructure.keyed_locks import KeyedLocks
from attune.services.policy_executor import PolicyExecutor

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
USER = UserId("user-123")


def fixed_clock() -> datetime:
    return FIXED_NOW


def _policy(*actions: DeviceAction) -> Policy:
    return Policy(
        id="p-1", user_id=USER, policy_name="Test",
        condition=PolicyCondition(), actions=list(actions),
    )


def _action(device_id: str, command: str = "turn_on", **params) -> DeviceAction:
    return DeviceAction(DeviceId(device_id), command, params)


class _SlowDispatcher:
    async def send(self, device, command, parameters, now):
        await asyncio.sleep(1)
        return {}


class _ExplodingDispatcher:
    """Fails for one device, delegates the rest."""

    def __init__(self, failing_device: str):
        self.failing_device = failing_device
        self.inner = StateMutationDispatcher()

    async def send(self, device, command, parameters, now):
        if device.device_id == self.failing_device:
            raise ValueError("adapter exploded")
        return await self.inner.send(device, command, parameters, now)


# ─── Success path ────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_focus_mode_updates_every_device(seeded_devices, executor):
    result = await executor.execute(USER, sample_policy(USER))

    assert result.policy_name == "Focus Mode"
    assert result.triggered_at == FIXED_NOW
    assert [a.success for a in result.actions] == [True, True, True]

    light = await seeded_devices.get(USER, "light-living-room")
    assert light.state["brightness"] == 60
    assert light.state["color"] == "warm"
    assert light.state["on"] is True
    assert light.state[LAST_COMMAND_KEY] == "set_brightness"
    assert light.state[LAST_COMMAND_TIME_KEY] == epoch_ms(FIXED_NOW)
    assert light.last_synced_at == FIXED_NOW


@pytest.mark.asyncio
async def test_actions_keep_policy_order(seeded_devices, executor):
    result = await executor.execute(USER, sample_policy(USER))
    assert [a.device_id for a in result.actions] == [
        "light-living-room", "speaker-bedroom", "thermostat-main",
    ]


# ─── Partial failure ─────────────────────────────────────────────

@pytest.mark.asyncio
async def test_unknown_device_does_not_abort_remaining(seeded_devices, executor):
    policy = _policy(
        _action("unregistered-device"),
        _action("thermostat-main", "set_temperature", temperature=68),
    )
    result = await executor.execute(USER, policy)

    missing, thermostat = result.actions
    assert missing.success is False
    assert missing.error == "Device not found"
    assert missing.status is CommandStatus.DEVICE_NOT_FOUND
    assert thermostat.success is True
    stored = await seeded_devices.get(USER, "thermostat-main")
    assert stored.state["temperature"] == 68


@pytest.mark.asyncio
async def test_other_users_devices_are_not_visible(seeded_devices, executor):
    result = await executor.execute("someone-else", _policy(_action("thermostat-main")))
    assert result.actions[0].status is CommandStatus.DEVICE_NOT_FOUND


@pytest.mark.asyncio
async def test_timeout_recorded_and_state_untouched(seeded_devices):
    dispatcher = ResilientDeviceDispatcher(
        _SlowDispatcher(), timeout_ms=10, max_retries=0,
    )
    executor = PolicyExecutor(seeded_devices, dispatcher, clock=fixed_clock)
    result = await executor.execute(USER, _policy(_action("light-living-room")))

    outcome = result.actions[0]
    assert outcome.status is CommandStatus.TIMEOUT
    assert outcome.error == "Device command timed out"
    light = await seeded_devices.get(USER, "light-living-room")
    assert LAST_COMMAND_KEY not in light.state


@pytest.mark.asyncio
async def test_unexpected_exception_isolated_to_one_action(seeded_devices):
    executor = PolicyExecutor(
        seeded_devices, _ExplodingDispatcher("light-living-room"), clock=fixed_clock,
    )
    result = await executor.execute(USER, sample_policy(USER))

    statuses = [a.status for a in result.actions]
    assert statuses == [
        CommandStatus.EXECUTION_ERROR, CommandStatus.SUCCESS, CommandStatus.SUCCESS,
    ]
    assert result.actions[0].detail == "adapter exploded"


@pytest.mark.asyncio
async def test_concurrent_executions_on_same_device_keep_both_writes(seeded_devices, executor):
    first = _policy(_action("light-living-room", "set_color", color="blue"))
    second = _policy(_action("light-living-room", "set_brightness", brightness=10))
    await asyncio.gather(
        executor.execute(USER, first), executor.execute(USER, second),
    )
    light = await seeded_devices.get(USER, "light-living-room")
    assert light.state["color"] == "blue"
    assert light.state["brightness"] == 10


@pytest.mark.asyncio
async def test_locks_for_unregistered_devices_are_not_retained(seeded_devices):
    locks = KeyedLocks()
    executor = PolicyExecutor(
        seeded_devices, StateMutationDispatcher(), locks, clock=fixed_clock,
    )
    await executor.execute(USER, _policy(
        _action("unregistered-1"), _action("unregistered-2"), _action("light-living-room"),
    ))
    assert len(locks) == 0
