"""Service test fixtures — in-memory stores wired the way the container wires them.

Invariants:
    - Every test gets fresh store instances (no shared state across tests)
    - Clock frozen at a fixed UTC instant so timestamps are assertable
"""

from datetime import datetime, timezone

import pytest

from attune.core.domain_types import UserId
from attune.core.samples import sample_devices
from attune.infrastructure.device_dispatch import StateMutationDispatcher
from attune.infrastructure.memory_stores import (
    InMemoryDeviceRepository, InMemoryOrchestrationLog, InMemoryPolicyRepository,
)
from attune.services.orchestrator import EnvironmentalOrchestrator
from attune.services.policy_executor import PolicyExecutor

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
USER = UserId("user-123")


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def devices():
    return InMemoryDeviceRepository()


@pytest.fixture
def policies():
    return InMemoryPolicyRepository()


@pytest.fixture
def history():
    return InMemoryOrchestrationLog()


@pytest.fixture
def executor(devices):
    return PolicyExecutor(devices, StateMutationDispatcher(), clock=fixed_clock)


@pytest.fixture
def orchestrator(devices, policies, history, executor):
    return EnvironmentalOrchestrator(
        devices, policies, history, executor, clock=fixed_clock,
    )


@pytest.fixture
async def seeded_devices(devices):
    for device in sample_devices(USER):
        await devices.upsert(device)
    return devices
