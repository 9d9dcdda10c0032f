"""Service Container — wires stores, dispatcher, and services from Settings.

Invariants:
    - One container per application lifespan; all requests share it
    - store_backend=sql requires an initialized DatabaseSessionManager

Design Decisions:
    - Explicit construction over a DI framework: every dependency visible in one place
"""

from dataclasses import dataclass

from attune.config import Settings
from attune.core.collapse_engine import CollapseEngine
from attune.infrastructure.database import DatabaseSessionManager
from attune.infrastructure.device_dispatch import (
    ResilientDeviceDispatcher, StateMutationDispatcher,
)
from attune.infrastructure.keyed_locks import KeyedLocks
from attune.infrastructure.memory_stores import (
    InMemoryAnchorRepository, InMemoryDecisionLog, InMemoryDeviceRepository,
    InMemoryOrchestrationLog, InMemoryPolicyRepository,
)
from attune.infrastructure.sql_stores import (
    SqlAnchorRepository, SqlDecisionLog, SqlDeviceRepository,
    SqlOrchestrationLog, SqlPolicyRepository,
)
from attune.services.anchor_service import AnchorService
from attune.services.decision_service import DecisionService
from attune.services.orchestrator import EnvironmentalOrchestrator
from attune.services.policy_executor import PolicyExecutor


@dataclass
class ServiceContainer:
    decisions: DecisionService
    orchestrator: EnvironmentalOrchestrator
    anchors: AnchorService
    settings: Settings


def build_container(
    settings: Settings, db: DatabaseSessionManager | None = None,
) -> ServiceContainer:
    if settings.store_backend == "sql":
        if db is None:
            raise RuntimeError("Database not initialized")
        devices = SqlDeviceRepository(db)
        policies = SqlPolicyRepository(db)
        history = SqlOrchestrationLog(db)
        decision_log = SqlDecisionLog(db)
        anchor_repo = SqlAnchorRepository(db)
    else:
        devices = InMemoryDeviceRepository()
        policies = InMemoryPolicyRepository()
        history = InMemoryOrchestrationLog()
        decision_log = InMemoryDecisionLog()
        anchor_repo = InMemoryAnchorRepository()

    dispatcher = ResilientDeviceDispatcher(
        StateMutationDispatcher(),
        timeout_ms=settings.device_command_timeout_ms,
        max_retries=settings.device_command_max_retries,
        base_delay_ms=settings.device_command_base_delay_ms,
    )
    executor = PolicyExecutor(devices, dispatcher, KeyedLocks())
    anchors = AnchorService(anchor_repo)

    return ServiceContainer(
        decisions=DecisionService(
            CollapseEngine(seed=settings.collapse_seed),
            decision_log,
            anchors,
            anchor_sync_enabled=settings.enable_anchor_sync,
        ),
        orchestrator=EnvironmentalOrchestrator(
            devices, policies, history, executor,
        ),
        anchors=anchors,
        settings=settings,
    )
