"""Decision Audit — pure mapping of an emitted decision to its audit record.

Invariants:
    - One DecisionRecord per decide() call
    - Outcome: DEFER → DEFERRED, SKIP → SKIPPED, PROCEED → SUCCESS,
      ORCHESTRATE_SYNC → SUCCESS/FAILED depending on the anchor sync result
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from attune.core.collapse_engine import DecisionContext, DecisionResult
from attune.core.domain_types import (
    DecisionAction, DecisionOutcome, QuatState, Trit, UserId,
)
from attune.core.environment import utc_now


@dataclass(frozen=True)
class DecisionRecord:
    user_id: UserId
    decision_context: dict[str, Any]
    tri_state: Trit
    quat_state: QuatState | None
    action: DecisionAction
    outcome: DecisionOutcome
    timestamp: datetime = field(default_factory=utc_now)


def decision_outcome(
    action: DecisionAction, synced: bool | None = None,
) -> DecisionOutcome:
    if action is DecisionAction.DEFER_UNTIL_COLLAPSE:
        return DecisionOutcome.DEFERRED
    if action is DecisionAction.SKIP_LOCAL:
        return DecisionOutcome.SKIPPED
    if action is DecisionAction.ORCHESTRATE_SYNC and not synced:
        return DecisionOutcome.FAILED
    return DecisionOutcome.SUCCESS


def build_decision_record(
    context: DecisionContext,
    result: DecisionResult,
    synced: bool | None = None,
) -> DecisionRecord:
    return DecisionRecord(
        user_id=context.user_id,
        decision_context=asdict(context),
        tri_state=result.tri_state,
        quat_state=result.quat_state,
        action=result.action,
        outcome=decision_outcome(result.action, synced),
    )
