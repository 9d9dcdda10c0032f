"""Collapse Engine — turns a feature vector plus context flags into a routed decision.

Invariants:
    - One observation is drawn per feature; the observation ignores the feature's value
      (the vector only sets the sample count)
    - Cut points are exact: o < 0.33 → FALSE, o < 0.66 → TRUE, otherwise SUPERPOSITION
    - Majority ties break by Trit declaration order: TRUE > FALSE > SUPERPOSITION
    - Entanglement iff multi_device_context is True AND more than one device id
    - SUPERPOSITION always routes to DEFER_UNTIL_COLLAPSE, entangled or not
    - Empty feature vector: confidence 0.0, majority TRUE (tie-break default)
    - DecisionResult is immutable; confidence clamped to [0, 1]

Design Decisions:
    - Randomness injected via RandomSource: tests supply fixed sequences
    - collapse_observation / check_entanglement / route_decision are module-level
      pure functions; the engine only owns the randomness source
"""

from collections import Counter
from dataclasses import dataclass, field

from attune.core.domain_types import (
    Confidence, DecisionAction, QuatState, Trit, UserId,
)
from attune.core.friction_model import clamp_unit
from attune.core.random_source import (
    LinearCongruentialSource, RandomSource, UniformRandomSource,
)


FALSE_CUTOFF: float = 0.33
TRUE_CUTOFF: float = 0.66

# Tie-break priority: first entry wins on equal counts
MAJORITY_PRIORITY: tuple[Trit, ...] = (Trit.TRUE, Trit.FALSE, Trit.SUPERPOSITION)

_RATIONALES = {
    DecisionAction.ORCHESTRATE_SYNC: "Multi-device synchronization required for this action",
    DecisionAction.PROCEED_LOCAL: "Majority vote indicates proceed",
    DecisionAction.SKIP_LOCAL: "Majority vote indicates skip",
    DecisionAction.DEFER_UNTIL_COLLAPSE: (
        "Superposition state detected; deferring until more data available"
    ),
}
_EMPTY_FEATURES_RATIONALE = "No features to observe; defaulting with zero confidence"


@dataclass(frozen=True)
class DecisionContext:
    """Transient per-call input. Never persisted by the core."""
    user_id: UserId
    features: list[float] = field(default_factory=list)
    emotion_vector: dict[str, float] | None = None
    friction_score: float | None = None
    multi_device_context: bool | None = None
    device_ids: list[str] | None = None


@dataclass(frozen=True)
class DecisionResult:
    action: DecisionAction
    confidence: Confidence
    tri_state: Trit
    quat_state: QuatState | None
    rationale: str


def collapse_observation(observation: float) -> Trit:
    """Quantize one observation into a trit."""
    if observation < FALSE_CUTOFF:
        return Trit.FALSE
    if observation < TRUE_CUTOFF:
        return Trit.TRUE
    return Trit.SUPERPOSITION


def check_entanglement(context: DecisionContext) -> bool:
    return (
        context.multi_device_context is True
        and context.device_ids is not None
        and len(context.device_ids) > 1
    )


def majority_trit(trits: list[Trit]) -> tuple[Trit, int]:
    """Return (majority, count). Ties resolved by MAJORITY_PRIORITY."""
    counts = Counter(trits)
    best = MAJORITY_PRIORITY[0]
    for trit in MAJORITY_PRIORITY[1:]:
        if counts[trit] > counts[best]:
            best = trit
    return best, counts[best]


def route_decision(
    majority: Trit, entangled: bool,
) -> tuple[DecisionAction, QuatState | None]:
    """Routing table: (entanglement × majority) → (action, quat state)."""
    quat = QuatState.ENTANGLEMENT if entangled else None
    if majority is Trit.TRUE:
        if entangled:
            return DecisionAction.ORCHESTRATE_SYNC, quat
        return DecisionAction.PROCEED_LOCAL, quat
    if majority is Trit.FALSE:
        return DecisionAction.SKIP_LOCAL, quat
    return DecisionAction.DEFER_UNTIL_COLLAPSE, quat


class CollapseEngine:
    """Stochastic decision engine. Owns nothing but its randomness source."""

    def __init__(
        self, seed: int | None = None, source: RandomSource | None = None,
    ):
        if source is not None:
            self._source = source
        elif seed is not None:
            self._source = LinearCongruentialSource(seed)
        else:
            self._source = UniformRandomSource()

    def observe(self, feature_count: int) -> list[Trit]:
        """Draw one trit per feature slot."""
        return [
            collapse_observation(self._source.next())
            for _ in range(feature_count)
        ]

    def decide(self, context: DecisionContext) -> DecisionResult:
        trits = self.observe(len(context.features))
        majority, count = majority_trit(trits)
        entangled = check_entanglement(context)
        action, quat = route_decision(majority, entangled)

        if not trits:
            return DecisionResult(
                action=action,
                confidence=Confidence(0.0),
                tri_state=majority,
                quat_state=quat,
                rationale=_EMPTY_FEATURES_RATIONALE,
            )

        return DecisionResult(
            action=action,
            confidence=Confidence(clamp_unit(count / len(trits))),
            tri_state=majority,
            quat_state=quat,
            rationale=_RATIONALES[action],
        )
