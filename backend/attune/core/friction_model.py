"""Friction Model — pure aggregation of wellbeing/device metrics into one score.

Invariants:
    - calculate_friction is PURE: same metrics in, same score out, no IO
    - Every sub-score is clamped to [0, 1] before combination
    - Final score is the unweighted mean of five sub-scores, clamped to [0, 1]
    - Missing emotion vector contributes 0; emotion keys other than rushed/tired are ignored

Design Decisions:
    - MEMORY_CEILING_BYTES (4 GiB) is the single source of truth for the memory reference;
      free memory above the ceiling floors memory friction at 0
"""

from dataclasses import dataclass, field

from attune.core.domain_types import Emotion, FrictionScore


MEMORY_CEILING_BYTES: int = 4 * 1024 * 1024 * 1024
SUB_SCORE_WEIGHT: float = 0.2
RUSHED_WEIGHT: float = 0.5
TIRED_WEIGHT: float = 0.3


@dataclass(frozen=True)
class FrictionMetrics:
    """Raw inputs; rates are in [0, 1], free_ram is bytes."""
    battery_entropy: float
    free_ram: int
    behavioral_auth_error_rate: float
    typing_error_rate: float
    emotion_vector: dict[str, float] | None = field(default=None)


def clamp_unit(value: float) -> float:
    """Clamp to [0, 1]."""
    return min(1.0, max(0.0, value))


def memory_friction(free_ram: int) -> float:
    return clamp_unit(max(0.0, 1 - free_ram / MEMORY_CEILING_BYTES))


def emotion_friction(emotion_vector: dict[str, float] | None) -> float:
    if not emotion_vector:
        return 0.0
    rushed = emotion_vector.get(Emotion.RUSHED.value, 0.0)
    tired = emotion_vector.get(Emotion.TIRED.value, 0.0)
    return clamp_unit(rushed * RUSHED_WEIGHT + tired * TIRED_WEIGHT)


def friction_breakdown(metrics: FrictionMetrics) -> dict[str, float]:
    """Per-component sub-scores, each clamped. Pure."""
    return {
        "battery": clamp_unit(metrics.battery_entropy),
        "memory": memory_friction(metrics.free_ram),
        "auth": clamp_unit(metrics.behavioral_auth_error_rate),
        "typing": clamp_unit(metrics.typing_error_rate),
        "emotion": emotion_friction(metrics.emotion_vector),
    }


def calculate_friction(metrics: FrictionMetrics) -> FrictionScore:
    """Combine sub-scores into one normalized friction score. Pure."""
    parts = friction_breakdown(metrics)
    score = sum(value * SUB_SCORE_WEIGHT for value in parts.values())
    return FrictionScore(clamp_unit(score))
