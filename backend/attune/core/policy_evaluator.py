"""Policy Evaluator — pure matching of a policy condition against current signals.

Invariants:
    - matches() is PURE: time is passed in, never read from the clock
    - Clauses are ANDed; an absent clause passes
    - Emotion clause is lower-bound only: input >= threshold, missing input counts as 0.0
    - Friction bounds are inclusive on both sides
    - Time-of-day compares zero-padded "HH:MM" strings; start > end matches nothing
      unless the window sets wraps_midnight

Design Decisions:
    - One helper per clause so each can be tested in isolation
    - `now` is the caller's local wall-clock time; the evaluator does no tz conversion
"""

from datetime import datetime

from attune.core.environment import FrictionWindow, PolicyCondition, TimeWindow
from attune.core.friction_model import clamp_unit


def emotion_clause_passes(
    thresholds: dict[str, float] | None, emotion_vector: dict[str, float],
) -> bool:
    if not thresholds:
        return True
    return all(
        emotion_vector.get(emotion, 0.0) >= threshold
        for emotion, threshold in thresholds.items()
    )


def friction_clause_passes(
    window: FrictionWindow | None, friction_score: float,
) -> bool:
    if window is None:
        return True
    if window.min is not None and friction_score < window.min:
        return False
    if window.max is not None and friction_score > window.max:
        return False
    return True


def time_clause_passes(window: TimeWindow | None, now: datetime) -> bool:
    if window is None:
        return True
    current = now.strftime("%H:%M")
    if window.wraps_midnight and window.start > window.end:
        return current >= window.start or current <= window.end
    return window.start <= current <= window.end


def matches(
    condition: PolicyCondition,
    emotion_vector: dict[str, float],
    friction_score: float,
    now: datetime,
) -> bool:
    """True when every present clause passes. Inputs are clamped to [0, 1] first."""
    emotions = {name: clamp_unit(value) for name, value in emotion_vector.items()}
    return (
        emotion_clause_passes(condition.emotion_vector, emotions)
        and friction_clause_passes(condition.friction_score, clamp_unit(friction_score))
        and time_clause_passes(condition.time_of_day, now)
    )
