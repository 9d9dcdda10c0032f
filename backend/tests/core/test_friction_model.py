"""Friction Model — pure tests for sub-score aggregation.

Tests cover:
    - Documented example: mean of five sub-scores
    - Memory sub-score against the 4 GiB ceiling
    - Emotion sub-score from rushed/tired only
    - Clamping of out-of-range inputs (score always in [0, 1])
"""

import pytest

from attune.core.friction_model import (
    MEMORY_CEILING_BYTES, FrictionMetrics, calculate_friction,
    clamp_unit, emotion_friction, friction_breakdown, memory_friction,
)


def _metrics(**overrides) -> FrictionMetrics:
    base = dict(
        battery_entropy=0.0,
        free_ram=MEMORY_CEILING_BYTES,
        behavioral_auth_error_rate=0.0,
        typing_error_rate=0.0,
        emotion_vector=None,
    )
    base.update(overrides)
    return FrictionMetrics(**base)


# ─── calculate_friction ─────────────────────────────────────────

def test_mixed_inputs_average_five_sub_scores():
    metrics = FrictionMetrics(
        battery_entropy=0.5,
        free_ram=MEMORY_CEILING_BYTES // 2,
        behavioral_auth_error_rate=0.2,
        typing_error_rate=0.4,
        emotion_vector={"rushed": 1.0, "tired": 1.0},
    )
    # (0.5 + 0.5 + 0.2 + 0.4 + 0.8) / 5
    assert calculate_friction(metrics) == pytest.approx(0.48)


def test_all_zero_inputs_with_full_memory_score_zero():
    assert calculate_friction(_metrics()) == pytest.approx(0.0)


def test_worst_case_inputs_cap_at_below_one():
    metrics = _metrics(
        battery_entropy=1.0, free_ram=0,
        behavioral_auth_error_rate=1.0, typing_error_rate=1.0,
        emotion_vector={"rushed": 1.0, "tired": 1.0},
    )
    # emotion sub-score tops out at 0.8
    assert calculate_friction(metrics) == pytest.approx(0.96)


def test_out_of_range_inputs_are_clamped():
    metrics = _metrics(
        battery_entropy=5.0, free_ram=0,
        behavioral_auth_error_rate=-3.0, typing_error_rate=2.0,
    )
    score = calculate_friction(metrics)
    assert 0.0 <= score <= 1.0
    assert score == pytest.approx((1.0 + 1.0 + 0.0 + 1.0 + 0.0) / 5)


def test_calculate_friction_is_deterministic():
    metrics = _metrics(battery_entropy=0.3, typing_error_rate=0.7)
    assert calculate_friction(metrics) == calculate_friction(metrics)


# ─── Sub-scores ──────────────────────────────────────────────────

def test_memory_friction_above_ceiling_floors_at_zero():
    assert memory_friction(MEMORY_CEILING_BYTES * 2) == 0.0


def test_memory_friction_with_no_free_ram_is_one():
    assert memory_friction(0) == 1.0


def test_emotion_friction_ignores_other_emotions():
    assert emotion_friction({"focused": 1.0, "hype": 1.0}) == 0.0


def test_emotion_friction_missing_vector_is_zero():
    assert emotion_friction(None) == 0.0
    assert emotion_friction({}) == 0.0


def test_emotion_friction_weights_rushed_and_tired():
    assert emotion_friction({"rushed": 0.4}) == pytest.approx(0.2)
    assert emotion_friction({"tired": 1.0}) == pytest.approx(0.3)


def test_breakdown_exposes_five_components():
    parts = friction_breakdown(_metrics(battery_entropy=0.25))
    assert set(parts) == {"battery", "memory", "auth", "typing", "emotion"}
    assert parts["battery"] == 0.25


def test_clamp_unit_bounds():
    assert clamp_unit(-0.1) == 0.0
    assert clamp_unit(1.1) == 1.0
    assert clamp_unit(0.42) == 0.42


@pytest.mark.parametrize("field", [
    "battery_entropy", "behavioral_auth_error_rate", "typing_error_rate",
])
def test_score_non_decreasing_in_each_rate(field):
    scores = [
        calculate_friction(_metrics(**{field: value}))
        for value in (0.0, 0.25, 0.5, 0.75, 1.0)
    ]
    assert scores == sorted(scores)


def test_score_non_decreasing_as_free_ram_shrinks():
    scores = [
        calculate_friction(_metrics(free_ram=free))
        for free in (MEMORY_CEILING_BYTES, MEMORY_CEILING_BYTES // 2, 1024, 0)
    ]
    assert scores == sorted(scores)
