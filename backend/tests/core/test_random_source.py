"""Random Sources — determinism and range of the injectable generators."""

import pytest

from attune.core.random_source import LinearCongruentialSource, UniformRandomSource


def test_lcg_first_values_for_seed_one():
    source = LinearCongruentialSource(1)
    assert source.next() == pytest.approx(58598 / 233280)
    assert source.next() == pytest.approx(127215 / 233280)


def test_lcg_stays_in_unit_interval():
    source = LinearCongruentialSource(123456)
    for _ in range(1000):
        assert 0.0 <= source.next() < 1.0


def test_uniform_source_seeded_replays():
    a = UniformRandomSource(seed=9)
    b = UniformRandomSource(seed=9)
    assert [a.next() for _ in range(10)] == [b.next() for _ in range(10)]
