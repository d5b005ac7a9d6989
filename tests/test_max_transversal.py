"""Tests for the inverse model: maximum transversal for a target hit chance."""

import math

import pytest

from rra_engine.core.hit_model import (
    InverseParameters,
    TurretParameters,
    calculate_hit_chance,
    calculate_max_transversal,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _inverse(target: float, distance: float = 10000.0) -> InverseParameters:
    """Return inverse inputs for the test turret."""
    return InverseParameters(
        target_hit_chance=target,
        distance=distance,
        tracking_speed=0.165,
        signature_radius=400.0,
        optimal_range=12000.0,
        falloff=6000.0,
    )


def _forward(transversal: float, distance: float) -> TurretParameters:
    """Return forward inputs for the test turret."""
    return TurretParameters(
        transversal=transversal,
        distance=distance,
        tracking_speed=0.165,
        signature_radius=400.0,
        optimal_range=12000.0,
        falloff=6000.0,
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


def test_half_chance_inside_optimal() -> None:
    """A 50% target leaves an exponent budget of exactly 1."""
    expected = 1.0 * 0.165 * 400.0 / 40000.0 * 10000.0
    assert calculate_max_transversal(_inverse(0.5)) == pytest.approx(expected), (
        "a 50% target must use the whole exponent budget"
    )


def test_round_trip_reproduces_target() -> None:
    """Feeding the max transversal back in returns the target hit chance."""
    cases = [(d, t) for d in (2000.0, 10000.0, 13000.0) for t in (0.1, 0.5, 0.9)]
    # Deep in falloff only low targets leave a tracking budget.
    cases += [(17000.0, 0.1), (17000.0, 0.25), (17000.0, 0.5)]
    for distance, target in cases:
        v_max = calculate_max_transversal(_inverse(target, distance))
        assert math.isfinite(v_max), "round-trip cases must leave a tracking budget"
        result = calculate_hit_chance(_forward(v_max, distance))
        assert result.hit_chance == pytest.approx(
            target, rel=1e-9
        ), f"round trip failed at distance={distance}, target={target}"


def test_out_of_range_target_returns_zero() -> None:
    """Targets outside (0, 1] must return zero."""
    assert calculate_max_transversal(_inverse(1.5)) == 0.0, (
        "targets above 1 are impossible"
    )
    assert calculate_max_transversal(_inverse(0.0)) == 0.0, (
        "a zero target is meaningless"
    )
    assert calculate_max_transversal(_inverse(-0.2)) == 0.0


def test_certain_hit_target_is_unbounded() -> None:
    """A 100% target has no tracking budget left, so the result is infinite."""
    assert calculate_max_transversal(_inverse(1.0)) == math.inf, (
        "certain hit is unbounded"
    )


def test_range_dominated_target_is_unbounded() -> None:
    """Range penalty alone exceeds the allowed exponent."""
    # (30000 - 12000) / 6000 = 3 -> range component 9 > 1
    assert calculate_max_transversal(_inverse(0.5, distance=30000.0)) == math.inf, (
        "range alone exceeds the budget"
    )


def test_lower_target_allows_faster_transversal() -> None:
    """A lower target hit chance must allow more transversal."""
    strict = calculate_max_transversal(_inverse(0.9))
    loose = calculate_max_transversal(_inverse(0.2))
    assert loose > strict > 0.0, "looser targets must allow more speed"


def test_range_penalty_reduces_max_transversal_budget() -> None:
    """Inside falloff the tracking budget shrinks relative to optimal."""
    at_optimal = calculate_max_transversal(_inverse(0.5, distance=12000.0))
    in_falloff = calculate_max_transversal(_inverse(0.5, distance=15000.0))
    # Scale out the distance factor to compare angular budgets.
    assert in_falloff / 15000.0 < at_optimal / 12000.0, "falloff must shrink the budget"
