"""Deterministic turret hit-chance model for the RRA engine.

The forward model combines a tracking term and a range term as the
exponent of a halving law::

    hit_chance = 0.5 ** (tracking_component + range_component)

    tracking_component = (angular * SIGNATURE_RESOLUTION
                          / (tracking_speed * signature_radius)) ** 2
    range_component    = (max(0, distance - optimal) / falloff) ** 2

The inverse model solves the same relation for the transversal velocity
that yields a requested hit chance.

Degenerate inputs never raise.  Non-positive distances, tracking speeds,
signature radii and falloffs produce ``math.inf`` (or ``0.0``) terms as
documented on each function, and callers are expected to check results
with :func:`math.isfinite`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SIGNATURE_RESOLUTION: float = 40000.0  # metres, identical for every turret

# 97% of hits land at an average 0.5x multiplier, 3% are 3x wrecking hits.
EXPECTED_DAMAGE_FACTOR: float = 0.97 * 0.5 + 0.03 * 3

# ---------------------------------------------------------------------------
# Parameter and result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TurretParameters:
    """Inputs of a single forward hit-chance calculation.

    No validation is performed; degenerate values are part of the
    model's domain.

    Attributes:
        transversal: Target transversal velocity in m/s.
        distance: Distance to target in metres.
        tracking_speed: Turret tracking speed in rad/s.
        signature_radius: Target signature radius in metres.
        optimal_range: Turret optimal range in metres.
        falloff: Turret falloff range in metres.
    """

    transversal: float
    distance: float
    tracking_speed: float
    signature_radius: float
    optimal_range: float
    falloff: float


@dataclass(frozen=True)
class InverseParameters:
    """Inputs of a maximum-transversal calculation.

    Attributes:
        target_hit_chance: Desired hit chance in ``(0, 1]``.
        distance: Distance to target in metres.
        tracking_speed: Turret tracking speed in rad/s.
        signature_radius: Target signature radius in metres.
        optimal_range: Turret optimal range in metres.
        falloff: Turret falloff range in metres.
    """

    target_hit_chance: float
    distance: float
    tracking_speed: float
    signature_radius: float
    optimal_range: float
    falloff: float


@dataclass(frozen=True)
class HitResult:
    """Outcome of a forward hit-chance calculation.

    Attributes:
        hit_chance: Probability of hitting, clamped to ``[0, 1]``.
        hit_chance_percent: ``hit_chance`` expressed in percent.
        angular_velocity: Angular velocity in rad/s.
        angular_velocity_mrad: Angular velocity in mrad/s.
        tracking_component: Squared tracking term of the exponent.
        range_component: Squared range term of the exponent.
        is_in_optimal: Whether ``distance <= optimal_range``.
        is_in_falloff: Whether ``distance <= optimal_range + falloff``.
        expected_damage_modifier: Hit chance scaled by
            :data:`EXPECTED_DAMAGE_FACTOR`.
    """

    hit_chance: float
    hit_chance_percent: float
    angular_velocity: float
    angular_velocity_mrad: float
    tracking_component: float
    range_component: float
    is_in_optimal: bool
    is_in_falloff: bool
    expected_damage_modifier: float


# ---------------------------------------------------------------------------
# Forward model
# ---------------------------------------------------------------------------


def _clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* to ``[low, high]``; NaN passes through unchanged."""
    if math.isnan(value):
        return value
    return min(high, max(low, value))


def calculate_angular_velocity(transversal: float, distance: float) -> float:
    """Return ``transversal / distance`` in rad/s.

    A non-positive distance is a degenerate geometry and yields
    ``math.inf`` instead of raising.
    """
    if distance <= 0.0:
        return math.inf
    return transversal / distance


def calculate_tracking_component(
    angular_velocity: float,
    tracking_speed: float,
    signature_radius: float,
) -> float:
    """Return the squared tracking term of the hit-chance exponent.

    Args:
        angular_velocity: Angular velocity of the target in rad/s.
        tracking_speed: Turret tracking speed in rad/s.
        signature_radius: Target signature radius in metres.

    Returns:
        ``((angular_velocity * SIGNATURE_RESOLUTION)
        / (tracking_speed * signature_radius)) ** 2``, or ``math.inf``
        when either ``tracking_speed`` or ``signature_radius`` is
        non-positive (the turret can never track).
    """
    if tracking_speed <= 0.0 or signature_radius <= 0.0:
        return math.inf
    ratio = (angular_velocity * SIGNATURE_RESOLUTION) / (
        tracking_speed * signature_radius
    )
    return ratio * ratio


def calculate_range_component(
    distance: float,
    optimal_range: float,
    falloff: float,
) -> float:
    """Return the squared range term of the hit-chance exponent.

    Without a falloff band (``falloff <= 0``) the term is ``math.inf``
    beyond optimal and ``0.0`` inside it.
    """
    if falloff <= 0.0:
        return math.inf if distance > optimal_range else 0.0
    ratio = _clamp(distance - optimal_range, 0.0, math.inf) / falloff
    return ratio * ratio


def calculate_hit_chance(params: TurretParameters) -> HitResult:
    """Calculate the turret hit chance and its derived quantities.

    Args:
        params: Geometry and turret characteristics for one shot.

    Returns:
        A :class:`HitResult`.  ``hit_chance`` is clamped to ``[0, 1]``;
        ``expected_damage_modifier`` uses the unclamped value.  NaN inputs
        (e.g. infinite transversal at infinite distance) yield NaN in
        every derived number rather than a clamped 0.
    """
    angular_velocity = calculate_angular_velocity(params.transversal, params.distance)
    tracking_component = calculate_tracking_component(
        angular_velocity, params.tracking_speed, params.signature_radius
    )
    range_component = calculate_range_component(
        params.distance, params.optimal_range, params.falloff
    )

    exponent: float = tracking_component + range_component
    hit_chance: float = math.pow(0.5, exponent)

    return HitResult(
        hit_chance=_clamp(hit_chance, 0.0, 1.0),
        hit_chance_percent=_clamp(hit_chance * 100.0, 0.0, 100.0),
        angular_velocity=angular_velocity,
        angular_velocity_mrad=angular_velocity * 1000.0,
        tracking_component=tracking_component,
        range_component=range_component,
        is_in_optimal=params.distance <= params.optimal_range,
        is_in_falloff=params.distance <= params.optimal_range + params.falloff,
        expected_damage_modifier=hit_chance * EXPECTED_DAMAGE_FACTOR,
    )


# ---------------------------------------------------------------------------
# Inverse model
# ---------------------------------------------------------------------------


def calculate_max_transversal(params: InverseParameters) -> float:
    """Return the largest transversal velocity that keeps a target hit chance.

    Solves the forward model for ``transversal`` while holding every
    other input fixed::

        total_exponent    = log(target) / log(0.5)
        tracking_exponent = total_exponent - range_component
        transversal       = sqrt(tracking_exponent) * tracking_speed
                            * signature_radius / SIGNATURE_RESOLUTION
                            * distance

    Args:
        params: Target hit chance and the fixed shot geometry.

    Returns:
        Maximum transversal velocity in m/s.  ``0.0`` when the target hit
        chance is outside ``(0, 1]``.  ``math.inf`` when the range term
        alone already consumes the allowed exponent, i.e. changing
        transversal speed cannot help.
    """
    target = params.target_hit_chance
    if target <= 0.0 or target > 1.0:
        return 0.0

    range_component = calculate_range_component(
        params.distance, params.optimal_range, params.falloff
    )
    total_exponent: float = math.log(target) / math.log(0.5)
    tracking_exponent: float = total_exponent - range_component

    if tracking_exponent <= 0.0:
        return math.inf

    tracking_ratio = math.sqrt(tracking_exponent)
    angular_velocity = (
        tracking_ratio * params.tracking_speed * params.signature_radius
    ) / SIGNATURE_RESOLUTION
    return angular_velocity * params.distance


# ---------------------------------------------------------------------------
# Vectorised curves
# ---------------------------------------------------------------------------


def _range_component_array(
    distances: NDArray[np.float64],
    optimal_range: float,
    falloff: float,
) -> NDArray[np.float64]:
    if falloff <= 0.0:
        return np.where(distances > optimal_range, np.inf, 0.0)
    excess = np.maximum(0.0, distances - optimal_range) / falloff
    return excess * excess


def hit_chance_curve(
    transversals: ArrayLike,
    distance: float,
    tracking_speed: float,
    signature_radius: float,
    optimal_range: float,
    falloff: float,
) -> NDArray[np.float64]:
    """Evaluate the clamped hit chance over an array of transversal speeds.

    Uses the same degenerate-input policy as :func:`calculate_hit_chance`,
    so ``hit_chance_curve([v], ...)[0]`` equals the scalar result.
    """
    v = np.asarray(transversals, dtype=np.float64)

    if distance <= 0.0:
        angular = np.full_like(v, np.inf)
    else:
        angular = v / distance

    if tracking_speed <= 0.0 or signature_radius <= 0.0:
        tracking = np.full_like(v, np.inf)
    else:
        ratio = angular * SIGNATURE_RESOLUTION / (tracking_speed * signature_radius)
        tracking = ratio * ratio

    range_term = calculate_range_component(distance, optimal_range, falloff)
    chance = np.power(0.5, tracking + range_term)
    return np.clip(chance, 0.0, 1.0)


def range_curve(
    distances: ArrayLike,
    transversal: float,
    tracking_speed: float,
    signature_radius: float,
    optimal_range: float,
    falloff: float,
) -> NDArray[np.float64]:
    """Evaluate the clamped hit chance over an array of distances."""
    d = np.asarray(distances, dtype=np.float64)

    # Non-positive distances map to infinite angular velocity.
    safe_d = np.where(d > 0.0, d, 1.0)
    angular = np.where(d > 0.0, transversal / safe_d, np.inf)

    if tracking_speed <= 0.0 or signature_radius <= 0.0:
        tracking = np.full_like(d, np.inf)
    else:
        ratio = angular * SIGNATURE_RESOLUTION / (tracking_speed * signature_radius)
        tracking = ratio * ratio

    chance = np.power(0.5, tracking + _range_component_array(d, optimal_range, falloff))
    return np.clip(chance, 0.0, 1.0)
