"""Core numeric modules for the RRA engine."""

from rra_engine.core.hit_model import (
    EXPECTED_DAMAGE_FACTOR,
    SIGNATURE_RESOLUTION,
    HitResult,
    InverseParameters,
    TurretParameters,
    calculate_angular_velocity,
    calculate_hit_chance,
    calculate_max_transversal,
    calculate_range_component,
    calculate_tracking_component,
    hit_chance_curve,
    range_curve,
)
from rra_engine.core.presets import (
    AmmoType,
    PresetCatalog,
    SignaturePreset,
    TurretPreset,
    apply_ammo,
    inverse_parameters,
    turret_parameters,
)

__all__ = [
    "AmmoType",
    "EXPECTED_DAMAGE_FACTOR",
    "HitResult",
    "InverseParameters",
    "PresetCatalog",
    "SIGNATURE_RESOLUTION",
    "SignaturePreset",
    "TurretParameters",
    "TurretPreset",
    "apply_ammo",
    "calculate_angular_velocity",
    "calculate_hit_chance",
    "calculate_max_transversal",
    "calculate_range_component",
    "calculate_tracking_component",
    "hit_chance_curve",
    "inverse_parameters",
    "range_curve",
    "turret_parameters",
]
