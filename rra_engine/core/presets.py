"""Turret, signature and ammunition presets for the RRA engine."""

from __future__ import annotations

from dataclasses import dataclass

from rra_engine.core.hit_model import InverseParameters, TurretParameters

# ---------------------------------------------------------------------------
# Preset value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TurretPreset:
    """Immutable turret characteristics.

    Attributes:
        name: Turret label (e.g. "250mm Railgun II").
        tracking: Tracking speed in rad/s (> 0.0).
        optimal: Optimal range in metres (>= 0.0).
        falloff: Falloff range in metres (>= 0.0).
    """

    name: str
    tracking: float
    optimal: float
    falloff: float

    def __post_init__(self) -> None:
        """Validate turret parameters."""
        if not self.name:
            raise ValueError("Turret name must not be empty.")
        if self.tracking <= 0.0:
            raise ValueError("tracking must be > 0.0.")
        if self.optimal < 0.0:
            raise ValueError("optimal must be >= 0.0.")
        if self.falloff < 0.0:
            raise ValueError("falloff must be >= 0.0.")


@dataclass(frozen=True)
class SignaturePreset:
    """Signature radius of a hull class.

    Attributes:
        name: Hull class label (e.g. "Cruiser").
        radius: Signature radius in metres (> 0.0).
    """

    name: str
    radius: float

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Signature name must not be empty.")
        if self.radius <= 0.0:
            raise ValueError("radius must be > 0.0.")


@dataclass(frozen=True)
class AmmoType:
    """Multipliers an ammunition type applies to a turret.

    Attributes:
        name: Ammunition label.
        tracking_mod: Tracking speed multiplier (>= 0.0).
        optimal_mod: Optimal range multiplier (>= 0.0).
        falloff_mod: Falloff range multiplier (>= 0.0).
    """

    name: str
    tracking_mod: float = 1.0
    optimal_mod: float = 1.0
    falloff_mod: float = 1.0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Ammo name must not be empty.")
        for label, value in (
            ("tracking_mod", self.tracking_mod),
            ("optimal_mod", self.optimal_mod),
            ("falloff_mod", self.falloff_mod),
        ):
            if value < 0.0:
                raise ValueError(f"{label} must be >= 0.0.")


@dataclass(frozen=True)
class PresetCatalog:
    """Lookup table of every preset loaded from configuration."""

    turrets: tuple[TurretPreset, ...]
    signatures: tuple[SignaturePreset, ...]
    ammo_types: tuple[AmmoType, ...]

    def turret(self, name: str) -> TurretPreset:
        """Return the turret called *name*.

        Raises:
            KeyError: If no turret has that name.
        """
        for preset in self.turrets:
            if preset.name == name:
                return preset
        raise KeyError(f"Unknown turret preset: {name!r}")

    def signature(self, name: str) -> SignaturePreset:
        """Return the signature preset called *name*."""
        for preset in self.signatures:
            if preset.name == name:
                return preset
        raise KeyError(f"Unknown signature preset: {name!r}")

    def ammo(self, name: str) -> AmmoType:
        """Return the ammunition type called *name*."""
        for preset in self.ammo_types:
            if preset.name == name:
                return preset
        raise KeyError(f"Unknown ammo type: {name!r}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def apply_ammo(turret: TurretPreset, ammo: AmmoType) -> TurretPreset:
    """Return a copy of *turret* with *ammo* multipliers applied.

    The resulting name is ``"<turret> + <ammo>"`` so that charts can label
    the combination.
    """
    return TurretPreset(
        name=f"{turret.name} + {ammo.name}",
        tracking=turret.tracking * ammo.tracking_mod,
        optimal=turret.optimal * ammo.optimal_mod,
        falloff=turret.falloff * ammo.falloff_mod,
    )


def turret_parameters(
    turret: TurretPreset,
    signature: SignaturePreset,
    transversal: float,
    distance: float,
) -> TurretParameters:
    """Build forward-model inputs from presets and a shot geometry."""
    return TurretParameters(
        transversal=transversal,
        distance=distance,
        tracking_speed=turret.tracking,
        signature_radius=signature.radius,
        optimal_range=turret.optimal,
        falloff=turret.falloff,
    )


def inverse_parameters(
    turret: TurretPreset,
    signature: SignaturePreset,
    target_hit_chance: float,
    distance: float,
) -> InverseParameters:
    """Build inverse-model inputs from presets and a target hit chance."""
    return InverseParameters(
        target_hit_chance=target_hit_chance,
        distance=distance,
        tracking_speed=turret.tracking,
        signature_radius=signature.radius,
        optimal_range=turret.optimal,
        falloff=turret.falloff,
    )
