"""Configuration loader for the RRA turret and combat-log engine."""

from pathlib import Path

import yaml

from rra_engine.core.presets import (
    AmmoType,
    PresetCatalog,
    SignaturePreset,
    TurretPreset,
)

DATA_DIR: Path = Path(__file__).resolve().parent / "data"
PRESETS_PATH: Path = DATA_DIR / "presets.yaml"

# Game client combat logs
LOG_SUFFIX: str = ".txt"
LOG_FILE_ENCODING: str = "utf-16-le"
DEFAULT_LOG_LIMIT: int = 10

_SECTION_FIELDS: dict[str, tuple[str, ...]] = {
    "turrets": ("name", "tracking", "optimal", "falloff"),
    "signatures": ("name", "radius"),
    "ammo": ("name", "tracking_mod", "optimal_mod", "falloff_mod"),
}


def _validated_entries(data: dict, section: str) -> list[dict]:
    """Return the entries of *section* after checking fields and types."""
    if section not in data or not isinstance(data[section], list):
        raise ValueError(f"Preset file is missing the '{section}' list")

    fields = _SECTION_FIELDS[section]
    entries: list[dict] = data[section]

    for idx, entry in enumerate(entries):
        for field in fields:
            if field not in entry:
                raise ValueError(
                    f"{section} entry {idx} ({entry.get('name', '<unknown>')}) "
                    f"is missing required field '{field}'"
                )

        for field in fields[1:]:
            val = entry[field]
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                raise ValueError(
                    f"{section} entry {idx} ({entry['name']}): "
                    f"'{field}' must be numeric, got {type(val).__name__}"
                )

    return entries


def load_presets(path: Path | None = None) -> PresetCatalog:
    """Load turret, signature and ammunition presets from a YAML file.

    Each entry is validated and converted into its preset dataclass.

    Args:
        path: Optional override for the preset file path.

    Returns:
        A :class:`PresetCatalog` holding every preset in file order.

    Raises:
        FileNotFoundError: If the preset file does not exist.
        ValueError: If a section is missing, an entry is missing fields,
            or a value is not numeric or out of range.
    """
    presets_path = path or PRESETS_PATH
    if not presets_path.exists():
        raise FileNotFoundError(f"Preset file not found: {presets_path}")

    with open(presets_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    turrets: list[TurretPreset] = [
        TurretPreset(
            name=str(entry["name"]),
            tracking=float(entry["tracking"]),
            optimal=float(entry["optimal"]),
            falloff=float(entry["falloff"]),
        )
        for entry in _validated_entries(data, "turrets")
    ]

    signatures: list[SignaturePreset] = [
        SignaturePreset(name=str(entry["name"]), radius=float(entry["radius"]))
        for entry in _validated_entries(data, "signatures")
    ]

    ammo_types: list[AmmoType] = [
        AmmoType(
            name=str(entry["name"]),
            tracking_mod=float(entry["tracking_mod"]),
            optimal_mod=float(entry["optimal_mod"]),
            falloff_mod=float(entry["falloff_mod"]),
        )
        for entry in _validated_entries(data, "ammo")
    ]

    return PresetCatalog(
        turrets=tuple(turrets),
        signatures=tuple(signatures),
        ammo_types=tuple(ammo_types),
    )
