"""Request boundary for the RRA engine.

Turns loosely typed request payloads (parsed JSON bodies, form fields,
query strings) into model inputs, and model outputs into JSON-safe
structures.  A web or CLI layer built on top of the engine only needs
the ``*_request`` functions and :func:`dumps`.

Numeric fields are coerced the way browser form values usually are:
a leading numeric prefix is accepted, and anything absent, unparseable,
NaN or zero falls back to the field default.

Standard JSON has no encoding for non-finite floats, so ``inf``,
``-inf`` and ``nan`` are rendered as the strings ``"Infinity"``,
``"-Infinity"`` and ``"NaN"``.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from rra_engine.core.hit_model import (
    HitResult,
    InverseParameters,
    TurretParameters,
    calculate_hit_chance,
    calculate_max_transversal,
)
from rra_engine.log_parsing.events import CombatEvent
from rra_engine.log_parsing.parser import parse_log_content
from rra_engine.log_parsing.stats import CombatStats, calculate_stats

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

FORWARD_DEFAULTS: dict[str, float] = {
    "transversal": 0.0,
    "distance": 1.0,
    "trackingSpeed": 0.01,
    "signatureRadius": 100.0,
    "optimalRange": 10000.0,
    "falloff": 5000.0,
}

INVERSE_DEFAULTS: dict[str, float] = {
    "targetHitChance": 0.5,
    "distance": 1.0,
    "trackingSpeed": 0.01,
    "signatureRadius": 100.0,
    "optimalRange": 10000.0,
    "falloff": 5000.0,
}

_NUMERIC_PREFIX_RE = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)

# ---------------------------------------------------------------------------
# Input coercion
# ---------------------------------------------------------------------------


def coerce_number(value: Any, default: float) -> float:
    """Return *value* as a float, or *default* if it is unusable.

    Args:
        value: Raw field value (number, string, ``None`` or anything else).
        default: Fallback used for absent, unparseable, NaN or zero input.

    Returns:
        The parsed number or the default.
    """
    number: float
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # json.loads yields arbitrarily large ints for long digit strings.
            number = math.copysign(math.inf, value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX_RE.match(value)
        if not match:
            return default
        number = float(match.group(1).replace("Infinity", "inf"))
    else:
        return default

    if math.isnan(number) or number == 0.0:
        return default
    return number


def forward_params_from_request(payload: Mapping[str, Any]) -> TurretParameters:
    """Build :class:`TurretParameters` from a camelCase request payload."""
    values = {
        key: coerce_number(payload.get(key), default)
        for key, default in FORWARD_DEFAULTS.items()
    }
    return TurretParameters(
        transversal=values["transversal"],
        distance=values["distance"],
        tracking_speed=values["trackingSpeed"],
        signature_radius=values["signatureRadius"],
        optimal_range=values["optimalRange"],
        falloff=values["falloff"],
    )


def inverse_params_from_request(payload: Mapping[str, Any]) -> InverseParameters:
    """Build :class:`InverseParameters` from a camelCase request payload."""
    values = {
        key: coerce_number(payload.get(key), default)
        for key, default in INVERSE_DEFAULTS.items()
    }
    return InverseParameters(
        target_hit_chance=values["targetHitChance"],
        distance=values["distance"],
        tracking_speed=values["trackingSpeed"],
        signature_radius=values["signatureRadius"],
        optimal_range=values["optimalRange"],
        falloff=values["falloff"],
    )


# ---------------------------------------------------------------------------
# Output rendering
# ---------------------------------------------------------------------------


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_json_safe(value: Any) -> Any:
    """Recursively convert *value* into plain JSON-encodable data.

    Dataclasses become dicts, enums their values, datetimes ISO 8601
    strings, tuples lists, and non-finite floats their string sentinels.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return value
    if isinstance(value, Enum):
        return to_json_safe(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return to_json_safe(asdict(value))
    if isinstance(value, Mapping):
        return {str(k): to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(v) for v in value]
    return value


def dumps(value: Any, **kwargs: Any) -> str:
    """Serialise *value* to strict JSON (no bare ``Infinity``/``NaN``)."""
    return json.dumps(to_json_safe(value), allow_nan=False, **kwargs)


def hit_result_to_dict(result: HitResult) -> dict[str, Any]:
    """Render a :class:`HitResult` with camelCase keys."""
    return {_camel(key): to_json_safe(val) for key, val in asdict(result).items()}


def event_to_dict(event: CombatEvent) -> dict[str, Any]:
    """Render a :class:`CombatEvent`, omitting absent optional fields."""
    out: dict[str, Any] = {
        "type": event.event_type.value,
        "timestamp": to_json_safe(event.timestamp),
        "raw": event.raw,
    }
    for key in ("damage", "target", "source", "weapon", "hit_quality"):
        val = getattr(event, key)
        if val is not None:
            out[_camel(key)] = val
    return out


def stats_to_dict(stats: CombatStats) -> dict[str, Any]:
    """Render :class:`CombatStats`; ``dps`` is omitted when undefined."""
    out: dict[str, Any] = {
        "totalDamageDealt": stats.total_damage_dealt,
        "totalDamageReceived": stats.total_damage_received,
        "shotsHit": stats.shots_hit,
        "shotsMissed": stats.shots_missed,
        "hitRate": to_json_safe(stats.hit_rate),
        "targets": dict(stats.targets),
        "weapons": {
            name: {"damage": ws.damage, "hits": ws.hits, "misses": ws.misses}
            for name, ws in stats.weapons.items()
        },
        "hitQualities": dict(stats.hit_qualities),
        "timespan": {
            "start": to_json_safe(stats.timespan_start),
            "end": to_json_safe(stats.timespan_end),
        },
    }
    if stats.dps is not None:
        out["dps"] = to_json_safe(stats.dps)
    return out


# ---------------------------------------------------------------------------
# Request handlers
# ---------------------------------------------------------------------------


def calculate_request(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Forward calculation: request payload in, JSON-safe result out."""
    params = forward_params_from_request(payload)
    return hit_result_to_dict(calculate_hit_chance(params))


def max_transversal_request(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Inverse calculation: ``{"maxTransversal": <m/s or sentinel>}``."""
    value = calculate_max_transversal(inverse_params_from_request(payload))
    return {"maxTransversal": to_json_safe(value)}


def parse_log_request(text: str) -> dict[str, Any]:
    """Log ingestion: raw log text in, events and stats out."""
    events = parse_log_content(text)
    stats = calculate_stats(events)
    return {
        "events": [event_to_dict(ev) for ev in events],
        "stats": stats_to_dict(stats),
    }
