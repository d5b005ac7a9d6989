"""Tests for the request boundary: input coercion and JSON-safe output."""

from __future__ import annotations

import json
import math
from datetime import datetime

import pytest

from rra_engine.api import (
    FORWARD_DEFAULTS,
    calculate_request,
    coerce_number,
    dumps,
    forward_params_from_request,
    inverse_params_from_request,
    max_transversal_request,
    parse_log_request,
    to_json_safe,
)

_LOG = "\n".join(
    [
        "[ 2024.01.15 20:30:00 ] (combat) <color=0xff00ffff><b>50</b> "
        "<color=0x77ffffff><b>100</b> Wrecks to "
        "<b><color=0xffff0000>Some Target</color></b> - "
        "<color=0xffffffff><font size=12>Railgun</font>",
        "[ 2024.01.15 20:30:00 ] (chat) Pilot > o7",
    ]
)

# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def test_coerce_number_accepts_numbers_and_numeric_strings() -> None:
    """Numbers and numeric string prefixes must parse like parseFloat."""
    assert coerce_number(12.5, 1.0) == 12.5
    assert coerce_number(7, 1.0) == 7.0
    assert coerce_number("250", 1.0) == 250.0, "numeric strings must parse"
    assert coerce_number(" 12.5km", 1.0) == 12.5, "a numeric prefix must parse"
    assert coerce_number("-3e2", 1.0) == -300.0
    assert coerce_number(".5", 1.0) == 0.5
    assert coerce_number("Infinity", 1.0) == math.inf, "Infinity must parse"


def test_coerce_number_falls_back_to_default() -> None:
    """Absent, zero, NaN and non-numeric values must use the default."""
    for raw in (None, "", "abc", "0", 0, 0.0, float("nan"), True, [1], {}):
        assert coerce_number(raw, 42.0) == 42.0, f"{raw!r} should fall back"


def test_coerce_number_oversized_integers_become_infinite() -> None:
    """Integers beyond float range must coerce to signed infinity."""
    huge = json.loads("1" + "0" * 400)
    assert isinstance(huge, int)
    assert coerce_number(huge, 1.0) == math.inf, "huge ints must not overflow"
    assert coerce_number(-huge, 1.0) == -math.inf, "sign must be kept"

    out = calculate_request({"distance": 10**400, "transversal": 100})
    assert out["angularVelocity"] == 0.0, "finite speed at infinite range"
    json.dumps(out, allow_nan=False)


def test_forward_params_defaults() -> None:
    """An empty payload must produce the documented forward defaults."""
    params = forward_params_from_request({})
    assert params.transversal == FORWARD_DEFAULTS["transversal"], (
        "missing transversal uses the default"
    )
    assert params.distance == 1.0
    assert params.tracking_speed == 0.01
    assert params.signature_radius == 100.0
    assert params.optimal_range == 10000.0
    assert params.falloff == 5000.0


def test_forward_params_reads_camel_case() -> None:
    """CamelCase request keys must map onto the parameter fields."""
    params = forward_params_from_request(
        {
            "transversal": "300",
            "distance": 15000,
            "trackingSpeed": "0.0578",
            "signatureRadius": 125,
            "optimalRange": "24000",
            "falloff": 14400,
        }
    )
    assert params.transversal == 300.0
    assert params.tracking_speed == 0.0578, "trackingSpeed must map to tracking_speed"
    assert params.signature_radius == 125.0
    assert params.optimal_range == 24000.0


def test_inverse_params_defaults() -> None:
    """An unusable target hit chance must fall back to 50%."""
    params = inverse_params_from_request({"targetHitChance": "garbage"})
    assert params.target_hit_chance == 0.5, "garbage target must fall back to 0.5"
    assert params.distance == 1.0


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def test_to_json_safe_non_finite_and_datetimes() -> None:
    """Non-finite floats and datetimes must become JSON-safe strings."""
    data = {
        "a": math.inf,
        "b": -math.inf,
        "c": float("nan"),
        "d": (1.5, 2),
        "e": datetime(2024, 1, 15, 20, 30, 0),
    }
    assert to_json_safe(data) == {
        "a": "Infinity",
        "b": "-Infinity",
        "c": "NaN",
        "d": [1.5, 2],
        "e": "2024-01-15T20:30:00",
    }


def test_dumps_is_strict_json() -> None:
    """Serialised output must be valid strict JSON."""
    text = dumps({"maxTransversal": math.inf})
    assert json.loads(text) == {"maxTransversal": "Infinity"}, (
        "inf must serialise as a string"
    )


def test_calculate_request_keys() -> None:
    """The forward response must carry exactly the camelCase result keys."""
    out = calculate_request({"transversal": 0, "distance": 5000})
    assert out["hitChance"] == 1.0, "no motion inside optimal always hits"
    assert out["hitChancePercent"] == 100.0
    assert out["rangeComponent"] == 0.0
    assert out["isInOptimal"] is True
    assert out["isInFalloff"] is True
    assert out["angularVelocityMrad"] == 0.0
    assert out["expectedDamageModifier"] == pytest.approx(0.575)
    assert set(out) == {
        "hitChance",
        "hitChancePercent",
        "angularVelocity",
        "angularVelocityMrad",
        "trackingComponent",
        "rangeComponent",
        "isInOptimal",
        "isInFalloff",
        "expectedDamageModifier",
    }


def test_calculate_request_degenerate_is_serialisable() -> None:
    """Degenerate geometry must still serialise without NaN or inf."""
    out = calculate_request({"distance": -10, "transversal": 100})
    assert out["angularVelocity"] == "Infinity", (
        "negative distance gives infinite angular velocity"
    )
    assert out["hitChance"] == 0.0
    json.dumps(out, allow_nan=False)


def test_max_transversal_request() -> None:
    """The inverse response must wrap the value under maxTransversal."""
    out = max_transversal_request(
        {
            "targetHitChance": 0.5,
            "distance": 10000,
            "trackingSpeed": 0.165,
            "signatureRadius": 400,
            "optimalRange": 12000,
            "falloff": 6000,
        }
    )
    assert out["maxTransversal"] == pytest.approx(16.5), "inverse value mismatch"

    unbounded = max_transversal_request({"targetHitChance": 0.5, "distance": 40000})
    assert unbounded == {"maxTransversal": "Infinity"}

    assert max_transversal_request({"targetHitChance": 1.5}) == {"maxTransversal": 0.0}


def test_parse_log_request() -> None:
    """A parsed log must yield camelCase events and stats."""
    out = parse_log_request(_LOG)
    assert len(out["events"]) == 1, "non-combat lines must be dropped"
    event = out["events"][0]
    assert event["type"] == "damage_dealt"
    assert event["damage"] == 50
    assert event["target"] == "Some Target"
    assert event["weapon"] == "Railgun"
    assert event["hitQuality"] == "wrecks"
    assert event["timestamp"] == "2024-01-15T20:30:00"
    assert "source" not in event, "unset fields must be omitted"

    stats = out["stats"]
    assert stats["totalDamageDealt"] == 50
    assert stats["shotsHit"] == 1
    assert stats["hitRate"] == 100.0
    assert stats["weapons"] == {"Railgun": {"damage": 50, "hits": 1, "misses": 0}}
    assert stats["timespan"] == {
        "start": "2024-01-15T20:30:00",
        "end": "2024-01-15T20:30:00",
    }
    assert "dps" not in stats, "undefined dps must be omitted"
    json.dumps(out, allow_nan=False)
