"""Tabular views of parsed combat logs.

Converts events and statistics into :class:`pandas.DataFrame` objects for
the dashboard and batch scripts.
"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from rra_engine.log_parsing.events import CombatEvent, EventType
from rra_engine.log_parsing.stats import CombatStats

EVENT_COLUMNS: list[str] = [
    "timestamp",
    "event_type",
    "damage",
    "target",
    "source",
    "weapon",
    "hit_quality",
]

WEAPON_COLUMNS: list[str] = ["damage", "hits", "misses", "hit_rate"]


def events_to_frame(events: Iterable[CombatEvent]) -> pd.DataFrame:
    """Return one row per event, in log order.

    Missing optional fields become ``None``/``NaT``; ``damage`` uses the
    nullable ``Int64`` dtype so that misses do not turn it into floats.
    """
    rows: list[dict[str, object]] = [
        {
            "timestamp": ev.timestamp,
            "event_type": ev.event_type.value,
            "damage": ev.damage,
            "target": ev.target,
            "source": ev.source,
            "weapon": ev.weapon,
            "hit_quality": ev.hit_quality,
        }
        for ev in events
    ]
    df = pd.DataFrame(rows, columns=EVENT_COLUMNS)
    df["timestamp"] = pd.to_datetime(df["timestamp"])
    df["damage"] = df["damage"].astype("Int64")
    return df


def weapons_to_frame(stats: CombatStats) -> pd.DataFrame:
    """Return per-weapon totals indexed by weapon, highest damage first."""
    rows: list[dict[str, object]] = [
        {
            "weapon": name,
            "damage": ws.damage,
            "hits": ws.hits,
            "misses": ws.misses,
            "hit_rate": ws.hit_rate,
        }
        for name, ws in stats.weapons.items()
    ]
    df = pd.DataFrame(rows, columns=["weapon", *WEAPON_COLUMNS])
    return df.set_index("weapon").sort_values("damage", ascending=False)


def damage_timeline(
    events: Iterable[CombatEvent],
    freq: str = "1s",
) -> pd.DataFrame:
    """Resample dealt and received damage into fixed-width time buckets.

    Args:
        events: Parsed events; events without a timestamp are ignored.
        freq: Pandas offset alias for the bucket width.

    Returns:
        DataFrame indexed by bucket start with ``damage_dealt`` and
        ``damage_received`` columns.  Empty when no event is timestamped.
    """
    rows: list[dict[str, object]] = []
    for ev in events:
        if ev.timestamp is None:
            continue
        if ev.event_type not in (EventType.DAMAGE_DEALT, EventType.DAMAGE_RECEIVED):
            continue
        amount: int = ev.damage or 0
        dealt = ev.event_type is EventType.DAMAGE_DEALT
        rows.append(
            {
                "timestamp": ev.timestamp,
                "damage_dealt": amount if dealt else 0,
                "damage_received": 0 if dealt else amount,
            }
        )

    columns = ["damage_dealt", "damage_received"]
    if not rows:
        return pd.DataFrame(
            columns=columns,
            index=pd.DatetimeIndex([], name="timestamp"),
        )

    df = pd.DataFrame(rows).set_index("timestamp").sort_index()
    return df[columns].resample(freq).sum()
