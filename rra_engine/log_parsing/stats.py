"""Combat statistics aggregation for the RRA engine.

Folds an ordered sequence of :class:`CombatEvent` objects into a single
:class:`CombatStats` summary.  Nothing is cached between calls; every
call builds a fresh summary from the full event list.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from rra_engine.log_parsing.events import CombatEvent, EventType

# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass
class WeaponStats:
    """Running totals for one weapon.

    Attributes:
        damage: Total damage dealt with the weapon.
        hits: Number of damage-dealt events naming the weapon.
        misses: Number of miss events naming the weapon.
    """

    damage: int = 0
    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        """Hit percentage for this weapon, 0.0 when it never fired."""
        shots = self.hits + self.misses
        return self.hits / shots * 100.0 if shots > 0 else 0.0


@dataclass
class CombatStats:
    """Aggregate view of a combat log.

    Attributes:
        total_damage_dealt: Sum of outgoing damage.
        total_damage_received: Sum of incoming damage.
        shots_hit: Number of damage-dealt events.
        shots_missed: Number of miss events.
        hit_rate: ``shots_hit / (shots_hit + shots_missed) * 100``, or
            0.0 when no shot was classified.
        targets: Damage dealt per target name.
        weapons: Per-weapon damage, hits and misses.
        hit_qualities: Count of damage-dealt events per hit quality.
        timespan_start: Earliest timestamp seen, if any.
        timespan_end: Latest timestamp seen, if any.
        dps: Damage dealt per second over the timespan.  ``None`` unless
            both endpoints are known and strictly apart.
    """

    total_damage_dealt: int = 0
    total_damage_received: int = 0
    shots_hit: int = 0
    shots_missed: int = 0
    hit_rate: float = 0.0
    targets: dict[str, int] = field(default_factory=dict)
    weapons: dict[str, WeaponStats] = field(default_factory=dict)
    hit_qualities: dict[str, int] = field(default_factory=dict)
    timespan_start: datetime | None = None
    timespan_end: datetime | None = None
    dps: float | None = None

    @property
    def total_shots(self) -> int:
        """Number of outgoing shots that were classified as hit or miss."""
        return self.shots_hit + self.shots_missed

    @property
    def duration_seconds(self) -> float | None:
        """Length of the observed timespan in seconds, if known."""
        if self.timespan_start is None or self.timespan_end is None:
            return None
        return (self.timespan_end - self.timespan_start).total_seconds()


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def calculate_stats(events: Iterable[CombatEvent]) -> CombatStats:
    """Aggregate combat events into a :class:`CombatStats` summary.

    Accounting per event type:

    - ``damage_dealt``: dealt total, shots hit, per-target damage,
      per-weapon damage and hits, per-quality count.
    - ``damage_received``: received total only.
    - ``miss``: shots missed and per-weapon misses.

    Unclassified events still widen the timespan when they carry a
    timestamp but add to no other total.

    Args:
        events: Parsed events in log order.

    Returns:
        A freshly built :class:`CombatStats`.
    """
    stats = CombatStats()

    for event in events:
        # -- Timespan ---------------------------------------------------------
        if event.timestamp is not None:
            if stats.timespan_start is None or event.timestamp < stats.timespan_start:
                stats.timespan_start = event.timestamp
            if stats.timespan_end is None or event.timestamp > stats.timespan_end:
                stats.timespan_end = event.timestamp

        if not event.is_known:
            continue

        if event.event_type is EventType.DAMAGE_DEALT:
            damage: int = event.damage or 0
            stats.total_damage_dealt += damage
            stats.shots_hit += 1

            if event.target:
                stats.targets[event.target] = (
                    stats.targets.get(event.target, 0) + damage
                )

            if event.weapon:
                weapon = stats.weapons.setdefault(event.weapon, WeaponStats())
                weapon.damage += damage
                weapon.hits += 1

            if event.hit_quality:
                stats.hit_qualities[event.hit_quality] = (
                    stats.hit_qualities.get(event.hit_quality, 0) + 1
                )

        elif event.event_type is EventType.DAMAGE_RECEIVED:
            stats.total_damage_received += event.damage or 0

        elif event.event_type is EventType.MISS:
            stats.shots_missed += 1

            if event.weapon:
                stats.weapons.setdefault(event.weapon, WeaponStats()).misses += 1

    # -- Derived values -------------------------------------------------------
    total_shots = stats.total_shots
    stats.hit_rate = stats.shots_hit / total_shots * 100.0 if total_shots > 0 else 0.0

    duration = stats.duration_seconds
    if duration is not None and duration > 0.0:
        stats.dps = stats.total_damage_dealt / duration

    return stats
