"""Typed combat events extracted from game log lines."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EventType(str, Enum):
    """Classification of a combat log line."""

    DAMAGE_DEALT = "damage_dealt"
    DAMAGE_RECEIVED = "damage_received"
    MISS = "miss"
    UNKNOWN = "unknown"


HIT_QUALITIES: tuple[str, ...] = (
    "wrecks",
    "penetrates",
    "hits",
    "grazes",
    "glances",
    "smashes",
)


@dataclass(frozen=True)
class CombatEvent:
    """One combat line after parsing.

    Attributes:
        event_type: Classification of the line.
        timestamp: Naive local time of the line, if it carried one.
        raw: The unmodified source line.
        damage: Damage amount for dealt/received lines.
        target: Name of the entity hit or missed (``"you"`` when an
            incoming shot missed the player).
        source: Name of the entity that dealt incoming damage.
        weapon: Weapon name, when the line names one.
        hit_quality: Lower-cased quality keyword from :data:`HIT_QUALITIES`.
    """

    event_type: EventType
    timestamp: datetime | None
    raw: str
    damage: int | None = None
    target: str | None = None
    source: str | None = None
    weapon: str | None = None
    hit_quality: str | None = None

    @property
    def is_known(self) -> bool:
        """Return True unless the line could not be classified."""
        return self.event_type is not EventType.UNKNOWN
