"""Combat log parsing and aggregation for the RRA engine."""

from rra_engine.log_parsing.events import HIT_QUALITIES, CombatEvent, EventType
from rra_engine.log_parsing.files import find_recent_logs, parse_log_file
from rra_engine.log_parsing.parser import (
    parse_combat_line,
    parse_log_content,
    parse_timestamp,
    strip_tags,
)
from rra_engine.log_parsing.stats import CombatStats, WeaponStats, calculate_stats

__all__ = [
    "CombatEvent",
    "CombatStats",
    "EventType",
    "HIT_QUALITIES",
    "WeaponStats",
    "calculate_stats",
    "find_recent_logs",
    "parse_combat_line",
    "parse_log_content",
    "parse_log_file",
    "parse_timestamp",
    "strip_tags",
]
