"""Line-level combat log parser for the RRA engine.

Each game log line has the shape::

    [ 2024.01.15 20:30:00 ] (combat) <markup-laden message>

Only ``(combat)`` lines are considered.  The message is classified by an
ordered list of rules -- damage dealt, damage received, miss -- that are
all evaluated.  A later matching rule overwrites the event type and the
fields it sets, so a line matching several rules ends up classified by
the last one (miss over damage received over damage dealt).  Fields set
by an earlier rule and not touched by a later one are kept.

Weapon name and hit quality are extracted independently of the
classification.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime
from typing import Any

from rra_engine.log_parsing.events import CombatEvent, EventType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

TIMESTAMP_RE = re.compile(
    r"\[\s*(\d{4})\.(\d{2})\.(\d{2})\s+(\d{2}):(\d{2}):(\d{2})\s*\]"
)
LOG_LINE_RE = re.compile(r"\[\s*[\d.:\s]+\]\s*\((\w+)\)\s*(.*)")

DAMAGE_DEALT_RE = re.compile(
    r"<color=[^>]+><b>(\d+)</b>.*?<color=[^>]+><b>(\d+)</b>.*?"
    r"to\s+<b><color=[^>]+>([^<]+)</color></b>",
    re.IGNORECASE,
)
DAMAGE_RECEIVED_RE = re.compile(
    r"<color=[^>]+><b>(\d+)</b>.*?from\s+<b><color=[^>]+>([^<]+)</color></b>",
    re.IGNORECASE,
)
MISS_RE = re.compile(
    r"misses\s+(?:you|<b><color=[^>]+>([^<]+)</color></b>)\s+completely",
    re.IGNORECASE,
)
WEAPON_RE = re.compile(r"-\s+<color=[^>]+><font[^>]*>([^<]+)</font>", re.IGNORECASE)
HIT_QUALITY_RE = re.compile(
    r"(wrecks|penetrates|hits|grazes|glances|smashes)", re.IGNORECASE
)
TAG_RE = re.compile(r"<[^>]+>")

COMBAT_CHANNEL: str = "combat"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_timestamp(line: str) -> datetime | None:
    """Extract the bracketed ``YYYY.MM.DD HH:MM:SS`` time from *line*.

    Returns:
        A naive :class:`datetime` with exactly the matched fields, or
        ``None`` if the line carries no timestamp or the matched fields
        do not form a valid calendar time.
    """
    match = TIMESTAMP_RE.search(line)
    if not match:
        return None

    year, month, day, hour, minute, second = (int(g) for g in match.groups())
    try:
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        logger.debug("Ignoring invalid timestamp in line: %r", line)
        return None


def strip_tags(text: str) -> str:
    """Remove every ``<...>`` markup tag and surrounding whitespace."""
    return TAG_RE.sub("", text).strip()


# ---------------------------------------------------------------------------
# Classification rules
# ---------------------------------------------------------------------------


def _damage_dealt(match: re.Match[str]) -> dict[str, Any]:
    return {
        "event_type": EventType.DAMAGE_DEALT,
        "damage": int(match.group(1)),
        "target": strip_tags(match.group(3)),
    }


def _damage_received(match: re.Match[str]) -> dict[str, Any]:
    return {
        "event_type": EventType.DAMAGE_RECEIVED,
        "damage": int(match.group(1)),
        "source": strip_tags(match.group(2)),
    }


def _miss(match: re.Match[str]) -> dict[str, Any]:
    name = match.group(1)
    return {
        "event_type": EventType.MISS,
        "target": strip_tags(name) if name else "you",
    }


# Evaluated in order; later matches overwrite earlier assignments.
CLASSIFICATION_RULES: tuple[
    tuple[re.Pattern[str], Callable[[re.Match[str]], dict[str, Any]]], ...
] = (
    (DAMAGE_DEALT_RE, _damage_dealt),
    (DAMAGE_RECEIVED_RE, _damage_received),
    (MISS_RE, _miss),
)

# ---------------------------------------------------------------------------
# Line parser
# ---------------------------------------------------------------------------


def parse_combat_line(line: str) -> CombatEvent | None:
    """Parse one raw log line into a :class:`CombatEvent`.

    Args:
        line: A single line of a game log.

    Returns:
        ``None`` when the line does not have the log-line shape or
        belongs to a channel other than ``combat``.  Otherwise an event,
        whose type is :attr:`EventType.UNKNOWN` if no classification
        rule matched.
    """
    line_match = LOG_LINE_RE.search(line)
    if not line_match:
        return None

    channel, content = line_match.groups()
    if channel != COMBAT_CHANNEL:
        return None

    fields: dict[str, Any] = {
        "event_type": EventType.UNKNOWN,
        "timestamp": parse_timestamp(line),
        "raw": line,
    }

    for pattern, extract in CLASSIFICATION_RULES:
        match = pattern.search(content)
        if match:
            fields.update(extract(match))

    weapon = WEAPON_RE.search(content)
    if weapon:
        fields["weapon"] = strip_tags(weapon.group(1))

    quality = HIT_QUALITY_RE.search(content)
    if quality:
        fields["hit_quality"] = quality.group(1).lower()

    return CombatEvent(**fields)


def parse_log_content(content: str) -> list[CombatEvent]:
    """Parse a whole log text into its classified combat events.

    Lines are split on ``"\\n"`` and parsed independently.  Non-combat
    lines and unclassified combat lines are dropped; order is preserved.
    """
    events: list[CombatEvent] = []
    for line in content.split("\n"):
        event = parse_combat_line(line)
        if event is not None and event.is_known:
            events.append(event)
    return events
