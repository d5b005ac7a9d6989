"""Log file access for the RRA engine.

Game clients write one UTF-16 little-endian text file per session,
named ``YYYYMMDD_HHMMSS_<character id>.txt``.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from rra_engine.config import DEFAULT_LOG_LIMIT, LOG_FILE_ENCODING, LOG_SUFFIX
from rra_engine.log_parsing.events import CombatEvent
from rra_engine.log_parsing.parser import parse_log_content

logger = logging.getLogger(__name__)

_FILENAME_DATE_RE = re.compile(r"^(\d{8}_\d{6})")

# Sorts below every real ``YYYYMMDD_HHMMSS`` key.
_UNDATED_KEY: str = "0"


def parse_log_file(path: str | os.PathLike[str]) -> list[CombatEvent]:
    """Read a UTF-16LE log file and parse its combat events.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, encoding=LOG_FILE_ENCODING, newline="") as fh:
        content = fh.read()

    events = parse_log_content(content)
    logger.debug("Parsed %d combat events from %s", len(events), path)
    return events


def _log_sort_key(filename: str) -> str:
    match = _FILENAME_DATE_RE.match(filename)
    return match.group(1) if match else _UNDATED_KEY


def find_recent_logs(
    directory: str | os.PathLike[str],
    limit: int = DEFAULT_LOG_LIMIT,
) -> list[Path]:
    """Return the most recent log files in *directory*.

    Files are ordered by the ``YYYYMMDD_HHMMSS`` prefix of their names,
    newest first.  Files without that prefix sort last.

    Args:
        directory: Game log directory.
        limit: Maximum number of paths to return.

    Returns:
        Up to *limit* paths.  An empty list if the directory cannot be
        listed.
    """
    try:
        names = os.listdir(directory)
    except OSError as exc:
        logger.debug("Cannot list log directory %s: %s", directory, exc)
        return []

    log_names = [name for name in names if name.endswith(LOG_SUFFIX)]
    log_names.sort(key=_log_sort_key, reverse=True)

    return [Path(directory) / name for name in log_names[: max(0, limit)]]
