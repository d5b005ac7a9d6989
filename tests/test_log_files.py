"""Tests for log file parsing and recent-log discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from rra_engine.log_parsing.events import EventType
from rra_engine.log_parsing.files import find_recent_logs, parse_log_file

_LOG_TEXT = "\r\n".join(
    [
        "------------------------------------------------------------",
        "  Gamelog",
        "  Listener: Some Pilot",
        "  Session Started: 2024.01.15 20:29:58",
        "------------------------------------------------------------",
        "[ 2024.01.15 20:30:00 ] (combat) <color=0xff00ffff><b>50</b> "
        "<color=0x77ffffff><b>100</b> Hits to "
        "<b><color=0xffff0000>Some Target</color></b> - "
        "<color=0xffffffff><font size=12>Railgun</font>",
        "[ 2024.01.15 20:30:02 ] (notify) Target locked",
        "[ 2024.01.15 20:30:04 ] (combat) Angel Cartel misses you completely",
    ]
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _touch(directory: Path, *names: str) -> None:
    """Create empty files with the given names."""
    for name in names:
        (directory / name).write_bytes(b"")


# ---------------------------------------------------------------------------
# parse_log_file
# ---------------------------------------------------------------------------


def test_parse_utf16le_log_file(tmp_path: Path) -> None:
    """A UTF-16LE log with a BOM must parse into combat events."""
    path = tmp_path / "20240115_202958_123456.txt"
    path.write_bytes("\ufeff".encode("utf-16-le") + _LOG_TEXT.encode("utf-16-le"))

    events = parse_log_file(path)
    assert [e.event_type for e in events] == [EventType.DAMAGE_DEALT, EventType.MISS]
    assert events[0].damage == 50, "damage must survive UTF-16 decoding"
    assert events[0].weapon == "Railgun"
    assert events[1].target == "you", "incoming miss must target you"


def test_parse_log_file_missing_raises(tmp_path: Path) -> None:
    """A missing log file must raise FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        parse_log_file(tmp_path / "missing.txt")


# ---------------------------------------------------------------------------
# find_recent_logs
# ---------------------------------------------------------------------------


def test_recent_logs_sorted_newest_first(tmp_path: Path) -> None:
    """Logs must sort by filename timestamp with others last."""
    _touch(
        tmp_path,
        "20240115_203000_1.txt",
        "notes.txt",
        "20240220_101500_1.txt",
        "20231231_235959_2.txt",
        "20240301_000000_1.log",
    )
    paths = find_recent_logs(tmp_path)
    assert [p.name for p in paths] == [
        "20240220_101500_1.txt",
        "20240115_203000_1.txt",
        "20231231_235959_2.txt",
        "notes.txt",
    ]
    assert all(p.parent == tmp_path for p in paths), (
        "paths must be inside the directory"
    )


def test_recent_logs_respects_limit(tmp_path: Path) -> None:
    """At most limit paths must be returned."""
    _touch(
        tmp_path,
        "20240101_000000_1.txt",
        "20240102_000000_1.txt",
        "20240103_000000_1.txt",
    )
    paths = find_recent_logs(tmp_path, limit=2)
    assert [p.name for p in paths] == [
        "20240103_000000_1.txt",
        "20240102_000000_1.txt",
    ]
    assert find_recent_logs(tmp_path, limit=0) == [], "zero limit must give no paths"


def test_recent_logs_missing_directory(tmp_path: Path) -> None:
    """Listing failures degrade to an empty result."""
    assert find_recent_logs(tmp_path / "does-not-exist") == [], (
        "missing directory must give no paths"
    )


def test_recent_logs_on_a_file_path(tmp_path: Path) -> None:
    """Listing a file instead of a directory must give no logs."""
    target = tmp_path / "20240101_000000_1.txt"
    target.write_bytes(b"")
    assert find_recent_logs(target) == [], "a file path must give no paths"
