#!/usr/bin/env python
"""Summarise the most recent combat logs in a game log directory.

This script orchestrates the batch workflow:

1. Find the newest ``*.txt`` combat logs in the log directory.
2. Parse each log (UTF-16LE) into combat events.
3. Aggregate per-log and combined statistics.
4. Save results to ``results/latest_log_summary.json``.
5. Print a structured summary.

Usage
-----
::

    python scripts/summarize_recent_logs.py [LOG_DIR] [LIMIT]

``LOG_DIR`` defaults to the ``RRA_LOG_DIR`` environment variable, then to
``~/Documents/EVE/logs/Gamelogs``.
"""

from __future__ import annotations

import json
import os
import sys

# Ensure the project root is on the import path.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from rra_engine.api import stats_to_dict  # noqa: E402
from rra_engine.config import DEFAULT_LOG_LIMIT  # noqa: E402
from rra_engine.log_parsing.events import CombatEvent  # noqa: E402
from rra_engine.log_parsing.files import (  # noqa: E402
    find_recent_logs,
    parse_log_file,
)
from rra_engine.log_parsing.stats import calculate_stats  # noqa: E402

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DEFAULT_LOG_DIR: str = os.environ.get(
    "RRA_LOG_DIR",
    os.path.join(os.path.expanduser("~"), "Documents", "EVE", "logs", "Gamelogs"),
)
RESULTS_DIR: str = os.path.join(_project_root, "results")
OUTPUT_PATH: str = os.path.join(RESULTS_DIR, "latest_log_summary.json")


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> dict[str, object]:
    """Run the recent-log summary pipeline."""
    args = sys.argv[1:] if argv is None else argv
    log_dir: str = args[0] if args else DEFAULT_LOG_DIR
    limit: int = int(args[1]) if len(args) > 1 else DEFAULT_LOG_LIMIT

    print("=" * 60)
    print("RECENT COMBAT LOG SUMMARY")
    print("=" * 60)
    print()

    # -- Step 1: Discover logs ------------------------------------------------
    print(f"[1/3] Scanning {log_dir}")
    paths = find_recent_logs(log_dir, limit)
    print(f"      {len(paths)} log files found.")
    print()

    # -- Step 2: Parse and aggregate ------------------------------------------
    print("[2/3] Parsing logs")
    per_log: dict[str, object] = {}
    all_events: list[CombatEvent] = []
    for path in paths:
        try:
            events = parse_log_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"      skipped {path.name}: {exc}")
            continue
        all_events.extend(events)
        per_log[path.name] = stats_to_dict(calculate_stats(events))
        print(f"      {path.name}: {len(events)} events")
    print()

    combined = calculate_stats(all_events)

    # -- Step 3: Save and summarise -------------------------------------------
    print("[3/3] Saving results")
    output: dict[str, object] = {
        "metadata": {"log_dir": log_dir, "limit": limit, "files": len(per_log)},
        "combined": stats_to_dict(combined),
        "logs": per_log,
    }

    os.makedirs(RESULTS_DIR, exist_ok=True)
    with open(OUTPUT_PATH, "w", encoding="utf-8") as fh:
        json.dump(output, fh, indent=2, allow_nan=False)
    print(f"      Results saved to {OUTPUT_PATH}")
    print()

    print("=" * 60)
    print("COMBINED")
    print("=" * 60)
    print(f"  Damage dealt    : {combined.total_damage_dealt}")
    print(f"  Damage received : {combined.total_damage_received}")
    print(f"  Hit rate        : {combined.hit_rate:.1f}%")
    top_targets = sorted(combined.targets.items(), key=lambda x: x[1], reverse=True)
    for rank, (target, damage) in enumerate(top_targets[:10], start=1):
        print(f"  {rank:2d}. {target:<30s}  {damage:8d}")
    print()
    print("Pipeline complete.")

    return output


if __name__ == "__main__":
    main()
