"""CLI entrypoint for the RRA turret and combat-log engine."""

from __future__ import annotations

import argparse
import logging
import math
import sys

from rra_engine import __version__
from rra_engine.config import load_presets
from rra_engine.core.hit_model import calculate_hit_chance, calculate_max_transversal
from rra_engine.core.presets import inverse_parameters, turret_parameters
from rra_engine.log_parsing.files import parse_log_file
from rra_engine.log_parsing.stats import calculate_stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Turret hit chance and combat logs")
    parser.add_argument("log", nargs="?", help="Optional UTF-16 combat log to summarise")
    parser.add_argument("--turret", default="250mm Railgun II")
    parser.add_argument("--signature", default="Cruiser")
    parser.add_argument("--distance", type=float, default=20000.0)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _format_speed(value: float) -> str:
    return f"{value:10.1f}" if math.isfinite(value) else f"{'unbounded':>10}"


def main(argv: list[str] | None = None) -> None:
    """Print a hit-chance table and, optionally, a combat log summary."""
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    print(f"RRA Turret Engine v{__version__}")
    print("=" * 56)

    # -- Presets --------------------------------------------------------------
    catalog = load_presets()
    turret = catalog.turret(args.turret)
    signature = catalog.signature(args.signature)

    print(f"\nTurret    : {turret.name}")
    print(f"Target    : {signature.name} ({signature.radius:.0f} m signature)")
    print(f"Distance  : {args.distance:.0f} m")
    print("-" * 56)

    # -- Hit chance by transversal ---------------------------------------------
    print(f"\n  {'Transversal':>11}  {'Angular':>10}  {'Hit %':>7}")
    print(f"  {'-----------':>11}  {'----------':>10}  {'-------':>7}")
    for transversal in (0.0, 100.0, 250.0, 500.0, 1000.0, 2000.0):
        result = calculate_hit_chance(
            turret_parameters(turret, signature, transversal, args.distance)
        )
        print(
            f"  {transversal:11.0f}  {result.angular_velocity_mrad:7.2f} mr"
            f"  {result.hit_chance_percent:7.2f}"
        )

    max_v = calculate_max_transversal(
        inverse_parameters(turret, signature, 0.5, args.distance)
    )
    print(f"\nMax transversal for 50% hit chance: {_format_speed(max_v)} m/s")

    # -- Combat log -----------------------------------------------------------
    if args.log:
        events = parse_log_file(args.log)
        stats = calculate_stats(events)
        print(f"\nCombat log: {args.log}")
        print("-" * 56)
        print(f"  Events           : {len(events)}")
        print(f"  Damage dealt     : {stats.total_damage_dealt}")
        print(f"  Damage received  : {stats.total_damage_received}")
        print(f"  Hits / misses    : {stats.shots_hit} / {stats.shots_missed}")
        print(f"  Hit rate         : {stats.hit_rate:.1f}%")
        if stats.dps is not None:
            print(f"  DPS              : {stats.dps:.1f}")
        for name, ws in stats.weapons.items():
            print(f"    {name:<28s} {ws.damage:8d} dmg  {ws.hits:4d}h {ws.misses:4d}m")


if __name__ == "__main__":
    sys.exit(main() or 0)
