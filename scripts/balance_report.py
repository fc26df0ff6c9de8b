#!/usr/bin/env python3
"""
Balance report for Trait Titans PvP.
Runs many seeded battles between two stat lines and compares the
observed win rate with predict_battle_outcome.

Run: python scripts/balance_report.py [battles] [--a S SP W] [--b S SP W]
"""

import argparse
import random
import sys
from collections import Counter
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.battle import predict_battle_outcome
from src.core.pvp import execute_battle
from src.models.combatant import Combatant


def balance_report(a: Combatant, b: Combatant, battles: int = 1000) -> dict:
    """Simulate `battles` fights with seeds 0..n-1 and tally results."""
    wins = Counter()
    rounds = Counter()
    for seed in range(battles):
        outcome = execute_battle(a, b, random.Random(seed))
        wins[outcome.winner_id] += 1
        rounds[outcome.rounds] += 1

    return {
        "battles": battles,
        "a_win_rate": wins[a.ident] / battles,
        "predicted": predict_battle_outcome(a, b).win_chance,
        "rounds": dict(sorted(rounds.items())),
    }


def _combatant(name: str, stats: list[int]) -> Combatant:
    strength, speed, wisdom = stats
    return Combatant(name=name, strength=strength, speed=speed, wisdom=wisdom)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="PvP balance report")
    parser.add_argument("battles", nargs="?", type=int, default=1000)
    parser.add_argument("--a", nargs=3, type=int, default=[15, 10, 10])
    parser.add_argument("--b", nargs=3, type=int, default=[10, 10, 15])
    args = parser.parse_args()

    a = _combatant("Side A", args.a)
    b = _combatant("Side B", args.b)
    report = balance_report(a, b, args.battles)

    print("=== PvP Balance Report ===")
    print(f"  A: STR {a.strength} SPD {a.speed} WIS {a.wisdom}")
    print(f"  B: STR {b.strength} SPD {b.speed} WIS {b.wisdom}")
    print(f"  Battles: {report['battles']}")
    print(f"  A win rate: {report['a_win_rate']:.1%} (predicted {report['predicted']:.0%})")
    print("  Rounds:")
    for n, count in report["rounds"].items():
        print(f"    {n}: {count}")
