"""
Trait Titans battle core.
Main entry point. Runs one-off battles from the terminal or serves the
JSON API for the browser client.

Usage:
    # PvP battle between two wallets
    python -m src.main --challenge WALLET_A WALLET_B --seed 7

    # Opponent for a player with STR SPD WIS REP
    python -m src.main --opponent --stats 12 9 14 6

    # JSON API
    export TITANS_WEB_PORT=5000
    python -m src.main --serve
"""

import argparse
import logging
import random
import sys

from src.core.battle import generate_opponent, get_status_effects, predict_battle_outcome
from src.models.combatant import Combatant
from src.systems.arena import ChallengeError, PvpArena
from src.web import config as web_config

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def run_challenge(challenger: str, opponent: str, seed=None) -> int:
    """Run and print one PvP battle. Returns a process exit code."""
    rng = random.Random(seed) if seed is not None else None
    arena = PvpArena(rng=rng)
    try:
        outcome = arena.challenge_player(challenger, opponent)
    except ChallengeError as e:
        logger.error(f"Challenge rejected: {e}")
        return 1

    for line in outcome["result"].log:
        print(line)
    return 0


def run_opponent(stats: list[int], seed=None) -> int:
    """Generate and print an opponent for the given player stats."""
    rng = random.Random(seed) if seed is not None else None
    strength, speed, wisdom, reputation = stats
    player = Combatant(
        strength=strength, speed=speed, wisdom=wisdom, reputation=reputation,
    )
    opp = generate_opponent(player, rng)
    prediction = predict_battle_outcome(player, opp)
    effects = get_status_effects(opp)

    print(f"{opp.name}: STR {opp.strength} SPD {opp.speed} "
          f"WIS {opp.wisdom} REP {opp.reputation} HP {opp.health}/{opp.max_health}")
    if effects:
        print(f"Status: {', '.join(effects)}")
    print(f"Win chance: {prediction.win_chance:.0%} ({prediction.difficulty})")
    return 0


def run_server() -> int:
    from src.web import create_app

    app = create_app()
    logger.info(f"Serving battle API on {web_config.WEB_HOST}:{web_config.WEB_PORT}")
    app.run(host=web_config.WEB_HOST, port=web_config.WEB_PORT)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Trait Titans battle core")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--challenge", nargs=2, metavar=("CHALLENGER", "OPPONENT"),
                      help="Run a PvP battle between two wallets")
    mode.add_argument("--opponent", action="store_true",
                      help="Generate an opponent for --stats")
    mode.add_argument("--serve", action="store_true", help="Run the JSON API")
    parser.add_argument("--stats", nargs=4, type=int, default=[10, 10, 10, 10],
                        metavar=("STR", "SPD", "WIS", "REP"),
                        help="Player stats for --opponent")
    parser.add_argument("--seed", type=int, help="Seed for reproducible battles")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.challenge:
        return run_challenge(args.challenge[0], args.challenge[1], args.seed)
    if args.opponent:
        return run_opponent([max(0, s) for s in args.stats], args.seed)
    return run_server()


if __name__ == "__main__":
    sys.exit(main())
