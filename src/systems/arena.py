"""
PvP arena for Trait Titans.
Challenges between wallets: resolve both players' traits, run the
autonomous battle, keep an in-memory history of results.

Traits come from an optional lookup (the game's player records). Any
wallet the lookup can't answer for gets deterministic mock traits.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Callable, Optional

from config import DEFAULT_MAX_HEALTH, DEFAULT_TRAIT_VALUE, STAT_NAMES
from src.core.pvp import execute_battle, generate_mock_traits, wallet_display_name
from src.models.combatant import Combatant

logger = logging.getLogger(__name__)


class ChallengeError(ValueError):
    """A challenge was rejected before any battle ran."""


class PvpArena:
    """Runs PvP challenges and remembers their results."""

    def __init__(
        self,
        trait_lookup: Optional[Callable[[str], Optional[dict]]] = None,
        rng=None,
    ):
        self.trait_lookup = trait_lookup
        self.rng = rng or random
        self.history: list[dict] = []

    def get_player_traits(self, wallet: str) -> Combatant:
        """Resolve a wallet's battle traits.

        Missing stats in a lookup record default to 10 and the record is
        clamped like API input. Falls back to mock traits when there is no
        lookup, it has no record, the record is unreadable, or it fails.
        """
        if self.trait_lookup is not None:
            try:
                data = self.trait_lookup(wallet)
            except Exception as e:
                logger.warning(f"Trait lookup failed for {wallet}: {e}. Using mock traits.")
                data = None

            if data:
                record = {stat: data.get(stat) or DEFAULT_TRAIT_VALUE for stat in STAT_NAMES}
                record.update(
                    name=wallet_display_name(wallet),
                    wallet=wallet,
                    experience=data.get("experience") or 0,
                    max_health=DEFAULT_MAX_HEALTH,
                )
                try:
                    return Combatant.from_dict(record)
                except (TypeError, ValueError, OverflowError) as e:
                    logger.warning(f"Bad trait record for {wallet}: {e}. Using mock traits.")
            else:
                logger.warning(f"No trait record for {wallet}. Using mock traits.")

        return generate_mock_traits(wallet)

    def challenge_player(self, challenger_wallet: str, opponent_wallet: str, rng=None) -> dict:
        """Run a PvP battle between two wallets.

        Args:
            challenger_wallet: Wallet issuing the challenge.
            opponent_wallet: Wallet being challenged.
            rng: Random source for this battle (defaults to the arena's).

        Returns:
            Dict with challenger, opponent and the BattleOutcome.

        Raises:
            ChallengeError: Missing wallet or self-challenge.
        """
        if not challenger_wallet or not opponent_wallet:
            raise ChallengeError("Both player wallets are required")
        if challenger_wallet == opponent_wallet:
            raise ChallengeError("Cannot challenge yourself")

        logger.info(f"PvP battle: {challenger_wallet} vs {opponent_wallet}")

        challenger = self.get_player_traits(challenger_wallet)
        opponent = self.get_player_traits(opponent_wallet)

        outcome = execute_battle(challenger, opponent, rng or self.rng)
        self._store_result(challenger_wallet, opponent_wallet, outcome)

        logger.info(f"PvP result: {outcome.winner_id} beat {outcome.loser_id} in {outcome.rounds} rounds")

        return {
            "success": True,
            "challenger": challenger,
            "opponent": opponent,
            "result": outcome,
        }

    def _store_result(self, challenger_wallet: str, opponent_wallet: str, outcome) -> None:
        self.history.append({
            "challenger": challenger_wallet,
            "opponent": opponent_wallet,
            "result": outcome,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    def get_battle_history(self, wallet: str) -> list[dict]:
        """All stored battles the wallet took part in, oldest first."""
        return [
            entry for entry in self.history
            if entry["challenger"] == wallet or entry["opponent"] == wallet
        ]
