"""
Interactive battle session for Trait Titans.
One player against generated opponents, one action at a time.

Turn order: faster side first (player on equal speed), then alternate.
Defending halves the next hit the player takes, then the stance drops.
Victory grants stat rewards. Health resets to max after every battle.
"""

import logging
import math
import random
from dataclasses import replace
from typing import Optional

from config import DEFEND_DAMAGE_MULT, OPPONENT_ACTIONS, VICTORY_REWARDS
from src.core.battle import (
    can_perform_action,
    generate_battle_summary,
    generate_opponent,
    perform_action,
)
from src.models.combatant import BattleSummary, Combatant

logger = logging.getLogger(__name__)

TURN_PLAYER = "player"
TURN_OPPONENT = "opponent"

RESULT_VICTORY = "victory"
RESULT_DEFEAT = "defeat"


class BattleSession:
    """Drives interactive battles for a single player.

    The session owns a copy of the player combatant; rewards and health
    changes land on that copy, never on the caller's object.
    """

    def __init__(self, player: Combatant, rng=None):
        self.player = replace(player)
        self.rng = rng or random
        self.opponent: Optional[Combatant] = None
        self.in_battle = False
        self.turn = TURN_PLAYER
        self.is_defending = False
        self.turns_taken = 0
        self.last_summary: Optional[BattleSummary] = None
        self.log: list[tuple[str, str]] = []

    def _log(self, kind: str, message: str) -> None:
        self.log.append((kind, message))

    def find_opponent(self) -> tuple[bool, str]:
        """Start a battle against a freshly generated opponent.

        Returns:
            (success, message)
        """
        if self.in_battle:
            return False, "Already in battle."

        opponent = generate_opponent(self.player, self.rng)
        self.opponent = opponent
        self.in_battle = True
        self.is_defending = False
        self.turns_taken = 0

        self.player.health = self.player.max_health
        opponent.health = opponent.max_health

        self._log("system", f"Found opponent: {opponent.name}!")
        logger.debug(f"Battle started: {self.player.display_name} vs {opponent.name}")

        if self.player.speed >= opponent.speed:
            self.turn = TURN_PLAYER
            msg = "You go first!"
        else:
            self.turn = TURN_OPPONENT
            msg = "Opponent goes first!"
        self._log("system", msg)
        return True, msg

    def player_action(self, action: str) -> tuple[bool, str]:
        """Resolve the player's action and apply its damage.

        Args:
            action: "attack", "defend" or "skill".

        Returns:
            (success, message)
        """
        if not self.in_battle:
            return False, "Not in battle."
        if self.turn != TURN_PLAYER:
            return False, "Wait for your turn."
        if not can_perform_action(self.player, action):
            return False, f"You can't {action} right now."

        result = perform_action(self.player, self.opponent, action, self.rng)
        self._log("player", result.message)
        self.turns_taken += 1

        if result.damage > 0:
            self.opponent.health = max(0, self.opponent.health - result.damage)

        self.is_defending = action == "defend"

        if self.opponent.health <= 0:
            self._end_battle(RESULT_VICTORY)
            return True, result.message

        self.turn = TURN_OPPONENT
        return True, result.message

    def opponent_turn(self) -> tuple[bool, str]:
        """Let the opponent pick attack or skill and apply the hit.

        Returns:
            (success, message)
        """
        if not self.in_battle or self.turn != TURN_OPPONENT:
            return False, "Not the opponent's turn."

        action = self.rng.choice(OPPONENT_ACTIONS)
        result = perform_action(self.opponent, self.player, action, self.rng)
        self._log("opponent", result.message)
        self.turns_taken += 1

        damage = result.damage
        if self.is_defending:
            damage = math.floor(damage * DEFEND_DAMAGE_MULT)
            self._log("system", "Damage reduced by defending!")

        if damage > 0:
            self.player.health = max(0, self.player.health - damage)

        self.is_defending = False

        if self.player.health <= 0:
            self._end_battle(RESULT_DEFEAT)
            return True, result.message

        self.turn = TURN_PLAYER
        return True, result.message

    def _end_battle(self, result: str) -> None:
        self.last_summary = generate_battle_summary(
            self.player, self.opponent, result, self.turns_taken,
        )

        if result == RESULT_VICTORY:
            self._log("system", "Victory! You defeated your opponent!")
            for stat, value in VICTORY_REWARDS.items():
                setattr(self.player, stat, getattr(self.player, stat) + value)
        else:
            self._log("system", "Defeat! Better luck next time!")

        logger.debug(
            f"Battle ended ({result}) after {self.turns_taken} turns vs {self.opponent.name}"
        )

        self.in_battle = False
        self.opponent = None
        self.turn = TURN_PLAYER
        self.is_defending = False
        self.player.health = self.player.max_health
