"""
Autonomous PvP battles for Trait Titans.
No player input: both sides trade blows for up to 10 rounds and the
simulator returns one assembled outcome with a full event log.

Speed decides who strikes first each round. A side knocked to 0 HP
does not counter. After the loop, higher HP wins; ties go to higher
power, then to the opponent.
"""

import math
import random
from typing import Iterator

from config import (
    LCG_INCREMENT,
    LCG_MODULUS,
    LCG_MULTIPLIER,
    MOCK_EXPERIENCE_ROLL,
    MOCK_TRAIT_BASE,
    MOCK_TRAIT_ROLL,
    PVP_DEFENSE_WEIGHT,
    PVP_MAX_ROUNDS,
    PVP_RANDOM_FACTOR_MIN,
    PVP_RANDOM_FACTOR_SPAN,
    PVP_SPEED_WEIGHT,
    PVP_STRENGTH_WEIGHT,
    PVP_WISDOM_WEIGHT,
    WALLET_NAME_PREFIX_LEN,
)
from src.models.combatant import BattleOutcome, Combatant


def calculate_pvp_damage(attacker: Combatant, defender: Combatant, rng=None) -> int:
    """Calculate one PvP strike.

    (0.8*STR + 0.3*SPD + 0.2*WIS - 0.5*defender WIS) * factor,
    factor uniform in [0.8, 1.2). Minimum 1, floored.

    Args:
        attacker: Striking side.
        defender: Struck side.
        rng: Random source.

    Returns:
        Damage dealt (always >= 1).
    """
    rng = rng or random

    offense = (
        attacker.strength * PVP_STRENGTH_WEIGHT
        + attacker.speed * PVP_SPEED_WEIGHT
        + attacker.wisdom * PVP_WISDOM_WEIGHT
    )
    defense = defender.wisdom * PVP_DEFENSE_WEIGHT
    factor = PVP_RANDOM_FACTOR_MIN + rng.random() * PVP_RANDOM_FACTOR_SPAN

    return math.floor(max(1, (offense - defense) * factor))


def _strike(attacker: Combatant, defender: Combatant, defender_hp: int,
            log: list, rng) -> int:
    """Apply one strike and log it. Returns the defender's new HP."""
    damage = calculate_pvp_damage(attacker, defender, rng)
    defender_hp = max(0, defender_hp - damage)
    log.append(
        f"{attacker.display_name} deals {damage} damage to "
        f"{defender.display_name} ({defender_hp} HP remaining)"
    )
    return defender_hp


def execute_battle(challenger: Combatant, opponent: Combatant, rng=None) -> BattleOutcome:
    """Simulate a full PvP battle.

    Both sides start at max health (at least 1). Each round the faster
    side strikes (challenger on equal speed) and the other counters if
    still standing.

    Args:
        challenger: Side that issued the challenge.
        opponent: Side being challenged.
        rng: Random source. Seeded rngs give identical outcomes.

    Returns:
        BattleOutcome with exactly one winner.
    """
    rng = rng or random
    log = []

    challenger_power = challenger.power
    opponent_power = opponent.power
    log.append(
        f"{challenger.display_name} (Power: {challenger_power}) vs "
        f"{opponent.display_name} (Power: {opponent_power})"
    )

    challenger_hp = max(1, challenger.max_health)
    opponent_hp = max(1, opponent.max_health)
    round_num = 1

    while challenger_hp > 0 and opponent_hp > 0 and round_num <= PVP_MAX_ROUNDS:
        log.append(f"--- Round {round_num} ---")

        if challenger.speed >= opponent.speed:
            opponent_hp = _strike(challenger, opponent, opponent_hp, log, rng)
            if opponent_hp > 0:
                challenger_hp = _strike(opponent, challenger, challenger_hp, log, rng)
        else:
            challenger_hp = _strike(opponent, challenger, challenger_hp, log, rng)
            if challenger_hp > 0:
                opponent_hp = _strike(challenger, opponent, opponent_hp, log, rng)

        round_num += 1

    if challenger_hp > opponent_hp:
        winner, loser = challenger, opponent
    elif opponent_hp > challenger_hp:
        winner, loser = opponent, challenger
    elif challenger_power > opponent_power:
        winner, loser = challenger, opponent
    else:
        # Full tie goes to the opponent
        winner, loser = opponent, challenger

    log.append(f"{winner.display_name} wins the battle!")

    return BattleOutcome(
        winner_id=winner.ident,
        loser_id=loser.ident,
        challenger_health=challenger_hp,
        opponent_health=opponent_hp,
        rounds=round_num - 1,
        log=tuple(log),
    )


def hash_code(text: str) -> int:
    """32-bit string hash (h = h*31 + c, wrapping), absolute value.

    Hashes UTF-16 code units, so characters outside the BMP count as
    two surrogate units.
    """
    raw = text.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(raw), 2):
        unit = raw[i] | (raw[i + 1] << 8)
        h = ((h << 5) - h + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def seeded_random(seed: int) -> Iterator[float]:
    """Endless LCG stream of floats in [0, 1) for a given seed."""
    state = seed
    while True:
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        yield state / LCG_MODULUS


def wallet_display_name(wallet: str) -> str:
    return f"Player {wallet[:WALLET_NAME_PREFIX_LEN]}..."


def generate_mock_traits(wallet: str) -> Combatant:
    """Deterministic stand-in traits for a wallet with no recorded data.

    The same wallet always yields the same stats.
    """
    stream = seeded_random(hash_code(wallet))

    def roll(span: int) -> int:
        return math.floor(next(stream) * span)

    return Combatant(
        name=wallet_display_name(wallet),
        wallet=wallet,
        strength=roll(MOCK_TRAIT_ROLL) + MOCK_TRAIT_BASE,
        speed=roll(MOCK_TRAIT_ROLL) + MOCK_TRAIT_BASE,
        wisdom=roll(MOCK_TRAIT_ROLL) + MOCK_TRAIT_BASE,
        reputation=roll(MOCK_TRAIT_ROLL) + MOCK_TRAIT_BASE,
        experience=roll(MOCK_EXPERIENCE_ROLL),
    )
