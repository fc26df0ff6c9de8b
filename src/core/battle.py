"""
Battle resolution for Trait Titans.
Opponent generation, the per-action damage model, skill naming, action
resolution and outcome prediction. Every function is stateless: callers
pass combatant snapshots in and apply the returned results themselves.

Randomness comes from an optional rng argument (random.Random or anything
with random/randrange/choice). Defaults to the module-level generator.
"""

import math
import random
from fractions import Fraction

from config import (
    ATTACK_DAMAGE_ROLL,
    BASE_CRIT_CHANCE,
    BASE_WIN_CHANCE,
    BASIC_DAMAGE_ROLL,
    CRIT_MULTIPLIER,
    CRIT_STAT_CAP,
    DEFAULT_MAX_HEALTH,
    DEFENSE_WISDOM_DIVISOR,
    DIFFICULTY_BRACKETS,
    DIFFICULTY_FLOOR,
    MIN_DAMAGE,
    OPPONENT_BASE_MIN,
    OPPONENT_BASE_ROLL,
    OPPONENT_LEVEL_OFFSET,
    OPPONENT_NAMES,
    OPPONENT_REPUTATION_ROLL,
    OPPONENT_STAT_MIN,
    OPPONENT_STAT_ROLL,
    OPPONENT_VARIANCE_OFFSET,
    OPPONENT_VARIANCE_ROLL,
    SKILL_CRIT_MULTIPLIER,
    SKILL_DAMAGE_ROLL,
    SKILL_MIN_WISDOM,
    SKILL_POOLS,
    SPEED_EDGE_WIN_CHANCE,
    STATUS_EFFECT_THRESHOLD,
    STATUS_EFFECTS,
    WIN_CHANCE_DIVISOR,
    WIN_CHANCE_MAX,
    WIN_CHANCE_MIN,
)
from src.models.combatant import (
    ActionResult,
    BattleSummary,
    Combatant,
    DamageResult,
    Prediction,
)

CRITICAL_SUFFIX = " (CRITICAL HIT!)"


def generate_opponent(player: Combatant, rng=None) -> Combatant:
    """Generate a random opponent scaled to the player's level.

    Level = average of the four core stats. A shared base stat is rolled
    around the level, then each core stat gets its own bonus roll.
    All four stats are clamped to >= 1.

    Args:
        player: The player's current stats.
        rng: Random source.

    Returns:
        A fresh Combatant at full health.
    """
    rng = rng or random

    name = rng.choice(OPPONENT_NAMES)
    player_level = (
        player.strength + player.speed + player.wisdom + player.reputation
    ) // 4

    base_stats = max(
        OPPONENT_BASE_MIN,
        player_level - OPPONENT_LEVEL_OFFSET + rng.randrange(OPPONENT_BASE_ROLL),
    )
    variance = rng.randrange(OPPONENT_VARIANCE_ROLL) - OPPONENT_VARIANCE_OFFSET

    def roll_stat() -> int:
        return max(
            OPPONENT_STAT_MIN,
            base_stats + variance + rng.randrange(OPPONENT_STAT_ROLL),
        )

    strength = roll_stat()
    speed = roll_stat()
    wisdom = roll_stat()
    reputation = max(
        OPPONENT_STAT_MIN,
        base_stats + rng.randrange(OPPONENT_REPUTATION_ROLL),
    )

    return Combatant(
        name=name,
        strength=strength,
        speed=speed,
        wisdom=wisdom,
        reputation=reputation,
        health=DEFAULT_MAX_HEALTH,
        max_health=DEFAULT_MAX_HEALTH,
    )


def calculate_damage(
    attacker: Combatant, defender: Combatant,
    action_type: str = "attack", rng=None,
) -> DamageResult:
    """Calculate damage for one interactive action.

    attack: strength + roll(10), crit chance +speed%, x1.5 on crit.
    skill:  (wisdom + strength) // 2 + roll(15), crit chance +wisdom%, x2.0.
    other:  strength // 2 + roll(5), base crit chance, x1.5.

    Defender wisdom // 4 is subtracted before the crit roll, minimum 1.

    Args:
        attacker: Acting combatant.
        defender: Receiving combatant.
        action_type: "attack", "skill", or anything else for a basic hit.
        rng: Random source.

    Returns:
        DamageResult (damage always >= 1).
    """
    rng = rng or random

    crit_chance = BASE_CRIT_CHANCE
    crit_mult = CRIT_MULTIPLIER

    if action_type == "attack":
        base = attacker.strength + rng.randrange(ATTACK_DAMAGE_ROLL)
        crit_chance += min(attacker.speed, CRIT_STAT_CAP) / 100
    elif action_type == "skill":
        base = (attacker.wisdom + attacker.strength) // 2 + rng.randrange(SKILL_DAMAGE_ROLL)
        crit_chance += min(attacker.wisdom, CRIT_STAT_CAP) / 100
        crit_mult = SKILL_CRIT_MULTIPLIER
    else:
        base = attacker.strength // 2 + rng.randrange(BASIC_DAMAGE_ROLL)

    reduction = defender.wisdom // DEFENSE_WISDOM_DIVISOR
    damage = max(MIN_DAMAGE, base - reduction)

    is_critical = rng.random() < crit_chance
    if is_critical:
        damage = math.floor(damage * Fraction(crit_mult))

    return DamageResult(damage=damage, is_critical=is_critical)


def get_random_skill_name(combatant: Combatant, rng=None) -> str:
    """Pick a skill name from the pool of the combatant's highest stat.

    Ties go strength, then speed, then wisdom.
    """
    rng = rng or random

    highest = max(combatant.strength, combatant.speed, combatant.wisdom)
    if combatant.strength == highest:
        pool = SKILL_POOLS["strength"]
    elif combatant.speed == highest:
        pool = SKILL_POOLS["speed"]
    else:
        pool = SKILL_POOLS["wisdom"]
    return rng.choice(pool)


def _verb(combatant: Combatant, verb: str) -> str:
    """'Iron Golem attacks' for named combatants, 'You attack' otherwise."""
    if combatant.name:
        return f"{combatant.name} {verb}s"
    return f"You {verb}"


def perform_action(
    attacker: Combatant, defender: Combatant, action: str, rng=None,
) -> ActionResult:
    """Resolve one interactive action without applying it.

    Defending deals no damage; halving the next incoming hit is the
    caller's job. Unknown actions return an "Invalid action" no-op.

    Args:
        attacker: Acting combatant.
        defender: Target combatant.
        action: "attack", "defend" or "skill".
        rng: Random source.

    Returns:
        ActionResult with message and damage for the caller to apply.
    """
    if action == "attack":
        result = calculate_damage(attacker, defender, "attack", rng)
        message = f"{_verb(attacker, 'attack')} for {result.damage} damage"
        if result.is_critical:
            message += CRITICAL_SUFFIX
        return ActionResult(message=message, damage=result.damage, action=action)

    if action == "defend":
        message = f"{_verb(attacker, 'take')} a defensive stance"
        return ActionResult(message=message, damage=0, action=action)

    if action == "skill":
        result = calculate_damage(attacker, defender, "skill", rng)
        skill_name = get_random_skill_name(attacker, rng)
        message = f"{_verb(attacker, 'use')} {skill_name} for {result.damage} damage"
        if result.is_critical:
            message += CRITICAL_SUFFIX
        return ActionResult(message=message, damage=result.damage, action=action)

    return ActionResult(message="Invalid action", damage=0, action=action)


def can_perform_action(combatant: Combatant, action: str) -> bool:
    """Attack and defend are always available; skills need wisdom >= 5."""
    if action in ("attack", "defend"):
        return True
    if action == "skill":
        return combatant.wisdom >= SKILL_MIN_WISDOM
    return False


def get_difficulty_rating(stat_difference: int) -> str:
    """Map a power difference (player - opponent) to a difficulty label."""
    for lower_bound, label in DIFFICULTY_BRACKETS:
        if stat_difference > lower_bound:
            return label
    return DIFFICULTY_FLOOR


def predict_battle_outcome(player: Combatant, opponent: Combatant) -> Prediction:
    """Estimate the player's win chance and the fight's difficulty.

    0.5 plus 1% per point of power advantage, +/-0.1 for a speed edge,
    clamped to [0.1, 0.9] last.
    """
    advantage = player.power - opponent.power
    # Past +/-100 the clamp decides anyway
    capped = max(-WIN_CHANCE_DIVISOR, min(WIN_CHANCE_DIVISOR, advantage))

    win_chance = BASE_WIN_CHANCE + capped / WIN_CHANCE_DIVISOR
    if player.speed > opponent.speed:
        win_chance += SPEED_EDGE_WIN_CHANCE
    elif player.speed < opponent.speed:
        win_chance -= SPEED_EDGE_WIN_CHANCE

    win_chance = max(WIN_CHANCE_MIN, min(WIN_CHANCE_MAX, win_chance))

    return Prediction(
        win_chance=win_chance,
        difficulty=get_difficulty_rating(advantage),
    )


def generate_battle_summary(
    player: Combatant, opponent: Combatant, winner: str, total_turns: int,
) -> BattleSummary:
    """Summarize a finished interactive battle from final health values."""
    return BattleSummary(
        winner=winner,
        total_turns=total_turns,
        player_damage_dealt=opponent.max_health - opponent.health,
        opponent_damage_dealt=player.max_health - player.health,
        player_health_remaining=player.health,
        opponent_health_remaining=opponent.health,
    )


def get_status_effects(combatant: Combatant) -> list[str]:
    """Titles earned by stats above the status threshold."""
    return [
        effect for stat, effect in STATUS_EFFECTS
        if getattr(combatant, stat) > STATUS_EFFECT_THRESHOLD
    ]
