"""Tests for interactive battle resolution."""

import random
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import OPPONENT_NAMES, SKILL_POOLS
from src.core.battle import (
    calculate_damage,
    can_perform_action,
    generate_battle_summary,
    generate_opponent,
    get_difficulty_rating,
    get_random_skill_name,
    get_status_effects,
    perform_action,
    predict_battle_outcome,
)
from src.models.combatant import Combatant
from tests.helpers import FixedRandom


@pytest.fixture
def attacker():
    return Combatant(strength=20, speed=5, wisdom=10, reputation=5)


@pytest.fixture
def defender():
    return Combatant(name="Iron Golem", strength=10, speed=10, wisdom=8, reputation=5)


# --- Damage model ---


def test_attack_damage_no_crit(attacker, defender):
    """20 STR + 0 roll - 8//4 defense = 18."""
    result = calculate_damage(attacker, defender, "attack", FixedRandom(0.99))
    assert result.damage == 18
    assert result.is_critical is False


def test_skill_damage_no_crit(attacker, defender):
    """(10 WIS + 20 STR)//2 + 0 roll - 2 = 13."""
    result = calculate_damage(attacker, defender, "skill", FixedRandom(0.99))
    assert result.damage == 13
    assert result.is_critical is False


def test_basic_damage_for_unknown_type(attacker, defender):
    """20//2 + 0 - 2 = 8."""
    result = calculate_damage(attacker, defender, "kick", FixedRandom(0.99))
    assert result.damage == 8
    assert result.is_critical is False


def test_attack_crit_multiplier(attacker, defender):
    result = calculate_damage(attacker, defender, "attack", FixedRandom(0.0))
    assert result.is_critical
    assert result.damage == 27  # floor(18 * 1.5)


def test_skill_crit_multiplier(attacker, defender):
    result = calculate_damage(attacker, defender, "skill", FixedRandom(0.0))
    assert result.is_critical
    assert result.damage == 26  # 13 * 2


def test_crit_chance_scales_with_speed(defender):
    """Attack crit chance is 0.10 + speed/100."""
    fast = Combatant(strength=10, speed=40, wisdom=1)
    assert calculate_damage(fast, defender, "attack", FixedRandom(0.49)).is_critical
    assert not calculate_damage(fast, defender, "attack", FixedRandom(0.5)).is_critical


def test_basic_hit_uses_base_crit_chance(defender):
    fast = Combatant(strength=10, speed=90, wisdom=90)
    assert calculate_damage(fast, defender, "basic", FixedRandom(0.09)).is_critical
    assert not calculate_damage(fast, defender, "basic", FixedRandom(0.1)).is_critical


def test_one_crit_roll_per_hit(attacker, defender):
    rng = FixedRandom(0.99)
    calculate_damage(attacker, defender, "attack", rng)
    assert rng.float_draws == 1


def test_damage_minimum():
    """Damage is always at least 1, even against huge wisdom."""
    weak = Combatant(strength=0, speed=0, wisdom=0)
    wall = Combatant(wisdom=400)
    rng = random.Random(42)
    for action_type in ("attack", "skill", "basic"):
        for _ in range(200):
            result = calculate_damage(weak, wall, action_type, rng)
            assert isinstance(result.damage, int)
            assert result.damage >= 1


def test_damage_property_random_stats():
    rng = random.Random(7)
    for _ in range(500):
        a = Combatant(strength=rng.randrange(60), speed=rng.randrange(60),
                      wisdom=rng.randrange(60))
        d = Combatant(wisdom=rng.randrange(120))
        result = calculate_damage(a, d, rng.choice(["attack", "skill", "x"]), rng)
        assert isinstance(result.damage, int)
        assert result.damage >= 1


# --- Opponent generator ---


def test_generate_opponent_fixed_rolls():
    """All-zero rolls: level 10, base 5, variance -3."""
    player = Combatant(strength=10, speed=10, wisdom=10, reputation=10)
    opp = generate_opponent(player, FixedRandom())
    assert opp.name == OPPONENT_NAMES[0]
    assert opp.strength == 2
    assert opp.speed == 2
    assert opp.wisdom == 2
    assert opp.reputation == 5
    assert opp.health == opp.max_health == 100


def test_generate_opponent_zero_player_stats():
    """Every generated stat is >= 1 for any player, including all zeros."""
    player = Combatant()
    rng = random.Random(1)
    for _ in range(300):
        opp = generate_opponent(player, rng)
        assert min(opp.strength, opp.speed, opp.wisdom, opp.reputation) >= 1
        assert opp.health == 100
        assert opp.max_health == 100
        assert opp.name in OPPONENT_NAMES


def test_generate_opponent_scales_with_level():
    rng = random.Random(3)
    strong = Combatant(strength=80, speed=80, wisdom=80, reputation=80)
    for _ in range(100):
        opp = generate_opponent(strong, rng)
        # base >= 80 - 5, variance >= -3
        assert opp.strength >= 72
        assert opp.reputation >= 75


def test_generate_opponent_does_not_touch_player():
    player = Combatant(strength=10, speed=10, wisdom=10, reputation=10)
    generate_opponent(player, random.Random(0))
    assert player == Combatant(strength=10, speed=10, wisdom=10, reputation=10)


# --- Skill naming ---


@pytest.mark.parametrize("stats,expected", [
    ((20, 10, 10), "Power Strike"),
    ((10, 20, 10), "Lightning Strike"),
    ((10, 10, 20), "Arcane Bolt"),
    ((15, 15, 15), "Power Strike"),    # strength wins every tie
    ((10, 15, 15), "Lightning Strike"),  # speed beats wisdom on a tie
])
def test_skill_name_by_highest_stat(stats, expected):
    strength, speed, wisdom = stats
    c = Combatant(strength=strength, speed=speed, wisdom=wisdom)
    assert get_random_skill_name(c, FixedRandom()) == expected


def test_skill_name_from_pool():
    rng = random.Random(5)
    c = Combatant(strength=1, speed=2, wisdom=9)
    names = {get_random_skill_name(c, rng) for _ in range(200)}
    assert names == set(SKILL_POOLS["wisdom"])


# --- Action resolution ---


def test_perform_attack_unnamed(attacker, defender):
    result = perform_action(attacker, defender, "attack", FixedRandom(0.99))
    assert result.message == "You attack for 18 damage"
    assert result.damage == 18
    assert result.action == "attack"


def test_perform_attack_named_crit(defender, attacker):
    result = perform_action(defender, attacker, "attack", FixedRandom(0.0))
    # 10 STR - 10//4 = 8, crit x1.5 = 12
    assert result.message == "Iron Golem attacks for 12 damage (CRITICAL HIT!)"
    assert result.damage == 12


def test_perform_defend(attacker, defender):
    result = perform_action(attacker, defender, "defend", FixedRandom())
    assert result.message == "You take a defensive stance"
    assert result.damage == 0

    named = perform_action(defender, attacker, "defend", FixedRandom())
    assert named.message == "Iron Golem takes a defensive stance"


def test_perform_skill(attacker, defender):
    result = perform_action(attacker, defender, "skill", FixedRandom(0.99))
    assert result.message == "You use Power Strike for 13 damage"
    assert result.damage == 13


def test_perform_invalid_action(attacker, defender):
    result = perform_action(attacker, defender, "dance", FixedRandom())
    assert result.message == "Invalid action"
    assert result.damage == 0
    assert result.action == "dance"


def test_can_perform_action():
    c = Combatant(wisdom=4)
    assert can_perform_action(c, "attack")
    assert can_perform_action(c, "defend")
    assert not can_perform_action(c, "skill")
    assert not can_perform_action(c, "dance")
    assert can_perform_action(Combatant(wisdom=5), "skill")


# --- Prediction ---


@pytest.mark.parametrize("diff,label", [
    (15, "Easy"),
    (-15, "Hard"),
    (0, "Medium"),
    (21, "Very Easy"),
    (20, "Easy"),
    (10, "Medium"),
    (-10, "Hard"),
    (-20, "Very Hard"),
])
def test_difficulty_rating(diff, label):
    assert get_difficulty_rating(diff) == label


def test_predict_clamped_high():
    player = Combatant(strength=1000)
    opp = Combatant()
    assert predict_battle_outcome(player, opp).win_chance == 0.9


def test_predict_clamped_low():
    player = Combatant()
    opp = Combatant(strength=500, speed=500)
    prediction = predict_battle_outcome(player, opp)
    assert prediction.win_chance == 0.1
    assert prediction.difficulty == "Very Hard"


def test_predict_even():
    c = Combatant(strength=10, speed=10, wisdom=10)
    prediction = predict_battle_outcome(c, c)
    assert prediction.win_chance == pytest.approx(0.5)
    assert prediction.difficulty == "Medium"


def test_predict_speed_edge():
    """Equal power, faster player gets +0.1; slower gets -0.1."""
    fast = Combatant(strength=10, speed=12, wisdom=10)
    slow = Combatant(strength=10, speed=10, wisdom=12)
    assert predict_battle_outcome(fast, slow).win_chance == pytest.approx(0.6)
    assert predict_battle_outcome(slow, fast).win_chance == pytest.approx(0.4)


def test_predict_ignores_reputation():
    a = Combatant(strength=10, speed=10, wisdom=10, reputation=90)
    b = Combatant(strength=10, speed=10, wisdom=10)
    assert predict_battle_outcome(a, b).win_chance == pytest.approx(0.5)


# --- Summary and status ---


def test_battle_summary():
    player = Combatant(health=70, max_health=100)
    opp = Combatant(name="Frost Giant", health=0, max_health=100)
    summary = generate_battle_summary(player, opp, "victory", 7)
    assert summary.winner == "victory"
    assert summary.total_turns == 7
    assert summary.player_damage_dealt == 100
    assert summary.opponent_damage_dealt == 30
    assert summary.player_health_remaining == 70
    assert summary.opponent_health_remaining == 0


def test_status_effects():
    c = Combatant(strength=31, speed=30, wisdom=50, reputation=31)
    assert get_status_effects(c) == ["Mighty", "Wise", "Renowned"]
    assert get_status_effects(Combatant(strength=30)) == []


def test_huge_stats_do_not_overflow(defender):
    giant = Combatant(strength=10 ** 400, speed=10 ** 400, wisdom=10 ** 400)
    attack = calculate_damage(giant, defender, "attack", FixedRandom(0.99))
    assert attack.is_critical
    assert attack.damage == (10 ** 400 - 2) * 3 // 2

    skill = calculate_damage(giant, defender, "skill", FixedRandom(0.99))
    assert skill.is_critical
    assert skill.damage == (10 ** 400 - 2) * 2


def test_predict_huge_power_gap():
    giant = Combatant(strength=10 ** 400)
    assert predict_battle_outcome(giant, Combatant()).win_chance == 0.9
    assert predict_battle_outcome(Combatant(), giant).win_chance == 0.1
    assert predict_battle_outcome(giant, Combatant()).difficulty == "Very Easy"
