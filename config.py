"""
Trait Titans Game Constants
All tunable battle values in one place. Formulas in src/core read these;
changing a number here changes game balance everywhere.
"""

# =============================================================================
# COMBATANTS
# =============================================================================

DEFAULT_MAX_HEALTH = 100
STAT_NAMES = ["strength", "speed", "wisdom", "reputation"]

# =============================================================================
# OPPONENT GENERATION
# =============================================================================

OPPONENT_NAMES = [
    "Shadow Warrior", "Iron Golem", "Swift Assassin", "Wise Sage",
    "Brutal Berserker", "Arcane Mage", "Noble Knight", "Cunning Rogue",
    "Frost Giant", "Fire Demon", "Storm Caller", "Earth Guardian",
]

OPPONENT_BASE_MIN = 5           # Floor for the shared base stat
OPPONENT_LEVEL_OFFSET = 5       # Opponents start a little under player level
OPPONENT_BASE_ROLL = 10         # base += randrange(10)
OPPONENT_VARIANCE_ROLL = 6      # variance = randrange(6) - 3 -> -3..+2
OPPONENT_VARIANCE_OFFSET = 3
OPPONENT_STAT_ROLL = 5          # Per-stat bonus for strength/speed/wisdom
OPPONENT_REPUTATION_ROLL = 3
OPPONENT_STAT_MIN = 1

# =============================================================================
# DAMAGE MODEL (interactive battles)
# =============================================================================

BASE_CRIT_CHANCE = 0.10
CRIT_MULTIPLIER = 1.5
SKILL_CRIT_MULTIPLIER = 2.0
CRIT_STAT_CAP = 100             # Crit chance += min(stat, 100) / 100

ATTACK_DAMAGE_ROLL = 10         # strength + randrange(10)
SKILL_DAMAGE_ROLL = 15          # (wisdom + strength) // 2 + randrange(15)
BASIC_DAMAGE_ROLL = 5           # strength // 2 + randrange(5)
DEFENSE_WISDOM_DIVISOR = 4      # Defender wisdom // 4 is subtracted
MIN_DAMAGE = 1

# =============================================================================
# ACTIONS
# =============================================================================

ACTIONS = ["attack", "defend", "skill"]
OPPONENT_ACTIONS = ["attack", "skill"]
SKILL_MIN_WISDOM = 5
DEFEND_DAMAGE_MULT = 0.5        # Applied to the next hit a defender takes

# Skill names by dominant stat
SKILL_POOLS = {
    "strength": ["Power Strike", "Crushing Blow", "Berserker Rage", "Mighty Swing"],
    "speed": ["Lightning Strike", "Quick Slash", "Rapid Fire", "Blitz Attack"],
    "wisdom": ["Arcane Bolt", "Mind Blast", "Wisdom Strike", "Mystic Wave"],
}

VICTORY_REWARDS = {"reputation": 2, "wisdom": 1}

# =============================================================================
# PREDICTION
# =============================================================================

BASE_WIN_CHANCE = 0.5
WIN_CHANCE_DIVISOR = 100         # Win chance += advantage / 100
SPEED_EDGE_WIN_CHANCE = 0.1
WIN_CHANCE_MIN = 0.1
WIN_CHANCE_MAX = 0.9

# Evaluated top-down, first bracket whose exclusive lower bound is beaten wins
DIFFICULTY_BRACKETS = [
    (20, "Very Easy"),
    (10, "Easy"),
    (-10, "Medium"),
    (-20, "Hard"),
]
DIFFICULTY_FLOOR = "Very Hard"

# Status effects unlock strictly above this stat value
STATUS_EFFECT_THRESHOLD = 30
STATUS_EFFECTS = [
    ("strength", "Mighty"),
    ("speed", "Swift"),
    ("wisdom", "Wise"),
    ("reputation", "Renowned"),
]

# =============================================================================
# PVP
# =============================================================================

PVP_MAX_ROUNDS = 10
PVP_STRENGTH_WEIGHT = 0.8
PVP_SPEED_WEIGHT = 0.3
PVP_WISDOM_WEIGHT = 0.2
PVP_DEFENSE_WEIGHT = 0.5        # Applied to defender wisdom
PVP_RANDOM_FACTOR_MIN = 0.8
PVP_RANDOM_FACTOR_SPAN = 0.4    # Factor lands in [0.8, 1.2)

# Trait defaults when a lookup returns a partial record
DEFAULT_TRAIT_VALUE = 10

# Mock traits for wallets with no recorded data
MOCK_TRAIT_BASE = 10
MOCK_TRAIT_ROLL = 20            # 10..29
MOCK_EXPERIENCE_ROLL = 100      # 0..99
WALLET_NAME_PREFIX_LEN = 8

# 32-bit LCG used to seed mock traits from a wallet hash
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32
