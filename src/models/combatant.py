"""
Combatant and battle result types for Trait Titans.
Combatants are plain values supplied by the caller on every call.
Results are created fresh per action or battle and never shared.
"""

from dataclasses import asdict, dataclass, field
from typing import Optional

from config import DEFAULT_MAX_HEALTH, STAT_NAMES


# camelCase keys sent by the browser client
_ALIASES = {
    "maxHealth": "max_health",
}


@dataclass
class Combatant:
    """A stat-bearing participant in a battle."""
    name: str = ""
    strength: int = 0
    speed: int = 0
    wisdom: int = 0
    reputation: int = 0
    health: int = DEFAULT_MAX_HEALTH
    max_health: int = DEFAULT_MAX_HEALTH
    wallet: Optional[str] = None
    experience: int = 0

    @property
    def display_name(self) -> str:
        return self.name or self.wallet or "You"

    @property
    def ident(self) -> str:
        """Identity reference used in battle outcomes."""
        return self.wallet or self.name

    @property
    def power(self) -> int:
        return self.strength + self.speed + self.wisdom

    @classmethod
    def from_dict(cls, data: dict) -> "Combatant":
        """Build a combatant from a JSON-ish dict.

        Accepts snake_case or camelCase keys. Stats are coerced to int and
        negative values clamped to 0; max_health is at least 1 and health is
        clamped to [0, max_health].

        Raises:
            ValueError, TypeError, OverflowError: If a numeric field is not
                a finite number.
        """
        data = {_ALIASES.get(k, k): v for k, v in (data or {}).items()}

        stats = {}
        for stat in STAT_NAMES + ["experience"]:
            stats[stat] = max(0, int(data.get(stat, 0) or 0))

        max_health = max(1, int(data.get("max_health", DEFAULT_MAX_HEALTH)))
        health = int(data.get("health", max_health))
        health = max(0, min(max_health, health))

        wallet = data.get("wallet") or None
        return cls(
            name=str(data.get("name") or ""),
            health=health,
            max_health=max_health,
            wallet=wallet,
            **stats,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DamageResult:
    """Outcome of one damage roll."""
    damage: int          # Always >= 1
    is_critical: bool


@dataclass
class ActionResult:
    """Outcome of one interactive action. Caller applies the damage."""
    message: str
    damage: int
    action: str


@dataclass
class Prediction:
    win_chance: float    # Clamped to [0.1, 0.9]
    difficulty: str


@dataclass
class BattleSummary:
    """End-of-battle numbers for an interactive battle."""
    winner: str
    total_turns: int
    player_damage_dealt: int
    opponent_damage_dealt: int
    player_health_remaining: int
    opponent_health_remaining: int


@dataclass(frozen=True)
class BattleOutcome:
    """Result of one autonomous PvP battle."""
    winner_id: str
    loser_id: str
    challenger_health: int
    opponent_health: int
    rounds: int              # 1..PVP_MAX_ROUNDS
    log: tuple = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["log"] = list(self.log)
        return data
