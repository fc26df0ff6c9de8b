"""
JSON API endpoints for the battle client.
Stateless apart from the app's PvP arena history.
"""
import random
from dataclasses import asdict

from flask import Blueprint, current_app, jsonify, request

from config import ACTIONS
from src.core.battle import (
    can_perform_action,
    generate_opponent,
    get_status_effects,
    perform_action,
    predict_battle_outcome,
)
from src.models.combatant import ActionResult, Combatant
from src.systems.arena import ChallengeError

bp = Blueprint("api", __name__)


class PayloadError(ValueError):
    """Request body is missing a field or has a malformed one."""


@bp.errorhandler(PayloadError)
@bp.errorhandler(ChallengeError)
def bad_request(e):
    return jsonify({"error": str(e)}), 400


def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise PayloadError("Expected a JSON object body")
    return data


def _combatant(data: dict, key: str) -> Combatant:
    raw = data.get(key)
    if not isinstance(raw, dict):
        raise PayloadError(f"Missing combatant '{key}'")
    try:
        return Combatant.from_dict(raw)
    except (TypeError, ValueError, OverflowError) as e:
        raise PayloadError(f"Bad combatant '{key}': {e}") from e


def _rng(data: dict):
    """A seeded generator when the body carries a seed, else None."""
    seed = data.get("seed")
    if seed is None:
        return None
    try:
        return random.Random(int(seed))
    except (TypeError, ValueError, OverflowError) as e:
        raise PayloadError(f"Bad seed: {seed!r}") from e


def _arena():
    return current_app.extensions["arena"]


@bp.route("/opponent", methods=["POST"])
def opponent():
    """Generate an opponent for the player, with a prediction."""
    data = _payload()
    player = _combatant(data, "player")
    opp = generate_opponent(player, _rng(data))
    return jsonify({
        "opponent": opp.to_dict(),
        "status_effects": get_status_effects(opp),
        "prediction": asdict(predict_battle_outcome(player, opp)),
    })


@bp.route("/action", methods=["POST"])
def action():
    """Resolve one interactive action. The client applies the damage."""
    data = _payload()
    attacker = _combatant(data, "attacker")
    defender = _combatant(data, "defender")
    act = str(data.get("action", ""))

    allowed = can_perform_action(attacker, act)
    if not allowed and act in ACTIONS:
        # Known but gated action: nothing is rolled
        result = ActionResult(message=f"Cannot use {act} right now", damage=0, action=act)
    else:
        result = perform_action(attacker, defender, act, _rng(data))
    return jsonify({"allowed": allowed, **asdict(result)})


@bp.route("/predict", methods=["POST"])
def predict():
    data = _payload()
    player = _combatant(data, "player")
    opp = _combatant(data, "opponent")
    return jsonify(asdict(predict_battle_outcome(player, opp)))


@bp.route("/pvp", methods=["POST"])
def pvp():
    """Challenge another wallet to an autonomous battle."""
    data = _payload()
    wallets = [data.get("challenger"), data.get("opponent")]
    if any(w is not None and not isinstance(w, str) for w in wallets):
        raise PayloadError("Wallets must be strings")
    outcome = _arena().challenge_player(wallets[0], wallets[1], _rng(data))
    return jsonify({
        "success": outcome["success"],
        "challenger": outcome["challenger"].to_dict(),
        "opponent": outcome["opponent"].to_dict(),
        "result": outcome["result"].to_dict(),
    })


@bp.route("/pvp/history/<wallet>")
def pvp_history(wallet):
    entries = _arena().get_battle_history(wallet)
    return jsonify([
        {
            "challenger": e["challenger"],
            "opponent": e["opponent"],
            "result": e["result"].to_dict(),
            "timestamp": e["timestamp"],
        }
        for e in entries
    ])


@bp.route("/traits/<wallet>")
def traits(wallet):
    return jsonify(_arena().get_player_traits(wallet).to_dict())
