from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from nim_core.ai import ai_pick_move, choose_first_player
from nim_core.errors import InvalidMove, NoLegalMove
from nim_core.evaluator import evaluator_for
from nim_core.moves import apply_move, legal_moves
from nim_core.play import game_winner
from nim_core.rules import MoveSet, parse_move_set
from nim_core.state import GameState, Player, initial_state

DEFAULT_MOVES = parse_move_set(os.getenv("NIM_MOVES", "1,3,4"))
DEFAULT_PILE = int(os.getenv("NIM_DEFAULT_PILE", "20"))

logger = logging.getLogger(__name__)
app = Flask(__name__)


class PayloadError(ValueError):
    """Malformed request payload."""


def _as_int(value: Any, what: str) -> int:
    # JSON numbers like 3.9 must not be truncated into a legal move
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise PayloadError(f"{what} must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise PayloadError(f"{what} must be an integer, got {value!r}") from None


def _move_set_from(obj: Any) -> MoveSet:
    if obj is None:
        return DEFAULT_MOVES
    if isinstance(obj, str):
        return parse_move_set(obj)
    if isinstance(obj, list):
        return MoveSet(tuple(_as_int(m, "move size") for m in obj))
    raise PayloadError("moves must be a list of integers")


def state_to_json(s: GameState, move_set: MoveSet) -> Dict[str, Any]:
    return {
        "toMove": s.to_move.value,
        "remaining": int(s.remaining),
        "moves": list(move_set.sizes),
    }


def json_to_state(obj: Any) -> Tuple[GameState, MoveSet]:
    if not isinstance(obj, dict):
        raise PayloadError("state required")
    try:
        to_move = Player.parse(str(obj["toMove"]))
        remaining = _as_int(obj["remaining"], "remaining")
        move_set = _move_set_from(obj.get("moves"))
        return GameState(to_move=to_move, remaining=remaining), move_set
    except KeyError as e:
        raise PayloadError(f"bad state: missing {e}") from None
    except (TypeError, ValueError) as e:
        raise PayloadError(f"bad state: {e}") from None


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise PayloadError("JSON object body required")
    return body


def _state_payload(s: GameState, move_set: MoveSet, winner: Optional[Player] = None) -> Dict[str, Any]:
    return {
        "ok": True,
        "state": state_to_json(s, move_set),
        "legalMoves": list(legal_moves(s, move_set)),
        "winner": winner.value if winner is not None else None,
    }


@app.errorhandler(PayloadError)
def _bad_request(e: PayloadError) -> Any:
    return jsonify({"ok": False, "error": str(e)}), 400


@app.errorhandler(NoLegalMove)
def _no_legal_move(e: NoLegalMove) -> Any:
    return jsonify({"ok": False, "error": str(e)}), 400


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    if not isinstance(body, dict):
        raise PayloadError("JSON object body required")
    try:
        pile = _as_int(body.get("pile", DEFAULT_PILE), "pile")
        move_set = _move_set_from(body.get("moves"))
        first_text = str(body.get("first", Player.HUMAN.value))
        if first_text.lower() == "auto":
            first = choose_first_player(pile, evaluator_for(move_set))
        else:
            first = Player.parse(first_text)
        state = initial_state(pile, first)
    except (TypeError, ValueError) as e:
        raise PayloadError(f"bad game setup: {e}") from None
    logger.info("new game: pile=%d first=%s moves=%s", pile, first.value, move_set)
    return jsonify(_state_payload(state, move_set, game_winner(state, move_set)))


@app.post("/api/legal")
def api_legal() -> Any:
    state, move_set = json_to_state(_body().get("state"))
    return jsonify({"ok": True, "legalMoves": list(legal_moves(state, move_set))})


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    state, move_set = json_to_state(body.get("state"))
    if "move" not in body:
        raise PayloadError("move required")
    move = _as_int(body["move"], "move")
    try:
        next_state = apply_move(state, move, move_set)
    except InvalidMove as e:
        return jsonify({"ok": False, "error": str(e), "legalMoves": list(legal_moves(state, move_set))}), 400
    return jsonify(_state_payload(next_state, move_set, game_winner(next_state, move_set)))


@app.post("/api/ai")
def api_ai() -> Any:
    state, move_set = json_to_state(_body().get("state"))
    move = ai_pick_move(state, evaluator_for(move_set))
    if move is None:
        raise NoLegalMove(f"No legal move with {state.remaining} remaining")
    next_state = apply_move(state, move, move_set)
    payload = _state_payload(next_state, move_set, game_winner(next_state, move_set))
    payload["move"] = move
    return jsonify(payload)


@app.post("/api/solve")
def api_solve() -> Any:
    state, move_set = json_to_state(_body().get("state"))
    res = evaluator_for(move_set).solve(state)
    return jsonify({
        "ok": True,
        "outcome": int(res.outcome),
        "winner": res.winner.value,
        "best": res.best_move,
    })


@app.get("/api/winning_starts")
def api_winning_starts() -> Any:
    try:
        limit = int(request.args.get("limit", DEFAULT_PILE))
        first = Player.parse(request.args.get("first", Player.HUMAN.value))
        move_set = _move_set_from(request.args.get("moves"))
    except ValueError as e:
        raise PayloadError(str(e)) from None
    if limit < 0:
        raise PayloadError("limit must be >= 0")
    starts = evaluator_for(move_set).winning_starts(limit, first=first)
    return jsonify({"ok": True, "first": first.value, "limit": limit, "piles": starts})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO,
                        format="%(asctime)s - %(name)s - %(levelname)-8s - %(message)s")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
