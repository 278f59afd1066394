"""Minimal Flask API exposing Klondike game sessions to a UI.

Sessions live in process memory only and are lost on restart.  At most
``MAX_SESSIONS`` games are kept; creating one more evicts the oldest.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict

from flask import Flask, jsonify, request

from klondike.rules import resolve_profile
from klondike.scoring import calculate_progress, format_elapsed_time, format_score
from klondike.session import ActionError, GameSession
from klondike.state import (
    GameState,
    Move,
    Result,
    location_from_dict,
    move_to_dict,
    state_to_dict,
)

LOGGER = logging.getLogger("server")

MAX_SESSIONS = 256

SESSIONS: Dict[str, GameSession] = {}

app = Flask(__name__)


class SessionNotFound(KeyError):
    """Raised when a request names a session that does not exist."""


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise SessionNotFound(game_id) from exc


def _parse_seed(payload: Dict[str, Any]) -> int | None:
    seed = payload.get("seed")
    if seed is None:
        return None
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise ValueError(f"seed has invalid type: {type(seed).__name__}")
    return seed


def _session_payload(game_id: str, session: GameSession) -> Dict[str, Any]:
    state = session.game_state
    mode = session.profile.scoring_mode
    return {
        "id": game_id,
        "state": state_to_dict(state),
        "can_undo": session.can_undo(),
        "can_redo": session.can_redo(),
        "progress": calculate_progress(state),
        "score_display": format_score(state.stats.score, mode),
        "elapsed_display": format_elapsed_time(state.stats.elapsed_seconds),
        "profile": session.profile.to_dict(),
    }


def _action_outcome(outcome: Any) -> Dict[str, Any]:
    if isinstance(outcome, Result):
        return {"applied": outcome.ok, "error": outcome.error}
    if isinstance(outcome, Move):
        return {"applied": False, "move": move_to_dict(outcome)}
    if isinstance(outcome, GameState):
        return {"applied": True}
    return {"applied": bool(outcome)}


@app.errorhandler(SessionNotFound)
def handle_missing_session(exc: SessionNotFound):
    return jsonify({"error": "game not found"}), 404


@app.post("/api/games")
def create_game():
    payload = request.get_json(silent=True) or {}
    try:
        seed = _parse_seed(payload)
        profile = resolve_profile(payload.get("profile")).validated()
    except (TypeError, ValueError) as exc:
        return jsonify({"error": str(exc)}), 400

    game_id = uuid.uuid4().hex
    session = GameSession(profile, seed=seed)
    while SESSIONS and len(SESSIONS) >= MAX_SESSIONS:
        oldest = next(iter(SESSIONS))
        del SESSIONS[oldest]
        LOGGER.info("Evicted game %s", oldest)
    SESSIONS[game_id] = session
    LOGGER.info("Created game %s (seed=%s)", game_id, seed)
    return jsonify(_session_payload(game_id, session)), 201


@app.get("/api/games/<game_id>")
def get_game(game_id: str):
    session = _get_session(game_id)
    return jsonify(_session_payload(game_id, session))


@app.post("/api/games/<game_id>/actions")
def post_action(game_id: str):
    session = _get_session(game_id)
    payload = request.get_json(silent=True) or {}
    try:
        if str(payload.get("type", "")).upper() == "TICK":
            session.tick(payload.get("elapsed_seconds", 0))
            outcome: Any = True
        else:
            outcome = session.dispatch(payload)
    except (ActionError, TypeError, ValueError) as exc:
        return jsonify({"error": str(exc)}), 400

    response = _session_payload(game_id, session)
    response.update(_action_outcome(outcome))
    return jsonify(response)


@app.get("/api/games/<game_id>/hint")
def get_hint(game_id: str):
    session = _get_session(game_id)
    try:
        location = location_from_dict(request.args)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    move = session.best_move(location)
    if move is None:
        return jsonify({"move": None})
    return jsonify({"move": move_to_dict(move)})


@app.delete("/api/games/<game_id>")
def delete_game(game_id: str):
    _get_session(game_id)
    del SESSIONS[game_id]
    LOGGER.info("Closed game %s", game_id)
    return jsonify({"status": "closed"})


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(host="0.0.0.0", port=5000, debug=True)
