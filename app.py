from __future__ import annotations

import logging
import os
import threading
import uuid
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    ConfigurationError,
    GameState,
    InvalidArgument,
)

logger = logging.getLogger(__name__)

DEFAULT_SIZE = int(os.getenv("FLIP_GRID_SIZE", "4"))
MISMATCH_DELAY_MS = int(os.getenv("FLIP_MISMATCH_DELAY_MS", "500"))
MAX_GAMES = int(os.getenv("FLIP_MAX_GAMES", "1000"))

app = Flask(__name__)

# Games live only as long as the process; nothing is persisted.
# Least recently used games are dropped once MAX_GAMES is exceeded.
_games: "OrderedDict[str, GameState]" = OrderedDict()
_games_lock = threading.Lock()


def _error(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": message}), status


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _opt_int(body: Dict[str, Any], key: str) -> Optional[int]:
    raw = body.get(key, None)
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{key} must be an integer, got {raw!r}")
    return raw


def _game_id(body: Dict[str, Any]) -> Optional[str]:
    game_id = body.get("gameId")
    return game_id if isinstance(game_id, str) else None


def _get_locked(game_id: Optional[str]) -> Optional[GameState]:
    """Looks up a game and marks it recently used. Caller must hold _games_lock."""
    if game_id is None or game_id not in _games:
        return None
    _games.move_to_end(game_id)
    return _games[game_id]


def _store_locked(game_id: str, game: GameState) -> None:
    """Stores a game, evicting the least recently used ones past MAX_GAMES. Caller must hold _games_lock."""
    _games[game_id] = game
    _games.move_to_end(game_id)
    while len(_games) > max(MAX_GAMES, 1):
        old_id, _ = _games.popitem(last=False)
        logger.info("evicted game %s", old_id)


def _game_json(game_id: str, game: GameState) -> Dict[str, Any]:
    return {"ok": True, "gameId": game_id, "view": game.current_view().to_json()}


# ---------- Game API ----------

@app.get("/api/config")
def api_config() -> Any:
    return jsonify({
        "ok": True,
        "defaultSize": DEFAULT_SIZE,
        "mismatchDelayMs": MISMATCH_DELAY_MS,
        "maxGames": MAX_GAMES,
        "triesLabel": "Tries: {tries}",
    })


@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    try:
        size = _opt_int(body, "size")
        seed = _opt_int(body, "seed")
    except ValueError as e:
        return _error(f"bad request: {e}", 400)
    try:
        game = GameState(DEFAULT_SIZE if size is None else size, seed=seed)
    except ConfigurationError as e:
        return _error(str(e), 400)
    game_id = uuid.uuid4().hex
    with _games_lock:
        _store_locked(game_id, game)
        resp = _game_json(game_id, game)
    logger.info("new game %s (%dx%d)", game_id, game.grid_size, game.grid_size)
    resp["mismatchDelayMs"] = MISMATCH_DELAY_MS
    return jsonify(resp)


@app.post("/api/select")
def api_select() -> Any:
    body = _body()
    game_id = _game_id(body)
    index = body.get("index")
    with _games_lock:
        game = _get_locked(game_id)
        if game is None:
            return _error("unknown game", 404)
        if isinstance(index, bool) or not isinstance(index, int):
            return _error("index must be an integer", 400)
        try:
            result = game.select_tile(index)
        except InvalidArgument as e:
            return _error(str(e), 400)
        view = game.current_view()
    return jsonify({"ok": True, "gameId": game_id, "result": result.to_json(), "view": view.to_json()})


@app.post("/api/resolve")
def api_resolve() -> Any:
    body = _body()
    game_id = _game_id(body)
    with _games_lock:
        game = _get_locked(game_id)
        if game is None:
            return _error("unknown game", 404)
        resolved = game.resolve_mismatch()
        view = game.current_view()
    return jsonify({"ok": True, "gameId": game_id, "resolved": resolved, "view": view.to_json()})


@app.post("/api/restart")
def api_restart() -> Any:
    body = _body()
    game_id = _game_id(body)
    try:
        size = _opt_int(body, "size")
        seed = _opt_int(body, "seed")
    except ValueError as e:
        return _error(f"bad request: {e}", 400)
    with _games_lock:
        game = _get_locked(game_id)
        if game is None or game_id is None:
            return _error("unknown game", 404)
        try:
            if seed is not None:
                # A seeded restart gets a fresh GameState so the deal is reproducible.
                game = GameState(game.grid_size if size is None else size, seed=seed)
                _store_locked(game_id, game)
            else:
                game.restart(size)
        except ConfigurationError as e:
            return _error(str(e), 400)
        resp = _game_json(game_id, game)
    logger.info("restarted game %s (%dx%d)", game_id, game.grid_size, game.grid_size)
    return jsonify(resp)


@app.post("/api/view")
def api_view() -> Any:
    body = _body()
    game_id = _game_id(body)
    with _games_lock:
        game = _get_locked(game_id)
        if game is None or game_id is None:
            return _error("unknown game", 404)
        return jsonify(_game_json(game_id, game))


@app.post("/api/delete")
def api_delete() -> Any:
    body = _body()
    game_id = _game_id(body)
    with _games_lock:
        if game_id is None or _games.pop(game_id, None) is None:
            return _error("unknown game", 404)
    logger.info("deleted game %s", game_id)
    return jsonify({"ok": True, "gameId": game_id})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
