from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    GameEngine,
    LedgerStore,
    Signal,
    SqliteStore,
    config_from_env,
)

DEFAULT_DB = os.getenv("MEMORY_DB", "data/memory.db")

app = Flask(__name__)


def _make_engine(db_path: str) -> GameEngine:
    return GameEngine(config_from_env(), store=LedgerStore(SqliteStore(db_path)))


# One engine per process; the high scores are read here, once, at start-up.
engine = _make_engine(DEFAULT_DB)


def _payload(signals: Tuple[Signal, ...] = ()) -> Dict[str, Any]:
    return {
        "ok": True,
        "state": engine.snapshot(),
        "signals": list(signals),
        "scores": engine.scores(),
        "rank": engine.last_rank(),
    }


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _bad_request(msg: str) -> Any:
    return jsonify({"ok": False, "error": msg}), 400


# ---------- Read-only views ----------

@app.get("/api/state")
def api_state() -> Any:
    return jsonify(_payload())


@app.get("/api/scores")
def api_scores() -> Any:
    return jsonify({"ok": True, "scores": engine.scores()})


# ---------- Commands ----------

@app.post("/api/start")
def api_start() -> Any:
    return jsonify(_payload(engine.start()))


@app.post("/api/flip")
def api_flip() -> Any:
    index: Optional[Any] = _body().get("index")
    if isinstance(index, bool) or not isinstance(index, int):
        return _bad_request("integer index required")
    return jsonify(_payload(engine.flip_card(index)))


@app.post("/api/name")
def api_name() -> Any:
    name = _body().get("name")
    if not isinstance(name, str):
        return _bad_request("name required")
    return jsonify(_payload(engine.submit_name(name)))


@app.post("/api/reset")
def api_reset() -> Any:
    return jsonify(_payload(engine.reset()))


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("MEMORY_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
