"""Flask server exposing Go Fish bot sessions.

Lets a front end seat a bot at a real table: create a session for a
seat, push the events that seat observes, read back its belief state
and ask it for a move. Each app instance owns its own SessionStore.
"""

from __future__ import annotations

import argparse
from typing import Optional

from flask import Flask, jsonify, request

from gofish.errors import GoFishError
from gofish.moves import Ask, Draw
from ui.session import SessionStore


def move_to_json(move) -> dict:
    if isinstance(move, Draw):
        return {"type": "draw"}
    if isinstance(move, Ask):
        return {"type": "ask", "player": move.player, "rank": move.rank}
    return {"type": None}


def create_app(store: Optional[SessionStore] = None) -> Flask:
    app = Flask(__name__)
    sessions = store if store is not None else SessionStore()
    app.config["SESSIONS"] = sessions

    def lookup(session_id):
        session = sessions.get(session_id)
        if session is None:
            return None, (jsonify({"error": f"No session {session_id}"}), 404)
        return session, None

    @app.errorhandler(GoFishError)
    def game_error(err):
        return jsonify({"error": str(err), "kind": type(err).__name__}), 400

    @app.route("/api/sessions", methods=["POST"])
    def create_session():
        """Seat a bot: {"num_seats", "seat_id", "own_hand" (optional), "seed"}."""
        data = request.get_json(silent=True) or {}
        try:
            session_id = sessions.create(
                num_seats=int(data.get("num_seats", 4)),
                own_hand=data.get("own_hand"),
                seat_id=int(data.get("seat_id", 0)),
                seed=data.get("seed"),
            )
        except (TypeError, ValueError) as err:
            return jsonify({"error": str(err)}), 400
        return jsonify({
            "session": session_id,
            "belief": sessions.get(session_id).to_dict(),
        }), 201

    @app.route("/api/sessions/<session_id>")
    def belief(session_id):
        session, error = lookup(session_id)
        if error:
            return error
        return jsonify(session.to_dict())

    @app.route("/api/sessions/<session_id>/events", methods=["POST"])
    def apply_event(session_id):
        """Apply one event: {"type": "observe_ask", "asker": 0, ...}."""
        session, error = lookup(session_id)
        if error:
            return error
        data = dict(request.get_json(silent=True) or {})
        event_type = data.pop("type", None)
        try:
            session.observe(event_type, **data)
        except (TypeError, ValueError) as err:
            return jsonify({"error": str(err)}), 400
        return jsonify(session.to_dict())

    @app.route("/api/sessions/<session_id>/move")
    def suggest(session_id):
        session, error = lookup(session_id)
        if error:
            return error
        return jsonify({"move": move_to_json(session.suggest_move())})

    @app.route("/api/sessions/<session_id>", methods=["DELETE"])
    def delete(session_id):
        if not sessions.remove(session_id):
            return jsonify({"error": f"No session {session_id}"}), 404
        return jsonify({"status": "ok"})

    return app


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Go Fish bot session server")
    parser.add_argument("--port", type=int, default=5050)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    create_app().run(debug=args.debug, port=args.port)
