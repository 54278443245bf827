import os
import logging
import threading

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import LOG_FORMAT, load_settings
from controls import handle_key, handle_swipe
from data_access import HighScoreRepository
from engine import SnakeEngine
from scheduler import TimerTicker

settings = load_settings()

app = Flask(__name__)
logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

# Enable CORS for API routes so a browser front end on another origin can drive the game.
# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
CORS(app, resources={r"/api/*": {"origins": settings.allowed_origins}})

# Every engine mutation, from a request or from a timer tick, happens under this lock
game_lock = threading.RLock()
_engine = None


def get_engine() -> SnakeEngine:
    """Return the shared game session, creating it on first use."""
    global _engine
    with game_lock:
        if _engine is None:
            _engine = SnakeEngine(
                tile_count=settings.tile_count,
                high_score_store=HighScoreRepository(),
                ticker=TimerTicker(lock=game_lock),
                wall_mode=settings.wall_mode
            )
        return _engine


def _state_response(engine: SnakeEngine, **extra):
    payload = dict(extra)
    payload["state"] = engine.get_state().to_dict()
    return jsonify(payload)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})


@app.route("/api/game", methods=["GET"])
def get_game():
    """
    Get the current game state snapshot.
    """
    try:
        engine = get_engine()
        with game_lock:
            return _state_response(engine)
    except Exception as error:
        logging.error(f"Error fetching game state: {error}")
        return jsonify({"error": "Failed to load game state"}), 500


@app.route("/api/game/start", methods=["POST"])
def start_game():
    try:
        engine = get_engine()
        with game_lock:
            started = engine.start()
            return _state_response(engine, started=started)
    except Exception as error:
        logging.error(f"Error starting game: {error}")
        return jsonify({"error": "Failed to start game"}), 500


@app.route("/api/game/direction", methods=["POST"])
def change_direction():
    """
    Request a direction change.

    Body: {"direction": "UP" | "DOWN" | "LEFT" | "RIGHT"} (case-insensitive)

    Returns:
    - applied: false when the game is stopped, paused, or the move is a reversal
    - 400: missing or unknown direction
    """
    try:
        direction = str(_json_body().get("direction", "")).upper()
        engine = get_engine()
        with game_lock:
            applied = engine.set_direction(direction)
            return _state_response(engine, applied=applied)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as error:
        logging.error(f"Error changing direction: {error}")
        return jsonify({"error": "Failed to change direction"}), 500


@app.route("/api/game/key", methods=["POST"])
def press_key():
    """
    Forward a keyboard event code (ArrowUp, KeyW, Space...).
    """
    try:
        code = _json_body().get("code")
        if not isinstance(code, str) or not code:
            raise ValueError("'code' must be a non-empty string")
        engine = get_engine()
        with game_lock:
            handled = handle_key(engine, code)
            return _state_response(engine, handled=handled)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as error:
        logging.error(f"Error handling key press: {error}")
        return jsonify({"error": "Failed to handle key"}), 500


@app.route("/api/game/swipe", methods=["POST"])
def swipe():
    """
    Forward a touch gesture.

    Body: {"start": [x, y], "end": [x, y]} in device-independent pixels.
    """
    try:
        data = _json_body()
        points = []
        for key in ("start", "end"):
            point = data.get(key)
            if not isinstance(point, (list, tuple)) or len(point) != 2:
                raise ValueError(f"'{key}' must be an [x, y] pair")
            points.append((float(point[0]), float(point[1])))

        engine = get_engine()
        with game_lock:
            direction = handle_swipe(engine, points[0], points[1])
            return _state_response(engine, direction=direction)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception as error:
        logging.error(f"Error handling swipe: {error}")
        return jsonify({"error": "Failed to handle swipe"}), 500


@app.route("/api/game/pause", methods=["POST"])
def toggle_pause():
    try:
        engine = get_engine()
        with game_lock:
            toggled = engine.toggle_pause()
            return _state_response(engine, toggled=toggled)
    except Exception as error:
        logging.error(f"Error toggling pause: {error}")
        return jsonify({"error": "Failed to toggle pause"}), 500


@app.route("/api/game/reset", methods=["POST"])
def reset_game():
    """
    Reset the session and start a new game immediately.
    """
    try:
        engine = get_engine()
        with game_lock:
            engine.restart()
            return _state_response(engine)
    except Exception as error:
        logging.error(f"Error resetting game: {error}")
        return jsonify({"error": "Failed to reset game"}), 500


@app.route("/api/game/walls", methods=["POST"])
def toggle_walls():
    try:
        engine = get_engine()
        with game_lock:
            wall_mode = engine.toggle_walls()
            return _state_response(engine, wall_mode=wall_mode)
    except Exception as error:
        logging.error(f"Error toggling walls: {error}")
        return jsonify({"error": "Failed to toggle walls"}), 500


@app.route("/api/high-score", methods=["GET"])
def get_high_score():
    try:
        engine = get_engine()
        with game_lock:
            return jsonify({"high_score": engine.high_score})
    except Exception as error:
        logging.error(f"Error fetching high score: {error}")
        return jsonify({"error": "Failed to load high score"}), 500


if __name__ == "__main__":
    # Run the Flask app in debug mode.
    app.run(debug=os.getenv("FLASK_DEBUG"))
