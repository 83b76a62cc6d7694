import logging
from typing import Optional

from flask import Flask, Response, jsonify, request, render_template_string
from flask_cors import CORS
from dotenv import load_dotenv

from config import GameConfig
from services.game_session import GameSession

load_dotenv()

logger = logging.getLogger(__name__)

INDEX_HTML = """<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>Snake</title>
  <style>
    body { font-family: Arial, sans-serif; text-align: center; background: #fafafa; }
    #board { margin-top: 24px; image-rendering: pixelated; }
    #scoreValue { margin-top: 8px; color: #333; font-size: 18px; }
  </style>
</head>
<body>
  <img id="board" src="/api/frame.png" width="{{ size }}" height="{{ size }}" alt="board">
  <div id="scoreValue">0</div>
  <button id="pauseBtn">Pause</button>
  <script>
    const board = document.getElementById("board");
    const score = document.getElementById("scoreValue");
    const pauseBtn = document.getElementById("pauseBtn");
    const post = (url, body) => fetch(url, {
      method: "POST",
      headers: {"Content-Type": "application/json"},
      body: JSON.stringify(body || {})
    }).then(r => r.json());

    document.addEventListener("keydown", (e) => post("/api/key", {key: e.key}));
    pauseBtn.addEventListener("click", () => post("/api/pause").then(d => {
      pauseBtn.textContent = d.paused ? "Resume" : "Pause";
    }));

    setInterval(() => {
      board.src = "/api/frame.png?t=" + Date.now();
      fetch("/api/state").then(r => r.json()).then(s => { score.textContent = s.score; });
    }, {{ tick_ms }});
  </script>
</body>
</html>
"""


def create_app(config: Optional[GameConfig] = None, session: Optional[GameSession] = None) -> Flask:
    """
    Build the Flask app around a single game session.

    Args:
        config: Game configuration (read from the environment when omitted)
        session: An existing session to serve, mainly for tests
    """
    config = config or GameConfig.from_env()
    session = session or GameSession(config)

    app = Flask(__name__)
    app.config["GAME_SESSION"] = session

    CORS(app, resources={r"/api/*": {"origins": config.cors_origins}})

    @app.route("/", methods=["GET"])
    def index():
        return render_template_string(
            INDEX_HTML,
            size=config.cell_count * config.cell_size,
            tick_ms=config.tick_ms
        )

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """
        Get the current board snapshot.

        Returns snake cells (head first), food, score, flags and the
        game-over message if one is showing.
        """
        try:
            return jsonify(session.state())
        except Exception as error:
            logging.error(f"Error reading game state: {error}")
            return jsonify({"error": "Failed to read game state"}), 500

    @app.route("/api/key", methods=["POST"])
    def press_key():
        """
        Forward a key press.

        Body: {"key": "ArrowUp"} (arrow keys or w/a/s/d)
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Missing 'key'"}), 400

        key = data.get("key")
        if not isinstance(key, str) or not key:
            return jsonify({"error": "Missing 'key'"}), 400

        try:
            return jsonify(session.press(key))
        except Exception as error:
            logging.error(f"Error handling key {key!r}: {error}")
            return jsonify({"error": "Failed to handle key"}), 500

    @app.route("/api/pause", methods=["POST"])
    def toggle_pause():
        try:
            return jsonify(session.toggle_pause())
        except Exception as error:
            logging.error(f"Error toggling pause: {error}")
            return jsonify({"error": "Failed to toggle pause"}), 500

    @app.route("/api/reset", methods=["POST"])
    def reset_game():
        try:
            return jsonify(session.reset())
        except Exception as error:
            logging.error(f"Error resetting game: {error}")
            return jsonify({"error": "Failed to reset game"}), 500

    @app.route("/api/frame.png", methods=["GET"])
    def get_frame():
        try:
            png = session.frame_png()
        except Exception as error:
            logging.error(f"Error rendering frame: {error}")
            return jsonify({"error": "Failed to render frame"}), 500

        response = Response(png, mimetype="image/png")
        response.headers["Cache-Control"] = "no-store"
        return response

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(host="127.0.0.1", port=5000)
