"""
Round-trip planner – main application entry point

* Flask app serving the JSON API under `/travel`.
* Socket.IO (threading mode) on namespace `/travel/ws` for trip submission
  with per-leg progress events.
"""

import os
import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from roundtrip_planner.api.config import get_flask_secret_key, get_port  # noqa: E402

# --------------------------------------------------------------------------- #
# Flask initialisation
# --------------------------------------------------------------------------- #
app = Flask(__name__)

flask_secret_key = get_flask_secret_key()
if flask_secret_key is None:
    logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
    flask_secret_key = os.urandom(32).hex()
app.secret_key = flask_secret_key

app.config.update(
    SESSION_COOKIE_SECURE=False,
    SESSION_COOKIE_HTTPONLY=True,
    SESSION_COOKIE_SAMESITE="Lax",
    PERMANENT_SESSION_LIFETIME=86400,
)

# CORS for local dev / cross‑origin front‑end requests
CORS(app, origins="*", supports_credentials=True)

socketio = SocketIO(
    app,
    cors_allowed_origins="*",
    async_mode="threading",
    logger=True,
    engineio_logger=False,
    path="socket.io/",
)
logger.info("Socket.IO initialised (async_mode=threading)")

# --------------------------------------------------------------------------- #
# Blueprints & WebSocket handlers
# --------------------------------------------------------------------------- #
from roundtrip_planner.routes.travel import create_travel_blueprint  # noqa: E402
from roundtrip_planner.routes.websocket import register_websocket_handlers  # noqa: E402

app.register_blueprint(create_travel_blueprint())
register_websocket_handlers(socketio)


@app.route("/debug")
def debug():
    """Simple JSON health endpoint."""
    return {
        "status": "ok",
        "socketio_initialized": True,
        "endpoints": {
            "api": "/travel/api",
            "websocket_namespace": "/travel/ws",
        },
    }


if __name__ == "__main__":
    port = get_port()
    logger.info("Starting round-trip planner on http://localhost:%d", port)
    socketio.run(app, host="0.0.0.0", port=port, debug=False, allow_unsafe_werkzeug=True)

__all__ = ["app", "socketio"]
