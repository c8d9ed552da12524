"""WebSocket route handlers initialization."""

import logging

from .base import NAMESPACE
from .trip import TripHandler

logger = logging.getLogger(__name__)


def register_websocket_handlers(socketio, directions=None):
    """Register all WebSocket event handlers with SocketIO.

    Args:
        socketio: Flask-SocketIO instance
        directions: Directions provider; Google when omitted
    """
    logger.info(f"Registering trip handler for namespace: {NAMESPACE}")
    TripHandler(socketio, NAMESPACE, directions).register_handlers()


__all__ = ['register_websocket_handlers', 'NAMESPACE']
