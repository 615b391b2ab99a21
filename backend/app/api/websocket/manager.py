"""WebSocket ConnectionManager for the live news channel."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger("app.websocket")


@dataclass
class ConnectionManager:
    """Tracks open news-channel sockets."""

    _connections: list[WebSocket] = field(default_factory=list)

    @property
    def active_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.append(websocket)
        logger.debug("ws connected: %d open", len(self._connections))

    def disconnect(self, websocket: WebSocket) -> None:
        try:
            self._connections.remove(websocket)
        except ValueError:
            pass
        logger.debug("ws disconnected: %d open", len(self._connections))

    async def send(self, websocket: WebSocket, data: dict[str, Any]) -> bool:
        """Send one message; a socket whose send fails is dropped."""
        try:
            await websocket.send_json(data)
        except Exception:
            logger.debug("ws send failed, dropping connection", exc_info=True)
            self.disconnect(websocket)
            return False
        return True


manager = ConnectionManager()
