"""In-process fan-out of feed events to connected WebSocket viewers."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)

NEW_POST_EVENT = "newPost"
LIKE_UPDATE_EVENT = "likeUpdate"


class LiveNotifier:
    """Registry of connected viewers with fire-and-forget broadcast.

    There is no backlog: a viewer only receives events broadcast while it is
    connected. A viewer whose send fails is dropped from the registry.
    """

    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        """Number of currently registered viewers."""
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept ``websocket`` and start delivering events to it."""
        await websocket.accept()
        self._connections.add(websocket)
        logger.info("Viewer connected (%d active)", len(self._connections))

    def disconnect(self, websocket: WebSocket) -> None:
        """Stop delivering events to ``websocket``."""
        self._connections.discard(websocket)
        logger.info("Viewer disconnected (%d active)", len(self._connections))

    async def broadcast(self, event: str, payload: Any) -> None:
        """Send ``{"event": event, "data": payload}`` to every viewer."""
        message = {"event": event, "data": payload}
        for websocket in list(self._connections):
            try:
                await websocket.send_json(message)
            except Exception as exc:  # noqa: BLE001 - delivery failures are not reported
                logger.debug("Dropping viewer after failed %s delivery: %s", event, exc)
                self._connections.discard(websocket)
