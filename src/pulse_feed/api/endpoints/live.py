# src/pulse_feed/api/endpoints/live.py
"""WebSocket channel that streams feed events to viewers."""

from fastapi import APIRouter, WebSocket

from pulse_feed.api.dependencies import LiveNotifierDep

router = APIRouter(tags=["live"])


@router.websocket("/ws")
async def live_feed(websocket: WebSocket, notifier: LiveNotifierDep) -> None:
    """Register a viewer and keep it until the client disconnects.

    The server pushes ``newPost`` and ``likeUpdate`` frames; anything the
    client sends is ignored.
    """
    await notifier.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        notifier.disconnect(websocket)
