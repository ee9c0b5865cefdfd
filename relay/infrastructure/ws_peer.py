import logging
from typing import Any

from starlette import status
from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

logger = logging.getLogger(__name__)


class WebSocketPeer:
    """Publisher WebSocket exposed to the registry as a PeerConnection."""

    def __init__(self, ws: WebSocket, room_id: str) -> None:
        self._ws = ws
        self.room_id = room_id
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def accept(self) -> None:
        await self._ws.accept()
        self._ws.state.room_id = self.room_id

    async def reject(self) -> None:
        # Closing before accept() denies the handshake.
        self._closed = True
        await self._ws.close(code=status.WS_1008_POLICY_VIOLATION)

    async def send_json(self, payload: dict[str, Any]) -> None:
        if self._closed:
            logger.warning("room %s: dropping payload, socket already closed", self.room_id)
            return
        try:
            await self._ws.send_json(payload)
        except (WebSocketDisconnect, RuntimeError) as exc:
            logger.warning("room %s: publisher went away before delivery: %s", self.room_id, exc)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._ws.application_state == WebSocketState.DISCONNECTED:
            return
        try:
            await self._ws.close(code=status.WS_1000_NORMAL_CLOSURE)
        except (WebSocketDisconnect, RuntimeError) as exc:
            logger.debug("room %s: close after disconnect: %s", self.room_id, exc)

    async def wait_closed(self) -> None:
        """Block until the client disconnects; inbound messages are ignored."""
        while True:
            message = await self._ws.receive()
            if message["type"] == "websocket.disconnect":
                self._closed = True
                return
