from typing import Any, Protocol


class PeerConnection(Protocol):
    """Persistent connection of the publisher waiting for an answer."""

    async def send_json(self, payload: dict[str, Any]) -> None: ...

    async def close(self) -> None: ...
