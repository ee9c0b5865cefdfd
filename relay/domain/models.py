import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from relay.application.ports import PeerConnection
from relay.domain.room_state import RoomState


@dataclass(frozen=True)
class RoomTicket:
    room_id: str
    expires_at: datetime


@dataclass(eq=False)
class Room:
    room_id: str
    publisher_payload: dict[str, Any]
    expires_at: datetime
    joiner_payload: dict[str, Any] | None = None
    connection: PeerConnection | None = None
    state: RoomState = RoomState.CREATED
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)
    expiry_task: "asyncio.Task[None] | None" = field(default=None, repr=False)

    @property
    def is_live(self) -> bool:
        return not self.state.is_terminal

    def ticket(self) -> RoomTicket:
        return RoomTicket(self.room_id, self.expires_at)
