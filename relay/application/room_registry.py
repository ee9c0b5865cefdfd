import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from relay.application.errors import (
    AlreadyAttachedError,
    AlreadyClaimedError,
    IdSpaceExhaustedError,
    RoomNotFoundError,
)
from relay.application.guards import room_exists
from relay.application.ports import PeerConnection
from relay.config import RegistrySettings
from relay.domain.models import Room, RoomTicket
from relay.domain.room_ids import id_space_size, make_room_id
from relay.domain.room_state import RoomState

logger = logging.getLogger(__name__)


class RoomRegistry:
    """In-memory rendezvous rooms pairing one publisher with one joiner.

    Every mutation of a room runs under that room's lock. A room leaves
    ``_rooms`` exactly once, when it reaches a terminal state, and the
    connection it held is closed outside the lock.
    """

    def __init__(self, settings: RegistrySettings | None = None):
        self._settings = settings or RegistrySettings()
        self._ttl_seconds = self._settings.room_ttl_seconds
        self._capacity = id_space_size(
            self._settings.id_alphabet, self._settings.id_length
        )
        self._rooms: dict[str, Room] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        room = self._rooms.get(room_id) if isinstance(room_id, str) else None
        return room is not None and room.is_live

    def _make_room_id(self) -> str:
        return make_room_id(self._settings.id_alphabet, self._settings.id_length)

    def _new_room_id(self) -> str:
        if len(self._rooms) >= self._capacity:
            raise IdSpaceExhaustedError(self._capacity)
        room_id = self._make_room_id()
        while room_id in self._rooms:
            room_id = self._make_room_id()
        return room_id

    async def create(self, payload: dict[str, Any]) -> RoomTicket:
        room_id = self._new_room_id()
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=self._ttl_seconds)
        room = Room(room_id, payload, expires_at)
        self._rooms[room_id] = room
        room.expiry_task = asyncio.create_task(self._expire_after(room))
        logger.info("room %s created, expires at %s", room_id, expires_at.isoformat())
        return room.ticket()

    @room_exists
    def lookup(self, room_id: str) -> dict[str, Any]:
        return self._rooms[room_id].publisher_payload

    @room_exists
    async def claim(self, room_id: str, payload: dict[str, Any]) -> None:
        room = self._rooms[room_id]
        async with room.lock:
            if not room.is_live:
                raise RoomNotFoundError(room_id)
            if room.joiner_payload is not None:
                raise AlreadyClaimedError(room_id)
            room.joiner_payload = payload
            room.state = RoomState.JOINER_CLAIMED
            delivery = self._take_delivery_locked(room)
        logger.info("room %s claimed", room_id)
        if delivery is not None:
            await self._deliver(room_id, *delivery)

    @room_exists
    def ensure_attachable(self, room_id: str) -> None:
        if self._rooms[room_id].connection is not None:
            raise AlreadyAttachedError(room_id)

    @room_exists
    async def attach_connection(self, room_id: str, connection: PeerConnection) -> None:
        room = self._rooms[room_id]
        async with room.lock:
            if not room.is_live:
                raise RoomNotFoundError(room_id)
            if room.connection is not None:
                raise AlreadyAttachedError(room_id)
            room.connection = connection
            if room.joiner_payload is None:
                room.state = RoomState.PUBLISHER_ATTACHED
            delivery = self._take_delivery_locked(room)
        logger.info("room %s publisher attached", room_id)
        if delivery is not None:
            await self._deliver(room_id, *delivery)

    async def detach_connection(self, room_id: str, connection: PeerConnection) -> None:
        room = self._rooms.get(room_id)
        if room is None:
            return
        async with room.lock:
            if not room.is_live or room.connection is not connection:
                return
            room.connection = None
            room.state = RoomState.CREATED
        logger.info("room %s publisher detached before delivery", room_id)

    async def remove(self, room_id: str) -> bool:
        room = self._rooms.get(room_id)
        if room is None:
            return False
        return await self._discard(room, RoomState.REMOVED)

    async def close(self) -> None:
        for room in list(self._rooms.values()):
            await self._discard(room, RoomState.REMOVED)

    def _retire_locked(self, room: Room, state: RoomState) -> PeerConnection | None:
        room.state = state
        if self._rooms.get(room.room_id) is room:
            del self._rooms[room.room_id]
        task, room.expiry_task = room.expiry_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
        connection, room.connection = room.connection, None
        return connection

    def _take_delivery_locked(
        self, room: Room
    ) -> tuple[PeerConnection, dict[str, Any]] | None:
        connection, payload = room.connection, room.joiner_payload
        if not room.is_live or connection is None or payload is None:
            return None
        self._retire_locked(room, RoomState.DELIVERED)
        return connection, payload

    async def _deliver(
        self, room_id: str, connection: PeerConnection, payload: dict[str, Any]
    ) -> None:
        try:
            await connection.send_json(payload)
        finally:
            await connection.close()
        logger.info("room %s delivered", room_id)

    async def _discard(self, room: Room, state: RoomState) -> bool:
        async with room.lock:
            if not room.is_live:
                return False
            connection = self._retire_locked(room, state)
        if connection is not None:
            await connection.close()
        logger.info("room %s %s", room.room_id, state.value)
        return True

    async def _expire_after(self, room: Room) -> None:
        await asyncio.sleep(self._ttl_seconds)
        await self._discard(room, RoomState.EXPIRED)
