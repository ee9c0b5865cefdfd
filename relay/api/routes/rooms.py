import logging

from fastapi import APIRouter, HTTPException, WebSocket, status

from relay.api.deps import RoomRegistryDep
from relay.api.schemas import RoomOut, SignalIn, SignalOut, StatusOut
from relay.application.errors import (
    AlreadyAttachedError,
    AlreadyClaimedError,
    IdSpaceExhaustedError,
    RelayError,
    RoomNotFoundError,
)
from relay.infrastructure.ws_peer import WebSocketPeer

logger = logging.getLogger(__name__)

rooms_router = APIRouter(prefix="/rooms")


@rooms_router.post("/", response_model=RoomOut)
async def create_room(signal_in: SignalIn, registry: RoomRegistryDep):
    try:
        ticket = await registry.create(signal_in.signal.to_payload())
    except IdSpaceExhaustedError as exc:
        logger.error("cannot create room: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return RoomOut(id=ticket.room_id, expires_at=ticket.expires_at)


@rooms_router.get("/{room_id}", response_model=SignalOut)
async def peek_room(room_id: str, registry: RoomRegistryDep):
    try:
        payload = registry.lookup(room_id)
    except RoomNotFoundError as exc:
        raise HTTPException(status_code=404, detail="no room found") from exc
    return SignalOut(signal=payload)


@rooms_router.post("/{room_id}/join", response_model=StatusOut)
async def join_room(room_id: str, signal_in: SignalIn, registry: RoomRegistryDep):
    try:
        await registry.claim(room_id, signal_in.signal.to_payload())
    except RoomNotFoundError as exc:
        raise HTTPException(status_code=404, detail="no room found") from exc
    except AlreadyClaimedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return StatusOut(status="claimed")


@rooms_router.websocket("/{room_id}/ws")
async def publisher_socket(websocket: WebSocket, room_id: str, registry: RoomRegistryDep):
    peer = WebSocketPeer(websocket, room_id)
    try:
        registry.ensure_attachable(room_id)
    except (RoomNotFoundError, AlreadyAttachedError) as exc:
        logger.info("rejecting socket for room %s: %s", room_id, exc)
        await peer.reject()
        return

    await peer.accept()
    try:
        await registry.attach_connection(room_id, peer)
    except RelayError as exc:
        logger.info("room %s gone during handshake: %s", room_id, exc)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    try:
        await peer.wait_closed()
    finally:
        await registry.detach_connection(room_id, peer)
