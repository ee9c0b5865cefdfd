from typing import Annotated

from fastapi import Depends
from fastapi.requests import HTTPConnection

from relay.application.room_registry import RoomRegistry


def get_room_registry(conn: HTTPConnection) -> RoomRegistry:
    return conn.app.state.room_registry


RoomRegistryDep = Annotated[RoomRegistry, Depends(get_room_registry)]
