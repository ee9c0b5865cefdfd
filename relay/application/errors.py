class RelayError(Exception):
    """Base class for errors raised by the room registry."""


class RoomNotFoundError(RelayError):
    def __init__(self, room_id: str):
        super().__init__(f"room {room_id!r} not found")
        self.room_id = room_id


class AlreadyClaimedError(RelayError):
    def __init__(self, room_id: str):
        super().__init__(f"room {room_id!r} has already been joined")
        self.room_id = room_id


class AlreadyAttachedError(RelayError):
    def __init__(self, room_id: str):
        super().__init__(f"room {room_id!r} already has a publisher connection")
        self.room_id = room_id


class IdSpaceExhaustedError(RelayError):
    def __init__(self, capacity: int):
        super().__init__(f"all {capacity} room ids are in use")
        self.capacity = capacity
