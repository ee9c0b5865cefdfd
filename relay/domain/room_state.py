from enum import Enum


class RoomState(str, Enum):
    CREATED = "created"
    PUBLISHER_ATTACHED = "publisher_attached"
    JOINER_CLAIMED = "joiner_claimed"
    DELIVERED = "delivered"
    EXPIRED = "expired"
    REMOVED = "removed"

    @property
    def is_terminal(self) -> bool:
        return self in (RoomState.DELIVERED, RoomState.EXPIRED, RoomState.REMOVED)
