import inspect
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from relay.application.errors import RoomNotFoundError

F = TypeVar("F", bound=Callable[..., Any])


def _room_id_from(args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    room_id = kwargs.get("room_id")
    if room_id is None:
        if not args:
            raise ValueError("room_id is required")
        room_id = args[0]
    return room_id


def room_exists(func: F) -> F:
    """Raise RoomNotFoundError unless ``room_id`` names a live room.

    Works for plain and coroutine methods of an object exposing ``_rooms``.
    """

    def check(self: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        room_id = _room_id_from(args, kwargs)
        room = self._rooms.get(room_id)
        if room is None or not room.is_live:
            raise RoomNotFoundError(room_id)

    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            check(self, args, kwargs)
            return await func(self, *args, **kwargs)

        return cast(F, async_wrapper)

    @wraps(func)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        check(self, args, kwargs)
        return func(self, *args, **kwargs)

    return cast(F, wrapper)
