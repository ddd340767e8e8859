"""
services/navigation.py
----------------------
"Next room" lookup used while walking a hotel room by room.

The result is a value, not a redirect: either the room to open next, or a
signal that the walk is finished and the caller should go back to the
tenant's overview.

Rooms are ordered by (display_order, room_number). room_number is unique
within a tenant, so two rooms sharing a display_order are still visited one
after the other instead of one of them being skipped.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Protocol, Union


class RoomLike(Protocol):
    tenant_id: str
    room_number: str
    display_order: int


@dataclass(frozen=True)
class NextRoom:
    room: Any


@dataclass(frozen=True)
class ReturnToTenant:
    tenant_id: str


NavigationTarget = Union[NextRoom, ReturnToTenant]


def _position(room: RoomLike) -> tuple[int, str]:
    return (room.display_order or 0, room.room_number)


def next_room(rooms: Iterable[RoomLike], current: RoomLike) -> NavigationTarget:
    """Return the room after `current`, or ReturnToTenant if it is the last one."""
    here = _position(current)
    later = [room for room in rooms if _position(room) > here]
    if not later:
        return ReturnToTenant(tenant_id=current.tenant_id)
    return NextRoom(room=min(later, key=_position))
