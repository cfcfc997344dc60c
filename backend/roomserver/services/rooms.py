import itertools
import time
from typing import Dict, List, Optional

from roomserver.errors import RoomLimitReached, RoomNameTaken
from roomserver.models import Room


def generate_room_id(counter) -> str:
    """Millisecond timestamp plus a process-wide counter, so rooms created in
    the same millisecond still get distinct, ordered ids."""
    return f"room-{int(time.time() * 1000)}-{next(counter)}"


class RoomStore:
    """In-memory rooms, kept in creation order.

    Rooms are not removed when their last player leaves unless the caller
    asks for it; ``max_rooms`` bounds how many can pile up.
    """

    def __init__(self, max_rooms: Optional[int] = None):
        self._rooms: Dict[str, Room] = {}
        self._counter = itertools.count(1)
        self.max_rooms = max_rooms

    def create(self, name: str) -> Room:
        if self.find_by_name(name):
            raise RoomNameTaken()
        if self.max_rooms is not None and len(self._rooms) >= self.max_rooms:
            raise RoomLimitReached()
        room = Room(id=generate_room_id(self._counter), name=name)
        self._rooms[room.id] = room
        return room

    def find(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def find_by_name(self, name: str) -> Optional[Room]:
        return next((r for r in self._rooms.values() if r.name == name), None)

    def list(self) -> List[Room]:
        return list(self._rooms.values())

    def rooms_with(self, connection: str) -> List[Room]:
        return [r for r in self._rooms.values() if r.has_player(connection)]

    def remove(self, room_id: str) -> Optional[Room]:
        return self._rooms.pop(room_id, None)

    def __len__(self):
        return len(self._rooms)
