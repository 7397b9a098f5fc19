from typing import Dict, List, NamedTuple, Optional

from cobra_duel.errors import AlreadyInRoom, RoomFull, RoomNotFound
from cobra_duel.models import Room, Seat, User

DELETED = 'deleted'
VACATED = 'vacated'


class Departure(NamedTuple):
    """What happened to a room when one of its occupants left."""
    room_id: int
    room_type: str
    outcome: str
    room: Optional[Room]


class RoomRegistry:
    """Sole owner of the live rooms."""

    def __init__(self):
        self._rooms: Dict[int, Room] = {}

    def get(self, room_id: int) -> Optional[Room]:
        return self._rooms.get(room_id)

    def require(self, room_id: int) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound(f"Room {room_id} not found")
        return room

    def list_rooms(self, room_type: str) -> List[Room]:
        return [room for room in self._rooms.values() if room.type == room_type]

    def find_by_user(self, user_id: str) -> Optional[Room]:
        for room in self._rooms.values():
            if room.has(user_id):
                return room
        return None

    def _next_id(self) -> int:
        room_id = 1
        while room_id in self._rooms:
            room_id += 1
        return room_id

    def create_room(self, name: str, room_type: str, user: User) -> Room:
        if self.find_by_user(user.id):
            raise AlreadyInRoom()
        room = Room(self._next_id(), name, room_type, user)
        self._rooms[room.id] = room
        return room

    def join_room(self, user: User, room_id: int) -> Room:
        room = self.require(room_id)
        if room.user_two is not None:
            raise RoomFull(f"Room {room_id} is full")
        if self.find_by_user(user.id):
            raise AlreadyInRoom()
        room.user_two = Seat(user)
        return room

    def leave_room(self, user_id: str) -> Departure:
        room = self.find_by_user(user_id)
        if room is None:
            raise RoomNotFound('User is not in a room')
        if room.user_two is None:
            del self._rooms[room.id]
            return Departure(room.id, room.type, DELETED, None)
        if room.user_one.id == user_id:
            room.user_one = room.user_two
        room.user_two = None
        room.paused = True
        return Departure(room.id, room.type, VACATED, room)
