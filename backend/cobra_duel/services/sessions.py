from typing import Dict, Optional

from cobra_duel.errors import UserNotFound
from cobra_duel.models import User
from .rooms import Departure, RoomRegistry


class SessionRegistry:
    """Connected users, keyed by connection id."""

    def __init__(self, rooms: RoomRegistry):
        self.rooms = rooms
        self._users: Dict[str, User] = {}

    def __len__(self):
        return len(self._users)

    def get(self, connection_id: str) -> Optional[User]:
        return self._users.get(connection_id)

    def require(self, connection_id: str) -> User:
        user = self._users.get(connection_id)
        if user is None:
            raise UserNotFound()
        return user

    def nickname_taken(self, nickname: str) -> bool:
        return any(u.nickname == nickname for u in self._users.values())

    def login(self, connection_id: str, nickname: str) -> bool:
        if connection_id in self._users or self.nickname_taken(nickname):
            return False
        self._users[connection_id] = User(connection_id, nickname)
        return True

    def logout(self, connection_id: str) -> Optional[Departure]:
        """Forget the user and leave their room, returning what it did to the room."""
        if self._users.pop(connection_id, None) is None:
            return None
        if self.rooms.find_by_user(connection_id) is None:
            return None
        return self.rooms.leave_room(connection_id)
