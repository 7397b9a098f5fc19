from typing import Iterable

from cobra_duel.models import Room


class Broadcaster:
    """Sends room state out through Socket.IO. Fire and forget."""

    def __init__(self, socketio, namespace: str):
        self.socketio = socketio
        self.namespace = namespace

    def room_list(self, room_type: str, rooms: Iterable[Room]) -> None:
        self.socketio.emit('roomList', room_list_payload(room_type, rooms), namespace=self.namespace)

    def game_update(self, room: Room) -> None:
        self.socketio.emit('gameUpdate', room.to_dict(), to=room.group, namespace=self.namespace)

    def game_over(self, room: Room, won: bool) -> None:
        event = 'winGame' if won else 'loseGame'
        self.socketio.emit(event, room.to_dict(), to=room.group, namespace=self.namespace)


def room_list_payload(room_type: str, rooms: Iterable[Room]) -> dict:
    return {'type': room_type, 'rooms': [room.to_dict() for room in rooms]}
