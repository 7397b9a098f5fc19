"""The lobby: one object owning every user, room and room timer.

Socket handlers, HTTP routes and timers all go through a single lobby under
its lock, so one event or tick is processed at a time.
"""
import threading
from typing import List, Optional

from cobra_duel.errors import DuplicateNickname, OpponentMissing, RoomNotFound
from cobra_duel.models import Room
from .broadcast import Broadcaster
from .games.loop import GameLoop
from .games.scheduler import ManualTimers, SocketIOTimers
from .rooms import DELETED, Departure, RoomRegistry
from .sessions import SessionRegistry


class GameLobby:
    def __init__(self, broadcaster: Broadcaster, timers, logger, lock=None, rng=None):
        self.lock = lock or threading.RLock()
        self.logger = logger
        self.broadcaster = broadcaster
        self.timers = timers
        self.rooms = RoomRegistry()
        self.sessions = SessionRegistry(self.rooms)
        self.loop = GameLoop(self.rooms, timers, broadcaster, logger, rng=rng)

    @classmethod
    def for_app(cls, app, socketio):
        lock = threading.RLock()
        if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
            timers = ManualTimers(app.logger)
        else:
            timers = SocketIOTimers(socketio, lock, app.logger)
        broadcaster = Broadcaster(socketio, app.config.get('SOCKETIO_NAMESPACE', '/ws'))
        return cls(broadcaster, timers, app.logger, lock=lock)

    # ---- sessions ----

    def login(self, connection_id: str, nickname: str) -> None:
        with self.lock:
            if not self.sessions.login(connection_id, nickname):
                self.logger.info(f"[login-reject] sid={connection_id} nickname={nickname!r}")
                raise DuplicateNickname(f"Nickname {nickname!r} is not available")
            self.logger.info(f"[login] sid={connection_id} nickname={nickname!r}")

    def logout(self, connection_id: str) -> Optional[Departure]:
        with self.lock:
            departure = self.sessions.logout(connection_id)
            self.logger.info(f"[logout] sid={connection_id} room={departure.room_id if departure else 0}")
            if departure:
                self._after_departure(departure)
            return departure

    # ---- rooms ----

    def list_rooms(self, room_type: str) -> List[Room]:
        with self.lock:
            return self.rooms.list_rooms(room_type)

    def snapshot(self, room_id: int) -> dict:
        with self.lock:
            return self.rooms.require(room_id).to_dict()

    def create_room(self, connection_id: str, name: str, room_type: str) -> Room:
        with self.lock:
            user = self.sessions.require(connection_id)
            room = self.rooms.create_room(name, room_type, user)
            self.logger.info(f"[room-create] room={room.id} type={room_type} owner={user.nickname!r}")
            self.broadcaster.room_list(room_type, self.rooms.list_rooms(room_type))
            return room

    def join_room(self, connection_id: str, room_id: int) -> Room:
        with self.lock:
            user = self.sessions.require(connection_id)
            room = self.rooms.join_room(user, room_id)
            self.logger.info(f"[room-join] room={room.id} user={user.nickname!r}")
            self.broadcaster.game_update(room)
            return room

    def leave_room(self, connection_id: str) -> Departure:
        with self.lock:
            self.sessions.require(connection_id)
            departure = self.rooms.leave_room(connection_id)
            self.logger.info(f"[room-leave] room={departure.room_id} sid={connection_id} outcome={departure.outcome}")
            self._after_departure(departure)
            return departure

    def _after_departure(self, departure: Departure) -> None:
        self.loop.halt(departure.room_id)
        if departure.outcome == DELETED:
            self.broadcaster.room_list(departure.room_type, self.rooms.list_rooms(departure.room_type))
        else:
            self.broadcaster.game_update(departure.room)

    # ---- game ----

    def _seated(self, connection_id: str):
        self.sessions.require(connection_id)
        room = self.rooms.find_by_user(connection_id)
        if room is None:
            raise RoomNotFound('User is not in a room')
        return room, room.seat_of(connection_id)

    def set_ready(self, connection_id: str) -> Room:
        with self.lock:
            room, seat = self._seated(connection_id)
            (room.user_one if seat == 'one' else room.user_two).ready = True
            everyone_ready = room.user_two is not None and all(s.ready for s in room.seats())
            if everyone_ready and not room.running:
                self.loop.start_game(room)
            self.broadcaster.game_update(room)
            return room

    def move(self, connection_id: str, direction: str) -> bool:
        with self.lock:
            room, seat = self._seated(connection_id)
            return self.loop.move(room, seat, direction)

    def pause(self, connection_id: str) -> Room:
        with self.lock:
            room, _ = self._seated(connection_id)
            self.loop.pause(room)
            return room

    def unpause(self, connection_id: str) -> Room:
        with self.lock:
            room, _ = self._seated(connection_id)
            if room.user_two is None:
                raise OpponentMissing()
            self.loop.unpause(room)
            return room
