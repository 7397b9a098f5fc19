import random

from cobra_duel.models import Cobra, Room
from .engine import CONTINUES, WINS, place_food, step
from .rules import rejection_reason, rules_for

INITIAL_DELAY_MS = 800


class GameLoop:
    """Drives each room's simulation: start, ticks, manual moves, pausing.

    Every path that changes a room outside of its own tick cancels the
    room's pending timer first, so at most one step runs per interval.
    """

    def __init__(self, rooms, timers, broadcaster, logger, rng=None):
        self.rooms = rooms
        self.timers = timers
        self.broadcaster = broadcaster
        self.logger = logger
        self.rng = rng or random.Random()

    def start_game(self, room: Room) -> None:
        self.timers.cancel(room.id)
        room.cobra = Cobra()
        place_food(room, self.rng)
        room.paused = False
        room.points = 0
        room.started = True
        room.turn = 'one'
        room.delay_ms = INITIAL_DELAY_MS
        self.logger.info(f"[game-start] room={room.id} type={room.type} food={tuple(room.food)}")
        self._schedule(room)

    def tick(self, room_id: int) -> None:
        room = self.rooms.get(room_id)
        if room is None or not room.running:
            return
        outcome = step(room, room.cobra.facing, self.rng)
        self._announce(room, outcome)
        self.broadcaster.game_update(room)
        if room.started:
            self._schedule(room)

    def move(self, room: Room, seat: str, direction: str) -> bool:
        reason = rejection_reason(room, seat, direction)
        if reason:
            self.logger.debug(f"[move-reject] room={room.id} seat={seat} direction={direction} reason={reason}")
            return False
        room.cobra.facing = direction
        rules_for(room).after_move(room, seat)
        self.timers.cancel(room.id)
        outcome = step(room, direction, self.rng)
        self._announce(room, outcome)
        if room.started:
            self._schedule(room)
        self.broadcaster.game_update(room)
        return True

    def pause(self, room: Room) -> None:
        room.paused = True
        self.timers.cancel(room.id)
        self.logger.info(f"[pause] room={room.id}")
        self.broadcaster.game_update(room)

    def unpause(self, room: Room) -> None:
        if room.paused:
            room.paused = False
            self.logger.info(f"[unpause] room={room.id} started={room.started}")
            if room.started:
                self._schedule(room)
        self.broadcaster.game_update(room)

    def halt(self, room_id: int) -> None:
        self.timers.cancel(room_id)

    def _schedule(self, room: Room) -> None:
        room_id = room.id
        self.timers.schedule(room_id, room.delay_ms, lambda: self.tick(room_id))

    def _announce(self, room: Room, outcome: str) -> None:
        if outcome == CONTINUES:
            return
        self.timers.cancel(room.id)
        won = outcome == WINS
        self.logger.info(f"[game-over] room={room.id} won={won} points={room.points}")
        self.broadcaster.game_over(room, won)
