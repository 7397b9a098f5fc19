from typing import List, NamedTuple, Optional

# Pre-game delay; start_game overwrites it with the initial tick delay
LOBBY_DELAY_MS = 1000

ROOM_TYPES = ('separate', 'split')
DIRECTIONS = ('up', 'down', 'left', 'right')


class Coordinate(NamedTuple):
    x: int
    y: int

    def to_dict(self):
        return {'x': self.x, 'y': self.y}


class User:
    def __init__(self, id: str, nickname: str):
        self.id = id
        self.nickname = nickname

    def to_dict(self):
        return {
            'id': self.id,
            'nickname': self.nickname,
        }


class Seat:
    """A user sitting in a room, with its own ready flag."""

    def __init__(self, user: User, ready: bool = False):
        self.id = user.id
        self.nickname = user.nickname
        self.ready = ready

    def to_dict(self):
        return {
            'id': self.id,
            'nickname': self.nickname,
            'ready': self.ready,
        }


class Cobra:
    def __init__(self, head: Coordinate = Coordinate(0, 0), body: Optional[List[Coordinate]] = None, facing: str = 'right'):
        self.head = head
        # body[0] touches the head, body[-1] is the tail
        self.body = list(body or [])
        self.facing = facing

    def cells(self):
        return [self.head] + self.body

    def to_dict(self):
        return {
            'head': self.head.to_dict(),
            'body': [c.to_dict() for c in self.body],
            'facing': self.facing,
        }


class Room:
    def __init__(self, id: int, name: str, type: str, owner: User):
        self.id = id
        self.name = name
        self.type = type
        self.user_one: Seat = Seat(owner)
        self.user_two: Optional[Seat] = None
        self.started = False
        # A room without a second player can never tick
        self.paused = True
        self.points = 0
        self.turn = 'one'
        self.cobra = Cobra()
        self.food = Coordinate(0, 0)
        self.delay_ms = LOBBY_DELAY_MS

    @property
    def group(self) -> str:
        return f"room:{self.id}"

    @property
    def running(self) -> bool:
        return self.started and not self.paused

    def seats(self) -> List[Seat]:
        return [s for s in (self.user_one, self.user_two) if s is not None]

    def seat_of(self, user_id: str) -> Optional[str]:
        if self.user_one.id == user_id:
            return 'one'
        if self.user_two is not None and self.user_two.id == user_id:
            return 'two'
        return None

    def has(self, user_id: str) -> bool:
        return self.seat_of(user_id) is not None

    def finish(self) -> None:
        self.started = False
        for seat in self.seats():
            seat.ready = False

    def to_dict(self):
        """Public view of the room; never carries scheduling state."""
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'user_one': self.user_one.to_dict(),
            'user_two': self.user_two.to_dict() if self.user_two else None,
            'started': self.started,
            'paused': self.paused,
            'points': self.points,
            'turn': self.turn,
            'cobra': self.cobra.to_dict(),
            'food': self.food.to_dict(),
            'delay_ms': self.delay_ms,
        }
