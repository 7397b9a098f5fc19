import random

from cobra_duel.models import Room
from .grid import CELL_COUNT, in_bounds, offset, random_free_cell

CONTINUES = 'continues'
LOSES = 'loses'
WINS = 'wins'

DELAY_STEP_MS = 3
# Head plus body cover every cell
WINNING_BODY_LENGTH = CELL_COUNT - 1


def place_food(room: Room, rng=random) -> None:
    room.food = random_free_cell(room.cobra.cells(), rng)


def step(room: Room, direction: str, rng=random) -> str:
    """Advance the room's cobra one cell in ``direction``.

    Used for both manual moves and loop ticks. Terminal outcomes stop the
    game (``started`` false, seats no longer ready); announcing them is up
    to the caller.
    """
    cobra = room.cobra
    previous_head = cobra.head
    new_head = offset(previous_head, direction)

    if not in_bounds(new_head):
        room.finish()
        return LOSES

    cobra.head = new_head
    if new_head == room.food:
        cobra.body.insert(0, previous_head)
        room.points += 1
        room.delay_ms -= DELAY_STEP_MS
        if len(cobra.body) == WINNING_BODY_LENGTH:
            room.finish()
            return WINS
        place_food(room, rng)
    elif cobra.body:
        # Ghost-trail shift: every segment takes its predecessor's old cell
        cobra.body = [previous_head] + cobra.body[:-1]

    if cobra.head in cobra.body:
        room.finish()
        return LOSES
    return CONTINUES
