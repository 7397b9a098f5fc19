import random
from typing import Iterable

from cobra_duel.models import Coordinate

GRID_SIZE = 15
CELL_COUNT = GRID_SIZE * GRID_SIZE

# Offsets follow the board's (row, column) axes: up/down move x, left/right move y
_OFFSETS = {
    'right': (0, 1),
    'left': (0, -1),
    'up': (-1, 0),
    'down': (1, 0),
}

OPPOSITES = {
    'right': 'left',
    'left': 'right',
    'up': 'down',
    'down': 'up',
}


def in_bounds(cell: Coordinate) -> bool:
    return 0 <= cell.x < GRID_SIZE and 0 <= cell.y < GRID_SIZE


def offset(cell: Coordinate, direction: str) -> Coordinate:
    dx, dy = _OFFSETS[direction]
    return Coordinate(cell.x + dx, cell.y + dy)


def random_free_cell(occupied: Iterable[Coordinate], rng=random) -> Coordinate:
    """Uniformly sample a cell not in ``occupied``.

    Rejection sampling; callers guarantee at least one free cell.
    """
    taken = set(occupied)
    while True:
        cell = Coordinate(rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE))
        if cell not in taken:
            return cell
