from typing import Dict, Optional

from cobra_duel.models import Room
from .grid import OPPOSITES


class RoomRules:
    """Per-variant move legality. One instance per room type."""

    uses_turns = False

    def allows(self, seat: str, direction: str) -> bool:
        return True

    def after_move(self, room: Room, seat: str) -> None:
        pass


class SeparateRules(RoomRules):
    """Players alternate: only the seat holding the turn may steer."""

    uses_turns = True

    def after_move(self, room: Room, seat: str) -> None:
        room.turn = 'two' if seat == 'one' else 'one'


class SplitRules(RoomRules):
    """Both players steer at will, each along one axis."""

    axes = {
        'one': ('up', 'down'),
        'two': ('left', 'right'),
    }

    def allows(self, seat: str, direction: str) -> bool:
        return direction in self.axes[seat]


RULES: Dict[str, RoomRules] = {
    'separate': SeparateRules(),
    'split': SplitRules(),
}


def rules_for(room: Room) -> RoomRules:
    return RULES[room.type]


def rejection_reason(room: Room, seat: str, direction: str) -> Optional[str]:
    """Return why ``seat`` may not steer ``direction`` now, or None if it may."""
    if not room.running:
        return 'not-running'
    if OPPOSITES[direction] == room.cobra.facing:
        return 'reversal'
    rules = rules_for(room)
    if rules.uses_turns and room.turn != seat:
        return 'not-your-turn'
    if not rules.allows(seat, direction):
        return 'wrong-axis'
    return None
