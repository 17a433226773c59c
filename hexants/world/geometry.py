"""Geometry — directions and positions on the hex grid.

The grid uses row-offset hex coordinates: every cell has six neighbours,
reached by fixed ``(dx, dy)`` deltas.  Opposite directions are not simple
sign flips of each other in raw ``(x, y)``, so always go through
``Position.translate`` rather than doing arithmetic by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TurnDirection(Enum):
    """Which way a Turn instruction rotates an ant."""

    LEFT = -1
    RIGHT = 1


class Direction(Enum):
    """One of the six hex facings, in clockwise order."""

    RIGHT = 0
    DOWN_RIGHT = 1
    DOWN_LEFT = 2
    LEFT = 3
    UP_LEFT = 4
    UP_RIGHT = 5

    def apply_turn(self, turn: TurnDirection) -> Direction:
        """Return the facing one sixth-turn to the left or right."""
        return Direction((self.value + turn.value) % 6)

    def turn_left(self) -> Direction:
        return self.apply_turn(TurnDirection.LEFT)

    def turn_right(self) -> Direction:
        return self.apply_turn(TurnDirection.RIGHT)


_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.RIGHT: (1, 0),
    Direction.DOWN_RIGHT: (0, 1),
    Direction.DOWN_LEFT: (-1, 1),
    Direction.LEFT: (-1, 0),
    Direction.UP_LEFT: (0, -1),
    Direction.UP_RIGHT: (1, -1),
}


@dataclass(frozen=True)
class Position:
    """Integer grid coordinates.

    Attributes:
        x: Column index.
        y: Row index.
    """

    x: int
    y: int

    def translate(self, direction: Direction) -> Position:
        """Return the neighbouring position in ``direction``.

        Never fails; the result may lie outside any particular grid and
        must be checked with ``Grid.in_bounds`` by the caller.
        """
        dx, dy = _OFFSETS[direction]
        return Position(self.x + dx, self.y + dy)
