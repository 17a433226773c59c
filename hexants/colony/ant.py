"""Ant — per-ant state and the team colours that group ants into swarms.

``Ant`` is the mutable record owned by the World.  Code outside the World
only ever sees ``AntView`` snapshots, or changes an ant through the
scoped handle returned by ``World.ant_mut``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hexants.world.geometry import Direction, Position


class Color(Enum):
    """Team tag.  Also selects which program a swarm runs."""

    BLACK = "black"
    RED = "red"


@dataclass
class Ant:
    """A single ant.

    Attributes:
        color: Team the ant belongs to.
        position: Cell the ant stands on.
        direction: Current facing.
        instr_pointer: Index of the next instruction to run.
        carries_food: Whether the ant holds one unit of food.
    """

    color: Color
    position: Position
    direction: Direction = Direction.RIGHT
    instr_pointer: int = 0
    carries_food: bool = False

    def view(self, ant_id: int) -> AntView:
        """Return a read-only snapshot of this ant."""
        return AntView(
            id=ant_id,
            color=self.color,
            position=self.position,
            direction=self.direction,
            instr_pointer=self.instr_pointer,
            carries_food=self.carries_food,
        )


@dataclass(frozen=True)
class AntView:
    """Immutable snapshot of an ant's state at the time it was taken."""

    id: int
    color: Color
    position: Position
    direction: Direction
    instr_pointer: int
    carries_food: bool
