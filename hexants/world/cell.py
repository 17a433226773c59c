"""Cell — a single tile in the world grid.

A cell is either a wall or a free cell.  Free cells hold at most one ant
and a non-negative integer amount of food.  Walls hold neither.

Mutators report expected failures by returning a ``CellError`` rather than
raising; ``None`` means the change was applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class CellError(Enum):
    """Why a single-cell mutation was refused."""

    OCCUPIED = auto()
    WALL = auto()
    NO_FOOD = auto()


@dataclass
class Cell:
    """A single tile in the world grid.

    Attributes:
        is_wall: Whether this tile is impassable terrain.
        ant_id: Id of the ant standing here, if any.
        food: Units of food lying on this tile.
    """

    is_wall: bool = False
    ant_id: int | None = None
    food: int = 0

    def __post_init__(self) -> None:
        if self.food < 0:
            msg = f"food must be non-negative, got {self.food}"
            raise ValueError(msg)
        if self.is_wall and (self.ant_id is not None or self.food):
            msg = "a wall cannot hold an ant or food"
            raise ValueError(msg)

    @classmethod
    def wall(cls) -> Cell:
        """Return a new wall cell."""
        return cls(is_wall=True)

    @property
    def has_ant(self) -> bool:
        return self.ant_id is not None

    def try_put_ant(self, ant_id: int) -> CellError | None:
        """Place ``ant_id`` here unless the cell is a wall or occupied."""
        if self.is_wall:
            return CellError.WALL
        if self.ant_id is not None:
            return CellError.OCCUPIED
        self.ant_id = ant_id
        return None

    def clear_ant(self) -> int | None:
        """Remove the occupant and return its id (``None`` if empty)."""
        old, self.ant_id = self.ant_id, None
        return old

    def take_food(self) -> CellError | None:
        """Remove one unit of food."""
        if self.is_wall:
            return CellError.WALL
        if self.food == 0:
            return CellError.NO_FOOD
        self.food -= 1
        return None

    def put_food(self, amount: int = 1) -> CellError | None:
        """Add ``amount`` units of food."""
        if self.is_wall:
            return CellError.WALL
        self.food += amount
        return None
