"""World — the grid plus every ant, kept mutually consistent.

The World exclusively owns the Grid and all Ant records.  Ants are
changed only through an ``AntHandle`` obtained from ``World.ant_mut``,
which updates the ant record and the cells it touches together so no
caller can observe a half-moved ant.

Failed ant actions are ordinary outcomes, not exceptions: handle methods
return a ``WorldError`` when they refuse to act and ``None`` when they
succeed.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from hexants.colony.ant import Ant, AntView, Color
from hexants.world.cell import CellError
from hexants.world.geometry import Direction, TurnDirection

if TYPE_CHECKING:
    from collections.abc import Iterator

    from hexants.world.geometry import Position
    from hexants.world.grid import Grid

logger = logging.getLogger(__name__)


class WorldError(Enum):
    """Why an ant-level action was refused."""

    OUT_OF_BOUNDS = auto()
    WALL = auto()
    OCCUPIED = auto()
    CELL_HAS_NO_FOOD = auto()
    ANT_HAS_NO_FOOD = auto()
    ANT_CARRIES_FOOD = auto()

    @classmethod
    def from_cell_error(cls, error: CellError) -> WorldError:
        """Map a single-cell refusal onto its ant-level counterpart."""
        return _CELL_TO_WORLD[error]


_CELL_TO_WORLD: dict[CellError, WorldError] = {
    CellError.OCCUPIED: WorldError.OCCUPIED,
    CellError.WALL: WorldError.WALL,
    CellError.NO_FOOD: WorldError.CELL_HAS_NO_FOOD,
}


class PlacementError(ValueError):
    """Raised by ``World.add_ant`` when the target cell cannot take an ant.

    Attributes:
        reason: The underlying ``WorldError``.
        position: Where placement was attempted.
    """

    def __init__(self, reason: WorldError, position: Position) -> None:
        super().__init__(f"cannot place ant at ({position.x}, {position.y}): {reason.name}")
        self.reason = reason
        self.position = position


@dataclass
class World:
    """The grid and the ants living on it.

    Attributes:
        grid: The cell array.  Treat as read-only outside the World.
    """

    grid: Grid
    _ants: list[Ant] = field(init=False, default_factory=list, repr=False)
    _swarms: dict[Color, list[int]] = field(init=False, repr=False)
    _handle_live: bool = field(init=False, default=False, repr=False)

    def __post_init__(self) -> None:
        """Start with an empty swarm for every colour."""
        self._swarms = {color: [] for color in Color}

    # -- Setup --

    def add_ant(
        self,
        color: Color,
        position: Position,
        *,
        direction: Direction = Direction.RIGHT,
    ) -> int:
        """Place a new ant and return its id.

        Ids are assigned in creation order starting at 0.  The ant is also
        appended to its colour's swarm.

        Args:
            color: Team of the new ant.
            position: Cell to place it on.
            direction: Initial facing.

        Raises:
            PlacementError: If ``position`` is out of bounds, a wall, or
                already occupied.
        """
        ant_id = len(self._ants)
        cell = self.grid.cell_at(position)
        if cell is None:
            logger.warning("Rejected %s ant at %s: out of bounds", color.value, position)
            raise PlacementError(WorldError.OUT_OF_BOUNDS, position)
        error = cell.try_put_ant(ant_id)
        if error is not None:
            reason = WorldError.from_cell_error(error)
            logger.warning("Rejected %s ant at %s: %s", color.value, position, reason.name)
            raise PlacementError(reason, position)

        self._ants.append(Ant(color=color, position=position, direction=direction))
        self._swarms[color].append(ant_id)
        logger.debug("Placed %s ant %d at %s", color.value, ant_id, position)
        return ant_id

    # -- Read access --

    def __len__(self) -> int:
        return len(self._ants)

    def ant(self, ant_id: int) -> AntView:
        """Return a snapshot of ant ``ant_id``.

        Raises:
            IndexError: If no such ant exists.
        """
        return self._record(ant_id).view(ant_id)

    def ants(self) -> list[AntView]:
        """Return snapshots of every ant, in id order."""
        return [ant.view(ant_id) for ant_id, ant in enumerate(self._ants)]

    def ant_ids(self) -> range:
        return range(len(self._ants))

    def swarm_ids(self, color: Color) -> tuple[int, ...]:
        """Return the ids of all ants of ``color`` in creation order."""
        return tuple(self._swarms[color])

    def colors(self) -> list[Color]:
        """Return the colours that currently have at least one ant."""
        return [color for color, ids in self._swarms.items() if ids]

    def can_move_forward(self, ant_id: int) -> bool:
        return self._move_error(self._record(ant_id)) is None

    def can_pick_up_food(self, ant_id: int) -> bool:
        return self._pickup_error(self._record(ant_id)) is None

    def can_drop_food(self, ant_id: int) -> bool:
        return self._record(ant_id).carries_food

    def total_food(self) -> int:
        """Return food on the ground plus food carried by ants."""
        on_ground = int(self.grid.food_grid().sum())
        return on_ground + sum(1 for ant in self._ants if ant.carries_food)

    def invariant_violations(self) -> list[str]:
        """Check occupancy and wall invariants.

        Returns:
            Human-readable descriptions of every violation found (empty
            when the world is consistent).
        """
        problems: list[str] = []
        seen: dict[int, tuple[int, int]] = {}
        for x, y, cell in self.grid.iter_cells():
            if cell.is_wall and (cell.has_ant or cell.food):
                problems.append(f"wall at ({x}, {y}) holds an ant or food")
            if cell.food < 0:
                problems.append(f"negative food at ({x}, {y})")
            if cell.ant_id is None:
                continue
            if not 0 <= cell.ant_id < len(self._ants):
                problems.append(f"unknown ant {cell.ant_id} at ({x}, {y})")
            if cell.ant_id in seen:
                problems.append(f"ant {cell.ant_id} occupies two cells")
            seen[cell.ant_id] = (x, y)

        for ant_id, ant in enumerate(self._ants):
            where = seen.get(ant_id)
            if where != (ant.position.x, ant.position.y):
                problems.append(
                    f"ant {ant_id} stored at {ant.position} but occupies {where}",
                )
        return problems

    # -- Mutation --

    @contextmanager
    def ant_mut(self, ant_id: int) -> Iterator[AntHandle]:
        """Open the mutation handle for one ant.

        The handle is only valid inside the ``with`` block, and only one
        handle may be open at a time.

        Raises:
            IndexError: If no such ant exists.
            RuntimeError: If another handle is already open.
        """
        ant = self._record(ant_id)
        if self._handle_live:
            msg = "another ant handle is still open"
            raise RuntimeError(msg)
        self._handle_live = True
        handle = AntHandle(self, ant_id, ant)
        try:
            yield handle
        finally:
            handle._release()
            self._handle_live = False

    # -- Internals --

    def _record(self, ant_id: int) -> Ant:
        if not 0 <= ant_id < len(self._ants):
            msg = f"no ant with id {ant_id}"
            raise IndexError(msg)
        return self._ants[ant_id]

    def _move_error(self, ant: Ant) -> WorldError | None:
        target = self.grid.cell_at(ant.position.translate(ant.direction))
        if target is None:
            return WorldError.OUT_OF_BOUNDS
        if target.is_wall:
            return WorldError.WALL
        if target.has_ant:
            return WorldError.OCCUPIED
        return None

    def _pickup_error(self, ant: Ant) -> WorldError | None:
        if ant.carries_food:
            return WorldError.ANT_CARRIES_FOOD
        cell = self.grid.cell_at(ant.position)
        if cell is None or cell.food == 0:
            return WorldError.CELL_HAS_NO_FOOD
        return None


class AntHandle:
    """Scoped write access to one ant and the cells around it.

    Obtained from ``World.ant_mut``; unusable once its ``with`` block ends.
    """

    def __init__(self, world: World, ant_id: int, ant: Ant) -> None:
        self._world = world
        self._ant = ant
        self._live = True
        self.id = ant_id

    def _release(self) -> None:
        self._live = False

    def _check_live(self) -> Ant:
        if not self._live:
            msg = f"handle for ant {self.id} used after release"
            raise RuntimeError(msg)
        return self._ant

    # -- Read-through properties --

    @property
    def color(self) -> Color:
        return self._check_live().color

    @property
    def position(self) -> Position:
        return self._check_live().position

    @property
    def direction(self) -> Direction:
        return self._check_live().direction

    @property
    def instr_pointer(self) -> int:
        return self._check_live().instr_pointer

    @property
    def carries_food(self) -> bool:
        return self._check_live().carries_food

    def view(self) -> AntView:
        return self._check_live().view(self.id)

    # -- Queries --

    def can_move_forward(self) -> bool:
        return self._world._move_error(self._check_live()) is None

    def can_pick_up_food(self) -> bool:
        return self._world._pickup_error(self._check_live()) is None

    def can_drop_food(self) -> bool:
        return self._check_live().carries_food

    # -- Actions --

    def move_forward(self) -> WorldError | None:
        """Step one cell in the facing direction.

        Nothing changes unless the target is in bounds, not a wall, and
        unoccupied.  On success the old cell is cleared, the new cell is
        claimed and the stored position updated together.
        """
        ant = self._check_live()
        error = self._world._move_error(ant)
        if error is not None:
            return error

        grid = self._world.grid
        target = ant.position.translate(ant.direction)
        old_cell = grid.require_cell(ant.position)
        new_cell = grid.require_cell(target)
        new_cell.try_put_ant(self.id)
        old_cell.clear_ant()
        ant.position = target
        return None

    def rotate(self, direction: Direction) -> None:
        """Face ``direction``.  Always succeeds."""
        self._check_live().direction = direction

    def turn(self, turn: TurnDirection) -> None:
        """Rotate one sixth-turn left or right."""
        ant = self._check_live()
        ant.direction = ant.direction.apply_turn(turn)

    def pickup_food(self) -> WorldError | None:
        """Take one unit of food from the current cell."""
        ant = self._check_live()
        error = self._world._pickup_error(ant)
        if error is not None:
            return error

        cell = self._world.grid.require_cell(ant.position)
        cell_error = cell.take_food()
        if cell_error is not None:
            return WorldError.from_cell_error(cell_error)
        ant.carries_food = True
        return None

    def drop_food(self) -> WorldError | None:
        """Put the carried unit of food onto the current cell."""
        ant = self._check_live()
        if not ant.carries_food:
            return WorldError.ANT_HAS_NO_FOOD

        cell = self._world.grid.require_cell(ant.position)
        cell_error = cell.put_food()
        if cell_error is not None:
            return WorldError.from_cell_error(cell_error)
        ant.carries_food = False
        return None

    def update_instr_pointer(self, value: int) -> None:
        """Set the index of the next instruction this ant will run."""
        self._check_live().instr_pointer = value
