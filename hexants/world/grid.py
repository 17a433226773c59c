"""Grid — fixed-size 2D array of cells addressed by ``Position``.

Out-of-range positions are not walls: lookups return ``None`` for them so
callers can tell "off the map" apart from "blocked".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from hexants.world.cell import Cell

if TYPE_CHECKING:
    from collections.abc import Iterator

    from numpy.typing import NDArray

    from hexants.world.geometry import Position


@dataclass
class Grid:
    """A ``width x height`` array of cells.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        cells: 2D list of Cell objects indexed as ``cells[y][x]``.
    """

    width: int
    height: int
    cells: list[list[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Fill the grid with empty free cells."""
        if self.width <= 0 or self.height <= 0:
            msg = f"grid must be non-empty, got {self.width}x{self.height}"
            raise ValueError(msg)
        self.cells = [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def cell_at(self, position: Position) -> Cell | None:
        """Return the cell at ``position``, or ``None`` if out of bounds."""
        if not self.in_bounds(position):
            return None
        return self.cells[position.y][position.x]

    def ant_at(self, position: Position) -> int | None:
        """Return the id of the ant at ``position``, if any."""
        cell = self.cell_at(position)
        return None if cell is None else cell.ant_id

    def set_wall(self, position: Position) -> None:
        """Turn the cell at ``position`` into a wall.

        Raises:
            IndexError: If ``position`` is out of bounds.
            ValueError: If the cell currently holds an ant or food.
        """
        cell = self.require_cell(position)
        if cell.has_ant or cell.food:
            msg = f"cannot wall off {position}: cell is not empty"
            raise ValueError(msg)
        self.cells[position.y][position.x] = Cell.wall()

    def set_food(self, position: Position, amount: int) -> None:
        """Set the food count at ``position``.

        Raises:
            IndexError: If ``position`` is out of bounds.
            ValueError: If the cell is a wall or ``amount`` is negative.
        """
        cell = self.require_cell(position)
        if cell.is_wall:
            msg = f"cannot place food on wall at {position}"
            raise ValueError(msg)
        if amount < 0:
            msg = f"food must be non-negative, got {amount}"
            raise ValueError(msg)
        cell.food = amount

    def iter_cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield ``(x, y, cell)`` for every cell in row-major order."""
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                yield x, y, cell

    def food_grid(self) -> NDArray[np.int64]:
        """Return a ``(height, width)`` snapshot of food counts."""
        return np.array(
            [[cell.food for cell in row] for row in self.cells],
            dtype=np.int64,
        )

    def wall_mask(self) -> NDArray[np.bool_]:
        """Return a ``(height, width)`` boolean array, True where walls are."""
        return np.array(
            [[cell.is_wall for cell in row] for row in self.cells],
            dtype=np.bool_,
        )

    def require_cell(self, position: Position) -> Cell:
        """Return the cell at ``position``.

        Raises:
            IndexError: If ``position`` is out of bounds.
        """
        cell = self.cell_at(position)
        if cell is None:
            msg = f"{position} out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return cell
