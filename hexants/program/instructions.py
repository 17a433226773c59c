"""Instruction set and interpreter for ant programs.

A program is a fixed list of instructions shared by every ant of one
colour.  Each instruction names its successor(s) by index into that list,
so a program is a small directed graph.  Every evaluation:

- acts on exactly one ant, through its ``AntHandle``,
- performs at most one world mutation,
- always yields exactly one next instruction index.

Failure of a world action is never an error here; it just selects the
``fail`` branch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, overload

if TYPE_CHECKING:
    from hexants.world.geometry import Direction, TurnDirection
    from hexants.world.world import AntHandle

logger = logging.getLogger(__name__)


class ProgramError(ValueError):
    """Raised when a program is empty or jumps outside itself."""


@dataclass(frozen=True)
class Turn:
    """Rotate one sixth-turn, then go to ``next``."""

    direction: TurnDirection
    next: int


@dataclass(frozen=True)
class Move:
    """Step forward if the cell ahead is free."""

    success: int
    fail: int


@dataclass(frozen=True)
class FacingCheck:
    """Branch on whether the ant currently faces ``direction``."""

    direction: Direction
    success: int
    fail: int


@dataclass(frozen=True)
class PickUpFood:
    """Take one unit of food from the current cell if possible."""

    success: int
    fail: int


@dataclass(frozen=True)
class DropFood:
    """Drop carried food if any, then go to ``next`` either way."""

    next: int


Instruction = Turn | Move | FacingCheck | PickUpFood | DropFood


def targets(instruction: Instruction) -> tuple[int, ...]:
    """Return every instruction index ``instruction`` may jump to."""
    match instruction:
        case Turn(next=nxt) | DropFood(next=nxt):
            return (nxt,)
        case Move(success=ok, fail=ko) | PickUpFood(success=ok, fail=ko):
            return (ok, ko)
        case FacingCheck(success=ok, fail=ko):
            return (ok, ko)
    msg = f"not an instruction: {instruction!r}"
    raise TypeError(msg)


def evaluate(instruction: Instruction, ant: AntHandle) -> int:
    """Run one instruction against one ant and return the next index.

    Args:
        instruction: The instruction to execute.
        ant: Open mutation handle for the executing ant.

    Returns:
        Index of the instruction the ant should run next tick.
    """
    match instruction:
        case Turn(direction=turn, next=nxt):
            ant.turn(turn)
            return nxt
        case Move(success=ok, fail=ko):
            return ok if ant.move_forward() is None else ko
        case FacingCheck(direction=direction, success=ok, fail=ko):
            return ok if ant.direction == direction else ko
        case PickUpFood(success=ok, fail=ko):
            return ok if ant.pickup_food() is None else ko
        case DropFood(next=nxt):
            if ant.drop_food() is not None:
                logger.debug("Ant %d has nothing to drop", ant.id)
            return nxt
    msg = f"not an instruction: {instruction!r}"
    raise TypeError(msg)


class Program(Sequence[Instruction]):
    """An immutable, validated sequence of instructions.

    Raises:
        ProgramError: If the program is empty or any branch target is
            outside ``[0, len(program))``.
    """

    def __init__(self, instructions: Sequence[Instruction]) -> None:
        self._instructions = tuple(instructions)
        self.validate()

    def validate(self) -> None:
        if not self._instructions:
            msg = "program has no instructions"
            raise ProgramError(msg)
        size = len(self._instructions)
        for index, instruction in enumerate(self._instructions):
            for target in targets(instruction):
                if not 0 <= target < size:
                    msg = (
                        f"instruction {index} ({type(instruction).__name__}) "
                        f"jumps to {target}, outside program of length {size}"
                    )
                    raise ProgramError(msg)

    @overload
    def __getitem__(self, index: int) -> Instruction: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Instruction, ...]: ...

    def __getitem__(self, index: int | slice) -> Instruction | tuple[Instruction, ...]:
        return self._instructions[index]

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Program):
            return self._instructions == other._instructions
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._instructions)

    def __repr__(self) -> str:
        return f"Program({list(self._instructions)!r})"


class Interpreter:
    """Runs one colour's program, one instruction per ant per tick.

    Attributes:
        program: The shared, read-only program.
    """

    def __init__(self, program: Program | Sequence[Instruction]) -> None:
        self.program = program if isinstance(program, Program) else Program(program)

    def step(self, ant: AntHandle) -> int:
        """Execute the ant's current instruction and store its next index.

        Raises:
            IndexError: If the ant's pointer lies outside the program.
        """
        pointer = ant.instr_pointer
        if not 0 <= pointer < len(self.program):
            msg = f"ant {ant.id} points at {pointer}, program length {len(self.program)}"
            raise IndexError(msg)
        next_pointer = evaluate(self.program[pointer], ant)
        ant.update_instr_pointer(next_pointer)
        return next_pointer
