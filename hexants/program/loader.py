"""Build ``Program`` objects from plain data (e.g. parsed YAML).

Each instruction is a mapping with an ``op`` key::

    - {op: turn, direction: left, next: 1}
    - {op: move, success: 0, fail: 2}
    - {op: facing, direction: up_left, success: 3, fail: 0}
    - {op: pickup, success: 4, fail: 0}
    - {op: drop, next: 0}

Enum values are written as lower-case member names.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from hexants.program.instructions import (
    DropFood,
    FacingCheck,
    Instruction,
    Move,
    PickUpFood,
    Program,
    ProgramError,
    Turn,
)
from hexants.world.geometry import Direction, TurnDirection


def _field(entry: Mapping[str, Any], key: str, index: int) -> Any:
    try:
        return entry[key]
    except KeyError:
        msg = f"instruction {index} ({entry.get('op')}): missing '{key}'"
        raise ProgramError(msg) from None


def _index(entry: Mapping[str, Any], key: str, index: int) -> int:
    value = _field(entry, key, index)
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"instruction {index}: '{key}' must be an integer, got {value!r}"
        raise ProgramError(msg)
    return value


def _enum(enum_cls: type, entry: Mapping[str, Any], key: str, index: int) -> Any:
    name = _field(entry, key, index)
    try:
        return enum_cls[str(name).upper()]
    except KeyError:
        choices = ", ".join(m.name.lower() for m in enum_cls)
        msg = f"instruction {index}: bad {key} {name!r} (expected one of {choices})"
        raise ProgramError(msg) from None


def parse_instruction(entry: Mapping[str, Any], index: int = 0) -> Instruction:
    """Convert one mapping into an instruction.

    Raises:
        ProgramError: On unknown ops, missing fields, or bad values.
    """
    if not isinstance(entry, Mapping):
        msg = f"instruction {index}: expected a mapping, got {entry!r}"
        raise ProgramError(msg)

    op = str(_field(entry, "op", index)).lower()
    match op:
        case "turn":
            return Turn(
                direction=_enum(TurnDirection, entry, "direction", index),
                next=_index(entry, "next", index),
            )
        case "move":
            return Move(
                success=_index(entry, "success", index),
                fail=_index(entry, "fail", index),
            )
        case "facing":
            return FacingCheck(
                direction=_enum(Direction, entry, "direction", index),
                success=_index(entry, "success", index),
                fail=_index(entry, "fail", index),
            )
        case "pickup":
            return PickUpFood(
                success=_index(entry, "success", index),
                fail=_index(entry, "fail", index),
            )
        case "drop":
            return DropFood(next=_index(entry, "next", index))
    msg = f"instruction {index}: unknown op {op!r}"
    raise ProgramError(msg)


def load_program(entries: list[Mapping[str, Any]]) -> Program:
    """Parse and validate a whole program.

    Args:
        entries: One mapping per instruction, in program order.

    Returns:
        A validated Program.

    Raises:
        ProgramError: If any entry is malformed or a jump leaves the program.
    """
    if not isinstance(entries, list):
        msg = f"program must be a list of instructions, got {type(entries).__name__}"
        raise ProgramError(msg)
    return Program([parse_instruction(entry, i) for i, entry in enumerate(entries)])
