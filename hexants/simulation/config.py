"""Config — load run settings and the starting scenario from YAML.

A config file has run settings at the top level and a ``scenario``
block describing the initial world, ant placements and programs::

    ticks: 200
    renderer: text
    scenario:
      world:
        width: 16
        height: 12
        walls: [[0, 0], [1, 0]]
        food:
          - {x: 8, y: 6, amount: 5}
      ants:
        - {color: red, x: 2, y: 2, direction: right}
      programs:
        red:
          - {op: move, success: 0, fail: 1}
          - {op: turn, direction: left, next: 0}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from hexants.colony.ant import Color
from hexants.program.instructions import Program, ProgramError
from hexants.program.loader import load_program
from hexants.world.geometry import Direction, Position
from hexants.world.grid import Grid
from hexants.world.world import World

logger = logging.getLogger(__name__)

RENDERERS = ("none", "text", "pygame")


class ConfigError(ValueError):
    """Raised when a config file or scenario block is malformed."""


@dataclass
class SimulationConfig:
    """Top-level run configuration.

    Attributes:
        ticks: Number of ticks to run.
        renderer: Which renderer to use (``none``, ``text`` or ``pygame``).
        cell_size: Pixel size of a hex cell for the pygame renderer.
        fps: Frame cap for the pygame renderer.
        log_level: Logging level name for the CLI.
        scenario: Raw scenario block; see the module docstring.
    """

    ticks: int = 100
    renderer: str = "none"
    cell_size: int = 16
    fps: int = 10
    log_level: str = "WARNING"
    scenario: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.renderer not in RENDERERS:
            msg = f"unknown renderer {self.renderer!r} (expected one of {RENDERERS})"
            raise ConfigError(msg)
        if self.ticks < 0:
            msg = f"ticks must be non-negative, got {self.ticks}"
            raise ConfigError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ConfigError: If a value is invalid.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            msg = f"{path}: top level must be a mapping"
            raise ConfigError(msg)

        logger.info("Loaded config from %s", path)
        return cls(
            ticks=data.get("ticks", cls.ticks),
            renderer=data.get("renderer", cls.renderer),
            cell_size=data.get("cell_size", cls.cell_size),
            fps=data.get("fps", cls.fps),
            log_level=data.get("log_level", cls.log_level),
            scenario=_block(data, "scenario", dict),
        )


def _color(name: Any) -> Color:
    try:
        return Color(str(name).lower())
    except ValueError:
        msg = f"unknown colour {name!r}"
        raise ConfigError(msg) from None


def _direction(name: Any) -> Direction:
    try:
        return Direction[str(name).upper()]
    except KeyError:
        msg = f"unknown direction {name!r}"
        raise ConfigError(msg) from None


def _position(raw: Any) -> Position:
    """Read ``{x, y}`` or ``[x, y]`` as a Position."""
    try:
        if isinstance(raw, dict):
            return Position(int(raw["x"]), int(raw["y"]))
        x, y = raw
        return Position(int(x), int(y))
    except (KeyError, TypeError, ValueError):
        msg = f"bad position {raw!r} (expected {{x, y}} or [x, y])"
        raise ConfigError(msg) from None


def _food(raw: Any) -> tuple[Position, int]:
    """Read ``{x, y, amount}`` or ``[x, y]`` (one unit) as a food placement."""
    if not isinstance(raw, dict):
        return _position(raw), 1
    try:
        amount = int(raw.get("amount", 1))
    except (TypeError, ValueError):
        msg = f"bad food amount in {raw!r}"
        raise ConfigError(msg) from None
    return _position(raw), amount


def _ant(raw: Any) -> tuple[Color, Position, Direction]:
    if not isinstance(raw, dict):
        msg = f"bad ant entry {raw!r} (expected a mapping)"
        raise ConfigError(msg)
    return (
        _color(raw.get("color")),
        _position(raw),
        _direction(raw.get("direction", "right")),
    )


def _block(mapping: dict[str, Any], key: str, kind: type) -> Any:
    """Return ``mapping[key]``, treating a missing or empty value as empty."""
    value = mapping.get(key) or kind()
    if not isinstance(value, kind):
        msg = f"'{key}' must be a {kind.__name__}, got {type(value).__name__}"
        raise ConfigError(msg)
    return value


def build_world(config: SimulationConfig) -> World:
    """Create the grid and place every ant described by the scenario.

    Raises:
        ConfigError: If the world block is missing or malformed.
        PlacementError: If an ant cannot be placed.
    """
    block = config.scenario.get("world")
    if not block:
        msg = "scenario has no 'world' block"
        raise ConfigError(msg)
    if not isinstance(block, dict):
        msg = "'world' must be a mapping"
        raise ConfigError(msg)

    try:
        grid = Grid(width=int(block["width"]), height=int(block["height"]))
        for raw in _block(block, "walls", list):
            grid.set_wall(_position(raw))
        for raw in _block(block, "food", list):
            grid.set_food(*_food(raw))
    except ConfigError:
        raise
    except (KeyError, TypeError, IndexError, ValueError) as exc:
        msg = f"bad world block: {exc}"
        raise ConfigError(msg) from exc

    world = World(grid)
    for raw in _block(config.scenario, "ants", list):
        color, position, direction = _ant(raw)
        world.add_ant(color, position, direction=direction)

    logger.info(
        "Built %dx%d world with %d ants",
        grid.width,
        grid.height,
        len(world),
    )
    return world


def build_programs(config: SimulationConfig) -> dict[Color, Program]:
    """Parse each colour's program, preserving file order.

    Raises:
        ConfigError: If a colour is unknown or a program is malformed.
    """
    programs: dict[Color, Program] = {}
    for name, entries in _block(config.scenario, "programs", dict).items():
        color = _color(name)
        try:
            programs[color] = load_program(entries)
        except ProgramError as exc:
            msg = f"program for {color.value}: {exc}"
            raise ConfigError(msg) from exc
    return programs
