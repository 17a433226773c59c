"""Simulator — the main tick loop.

One tick runs every ant exactly once:

1. For each colour in program order, snapshot that colour's swarm.
2. For each ant in the snapshot, in creation order, open its handle and
   run the instruction at its pointer.
3. Hand the finished world to the renderer.

Ants act strictly one after another, so an ant that moves out of a cell
frees it for ants later in the same tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from hexants.program.instructions import Interpreter, Program

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from hexants.colony.ant import Color
    from hexants.program.instructions import Instruction
    from hexants.world.world import World

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Observes the world once per tick.  Must not mutate it."""

    def render(self, world: World) -> None: ...


class NullRenderer:
    """Renderer that draws nothing."""

    running = True

    def render(self, world: World) -> None:
        pass


@dataclass
class Simulator:
    """Drives the world forward tick by tick.

    Attributes:
        world: The world being simulated.
        programs: Program for each colour; iteration order is tick order.
        renderer: Called once at the end of every tick.
        interpreters: One interpreter per colour, built from ``programs``.
        tick: Number of completed ticks.
    """

    world: World
    programs: Mapping[Color, Program | Sequence[Instruction]]
    renderer: Renderer | None = None
    interpreters: dict[Color, Interpreter] = field(init=False)
    tick: int = 0

    def __post_init__(self) -> None:
        """Build interpreters and check every ant has a program."""
        if self.renderer is None:
            self.renderer = NullRenderer()
        self.interpreters = {
            color: Interpreter(program) for color, program in self.programs.items()
        }
        self._check_programs()

    def _check_programs(self) -> None:
        """Raise ``ValueError`` if any ant's colour has no program."""
        orphans = [c.value for c in self.world.colors() if c not in self.interpreters]
        if orphans:
            msg = f"no program for ant colour(s): {', '.join(orphans)}"
            raise ValueError(msg)

    def step(self) -> None:
        """Advance the simulation by one tick.

        Raises:
            ValueError: If an ant was added whose colour has no program.
                Nothing is mutated in that case.
        """
        self._check_programs()
        for color, interpreter in self.interpreters.items():
            for ant_id in self.world.swarm_ids(color):
                with self.world.ant_mut(ant_id) as ant:
                    interpreter.step(ant)

        self.tick += 1
        logger.debug("Tick %d complete", self.tick)
        self.renderer.render(self.world)

    def run(self, ticks: int) -> None:
        """Run for ``ticks`` ticks, or until the renderer stops running.

        Args:
            ticks: Maximum number of ticks to advance.
        """
        for _ in range(ticks):
            if not getattr(self.renderer, "running", True):
                logger.info("Renderer closed after %d ticks", self.tick)
                break
            self.step()
