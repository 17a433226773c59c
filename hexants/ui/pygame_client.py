"""Pygame visualisation for the hex-grid simulation.

Draws walls, food, and ants as hexagons in a window.  The Simulator calls
``render`` once per tick; the renderer pumps window events, draws the
frame, and caps the frame rate.  It never modifies the world.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
import pygame

from hexants.colony.ant import Color

if TYPE_CHECKING:
    from hexants.world.geometry import Direction, Position
    from hexants.world.world import World

# Colour palette
_BG = (30, 20, 10)
_FREE = (60, 45, 30)
_WALL = (110, 110, 110)
_GRID_LINE = (40, 30, 20)
_CARRY_MARK = (255, 200, 50)

_ANT_COLOURS: dict[Color, tuple[int, int, int]] = {
    Color.RED: (230, 60, 60),
    Color.BLACK: (15, 15, 15),
}

# Food colour range (dark green -> bright green)
_FOOD_LO = np.array([20, 60, 10], dtype=np.float64)
_FOOD_HI = np.array([50, 200, 30], dtype=np.float64)
_FOOD_FULL = 5

_SQRT3 = math.sqrt(3.0)


class PygameRenderer:
    """Renders a World into a Pygame window.

    Attributes:
        cell_size: Hex radius in pixels.
        fps: Frame-rate cap; the simulation advances one tick per frame.
        running: False once the window has been closed.
        paused: While True, ``render`` keeps redrawing until unpaused.
    """

    def __init__(
        self,
        width: int,
        height: int,
        cell_size: int = 16,
        fps: int = 10,
    ) -> None:
        """Open the window.

        Args:
            width: Grid columns.
            height: Grid rows.
            cell_size: Hex radius in pixels.
            fps: Frames (ticks) per second.
        """
        self.cell_size = cell_size
        self.fps = fps
        self.running = True
        self.paused = False

        win_w = int(_SQRT3 * cell_size * (width + height / 2 + 1))
        win_h = int(1.5 * cell_size * (height + 1))

        pygame.init()
        self.screen = pygame.display.set_mode((win_w, win_h))
        pygame.display.set_caption("hexants")
        self.clock = pygame.time.Clock()

    def render(self, world: World) -> None:
        """Draw one frame of ``world``."""
        self._handle_events()
        self._draw(world)
        self.clock.tick(self.fps)
        while self.paused and self.running:
            self._handle_events()
            self.clock.tick(self.fps)
        if not self.running:
            pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    self.paused = not self.paused

    def _centre(self, x: int, y: int) -> tuple[float, float]:
        """Pixel centre of cell ``(x, y)``; each row shifts half a cell right."""
        r = self.cell_size
        return (_SQRT3 * r * (x + y / 2 + 0.5), 1.5 * r * y + r)

    def _hexagon(self, cx: float, cy: float) -> list[tuple[float, float]]:
        r = self.cell_size
        return [
            (cx + r * math.cos(math.radians(60 * i - 30)),
             cy + r * math.sin(math.radians(60 * i - 30)))
            for i in range(6)
        ]

    def _draw(self, world: World) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        food = world.grid.food_grid()
        walls = world.grid.wall_mask()
        for y in range(world.grid.height):
            for x in range(world.grid.width):
                if walls[y, x]:
                    colour = _WALL
                elif food[y, x] > 0:
                    t = min(food[y, x] / _FOOD_FULL, 1.0)
                    colour = tuple(
                        (_FOOD_LO + t * (_FOOD_HI - _FOOD_LO)).astype(int).tolist(),
                    )
                else:
                    colour = _FREE
                points = self._hexagon(*self._centre(x, y))
                pygame.draw.polygon(self.screen, colour, points)
                pygame.draw.polygon(self.screen, _GRID_LINE, points, 1)

        for ant in world.ants():
            self._draw_ant(ant.position, ant.direction, ant.color, ant.carries_food)
        pygame.display.flip()

    def _draw_ant(
        self,
        position: Position,
        direction: Direction,
        color: Color,
        carries_food: bool,
    ) -> None:
        """Draw an ant as a dot with a tick showing its heading."""
        cx, cy = self._centre(position.x, position.y)
        radius = max(2, self.cell_size // 2)
        pygame.draw.circle(self.screen, _ANT_COLOURS[color], (cx, cy), radius)

        # Direction.RIGHT is 0 degrees; each step clockwise adds 60.
        angle = math.radians(60 * direction.value)
        tip = (cx + radius * 1.6 * math.cos(angle), cy + radius * 1.6 * math.sin(angle))
        pygame.draw.line(self.screen, _ANT_COLOURS[color], (cx, cy), tip, 2)
        if carries_food:
            pygame.draw.circle(self.screen, _CARRY_MARK, (cx, cy), max(1, radius // 2))
