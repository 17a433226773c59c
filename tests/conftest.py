"""Shared fixtures for the hexants test suite."""

from __future__ import annotations

import pytest

from hexants.simulation.config import SimulationConfig
from hexants.world.grid import Grid
from hexants.world.world import World


class RecordingRenderer:
    """Renderer that remembers a snapshot of every frame it was shown."""

    running = True

    def __init__(self) -> None:
        self.frames: list[list] = []

    def render(self, world: World) -> None:
        self.frames.append(world.ants())


@pytest.fixture
def small_grid() -> Grid:
    """An empty 10x10 grid with no walls or food."""
    return Grid(width=10, height=10)


@pytest.fixture
def small_world(small_grid: Grid) -> World:
    """A 10x10 world with no ants."""
    return World(small_grid)


@pytest.fixture
def recorder() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def scenario_config() -> SimulationConfig:
    """A small config with walls, food, two swarms and two programs."""
    return SimulationConfig(
        ticks=5,
        scenario={
            "world": {
                "width": 8,
                "height": 6,
                "walls": [[4, 0], [4, 1]],
                "food": [{"x": 2, "y": 2, "amount": 3}],
            },
            "ants": [
                {"color": "red", "x": 2, "y": 2},
                {"color": "black", "x": 6, "y": 4, "direction": "left"},
                {"color": "red", "x": 0, "y": 5, "direction": "up_right"},
            ],
            "programs": {
                "red": [
                    {"op": "pickup", "success": 1, "fail": 1},
                    {"op": "move", "success": 0, "fail": 2},
                    {"op": "turn", "direction": "right", "next": 0},
                ],
                "black": [
                    {"op": "move", "success": 0, "fail": 1},
                    {"op": "turn", "direction": "left", "next": 0},
                ],
            },
        },
    )
