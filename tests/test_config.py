"""Tests for hexants.simulation.config - YAML loading and scenario building."""

from pathlib import Path

import pytest

from hexants.colony.ant import Color
from hexants.program.instructions import Move, Turn
from hexants.simulation.config import (
    ConfigError,
    SimulationConfig,
    build_programs,
    build_world,
)
from hexants.simulation.engine import Simulator
from hexants.world.geometry import Direction, Position, TurnDirection
from hexants.world.world import PlacementError, WorldError

_DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config" / "default.yaml"


class TestSimulationConfig:
    """Tests for YAML config loading."""

    def test_defaults(self) -> None:
        cfg = SimulationConfig()
        assert cfg.ticks == 100
        assert cfg.renderer == "none"
        assert cfg.scenario == {}

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("ticks: 7\nrenderer: text\nfps: 3\n")
        cfg = SimulationConfig.from_yaml(yaml_file)
        assert cfg.ticks == 7
        assert cfg.renderer == "text"
        assert cfg.fps == 3
        assert cfg.cell_size == SimulationConfig.cell_size

    def test_empty_yaml_uses_defaults(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert SimulationConfig.from_yaml(yaml_file) == SimulationConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            SimulationConfig.from_yaml(tmp_path / "nope.yaml")

    def test_bad_renderer(self) -> None:
        with pytest.raises(ConfigError):
            SimulationConfig(renderer="opengl")

    def test_default_config_file_builds(self) -> None:
        cfg = SimulationConfig.from_yaml(_DEFAULT_CONFIG)
        world = build_world(cfg)
        programs = build_programs(cfg)
        sim = Simulator(world=world, programs=programs)
        total = world.total_food()
        sim.run(ticks=cfg.ticks)
        assert sim.tick == cfg.ticks
        assert world.total_food() == total
        assert world.invariant_violations() == []


class TestScenarioBuilding:
    """Tests for turning a scenario block into a world and programs."""

    def test_build_world(self, scenario_config: SimulationConfig) -> None:
        world = build_world(scenario_config)
        assert world.grid.width == 8
        assert world.grid.height == 6
        assert world.grid.cell_at(Position(4, 0)).is_wall
        assert world.grid.cell_at(Position(2, 2)).food == 3
        assert world.swarm_ids(Color.RED) == (0, 2)
        assert world.swarm_ids(Color.BLACK) == (1,)
        assert world.ant(1).direction == Direction.LEFT
        assert world.ant(2).direction == Direction.UP_RIGHT

    def test_build_programs_keeps_order(self, scenario_config: SimulationConfig) -> None:
        programs = build_programs(scenario_config)
        assert list(programs) == [Color.RED, Color.BLACK]
        assert programs[Color.BLACK][0] == Move(success=0, fail=1)
        assert programs[Color.BLACK][1] == Turn(TurnDirection.LEFT, next=0)

    def test_scenario_runs(self, scenario_config: SimulationConfig) -> None:
        world = build_world(scenario_config)
        sim = Simulator(world=world, programs=build_programs(scenario_config))
        sim.run(scenario_config.ticks)
        assert sim.tick == 5
        assert world.total_food() == 3

    def test_missing_world_block(self) -> None:
        with pytest.raises(ConfigError):
            build_world(SimulationConfig())

    def test_wall_out_of_bounds(self) -> None:
        cfg = SimulationConfig(
            scenario={"world": {"width": 3, "height": 3, "walls": [[5, 5]]}},
        )
        with pytest.raises(ConfigError):
            build_world(cfg)

    def test_ant_on_wall(self) -> None:
        cfg = SimulationConfig(
            scenario={
                "world": {"width": 3, "height": 3, "walls": [[1, 1]]},
                "ants": [{"color": "red", "x": 1, "y": 1}],
            },
        )
        with pytest.raises(PlacementError) as excinfo:
            build_world(cfg)
        assert excinfo.value.reason == WorldError.WALL

    def test_unknown_colour(self) -> None:
        cfg = SimulationConfig(
            scenario={
                "world": {"width": 3, "height": 3},
                "ants": [{"color": "green", "x": 1, "y": 1}],
            },
        )
        with pytest.raises(ConfigError, match="green"):
            build_world(cfg)

    def test_ant_missing_coordinate(self) -> None:
        cfg = SimulationConfig(
            scenario={
                "world": {"width": 3, "height": 3},
                "ants": [{"color": "red", "y": 1}],
            },
        )
        with pytest.raises(ConfigError, match="bad position"):
            build_world(cfg)

    def test_ant_entry_not_a_mapping(self) -> None:
        cfg = SimulationConfig(
            scenario={"world": {"width": 3, "height": 3}, "ants": [[1, 1]]},
        )
        with pytest.raises(ConfigError):
            build_world(cfg)

    def test_food_as_pair_places_one_unit(self) -> None:
        cfg = SimulationConfig(
            scenario={"world": {"width": 3, "height": 3, "food": [[1, 1]]}},
        )
        world = build_world(cfg)
        assert world.grid.cell_at(Position(1, 1)).food == 1

    def test_bad_food_amount(self) -> None:
        cfg = SimulationConfig(
            scenario={
                "world": {"width": 3, "height": 3, "food": [{"x": 1, "y": 1, "amount": "lots"}]},
            },
        )
        with pytest.raises(ConfigError):
            build_world(cfg)

    def test_empty_blocks_are_empty(self) -> None:
        cfg = SimulationConfig(
            scenario={
                "world": {"width": 3, "height": 3, "walls": None, "food": None},
                "ants": None,
                "programs": None,
            },
        )
        assert len(build_world(cfg)) == 0
        assert build_programs(cfg) == {}

    def test_empty_programs_in_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty_programs.yaml"
        yaml_file.write_text(
            "scenario:\n  world: {width: 2, height: 2}\n  ants:\n  programs:\n",
        )
        cfg = SimulationConfig.from_yaml(yaml_file)
        assert build_programs(cfg) == {}
        assert len(build_world(cfg)) == 0

    def test_programs_wrong_type(self) -> None:
        cfg = SimulationConfig(scenario={"programs": [{"op": "drop", "next": 0}]})
        with pytest.raises(ConfigError, match="'programs' must be a dict"):
            build_programs(cfg)

    def test_bad_program(self) -> None:
        cfg = SimulationConfig(
            scenario={"programs": {"red": [{"op": "move", "success": 0, "fail": 9}]}},
        )
        with pytest.raises(ConfigError, match="red"):
            build_programs(cfg)
