"""Entry point for ``python -m hexants``.

Loads a YAML config, builds the world and programs from its scenario,
and runs the simulation with the chosen renderer.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from hexants.simulation.config import (
    RENDERERS,
    SimulationConfig,
    build_programs,
    build_world,
)
from hexants.simulation.engine import NullRenderer, Renderer, Simulator
from hexants.ui.text_client import TextRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def _make_renderer(config: SimulationConfig, width: int, height: int) -> Renderer:
    if config.renderer == "text":
        return TextRenderer()
    if config.renderer == "pygame":
        from hexants.ui.pygame_client import PygameRenderer

        return PygameRenderer(
            width=width,
            height=height,
            cell_size=config.cell_size,
            fps=config.fps,
        )
    return NullRenderer()


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, build the simulator, run it."""
    parser = argparse.ArgumentParser(
        prog="hexants",
        description="hexants - programmable ant colonies on a hex grid",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Number of ticks to run (overrides config)",
    )
    parser.add_argument(
        "--renderer",
        choices=RENDERERS,
        default=None,
        help="Renderer to use (overrides config)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=None,
        help="Hex radius in pixels for the pygame renderer",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=None,
        help="Ticks per second for the pygame renderer",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    args = parser.parse_args(argv)

    config = SimulationConfig.from_yaml(args.config)
    if args.ticks is not None:
        config.ticks = args.ticks
    if args.renderer is not None:
        config.renderer = args.renderer
    if args.cell_size is not None:
        config.cell_size = args.cell_size
    if args.fps is not None:
        config.fps = args.fps
    if args.log_level is not None:
        config.log_level = args.log_level

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    world = build_world(config)
    programs = build_programs(config)
    renderer = _make_renderer(config, world.grid.width, world.grid.height)
    simulator = Simulator(world=world, programs=programs, renderer=renderer)
    simulator.run(config.ticks)
    logging.getLogger(__name__).info(
        "Finished after %d ticks, total food %d",
        simulator.tick,
        world.total_food(),
    )


if __name__ == "__main__":
    main()
