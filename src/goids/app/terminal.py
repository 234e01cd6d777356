from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Optional, TextIO

from ..render.frame import FrameRenderer
from ..render.terminal import TerminalDisplay
from ..sim.core.config import ConfigError, SimulationConfig
from ..sim.core.world import World

logger = logging.getLogger(__name__)


def run_terminal(config: SimulationConfig, stream: Optional[TextIO] = None) -> World:
    """Step the flock ``config.ticks`` times, drawing every frame inline in the terminal."""
    world = World(config)
    renderer = FrameRenderer(config.width, config.height, config.render)
    display = TerminalDisplay(stream)
    logger.info("Running %d ticks with %d agents", config.ticks, len(world.agents))

    display.clear_screen()
    display.hide_cursor()
    try:
        for tick in range(config.ticks):
            world.step(tick)
            display.show_image(renderer.render_png(world.snapshot(tick)))
            display.show_status(tick)
            if config.render.frame_delay > 0:
                time.sleep(config.render.frame_delay)
    finally:
        display.show_cursor()
    logger.info("Finished after %d ticks", config.ticks)
    return world


def build_config(config_path: Optional[Path], ticks: Optional[int], seed: Optional[int]) -> SimulationConfig:
    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if ticks is not None:
        config.ticks = ticks
    if seed is not None:
        config.seed = seed
    return config


def main() -> None:
    parser = argparse.ArgumentParser(description="Flocking simulation rendered inline in an iTerm2 terminal")
    parser.add_argument("--config", type=Path, default=None, help="YAML file with simulation settings")
    parser.add_argument("--ticks", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="WARNING", help="Logging level (logs go to stderr)")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        run_terminal(build_config(args.config, args.ticks, args.seed))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        raise


if __name__ == "__main__":
    main()
