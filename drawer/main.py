"""Command-line entry point: run the animation headless and export the drawing."""

import argparse
import logging
import sys
from typing import Optional

from .config import Settings, settings
from .orchestrator import Orchestrator
from .render.surface import RasterSurface

logger = logging.getLogger(__name__)


# Configure logging from settings
def setup_logging(config: Settings = settings):
    """Configure logging with sensible defaults.

    Log levels can be configured via environment variables:
      DRAWER_LOG_LEVEL=INFO            # Root level (DEBUG, INFO, WARNING, ERROR)
      DRAWER_LOG_LEVEL_AGENTS=WARNING  # Dot mode changes (very verbose at DEBUG)
      DRAWER_LOG_LEVEL_RENDER=INFO     # Surface and export
    """
    root_level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=root_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    module_levels = {
        "drawer.agents": config.log_level_agents,
        "drawer.render": config.log_level_render,
    }

    for module, level_str in module_levels.items():
        level = getattr(logging, level_str.upper(), logging.INFO)
        logging.getLogger(module).setLevel(level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drawer",
        description="Animate pens tracing rotating 3D shapes and save the trails as an image.",
    )
    parser.add_argument("-o", "--output", default="drawer.png", help="Image to write (.png or .jpg)")
    parser.add_argument("-n", "--frames", type=int, default=1200, help="Frames to simulate")
    parser.add_argument("--switch-every", type=int, default=0,
                        help="Request a shape switch every N frames (0 = never)")
    parser.add_argument("--randomize-pens", action="store_true", help="Randomize pen styles at start")
    parser.add_argument("--fast", action="store_true", help="Start in fast mode")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible drawings")
    parser.add_argument("--size", type=int, default=None, help="Square canvas size in pixels")
    return parser


def run(args: argparse.Namespace, config: Settings = settings) -> Orchestrator:
    """Simulate the requested frames on a fixed-step clock."""
    if args.size:
        config = config.model_copy(update={"canvas_width": args.size, "canvas_height": args.size})

    surface = RasterSurface(config.canvas_width, config.canvas_height, config.background)
    orchestrator = Orchestrator(config, surface=surface, seed=args.seed)

    if args.fast:
        orchestrator.toggle_speed()
    if args.randomize_pens:
        orchestrator.randomize_pens()

    frame_ms = 1000.0 / config.fps
    for frame in range(args.frames):
        now = frame * frame_ms
        if args.switch_every and frame > 0 and frame % args.switch_every == 0:
            orchestrator.request_switch(now)
        orchestrator.tick(now)

    logger.info(f"Simulated {args.frames} frames, final shape {orchestrator.shape_kind.value}")
    orchestrator.export(args.output)
    return orchestrator


def main(argv: Optional[list[str]] = None) -> int:
    """Run the animation."""
    setup_logging()
    args = build_parser().parse_args(argv)

    try:
        run(args)
    except (OSError, ValueError) as e:
        logger.error(f"Drawing failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
