"""Main entry point for the creature evolution simulation.

This module provides command-line options to run the simulation:
- Web mode (default): FastAPI backend serving the simulation state
- Headless mode: runs generations as fast as possible and logs reports
- Viewer mode: pygame window
"""

import argparse
import logging
import sys

from evosim.config.simulation_config import SimulationConfig
from evosim.exceptions import EvoSimError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Apply command-line overrides to the default configuration."""
    evolution = {}
    if args.generation_length is not None:
        evolution["generation_length"] = args.generation_length
    if args.population is not None:
        evolution["population_size"] = args.population
    config = SimulationConfig()
    if evolution:
        config = config.with_overrides(evolution=evolution)
    return config.validate()


def build_manager(args: argparse.Namespace):
    from evosim.persistence import load_model
    from evosim.simulation.manager import GenerationManager

    manager = GenerationManager(build_config(args), seed=args.seed)
    if args.load_model:
        updated = manager.load_model_into_population(load_model(args.load_model))
        logger.info("Loaded %s into %d creatures", args.load_model, updated)
    return manager


def save_best(manager, path: str) -> None:
    from evosim.persistence import save_model

    exported = manager.export_best_model()
    if exported is None:
        logger.warning("No creatures left, nothing to save")
        return
    save_model(
        path,
        exported["model"],
        metadata={"generation": exported["generation"], "fitness": exported["fitness"]},
    )


def run_web_server(port: int = 8000) -> None:
    """Run the FastAPI backend."""
    import uvicorn

    from backend.main import app

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("CREATURE EVOLUTION - WEB SERVER")
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("API docs available at http://localhost:%d/docs", port)
    logger.info("Press Ctrl+C to stop the server")
    uvicorn.run(app, host="0.0.0.0", port=port)


def run_headless(args: argparse.Namespace) -> None:
    """Run generations without any UI, logging one line per generation."""
    manager = build_manager(args)
    reports = manager.run(args.generations)
    logger.info(
        "Completed %d generations (%d ticks)", len(reports), manager.total_ticks
    )
    if args.save_model:
        save_best(manager, args.save_model)


def run_viewer_mode(args: argparse.Namespace) -> None:
    from rendering.viewer import run_viewer

    manager = build_manager(args)
    run_viewer(manager, fps=args.fps, max_generations=args.generations)
    if args.save_model:
        save_best(manager, args.save_model)


def main(argv=None):
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Creature Neuroevolution Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run web server (default)
  python main.py

  # Run 20 generations headless with a fixed seed and keep the best brain
  python main.py --headless --generations 20 --seed 42 --save-model best.json

  # Watch a saved brain in a pygame window
  python main.py --viewer --load-model best.json
        """,
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--headless", action="store_true", help="Run without UI, logging generation reports"
    )
    mode.add_argument("--viewer", action="store_true", help="Open a pygame window")

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--generations",
        type=int,
        default=10,
        help="Generations to run in headless or viewer mode (default: 10)",
    )
    parser.add_argument(
        "--generation-length", type=int, default=None, help="Ticks per generation"
    )
    parser.add_argument("--population", type=int, default=None, help="Population size")
    parser.add_argument("--fps", type=int, default=60, help="Viewer frame rate (default: 60)")
    parser.add_argument("--port", type=int, default=8000, help="Web server port (default: 8000)")
    parser.add_argument(
        "--save-model", type=str, default=None, metavar="PATH", help="Save the best brain"
    )
    parser.add_argument(
        "--load-model",
        type=str,
        default=None,
        metavar="PATH",
        help="Load a brain into every creature before running",
    )

    args = parser.parse_args(argv)

    try:
        if args.headless:
            logger.info("Starting headless simulation: %d generations", args.generations)
            run_headless(args)
        elif args.viewer:
            run_viewer_mode(args)
        else:
            run_web_server(args.port)
    except EvoSimError as e:
        logger.error("Error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
