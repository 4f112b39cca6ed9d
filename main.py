"""
Sokoban Solver - Entry Point

Solves a level from a collection file (or the built-in tutorial level) with
the selected search strategy and prints the move sequence.

Example:
    python main.py
    python main.py levels/microban.txt --index 3 --strategy bfs
    python main.py levels/original.json -s bestfirst --replay --debug
"""

import sys
import logging
import argparse
from typing import Any, Dict, List, Optional

from src.levels import LevelData, LevelFormatError, TUTORIAL_LEVEL, load_levels
from src.render import render_state, save_debug_image
from src.settings import load_settings, save_settings
from src.solution_manager import PlaybackState, SolutionManager
from src.solver import (
    InvalidGridError,
    SolveStatus,
    get_strategy_info,
    resolve_strategy_name,
)


logger = logging.getLogger(__name__)

# Process exit codes
EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_EXHAUSTED = 2
EXIT_INVALID_INPUT = 3

_STATUS_EXIT_CODES = {
    SolveStatus.SOLVED: EXIT_SOLVED,
    SolveStatus.NO_SOLUTION: EXIT_NO_SOLUTION,
    SolveStatus.RESOURCE_EXHAUSTED: EXIT_EXHAUSTED,
}


def configure_logging(verbose: bool = False) -> None:
    """Configure logging - output to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sokoban Solver - search strategies for box-pushing puzzles"
    )
    parser.add_argument(
        "level_file",
        nargs="?",
        help="Level collection (.txt/.sok text or .json records); tutorial level if omitted"
    )
    parser.add_argument(
        "--index", "-i",
        type=int,
        default=0,
        help="Level index within the collection (default: 0)"
    )
    parser.add_argument(
        "--strategy", "-s",
        help="Strategy name or alias (default: from settings)"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        help="Time budget in seconds (default: from settings)"
    )
    parser.add_argument(
        "--max-nodes",
        type=int,
        help="Node expansion budget (default: from settings)"
    )
    parser.add_argument(
        "--max-rounds",
        type=int,
        help="Threshold rounds for the deepening strategy (default: from settings)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the per-call hash tables (default: random)"
    )
    parser.add_argument(
        "--replay", "-r",
        action="store_true",
        help="Print the grid after every move of the solution"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Save an image of the final state to the debug directory"
    )
    parser.add_argument(
        "--list-strategies",
        action="store_true",
        help="List available strategies and exit"
    )
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Store the chosen strategy and budgets in config.json"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def select_level(level_file: Optional[str], index: int) -> LevelData:
    """
    Pick the level to solve.

    Args:
        level_file: Collection path, or None for the tutorial level
        index: Level index within the collection

    Returns:
        Selected level

    Raises:
        LevelFormatError: If the file cannot be loaded or the index is out of range
    """
    if level_file is None:
        return TUTORIAL_LEVEL

    levels = load_levels(level_file)
    if not 0 <= index < len(levels):
        raise LevelFormatError(
            f"Level index {index} out of range, {level_file} has {len(levels)} levels"
        )
    return levels[index]


def build_options(args, settings: Dict[str, Any]) -> Dict[str, Any]:
    """Merge CLI flags over stored settings."""
    strategy_name = resolve_strategy_name(args.strategy or settings["strategy_name"])
    options = {
        "strategy_name": strategy_name,
        "timeout_sec": args.timeout if args.timeout is not None else settings["timeout_sec"],
        "max_nodes": args.max_nodes if args.max_nodes is not None else settings["max_nodes"],
        "max_rounds": args.max_rounds if args.max_rounds is not None else settings["max_rounds"],
        "debug_enabled": args.debug or settings.get("debug_enabled", False),
    }
    return options


def print_strategies() -> None:
    for info in get_strategy_info():
        aliases = f" ({info['aliases']})" if info["aliases"] else ""
        print(f"  {info['name']}{aliases}: {info['description']}")


def run(args) -> int:
    """
    Solve the selected level and report the result.

    Returns:
        Exit code
    """
    if args.list_strategies:
        print_strategies()
        return EXIT_SOLVED

    settings = load_settings()
    try:
        options = build_options(args, settings)
    except ValueError as e:
        logger.error(str(e))
        return EXIT_INVALID_INPUT

    if args.save_settings:
        settings.update({
            key: options[key]
            for key in ("strategy_name", "timeout_sec", "max_nodes", "max_rounds")
        })
        save_settings(settings)

    try:
        level = select_level(args.level_file, args.index)
    except LevelFormatError as e:
        logger.error(str(e))
        return EXIT_INVALID_INPUT

    strategy_kwargs = {}
    if options["strategy_name"] == "deepening":
        strategy_kwargs["max_rounds"] = options["max_rounds"]

    manager = SolutionManager(
        options["strategy_name"],
        timeout_sec=options["timeout_sec"],
        max_nodes=options["max_nodes"],
        seed=args.seed,
        **strategy_kwargs
    )

    logger.info(f"Solving '{level.display_name}' with {manager.strategy_name}")
    print("\n".join(level.rows))

    try:
        solution = manager.load(level.rows)
    except InvalidGridError as e:
        logger.error(f"Invalid level: {e}")
        return EXIT_INVALID_INPUT

    metrics = solution.metrics
    print(
        f"\n{solution.status.name}: {solution.move_count} moves "
        f"({solution.push_count} pushes), {metrics.states_explored} states, "
        f"{metrics.computation_time_ms:.1f}ms"
    )

    if solution.is_solved:
        print(" ".join(solution.move_names()) or "(already solved)")

        if args.replay:
            while manager.state == PlaybackState.PLAYING:
                move = manager.next_move
                state = manager.advance()
                print(f"\n{manager.moves_played}. {move.name}")
                print("\n".join(state.to_rows()))

        if options["debug_enabled"]:
            manager.play_all()
            path = save_debug_image(render_state(manager.current_state, solution))
            logger.info(f"Debug image saved: {path}")

    return _STATUS_EXIT_CODES[solution.status]


def main():
    """Initialize and run the Sokoban Solver."""
    args = parse_args()
    configure_logging(args.verbose)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
