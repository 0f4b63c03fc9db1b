"""
Hamster Escape - Entry Point

Loads a level (tutorial or generated), prints it, and optionally lets a
hint strategy play it out. Handy for inspecting the generator and hints.

Example:
    python main.py --level 5
    python main.py --level 8 --seed 42 --autoplay 30 --strategy unblock
    python main.py --difficulty 3 --debug   # Save PNG snapshots to ./debug
"""

import sys
import random
import logging
import argparse
from typing import Optional

from hamster_escape.debug import save_debug_image
from hamster_escape.engine import (
    generate_level,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
)
from hamster_escape.progress import ProgressStore
from hamster_escape.session import GameSession
from hamster_escape.settings import load_settings, save_settings


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler("hamster_escape.log", mode='w', encoding='utf-8')
    ]
)
logger = logging.getLogger(__name__)


class Application:
    """
    Command-line driver around a GameSession.
    """

    def __init__(self, strategy_name: Optional[str] = None, seed: Optional[int] = None,
                 debug_mode: bool = False):
        """
        Initialize the application.

        Args:
            strategy_name: Hint strategy (overrides saved setting)
            seed: Random seed for generated levels (overrides saved setting)
            debug_mode: Save debug images (overrides saved setting)
        """
        self.settings = load_settings()

        if strategy_name:
            self.settings["hint_strategy"] = strategy_name
        if self.settings.get("hint_strategy") not in get_strategy_names():
            logger.warning(f"Unknown hint strategy '{self.settings.get('hint_strategy')}', "
                           f"using default")
            self.settings["hint_strategy"] = get_default_strategy_name()

        self.seed = seed if seed is not None else self.settings.get("seed")
        self.debug_mode = debug_mode or bool(self.settings.get("debug_enabled", False))

        self.progress = ProgressStore.load()
        self.session = GameSession(
            grid_size=self.settings["grid_size"],
            exit_row=self.settings["exit_row"],
            hint_strategy=self.settings["hint_strategy"],
            progress=self.progress,
            rng=random.Random(self.seed),
            on_level_solved=self._on_level_solved,
        )

    def _on_level_solved(self, level: int, moves: int):
        logger.info(f"Level {level} complete in {moves} moves!")

    def show(self, caption: str) -> None:
        """Print the board and save a debug image in debug mode."""
        board = self.session.board
        print(f"\n{caption}")
        print(board.to_ascii())
        if self.debug_mode:
            save_debug_image(board, caption)

    def load(self, level: Optional[int], difficulty: Optional[int]) -> None:
        """Load a numbered level, or a one-off generated level for a difficulty."""
        if difficulty is not None:
            blocks = generate_level(self.session.grid_size, difficulty,
                                    rng=self.session.rng, exit_row=self.session.exit_row)
            self.session.load_blocks(blocks)
            self.show(f"Generated level (difficulty {difficulty})")
            return

        level = level or self.progress.highest_level
        self.session.load_level(level)
        self.show(f"Level {level}")

    def autoplay(self, max_steps: int) -> bool:
        """
        Apply hints until the level is solved or max_steps hints were played.

        Returns:
            True if the level was solved
        """
        for step in range(1, max_steps + 1):
            hint = self.session.hint()
            if hint is None:
                logger.warning("No block can move, giving up")
                return False

            result = self.session.move_direction(hint.block_id, hint.direction)
            self.show(f"Step {step}: {hint} ({result.outcome.value})")
            if self.session.is_solved:
                return True

        logger.info(f"Not solved after {max_steps} hinted moves")
        return False

    def run(self, level: Optional[int], difficulty: Optional[int], autoplay_steps: int) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        self.load(level, difficulty)
        if autoplay_steps > 0:
            solved = self.autoplay(autoplay_steps)
            print(f"\nSolved: {solved}, moves: {self.session.moves}, "
                  f"hints: {self.session.hints_used}")
        save_settings(self.settings)
        return 0


def parse_args():
    """Parse command line arguments."""
    strategies = ", ".join(f"{s['name']} ({s['description']})" for s in get_strategy_info())
    parser = argparse.ArgumentParser(
        description="Hamster Escape - Sliding-block escape puzzle"
    )
    parser.add_argument(
        "--level", "-l",
        type=int,
        default=None,
        help="Level number to load (default: highest level reached)"
    )
    parser.add_argument(
        "--difficulty",
        type=int,
        default=None,
        help="Generate a one-off level with this difficulty instead of a numbered level"
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for level generation"
    )
    parser.add_argument(
        "--strategy",
        default=None,
        help=f"Hint strategy: {strategies}"
    )
    parser.add_argument(
        "--autoplay", "-a",
        type=int,
        default=0,
        metavar="N",
        help="Play up to N hinted moves"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug mode (save board images to ./debug)"
    )
    return parser.parse_args()


def main():
    """Initialize and run Hamster Escape."""
    args = parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    application = Application(strategy_name=args.strategy, seed=args.seed,
                              debug_mode=args.debug)
    sys.exit(application.run(args.level, args.difficulty, args.autoplay))


if __name__ == "__main__":
    main()
