"""
Level Catalog Module - Hand-authored starter levels and level-number lookup.

The first levels of a run come from TUTORIAL_LEVELS; later level numbers
are generated with a difficulty that ramps up every three levels.
"""

import random
from typing import Optional, Tuple

from .block import Block
from .board import EXIT_ROW, GRID_SIZE
from .generator import generate_level

# Generated difficulty is capped at this value
MAX_DIFFICULTY = 5
LEVELS_PER_DIFFICULTY = 3


TUTORIAL_LEVELS: Tuple[Tuple[Block, ...], ...] = (
    # Level 1: one vertical slider across the exit row
    (
        Block.key(1, EXIT_ROW, block_id="key1"),
        Block.vertical("v1", 3, 0, height=3),
        Block.horizontal("h1", 3, 3, width=2),
    ),
    # Level 2: two sliders to clear, one of them hemmed in
    (
        Block.key(0, EXIT_ROW, block_id="key1"),
        Block.vertical("v1", 2, 0, height=3),
        Block.vertical("v2", 3, 2, height=3),
        Block.horizontal("h1", 3, 1, width=3),
        Block.horizontal("h2", 0, 4, width=2),
    ),
    # Level 3: crowded board
    (
        Block.key(1, EXIT_ROW, block_id="key1"),
        Block.vertical("v1", 0, 0, height=2),
        Block.vertical("v2", 3, 0, height=3),
        Block.vertical("v3", 4, 3, height=3),
        Block.horizontal("h1", 0, 3, width=3),
        Block.horizontal("h2", 4, 0, width=2),
        Block.horizontal("h3", 2, 5, width=2),
    ),
)


def is_tutorial_level(level_number: int, grid_size: int = GRID_SIZE,
                      exit_row: int = EXIT_ROW) -> bool:
    """Tutorial levels are authored for the canonical grid only."""
    if grid_size != GRID_SIZE or exit_row != EXIT_ROW:
        return False
    return 1 <= level_number <= len(TUTORIAL_LEVELS)


def difficulty_for_level(level_number: int) -> int:
    """
    Generator difficulty for a level number past the tutorial.

    Args:
        level_number: 1-based level number

    Returns:
        Difficulty from 1 to MAX_DIFFICULTY
    """
    past_tutorial = max(0, level_number - len(TUTORIAL_LEVELS))
    return min(past_tutorial // LEVELS_PER_DIFFICULTY + 1, MAX_DIFFICULTY)


def load_level(level_number: int, rng: Optional[random.Random] = None,
               grid_size: int = GRID_SIZE, exit_row: int = EXIT_ROW) -> Tuple[Block, ...]:
    """
    Get the blocks for a level number.

    Tutorial levels are served on the canonical grid; on any other grid
    every level number is generated.

    Args:
        level_number: 1-based level number
        rng: Random source for generated levels
        grid_size: Side of the square grid
        exit_row: Exit lane row

    Returns:
        Tuple of blocks for the level

    Raises:
        ValueError: If level_number is less than 1
    """
    if level_number < 1:
        raise ValueError(f"Level numbers start at 1, got {level_number}")

    if is_tutorial_level(level_number, grid_size, exit_row):
        return tuple(TUTORIAL_LEVELS[level_number - 1])

    return generate_level(grid_size, difficulty_for_level(level_number),
                          rng=rng, exit_row=exit_row)
