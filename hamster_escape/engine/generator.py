"""
Level Generator Module - Random puzzle layouts with a solvability filter.

Levels are built by random placement checked against the full placement
rules, then filtered by a cheap heuristic. The heuristic is approximate:
it is a generation-time filter, not a proof that the level can be solved.
When every attempt fails, a fixed known-solvable level is returned, so
generation never fails on grids of at least MIN_FALLBACK_GRID cells a side.
"""

import logging
import random
from typing import List, Optional, Tuple

from .block import Block, BlockKind
from .board import EXIT_ROW, GRID_SIZE, BoardState
from .placement import is_valid_placement

logger = logging.getLogger(__name__)


MAX_ATTEMPTS = 100
MAX_PLACEMENT_ATTEMPTS = 100

# Blocks of each slider kind: difficulty + 2, capped
MAX_SLIDERS_PER_KIND = 8

# Key starts in one of the leftmost columns
KEY_MAX_START_X = 2

# Heuristic thresholds
MIN_OBSTRUCTIONS = 1
MAX_OBSTRUCTIONS = 5
MAX_NEARBY_VERTICALS = 3

SLIDER_MIN_LENGTH = 2
SLIDER_MAX_LENGTH = 3

# Smallest grid the fallback layout fits in
MIN_FALLBACK_GRID = 4


def slider_count(difficulty: int) -> int:
    """Number of blocks of each slider kind for a difficulty."""
    return max(0, min(difficulty + 2, MAX_SLIDERS_PER_KIND))


def fallback_level(grid_size: int = GRID_SIZE, exit_row: int = EXIT_ROW) -> Tuple[Block, ...]:
    """
    Fixed level used when generation gives up.

    Two vertical sliders stand across the exit row next to the key, with
    a horizontal slider tucked under the key. The layout is built toward
    the farther grid edge, so it is solvable in three moves: v1 and v2 one
    cell away from the exit row (down when the exit row is in the upper
    half, up otherwise), then the key right.

    Args:
        grid_size: Side of the square grid (at least 4)
        exit_row: Exit lane row

    Returns:
        Tuple of blocks with exactly one key block

    Raises:
        ValueError: If the grid is too small or exit_row is off the grid
    """
    if grid_size < MIN_FALLBACK_GRID:
        raise ValueError(f"Grid of size {grid_size} is too small for a fallback level")
    if not 0 <= exit_row < grid_size:
        raise ValueError(f"Exit row {exit_row} is outside a grid of size {grid_size}")

    # Build with the exit row in the upper half, mirror afterwards
    mirrored = exit_row > grid_size - 1 - exit_row
    row = grid_size - 1 - exit_row if mirrored else exit_row
    v2_height = 3 if row + 4 <= grid_size else 2

    blocks = (
        Block.key(0, row),
        Block.vertical("v1", 2, row, height=2),
        Block.vertical("v2", 3, row, height=v2_height),
        Block.horizontal("h1", 0, row + 1, width=2),
    )
    if not mirrored:
        return blocks
    return tuple(b.moved_to(b.x, grid_size - b.bottom) for b in blocks)


def _try_place_slider(blocks: List[Block], kind: BlockKind, block_id: str,
                      grid_size: int, rng: random.Random,
                      max_attempts: int = MAX_PLACEMENT_ATTEMPTS) -> bool:
    """
    Try random positions for one slider until one passes every placement rule.

    Args:
        blocks: Blocks placed so far (appended to on success)
        kind: HORIZONTAL or VERTICAL
        block_id: Id for the new block
        grid_size: Side of the square grid
        rng: Random source
        max_attempts: Random positions to try

    Returns:
        True if the block was placed
    """
    for _ in range(max_attempts):
        length = rng.randint(SLIDER_MIN_LENGTH, min(SLIDER_MAX_LENGTH, grid_size))
        width = length if kind is BlockKind.HORIZONTAL else 1
        height = length if kind is BlockKind.VERTICAL else 1

        candidate = Block(
            id=block_id,
            x=rng.randint(0, grid_size - width),
            y=rng.randint(0, grid_size - height),
            width=width,
            height=height,
            kind=kind,
        )
        if is_valid_placement(candidate, blocks, grid_size):
            blocks.append(candidate)
            return True
    return False


def count_obstructions(blocks: Tuple[Block, ...], key: Block) -> int:
    """Count blocks standing in the key's row between the key and the exit."""
    return sum(
        1 for b in blocks
        if b.id != key.id and b.x >= key.right
        and b.y <= key.y < b.bottom
    )


def count_nearby_verticals(blocks: Tuple[Block, ...], key: Block) -> int:
    """
    Count vertical sliders crowding the key.

    A vertical is nearby when its column lies within one cell of the key's
    span and it covers the key row or one of the rows next to it.
    """
    return sum(
        1 for b in blocks
        if b.kind is BlockKind.VERTICAL
        and key.x - 1 <= b.x <= key.right
        and b.y <= key.y + 1 and b.bottom >= key.y
    )


def is_probably_solvable(blocks: Tuple[Block, ...], grid_size: int = GRID_SIZE,
                         exit_row: int = EXIT_ROW, difficulty: int = 1) -> bool:
    """
    Heuristic playability filter for a generated layout.

    Checks that:
        - the key sits in the exit row
        - between MIN_OBSTRUCTIONS and MAX_OBSTRUCTIONS blocks stand
          between the key and the exit
        - fewer than MAX_NEARBY_VERTICALS verticals crowd the key
        - a row next to the exit row has at least one free cell
        - the level holds at least difficulty + 3 blocks

    Args:
        blocks: Generated blocks
        grid_size: Side of the square grid
        exit_row: Exit lane row
        difficulty: Requested difficulty

    Returns:
        True if the layout passes every check
    """
    keys = [b for b in blocks if b.is_key]
    if len(keys) != 1:
        return False
    key = keys[0]

    if key.y != exit_row:
        return False

    obstructions = count_obstructions(blocks, key)
    if not MIN_OBSTRUCTIONS <= obstructions <= MAX_OBSTRUCTIONS:
        return False

    if count_nearby_verticals(blocks, key) >= MAX_NEARBY_VERTICALS:
        return False

    board = BoardState.from_blocks(blocks, grid_size, exit_row)
    if not any(board.free_cells_in_row(row) > 0 for row in (exit_row - 1, exit_row + 1)):
        return False

    return len(blocks) >= difficulty + 3


def generate_level(grid_size: int = GRID_SIZE, difficulty: int = 1,
                   rng: Optional[random.Random] = None, exit_row: int = EXIT_ROW,
                   max_attempts: int = MAX_ATTEMPTS) -> Tuple[Block, ...]:
    """
    Generate a random level.

    Args:
        grid_size: Side of the square grid
        difficulty: Difficulty level (1 = easiest); raises the slider count
        rng: Random source, seed it for reproducible levels
        exit_row: Exit lane row
        max_attempts: Layouts to try before falling back

    Returns:
        Tuple of blocks with exactly one key block

    Raises:
        ValueError: If generation falls back on a grid the fallback level
            does not fit (see fallback_level)
    """
    rng = rng or random.Random()
    count = slider_count(difficulty)

    for attempt in range(1, max_attempts + 1):
        blocks: List[Block] = [
            Block.key(rng.randint(0, min(KEY_MAX_START_X, grid_size - 2)), exit_row)
        ]

        # A slider that fits nowhere is skipped; partial levels are fine
        for i in range(count):
            _try_place_slider(blocks, BlockKind.HORIZONTAL, f"h{i + 1}", grid_size, rng)
        for i in range(count):
            _try_place_slider(blocks, BlockKind.VERTICAL, f"v{i + 1}", grid_size, rng)

        level = tuple(blocks)
        if is_probably_solvable(level, grid_size, exit_row, difficulty):
            logger.debug(f"Generated level (difficulty {difficulty}) with "
                         f"{len(level)} blocks in {attempt} attempt(s)")
            return level

    logger.warning(f"Level generation failed after {max_attempts} attempts "
                   f"(difficulty {difficulty}), using fallback level")
    return fallback_level(grid_size, exit_row)
