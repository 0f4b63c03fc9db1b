"""
Win Detector Module - Checks whether the key block reached the exit.
"""

from typing import Iterable

from .block import Block
from .board import find_key_block


def is_solved(blocks: Iterable[Block], grid_size: int) -> bool:
    """
    Check whether the key block touches the right edge of the grid.

    Pure predicate; callers may debounce before acting on it.

    Args:
        blocks: Current blocks
        grid_size: Side of the square grid

    Returns:
        True if key.x + key.width >= grid_size

    Raises:
        InvalidLevelError: If the level does not have exactly one key block
    """
    key = find_key_block(blocks)
    return key.x + key.width >= grid_size
