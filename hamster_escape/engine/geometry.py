"""
Geometry Module - Bounds, rectangle tests and move directions on the grid.
"""

from enum import Enum
from typing import Iterable, Optional, Tuple

from .block import Block, BlockKind


class Direction(Enum):
    """Single-cell move directions as (dx, dy) deltas."""
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> 'Direction':
        return Direction((-self.dx, -self.dy))

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> Optional['Direction']:
        """Direction of a single-axis delta, or None for a zero/diagonal delta."""
        if (dx == 0) == (dy == 0):
            return None
        return cls(((dx > 0) - (dx < 0), (dy > 0) - (dy < 0)))

    @classmethod
    def for_kind(cls, kind: BlockKind) -> Tuple['Direction', ...]:
        """Directions a block of the given kind may slide in (preferred first)."""
        if kind.moves_vertically:
            return (cls.DOWN, cls.UP)
        return (cls.RIGHT, cls.LEFT)


def in_bounds(block: Block, x: int, y: int, grid_size: int) -> bool:
    """
    Check whether the block's footprint placed at (x, y) lies inside the grid.

    Args:
        block: Block whose width/height are used
        x: Candidate left column
        y: Candidate top row
        grid_size: Side of the square grid

    Returns:
        True if the whole rectangle is inside [0, grid_size)
    """
    return (x >= 0 and y >= 0
            and x + block.width <= grid_size
            and y + block.height <= grid_size)


def overlaps(a: Block, b: Block) -> bool:
    """Separating-axis test for two block rectangles."""
    return not (a.x + a.width <= b.x or a.x >= b.x + b.width
                or a.y + a.height <= b.y or a.y >= b.y + b.height)


def contains_cell(block: Block, x: int, y: int) -> bool:
    return block.x <= x < block.right and block.y <= y < block.bottom


def find_block_at(blocks: Iterable[Block], x: int, y: int) -> Optional[Block]:
    """
    Find the block covering cell (x, y).

    Args:
        blocks: Blocks to search
        x: Column
        y: Row

    Returns:
        Block covering the cell, or None if the cell is empty
    """
    for block in blocks:
        if contains_cell(block, x, y):
            return block
    return None
