"""
Board State Module - Immutable level representation for the escape puzzle.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .block import Block, BlockKind
from .geometry import in_bounds, overlaps


# Canonical grid: 6x6 with the exit on the right edge of row 2
GRID_SIZE = 6
EXIT_ROW = 2

EMPTY_CELL = -1

_ASCII_GLYPHS = {
    BlockKind.KEY: "K",
    BlockKind.HORIZONTAL: "=",
    BlockKind.VERTICAL: "|",
}


class InvalidLevelError(ValueError):
    """Raised when a block set cannot be a legal level (caller bug)."""


def find_key_block(blocks: Iterable[Block]) -> Block:
    """
    Get the single key block of a level.

    Args:
        blocks: Level blocks

    Returns:
        The key block

    Raises:
        InvalidLevelError: If there is not exactly one key block
    """
    keys = [b for b in blocks if b.kind is BlockKind.KEY]
    if len(keys) != 1:
        raise InvalidLevelError(f"Level must have exactly one key block, found {len(keys)}")
    return keys[0]


@dataclass(frozen=True)
class BoardState:
    """
    Immutable board state.

    Wraps the ordered block tuple together with the grid parameters so
    callers (hints, session, rendering) can pass one value around. The
    engine functions themselves take plain block sequences.

    Attributes:
        blocks: Tuple of blocks in level order
        grid_size: Side of the square grid
        exit_row: Row of the exit lane on the right edge
    """
    blocks: Tuple[Block, ...]
    grid_size: int = GRID_SIZE
    exit_row: int = EXIT_ROW

    @classmethod
    def from_blocks(cls, blocks: Sequence[Block], grid_size: int = GRID_SIZE,
                    exit_row: int = EXIT_ROW) -> 'BoardState':
        """
        Create BoardState from any sequence of blocks.

        Args:
            blocks: Blocks in level order
            grid_size: Side of the square grid
            exit_row: Exit lane row

        Returns:
            BoardState instance
        """
        return cls(blocks=tuple(blocks), grid_size=grid_size, exit_row=exit_row)

    @classmethod
    def from_dicts(cls, data: List[Dict], grid_size: int = GRID_SIZE,
                   exit_row: int = EXIT_ROW) -> 'BoardState':
        """Create BoardState from the plain level schema."""
        return cls.from_blocks([Block.from_dict(d) for d in data], grid_size, exit_row)

    def with_blocks(self, blocks: Sequence[Block]) -> 'BoardState':
        """Return a board with the same grid and a new block set."""
        return BoardState(blocks=tuple(blocks), grid_size=self.grid_size,
                          exit_row=self.exit_row)

    @property
    def key_block(self) -> Block:
        """The single key block (raises InvalidLevelError if malformed)."""
        return find_key_block(self.blocks)

    def get_block(self, block_id: str) -> Optional[Block]:
        """
        Get block by id.

        Args:
            block_id: Block identifier

        Returns:
            Block or None if no block has that id
        """
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def diff(self, other: 'BoardState') -> List[str]:
        """
        Find blocks whose position differs between this board and another.

        Args:
            other: Another BoardState to compare against

        Returns:
            List of block ids that moved
        """
        if not isinstance(other, BoardState):
            raise TypeError("Can only diff against another BoardState")

        theirs = {b.id: (b.x, b.y) for b in other.blocks}
        return [b.id for b in self.blocks if theirs.get(b.id) != (b.x, b.y)]

    def occupancy(self) -> np.ndarray:
        """
        Build the cell occupancy grid.

        Returns:
            int array of shape (grid_size, grid_size) indexed [row, col];
            each cell holds the index of the covering block in self.blocks
            or EMPTY_CELL. Cells outside the grid are dropped.
        """
        grid = np.full((self.grid_size, self.grid_size), EMPTY_CELL, dtype=np.int16)
        for index, block in enumerate(self.blocks):
            y1, y2 = max(block.y, 0), min(block.bottom, self.grid_size)
            x1, x2 = max(block.x, 0), min(block.right, self.grid_size)
            if y1 < y2 and x1 < x2:
                grid[y1:y2, x1:x2] = index
        return grid

    def free_cells_in_row(self, row: int) -> int:
        """Count empty cells in a row (0 for rows outside the grid)."""
        if not 0 <= row < self.grid_size:
            return 0
        return int(np.count_nonzero(self.occupancy()[row] == EMPTY_CELL))

    def validate(self) -> None:
        """
        Check the level invariants.

        Raises:
            InvalidLevelError: On a key count other than one, duplicate ids,
                an out-of-bounds block, overlapping blocks or two sliders
                of the same kind sharing a lane
        """
        find_key_block(self.blocks)

        ids = [b.id for b in self.blocks]
        if len(set(ids)) != len(ids):
            raise InvalidLevelError("Block ids must be unique")

        for block in self.blocks:
            if not in_bounds(block, block.x, block.y, self.grid_size):
                raise InvalidLevelError(f"Block {block.id} is out of bounds")

        for i, a in enumerate(self.blocks):
            for b in self.blocks[i + 1:]:
                if overlaps(a, b):
                    raise InvalidLevelError(f"Blocks {a.id} and {b.id} overlap")
                if a.kind is b.kind is BlockKind.HORIZONTAL and a.y == b.y:
                    raise InvalidLevelError(f"Horizontal blocks {a.id} and {b.id} share row {a.y}")
                if a.kind is b.kind is BlockKind.VERTICAL and a.x == b.x:
                    raise InvalidLevelError(f"Vertical blocks {a.id} and {b.id} share column {a.x}")

    def to_ascii(self) -> str:
        """
        Render the board as text, one line per row.

        Key cells are 'K', horizontal sliders '=', vertical sliders '|',
        empty cells '.'; the exit lane is marked with '>' past the edge.
        """
        grid = self.occupancy()
        lines = []
        for row in range(self.grid_size):
            chars = []
            for col in range(self.grid_size):
                index = grid[row, col]
                chars.append("." if index == EMPTY_CELL
                             else _ASCII_GLYPHS[self.blocks[index].kind])
            suffix = ">" if row == self.exit_row else ""
            lines.append(" ".join(chars) + suffix)
        return "\n".join(lines)

    def to_list(self) -> List[Dict]:
        """Convert to the plain level schema (list of dicts)."""
        return [b.to_dict() for b in self.blocks]

    def __hash__(self):
        return hash((self.blocks, self.grid_size, self.exit_row))

    def __eq__(self, other):
        if not isinstance(other, BoardState):
            return False
        return (self.blocks == other.blocks and self.grid_size == other.grid_size
                and self.exit_row == other.exit_row)
