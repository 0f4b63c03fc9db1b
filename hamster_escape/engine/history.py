"""
History Module - Move records and the undo stack.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .block import Block


@dataclass(frozen=True)
class GameMove:
    """
    A single atomic block translation.

    Attributes:
        block_id: Block that moved
        from_x: Column before the move
        from_y: Row before the move
        to_x: Column after the move
        to_y: Row after the move
    """
    block_id: str
    from_x: int
    from_y: int
    to_x: int
    to_y: int

    @classmethod
    def between(cls, before: Block, after: Block) -> 'GameMove':
        """Create a move record from a block's old and new positions."""
        return cls(block_id=before.id, from_x=before.x, from_y=before.y,
                   to_x=after.x, to_y=after.y)

    @property
    def dx(self) -> int:
        return self.to_x - self.from_x

    @property
    def dy(self) -> int:
        return self.to_y - self.from_y


def undo_moves(blocks: Sequence[Block], moves: Sequence[GameMove]) -> Tuple[Block, ...]:
    """
    Restore the prior coordinates of every block touched by a move group.

    Rules are not re-checked: the positions were legal before the move.

    Args:
        blocks: Current blocks
        moves: Moves of one accepted player move

    Returns:
        Blocks with the moved pieces back at their from-positions
    """
    restored = {m.block_id: (m.from_x, m.from_y) for m in reversed(moves)}
    return tuple(
        b.moved_to(*restored[b.id]) if b.id in restored else b
        for b in blocks
    )


@dataclass
class MoveHistory:
    """
    Undo stack of accepted player moves.

    Each entry groups the GameMoves of one accepted move (two when the key
    pushed a block), so one undo reverts exactly one player move.
    """
    entries: List[Tuple[GameMove, ...]] = field(default_factory=list)

    def push(self, moves: Sequence[GameMove]) -> None:
        if moves:
            self.entries.append(tuple(moves))

    def pop(self) -> Optional[Tuple[GameMove, ...]]:
        """Remove and return the latest entry, or None if empty."""
        if not self.entries:
            return None
        return self.entries.pop()

    @property
    def last_move(self) -> Optional[GameMove]:
        """The primary move of the latest entry."""
        if not self.entries:
            return None
        return self.entries[-1][0]

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)
