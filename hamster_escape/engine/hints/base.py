"""
Base Strategy Module - Abstract base class for hint strategies.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..block import Block
from ..board import BoardState
from ..geometry import Direction
from ..history import GameMove
from ..resolver import move_in_direction
from .context import HintContext
from .hint import Hint


class HintStrategy(ABC):
    """
    Abstract base class for all hint strategies.

    Strategies only probe the public move contract (move_in_direction),
    so a hint is always a move the resolver would accept.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for UI
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def suggest(self, context: HintContext) -> Optional[Hint]:
        """
        Suggest the next move for the given board.

        Args:
            context: Hint context with board and last move

        Returns:
            Hint, or None if no block can move
        """
        pass

    def can_move(self, board: BoardState, block: Block, direction: Direction) -> bool:
        """Check whether one step of the block in a direction would be accepted."""
        if direction not in Direction.for_kind(block.kind):
            return False
        result = move_in_direction(board.blocks, block.id, direction, board.grid_size)
        return result.accepted

    def legal_directions(self, board: BoardState, block: Block) -> List[Direction]:
        """
        Find every direction the block can take one step in.

        Args:
            board: Current board state
            block: Block to probe

        Returns:
            Legal directions, preferred (right/down) first
        """
        return [d for d in Direction.for_kind(block.kind) if self.can_move(board, block, d)]

    def _make_hint(self, block: Block, direction: Direction, reason: str = "") -> Hint:
        return Hint(block_id=block.id, direction=direction,
                    strategy_name=self.name, reason=reason)

    @staticmethod
    def _reverses(last_move: Optional[GameMove], block: Block, direction: Direction) -> bool:
        """True if stepping the block in direction undoes the last move."""
        if last_move is None or last_move.block_id != block.id:
            return False
        last_direction = Direction.from_delta(last_move.dx, last_move.dy)
        return last_direction is not None and last_direction.opposite is direction
