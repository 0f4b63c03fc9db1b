"""
Unblock Hint Strategy - Clears the key's lane before anything else.
"""

from typing import List, Optional, Tuple

from ..block import Block
from ..board import BoardState
from ..geometry import Direction
from .base import HintStrategy
from .context import HintContext
from .factory import register_strategy
from .hint import Hint


@register_strategy
class UnblockHintStrategy(HintStrategy):
    """
    Lane-clearing strategy.

    Priority order:
    1. Move the key right if it can go
    2. Move the obstruction closest to the key out of the exit row, in the
       direction that needs the fewest steps to clear the row
    3. Move any other block that can go, avoiding the reversal of the
       player's last move
    4. Any legal move at all

    Still a one-step heuristic: it does not search the move graph.
    """
    name = "unblock"
    description = "Unblock - Clear blocks out of the key's lane first"

    def suggest(self, context: HintContext) -> Optional[Hint]:
        board = context.board
        key = board.key_block

        if self.can_move(board, key, Direction.RIGHT):
            return self._make_hint(key, Direction.RIGHT, "Key can move toward the exit")

        context.report_progress(0.25, "Checking the key's lane")
        for block in self._obstructions(board, key):
            for steps, direction in self._clearing_directions(block, key):
                if self._reverses(context.last_move, block, direction):
                    continue
                if self.can_move(board, block, direction):
                    return self._make_hint(
                        block, direction,
                        f"Clears the exit row in {steps} step(s)")

        context.report_progress(0.5, "Looking for room to manoeuvre")
        fallback: Optional[Hint] = None
        # Sliders first, key last
        for block in sorted(board.blocks, key=lambda b: b.is_key):
            for direction in self.legal_directions(board, block):
                hint = self._make_hint(block, direction, "Makes room")
                if not self._reverses(context.last_move, block, direction):
                    return hint
                if fallback is None:
                    fallback = hint

        return fallback

    @staticmethod
    def _obstructions(board: BoardState, key: Block) -> List[Block]:
        """Blocks in the key's row ahead of it, closest first."""
        ahead = [
            b for b in board.blocks
            if not b.is_key and b.x >= key.right and b.y <= key.y < b.bottom
        ]
        return sorted(ahead, key=lambda b: b.x)

    @staticmethod
    def _clearing_directions(block: Block, key: Block) -> List[Tuple[int, Direction]]:
        """Directions that take the block out of the key row, fewest steps first."""
        if not block.kind.moves_vertically:
            return []
        up_steps = block.bottom - key.y
        down_steps = key.y - block.y + 1
        return sorted([(up_steps, Direction.UP), (down_steps, Direction.DOWN)],
                      key=lambda pair: pair[0])
