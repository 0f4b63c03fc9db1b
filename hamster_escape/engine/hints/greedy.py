"""
Greedy Hint Strategy - Key right if possible, else the first movable block.
"""

from typing import Optional

from ..geometry import Direction
from .base import HintStrategy
from .context import HintContext
from .factory import register_strategy
from .hint import Hint


@register_strategy
class GreedyHintStrategy(HintStrategy):
    """
    Suggests moving the key toward the exit whenever it can go.

    Otherwise picks the first block, in level order, that can step in any
    direction along its axis, preferring right/down over left/up.
    """
    name = "greedy"
    description = "Greedy - Key toward the exit, else first movable block"

    def suggest(self, context: HintContext) -> Optional[Hint]:
        board = context.board
        key = board.key_block

        if self.can_move(board, key, Direction.RIGHT):
            return self._make_hint(key, Direction.RIGHT, "Key can move toward the exit")

        total = len(board.blocks)
        for index, block in enumerate(board.blocks):
            context.report_progress(index / max(total, 1), f"Probing {block.id}")
            if block.is_key:
                continue
            directions = self.legal_directions(board, block)
            if directions:
                return self._make_hint(block, directions[0], "Block can move")

        return None
