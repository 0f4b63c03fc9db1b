"""
Hint Module - A suggested single-cell move.
"""

from dataclasses import dataclass
from typing import Tuple

from ..block import Block
from ..geometry import Direction


@dataclass(frozen=True)
class Hint:
    """
    A suggested move.

    Attributes:
        block_id: Block to move
        direction: Direction to move it one cell
        strategy_name: Strategy that produced the hint
        reason: Short human-readable explanation
    """
    block_id: str
    direction: Direction
    strategy_name: str = ""
    reason: str = ""

    def target(self, block: Block) -> Tuple[int, int]:
        """Destination cell of the hinted block after one step."""
        return (block.x + self.direction.dx, block.y + self.direction.dy)

    def __str__(self) -> str:
        return f"{self.block_id} {self.direction.name.lower()}"
