"""
Path Tracer Module - Step-by-step sweep of a block's translation.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .block import Block
from .geometry import overlaps


@dataclass(frozen=True)
class PathTrace:
    """
    Result of tracing a block's translation.

    Attributes:
        valid: False if the delta has a component on the block's locked axis
        clear: True if every footprint along the path is free
        blockers: Distinct ids of blocks met along the path, in order of contact
        steps: Number of one-cell steps in the translation
    """
    valid: bool
    clear: bool
    blockers: Tuple[str, ...] = ()
    steps: int = 0

    @property
    def first_blocker(self) -> Optional[str]:
        """Id of the first obstruction, or None if the path is clear."""
        return self.blockers[0] if self.blockers else None


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def trace_path(block: Block, target_x: int, target_y: int,
               blocks: Iterable[Block]) -> PathTrace:
    """
    Walk a block from its position to (target_x, target_y) one cell at a time.

    Every intermediate and the final footprint is tested against the other
    blocks. Lane rules are not applied here; only the destination is
    checked against them, by the placement rules.

    Args:
        block: Block being moved (at its current position)
        target_x: Destination column
        target_y: Destination row
        blocks: Blocks on the grid (the moving block is skipped by id)

    Returns:
        PathTrace describing validity, clearance and obstructions
    """
    dx = target_x - block.x
    dy = target_y - block.y

    if dx != 0 and not block.kind.moves_horizontally:
        return PathTrace(valid=False, clear=False)
    if dy != 0 and not block.kind.moves_vertically:
        return PathTrace(valid=False, clear=False)

    others = [b for b in blocks if b.id != block.id]
    step_x, step_y = _sign(dx), _sign(dy)
    steps = max(abs(dx), abs(dy))

    blockers: List[str] = []
    for step in range(1, steps + 1):
        footprint = block.moved_by(step_x * step, step_y * step)
        for other in others:
            if other.id not in blockers and overlaps(footprint, other):
                blockers.append(other.id)

    return PathTrace(valid=True, clear=not blockers, blockers=tuple(blockers), steps=steps)
