"""
Placement Module - Position legality rules for blocks.

Decides whether a block may occupy a candidate position, independent of
how it got there. Used by the move resolver (destination checks) and by
the level generator (every random placement).

Rules, evaluated in order (first failure wins):
    BOUNDS        - rectangle inside the grid
    EXCLUSIVITY   - one horizontal slider per row, one vertical per column
    CROSS_OVERLAP - horizontal never intersects a vertical and vice versa
    HAMSTER_PATH  - no horizontal in the key row ahead of the key
    OVERLAP       - no intersection with any other block
"""

from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

from .block import Block, BlockKind
from .geometry import in_bounds, overlaps


class PlacementVerdict(Enum):
    """Outcome of a placement check: OK or the first rule that failed."""
    OK = "ok"
    BOUNDS = "bounds"
    EXCLUSIVITY = "exclusivity"
    CROSS_OVERLAP = "cross_overlap"
    HAMSTER_PATH = "hamster_path"
    OVERLAP = "overlap"

    def __bool__(self) -> bool:
        return self is PlacementVerdict.OK


ALL_RULES: Tuple[PlacementVerdict, ...] = (
    PlacementVerdict.BOUNDS,
    PlacementVerdict.EXCLUSIVITY,
    PlacementVerdict.CROSS_OVERLAP,
    PlacementVerdict.HAMSTER_PATH,
    PlacementVerdict.OVERLAP,
)

# Destination rules for live moves; overlap is handled by the path tracer
MOVE_RULES: Tuple[PlacementVerdict, ...] = (
    PlacementVerdict.BOUNDS,
    PlacementVerdict.EXCLUSIVITY,
    PlacementVerdict.HAMSTER_PATH,
)

_OPPOSITE_SLIDER = {
    BlockKind.HORIZONTAL: BlockKind.VERTICAL,
    BlockKind.VERTICAL: BlockKind.HORIZONTAL,
}


def _lane_taken(candidate: Block, others: Sequence[Block]) -> bool:
    if candidate.kind is BlockKind.HORIZONTAL:
        return any(b.kind is BlockKind.HORIZONTAL and b.y == candidate.y for b in others)
    if candidate.kind is BlockKind.VERTICAL:
        return any(b.kind is BlockKind.VERTICAL and b.x == candidate.x for b in others)
    return False


def _crosses_opposite_slider(candidate: Block, others: Sequence[Block]) -> bool:
    opposite = _OPPOSITE_SLIDER.get(candidate.kind)
    if opposite is None:
        return False
    return any(b.kind is opposite and overlaps(candidate, b) for b in others)


def _blocks_hamster_path(candidate: Block, others: Sequence[Block]) -> bool:
    if candidate.kind is not BlockKind.HORIZONTAL:
        return False
    key = _find_key(others)
    if key is None:
        return False
    in_key_row = candidate.y < key.bottom and candidate.bottom > key.y
    return in_key_row and candidate.x >= key.right


def _find_key(blocks: Iterable[Block]) -> Optional[Block]:
    for block in blocks:
        if block.kind is BlockKind.KEY:
            return block
    return None


def check_placement(
    candidate: Block,
    blocks: Iterable[Block],
    grid_size: int,
    rules: Sequence[PlacementVerdict] = ALL_RULES,
) -> PlacementVerdict:
    """
    Check whether a block may occupy its (candidate) position.

    Args:
        candidate: Block at the position to test
        blocks: Blocks already on the grid; any block with the candidate's
            id is ignored, so the current level can be passed as-is
        grid_size: Side of the square grid
        rules: Rules to evaluate (always in canonical order)

    Returns:
        PlacementVerdict.OK, or the first failing rule
    """
    others = [b for b in blocks if b.id != candidate.id]

    for rule in ALL_RULES:
        if rule not in rules:
            continue
        if rule is PlacementVerdict.BOUNDS:
            failed = not in_bounds(candidate, candidate.x, candidate.y, grid_size)
        elif rule is PlacementVerdict.EXCLUSIVITY:
            failed = _lane_taken(candidate, others)
        elif rule is PlacementVerdict.CROSS_OVERLAP:
            failed = _crosses_opposite_slider(candidate, others)
        elif rule is PlacementVerdict.HAMSTER_PATH:
            failed = _blocks_hamster_path(candidate, others)
        else:
            failed = any(overlaps(candidate, b) for b in others)

        if failed:
            return rule

    return PlacementVerdict.OK


def is_valid_placement(
    candidate: Block,
    blocks: Iterable[Block],
    grid_size: int,
    rules: Sequence[PlacementVerdict] = ALL_RULES,
) -> bool:
    """Boolean form of check_placement."""
    return check_placement(candidate, blocks, grid_size, rules) is PlacementVerdict.OK
