"""
Move Resolver Module - Validates and applies player moves.

A move attempt runs through these stages:

    Requested -> axis / destination checks -> path trace
        clear                     -> Accepted (MOVED)
        blocked, key, 1 blocker   -> push attempt
            push ok, path clear   -> Accepted (PUSHED)
            otherwise             -> Rejected (PUSH_FAILED)
        blocked otherwise         -> Rejected (BLOCKED)

The push is bounded to a single block moved by a single cell. All
functions are pure: a rejected move returns the input blocks unchanged.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .block import Block
from .board import find_key_block
from .geometry import Direction
from .history import GameMove
from .path import trace_path
from .placement import MOVE_RULES, PlacementVerdict, check_placement

logger = logging.getLogger(__name__)


class MoveOutcome(Enum):
    """Why a move attempt was accepted or rejected."""
    MOVED = "moved"
    PUSHED = "pushed"
    NO_MOVEMENT = "no_movement"
    WRONG_AXIS = "wrong_axis"
    OUT_OF_BOUNDS = "out_of_bounds"
    LANE_TAKEN = "lane_taken"
    HAMSTER_PATH = "hamster_path"
    BLOCKED = "blocked"
    PUSH_FAILED = "push_failed"

    @property
    def accepted(self) -> bool:
        return self in (MoveOutcome.MOVED, MoveOutcome.PUSHED)


_VERDICT_OUTCOMES = {
    PlacementVerdict.BOUNDS: MoveOutcome.OUT_OF_BOUNDS,
    PlacementVerdict.EXCLUSIVITY: MoveOutcome.LANE_TAKEN,
    PlacementVerdict.HAMSTER_PATH: MoveOutcome.HAMSTER_PATH,
}


@dataclass(frozen=True)
class MoveResult:
    """
    Result of a move attempt.

    Attributes:
        blocks: Blocks after the move (the input tuple if rejected)
        outcome: Acceptance reason or rejection cause
        moves: Translations performed, mover first (empty if rejected)
        pushed_block_id: Id of the block displaced by the key, if any
    """
    blocks: Tuple[Block, ...]
    outcome: MoveOutcome
    moves: Tuple[GameMove, ...] = ()
    pushed_block_id: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.outcome.accepted


@dataclass(frozen=True)
class PushResult:
    """
    Result of a push attempt.

    Attributes:
        blocks: Blocks after the push (the input tuple if it failed)
        success: True if the block moved
    """
    blocks: Tuple[Block, ...]
    success: bool


def _get_block(blocks: Sequence[Block], block_id: str) -> Block:
    for block in blocks:
        if block.id == block_id:
            return block
    raise ValueError(f"Unknown block id: {block_id}")


def _replace_block(blocks: Sequence[Block], updated: Block) -> Tuple[Block, ...]:
    return tuple(updated if b.id == updated.id else b for b in blocks)


def try_push(blocks: Sequence[Block], block_id: str, dx: int, dy: int,
             grid_size: int) -> PushResult:
    """
    Try to displace a block by exactly one cell.

    The pushed block obeys its own axis: a vertical slider cannot be
    pushed sideways, a horizontal slider cannot be pushed up or down.

    Args:
        blocks: Current blocks
        block_id: Block to push
        dx: Column delta in {-1, 0, 1}
        dy: Row delta in {-1, 0, 1}
        grid_size: Side of the square grid

    Returns:
        PushResult with the updated blocks on success

    Raises:
        ValueError: If the id is unknown or the delta is not a single cell step
    """
    if dx not in (-1, 0, 1) or dy not in (-1, 0, 1):
        raise ValueError(f"Push delta must be a single cell step, got ({dx}, {dy})")

    blocks = tuple(blocks)
    block = _get_block(blocks, block_id)

    if dx != 0 and not block.kind.moves_horizontally:
        return PushResult(blocks=blocks, success=False)
    if dy != 0 and not block.kind.moves_vertically:
        return PushResult(blocks=blocks, success=False)

    shifted = block.moved_by(dx, dy)
    rules = MOVE_RULES + (PlacementVerdict.OVERLAP,)
    if check_placement(shifted, blocks, grid_size, rules) is not PlacementVerdict.OK:
        return PushResult(blocks=blocks, success=False)

    return PushResult(blocks=_replace_block(blocks, shifted), success=True)


def attempt_move(blocks: Sequence[Block], block_id: str, new_x: int, new_y: int,
                 grid_size: int) -> MoveResult:
    """
    Attempt to move a block to (new_x, new_y).

    Only the key block may push, and only when exactly one distinct block
    stands in its path. The obstruction is pushed by one cell in the key's
    direction of travel, never by the full remaining distance; if that does
    not free the path the whole move is rejected.

    Args:
        blocks: Current blocks (must hold exactly one key block)
        block_id: Block to move
        new_x: Destination column
        new_y: Destination row
        grid_size: Side of the square grid

    Returns:
        MoveResult; the caller counts one player move per accepted result

    Raises:
        ValueError: If block_id is not in the level
        InvalidLevelError: If the level does not have exactly one key block
    """
    blocks = tuple(blocks)
    find_key_block(blocks)
    block = _get_block(blocks, block_id)

    dx, dy = new_x - block.x, new_y - block.y
    if dx == 0 and dy == 0:
        return MoveResult(blocks=blocks, outcome=MoveOutcome.NO_MOVEMENT)
    if (dy != 0 and not block.kind.moves_vertically) or \
            (dx != 0 and not block.kind.moves_horizontally):
        return MoveResult(blocks=blocks, outcome=MoveOutcome.WRONG_AXIS)

    destination = block.moved_to(new_x, new_y)
    verdict = check_placement(destination, blocks, grid_size, MOVE_RULES)
    if verdict is not PlacementVerdict.OK:
        return MoveResult(blocks=blocks, outcome=_VERDICT_OUTCOMES[verdict])

    trace = trace_path(block, new_x, new_y, blocks)
    if trace.clear:
        return MoveResult(
            blocks=_replace_block(blocks, destination),
            outcome=MoveOutcome.MOVED,
            moves=(GameMove.between(block, destination),),
        )

    if not block.is_key or len(trace.blockers) != 1:
        return MoveResult(blocks=blocks, outcome=MoveOutcome.BLOCKED)

    # Key against a single obstruction: push it one cell, then re-trace
    pushed_id = trace.blockers[0]
    step_x = (dx > 0) - (dx < 0)
    push = try_push(blocks, pushed_id, step_x, 0, grid_size)
    if not push.success:
        logger.debug(f"Push of {pushed_id} by key rejected")
        return MoveResult(blocks=blocks, outcome=MoveOutcome.PUSH_FAILED)

    retrace = trace_path(block, new_x, new_y, push.blocks)
    if not retrace.clear:
        logger.debug(f"Push of {pushed_id} did not clear the key's path")
        return MoveResult(blocks=blocks, outcome=MoveOutcome.PUSH_FAILED)

    pushed_before = _get_block(blocks, pushed_id)
    pushed_after = _get_block(push.blocks, pushed_id)
    return MoveResult(
        blocks=_replace_block(push.blocks, destination),
        outcome=MoveOutcome.PUSHED,
        moves=(GameMove.between(block, destination),
               GameMove.between(pushed_before, pushed_after)),
        pushed_block_id=pushed_id,
    )


def move_in_direction(blocks: Sequence[Block], block_id: str, direction: Direction,
                      grid_size: int, steps: int = 1) -> MoveResult:
    """
    Attempt to move a block a number of cells in a direction.

    Args:
        blocks: Current blocks
        block_id: Block to move
        direction: Direction of travel
        grid_size: Side of the square grid
        steps: Number of cells (must be positive)

    Returns:
        MoveResult from attempt_move
    """
    if steps < 1:
        raise ValueError(f"steps must be positive, got {steps}")
    block = _get_block(blocks, block_id)
    return attempt_move(blocks, block_id,
                        block.x + direction.dx * steps,
                        block.y + direction.dy * steps,
                        grid_size)
