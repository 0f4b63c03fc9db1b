"""
Game Session Module - Caller-side state for one play session.

Owns everything the engine deliberately does not: the current level, the
move counter, undo history, hint/undo counters and progress recording.
Presentation side effects (sound, animation, analytics) hook in through
the optional listener callbacks instead of being called from the engine.

State Flow:
    load_level() -> PLAYING --accepted move, key at exit--> SOLVED
                       ^  |                                    |
                       |  +-- undo / restart                   |
                       +---------------- next_level() ---------+
"""

import logging
import random
from dataclasses import replace
from enum import Enum, auto
from typing import Callable, Optional, Sequence, Tuple

from .engine import (
    EXIT_ROW,
    GRID_SIZE,
    Block,
    BoardState,
    Direction,
    Hint,
    HintContext,
    HintStrategy,
    MoveHistory,
    MoveResult,
    attempt_move,
    create_strategy,
    is_solved,
    load_level,
    move_in_direction,
    undo_moves,
)
from .progress import ProgressStore

logger = logging.getLogger(__name__)


__all__ = [
    "SessionState",
    "GameSession",
]


class SessionState(Enum):
    """
    Session states.

    States:
        PLAYING: Level loaded, accepting moves
        SOLVED: Key reached the exit, waiting for the next level
    """
    PLAYING = auto()
    SOLVED = auto()


class GameSession:
    """
    One player's play session over a sequence of levels.

    Every accepted move counts once, even when the key pushed another
    block; undo restores the previous positions without re-checking rules.
    """

    def __init__(self, grid_size: int = GRID_SIZE, exit_row: int = EXIT_ROW,
                 hint_strategy: str = "greedy",
                 progress: Optional[ProgressStore] = None,
                 rng: Optional[random.Random] = None,
                 on_move_accepted: Optional[Callable[[MoveResult], None]] = None,
                 on_move_rejected: Optional[Callable[[MoveResult], None]] = None,
                 on_level_solved: Optional[Callable[[int, int], None]] = None):
        """
        Initialize the session (no level is loaded yet).

        Args:
            grid_size: Side of the square grid
            exit_row: Exit lane row
            hint_strategy: Name of the hint strategy to use
            progress: Store that records solved levels (optional)
            rng: Random source for generated levels
            on_move_accepted: Called with the MoveResult of each accepted move
            on_move_rejected: Called with the MoveResult of each rejected move
            on_level_solved: Called with (level number, moves) on a solve
        """
        self.grid_size = grid_size
        self.exit_row = exit_row
        self.progress = progress
        self.rng = rng or random.Random()

        self.on_move_accepted = on_move_accepted
        self.on_move_rejected = on_move_rejected
        self.on_level_solved = on_level_solved

        self._strategy: HintStrategy = create_strategy(hint_strategy)

        self._state = SessionState.PLAYING
        self._level = 0
        self._initial_blocks: Tuple[Block, ...] = ()
        self._blocks: Tuple[Block, ...] = ()
        self._history = MoveHistory()

        self.moves = 0
        self.hints_used = 0
        self.undos_used = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def level(self) -> int:
        """Current level number (0 for a custom level)."""
        return self._level

    @property
    def blocks(self) -> Tuple[Block, ...]:
        return self._blocks

    @property
    def board(self) -> BoardState:
        return BoardState.from_blocks(self._blocks, self.grid_size, self.exit_row)

    @property
    def history(self) -> MoveHistory:
        return self._history

    @property
    def is_solved(self) -> bool:
        return self._state is SessionState.SOLVED

    @property
    def strategy_name(self) -> str:
        return self._strategy.name

    def set_strategy(self, strategy_name: str) -> None:
        """
        Change the hint strategy.

        Args:
            strategy_name: Name of a registered hint strategy
        """
        self._strategy = create_strategy(strategy_name)
        logger.info(f"Hint strategy changed to: {strategy_name}")

    def load_level(self, level_number: int) -> Tuple[Block, ...]:
        """
        Load a catalog or generated level by number.

        Args:
            level_number: 1-based level number

        Returns:
            Blocks of the loaded level
        """
        blocks = load_level(level_number, rng=self.rng, grid_size=self.grid_size,
                            exit_row=self.exit_row)
        self._start(blocks, level_number)
        if self.progress is not None:
            self.progress.mark_level_reached(level_number)
        logger.info(f"Level {level_number} loaded with {len(blocks)} blocks")
        return self._blocks

    def load_blocks(self, blocks: Sequence[Block], level_number: int = 0) -> None:
        """
        Load a custom level (e.g. from an editor or saved state).

        Raises:
            InvalidLevelError: If the blocks break a level invariant
        """
        board = BoardState.from_blocks(blocks, self.grid_size, self.exit_row)
        board.validate()
        self._start(board.blocks, level_number)
        logger.info(f"Custom level loaded with {len(board.blocks)} blocks")

    def restart(self) -> None:
        """Put the current level back in its initial layout."""
        self._start(self._initial_blocks, self._level)
        logger.info(f"Level {self._level} restarted")

    def next_level(self) -> Tuple[Block, ...]:
        return self.load_level(self._level + 1)

    def move(self, block_id: str, new_x: int, new_y: int) -> MoveResult:
        """
        Attempt to move a block to a destination cell.

        Args:
            block_id: Block to move
            new_x: Destination column
            new_y: Destination row

        Returns:
            MoveResult from the resolver

        Raises:
            RuntimeError: If the level is already solved
        """
        self._require_playing()
        result = attempt_move(self._blocks, block_id, new_x, new_y, self.grid_size)
        return self._handle_result(result)

    def move_direction(self, block_id: str, direction: Direction, steps: int = 1) -> MoveResult:
        """Attempt to move a block a number of cells in a direction."""
        self._require_playing()
        result = move_in_direction(self._blocks, block_id, direction, self.grid_size, steps)
        return self._handle_result(result)

    def undo(self) -> bool:
        """
        Revert the last accepted move.

        Returns:
            True if a move was undone, False if history is empty
        """
        entry = self._history.pop()
        if entry is None:
            return False

        before = self.board
        self._blocks = undo_moves(self._blocks, entry)
        self.moves = max(0, self.moves - 1)
        self.undos_used += 1
        self._state = SessionState.PLAYING
        logger.info(f"Undo: {', '.join(before.diff(self.board))} moved back")
        return True

    def hint(self) -> Optional[Hint]:
        """
        Ask the hint strategy for a move and highlight the hinted block.

        Returns:
            Hint, or None if nothing can move
        """
        self._require_playing()
        context = HintContext(board=self.board, last_move=self._history.last_move)
        hint = self._strategy.suggest(context)
        self.hints_used += 1
        self._set_highlight(hint.block_id if hint else None)
        logger.debug(f"Hint ({self._strategy.name}): {hint}")
        return hint

    def _start(self, blocks: Sequence[Block], level_number: int) -> None:
        self._initial_blocks = tuple(blocks)
        self._blocks = self._initial_blocks
        self._level = level_number
        self._history.clear()
        self._state = SessionState.PLAYING
        self.moves = 0
        self.hints_used = 0
        self.undos_used = 0

    def _require_playing(self) -> None:
        if not self._blocks:
            raise RuntimeError("No level loaded")
        if self._state is SessionState.SOLVED:
            raise RuntimeError("Level already solved, load the next level")

    def _handle_result(self, result: MoveResult) -> MoveResult:
        if not result.accepted:
            logger.debug(f"Move rejected: {result.outcome.value}")
            if self.on_move_rejected:
                self.on_move_rejected(result)
            return result

        self._blocks = result.blocks
        self._set_highlight(None)
        self._history.push(result.moves)
        self.moves += 1
        if self.on_move_accepted:
            self.on_move_accepted(result)

        if is_solved(self._blocks, self.grid_size):
            self._on_solved()
        return result

    def _on_solved(self) -> None:
        self._state = SessionState.SOLVED
        logger.info(f"Level {self._level} solved in {self.moves} moves")

        if self.progress is not None and self._level > 0:
            self.progress.record_level_completion(
                self._level, self.moves, self.hints_used, self.undos_used)
            self.progress.save()

        if self.on_level_solved:
            self.on_level_solved(self._level, self.moves)

    def _set_highlight(self, block_id: Optional[str]) -> None:
        self._blocks = tuple(
            b if b.is_highlighted == (b.id == block_id)
            else replace(b, is_highlighted=(b.id == block_id))
            for b in self._blocks
        )
