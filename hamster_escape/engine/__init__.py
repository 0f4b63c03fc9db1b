"""
Engine Package - Rules, moves and level generation for the escape puzzle.

The engine is pure: every function takes a block sequence and the grid
size and returns new values. It performs no I/O and holds no state.

Public API:
    - Block, BlockKind: Block model
    - BoardState: Immutable board wrapper (occupancy grid, validation)
    - check_placement(): Placement rules (bounds, lanes, hamster path, overlap)
    - trace_path(): Step-by-step path sweep
    - attempt_move(), try_push(), move_in_direction(): Move resolver
    - is_solved(): Win detector
    - generate_level(): Procedural level generator
    - load_level(): Tutorial catalog or generated level by number
    - GameMove, MoveHistory: Undo records
    - create_strategy(): Hint strategy factory

Usage:
    from hamster_escape.engine import attempt_move, is_solved, load_level

    blocks = load_level(1)
    result = attempt_move(blocks, "h1", 4, 3, GRID_SIZE)
    if result.accepted:
        blocks = result.blocks
        solved = is_solved(blocks, GRID_SIZE)
"""

# Core data structures
from .block import Block, BlockKind
from .board import (
    EMPTY_CELL,
    EXIT_ROW,
    GRID_SIZE,
    BoardState,
    InvalidLevelError,
    find_key_block,
)
from .geometry import Direction, find_block_at, in_bounds, overlaps
from .history import GameMove, MoveHistory, undo_moves

# Rules
from .placement import (
    ALL_RULES,
    MOVE_RULES,
    PlacementVerdict,
    check_placement,
    is_valid_placement,
)
from .path import PathTrace, trace_path
from .resolver import (
    MoveOutcome,
    MoveResult,
    PushResult,
    attempt_move,
    move_in_direction,
    try_push,
)
from .win import is_solved

# Levels
from .generator import fallback_level, generate_level, is_probably_solvable
from .catalog import TUTORIAL_LEVELS, difficulty_for_level, load_level

# Hint framework (importing registers the built-in strategies)
from .hints import (
    Hint,
    HintContext,
    HintStrategy,
    create_strategy,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
)

__all__ = [
    # Data structures
    "Block",
    "BlockKind",
    "BoardState",
    "Direction",
    "GameMove",
    "MoveHistory",
    "InvalidLevelError",
    "GRID_SIZE",
    "EXIT_ROW",
    "EMPTY_CELL",
    # Geometry
    "in_bounds",
    "overlaps",
    "find_block_at",
    "find_key_block",
    "undo_moves",
    # Rules
    "ALL_RULES",
    "MOVE_RULES",
    "PlacementVerdict",
    "check_placement",
    "is_valid_placement",
    "PathTrace",
    "trace_path",
    "MoveOutcome",
    "MoveResult",
    "PushResult",
    "attempt_move",
    "move_in_direction",
    "try_push",
    "is_solved",
    # Levels
    "generate_level",
    "fallback_level",
    "is_probably_solvable",
    "TUTORIAL_LEVELS",
    "difficulty_for_level",
    "load_level",
    # Hints
    "Hint",
    "HintContext",
    "HintStrategy",
    "create_strategy",
    "get_default_strategy_name",
    "get_strategy_info",
    "get_strategy_names",
]
