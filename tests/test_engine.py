"""
Test script for the puzzle engine rules

Covers:
1. Geometry primitives (bounds, overlap, cell lookup)
2. Placement rules (lanes, cross overlap, hamster path)
3. Path tracing
4. Move resolver and push resolution
5. Win detection
6. Random-walk invariants (no overlap, lanes, axis lock, idempotent rejection)

Usage:
    python tests/test_engine.py
"""

import random
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hamster_escape.engine import (
    GRID_SIZE,
    Block,
    BoardState,
    Direction,
    InvalidLevelError,
    MOVE_RULES,
    MoveOutcome,
    PlacementVerdict,
    attempt_move,
    check_placement,
    find_block_at,
    generate_level,
    in_bounds,
    is_solved,
    move_in_direction,
    overlaps,
    trace_path,
    try_push,
    TUTORIAL_LEVELS,
)


def _banner(title: str) -> None:
    print("\n" + "="*60)
    print(f"TEST: {title}")
    print("="*60)


def _expect_raises(exc_type, fn, *args) -> None:
    try:
        fn(*args)
    except exc_type:
        return
    raise AssertionError(f"{fn.__name__} did not raise {exc_type.__name__}")


def _block(blocks, block_id):
    return next(b for b in blocks if b.id == block_id)


def test_geometry():
    """Test bounds, overlap and cell lookup."""
    _banner("Geometry")

    key = Block.key(1, 2)
    assert in_bounds(key, 4, 2, GRID_SIZE)
    assert not in_bounds(key, 5, 2, GRID_SIZE)
    assert not in_bounds(key, -1, 2, GRID_SIZE)

    v = Block.vertical("v", 3, 0, height=3)
    assert not overlaps(key, v)
    assert overlaps(key.moved_to(2, 2), v)
    # Touching edges do not overlap
    assert not overlaps(Block.horizontal("a", 0, 0), Block.horizontal("b", 2, 0))

    level = TUTORIAL_LEVELS[0]
    assert find_block_at(level, 3, 1).id == "v1"
    assert find_block_at(level, 2, 2).id == "key1"
    assert find_block_at(level, 0, 0) is None

    print("  [PASS] Geometry tests")


def test_level_schema():
    """Test the plain dict schema and BoardState helpers built on it."""
    _banner("Level Schema")

    board = BoardState.from_blocks(TUTORIAL_LEVELS[1])
    data = board.to_list()
    print(f"  First entry: {data[0]}")
    assert data[0] == {"id": "key1", "x": 0, "y": 2, "width": 2, "height": 1, "type": "key"}
    assert {entry["type"] for entry in data} == {"key", "horizontal", "vertical"}

    restored = BoardState.from_dicts(data)
    assert restored == board
    assert hash(restored) == hash(board)

    missing = dict(data[1])
    del missing["height"]
    _expect_raises(ValueError, Block.from_dict, missing)

    unknown = dict(data[1], type="diagonal")
    _expect_raises(ValueError, Block.from_dict, unknown)

    # diff reports moved blocks only
    result = attempt_move(board.blocks, "h2", 1, 4, GRID_SIZE)
    assert result.accepted
    moved = board.with_blocks(result.blocks)
    assert moved.grid_size == board.grid_size and moved.exit_row == board.exit_row
    assert board.diff(moved) == ["h2"]
    assert board.diff(board) == []
    _expect_raises(TypeError, board.diff, data)

    print("  [PASS] Level schema tests")


def test_placement_rules():
    """Test each placement rule and the check order."""
    _banner("Placement Rules")

    key = Block.key(0, 2)

    # Horizontal ahead of the key in its row
    ahead = Block.horizontal("h1", 3, 2)
    verdict = check_placement(ahead, [key], GRID_SIZE)
    print(f"  Horizontal ahead of key: {verdict}")
    assert verdict is PlacementVerdict.HAMSTER_PATH

    # Behind the key is fine
    key_right = Block.key(3, 2)
    assert check_placement(Block.horizontal("h1", 0, 2), [key_right], GRID_SIZE) is PlacementVerdict.OK

    # Exclusivity: second horizontal in a row, second vertical in a column
    blocks = [key, Block.horizontal("h1", 0, 0), Block.vertical("v1", 5, 3)]
    assert check_placement(Block.horizontal("h2", 3, 0), blocks, GRID_SIZE) is PlacementVerdict.EXCLUSIVITY
    assert check_placement(Block.vertical("v2", 5, 0, height=2), blocks, GRID_SIZE) is PlacementVerdict.EXCLUSIVITY

    # Cross overlap: vertical through a horizontal
    assert check_placement(Block.vertical("v2", 1, 0, height=2), blocks, GRID_SIZE) is PlacementVerdict.CROSS_OVERLAP

    # Plain overlap: the key placed on a slider
    assert check_placement(Block.key(0, 0), blocks, GRID_SIZE) is PlacementVerdict.OVERLAP

    # Bounds is checked first
    assert check_placement(Block.horizontal("h1", 5, 0), blocks, GRID_SIZE) is PlacementVerdict.BOUNDS

    # The candidate's own current position is ignored
    assert check_placement(Block.horizontal("h1", 1, 0), blocks, GRID_SIZE) is PlacementVerdict.OK

    print("  [PASS] Placement rule tests")


def test_path_tracer():
    """Test path sweeps, blockers and axis validity."""
    _banner("Path Tracer")

    key = Block.key(0, 2)
    v1 = Block.vertical("v1", 2, 1, height=2)
    v2 = Block.vertical("v2", 4, 2, height=2)
    blocks = [key, v1, v2]

    trace = trace_path(key, 4, 2, blocks)
    print(f"  Key sweep to x=4: clear={trace.clear} blockers={trace.blockers}")
    assert trace.valid and not trace.clear
    assert trace.blockers == ("v1", "v2")
    assert trace.first_blocker == "v1"
    assert trace.steps == 4

    # Intermediate footprints count, not only the destination
    trace = trace_path(Block.key(3, 2), 0, 2, [Block.key(3, 2), Block.vertical("v", 2, 2, height=1)])
    assert trace.blockers == ("v",)

    # Wrong axis is invalid, not merely unclear
    trace = trace_path(key, 0, 3, blocks)
    assert not trace.valid and not trace.clear
    trace = trace_path(v1, 3, 1, blocks)
    assert not trace.valid

    # Vertical sweep past the key row
    trace = trace_path(v1, 2, 3, blocks)
    assert trace.clear

    print("  [PASS] Path tracer tests")


def test_key_slides_under_vertical():
    """Key slides to the exit under a vertical slider parked above its row."""
    _banner("Key Slides Under Vertical")

    blocks = (Block.key(1, 2), Block.vertical("v1", 3, 0, height=2))

    result = attempt_move(blocks, "key", 2, 2, GRID_SIZE)
    print(f"  Key to x=2: {result.outcome}")
    assert result.accepted
    assert _block(result.blocks, "key").x == 2
    assert not is_solved(result.blocks, GRID_SIZE)

    result = attempt_move(result.blocks, "key", 4, 2, GRID_SIZE)
    print(f"  Key to x=4: {result.outcome}")
    assert result.accepted
    assert _block(result.blocks, "key").x == 4
    assert is_solved(result.blocks, GRID_SIZE)

    # A vertical covering the key row cannot be pushed sideways
    blocked = (Block.key(1, 2), Block.vertical("v1", 3, 0, height=3))
    result = attempt_move(blocked, "key", 2, 2, GRID_SIZE)
    print(f"  Key into a vertical across its row: {result.outcome}")
    assert result.outcome is MoveOutcome.PUSH_FAILED
    assert result.blocks is blocked

    print("  [PASS] Key slide tests")


def test_vertical_not_pushed_sideways():
    """Single vertical obstruction in the key's path is not pushed sideways."""
    _banner("Vertical Not Pushed Sideways")

    blocks = (Block.key(0, 2), Block.vertical("v1", 2, 2, height=1))
    result = attempt_move(blocks, "key", 3, 2, GRID_SIZE)
    print(f"  Outcome: {result.outcome}")
    assert not result.accepted
    assert result.outcome is MoveOutcome.PUSH_FAILED
    assert result.blocks == blocks

    print("  [PASS] Sideways push tests")


def test_key_push():
    """Key pushes a single horizontal slider one cell."""
    _banner("Key Push")

    blocks = (Block.key(4, 2), Block.horizontal("h1", 1, 2), Block.vertical("v1", 5, 3))

    result = attempt_move(blocks, "key", 2, 2, GRID_SIZE)
    print(f"  Key to x=2 against h1: {result.outcome}, moves={len(result.moves)}")
    assert result.outcome is MoveOutcome.PUSHED
    assert result.pushed_block_id == "h1"
    assert _block(result.blocks, "key").x == 2
    assert _block(result.blocks, "h1").x == 0
    assert len(result.moves) == 2
    assert result.moves[0].block_id == "key"
    assert (result.moves[1].from_x, result.moves[1].to_x) == (1, 0)

    # Needs a two-cell push: one step is not enough, whole move rejected
    result = attempt_move(blocks, "key", 1, 2, GRID_SIZE)
    print(f"  Key to x=1 (two-cell push needed): {result.outcome}")
    assert result.outcome is MoveOutcome.PUSH_FAILED
    assert result.blocks is blocks

    # Pushed block would leave the grid
    edge = (Block.key(3, 2), Block.horizontal("h1", 0, 2, width=3))
    result = attempt_move(edge, "key", 2, 2, GRID_SIZE)
    assert result.outcome is MoveOutcome.PUSH_FAILED

    print("  [PASS] Key push tests")


def test_move_rejections():
    """Test rejection reasons and idempotent rejection."""
    _banner("Move Rejections")

    key = Block.key(2, 2)
    blocks = (
        key,
        Block.horizontal("h1", 0, 2),
        Block.vertical("v1", 3, 0, height=2),
        Block.horizontal("h2", 2, 3, width=3),
    )

    cases = [
        (("key", 2, 2), MoveOutcome.NO_MOVEMENT),
        (("key", 2, 3), MoveOutcome.WRONG_AXIS),
        (("v1", 4, 0), MoveOutcome.WRONG_AXIS),
        (("h2", 2, 4), MoveOutcome.WRONG_AXIS),
        (("key", 5, 2), MoveOutcome.OUT_OF_BOUNDS),
        (("v1", 3, 5), MoveOutcome.OUT_OF_BOUNDS),
        (("h1", 4, 2), MoveOutcome.HAMSTER_PATH),
        (("v1", 3, 2), MoveOutcome.BLOCKED),
    ]
    for (block_id, x, y), expected in cases:
        result = attempt_move(blocks, block_id, x, y, GRID_SIZE)
        print(f"  {block_id} -> ({x},{y}): {result.outcome.value}")
        assert result.outcome is expected
        assert not result.accepted
        assert result.blocks is blocks
        assert result.moves == ()

    # Two distinct obstructions: no push
    crowded = (Block.key(0, 2), Block.vertical("v1", 2, 1, height=2),
               Block.vertical("v2", 3, 2, height=2))
    result = attempt_move(crowded, "key", 2, 2, GRID_SIZE)
    assert result.outcome is MoveOutcome.BLOCKED

    # Lane rule on a destination (level already holding a shared row)
    shared = (Block.key(0, 2), Block.horizontal("h1", 0, 0), Block.horizontal("h2", 3, 0))
    result = attempt_move(shared, "h1", 1, 0, GRID_SIZE)
    assert result.outcome is MoveOutcome.LANE_TAKEN

    # Contract violations fail loudly
    _expect_raises(ValueError, attempt_move, blocks, "nope", 0, 0, GRID_SIZE)
    _expect_raises(InvalidLevelError, attempt_move, blocks[1:], "h1", 1, 2, GRID_SIZE)
    _expect_raises(InvalidLevelError, attempt_move,
                   blocks + (Block.key(0, 5, block_id="key2"),), "h1", 1, 2, GRID_SIZE)

    print("  [PASS] Move rejection tests")


def test_try_push():
    """Test push resolution directly."""
    _banner("Push Resolution")

    blocks = (Block.key(0, 2), Block.horizontal("h1", 1, 0), Block.vertical("v1", 4, 3))

    result = try_push(blocks, "h1", 1, 0, GRID_SIZE)
    assert result.success
    moved = _block(result.blocks, "h1")
    assert (moved.x, moved.y) == (2, 0)

    result = try_push(blocks, "v1", 0, -1, GRID_SIZE)
    assert result.success
    assert (_block(result.blocks, "v1").x, _block(result.blocks, "v1").y) == (4, 2)

    # Pushed blocks keep their own axis
    assert not try_push(blocks, "h1", 0, 1, GRID_SIZE).success
    assert not try_push(blocks, "v1", 1, 0, GRID_SIZE).success

    # Off the grid
    edge = (Block.key(0, 2), Block.vertical("v1", 4, 4))
    assert not try_push(edge, "v1", 0, 1, GRID_SIZE).success

    # Occupied destination
    blocked = (Block.key(0, 2), Block.horizontal("h1", 2, 3, width=3),
               Block.vertical("v1", 4, 1, height=2))
    assert not try_push(blocked, "v1", 0, 1, GRID_SIZE).success
    assert try_push(blocked, "v1", 0, 1, GRID_SIZE).blocks is blocked

    push_rules = MOVE_RULES + (PlacementVerdict.OVERLAP,)

    # Shift would leave a horizontal further ahead of the key in its row
    ahead = (Block.key(0, 2), Block.horizontal("h1", 2, 2))
    shifted = _block(ahead, "h1").moved_by(1, 0)
    assert check_placement(shifted, ahead, GRID_SIZE, push_rules) is PlacementVerdict.HAMSTER_PATH
    result = try_push(ahead, "h1", 1, 0, GRID_SIZE)
    print(f"  Push into the key's lane: success={result.success}")
    assert not result.success
    assert result.blocks is ahead

    # Shift within a row already shared by another horizontal
    shared = (Block.key(0, 2), Block.horizontal("h1", 0, 0), Block.horizontal("h2", 3, 0))
    shifted = _block(shared, "h1").moved_by(1, 0)
    assert check_placement(shifted, shared, GRID_SIZE, push_rules) is PlacementVerdict.EXCLUSIVITY
    result = try_push(shared, "h1", 1, 0, GRID_SIZE)
    print(f"  Push along a shared row: success={result.success}")
    assert not result.success
    assert result.blocks is shared

    _expect_raises(ValueError, try_push, blocks, "h1", 2, 0, GRID_SIZE)

    print("  [PASS] Push resolution tests")


def test_move_in_direction():
    """Test direction-based moves."""
    _banner("Move In Direction")

    blocks = (Block.key(0, 2), Block.vertical("v1", 3, 0, height=2))
    result = move_in_direction(blocks, "key", Direction.RIGHT, GRID_SIZE, steps=4)
    assert result.accepted
    assert is_solved(result.blocks, GRID_SIZE)

    result = move_in_direction(blocks, "key", Direction.UP, GRID_SIZE)
    assert result.outcome is MoveOutcome.WRONG_AXIS

    _expect_raises(ValueError, move_in_direction, blocks, "key", Direction.RIGHT, GRID_SIZE, 0)

    assert Direction.from_delta(-3, 0) is Direction.LEFT
    assert Direction.from_delta(0, 0) is None
    assert Direction.UP.opposite is Direction.DOWN

    print("  [PASS] Move in direction tests")


def test_win_detection():
    """Test the exit predicate."""
    _banner("Win Detection")

    assert not is_solved((Block.key(3, 2),), GRID_SIZE)
    solved = (Block.key(4, 2),)
    assert is_solved(solved, GRID_SIZE)
    # Pure predicate: same answer on repeated evaluation
    assert is_solved(solved, GRID_SIZE)
    _expect_raises(InvalidLevelError, is_solved, (Block.horizontal("h", 0, 0),), GRID_SIZE)

    print("  [PASS] Win detection tests")


def test_random_walk_invariants():
    """Random moves never break level invariants or the axis lock."""
    _banner("Random Walk Invariants")

    rng = random.Random(1234)
    accepted = rejected = pushes = 0

    levels = list(TUTORIAL_LEVELS) + [generate_level(GRID_SIZE, d, rng=rng) for d in (1, 3, 5)]
    for level in levels:
        blocks = tuple(level)
        for _ in range(300):
            block = rng.choice(blocks)
            delta = rng.randint(-3, 3)
            # Mostly along the block's axis, sometimes across it
            if rng.random() < 0.9:
                dx, dy = (delta, 0) if block.kind.moves_horizontally else (0, delta)
            else:
                dx, dy = (0, delta) if block.kind.moves_horizontally else (delta, 0)

            result = attempt_move(blocks, block.id, block.x + dx, block.y + dy, GRID_SIZE)
            if not result.accepted:
                rejected += 1
                assert result.blocks is blocks
                continue

            accepted += 1
            pushes += result.outcome is MoveOutcome.PUSHED
            for before in blocks:
                after = _block(result.blocks, before.id)
                if before.kind.moves_horizontally:
                    assert after.y == before.y
                else:
                    assert after.x == before.x
            BoardState.from_blocks(result.blocks).validate()
            blocks = result.blocks

    print(f"  Accepted: {accepted}, rejected: {rejected}, pushes: {pushes}")
    assert accepted > 0 and rejected > 0

    print("  [PASS] Random walk invariant tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# ENGINE RULE TESTS")
    print("#"*60)

    tests = [
        ("Geometry", test_geometry),
        ("Level Schema", test_level_schema),
        ("Placement Rules", test_placement_rules),
        ("Path Tracer", test_path_tracer),
        ("Key Slides Under Vertical", test_key_slides_under_vertical),
        ("Vertical Not Pushed Sideways", test_vertical_not_pushed_sideways),
        ("Key Push", test_key_push),
        ("Move Rejections", test_move_rejections),
        ("Push Resolution", test_try_push),
        ("Move In Direction", test_move_in_direction),
        ("Win Detection", test_win_detection),
        ("Random Walk", test_random_walk_invariants),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)
    for name, passed in results:
        print(f"  {name}: [{'PASS' if passed else 'FAIL'}]")

    all_passed = all(passed for _, passed in results)
    print()
    print("All tests PASSED!" if all_passed else "Some tests FAILED!")
    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
