"""
Diagnostic script for the level generator.

Generates many levels per difficulty and reports how often the fallback
level was used, block counts, obstruction counts and any invariant
violations (overlap, shared lanes, key count).

Usage:
    python tools/generator_stats.py [trials] [seed]
"""

import random
import sys
from collections import Counter
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from hamster_escape.engine import (
    GRID_SIZE,
    BoardState,
    InvalidLevelError,
    fallback_level,
    generate_level,
)
from hamster_escape.engine.generator import count_obstructions


def analyze_difficulty(difficulty: int, trials: int, rng: random.Random) -> None:
    """Generate `trials` levels at one difficulty and print a summary."""
    print(f"\n{'='*60}")
    print(f"Difficulty {difficulty} ({trials} trials)")
    print(f"{'='*60}")

    fallback = fallback_level()
    fallbacks = 0
    violations = Counter()
    block_counts = []
    obstruction_counts = []
    fill_ratios = []

    for _ in range(trials):
        blocks = generate_level(GRID_SIZE, difficulty, rng=rng)
        if blocks == fallback:
            fallbacks += 1

        board = BoardState.from_blocks(blocks)
        try:
            board.validate()
        except InvalidLevelError as e:
            violations[str(e).split(" ")[0]] += 1

        block_counts.append(len(blocks))
        obstruction_counts.append(count_obstructions(blocks, board.key_block))
        fill_ratios.append(np.count_nonzero(board.occupancy() >= 0) / GRID_SIZE ** 2)

    counts = np.array(block_counts)
    print(f"  Fallback used:   {fallbacks}/{trials} ({100 * fallbacks / trials:.1f}%)")
    print(f"  Blocks:          min={counts.min()} max={counts.max()} mean={counts.mean():.2f}")
    print(f"  Obstructions:    {dict(sorted(Counter(obstruction_counts).items()))}")
    print(f"  Board filled:    {100 * np.mean(fill_ratios):.1f}%")
    if violations:
        print(f"  VIOLATIONS:      {dict(violations)}")
    else:
        print("  Invariants:      OK")


if __name__ == "__main__":
    trials = int(sys.argv[1]) if len(sys.argv) > 1 else 500
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else None
    rng = random.Random(seed)

    for difficulty in range(1, 6):
        analyze_difficulty(difficulty, trials, rng)
