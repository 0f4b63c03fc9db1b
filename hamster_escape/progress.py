"""
Progress Module - Persisted level progress and play statistics.

Caller-side store; the engine never reads or writes it. Data lives in a
JSON file (progress.json in the working dir by default).
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

PROGRESS_FILE = Path("progress.json")

# Levels up to this number count as tutorial completions
TUTORIAL_LEVEL_LIMIT = 20


@dataclass
class GameStatistics:
    """
    Aggregate play statistics.

    Attributes:
        levels_completed: Levels solved (replays included)
        total_moves: Moves summed over solved levels
        best_moves: Fewest moves in a solved level (None until one is solved)
        tutorial_levels_completed: Solved levels numbered <= TUTORIAL_LEVEL_LIMIT
        levels_without_hints: Solved levels where no hint was used
        hints_used: Hints requested in solved levels
        undos_used: Undos used in solved levels
    """
    levels_completed: int = 0
    total_moves: int = 0
    best_moves: Optional[int] = None
    tutorial_levels_completed: int = 0
    levels_without_hints: int = 0
    hints_used: int = 0
    undos_used: int = 0

    @property
    def average_moves_per_level(self) -> float:
        if self.levels_completed == 0:
            return 0.0
        return self.total_moves / self.levels_completed

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameStatistics':
        """Build from stored data, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class ProgressStore:
    """
    JSON-backed record of reached/completed levels and statistics.

    Attributes:
        path: Backing file
        highest_level: Highest level number reached
        completed_levels: Sorted level numbers solved at least once
        statistics: Aggregate play statistics
    """
    path: Path = PROGRESS_FILE
    highest_level: int = 1
    completed_levels: List[int] = field(default_factory=list)
    statistics: GameStatistics = field(default_factory=GameStatistics)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'ProgressStore':
        """
        Load progress from disk.

        Args:
            path: Progress file (defaults to PROGRESS_FILE)

        Returns:
            Loaded store, or a fresh one if the file is missing or unreadable
        """
        path = path or PROGRESS_FILE
        if not path.exists():
            logger.debug("Progress file not found, starting fresh")
            return cls(path=path)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return cls(
                path=path,
                highest_level=int(data.get("highest_level", 1)),
                completed_levels=sorted(int(n) for n in data.get("completed_levels", [])),
                statistics=GameStatistics.from_dict(data.get("statistics", {})),
            )
        except (json.JSONDecodeError, OSError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Failed to load progress from {path}: {e}, starting fresh")
            return cls(path=path)

    def save(self) -> None:
        """Write progress to disk. Write errors are logged, not raised."""
        data = {
            "highest_level": self.highest_level,
            "completed_levels": self.completed_levels,
            "statistics": asdict(self.statistics),
        }
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save progress to {self.path}: {e}")

    def mark_level_reached(self, level_number: int) -> None:
        if level_number > self.highest_level:
            self.highest_level = level_number

    def is_completed(self, level_number: int) -> bool:
        return level_number in self.completed_levels

    def record_level_completion(self, level_number: int, moves: int,
                                hints_used: int = 0, undos_used: int = 0) -> GameStatistics:
        """
        Record a solved level and update statistics.

        Args:
            level_number: Solved level
            moves: Moves the player used
            hints_used: Hints requested during the level
            undos_used: Undos used during the level

        Returns:
            Updated statistics
        """
        if level_number not in self.completed_levels:
            self.completed_levels.append(level_number)
            self.completed_levels.sort()
        self.mark_level_reached(level_number + 1)

        stats = self.statistics
        stats.levels_completed += 1
        stats.total_moves += moves
        stats.best_moves = moves if stats.best_moves is None else min(stats.best_moves, moves)
        stats.hints_used += hints_used
        stats.undos_used += undos_used
        if level_number <= TUTORIAL_LEVEL_LIMIT:
            stats.tutorial_levels_completed += 1
        if hints_used == 0:
            stats.levels_without_hints += 1

        logger.info(f"Level {level_number} recorded: {moves} moves, "
                    f"{stats.levels_completed} levels completed")
        return stats

    def reset(self) -> None:
        """Forget all progress (not saved until save())."""
        self.highest_level = 1
        self.completed_levels = []
        self.statistics = GameStatistics()
