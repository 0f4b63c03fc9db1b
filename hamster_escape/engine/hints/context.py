"""
Hint Context Module - Shared context for hint strategies.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from ..board import BoardState
from ..history import GameMove


@dataclass
class HintContext:
    """
    Context passed to hint strategies.

    Attributes:
        board: Current board state
        last_move: Primary move of the player's last accepted move, used to
            avoid suggesting its exact reversal
        progress_callback: Optional callback for progress updates
    """
    board: BoardState
    last_move: Optional[GameMove] = None
    progress_callback: Optional[Callable[[float, str], None]] = None

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)
