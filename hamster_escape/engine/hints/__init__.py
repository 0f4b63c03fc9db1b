"""
Hints Package - Pluggable hint strategies built on the move resolver.

Import this package to register all built-in strategies.
"""

from .base import HintStrategy
from .context import HintContext
from .hint import Hint
from .factory import (
    create_strategy,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
    register_strategy,
)
from .greedy import GreedyHintStrategy
from .unblock import UnblockHintStrategy

__all__ = [
    "Hint",
    "HintContext",
    "HintStrategy",
    "create_strategy",
    "get_default_strategy_name",
    "get_strategy_info",
    "get_strategy_names",
    "register_strategy",
    "GreedyHintStrategy",
    "UnblockHintStrategy",
]
