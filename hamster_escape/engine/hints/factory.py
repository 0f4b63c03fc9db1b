"""
Hint Factory Module - Registry of hint strategies by name.
"""

from typing import Any, Dict, List, Type

from .base import HintStrategy


DEFAULT_STRATEGY = "greedy"

_REGISTRY: Dict[str, Type[HintStrategy]] = {}


def register_strategy(cls: Type[HintStrategy]) -> Type[HintStrategy]:
    """
    Class decorator adding a hint strategy to the registry under cls.name.

    Raises:
        TypeError: If cls is not a HintStrategy subclass
    """
    if not issubclass(cls, HintStrategy):
        raise TypeError(f"{cls} must be a subclass of HintStrategy")
    _REGISTRY[cls.name] = cls
    return cls


def create_strategy(name: str, **kwargs: Any) -> HintStrategy:
    """
    Instantiate a registered hint strategy.

    Args:
        name: Registered strategy name ("greedy", "unblock", ...)
        **kwargs: Passed to the strategy constructor

    Returns:
        Strategy instance

    Raises:
        ValueError: If no strategy is registered under name
    """
    try:
        strategy_cls = _REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY))
        raise ValueError(f"Unknown hint strategy: {name}. Available: {available}") from None
    return strategy_cls(**kwargs)


def get_strategy_names() -> List[str]:
    return list(_REGISTRY)


def get_strategy_info() -> List[Dict[str, str]]:
    """Name and description of every registered strategy, for menus and --help."""
    return [{"name": cls.name, "description": cls.description} for cls in _REGISTRY.values()]


def get_default_strategy_name() -> str:
    """DEFAULT_STRATEGY if registered, else the first registered name, else ""."""
    if DEFAULT_STRATEGY in _REGISTRY:
        return DEFAULT_STRATEGY
    return next(iter(_REGISTRY), "")
