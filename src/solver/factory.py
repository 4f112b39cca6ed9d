"""
Strategy Factory Module - Registry and factory for strategy instantiation.
"""

from typing import Any, Dict, List, Type

from .base import SolverStrategy


# Global registry of strategies
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}

# Alternative names -> registered name
_ALIASES: Dict[str, str] = {}

DEFAULT_STRATEGY = "deepening"


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Decorator to register a strategy class.

    Usage:
        @register_strategy
        class MyStrategy(SolverStrategy):
            name = "my_strategy"
            aliases = ("mine",)
            ...

    Args:
        cls: Strategy class to register

    Returns:
        The same class (for decorator chaining)
    """
    _STRATEGIES[cls.name] = cls
    for alias in cls.aliases:
        _ALIASES[alias] = cls.name
    return cls


def resolve_strategy_name(name: str) -> str:
    """
    Map a strategy name or alias to its registered name.

    Args:
        name: Strategy name or alias (case-insensitive)

    Returns:
        Registered strategy name

    Raises:
        ValueError: If the name is not known
    """
    key = name.strip().lower()
    if key in _STRATEGIES:
        return key
    if key in _ALIASES:
        return _ALIASES[key]
    available = ", ".join(_STRATEGIES.keys())
    raise ValueError(f"Unknown strategy: {name}. Available: {available}")


def create_strategy(name: str, **kwargs: Any) -> SolverStrategy:
    """
    Create a strategy instance by name.

    Args:
        name: Strategy name or alias (e.g., "breadthfirst", "bfs")
        **kwargs: Additional arguments passed to strategy constructor

    Returns:
        Strategy instance

    Raises:
        ValueError: If strategy name not found
    """
    return _STRATEGIES[resolve_strategy_name(name)](**kwargs)


def get_strategy_names() -> List[str]:
    """
    Get list of available strategy names.

    Returns:
        List of registered strategy names
    """
    return list(_STRATEGIES.keys())


def get_strategy_info() -> List[Dict[str, str]]:
    """
    Get name, aliases and description for all registered strategies.

    Returns:
        List of dicts with 'name', 'aliases' and 'description' keys
    """
    return [
        {
            "name": cls.name,
            "aliases": ", ".join(cls.aliases),
            "description": cls.description,
        }
        for cls in _STRATEGIES.values()
    ]


def get_default_strategy_name() -> str:
    """
    Get the default strategy name.

    Returns:
        Default strategy name ("deepening" if available, else first registered)
    """
    if DEFAULT_STRATEGY in _STRATEGIES:
        return DEFAULT_STRATEGY
    if _STRATEGIES:
        return next(iter(_STRATEGIES.keys()))
    return ""
