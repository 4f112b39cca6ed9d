"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .deepening import DeepeningStrategy
from .best_first import BestFirstStrategy
from .breadth_first import BreadthFirstStrategy
from .depth_first import DepthFirstStrategy
from .uniform_cost import UniformCostStrategy

__all__ = [
    "DeepeningStrategy",
    "BestFirstStrategy",
    "BreadthFirstStrategy",
    "DepthFirstStrategy",
    "UniformCostStrategy",
]
