"""Cell tower frequency allocation by greedy interference-graph coloring."""

from .allocator import allocate, run_allocation
from .config import AllocationConfig
from .enums import Outcome
from .graph import AdjacencyError, InterferenceGraph, build_interference_graph, degree_order
from .results import AllocationResult, AllocationStep, ChannelOutcome
from .tower import CellTower

__all__ = [
    "AdjacencyError",
    "AllocationConfig",
    "AllocationResult",
    "AllocationStep",
    "CellTower",
    "ChannelOutcome",
    "InterferenceGraph",
    "Outcome",
    "allocate",
    "build_interference_graph",
    "degree_order",
    "run_allocation",
]
