from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

import networkx as nx

from .graph import degree_histogram
from .results import AllocationResult, ChannelOutcome


@dataclass(frozen=True)
class AllocationSummary:
    num_towers: int
    num_edges: int
    num_assigned: int
    num_unassignable: int
    max_degree: int
    num_components: int
    channels_used: int
    degree_histogram: Dict[int, int]
    success_bound_held: bool


def find_conflicts(result: AllocationResult) -> List[Tuple[str, str, int]]:
    """Return interfering pairs that ended up on the same channel."""

    conflicts: List[Tuple[str, str, int]] = []
    towers = result.graph.towers
    for u, v in result.graph.edges():
        a = result.assignments[towers[u].cell_id]
        b = result.assignments[towers[v].cell_id]
        if a.is_assigned and b.is_assigned and a.channel == b.channel:
            conflicts.append((towers[u].cell_id, towers[v].cell_id, a.channel))
    return conflicts


def channel_usage(
    assignments: Mapping[str, ChannelOutcome], palette: Sequence[int]
) -> Dict[int, int]:
    """Number of towers on each palette channel, in palette order."""

    usage = {channel: 0 for channel in palette}
    for outcome in assignments.values():
        if outcome.is_assigned:
            usage[outcome.channel] = usage.get(outcome.channel, 0) + 1
    return usage


def success_bound_held(result: AllocationResult) -> bool:
    """True when every tower had fewer decided neighbors than palette channels.

    Under this condition the greedy pass cannot run out of channels.
    """

    palette_size = len(result.config.palette)
    decided: set[int] = set()
    for index in result.order:
        decided_neighbors = sum(1 for other in result.graph.adjacency[index] if other in decided)
        if decided_neighbors >= palette_size:
            return False
        decided.add(index)
    return True


def summarize(result: AllocationResult) -> AllocationSummary:
    graph = result.graph.to_networkx()
    degrees = [degree for _, degree in graph.degree()]
    failed = len(result.failed_ids)
    usage = channel_usage(result.assignments, result.config.palette)
    return AllocationSummary(
        num_towers=graph.number_of_nodes(),
        num_edges=graph.number_of_edges(),
        num_assigned=len(result.assignments) - failed,
        num_unassignable=failed,
        max_degree=max(degrees, default=0),
        num_components=nx.number_connected_components(graph),
        channels_used=sum(1 for count in usage.values() if count > 0),
        degree_histogram=degree_histogram(result.graph),
        success_bound_held=success_bound_held(result),
    )
