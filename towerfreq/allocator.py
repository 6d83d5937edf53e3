"""Greedy channel allocation over the tower interference graph.

Towers are processed once each, most-constrained first (degree descending,
input order on ties). Each tower takes the first palette channel not already
used by a decided neighbor. When every channel is taken the tower is marked
unassignable and the pass moves on; nothing is ever re-colored.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Sequence, Set

from .config import AllocationConfig
from .graph import (
    AdjacencyError,
    InterferenceGraph,
    build_interference_graph,
    degree_order,
    validate_adjacency,
)
from .results import AllocationResult, AllocationStep, ChannelOutcome
from .tower import CellTower
from .types import CellId, Channel

logger = logging.getLogger(__name__)


def validate_towers(towers: Sequence[CellTower]) -> None:
    if not towers:
        raise ValueError("towers must contain at least one tower")
    seen: Set[str] = set()
    for tower in towers:
        if not tower.cell_id:
            raise ValueError("cell_id must be a non-empty string")
        if tower.cell_id in seen:
            raise ValueError(f"duplicate cell_id: {tower.cell_id}")
        seen.add(tower.cell_id)
        if not (math.isfinite(tower.latitude) and math.isfinite(tower.longitude)):
            raise ValueError(f"coordinates of {tower.cell_id} must be finite")


def greedy_color(
    graph: InterferenceGraph,
    order: Sequence[int],
    palette: Sequence[Channel],
) -> tuple[Dict[CellId, ChannelOutcome], List[AllocationStep]]:
    """Assign channels in ``order`` with a single greedy pass."""

    validate_adjacency(graph.adjacency, len(graph))
    if sorted(order) != list(range(len(graph))):
        raise AdjacencyError("processing order must visit every vertex exactly once")

    decided: Dict[int, Channel] = {}
    assignments: Dict[CellId, ChannelOutcome] = {}
    steps: List[AllocationStep] = []

    for index in order:
        tower = graph.towers[index]
        neighbors = graph.adjacency[index]
        used = {decided[other] for other in neighbors if other in decided}

        channel = next((c for c in palette if c not in used), None)
        if channel is None:
            outcome = ChannelOutcome.unassignable()
            logger.info(
                "could not assign a channel to %s; neighbours %s use all of %s",
                tower.cell_id,
                ", ".join(graph.towers[other].cell_id for other in sorted(neighbors)),
                list(palette),
            )
        else:
            outcome = ChannelOutcome.assigned(channel)
            decided[index] = channel
            logger.debug(
                "assigned %d to %s (neighbours used: %s)", channel, tower.cell_id, sorted(used)
            )

        assignments[tower.cell_id] = outcome
        steps.append(
            AllocationStep(
                cell_id=tower.cell_id,
                degree=len(neighbors),
                used_channels=tuple(sorted(used)),
                neighbor_ids=tuple(graph.towers[other].cell_id for other in sorted(neighbors)),
                outcome=outcome,
            )
        )

    return assignments, steps


def run_allocation(towers: Sequence[CellTower], config: AllocationConfig) -> AllocationResult:
    validate_towers(towers)
    graph = build_interference_graph(towers, config.interference_radius_km)
    order = degree_order(graph)
    logger.info(
        "allocating %d towers (%d interfering pairs) over %d channels",
        len(graph),
        len(graph.distances),
        len(config.palette),
    )
    assignments, steps = greedy_color(graph, order, config.palette)
    return AllocationResult(
        config=config,
        graph=graph,
        order=order,
        steps=steps,
        assignments=assignments,
    )


def allocate(
    towers: Sequence[CellTower], config: AllocationConfig | None = None
) -> Dict[CellId, ChannelOutcome]:
    """Map each cell id to its assigned channel or the unassignable marker."""

    return run_allocation(towers, config or AllocationConfig()).assignments
