from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Dict, List, Sequence, Set

import networkx as nx

from .geo import tower_distance_km
from .tower import CellTower
from .types import Adjacency, DistanceMap, EdgeKey


class AdjacencyError(RuntimeError):
    """Raised when an adjacency structure breaks its structural invariants."""


@dataclass(frozen=True)
class InterferenceGraph:
    """Towers plus the symmetric interference adjacency between them.

    Vertices are the positions of the towers in the input list. ``adjacency[i]``
    holds the indices of every tower closer than ``radius_km`` to tower ``i``.
    """

    towers: tuple[CellTower, ...]
    radius_km: float
    adjacency: Adjacency
    distances: DistanceMap

    def __len__(self) -> int:
        return len(self.towers)

    def degree(self, index: int) -> int:
        return len(self.adjacency[index])

    def index_of(self, cell_id: str) -> int:
        for index, tower in enumerate(self.towers):
            if tower.cell_id == cell_id:
                return index
        raise KeyError(cell_id)

    def neighbors_of(self, cell_id: str) -> Set[str]:
        index = self.index_of(cell_id)
        return {self.towers[other].cell_id for other in self.adjacency[index]}

    def edges(self) -> List[EdgeKey]:
        return sorted(
            (u, v) for u, neighbors in enumerate(self.adjacency) for v in neighbors if u < v
        )

    def to_networkx(self) -> nx.Graph:
        graph = nx.Graph()
        for tower in self.towers:
            graph.add_node(tower.cell_id, latitude=tower.latitude, longitude=tower.longitude)
        for u, v in self.edges():
            graph.add_edge(
                self.towers[u].cell_id,
                self.towers[v].cell_id,
                distance_km=self.distances[(u, v)],
            )
        return graph


def build_interference_graph(
    towers: Sequence[CellTower], radius_km: float
) -> InterferenceGraph:
    """Connect every pair of towers strictly closer than ``radius_km``.

    Each unordered pair is measured once. A pair at exactly ``radius_km`` does
    not interfere.
    """

    if radius_km <= 0:
        raise ValueError("radius_km must be positive")

    neighbors: List[Set[int]] = [set() for _ in towers]
    distances: DistanceMap = {}
    for i, tower_a in enumerate(towers):
        for j in range(i + 1, len(towers)):
            distance = tower_distance_km(tower_a, towers[j])
            if distance < radius_km:
                neighbors[i].add(j)
                neighbors[j].add(i)
                distances[(i, j)] = distance

    return InterferenceGraph(
        towers=tuple(towers),
        radius_km=radius_km,
        adjacency=tuple(frozenset(entry) for entry in neighbors),
        distances=distances,
    )


def validate_adjacency(adjacency: Sequence[Collection[int]], num_vertices: int) -> None:
    """Check size, index range, self loops and symmetry of an adjacency list."""

    if len(adjacency) != num_vertices:
        raise AdjacencyError(
            f"adjacency has {len(adjacency)} entries for {num_vertices} vertices"
        )
    for u, neighbors in enumerate(adjacency):
        for v in neighbors:
            if not 0 <= v < num_vertices:
                raise AdjacencyError(f"vertex {u} references unknown neighbor {v}")
            if v == u:
                raise AdjacencyError(f"vertex {u} lists itself as a neighbor")
            if u not in adjacency[v]:
                raise AdjacencyError(f"edge {u}-{v} is not symmetric")


def degree_order(graph: InterferenceGraph) -> List[int]:
    """Vertex indices by degree descending; equal degrees keep input order."""

    # sorted() is stable, so ties stay in input order.
    return sorted(range(len(graph)), key=lambda index: -graph.degree(index))


def degree_histogram(graph: InterferenceGraph) -> Dict[int, int]:
    histogram: Dict[int, int] = {}
    for index in range(len(graph)):
        degree = graph.degree(index)
        histogram[degree] = histogram.get(degree, 0) + 1
    return dict(sorted(histogram.items()))
