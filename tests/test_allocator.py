import math

import pytest

from towerfreq.allocator import allocate, greedy_color, run_allocation
from towerfreq.config import AllocationConfig
from towerfreq.enums import Outcome
from towerfreq.graph import AdjacencyError, InterferenceGraph, build_interference_graph, degree_order
from towerfreq.results import ChannelOutcome
from towerfreq.tower import CellTower


def clique(size):
    """Towers a few metres apart, all mutually interfering at 0.5 km."""
    return [CellTower(f"C{i}", 0.0, i * 0.0001) for i in range(size)]


class TestScenarios:
    def test_scenario_a(self):
        towers = [
            CellTower("A", 0.0, 0.0),
            CellTower("B", 0.0, 0.001),
            CellTower("C", 10.0, 10.0),
        ]
        result = allocate(towers, AllocationConfig(interference_radius_km=0.5, palette=[1, 2, 3]))
        assert {result["A"].channel, result["B"].channel} == {1, 2}
        assert result["C"] == ChannelOutcome.assigned(1)

    def test_scenario_b(self):
        towers = [CellTower("first", 0.0, 0.0), CellTower("second", 0.0, 0.001)]
        result = allocate(towers, AllocationConfig(interference_radius_km=0.5, palette=[1]))
        assert result["first"] == ChannelOutcome.assigned(1)
        assert result["second"].status is Outcome.UNASSIGNABLE
        assert result["second"].channel is None


class TestGreedyColoring:
    def test_clique_exhaustion_fails_last_vertex_only(self):
        palette = [5, 6, 7]
        towers = clique(len(palette) + 1)
        result = run_allocation(towers, AllocationConfig(palette=palette))
        assert result.order == [0, 1, 2, 3]
        assert result.failed_ids == ["C3"]
        channels = [result.assignments[f"C{i}"].channel for i in range(3)]
        assert channels == [5, 6, 7]

    def test_success_bound_gives_no_failures(self):
        # Path A - B - C with two channels: every vertex sees < 2 decided neighbors.
        towers = [
            CellTower("A", 0.0, 0.0),
            CellTower("B", 0.0, 0.0027),
            CellTower("C", 0.0, 0.0054),
        ]
        result = allocate(towers, AllocationConfig(palette=[1, 2]))
        assert all(outcome.is_assigned for outcome in result.values())
        assert result["B"].channel == 1
        assert result["A"].channel == 2
        assert result["C"].channel == 2

    def test_neighbors_never_share_a_channel(self):
        towers = [
            CellTower(f"T{row}{col}", row * 0.003, col * 0.003)
            for row in range(5)
            for col in range(5)
        ]
        result = run_allocation(towers, AllocationConfig())
        for u, v in result.graph.edges():
            a = result.assignments[towers[u].cell_id]
            b = result.assignments[towers[v].cell_id]
            if a.is_assigned and b.is_assigned:
                assert a.channel != b.channel

    def test_palette_preference_order(self):
        towers = [CellTower("A", 0.0, 0.0), CellTower("B", 0.0, 0.001)]
        result = allocate(towers, AllocationConfig(palette=[9, 3]))
        assert result["A"].channel == 9
        assert result["B"].channel == 3

    def test_failed_vertex_contributes_no_channel(self):
        # X0..X2 form a triangle with palette [1, 2] and each has one pendant.
        # X2 is processed third and fails; its pendant Y still gets channel 1.
        towers = [
            CellTower("X0", 0.0, 0.0),
            CellTower("X1", 0.0, 0.002),
            CellTower("X2", 0.0017, 0.001),
            CellTower("W0", 0.0, -0.0036),
            CellTower("W1", 0.0, 0.0056),
            CellTower("Y", 0.0053, 0.001),
        ]
        result = run_allocation(towers, AllocationConfig(palette=[1, 2]))
        assert result.graph.neighbors_of("Y") == {"X2"}
        assert result.processing_order_ids[:3] == ["X0", "X1", "X2"]
        assert result.assignments["X2"].status is Outcome.UNASSIGNABLE
        assert result.assignments["W0"] == ChannelOutcome.assigned(2)
        assert result.assignments["W1"] == ChannelOutcome.assigned(1)
        assert result.assignments["Y"] == ChannelOutcome.assigned(1)

    def test_equal_degree_order_follows_input(self):
        towers = [
            CellTower("late", 0.0, 0.0),
            CellTower("early", 0.0, 0.001),
        ]
        result = run_allocation(towers, AllocationConfig(palette=[1, 2]))
        assert result.processing_order_ids == ["late", "early"]
        assert result.assignments["late"].channel == 1

    def test_assignments_in_processing_order(self):
        towers = [
            CellTower("iso", 50.0, 50.0),
            CellTower("A", 0.0, 0.0),
            CellTower("B", 0.0, 0.001),
        ]
        result = run_allocation(towers, AllocationConfig())
        assert list(result.assignments) == ["A", "B", "iso"]
        assert [step.cell_id for step in result.steps] == ["A", "B", "iso"]

    def test_steps_record_used_channels(self):
        towers = clique(3)
        result = run_allocation(towers, AllocationConfig(palette=[1, 2]))
        last = result.steps[-1]
        assert last.used_channels == (1, 2)
        assert last.neighbor_ids == ("C0", "C1")
        assert last.degree == 2
        assert not last.outcome.is_assigned

    def test_deterministic(self):
        towers = clique(6) + [CellTower("far", 45.0, 45.0)]
        config = AllocationConfig(palette=[1, 2, 3])
        first = allocate(towers, config)
        second = allocate(towers, config)
        assert list(first.items()) == list(second.items())
        assert repr(first) == repr(second)

    def test_asymmetric_adjacency_is_fatal(self):
        towers = (CellTower("A", 0.0, 0.0), CellTower("B", 0.0, 0.001))
        graph = InterferenceGraph(
            towers=towers,
            radius_km=0.5,
            adjacency=(frozenset({1}), frozenset()),
            distances={},
        )
        with pytest.raises(AdjacencyError):
            greedy_color(graph, [0, 1], (1, 2))

    def test_dangling_adjacency_is_fatal(self):
        towers = (CellTower("A", 0.0, 0.0),)
        graph = InterferenceGraph(
            towers=towers, radius_km=0.5, adjacency=(frozenset({3}),), distances={}
        )
        with pytest.raises(AdjacencyError):
            greedy_color(graph, [0], (1,))

    def test_order_must_cover_every_vertex(self):
        graph = build_interference_graph(clique(3), 0.5)
        with pytest.raises(AdjacencyError, match="exactly once"):
            greedy_color(graph, [0, 0, 1], (1, 2, 3))

    def test_greedy_color_with_explicit_order(self):
        graph = build_interference_graph(clique(2), 0.5)
        assignments, _ = greedy_color(graph, [1, 0], (1, 2))
        assert assignments["C1"].channel == 1
        assert assignments["C0"].channel == 2
        assert degree_order(graph) == [0, 1]


class TestInputValidation:
    def test_empty_tower_list(self):
        with pytest.raises(ValueError, match="at least one tower"):
            allocate([], AllocationConfig())

    def test_duplicate_cell_ids(self):
        towers = [CellTower("A", 0.0, 0.0), CellTower("A", 1.0, 1.0)]
        with pytest.raises(ValueError, match="duplicate cell_id: A"):
            allocate(towers, AllocationConfig())

    def test_empty_cell_id(self):
        with pytest.raises(ValueError, match="non-empty"):
            allocate([CellTower("", 0.0, 0.0)], AllocationConfig())

    def test_non_finite_coordinates(self):
        with pytest.raises(ValueError, match="must be finite"):
            allocate([CellTower("A", math.nan, 0.0)], AllocationConfig())

    def test_default_config(self):
        result = allocate([CellTower("A", 0.0, 0.0)])
        assert result["A"].channel == 110


class TestChannelOutcome:
    def test_assigned_requires_channel(self):
        with pytest.raises(ValueError, match="requires a channel"):
            ChannelOutcome(Outcome.ASSIGNED)

    def test_unassignable_has_no_channel(self):
        with pytest.raises(ValueError, match="cannot carry a channel"):
            ChannelOutcome(Outcome.UNASSIGNABLE, 3)

    def test_str(self):
        assert str(ChannelOutcome.assigned(112)) == "112"
        assert str(ChannelOutcome.unassignable()) == "UNASSIGNED"


class TestFarApartTowers:
    def test_near_antipodal_towers_are_allocated(self):
        towers = [CellTower("A", 0.08, 0.0), CellTower("B", -0.08, 180.0)]
        result = allocate(towers, AllocationConfig())
        assert result["A"] == ChannelOutcome.assigned(110)
        assert result["B"] == ChannelOutcome.assigned(110)
