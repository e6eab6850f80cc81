"""
Unit tests for the random proximity graph builder.
"""

import numpy as np
import pytest

from pathsketch.graph import Graph, build


class TestBuildStructure:
    """Test structural guarantees of built graphs."""

    @pytest.mark.parametrize("seed", [0, 1, 42, 1234])
    def test_adjacency_symmetric(self, seed):
        """j is a neighbor of i iff i is a neighbor of j."""
        graph = build(200, 1000, 1000, 100, rng=seed)
        for i in range(graph.node_count):
            for j in graph.neighbors(i):
                assert i in graph.neighbors(j)

    @pytest.mark.parametrize("seed", [0, 1, 42, 1234])
    def test_no_self_loops(self, seed):
        """No node lists itself as a neighbor."""
        graph = build(200, 1000, 1000, 100, rng=seed)
        for i in range(graph.node_count):
            assert i not in graph.neighbors(i)

    def test_neighbors_in_ascending_order(self, random_graph):
        """Neighbor lists follow the scan order."""
        for i in range(random_graph.node_count):
            row = random_graph.neighbors(i)
            assert list(row) == sorted(row)

    def test_edges_match_distance_threshold(self, random_graph):
        """Every pair is connected iff strictly closer than the radius."""
        pos = random_graph.positions
        for i in range(0, random_graph.node_count, 10):
            for j in range(random_graph.node_count):
                if i == j:
                    continue
                close = np.linalg.norm(pos[i] - pos[j]) < 100
                assert (j in random_graph.neighbors(i)) == close

    def test_positions_within_canvas(self):
        """x and y stay inside the centered canvas."""
        graph = build(500, 800, 400, 50, rng=3)
        assert graph.positions.shape == (500, 2)
        assert np.all(np.abs(graph.positions[:, 0]) <= 400)
        assert np.all(np.abs(graph.positions[:, 1]) <= 200)

    def test_positions_read_only(self, random_graph):
        """Positions cannot be changed after building."""
        with pytest.raises(ValueError):
            random_graph.positions[0, 0] = 1.0

    def test_edge_count_matches_edges(self, random_graph):
        """edge_count agrees with the undirected edge list."""
        edges = random_graph.edges()
        assert len(edges) == random_graph.edge_count
        assert all(i < j for i, j in edges)


class TestBuildInputs:
    """Test seeds, degenerate sizes and argument validation."""

    def test_same_seed_same_graph(self):
        """A fixed seed reproduces positions and adjacency."""
        a = build(100, 1000, 1000, 100, rng=7)
        b = build(100, 1000, 1000, 100, rng=7)
        assert np.array_equal(a.positions, b.positions)
        assert a.adjacency == b.adjacency

    def test_accepts_generator(self):
        """A numpy Generator can be passed instead of a seed."""
        a = build(50, 1000, 1000, 100, rng=np.random.default_rng(5))
        b = build(50, 1000, 1000, 100, rng=5)
        assert np.array_equal(a.positions, b.positions)

    def test_zero_nodes(self):
        """n = 0 yields an empty graph, not an error."""
        graph = build(0, 1000, 1000, 100, rng=0)
        assert graph.node_count == 0
        assert graph.edge_count == 0
        assert graph.edges() == []

    def test_single_node_isolated(self):
        """A lone node has no neighbors."""
        graph = build(1, 1000, 1000, 100, rng=0)
        assert graph.neighbors(0) == ()

    def test_tiny_radius_isolates_nodes(self):
        """With a tiny radius nodes are (almost surely) isolated."""
        graph = build(20, 1000, 1000, 1e-9, rng=0)
        assert graph.edge_count == 0

    @pytest.mark.parametrize(
        "args",
        [
            (-1, 1000, 1000, 100),
            (10, 0, 1000, 100),
            (10, 1000, -5, 100),
            (10, 1000, 1000, 0),
        ],
    )
    def test_invalid_arguments_raise(self, args):
        """Negative counts and non-positive sizes are rejected."""
        with pytest.raises(ValueError):
            build(*args)


class TestFromAdjacency:
    """Test explicit graph construction."""

    def test_line_graph(self, line_graph):
        """Neighbor lists are stored as given."""
        assert line_graph.node_count == 5
        assert line_graph.neighbors(2) == (1, 3)
        assert line_graph.edges() == [(0, 1), (1, 2), (2, 3), (3, 4)]

    def test_default_positions_on_a_line(self, line_graph):
        """Without positions nodes are laid out along the x axis."""
        assert line_graph.position(3) == (3.0, 0.0)

    def test_explicit_positions(self):
        """Given positions are kept."""
        graph = Graph.from_adjacency([[1], [0]], positions=[[1.5, 2.0], [-1.0, 0.5]])
        assert graph.position(1) == (-1.0, 0.5)

    def test_asymmetric_rejected(self):
        """One-directional edges are rejected."""
        with pytest.raises(ValueError, match="no matching"):
            Graph.from_adjacency([[1], []])

    def test_self_loop_rejected(self):
        """Self-loops are rejected."""
        with pytest.raises(ValueError, match="itself"):
            Graph.from_adjacency([[0]])

    def test_out_of_range_rejected(self):
        """Unknown neighbor ids are rejected."""
        with pytest.raises(ValueError, match="out-of-range"):
            Graph.from_adjacency([[3]])

    def test_position_count_mismatch_rejected(self):
        """Position count must match node count."""
        with pytest.raises(ValueError, match="positions"):
            Graph.from_adjacency([[1], [0]], positions=[[0.0, 0.0]])
