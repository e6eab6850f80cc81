"""
Random proximity graph construction.

Nodes are scattered uniformly over a canvas centered on the origin and
every pair closer than the proximity radius is joined by an edge.

Usage:
    from pathsketch.graph import build

    graph = build(250, 1000, 1000, 100, rng=42)
    graph.neighbors(0)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Graph:
    """
    Immutable undirected graph with a 2D position per node.

    Attributes:
        positions: Read-only (n, 2) array of node coordinates
        adjacency: Neighbor ids per node, in ascending id order
    """

    positions: np.ndarray
    adjacency: tuple[tuple[int, ...], ...]

    @classmethod
    def from_adjacency(
        cls,
        adjacency: Sequence[Sequence[int]],
        positions: np.ndarray | None = None,
    ) -> Graph:
        """
        Build a graph from an explicit neighbor list.

        Args:
            adjacency: Neighbor ids for each node; must be symmetric
            positions: Optional (n, 2) coordinates (default: nodes on a line)

        Raises:
            ValueError: If the adjacency is asymmetric, has self-loops or
                references unknown nodes
        """
        n = len(adjacency)
        neighbor_lists = tuple(tuple(int(j) for j in row) for row in adjacency)

        for i, row in enumerate(neighbor_lists):
            for j in row:
                if not 0 <= j < n:
                    raise ValueError(f"Node {i} has out-of-range neighbor {j}")
                if j == i:
                    raise ValueError(f"Node {i} lists itself as a neighbor")
                if i not in neighbor_lists[j]:
                    raise ValueError(f"Edge {i}->{j} has no matching {j}->{i}")

        if positions is None:
            positions = np.column_stack([np.arange(n, dtype=float), np.zeros(n)])
        else:
            positions = np.array(positions, dtype=float).reshape(-1, 2)
            if len(positions) != n:
                raise ValueError(
                    f"Expected {n} positions, got {len(positions)}"
                )

        positions.setflags(write=False)
        return cls(positions=positions, adjacency=neighbor_lists)

    @property
    def node_count(self) -> int:
        """Number of nodes."""
        return len(self.adjacency)

    @property
    def edge_count(self) -> int:
        """Number of undirected edges."""
        return sum(len(row) for row in self.adjacency) // 2

    def neighbors(self, node: int) -> tuple[int, ...]:
        """Neighbor ids of a node in stored order."""
        return self.adjacency[node]

    def position(self, node: int) -> tuple[float, float]:
        """Coordinates of a node."""
        x, y = self.positions[node]
        return float(x), float(y)

    def edges(self) -> list[tuple[int, int]]:
        """Undirected edges as (i, j) pairs with i < j."""
        return [
            (i, j)
            for i, row in enumerate(self.adjacency)
            for j in row
            if i < j
        ]


def build(
    n: int,
    width: float,
    height: float,
    proximity_radius: float,
    rng: int | np.random.Generator | None = None,
) -> Graph:
    """
    Generate a random proximity graph.

    The all-pairs distance scan is O(n^2), which is fine for a few
    hundred nodes.

    Args:
        n: Number of nodes (0 gives an empty graph)
        width: Canvas width; x is drawn from [-width/2, width/2]
        height: Canvas height; y is drawn from [-height/2, height/2]
        proximity_radius: Nodes strictly closer than this are connected
        rng: Seed or numpy Generator (None = fresh entropy)

    Returns:
        A new Graph

    Raises:
        ValueError: If n is negative or a dimension is not positive
    """
    if n < 0:
        raise ValueError(f"Node count must be non-negative, got {n}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas must be positive, got {width}x{height}")
    if proximity_radius <= 0:
        raise ValueError(f"Proximity radius must be positive, got {proximity_radius}")

    generator = np.random.default_rng(rng)
    half = np.array([width / 2, height / 2])
    positions = generator.uniform(-half, half, size=(n, 2))

    # Pairwise distances; the diagonal is excluded to avoid self-loops
    deltas = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
    distances = np.sqrt((deltas**2).sum(axis=-1))
    close = distances < proximity_radius
    np.fill_diagonal(close, False)

    adjacency = tuple(tuple(int(j) for j in np.flatnonzero(row)) for row in close)

    positions.setflags(write=False)
    graph = Graph(positions=positions, adjacency=adjacency)
    logger.info(
        f"Built graph with {graph.node_count} nodes and {graph.edge_count} edges "
        f"(radius {proximity_radius:g})"
    )
    return graph
