"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from pathlib import Path

import pytest

from pathsketch.graph import Graph, build
from pathsketch.search import SearchEngine


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def line_graph() -> Graph:
    """Five nodes connected in a line: 0-1-2-3-4."""
    return Graph.from_adjacency([[1], [0, 2], [1, 3], [2, 4], [3]])


@pytest.fixture
def split_graph() -> Graph:
    """Two components: triangle 0-1-2 and pair 3-4."""
    return Graph.from_adjacency([[1, 2], [0, 2], [0, 1], [4], [3]])


@pytest.fixture
def grid_graph() -> Graph:
    """
    3x3 grid, node = row * 3 + col.

    Several shortest paths exist between opposite corners.
    """
    adjacency = []
    for node in range(9):
        row, col = divmod(node, 3)
        neighbors = []
        if row > 0:
            neighbors.append(node - 3)
        if col > 0:
            neighbors.append(node - 1)
        if col < 2:
            neighbors.append(node + 1)
        if row < 2:
            neighbors.append(node + 3)
        adjacency.append(neighbors)
    return Graph.from_adjacency(adjacency)


@pytest.fixture
def random_graph() -> Graph:
    """A seeded random graph at the interactive scale."""
    return build(250, 1000, 1000, 100, rng=42)


@pytest.fixture
def line_engine(line_graph: Graph) -> SearchEngine:
    """Engine searching the line graph from 0 to 4."""
    return SearchEngine(line_graph, source=0, target=4)
