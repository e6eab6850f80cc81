"""
Search state types shared by the engine and its renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    """Coarse engine state."""

    IDLE = "idle"
    SEARCHING = "searching"


class Role(str, Enum):
    """Which endpoint a selection event sets."""

    SOURCE = "source"
    TARGET = "target"


@dataclass(frozen=True)
class SearchSnapshot:
    """
    Read-only view of the engine for one rendered frame.

    Attributes:
        nodes: (node id, (x, y)) pairs for every node
        edges: Undirected edges as (i, j) with i < j
        visited: Nodes whose neighbors have been examined
        path: Source-to-target path, empty until one is found
        frontier: Queued nodes in dequeue order
        source: Selected start node (None on an empty graph)
        target: Selected goal node (None on an empty graph)
        phase: Engine phase when the snapshot was taken
    """

    nodes: tuple[tuple[int, tuple[float, float]], ...]
    edges: tuple[tuple[int, int], ...]
    visited: frozenset[int]
    path: tuple[int, ...]
    frontier: tuple[int, ...]
    source: int | None
    target: int | None
    phase: Phase

    @property
    def found(self) -> bool:
        """Whether a path has been reconstructed."""
        return bool(self.path)

    def path_edges(self) -> set[tuple[int, int]]:
        """Consecutive path pairs, normalized so that i < j."""
        return {
            (min(a, b), max(a, b))
            for a, b in zip(self.path, self.path[1:])
        }

    def to_dict(self) -> dict:
        """JSON-ready representation."""
        return {
            "nodes": [[node, list(pos)] for node, pos in self.nodes],
            "edges": [list(edge) for edge in self.edges],
            "visited": sorted(self.visited),
            "path": list(self.path),
            "frontier": list(self.frontier),
            "source": self.source,
            "target": self.target,
            "phase": self.phase.value,
        }
