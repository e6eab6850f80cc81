"""
Graph module.

Provides the proximity graph used by the search engine:
- Graph: Immutable adjacency list with node positions
- build: Random proximity graph factory
"""

from pathsketch.graph.builder import Graph, build

__all__ = ["Graph", "build"]
