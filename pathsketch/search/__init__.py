"""
Search module.

Provides the incremental shortest-path engine:
- SearchEngine: Step-wise BFS between two selected nodes
- SearchSnapshot: Read-only view for renderers
- Phase, Role: Engine phase and selection role enums
- SearchError, InvalidNodeId, EmptyGraph: Recoverable selection errors
"""

from pathsketch.search.engine import SearchEngine
from pathsketch.search.errors import EmptyGraph, InvalidNodeId, SearchError
from pathsketch.search.state import Phase, Role, SearchSnapshot

__all__ = [
    "SearchEngine",
    "SearchSnapshot",
    "Phase",
    "Role",
    "SearchError",
    "InvalidNodeId",
    "EmptyGraph",
]
