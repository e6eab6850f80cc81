"""
Errors raised by the search engine.

Both are recoverable: the engine leaves its state untouched and the
caller decides whether to ignore or report them.
"""


class SearchError(Exception):
    """Base class for search engine errors."""


class InvalidNodeId(SearchError, IndexError):
    """A selection referenced a node outside [0, node_count)."""

    def __init__(self, node: object, node_count: int) -> None:
        self.node = node
        self.node_count = node_count
        super().__init__(f"Node {node!r} is not in [0, {node_count})")


class EmptyGraph(SearchError):
    """A search was requested on a graph with no nodes."""

    def __init__(self) -> None:
        super().__init__("Cannot search a graph with no nodes")
