"""
Incremental breadth-first search over a proximity graph.

The engine advances one node per step() call so a render loop can show
the frontier spreading frame by frame. Selecting a new source or target
discards the running search and starts over.
"""

from __future__ import annotations

import logging
from collections import deque

import numpy as np

from pathsketch.config import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DEFAULT_SOURCE,
    DEFAULT_TARGET,
    NODE_COUNT,
    PROXIMITY_RADIUS,
)
from pathsketch.graph.builder import Graph, build
from pathsketch.search.errors import EmptyGraph, InvalidNodeId
from pathsketch.search.state import Phase, Role, SearchSnapshot

logger = logging.getLogger(__name__)

# Marks "no predecessor recorded" in the dense predecessor array
NO_PREDECESSOR = -1


class SearchEngine:
    """
    Step-wise BFS state machine between two selected nodes.

    The engine is single-threaded and does no locking; callers must not
    interleave retarget() with an in-flight step().

    Working set per search:
    - frontier: FIFO queue of discovered node ids
    - visited: dense bool array, a node is expanded at most once
    - predecessor: dense int array, first discovery wins
    """

    def __init__(
        self,
        graph: Graph,
        source: int | None = None,
        target: int | None = None,
    ) -> None:
        """
        Initialize the engine and start a search between default endpoints.

        Args:
            graph: Graph to search
            source: Start node (default: node 0)
            target: Goal node (default: node 1, or 0 on a one-node graph)
        """
        # Parameters for regenerate(), set by random()
        self._build_params: tuple[int, float, float, float] | None = None
        self._load_graph(graph, source, target)

    @classmethod
    def random(
        cls,
        n: int = NODE_COUNT,
        width: float = CANVAS_WIDTH,
        height: float = CANVAS_HEIGHT,
        proximity_radius: float = PROXIMITY_RADIUS,
        rng: int | np.random.Generator | None = None,
    ) -> SearchEngine:
        """Build a random proximity graph and an engine searching it."""
        engine = cls(build(n, width, height, proximity_radius, rng))
        engine._build_params = (n, width, height, proximity_radius)
        return engine

    def _load_graph(
        self,
        graph: Graph,
        source: int | None = None,
        target: int | None = None,
    ) -> None:
        """Adopt a graph, allocate the working set and pick endpoints."""
        n = graph.node_count
        self._graph = graph
        self._visited = np.zeros(n, dtype=bool)
        self._predecessor = np.full(n, NO_PREDECESSOR, dtype=np.int64)
        self._frontier: deque[int] = deque()
        self._path: list[int] = []
        self._phase = Phase.IDLE
        self._source: int | None = None
        self._target: int | None = None

        # Static parts of every snapshot
        self._nodes = tuple(
            (node, graph.position(node)) for node in range(n)
        )
        self._edges = tuple(graph.edges())

        if n == 0:
            logger.warning("Graph has no nodes; search disabled")
            return

        if source is None:
            source = min(DEFAULT_SOURCE, n - 1)
        if target is None:
            target = min(DEFAULT_TARGET, n - 1)
        self.retarget(source, target)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def graph(self) -> Graph:
        return self._graph

    @property
    def source(self) -> int | None:
        return self._source

    @property
    def target(self) -> int | None:
        return self._target

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def path(self) -> tuple[int, ...]:
        """Source-to-target path, empty until found."""
        return tuple(self._path)

    @property
    def visited(self) -> frozenset[int]:
        return frozenset(int(i) for i in np.flatnonzero(self._visited))

    @property
    def frontier(self) -> tuple[int, ...]:
        return tuple(self._frontier)

    def predecessor_of(self, node: int) -> int | None:
        """Node that first discovered `node`, or None."""
        pred = int(self._predecessor[self._check_node(node)])
        return None if pred == NO_PREDECESSOR else pred

    def predecessors(self) -> dict[int, int]:
        """Copy of every recorded predecessor entry."""
        nodes = np.flatnonzero(self._predecessor != NO_PREDECESSOR)
        return {int(i): int(self._predecessor[i]) for i in nodes}

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def _check_node(self, node: int) -> int:
        """Validate a node id and return it as a plain int."""
        n = self._graph.node_count
        if isinstance(node, bool) or not isinstance(node, (int, np.integer)):
            raise InvalidNodeId(node, n)
        if not 0 <= node < n:
            raise InvalidNodeId(node, n)
        return int(node)

    def retarget(self, source: int, target: int) -> None:
        """
        Start a new search between two nodes.

        Any in-progress search is discarded. When source equals target the
        search is already complete with a single-node path.

        Raises:
            EmptyGraph: If the graph has no nodes
            InvalidNodeId: If either node is out of range
        """
        if self._graph.node_count == 0:
            raise EmptyGraph()
        source = self._check_node(source)
        target = self._check_node(target)

        self._source = source
        self._target = target
        self._visited[:] = False
        self._predecessor[:] = NO_PREDECESSOR
        self._path = []

        if source == target:
            self._frontier = deque()
            self._path = [source]
            self._phase = Phase.IDLE
            logger.debug(f"Source and target are both node {source}")
            return

        self._frontier = deque([source])
        self._phase = Phase.SEARCHING
        logger.debug(f"Searching from node {source} to node {target}")

    def select(self, role: Role | str, node: int) -> None:
        """
        Apply a selection event from the presentation layer.

        Args:
            role: Which endpoint to replace ("source" or "target")
            node: Selected node id

        Raises:
            ValueError: If the role is unknown
            EmptyGraph: If the graph has no nodes
            InvalidNodeId: If the node is out of range
        """
        role = Role(role)
        if role is Role.SOURCE:
            self.retarget(node, self._target if self._target is not None else node)
        else:
            self.retarget(self._source if self._source is not None else node, node)

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def step(self) -> bool:
        """
        Advance the search by one dequeued node.

        Returns:
            True if the state changed, False if there was nothing to do
        """
        if self._phase is Phase.IDLE:
            return False
        if not self._frontier:
            # Not reachable through retarget(); settle into idle without other changes
            self._phase = Phase.IDLE
            return False

        current = self._frontier.popleft()

        if current == self._target:
            path = self._reconstruct_path()
            if path is not None:
                self._path = path
                self._frontier.clear()
                self._phase = Phase.IDLE
                logger.info(
                    f"Found path ({len(path) - 1} edges): "
                    f"{' -> '.join(str(node) for node in path)}"
                )
                return True

        if self._visited[current]:
            # Duplicate queue entry; still counts as one step of work
            self._finish_if_exhausted()
            return True

        self._visited[current] = True
        for neighbor in self._graph.neighbors(current):
            if self._visited[neighbor]:
                continue
            self._frontier.append(neighbor)
            if self._predecessor[neighbor] == NO_PREDECESSOR:
                self._predecessor[neighbor] = current

        self._finish_if_exhausted()
        return True

    def _finish_if_exhausted(self) -> None:
        """Go idle once the frontier drains without reaching the target."""
        if not self._frontier and not self._path:
            self._phase = Phase.IDLE
            logger.info(
                f"No path from node {self._source} to node {self._target}"
            )

    def _reconstruct_path(self) -> list[int] | None:
        """Walk predecessors back from the target; None if not reachable yet."""
        source, target = self._source, self._target
        if target == source:
            return [source]
        if self._predecessor[target] == NO_PREDECESSOR:
            return None

        path = [target]
        node = target
        while node != source:
            node = int(self._predecessor[node])
            if node == NO_PREDECESSOR:
                return None
            path.append(node)
        path.reverse()
        return path

    def run(self, max_steps: int | None = None) -> int:
        """
        Step until the search goes idle.

        Args:
            max_steps: Stop after this many steps (None = no limit)

        Returns:
            Number of steps that changed state
        """
        steps = 0
        while self._phase is Phase.SEARCHING:
            if max_steps is not None and steps >= max_steps:
                break
            if not self.step():
                break
            steps += 1
        return steps

    def regenerate(self, rng: int | np.random.Generator | None = None) -> None:
        """
        Replace the graph with a fresh random one and reset the endpoints.

        Raises:
            RuntimeError: If the engine was not created by random()
        """
        if self._build_params is None:
            raise RuntimeError("Only engines created with random() can regenerate")
        n, width, height, radius = self._build_params
        self._load_graph(build(n, width, height, radius, rng))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def current_snapshot(self) -> SearchSnapshot:
        """Immutable view of the current state for rendering."""
        return SearchSnapshot(
            nodes=self._nodes,
            edges=self._edges,
            visited=self.visited,
            path=self.path,
            frontier=self.frontier,
            source=self._source,
            target=self._target,
            phase=self._phase,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(nodes={self._graph.node_count}, "
            f"source={self._source}, target={self._target}, "
            f"phase={self._phase.value})"
        )
