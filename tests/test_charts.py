"""
Tests for the Plotly snapshot renderer.
"""

from pathsketch.config import PATH_EDGE_COLOR, SOURCE_COLOR, TARGET_COLOR
from pathsketch.search import SearchEngine
from ui.components.charts import create_graph_figure


def _trace(fig, name):
    return next(t for t in fig.data if t.name == name)


class TestGraphFigure:
    """Test figure structure for different search states."""

    def test_trace_layout(self, line_engine):
        """Three edge groups plus the node markers."""
        fig = create_graph_figure(line_engine.current_snapshot())
        assert [t.name for t in fig.data] == ["edges", "visited", "path", "nodes"]
        assert len(_trace(fig, "nodes").x) == 5

    def test_endpoint_colors(self, line_engine):
        """Source and target get their own colors."""
        fig = create_graph_figure(line_engine.current_snapshot())
        colors = _trace(fig, "nodes").marker.color
        assert colors[0] == SOURCE_COLOR
        assert colors[4] == TARGET_COLOR

    def test_found_path_drawn(self, line_engine):
        """After a search every line edge is a path edge."""
        line_engine.run()
        fig = create_graph_figure(line_engine.current_snapshot())
        path = _trace(fig, "path")
        assert path.line.color == PATH_EDGE_COLOR
        # Three entries (start, end, gap) per edge
        assert len(path.x) == 4 * 3
        assert len(_trace(fig, "edges").x) == 0
        assert "4 edges" in fig.layout.title.text

    def test_visited_edges(self, split_graph):
        """Edges touching visited nodes move to the visited group."""
        engine = SearchEngine(split_graph, source=0, target=3)
        engine.run()
        fig = create_graph_figure(engine.current_snapshot())
        # Triangle edges are visited, the 3-4 edge is not
        assert len(_trace(fig, "visited").x) == 3 * 3
        assert len(_trace(fig, "edges").x) == 3
        assert "idle" in fig.layout.title.text

    def test_custom_title(self, line_engine):
        """An explicit title wins."""
        fig = create_graph_figure(line_engine.current_snapshot(), title="Frame 1")
        assert fig.layout.title.text == "Frame 1"
