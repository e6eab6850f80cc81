"""
Plotly chart components for search snapshots.
"""

import plotly.graph_objects as go

from pathsketch.config import (
    BACKGROUND_COLOR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    EDGE_COLOR,
    EDGE_WIDTH,
    NODE_COLOR,
    NODE_SIZE,
    PATH_EDGE_COLOR,
    PATH_EDGE_WIDTH,
    SOURCE_COLOR,
    TARGET_COLOR,
    VISITED_EDGE_COLOR,
)
from pathsketch.search import SearchSnapshot


def _segments(
    edges: list[tuple[int, int]],
    positions: dict[int, tuple[float, float]],
) -> tuple[list[float | None], list[float | None]]:
    """Flatten edges into x/y lists separated by None for one line trace."""
    xs: list[float | None] = []
    ys: list[float | None] = []
    for i, j in edges:
        (x0, y0), (x1, y1) = positions[i], positions[j]
        xs += [x0, x1, None]
        ys += [y0, y1, None]
    return xs, ys


def create_graph_figure(snapshot: SearchSnapshot, title: str | None = None) -> go.Figure:
    """
    Draw the graph with visited edges, the found path and both endpoints.

    Edges touching a visited node are red, path edges teal and thicker.
    The source node is red, the target blue.
    """
    positions = dict(snapshot.nodes)
    on_path = snapshot.path_edges()

    plain, visited, path = [], [], []
    for edge in snapshot.edges:
        if edge in on_path:
            path.append(edge)
        elif edge[0] in snapshot.visited or edge[1] in snapshot.visited:
            visited.append(edge)
        else:
            plain.append(edge)

    fig = go.Figure()
    for name, group, color, width in (
        ("edges", plain, EDGE_COLOR, EDGE_WIDTH),
        ("visited", visited, VISITED_EDGE_COLOR, EDGE_WIDTH),
        ("path", path, PATH_EDGE_COLOR, PATH_EDGE_WIDTH),
    ):
        xs, ys = _segments(group, positions)
        fig.add_trace(go.Scatter(
            x=xs,
            y=ys,
            mode="lines",
            line=dict(color=color, width=width),
            hoverinfo="skip",
            name=name,
        ))

    colors = []
    for node, _ in snapshot.nodes:
        if node == snapshot.source:
            colors.append(SOURCE_COLOR)
        elif node == snapshot.target:
            colors.append(TARGET_COLOR)
        else:
            colors.append(NODE_COLOR)

    fig.add_trace(go.Scatter(
        x=[pos[0] for _, pos in snapshot.nodes],
        y=[pos[1] for _, pos in snapshot.nodes],
        mode="markers",
        marker=dict(size=NODE_SIZE, color=colors),
        text=[str(node) for node, _ in snapshot.nodes],
        hovertemplate="node %{text}<extra></extra>",
        name="nodes",
    ))

    if title is None:
        if snapshot.found:
            title = f"Path {snapshot.source} → {snapshot.target}: {len(snapshot.path) - 1} edges"
        else:
            title = f"{snapshot.source} → {snapshot.target} ({snapshot.phase.value})"

    fig.update_layout(
        title=title,
        showlegend=False,
        plot_bgcolor=BACKGROUND_COLOR,
        paper_bgcolor=BACKGROUND_COLOR,
        font=dict(color=NODE_COLOR),
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
        margin=dict(t=40, b=10, l=10, r=10),
    )
    fig.update_xaxes(visible=False, range=[-CANVAS_WIDTH / 2, CANVAS_WIDTH / 2])
    fig.update_yaxes(
        visible=False,
        range=[-CANVAS_HEIGHT / 2, CANVAS_HEIGHT / 2],
        scaleanchor="x",
    )
    return fig
