"""
Path Sketch - Flask app.

Features:
- Canvas view of the proximity graph, redrawn every animation frame
- Left click picks the source node, right click the target
- One BFS step per frame until a path is found or the frontier drains
- Static Plotly rendering of the current state at /figure
"""

import logging
import math
import threading

import numpy as np
from flask import Flask, jsonify, render_template_string, request

from pathsketch.config import (
    BACKGROUND_COLOR,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    EDGE_COLOR,
    GRAPH_SEED,
    HOST,
    LOG_LEVEL,
    NODE_COLOR,
    NODE_SIZE,
    PATH_EDGE_COLOR,
    PATH_EDGE_WIDTH,
    POINTER_LINE_RADIUS,
    PORT,
    SECRET_KEY,
    SOURCE_COLOR,
    STEPS_PER_FRAME,
    TARGET_COLOR,
    VISITED_EDGE_COLOR,
)
from pathsketch.search import Role, SearchEngine, SearchError
from ui.components.charts import create_graph_figure

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = SECRET_KEY

# ====================
# Engine Ownership
# ====================

# The engine does no locking; every request goes through this lock so
# retarget() never interleaves with step().
_lock = threading.Lock()
_engine: SearchEngine | None = None


def get_engine() -> SearchEngine:
    """Return the shared engine, building a random graph on first use."""
    global _engine
    if _engine is None:
        _engine = SearchEngine.random(rng=GRAPH_SEED)
    return _engine


def nearest_node(engine: SearchEngine, x: float, y: float) -> int | None:
    """Node closest to a pointer position, or None on an empty graph."""
    positions = engine.graph.positions
    if len(positions) == 0:
        return None
    distances = np.hypot(positions[:, 0] - x, positions[:, 1] - y)
    return int(np.argmin(distances))


def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _json_object() -> dict | None:
    """Request body as a dict ({} when absent), or None if it is not an object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


# ====================
# Templates
# ====================

PAGE_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Path Sketch</title>
    <style>
        body { margin: 0; background: {{ background }}; color: #eee; font-family: system-ui, sans-serif; }
        .bar { padding: 10px 20px; display: flex; gap: 30px; align-items: center; }
        .bar a, .bar button { color: #88c0d0; background: none; border: 1px solid #88c0d0; border-radius: 6px; padding: 4px 12px; cursor: pointer; text-decoration: none; }
        canvas { display: block; margin: 0 auto; }
    </style>
</head>
<body>
    <div class="bar">
        <strong>Path Sketch</strong>
        <span>Left click: source &middot; Right click: target</span>
        <span id="status"></span>
        <button onclick="regenerate()">New graph</button>
        <a href="/figure" target="_blank">Snapshot</a>
    </div>
    <canvas id="sketch" width="{{ width }}" height="{{ height }}"></canvas>
    <script>
        const canvas = document.getElementById('sketch');
        const ctx = canvas.getContext('2d');
        const W = {{ width }}, H = {{ height }};
        let pointer = null;
        let snapshot = null;

        // Engine coordinates are centered with y pointing up
        const toCanvas = ([x, y]) => [x + W / 2, H / 2 - y];
        const toEngine = (evt) => {
            const rect = canvas.getBoundingClientRect();
            return [evt.clientX - rect.left - W / 2, H / 2 - (evt.clientY - rect.top)];
        };

        function line(a, b, color, width) {
            ctx.strokeStyle = color;
            ctx.lineWidth = width;
            ctx.beginPath();
            ctx.moveTo(...toCanvas(a));
            ctx.lineTo(...toCanvas(b));
            ctx.stroke();
        }

        function draw() {
            ctx.fillStyle = '{{ background }}';
            ctx.fillRect(0, 0, W, H);
            if (!snapshot) return;

            const pos = new Map(snapshot.nodes);
            const visited = new Set(snapshot.visited);
            const onPath = new Set();
            for (let k = 1; k < snapshot.path.length; k++) {
                const a = snapshot.path[k - 1], b = snapshot.path[k];
                onPath.add(Math.min(a, b) + ',' + Math.max(a, b));
            }
            for (const [i, j] of snapshot.edges) {
                if (onPath.has(i + ',' + j)) continue;
                const color = (visited.has(i) || visited.has(j)) ? '{{ visited_color }}' : '{{ edge_color }}';
                line(pos.get(i), pos.get(j), color, 1);
            }
            for (let k = 1; k < snapshot.path.length; k++) {
                line(pos.get(snapshot.path[k - 1]), pos.get(snapshot.path[k]), '{{ path_color }}', {{ path_width }});
            }

            if (pointer) {
                for (const p of pos.values()) {
                    const d = Math.hypot(p[0] - pointer[0], p[1] - pointer[1]);
                    if (d < {{ pointer_radius }}) {
                        line(p, pointer, `rgba(0, 0, 0, ${1 - d / {{ pointer_radius }}})`, 1);
                    }
                }
            }

            for (const [node, p] of snapshot.nodes) {
                ctx.fillStyle = node === snapshot.source ? '{{ source_color }}'
                    : node === snapshot.target ? '{{ target_color }}' : '{{ node_color }}';
                const [cx, cy] = toCanvas(p);
                ctx.beginPath();
                ctx.arc(cx, cy, {{ node_size }} / 2, 0, 2 * Math.PI);
                ctx.fill();
            }

            let status = snapshot.phase;
            if (snapshot.path.length) status = `path: ${snapshot.path.length - 1} edges`;
            else if (snapshot.phase === 'idle') status = 'no path';
            document.getElementById('status').textContent =
                `${snapshot.source} → ${snapshot.target} | visited ${snapshot.visited.length} | ${status}`;
        }

        async function post(url, body) {
            const resp = await fetch(url, {
                method: 'POST',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify(body || {}),
            });
            const data = await resp.json();
            if (!resp.ok) { console.warn(data.error); return null; }
            return data;
        }

        async function frame() {
            snapshot = await post('/api/frame') || snapshot;
            draw();
            requestAnimationFrame(frame);
        }

        async function select(evt, role) {
            evt.preventDefault();
            const [x, y] = toEngine(evt);
            snapshot = await post('/api/select', {role, x, y}) || snapshot;
        }

        async function regenerate() {
            snapshot = await post('/api/regenerate') || snapshot;
        }

        canvas.addEventListener('mousedown', (evt) => { if (evt.button === 0) select(evt, 'source'); });
        canvas.addEventListener('contextmenu', (evt) => select(evt, 'target'));
        canvas.addEventListener('mousemove', (evt) => { pointer = toEngine(evt); });
        canvas.addEventListener('mouseleave', () => { pointer = null; });
        requestAnimationFrame(frame);
    </script>
</body>
</html>
"""


# ====================
# Routes
# ====================

@app.route("/")
def index():
    return render_template_string(
        PAGE_TEMPLATE,
        width=CANVAS_WIDTH,
        height=CANVAS_HEIGHT,
        background=BACKGROUND_COLOR,
        node_color=NODE_COLOR,
        source_color=SOURCE_COLOR,
        target_color=TARGET_COLOR,
        edge_color=EDGE_COLOR,
        visited_color=VISITED_EDGE_COLOR,
        path_color=PATH_EDGE_COLOR,
        path_width=PATH_EDGE_WIDTH,
        node_size=NODE_SIZE,
        pointer_radius=POINTER_LINE_RADIUS,
    )


@app.route("/api/snapshot")
def api_snapshot():
    with _lock:
        snapshot = get_engine().current_snapshot()
    return jsonify(snapshot.to_dict())


@app.route("/api/frame", methods=["POST"])
def api_frame():
    """Advance the search by one frame's worth of steps."""
    with _lock:
        engine = get_engine()
        for _ in range(STEPS_PER_FRAME):
            if not engine.step():
                break
        snapshot = engine.current_snapshot()
    return jsonify(snapshot.to_dict())


@app.route("/api/select", methods=["POST"])
def api_select():
    """Select a source or target by node id or pointer position."""
    data = _json_object()
    if data is None:
        return _error("Expected a JSON object")
    role = data.get("role")

    try:
        role = Role(role)
    except ValueError:
        return _error(f"Unknown role: {role!r}")

    with _lock:
        engine = get_engine()
        node = data.get("node")
        if node is None:
            try:
                x, y = float(data["x"]), float(data["y"])
            except (KeyError, TypeError, ValueError):
                return _error("Expected 'node' or numeric 'x' and 'y'")
            if not (math.isfinite(x) and math.isfinite(y)):
                return _error(f"Pointer position must be finite, got ({x}, {y})")
            node = nearest_node(engine, x, y)
            if node is None:
                logger.warning("Selection ignored: graph has no nodes")
                return _error("Graph has no nodes")

        try:
            engine.select(role, node)
        except SearchError as e:
            logger.warning(f"Selection ignored: {e}")
            return _error(str(e))

        logger.info(f"Selected {role.value} node {node}")
        snapshot = engine.current_snapshot()
    return jsonify(snapshot.to_dict())


@app.route("/api/regenerate", methods=["POST"])
def api_regenerate():
    """Replace the graph with a new random one."""
    data = _json_object()
    if data is None:
        return _error("Expected a JSON object")
    seed = data.get("seed")
    if seed is not None and (
        isinstance(seed, bool) or not isinstance(seed, int) or seed < 0
    ):
        return _error(f"Seed must be a non-negative integer, got {seed!r}")

    with _lock:
        engine = get_engine()
        try:
            engine.regenerate(seed)
        except RuntimeError as e:
            return _error(str(e), 409)
        snapshot = engine.current_snapshot()
    return jsonify(snapshot.to_dict())


@app.route("/figure")
def figure():
    """Standalone Plotly rendering of the current state."""
    with _lock:
        snapshot = get_engine().current_snapshot()
    fig = create_graph_figure(snapshot)
    return fig.to_html(full_html=True, include_plotlyjs="cdn")


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    app.run(host=HOST, port=PORT, debug=False, threaded=True)
