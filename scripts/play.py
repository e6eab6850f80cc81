#!/usr/bin/env python3
"""
Path Sketch CLI - Run a shortest-path search headless.

Usage:
    python scripts/play.py
    python scripts/play.py --seed 7 --source 3 --target 120
    python scripts/play.py --nodes 400 --radius 80 --seed 1 --html sketch.html
    python scripts/play.py --seed 7 --max-steps 25 --html partial.html

The search runs one BFS step at a time exactly as the interactive view
does, so --max-steps shows how far the frontier spreads in that many
frames. Use --html to save a Plotly rendering of the final state.

Exit codes:
    0 - path found
    1 - no path (or search stopped early)
    2 - invalid input
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pathsketch.config import (  # noqa: E402
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    GRAPH_SEED,
    LOG_LEVEL,
    NODE_COUNT,
    PROXIMITY_RADIUS,
)
from pathsketch.search import Phase, SearchEngine, SearchError  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Watch BFS find a path on a random proximity graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--nodes",
        type=int,
        default=NODE_COUNT,
        help=f"Number of nodes (default: {NODE_COUNT})",
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=PROXIMITY_RADIUS,
        help=f"Connect nodes closer than this (default: {PROXIMITY_RADIUS:g})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=GRAPH_SEED,
        help="Random seed for the graph (default: random)",
    )
    parser.add_argument(
        "--source",
        type=int,
        default=None,
        help="Start node id (default: 0)",
    )
    parser.add_argument(
        "--target",
        type=int,
        default=None,
        help="Goal node id (default: 1)",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Stop after this many steps (default: run to completion)",
    )
    parser.add_argument(
        "--html",
        type=Path,
        default=None,
        help="Write a Plotly rendering of the final state to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else LOG_LEVEL
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        engine = SearchEngine.random(
            n=args.nodes,
            width=CANVAS_WIDTH,
            height=CANVAS_HEIGHT,
            proximity_radius=args.radius,
            rng=args.seed,
        )
        if args.source is not None or args.target is not None:
            source = args.source if args.source is not None else engine.source
            target = args.target if args.target is not None else engine.target
            engine.retarget(source, target)
        elif engine.graph.node_count == 0:
            engine.retarget(0, 0)
    except (SearchError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    graph = engine.graph
    print("\n" + "=" * 60)
    print("Path Sketch")
    print("=" * 60)
    print(f"  Nodes:  {graph.node_count}")
    print(f"  Edges:  {graph.edge_count}")
    print(f"  Source: {engine.source}")
    print(f"  Target: {engine.target}")
    print("=" * 60 + "\n")

    steps = engine.run(max_steps=args.max_steps)
    snapshot = engine.current_snapshot()

    print(f"Steps: {steps}")
    print(f"Visited: {len(snapshot.visited)} nodes")
    if snapshot.found:
        print(f"Path ({len(snapshot.path) - 1} edges): {' -> '.join(map(str, snapshot.path))}")
    elif snapshot.phase is Phase.SEARCHING:
        print(f"Stopped after {steps} steps; frontier holds {len(snapshot.frontier)} nodes")
    else:
        print(f"No path from {snapshot.source} to {snapshot.target}")

    if args.html:
        from ui.components.charts import create_graph_figure

        fig = create_graph_figure(snapshot)
        fig.write_html(str(args.html), include_plotlyjs="cdn")
        print(f"\nSaved rendering to {args.html}")

    return 0 if snapshot.found else 1


if __name__ == "__main__":
    sys.exit(main())
