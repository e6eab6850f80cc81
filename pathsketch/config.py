"""
Configuration constants for the Path Sketch project.

All canvas, graph and rendering settings are defined here.
Values can be overridden from the environment or a local .env file.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root is parent of pathsketch/
PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")

# =============================================================================
# Canvas Configuration
# =============================================================================

# Size of the drawing area; node coordinates are centered on the origin
CANVAS_WIDTH = 1000
CANVAS_HEIGHT = 1000

# =============================================================================
# Graph Configuration
# =============================================================================

# Number of randomly placed nodes
NODE_COUNT = int(os.environ.get("PATHSKETCH_NODE_COUNT", "250"))

# Nodes closer than this are connected by an edge
PROXIMITY_RADIUS = float(
    os.environ.get("PATHSKETCH_PROXIMITY_RADIUS", str(CANVAS_WIDTH / 10))
)

# Seed for the random graph (unset = fresh graph every run)
GRAPH_SEED = (
    int(os.environ["PATHSKETCH_SEED"]) if os.environ.get("PATHSKETCH_SEED") else None
)

# Endpoints selected before the user clicks anything
DEFAULT_SOURCE = 0
DEFAULT_TARGET = 1

# =============================================================================
# Search Configuration
# =============================================================================

# BFS steps performed per rendered frame
STEPS_PER_FRAME = int(os.environ.get("PATHSKETCH_STEPS_PER_FRAME", "1"))

# =============================================================================
# Rendering Configuration
# =============================================================================

BACKGROUND_COLOR = "#404040"   # dark gray
NODE_COLOR = "#ffffff"
SOURCE_COLOR = "#ff0000"
TARGET_COLOR = "#0000ff"
EDGE_COLOR = "#ffffff"
VISITED_EDGE_COLOR = "#ff0000"
PATH_EDGE_COLOR = "#008080"    # teal

NODE_SIZE = 10
EDGE_WIDTH = 1
PATH_EDGE_WIDTH = 2

# Pointer guide lines are drawn to nodes within this distance
POINTER_LINE_RADIUS = 200

# =============================================================================
# Web Server Configuration
# =============================================================================

SECRET_KEY = os.environ.get("SECRET_KEY", "pathsketch-dev-key")
HOST = os.environ.get("PATHSKETCH_HOST", "127.0.0.1")
PORT = int(os.environ.get("PATHSKETCH_PORT", "5000"))

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# =============================================================================
# Validation Helpers
# =============================================================================

def validate_graph_settings() -> dict[str, bool]:
    """Check which graph and search settings are usable."""
    return {
        "canvas": CANVAS_WIDTH > 0 and CANVAS_HEIGHT > 0,
        "node_count": NODE_COUNT >= 0,
        "proximity_radius": PROXIMITY_RADIUS > 0,
        "steps_per_frame": STEPS_PER_FRAME >= 1,
    }


def get_invalid_settings() -> list[str]:
    """Return list of setting names that failed validation."""
    status = validate_graph_settings()
    return [name for name, ok in status.items() if not ok]
