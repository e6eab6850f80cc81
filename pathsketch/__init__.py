"""
Path Sketch.

Watch breadth-first search discover a shortest path across a randomly
generated proximity graph, one step per rendered frame.
"""

__version__ = "0.1.0"
