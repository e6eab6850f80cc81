"""
Presentation layer.

Renders engine snapshots; contains no search logic:
- components.charts: Plotly figure of a snapshot
"""
