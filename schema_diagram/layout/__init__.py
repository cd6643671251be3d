"""
Table sizing, grid placement and connection point selection
"""

from .geometry import Point, Rect
from .sizing import TableSizer
from .placement import CanvasBounds, LayoutContext, place_tables, compute_canvas_bounds
from .connection import ConnectionPoints, resolve_connection_points

__all__ = [
    'Point',
    'Rect',
    'TableSizer',
    'CanvasBounds',
    'LayoutContext',
    'place_tables',
    'compute_canvas_bounds',
    'ConnectionPoints',
    'resolve_connection_points',
]
