"""
Grid-based routing system for relationship lines.

This package picks an obstacle-free path between two connection anchors,
trying cheap geometric shapes before falling back to A* search on a grid.
"""

from .grid import Grid
from .astar import astar_route
from .path_optimizer import cells_to_canvas, simplify_path
from .router import RouteResult, RouteStrategy, RoutingContext, route

__all__ = [
    'Grid',
    'astar_route',
    'cells_to_canvas',
    'simplify_path',
    'RouteResult',
    'RouteStrategy',
    'RoutingContext',
    'route',
]
