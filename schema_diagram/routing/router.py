"""
Obstacle-avoiding relationship routing.

Strategies are tried in order and the first candidate path whose segments
stay clear of every buffered obstacle wins:

1. Direct L-shaped routes
2. Detour through the canvas margin band
3. Grid-based shortest path search
4. Perimeter fallback (always returned when everything else fails)
"""

from typing import Callable, Iterator, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from enum import Enum
import logging

from ..core.config import DiagramOptions
from ..layout.geometry import (
    Point, Rect, path_intersects_any, point_rect_distance, remove_duplicate_points
)
from ..layout.placement import CanvasBounds
from .astar import astar_route
from .grid import Grid
from .path_optimizer import cells_to_canvas, simplify_path

logger = logging.getLogger(__name__)


class RouteStrategy(str, Enum):
    DIRECT = 'direct'
    MARGIN = 'margin'
    GRID = 'grid'
    PERIMETER = 'perimeter'


@dataclass
class RoutingContext:
    """
    Everything a strategy needs to know about the canvas for one relationship.

    The sides and rectangles of the two related tables are optional; without
    them the perimeter fallback leaves and reaches the anchors with straight
    legs.
    """
    bounds: CanvasBounds
    obstacles: List[Rect]
    options: DiagramOptions
    occupied: Optional[Rect] = None
    from_side: Optional[str] = None
    to_side: Optional[str] = None
    from_rect: Optional[Rect] = None
    to_rect: Optional[Rect] = None

    def clearance(self, obstacle: Rect, start: Point, end: Point) -> float:
        """
        Buffer kept around one obstacle on a route between two anchors.

        This is the collision plus visual buffer, unless an anchor already
        lies within it. Then the buffer drops to half that anchor's distance
        from the obstacle, so the route may leave the anchor but still keeps
        away from the neighbouring table.
        """
        total = self.options.total_buffer
        gap = min(point_rect_distance(start, obstacle), point_rect_distance(end, obstacle))
        if gap > total:
            return total
        return gap / 2

    def is_clear(self, points: Sequence[Point]) -> bool:
        """True if no segment touches any obstacle grown by its clearance"""
        start, end = points[0], points[-1]
        return not any(
            path_intersects_any(points, [obstacle], self.clearance(obstacle, start, end))
            for obstacle in self.obstacles
        )


@dataclass(frozen=True)
class RouteResult:
    """Waypoints of one routed relationship and the strategy that produced them"""
    waypoints: List[Point] = field(default_factory=list)
    strategy: RouteStrategy = RouteStrategy.PERIMETER


Strategy = Callable[[Point, Point, RoutingContext], Iterator[List[Point]]]


def direct_routes(start: Point, end: Point, ctx: RoutingContext) -> Iterator[List[Point]]:
    """Horizontal-then-vertical, then vertical-then-horizontal"""
    yield remove_duplicate_points([start, Point(end.x, start.y), end])
    yield remove_duplicate_points([start, Point(start.x, end.y), end])


def margin_route(start: Point, end: Point, ctx: RoutingContext) -> Iterator[List[Point]]:
    """
    Detour through the safe band inside the canvas margin.

    The band is picked from the quadrants of the two anchors relative to the
    canvas center.
    """
    opts = ctx.options
    bounds = ctx.bounds
    safe_zone = opts.safe_zone
    center = bounds.center

    start_left = start.x < center.x
    end_left = end.x < center.x
    start_top = start.y < center.y
    end_top = end.y < center.y

    top_y = safe_zone + opts.routing_spacing_top

    if start_left != end_left:
        route_y = top_y if start_top else bounds.height - safe_zone - opts.routing_spacing_top
        path = [start, Point(start.x, route_y), Point(end.x, route_y), end]
    elif start_top != end_top:
        if start_left:
            route_x = safe_zone + opts.routing_spacing_side
        else:
            route_x = bounds.width - safe_zone - opts.routing_spacing_side
        path = [start, Point(route_x, start.y), Point(route_x, end.y), end]
    else:
        path = [start, Point(start.x, top_y), Point(end.x, top_y), end]

    yield remove_duplicate_points(path)


def grid_route(start: Point, end: Point, ctx: RoutingContext) -> Iterator[List[Point]]:
    """
    Shortest path on a uniform grid.

    Cells are blocked inside every obstacle grown by its clearance plus one
    cell, so straight moves between free cells keep that clearance. The
    anchor cells themselves stay open. Yields the simplified path first,
    then the raw one.
    """
    opts = ctx.options
    grid = Grid(ctx.bounds.width, ctx.bounds.height, resolution=opts.grid_cell_size)
    for obstacle in ctx.obstacles:
        grid.mark_obstacle(obstacle, margin=ctx.clearance(obstacle, start, end) + opts.grid_cell_size)

    start_cell = grid.to_grid(start)
    end_cell = grid.to_grid(end)
    grid.unblock(start_cell)
    grid.unblock(end_cell)

    cells = astar_route(start_cell, end_cell, grid)
    if cells is None:
        logger.debug(f"Grid search found no path from {start} to {end}")
        return

    raw = remove_duplicate_points([start] + cells_to_canvas(cells, grid.resolution) + [end])
    yield simplify_path(raw)
    yield raw


def _band(canvas_edge: float, region_edge: float, outward: int, gap: float) -> float:
    """Line halfway between the occupied region and the canvas edge"""
    if (region_edge - canvas_edge) * outward < 0:
        return (canvas_edge + region_edge) / 2
    return region_edge + outward * gap


def lane_exit(anchor: Point, side: str, rect: Rect, toward_right: bool, offset: float) -> List[Point]:
    """
    Leg from an anchor to the lane running just above its own table.

    Placement gives every table in a row the same top edge and keeps
    table_padding between neighbours and between rows. With offset below
    table_padding, the lane above a row and the lines beside and below a
    table therefore touch no table.

    Args:
        anchor: Margin-offset anchor
        side: Table side the anchor belongs to
        rect: The anchor's own table
        toward_right: Pass a bottom anchor on the right of its table
        offset: Distance of the lane and gap lines from the table

    Returns:
        Points from the anchor to the lane, anchor first
    """
    lane_y = rect.y - offset

    if side == 'top':
        return [anchor, Point(anchor.x, lane_y)]

    if side in ('left', 'right'):
        gap_x = rect.x - offset if side == 'left' else rect.right + offset
        return [anchor, Point(gap_x, anchor.y), Point(gap_x, lane_y)]

    gap_x = rect.right + offset if toward_right else rect.x - offset
    below_y = rect.bottom + offset
    return [anchor, Point(anchor.x, below_y), Point(gap_x, below_y), Point(gap_x, lane_y)]


def perimeter_route(start: Point, end: Point, ctx: RoutingContext) -> List[Point]:
    """
    Route around the tables through the side band nearest the end anchor.

    Each anchor first follows its own side out of its table and up to the
    lane above its row, then the lane runs out to a vertical band beside
    the buffered bounding box of every table. The band sits halfway
    between that box and the canvas edge, and is skipped when both anchors
    share a lane. Without side information the start climbs straight to a
    band above the box and the end is joined horizontally.
    """
    opts = ctx.options
    region = ctx.occupied or Rect(0, 0, ctx.bounds.width, ctx.bounds.height)
    region = region.expand(opts.total_buffer)
    gap = opts.collision_buffer or 1

    toward_right = end.x >= ctx.bounds.center.x
    if toward_right:
        side_x = _band(ctx.bounds.width, region.right, 1, gap)
    else:
        side_x = _band(0, region.x, -1, gap)

    # Middle of the gap between neighbouring tables
    offset = opts.table_padding / 2

    if ctx.from_side and ctx.from_rect:
        head = lane_exit(start, ctx.from_side, ctx.from_rect, toward_right, offset)
    else:
        head = [start, Point(start.x, _band(0, region.y, -1, gap))]

    if ctx.to_side and ctx.to_rect:
        tail = lane_exit(end, ctx.to_side, ctx.to_rect, toward_right, offset)[::-1]
    else:
        tail = [end]

    if head[-1].y == tail[0].y:
        # Both anchors open onto the same lane
        return remove_duplicate_points(head + tail)

    return remove_duplicate_points(
        head + [Point(side_x, head[-1].y), Point(side_x, tail[0].y)] + tail
    )


DEFAULT_STRATEGIES: Tuple[Tuple[RouteStrategy, Strategy], ...] = (
    (RouteStrategy.DIRECT, direct_routes),
    (RouteStrategy.MARGIN, margin_route),
    (RouteStrategy.GRID, grid_route),
)


def route(
    start: Point,
    end: Point,
    ctx: RoutingContext,
    strategies: Sequence[Tuple[RouteStrategy, Strategy]] = DEFAULT_STRATEGIES
) -> RouteResult:
    """
    Route one relationship between two margin-offset anchors.

    Never raises for an unroutable pair; the perimeter fallback is returned
    when no strategy produces a clear path.

    Args:
        start: Start anchor
        end: End anchor
        ctx: Canvas bounds, obstacles and options
        strategies: Ordered (name, candidate generator) pairs

    Returns:
        RouteResult with at least two waypoints
    """
    for name, strategy in strategies:
        for candidate in strategy(start, end, ctx):
            if len(candidate) >= 2 and ctx.is_clear(candidate):
                logger.debug(f"Routed {start} -> {end} with {name.value} strategy ({len(candidate)} waypoints)")
                return RouteResult(candidate, name)

    logger.debug(f"All strategies blocked for {start} -> {end}, using perimeter fallback")
    waypoints = perimeter_route(start, end, ctx)
    if len(waypoints) < 2:
        waypoints = [start, end]
    return RouteResult(waypoints, RouteStrategy.PERIMETER)
