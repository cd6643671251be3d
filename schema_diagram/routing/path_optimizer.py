"""
Path post-processing for schema diagram routing.

Turns raw pathfinding output into clean waypoint lists:
- Convert grid cells to canvas coordinates
- Drop nearly collinear waypoints
"""

from typing import List, Sequence
import math

from ..layout.geometry import Point
from .grid import GridCell

# Interior points whose in/out directions have a normalized dot product
# above this value are considered collinear
COLLINEAR_THRESHOLD = 0.95


def cells_to_canvas(cells: Sequence[GridCell], resolution: int) -> List[Point]:
    """
    Convert grid cells to canvas coordinates.

    Args:
        cells: List of grid cells
        resolution: Grid resolution in pixels

    Returns:
        List of canvas points (cell corners)
    """
    return [Point(cell.x * resolution, cell.y * resolution) for cell in cells]


def _unit(dx: float, dy: float):
    length = math.hypot(dx, dy)
    if length == 0:
        return (0.0, 0.0)
    return (dx / length, dy / length)


def _simplify_pass(points: Sequence[Point], threshold: float) -> List[Point]:
    simplified = [points[0]]

    for i in range(1, len(points) - 1):
        prev = simplified[-1]
        curr = points[i]
        nxt = points[i + 1]

        d1 = _unit(curr.x - prev.x, curr.y - prev.y)
        d2 = _unit(nxt.x - curr.x, nxt.y - curr.y)

        # Duplicate of a neighbor
        if d1 == (0.0, 0.0) or d2 == (0.0, 0.0):
            continue

        if d1[0] * d2[0] + d1[1] * d2[1] <= threshold:
            simplified.append(curr)

    simplified.append(points[-1])
    return simplified


def simplify_path(points: Sequence[Point], threshold: float = COLLINEAR_THRESHOLD) -> List[Point]:
    """
    Remove interior waypoints where the path continues in nearly the same direction.

    Passes are repeated until nothing changes, so applying the function to
    its own output returns the same list. The first and last points are
    always kept.

    Args:
        points: Waypoints
        threshold: Dot product above which a waypoint is dropped

    Returns:
        Simplified waypoint list
    """
    current = list(points)
    if len(current) <= 2:
        return current

    while True:
        simplified = _simplify_pass(current, threshold)
        if len(simplified) == len(current):
            return simplified
        current = simplified
