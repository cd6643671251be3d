"""
Smooth SVG path generation for routed relationships
"""

from typing import Optional, Sequence
import math

from ..layout.geometry import Point

CORNER_RADIUS = 15
ARROW_LENGTH = 8
ARROW_ANGLE = math.pi / 6


def format_number(value: float) -> str:
    """Compact number formatting for path data"""
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded}"


def _pt(point: Point) -> str:
    return f"{format_number(point.x)},{format_number(point.y)}"


def arrowhead_points(previous: Point, tip: Point, length: float = ARROW_LENGTH):
    """Ends of the two arrowhead strokes, angled ±30° off the incoming direction"""
    angle = math.atan2(tip.y - previous.y, tip.x - previous.x)
    left = Point(tip.x - length * math.cos(angle - ARROW_ANGLE),
                 tip.y - length * math.sin(angle - ARROW_ANGLE))
    right = Point(tip.x - length * math.cos(angle + ARROW_ANGLE),
                  tip.y - length * math.sin(angle + ARROW_ANGLE))
    return left, right


def _arrow_base(points: Sequence[Point]) -> Optional[Point]:
    """Last point before the tip that is not on top of it"""
    tip = points[-1]
    for point in reversed(points[:-1]):
        if point != tip:
            return point
    return None


def render_path(
    points: Sequence[Point],
    radius: float = CORNER_RADIUS,
    arrow_length: float = ARROW_LENGTH
) -> str:
    """
    Generate SVG path data with rounded corners and a terminal arrowhead.

    Each corner radius is limited to half of the shorter adjacent segment so
    control points never overlap on short segments. The arrowhead follows
    the last segment with non-zero length and is left out when every point
    coincides.

    Args:
        points: Waypoints, first to last
        radius: Maximum corner radius
        arrow_length: Length of each arrowhead stroke

    Returns:
        SVG path data, or an empty string for fewer than 2 points
    """
    if len(points) < 2:
        return ""

    path = f"M {_pt(points[0])}"

    for i in range(1, len(points)):
        curr = points[i]
        prev = points[i - 1]

        if i == len(points) - 1:
            path += f" L {_pt(curr)}"
            tail = _arrow_base(points)
            if tail is not None:
                left, right = arrowhead_points(tail, curr, arrow_length)
                path += f" M {_pt(curr)} L {_pt(left)} M {_pt(curr)} L {_pt(right)}"
            continue

        next_pt = points[i + 1]
        dx_in = curr.x - prev.x
        dy_in = curr.y - prev.y
        dx_out = next_pt.x - curr.x
        dy_out = next_pt.y - curr.y

        len_in = math.hypot(dx_in, dy_in)
        len_out = math.hypot(dx_out, dy_out)

        if len_in > 0 and len_out > 0:
            r = min(radius, len_in / 2, len_out / 2)
            before = Point(curr.x - dx_in / len_in * r, curr.y - dy_in / len_in * r)
            after = Point(curr.x + dx_out / len_out * r, curr.y + dy_out / len_out * r)
            path += f" L {_pt(before)} Q {_pt(curr)} {_pt(after)}"
        else:
            path += f" L {_pt(curr)}"

    return path
