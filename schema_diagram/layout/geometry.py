"""
Geometry primitives for diagram layout and routing.

Points and rectangles are plain value types; every helper here is a
pure function with no state.
"""

from typing import List, NamedTuple, Sequence
from dataclasses import dataclass
import math


class Point(NamedTuple):
    """A position on the canvas, in pixels."""
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned bounding box of a table on the canvas."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    def expand(self, buffer: float) -> 'Rect':
        """Return a copy grown by `buffer` on every side."""
        return Rect(
            self.x - buffer,
            self.y - buffer,
            self.width + 2 * buffer,
            self.height + 2 * buffer
        )

    def contains(self, point: Point) -> bool:
        """Check if a point lies inside or on the border."""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def path_length(points: Sequence[Point]) -> float:
    """Total length of a polyline."""
    return sum(distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def point_rect_distance(point: Point, rect: Rect) -> float:
    """Distance from a point to the nearest part of a rectangle, 0 inside it."""
    dx = max(rect.x - point.x, 0, point.x - rect.right)
    dy = max(rect.y - point.y, 0, point.y - rect.bottom)
    return math.hypot(dx, dy)


def _ccw(a: Point, b: Point, c: Point) -> bool:
    return (c.y - a.y) * (b.x - a.x) > (b.y - a.y) * (c.x - a.x)


def segments_intersect(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    """
    Check if segment p1-p2 properly crosses segment q1-q2.

    Collinear overlaps are not reported; callers that care about
    touching segments handle containment separately.
    """
    return (_ccw(p1, q1, q2) != _ccw(p2, q1, q2) and
            _ccw(p1, p2, q1) != _ccw(p1, p2, q2))


def segment_intersects_rect(start: Point, end: Point, rect: Rect, buffer: float = 0.0) -> bool:
    """
    Check if a segment touches a rectangle grown by `buffer`.

    Args:
        start: Segment start
        end: Segment end
        rect: Obstacle rectangle
        buffer: Extra clearance added on every side before testing

    Returns:
        True if any part of the segment is inside or crosses the box
    """
    box = rect.expand(buffer) if buffer else rect

    # Both endpoints strictly on the same outer side
    if ((start.x < box.x and end.x < box.x) or
            (start.x > box.right and end.x > box.right) or
            (start.y < box.y and end.y < box.y) or
            (start.y > box.bottom and end.y > box.bottom)):
        return False

    if box.contains(start) or box.contains(end):
        return True

    corners = [
        Point(box.x, box.y),
        Point(box.right, box.y),
        Point(box.right, box.bottom),
        Point(box.x, box.bottom),
    ]
    edges = zip(corners, corners[1:] + corners[:1])

    return any(segments_intersect(start, end, a, b) for a, b in edges)


def path_intersects_any(points: Sequence[Point], obstacles: Sequence[Rect], buffer: float = 0.0) -> bool:
    """Check every segment of a polyline against every obstacle."""
    for i in range(len(points) - 1):
        for obstacle in obstacles:
            if segment_intersects_rect(points[i], points[i + 1], obstacle, buffer):
                return True
    return False


def bounding_rect(rects: Sequence[Rect]) -> Rect:
    """Smallest rectangle enclosing all `rects` (which must be non-empty)."""
    left = min(r.x for r in rects)
    top = min(r.y for r in rects)
    right = max(r.right for r in rects)
    bottom = max(r.bottom for r in rects)
    return Rect(left, top, right - left, bottom - top)


def remove_duplicate_points(points: List[Point], tolerance: float = 0.1) -> List[Point]:
    """
    Remove consecutive duplicate points.

    Args:
        points: Polyline
        tolerance: Distance threshold for considering points duplicate

    Returns:
        Deduplicated point list
    """
    if not points:
        return []

    cleaned = [points[0]]

    for point in points[1:]:
        if distance(cleaned[-1], point) > tolerance:
            cleaned.append(point)

    # Keep the exact final anchor even if it collapsed onto its predecessor
    if len(cleaned) > 1 and cleaned[-1] != points[-1]:
        cleaned[-1] = points[-1]

    return cleaned
