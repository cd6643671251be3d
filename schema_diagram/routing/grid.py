"""
Grid system for shortest-path routing in schema diagrams.

Manages a virtual grid overlaying the diagram canvas, marking
obstacles (table boxes) and providing traversable cell lookup.
"""

from typing import Iterable, List, Tuple, Set
from dataclasses import dataclass
import math

from ..layout.geometry import Point, Rect

SQRT2 = math.sqrt(2)

# (dx, dy, step cost) for the 8 neighbors
DIRECTIONS = [
    (0, -1, 1.0), (1, 0, 1.0), (0, 1, 1.0), (-1, 0, 1.0),
    (1, -1, SQRT2), (1, 1, SQRT2), (-1, 1, SQRT2), (-1, -1, SQRT2),
]


@dataclass(frozen=True)
class GridCell:
    """Represents a cell in the routing grid."""
    x: int
    y: int


class Grid:
    """
    Grid system for pathfinding.

    A cell is represented on the canvas by its top-left corner point;
    blocking and path reconstruction use that same point.
    """

    def __init__(self, width: float, height: float, resolution: int = 20):
        """
        Initialize grid.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            resolution: Grid cell size in pixels (default: 20)
        """
        self.width = width
        self.height = height
        self.resolution = resolution

        self.cols = math.ceil(width / resolution)
        self.rows = math.ceil(height / resolution)

        self.blocked: Set[GridCell] = set()

    def to_grid(self, point: Point) -> GridCell:
        """Convert canvas coordinates to grid cell."""
        return GridCell(math.floor(point.x / self.resolution), math.floor(point.y / self.resolution))

    def from_grid(self, cell: GridCell) -> Point:
        """Convert grid cell to canvas coordinates (cell corner)."""
        return Point(cell.x * self.resolution, cell.y * self.resolution)

    def mark_obstacle(self, rect: Rect, margin: float = 0.0):
        """
        Mark every cell whose point falls inside the expanded rectangle.

        Args:
            rect: Obstacle box
            margin: Additional clearance around obstacle in pixels
        """
        box = rect.expand(margin)

        first_x = max(0, math.ceil(box.x / self.resolution))
        last_x = min(self.cols - 1, math.floor(box.right / self.resolution))
        first_y = max(0, math.ceil(box.y / self.resolution))
        last_y = min(self.rows - 1, math.floor(box.bottom / self.resolution))

        for gx in range(first_x, last_x + 1):
            for gy in range(first_y, last_y + 1):
                self.blocked.add(GridCell(gx, gy))

    def mark_obstacles(self, rects: Iterable[Rect], margin: float = 0.0):
        for rect in rects:
            self.mark_obstacle(rect, margin)

    def unblock(self, cell: GridCell):
        """Make a single cell traversable again."""
        self.blocked.discard(cell)

    def is_blocked(self, cell: GridCell) -> bool:
        """Check if a cell is blocked."""
        return cell in self.blocked

    def is_valid(self, cell: GridCell) -> bool:
        """Check if a cell is within grid bounds."""
        return 0 <= cell.x < self.cols and 0 <= cell.y < self.rows

    def is_traversable(self, cell: GridCell) -> bool:
        """Check if a cell can be traversed (valid and not blocked)."""
        return self.is_valid(cell) and not self.is_blocked(cell)

    def get_neighbors(self, cell: GridCell) -> List[Tuple[GridCell, float]]:
        """
        Get traversable neighbors in 8 directions with their step cost.

        Diagonal moves that would cut past a blocked orthogonal cell are
        skipped.
        """
        neighbors = []

        for dx, dy, cost in DIRECTIONS:
            neighbor = GridCell(cell.x + dx, cell.y + dy)
            if not self.is_traversable(neighbor):
                continue

            if dx and dy:
                if (not self.is_traversable(GridCell(cell.x + dx, cell.y)) or
                        not self.is_traversable(GridCell(cell.x, cell.y + dy))):
                    continue

            neighbors.append((neighbor, cost))

        return neighbors
