"""
A* pathfinding for schema diagram routing.

8-directional search over a Grid with Euclidean step costs
(1 for axis-aligned moves, sqrt(2) for diagonals) and a Manhattan
distance heuristic, using a binary heap for the open set.
"""

from typing import Dict, List, Optional
import heapq
import itertools
from dataclasses import dataclass, field

from .grid import Grid, GridCell


@dataclass(order=True)
class Node:
    """Node in A* search."""
    f_cost: float = field(compare=True)  # f = g + h
    order: int = field(compare=True)  # FIFO tie-break
    g_cost: float = field(compare=False)
    cell: GridCell = field(compare=False)


def manhattan_distance(cell1: GridCell, cell2: GridCell) -> int:
    """Calculate Manhattan distance between two cells."""
    return abs(cell1.x - cell2.x) + abs(cell1.y - cell2.y)


def reconstruct_path(came_from: Dict[GridCell, GridCell], end: GridCell) -> List[GridCell]:
    """Reconstruct path from goal cell by following parent links."""
    path = [end]
    current = end

    while current in came_from:
        current = came_from[current]
        path.append(current)

    path.reverse()
    return path


def astar_route(start: GridCell, end: GridCell, grid: Grid) -> Optional[List[GridCell]]:
    """
    Find a path from start to end.

    Args:
        start: Starting grid cell
        end: Goal grid cell
        grid: Grid system with obstacles

    Returns:
        List of grid cells forming path, or None if no path exists
    """
    if not grid.is_traversable(start) or not grid.is_traversable(end):
        return None

    counter = itertools.count()
    open_set = [Node(manhattan_distance(start, end), next(counter), 0.0, start)]
    closed_set = set()
    best_g_cost = {start: 0.0}
    came_from: Dict[GridCell, GridCell] = {}

    while open_set:
        current = heapq.heappop(open_set)

        if current.cell == end:
            return reconstruct_path(came_from, end)

        if current.cell in closed_set:
            continue

        closed_set.add(current.cell)

        for neighbor, step_cost in grid.get_neighbors(current.cell):
            if neighbor in closed_set:
                continue

            g_cost = current.g_cost + step_cost
            if neighbor in best_g_cost and g_cost >= best_g_cost[neighbor]:
                continue

            best_g_cost[neighbor] = g_cost
            came_from[neighbor] = current.cell
            f_cost = g_cost + manhattan_distance(neighbor, end)
            heapq.heappush(open_set, Node(f_cost, next(counter), g_cost, neighbor))

    return None
