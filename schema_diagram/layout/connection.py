"""
Connection point selection between two table boxes
"""

from typing import Dict, NamedTuple

from ..core.config import DiagramOptions
from ..core.models import Table
from .geometry import Point, Rect, distance

SIDES = ('left', 'right', 'top', 'bottom')
HORIZONTAL_SIDES = ('left', 'right')

# Baseline offset of column text inside its row
TEXT_BASELINE_OFFSET = 9

OPPOSING_WEIGHT = 0.6
SIDE_WEIGHT = 0.8


class ConnectionPoints(NamedTuple):
    """Anchors chosen for one relationship"""
    start: Point
    end: Point
    from_side: str
    to_side: str
    table_edge_start: Point
    table_edge_end: Point


def column_y(table: Table, rect: Rect, column_name: str, options: DiagramOptions) -> float:
    """
    Vertical position of a column row on the canvas.

    Falls back to the vertical center when the column is not visible
    (missing or truncated by max_columns).
    """
    index = table.column_index(column_name, options.max_columns)
    if index == -1:
        return rect.center_y

    return (rect.y + options.table_header_height +
            index * options.column_row_height +
            options.column_row_height / 2 +
            TEXT_BASELINE_OFFSET)


def _candidate_points(rect: Rect, row_y: float, margin: float) -> Dict[str, Point]:
    return {
        'left': Point(rect.x - margin, row_y),
        'right': Point(rect.right + margin, row_y),
        'top': Point(rect.center_x, rect.y - margin),
        'bottom': Point(rect.center_x, rect.bottom + margin),
    }


def side_weight(from_side: str, to_side: str) -> float:
    """Bias toward horizontal connections"""
    if {from_side, to_side} == set(HORIZONTAL_SIDES):
        return OPPOSING_WEIGHT
    if from_side in HORIZONTAL_SIDES or to_side in HORIZONTAL_SIDES:
        return SIDE_WEIGHT
    return 1.0


def resolve_connection_points(
    from_rect: Rect,
    to_rect: Rect,
    from_column_y: float,
    to_column_y: float,
    connection_margin: float
) -> ConnectionPoints:
    """
    Pick the side pair with the lowest weighted anchor distance.

    Args:
        from_rect: Source table box
        to_rect: Target table box
        from_column_y: Row position of the source column
        to_column_y: Row position of the target column
        connection_margin: Outward offset of anchors from the table edge

    Returns:
        ConnectionPoints with margin-offset anchors and literal edge points
    """
    from_points = _candidate_points(from_rect, from_column_y, connection_margin)
    to_points = _candidate_points(to_rect, to_column_y, connection_margin)
    from_edges = _candidate_points(from_rect, from_column_y, 0)
    to_edges = _candidate_points(to_rect, to_column_y, 0)

    best_score = float('inf')
    best = None

    for from_side in SIDES:
        for to_side in SIDES:
            score = distance(from_points[from_side], to_points[to_side]) * side_weight(from_side, to_side)
            if score < best_score:
                best_score = score
                best = (from_side, to_side)

    from_side, to_side = best
    return ConnectionPoints(
        start=from_points[from_side],
        end=to_points[to_side],
        from_side=from_side,
        to_side=to_side,
        table_edge_start=from_edges[from_side],
        table_edge_end=to_edges[to_side]
    )


def resolve_for_tables(
    from_table: Table,
    to_table: Table,
    from_column: str,
    to_column: str,
    from_rect: Rect,
    to_rect: Rect,
    options: DiagramOptions
) -> ConnectionPoints:
    """Resolve anchors aligned to the specific source and target column rows"""
    return resolve_connection_points(
        from_rect,
        to_rect,
        column_y(from_table, from_rect, from_column, options),
        column_y(to_table, to_rect, to_column, options),
        options.connection_margin
    )
