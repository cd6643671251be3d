"""
Grid placement of tables and the pass-scoped layout context.

Tables are packed left-to-right into rows in input order. The layout is
predictable and linear in the number of tables; it is not a space-optimal
packing.
"""

from typing import Dict, List, NamedTuple, Optional, Sequence
import logging
import math

from ..core.config import DiagramOptions
from ..core.models import Table
from .geometry import Point, Rect, bounding_rect
from .sizing import TableSizer

logger = logging.getLogger(__name__)

# Vertical space reserved above the first row for the diagram title
TITLE_BAND_HEIGHT = 80

# Canvas used when nothing has been placed
DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 600

# Placeholder canvas for an empty schema
EMPTY_CANVAS_WIDTH = 600
EMPTY_CANVAS_HEIGHT = 400


class CanvasBounds(NamedTuple):
    width: float
    height: float

    @property
    def center(self) -> Point:
        return Point(self.width / 2, self.height / 2)


def grid_column_count(table_count: int) -> int:
    """Tables per row before wrapping"""
    return max(1, math.ceil(math.sqrt(table_count * 1.2)))


def place_tables(tables: Sequence[Table], sizer: TableSizer, options: DiagramOptions) -> Dict[str, Point]:
    """
    Assign a top-left position to every table.

    Args:
        tables: Tables in input order (not reordered)
        sizer: Sizer for this generation pass
        options: Diagram options

    Returns:
        Dict mapping table name to its top-left Point
    """
    cols = grid_column_count(len(tables))
    start_x = options.table_padding + options.canvas_margin
    x = start_x
    y = options.table_padding + options.canvas_margin + TITLE_BAND_HEIGHT

    positions = {}
    current_col = 0
    max_height_in_row = 0.0

    for table in tables:
        width = sizer.compute_width(table)
        height = sizer.compute_height(table)
        max_height_in_row = max(max_height_in_row, height)

        positions[table.name] = Point(x, y)

        current_col += 1
        if current_col >= cols:
            current_col = 0
            x = start_x
            y += max_height_in_row + options.table_padding
            max_height_in_row = 0.0
        else:
            x += width + options.table_padding

    return positions


def compute_canvas_bounds(rects: Sequence[Rect], options: DiagramOptions) -> CanvasBounds:
    """Extent of all table boxes plus the canvas margin"""
    max_x = max((r.right for r in rects), default=0) or DEFAULT_CANVAS_WIDTH
    max_y = max((r.bottom for r in rects), default=0) or DEFAULT_CANVAS_HEIGHT

    return CanvasBounds(max_x + options.canvas_margin, max_y + options.canvas_margin)


class LayoutContext:
    """
    Sizes, positions and rectangles for one generation pass.

    All lookups are keyed by table name. Build a fresh context whenever the
    tables or options change.
    """

    def __init__(self, tables: Sequence[Table], options: DiagramOptions):
        self.tables: List[Table] = list(tables)
        self.options = options
        self.sizer = TableSizer(options)

        self._by_name: Dict[str, Table] = {t.name: t for t in self.tables}
        self.positions = place_tables(self.tables, self.sizer, options)

        self.rects: Dict[str, Rect] = {}
        for table in self.tables:
            pos = self.positions[table.name]
            self.rects[table.name] = Rect(
                pos.x,
                pos.y,
                self.sizer.compute_width(table),
                self.sizer.compute_height(table)
            )

        self.bounds = compute_canvas_bounds(list(self.rects.values()), options)

        logger.debug(
            f"Placed {len(self.tables)} tables in {grid_column_count(len(self.tables))} columns, "
            f"canvas {self.bounds.width}x{self.bounds.height}"
        )

    def find_table(self, name: str) -> Optional[Table]:
        """
        Resolve a relationship endpoint to a table.

        Tries the exact name, then the part after the last dot of a
        schema-qualified name, then a scan over display and full names.
        """
        if name in self._by_name:
            return self._by_name[name]

        simple_name = name.rsplit('.', 1)[-1]
        if simple_name in self._by_name:
            return self._by_name[simple_name]

        for table in self.tables:
            if table.display_name == name or table.full_name == name:
                return table

        return None

    def rect(self, table: Table) -> Rect:
        return self.rects[table.name]

    def obstacles(self, *excluded: Table) -> List[Rect]:
        """Rectangles of every table except the excluded ones"""
        excluded_names = {t.name for t in excluded}
        return [self.rects[t.name] for t in self.tables if t.name not in excluded_names]

    def occupied_region(self) -> Optional[Rect]:
        """Bounding box of all tables, or None when there are none"""
        if not self.rects:
            return None
        return bounding_rect(list(self.rects.values()))

    def is_referenced(self, table: Table, column_name: str, relationships) -> bool:
        """Check if any relationship points at this table column"""
        for rel in relationships:
            if rel.to_column == column_name and self.find_table(rel.to_table) is table:
                return True
        return False
