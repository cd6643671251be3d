"""
Diagram assembly: sizing, placement, bounds and per-relationship routing.

The assembler is a pure function of (tables, relationships, options); every
derived structure is rebuilt on each call.
"""

from typing import List, Optional, Sequence, Union
import logging

from ..core.config import DiagramOptions
from ..core.models import Relationship, Table
from ..layout.connection import ConnectionPoints, resolve_for_tables
from ..layout.geometry import Point, Rect
from ..layout.placement import EMPTY_CANVAS_HEIGHT, EMPTY_CANVAS_WIDTH, LayoutContext
from ..layout.sizing import column_text, truncation_text
from ..routing.router import RoutingContext, route
from .instructions import (
    ColumnRow, DebugOverlay, Diagram, RelationshipDraw, SkippedRelationship, TableDraw
)
from .path_renderer import render_path

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Database Structure Diagram'

EMPTY_MESSAGES = (
    'No tables found in database',
    'Check database permissions and connection',
)

TABLE_NOT_FOUND = 'table not found'

# Constraint names longer than this are shortened for the label
MAX_LABEL_LENGTH = 12
LABEL_KEEP_CHARS = 9

# Offset of the first column baseline below the header
FIRST_ROW_BASELINE = 18

MARKER_INSET_RIGHT = 8
MARKER_INSET_LEFT = 4
MARKER_RAISE = 6

# Thickness of the routing band rectangles in debug output
DEBUG_BAND_THICKNESS = 20


def truncate_label(name: str) -> str:
    """Shorten a constraint name for display"""
    if len(name) > MAX_LABEL_LENGTH:
        return name[:LABEL_KEEP_CHARS] + '...'
    return name


def fit_text(text: str, max_chars: int) -> str:
    """Cut text that does not fit on one line"""
    if len(text) > max_chars:
        return text[:max_chars - 3] + '...'
    return text


class DiagramAssembler:
    """
    Builds draw instructions for a schema.

    Args:
        options: Diagram options (defaults when None)
        title: Diagram title text
    """

    def __init__(self, options: Optional[DiagramOptions] = None, title: str = DEFAULT_TITLE):
        self.options = options or DiagramOptions()
        self.title = title

    def generate(self, tables: Sequence[Table], relationships: Sequence[Relationship]) -> Diagram:
        """
        Lay out tables and route every relationship.

        Unresolvable relationships are reported in `Diagram.skipped` and do
        not affect layout or other relationships.
        """
        subtitle = f"{len(tables)} tables, {len(relationships)} relationships"

        if not tables:
            logger.info("No tables to draw, returning placeholder diagram")
            return Diagram(
                width=EMPTY_CANVAS_WIDTH,
                height=EMPTY_CANVAS_HEIGHT,
                title=self.title,
                subtitle=subtitle,
                placeholder=EMPTY_MESSAGES
            )

        layout = LayoutContext(tables, self.options)

        relationship_draws = []
        skipped = []
        for relationship in relationships:
            result = self.route_relationship(layout, relationship)
            if isinstance(result, SkippedRelationship):
                logger.warning(f"Skipping {result.annotation}")
                skipped.append(result)
            else:
                relationship_draws.append(result)

        table_draws = [self.draw_table(layout, table, relationships) for table in layout.tables]

        diagram = Diagram(
            width=layout.bounds.width,
            height=layout.bounds.height,
            title=self.title,
            subtitle=subtitle,
            tables=table_draws,
            relationships=relationship_draws,
            skipped=skipped
        )

        logger.info(
            f"Generated diagram {diagram.width}x{diagram.height} with {len(table_draws)} tables, "
            f"{len(relationship_draws)} relationships ({len(skipped)} skipped), "
            f"strategies: {diagram.strategy_counts()}"
        )
        return diagram

    def route_relationship(
        self,
        layout: LayoutContext,
        relationship: Relationship
    ) -> Union[RelationshipDraw, SkippedRelationship]:
        """Resolve, route and render a single relationship"""
        from_table = layout.find_table(relationship.from_table)
        to_table = layout.find_table(relationship.to_table)

        if from_table is None or to_table is None:
            return SkippedRelationship(relationship, TABLE_NOT_FOUND)

        opts = self.options
        from_rect = layout.rect(from_table)
        to_rect = layout.rect(to_table)

        points = resolve_for_tables(
            from_table, to_table,
            relationship.from_column, relationship.to_column,
            from_rect, to_rect, opts
        )

        ctx = self.routing_context(layout, from_table, to_table, points)
        result = route(points.start, points.end, ctx)

        waypoints = [points.table_edge_start] + list(result.waypoints) + [points.table_edge_end]
        label_position = result.waypoints[len(result.waypoints) // 2]

        debug = self.debug_overlay(layout, result.waypoints, ctx.obstacles) if opts.debug_paths else None

        return RelationshipDraw(
            relationship=relationship,
            route=list(result.waypoints),
            waypoints=waypoints,
            strategy=result.strategy,
            from_side=points.from_side,
            to_side=points.to_side,
            path_data=render_path(waypoints),
            start_marker=points.table_edge_start,
            end_marker=points.table_edge_end,
            label_position=label_position,
            label_text=truncate_label(relationship.constraint_name or ''),
            debug=debug
        )

    def routing_context(
        self,
        layout: LayoutContext,
        from_table: Table,
        to_table: Table,
        points: ConnectionPoints
    ) -> RoutingContext:
        """Obstacles, bounds and anchor sides for routing one relationship"""
        return RoutingContext(
            bounds=layout.bounds,
            obstacles=layout.obstacles(from_table, to_table),
            options=self.options,
            occupied=layout.occupied_region(),
            from_side=points.from_side,
            to_side=points.to_side,
            from_rect=layout.rect(from_table),
            to_rect=layout.rect(to_table)
        )

    def draw_table(self, layout: LayoutContext, table: Table, relationships: Sequence[Relationship]) -> TableDraw:
        """Rectangle, header text and column rows of one table"""
        opts = self.options
        rect = layout.rect(table)
        max_chars = layout.sizer.max_chars(table)

        rows = []
        baseline = rect.y + opts.table_header_height + FIRST_ROW_BASELINE
        for column in table.visible_columns(opts.max_columns):
            is_pk = table.is_primary_key(column.name)
            is_fk = table.is_foreign_key(column.name)
            is_referenced = is_pk and layout.is_referenced(table, column.name, relationships)

            rows.append(ColumnRow(
                name=column.name,
                text=fit_text(column_text(table, column, opts), max_chars),
                baseline_y=baseline,
                is_primary_key=is_pk,
                is_foreign_key=is_fk,
                is_referenced=is_referenced,
                fk_marker=Point(rect.right - MARKER_INSET_RIGHT, baseline - MARKER_RAISE) if is_fk else None,
                pk_marker=Point(rect.x + MARKER_INSET_LEFT, baseline - MARKER_RAISE) if is_referenced else None
            ))
            baseline += opts.column_row_height

        hidden = table.hidden_column_count(opts.max_columns)

        return TableDraw(
            name=table.name,
            label=table.label,
            rect=rect,
            header_height=opts.table_header_height,
            rows=rows,
            truncation_text=truncation_text(hidden) if hidden else None,
            truncation_y=baseline if hidden else None
        )

    def debug_overlay(self, layout: LayoutContext, route_points: List[Point], obstacles: List[Rect]) -> DebugOverlay:
        """Buffer zones, routing bands and waypoint markers for diagnosis"""
        opts = self.options
        width, height = layout.bounds
        half = DEBUG_BAND_THICKNESS / 2

        top_y = opts.safe_zone + opts.routing_spacing_top
        bottom_y = height - opts.safe_zone - opts.routing_spacing_top
        left_x = opts.safe_zone + opts.routing_spacing_side
        right_x = width - opts.safe_zone - opts.routing_spacing_side

        return DebugOverlay(
            waypoint_markers=list(route_points),
            collision_zones=[r.expand(opts.collision_buffer) for r in obstacles],
            visual_zones=[r.expand(opts.total_buffer) for r in obstacles],
            routing_bands=[
                Rect(0, top_y - half, width, DEBUG_BAND_THICKNESS),
                Rect(0, bottom_y - half, width, DEBUG_BAND_THICKNESS),
                Rect(left_x - half, 0, DEBUG_BAND_THICKNESS, height),
                Rect(right_x - half, 0, DEBUG_BAND_THICKNESS, height),
            ]
        )


def generate_diagram(
    tables: Sequence[Table],
    relationships: Sequence[Relationship],
    options: Optional[DiagramOptions] = None,
    title: str = DEFAULT_TITLE
) -> Diagram:
    """Convenience wrapper around DiagramAssembler.generate"""
    return DiagramAssembler(options, title).generate(tables, relationships)
