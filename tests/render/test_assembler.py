"""
Tests for diagram assembly
"""

import pytest

from schema_diagram.core.config import DiagramOptions
from schema_diagram.core.models import Column, Relationship, Table
from schema_diagram.layout.geometry import Point, Rect, path_intersects_any
from schema_diagram.render.assembler import (
    EMPTY_MESSAGES, DiagramAssembler, fit_text, generate_diagram, truncate_label
)
from schema_diagram.routing.router import RouteStrategy


class TestTextHelpers:

    def test_short_label_unchanged(self):
        assert truncate_label('fk_short') == 'fk_short'

    def test_long_label_truncated(self):
        assert truncate_label('fk_orders_customer') == 'fk_orders...'

    def test_twelve_characters_kept(self):
        assert truncate_label('a' * 12) == 'a' * 12

    def test_fit_text(self):
        assert fit_text('abcdefghij', 8) == 'abcde...'
        assert fit_text('abc', 8) == 'abc'


class TestEmptyDiagram:

    def test_zero_tables_gives_placeholder(self, options):
        diagram = generate_diagram([], [], options)

        assert diagram.is_empty
        assert (diagram.width, diagram.height) == (600, 400)
        assert diagram.placeholder == EMPTY_MESSAGES
        assert diagram.tables == []
        assert diagram.relationships == []

    def test_zero_tables_ignores_relationships(self, order_customer_relationship):
        diagram = generate_diagram([], [order_customer_relationship])
        assert diagram.is_empty
        assert diagram.relationships == []


class TestSideBySideTables:
    """Two tables in one row with nothing between them"""

    @pytest.fixture
    def diagram(self, orders_table, customers_table, order_customer_relationship, options):
        return generate_diagram([orders_table, customers_table], [order_customer_relationship], options)

    def test_direct_route_between_opposing_sides(self, diagram):
        [rel] = diagram.relationships
        assert rel.strategy == RouteStrategy.DIRECT
        assert (rel.from_side, rel.to_side) == ('right', 'left')

    def test_route_leaves_horizontally(self, diagram):
        [rel] = diagram.relationships
        first, second = rel.waypoints[0], rel.waypoints[1]
        assert first.y == second.y
        assert second.x > first.x

    def test_waypoints_start_and_end_on_table_edges(self, diagram):
        [rel] = diagram.relationships
        orders, customers = diagram.tables
        assert rel.waypoints[0] == rel.start_marker
        assert rel.waypoints[0].x == orders.rect.right
        assert rel.waypoints[-1] == rel.end_marker
        assert rel.waypoints[-1].x == customers.rect.x

    def test_label(self, diagram):
        [rel] = diagram.relationships
        assert rel.label_text == 'fk_orders...'
        assert rel.label_position == rel.route[len(rel.route) // 2]

    def test_path_data_present(self, diagram):
        [rel] = diagram.relationships
        assert rel.path_data.startswith('M ')

    def test_canvas_bounds(self, diagram):
        orders, customers = diagram.tables
        assert diagram.width == customers.rect.right + 100
        assert diagram.height == max(orders.rect.bottom, customers.rect.bottom) + 100

    def test_subtitle(self, diagram):
        assert diagram.subtitle == '2 tables, 1 relationships'

    def test_aligned_rows_give_single_segment(self, options):
        orders = Table('orders', columns=[Column('customer_id', 'integer')],
                       primary_keys=[], foreign_keys=[])
        customers = Table('customers', columns=[Column('id', 'integer')], primary_keys=['id'])
        rel = Relationship('orders', 'customer_id', 'customers', 'id')
        diagram = generate_diagram([orders, customers], [rel], options)

        [draw] = diagram.relationships
        assert draw.strategy == RouteStrategy.DIRECT
        assert len(draw.route) == 2
        assert draw.route[0].y == draw.route[1].y


class TestObstacleBetweenTables:
    """A third table sits between the two related tables"""

    @pytest.fixture
    def tables(self, orders_table, payments_table, customers_table, audit_log_table):
        return [orders_table, payments_table, customers_table, audit_log_table]

    def test_route_avoids_payments(self, tables, order_customer_relationship, options):
        diagram = generate_diagram(tables, [order_customer_relationship], options)
        [rel] = diagram.relationships
        payments = next(t for t in diagram.tables if t.name == 'payments')

        assert payments.rect == Rect(475, 240, 200, 138)
        assert rel.strategy == RouteStrategy.MARGIN
        assert rel.route == [Point(440, 317), Point(440, 490), Point(710, 490), Point(710, 295)]
        assert not path_intersects_any(rel.route, [payments.rect], options.collision_buffer)

    def test_route_keeps_full_buffer_when_tables_are_spread(self, tables, order_customer_relationship,
                                                            wide_options):
        diagram = generate_diagram(tables, [order_customer_relationship], wide_options)
        [rel] = diagram.relationships
        payments = next(t for t in diagram.tables if t.name == 'payments')

        assert rel.strategy in (RouteStrategy.MARGIN, RouteStrategy.GRID)
        assert not path_intersects_any(rel.route, [payments.rect], wide_options.total_buffer)

    def test_strategy_counts(self, tables, order_customer_relationship, options):
        diagram = generate_diagram(tables, [order_customer_relationship], options)
        assert diagram.strategy_counts() == {'margin': 1}


class TestSkippedRelationships:

    def test_missing_table_is_skipped(self, orders_table, customers_table, order_customer_relationship, options):
        ghost = Relationship('orders', 'customer_id', 'ghosts', 'id', 'fk_ghost')
        diagram = generate_diagram(
            [orders_table, customers_table], [ghost, order_customer_relationship], options
        )

        assert len(diagram.relationships) == 1
        assert diagram.relationships[0].relationship == order_customer_relationship
        assert len(diagram.skipped) == 1
        assert diagram.skipped[0].relationship == ghost
        assert diagram.skipped[0].reason == 'table not found'
        assert 'ghosts' in diagram.skipped[0].annotation

    def test_skip_does_not_change_layout(self, orders_table, customers_table, order_customer_relationship, options):
        ghost = Relationship('ghosts', 'id', 'customers', 'id')
        with_ghost = generate_diagram([orders_table, customers_table], [ghost, order_customer_relationship], options)
        without = generate_diagram([orders_table, customers_table], [order_customer_relationship], options)

        assert [t.rect for t in with_ghost.tables] == [t.rect for t in without.tables]
        assert with_ghost.relationships[0].route == without.relationships[0].route
        assert (with_ghost.width, with_ghost.height) == (without.width, without.height)

    def test_skip_is_logged(self, orders_table, options, caplog):
        ghost = Relationship('orders', 'customer_id', 'ghosts', 'id')
        with caplog.at_level('WARNING', logger='schema_diagram'):
            generate_diagram([orders_table], [ghost], options)
        assert 'table not found' in caplog.text


class TestTableDraw:
    """Rows, markers and truncation"""

    def test_rows_and_markers(self, orders_table, customers_table, order_customer_relationship, options):
        diagram = generate_diagram([orders_table, customers_table], [order_customer_relationship], options)
        orders, customers = diagram.tables

        first_baseline = orders.rect.y + options.table_header_height + 18
        assert [row.baseline_y for row in orders.rows] == [first_baseline, first_baseline + 22]

        fk_row = orders.rows[1]
        assert fk_row.is_foreign_key
        assert fk_row.fk_marker == Point(orders.rect.right - 8, fk_row.baseline_y - 6)

        pk_row = customers.rows[0]
        assert pk_row.is_referenced
        assert pk_row.pk_marker == Point(customers.rect.x + 4, pk_row.baseline_y - 6)

        # orders.id is a primary key nobody references
        assert orders.rows[0].is_primary_key
        assert orders.rows[0].pk_marker is None

    def test_truncated_table(self, options):
        table = Table('wide', columns=[Column(f'col_{i}') for i in range(20)])
        diagram = generate_diagram([table], [], options)
        [draw] = diagram.tables

        assert len(draw.rows) == options.max_columns
        assert draw.truncation_text == '... and 5 more columns'
        assert draw.truncation_y == draw.rows[-1].baseline_y + options.column_row_height

    def test_label_uses_display_name(self, options):
        table = Table('usr', display_name='Users')
        [draw] = generate_diagram([table], [], options).tables
        assert draw.label == 'Users'

    def test_tables_keep_input_order(self, orders_table, customers_table, payments_table, options):
        diagram = generate_diagram([payments_table, orders_table, customers_table], [], options)
        assert [t.name for t in diagram.tables] == ['payments', 'orders', 'customers']


class TestDebugOverlay:

    def test_overlay_only_when_enabled(self, orders_table, customers_table, payments_table,
                                       order_customer_relationship, options):
        tables = [orders_table, payments_table, customers_table]
        plain = generate_diagram(tables, [order_customer_relationship], options)
        assert plain.relationships[0].debug is None

        debug_options = DiagramOptions(debug_paths=True)
        diagram = generate_diagram(tables, [order_customer_relationship], debug_options)
        [rel] = diagram.relationships

        assert rel.debug is not None
        assert rel.debug.waypoint_markers == rel.route
        assert len(rel.debug.collision_zones) == 1
        assert len(rel.debug.visual_zones) == 1
        assert len(rel.debug.routing_bands) == 4

        payments = diagram.tables[1].rect
        assert rel.debug.collision_zones[0] == payments.expand(debug_options.collision_buffer)
        assert rel.debug.visual_zones[0] == payments.expand(debug_options.total_buffer)


class TestDiagramAssembler:

    def test_generation_is_repeatable(self, orders_table, customers_table, order_customer_relationship, options):
        assembler = DiagramAssembler(options)
        first = assembler.generate([orders_table, customers_table], [order_customer_relationship])
        second = assembler.generate([orders_table, customers_table], [order_customer_relationship])
        assert first == second

    def test_to_dict_serializes_strategy(self, orders_table, customers_table, order_customer_relationship, options):
        diagram = generate_diagram([orders_table, customers_table], [order_customer_relationship], options)
        data = diagram.to_dict()
        assert data['relationships'][0]['strategy'] == 'direct'
        assert data['tables'][0]['name'] == 'orders'

    def test_custom_title(self, orders_table):
        diagram = DiagramAssembler(title='Shop').generate([orders_table], [])
        assert diagram.title == 'Shop'
