"""
Tests for table sizing including property-based tests using Hypothesis
"""

import pytest
from hypothesis import given, strategies as st, settings

from schema_diagram.core.config import DiagramOptions
from schema_diagram.core.models import Column, Table
from schema_diagram.layout.sizing import (
    TableSizer, column_text, estimate_text_width, simplify_data_type, truncation_text
)


class TestTextHelpers:

    def test_estimate_text_width(self):
        assert estimate_text_width('abcde', 12) == pytest.approx(36.0)

    def test_simplify_timestamp(self):
        assert simplify_data_type('timestamp with time zone') == 'TIMESTAMP'

    def test_simplify_truncates_long_types(self):
        assert simplify_data_type('character varying(255)') == 'CHARACTER VARYI'

    def test_column_text_primary_key(self, customers_table, options):
        text = column_text(customers_table, customers_table.columns[0], options)
        assert text == '🔑 id : INTEGER NOT NULL'

    def test_column_text_foreign_key(self, orders_table, options):
        text = column_text(orders_table, orders_table.columns[1], options)
        assert text.startswith('🔗 customer_id')

    def test_column_text_without_types(self, customers_table):
        opts = DiagramOptions(show_data_types=False, show_constraints=False)
        assert column_text(customers_table, customers_table.columns[1], opts) == 'name'

    def test_column_text_without_type_information(self, options):
        table = Table('t', columns=[Column('plain')])
        assert column_text(table, table.columns[0], options) == 'plain'

    def test_truncation_text(self):
        assert truncation_text(3) == '... and 3 more columns'


class TestTableSizer:
    """Width and height computation"""

    def test_short_table_uses_minimum_width(self, customers_table, options):
        assert TableSizer(options).compute_width(customers_table) == options.min_table_width

    def test_long_column_widens_table(self, orders_table, options):
        # '🔗 customer_id : INTEGER NOT NULL' is 32 characters
        expected = 32 * options.font_size * 0.6 + options.text_padding
        width = TableSizer(options).compute_width(orders_table)
        assert width == pytest.approx(255)
        assert width >= expected

    def test_very_long_name_clamped_to_maximum(self, options):
        table = Table('x' * 200, columns=[Column('id')])
        assert TableSizer(options).compute_width(table) == options.max_table_width

    def test_height(self, customers_table, options):
        # header + 2 rows + footer padding
        assert TableSizer(options).compute_height(customers_table) == 35 + 2 * 22 + 15

    def test_height_with_hidden_columns(self):
        opts = DiagramOptions(max_columns=3)
        table = Table('wide', columns=[Column(f'c{i}') for i in range(10)])
        # 3 visible rows plus one truncation row
        assert TableSizer(opts).compute_height(table) == 35 + 4 * 22 + 15

    def test_empty_table_height(self, options):
        assert TableSizer(options).compute_height(Table('empty')) == 35 + 15

    def test_memoized_by_name(self, customers_table, options):
        sizer = TableSizer(options)
        first = sizer.compute_width(customers_table)
        assert sizer.compute_width(customers_table) is first

    def test_max_chars(self, customers_table, options):
        # (200 - 24) / 7.2
        assert TableSizer(options).max_chars(customers_table) == 24

    @given(
        st.text(min_size=1, max_size=120),
        st.lists(st.text(min_size=1, max_size=80), max_size=20),
        st.integers(min_value=50, max_value=300),
        st.integers(min_value=0, max_value=300),
    )
    @settings(max_examples=50, deadline=None)
    def test_width_always_within_bounds(self, name, column_names, min_width, extra):
        opts = DiagramOptions(min_table_width=min_width, max_table_width=min_width + extra)
        table = Table(name, columns=[Column(c, 'varchar') for c in column_names])
        width = TableSizer(opts).compute_width(table)
        assert opts.min_table_width <= width <= opts.max_table_width
