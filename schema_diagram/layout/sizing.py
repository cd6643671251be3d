"""
Table sizing: on-canvas width and height of each table box.

Text width is a deterministic estimate (character count times an average
glyph width), not a real font measurement.
"""

from typing import Dict, List
import math
import re

from ..core.config import DiagramOptions
from ..core.models import Column, Table

# Average glyph width as a fraction of the font size
AVG_CHAR_WIDTH_FACTOR = 0.6

# Padding below the last column row
TABLE_FOOTER_PADDING = 15

PK_PREFIX = '🔑 '
FK_PREFIX = '🔗 '

MAX_TYPE_LENGTH = 15


def estimate_text_width(text: str, font_size: float) -> float:
    """Estimate rendered text width in pixels"""
    return len(text) * font_size * AVG_CHAR_WIDTH_FACTOR


def simplify_data_type(type_text: str) -> str:
    """
    Shorten a dialect-specific type for display.

    Examples:
        >>> simplify_data_type('timestamp with time zone')
        'TIMESTAMP'
        >>> simplify_data_type('varchar(255)')
        'VARCHAR(255)'
    """
    simplified = re.sub(r'TIMESTAMP.*', 'TIMESTAMP', type_text, flags=re.IGNORECASE)
    simplified = re.sub(r'DATETIME.*', 'DATETIME', simplified, flags=re.IGNORECASE)
    return simplified.upper()[:MAX_TYPE_LENGTH]


def column_prefix(table: Table, column: Column) -> str:
    """Key glyph for primary keys, link glyph for foreign keys"""
    if table.is_primary_key(column.name):
        return PK_PREFIX
    if table.is_foreign_key(column.name):
        return FK_PREFIX
    return ''


def column_text(table: Table, column: Column, options: DiagramOptions) -> str:
    """Full display line of a column: prefix, name, type and nullability"""
    display_type = f" : {simplify_data_type(column.type)}" if options.show_data_types and column.type else ''
    nullability = ' NOT NULL' if options.show_constraints and not column.nullable else ''
    return f"{column_prefix(table, column)}{column.name}{display_type}{nullability}"


def truncation_text(hidden_count: int) -> str:
    return f"... and {hidden_count} more columns"


class TableSizer:
    """
    Computes and memoizes table sizes for one diagram generation.

    A new instance must be created for every generation pass; cached values
    are keyed by table name only.
    """

    def __init__(self, options: DiagramOptions):
        self.options = options
        self._widths: Dict[str, float] = {}
        self._heights: Dict[str, float] = {}

    def _text_lines(self, table: Table) -> List[tuple]:
        """(text, font_size) pairs that participate in width measurement"""
        opts = self.options
        lines = [(table.label, opts.header_font_size)]

        for column in table.visible_columns(opts.max_columns):
            lines.append((column_text(table, column, opts), opts.font_size))

        hidden = table.hidden_column_count(opts.max_columns)
        if hidden:
            lines.append((truncation_text(hidden), opts.font_size))

        return lines

    def compute_width(self, table: Table) -> float:
        """
        Width of a table box, clamped to [min_table_width, max_table_width].

        Args:
            table: Table to measure

        Returns:
            Width in pixels
        """
        if table.name in self._widths:
            return self._widths[table.name]

        opts = self.options
        width = opts.min_table_width

        for text, font_size in self._text_lines(table):
            width = max(width, estimate_text_width(text, font_size) + opts.text_padding)

        width = min(math.ceil(width), opts.max_table_width)
        width = max(width, opts.min_table_width)

        self._widths[table.name] = width
        return width

    def compute_height(self, table: Table) -> float:
        """Header, visible rows, optional truncation row and footer padding"""
        if table.name in self._heights:
            return self._heights[table.name]

        opts = self.options
        visible = len(table.visible_columns(opts.max_columns))
        extra = opts.column_row_height if table.hidden_column_count(opts.max_columns) else 0

        height = opts.table_header_height + visible * opts.column_row_height + extra + TABLE_FOOTER_PADDING

        self._heights[table.name] = height
        return height

    def max_chars(self, table: Table) -> int:
        """Characters that fit on one column line of this table"""
        usable = self.compute_width(table) - self.options.text_padding
        return max(4, int(usable // (self.options.font_size * AVG_CHAR_WIDTH_FACTOR)))
