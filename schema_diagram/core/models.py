"""
Schema graph value types: tables, columns, foreign keys and relationships
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass, field


ONE_TO_ONE = 'one-to-one'
MANY_TO_ONE = 'many-to-one'
UNKNOWN = 'unknown'


@dataclass(frozen=True)
class Column:
    """A single table column"""
    name: str
    type: str = ''
    nullable: bool = True


@dataclass(frozen=True)
class ForeignKey:
    """Foreign key descriptor owned by the referencing table"""
    column: str
    referenced_table: str
    referenced_column: str
    constraint_name: str = ''
    referenced_schema: Optional[str] = None


@dataclass(frozen=True)
class Table:
    """
    A table in the schema graph.

    Column order is significant: it defines the vertical row position of
    each column in the diagram. Tables never reference each other directly;
    cross-table links live in Relationship records and are resolved by name.
    """
    name: str
    columns: Tuple[Column, ...] = ()
    primary_keys: Tuple[str, ...] = ()
    foreign_keys: Tuple[ForeignKey, ...] = ()
    schema: Optional[str] = None
    display_name: Optional[str] = None

    def __post_init__(self):
        # Accept lists from callers while keeping the instance hashable
        object.__setattr__(self, 'columns', tuple(self.columns))
        object.__setattr__(self, 'primary_keys', tuple(self.primary_keys))
        object.__setattr__(self, 'foreign_keys', tuple(self.foreign_keys))

    @property
    def full_name(self) -> str:
        """Schema-qualified name when a schema is set"""
        return f"{self.schema}.{self.name}" if self.schema else self.name

    @property
    def label(self) -> str:
        """Text shown in the table header"""
        return self.display_name or self.full_name

    def is_primary_key(self, column_name: str) -> bool:
        return column_name in self.primary_keys

    def is_foreign_key(self, column_name: str) -> bool:
        return any(fk.column == column_name for fk in self.foreign_keys)

    def visible_columns(self, max_columns: int) -> Tuple[Column, ...]:
        """Columns that fit within the display limit"""
        return self.columns[:max_columns]

    def hidden_column_count(self, max_columns: int) -> int:
        return max(0, len(self.columns) - max_columns)

    def column_index(self, column_name: str, max_columns: int) -> int:
        """Index among visible columns, or -1 if hidden or missing"""
        for idx, column in enumerate(self.visible_columns(max_columns)):
            if column.name == column_name:
                return idx
        return -1


@dataclass(frozen=True)
class Relationship:
    """A link between two table columns, referenced by name"""
    from_table: str
    from_column: str
    to_table: str
    to_column: str
    constraint_name: str = ''
    relationship_type: str = MANY_TO_ONE

    @property
    def key(self) -> str:
        return f"{self.from_table}.{self.from_column}->{self.to_table}.{self.to_column}"


def _find_referenced_table(tables: List[Table], fk: ForeignKey) -> Optional[Table]:
    """Match by (name, schema) first, then by name only"""
    for table in tables:
        if table.name == fk.referenced_table and table.schema == fk.referenced_schema:
            return table
    for table in tables:
        if table.name == fk.referenced_table:
            return table
    return None


def determine_relationship_type(table: Table, fk: ForeignKey, referenced: Optional[Table]) -> str:
    """
    Classify a foreign key as one-to-one or many-to-one.

    A foreign key column that is also part of the primary key is treated as
    one-to-one. This only drives a cosmetic label.
    """
    if referenced is None:
        return UNKNOWN

    if table.is_primary_key(fk.column):
        return ONE_TO_ONE

    return MANY_TO_ONE


def derive_relationships(tables: List[Table]) -> List[Relationship]:
    """
    Build one relationship per distinct foreign key across all tables.

    Args:
        tables: Tables with their foreign key descriptors

    Returns:
        Relationships in table order, duplicates removed
    """
    relationships = []
    seen = set()

    for table in tables:
        for fk in table.foreign_keys:
            referenced = _find_referenced_table(tables, fk)
            if referenced is not None:
                to_table = referenced.full_name
            elif fk.referenced_schema:
                to_table = f"{fk.referenced_schema}.{fk.referenced_table}"
            else:
                to_table = fk.referenced_table

            relationship = Relationship(
                from_table=table.full_name,
                from_column=fk.column,
                to_table=to_table,
                to_column=fk.referenced_column,
                constraint_name=fk.constraint_name,
                relationship_type=determine_relationship_type(table, fk, referenced)
            )

            if relationship.key not in seen:
                seen.add(relationship.key)
                relationships.append(relationship)

    return relationships
