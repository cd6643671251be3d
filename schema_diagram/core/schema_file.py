"""
Load an introspected schema (tables, keys, relationships) from a YAML or JSON document
"""

from typing import Dict, List, Union, Optional, Tuple
from pathlib import Path
import logging
from pydantic import BaseModel, Field, ConfigDict, ValidationError, field_validator

from .config import DiagramOptions, _load_yaml, build_options
from .exceptions import ConfigurationError
from .models import Column, ForeignKey, Table, Relationship, derive_relationships, MANY_TO_ONE

logger = logging.getLogger(__name__)


class ColumnModel(BaseModel):
    """Column entry of a schema document"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    type: str = ''
    nullable: bool = Field(True, alias='allow_null')


class ForeignKeyModel(BaseModel):
    """Foreign key entry of a schema document"""
    column: str = Field(..., min_length=1)
    references: str = Field(..., min_length=1, description="'table.column' or 'schema.table.column'")
    constraint_name: str = ''

    @field_validator('references')
    @classmethod
    def validate_reference(cls, v):
        """Require at least table.column"""
        if '.' not in v:
            raise ValueError(f"Foreign key reference must be 'table.column', got '{v}'")
        return v


class TableModel(BaseModel):
    """Table entry of a schema document"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    table_schema: Optional[str] = Field(None, alias='schema')
    display_name: Optional[str] = None
    columns: List[ColumnModel] = Field(default_factory=list)
    primary_key: List[str] = Field(default_factory=list)
    foreign_keys: List[ForeignKeyModel] = Field(default_factory=list)

    @field_validator('primary_key', mode='before')
    @classmethod
    def normalize_primary_key(cls, v):
        """Convert single string to list"""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator('columns', mode='before')
    @classmethod
    def normalize_columns(cls, v):
        """Allow bare column names"""
        if not v:
            return []
        return [{'name': c} if isinstance(c, str) else c for c in v]


class RelationshipModel(BaseModel):
    """Explicit relationship entry of a schema document"""
    from_table: str
    from_column: str
    to_table: str
    to_column: str
    constraint_name: str = ''
    type: str = MANY_TO_ONE


class SchemaDocument(BaseModel):
    """Top-level schema document"""
    model_config = ConfigDict(extra='ignore')

    tables: List[TableModel] = Field(default_factory=list)
    relationships: Optional[List[RelationshipModel]] = None
    options: Dict = Field(default_factory=dict)


def _split_reference(reference: str) -> Tuple[Optional[str], str, str]:
    """'schema.table.column' -> (schema, table, column)"""
    parts = reference.split('.')
    column = parts[-1]
    table = parts[-2]
    schema = '.'.join(parts[:-2]) or None
    return schema, table, column


def _to_table(model: TableModel) -> Table:
    columns = [Column(name=c.name, type=c.type, nullable=c.nullable) for c in model.columns]

    foreign_keys = []
    for fk in model.foreign_keys:
        schema, ref_table, ref_column = _split_reference(fk.references)
        foreign_keys.append(ForeignKey(
            column=fk.column,
            referenced_table=ref_table,
            referenced_column=ref_column,
            constraint_name=fk.constraint_name or f"fk_{model.name}_{fk.column}",
            referenced_schema=schema
        ))

    return Table(
        name=model.name,
        columns=columns,
        primary_keys=model.primary_key,
        foreign_keys=foreign_keys,
        schema=model.table_schema,
        display_name=model.display_name
    )


def parse_schema(data: Dict) -> Tuple[List[Table], List[Relationship], DiagramOptions]:
    """
    Convert a parsed schema document into core value types.

    Relationships are derived from foreign keys unless the document lists
    them explicitly.

    Raises:
        ConfigurationError: If the document does not validate
    """
    try:
        document = SchemaDocument(**(data or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Schema validation failed: {str(e)}") from e

    tables = [_to_table(t) for t in document.tables]

    names = [t.name for t in tables]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigurationError(f"Duplicate table names in schema: {', '.join(duplicates)}")

    if document.relationships is None:
        relationships = derive_relationships(tables)
    else:
        relationships = [
            Relationship(
                from_table=r.from_table,
                from_column=r.from_column,
                to_table=r.to_table,
                to_column=r.to_column,
                constraint_name=r.constraint_name,
                relationship_type=r.type
            )
            for r in document.relationships
        ]

    options = build_options(document.options)

    logger.info(f"Loaded schema with {len(tables)} tables and {len(relationships)} relationships")
    return tables, relationships, options


def load_schema(path: Union[str, Path]) -> Tuple[List[Table], List[Relationship], DiagramOptions]:
    """Load and validate a schema document from disk"""
    return parse_schema(_load_yaml(path))
