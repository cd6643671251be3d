"""
Schema Diagram - database structure diagrams with obstacle-avoiding relationship routing
"""

from importlib.metadata import version, PackageNotFoundError

from .core.config import DiagramConfig, DiagramOptions
from .core.models import Column, ForeignKey, Relationship, Table, derive_relationships
from .core.schema_file import load_schema
from .render.assembler import DiagramAssembler, generate_diagram

try:
    __version__ = version("schema-diagram")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = [
    "DiagramConfig",
    "DiagramOptions",
    "Column",
    "ForeignKey",
    "Relationship",
    "Table",
    "derive_relationships",
    "load_schema",
    "DiagramAssembler",
    "generate_diagram",
]
