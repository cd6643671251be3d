"""
Draw instruction types produced by the diagram assembler.

These carry geometry and text only; exporters decide how they look.
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field, asdict

from ..core.models import Relationship
from ..layout.geometry import Point, Rect
from ..routing.router import RouteStrategy


@dataclass
class ColumnRow:
    """One visible column line inside a table box"""
    name: str
    text: str
    baseline_y: float
    is_primary_key: bool = False
    is_foreign_key: bool = False
    is_referenced: bool = False
    fk_marker: Optional[Point] = None
    pk_marker: Optional[Point] = None


@dataclass
class TableDraw:
    """Rectangle, header and rows of one table"""
    name: str
    label: str
    rect: Rect
    header_height: float
    rows: List[ColumnRow] = field(default_factory=list)
    truncation_text: Optional[str] = None
    truncation_y: Optional[float] = None


@dataclass
class DebugOverlay:
    """Routing diagnostics for one relationship"""
    waypoint_markers: List[Point] = field(default_factory=list)
    collision_zones: List[Rect] = field(default_factory=list)
    visual_zones: List[Rect] = field(default_factory=list)
    routing_bands: List[Rect] = field(default_factory=list)


@dataclass
class RelationshipDraw:
    """Routed connector between two table columns"""
    relationship: Relationship
    route: List[Point]
    waypoints: List[Point]
    strategy: RouteStrategy
    from_side: str
    to_side: str
    path_data: str
    start_marker: Point
    end_marker: Point
    label_position: Point
    label_text: str
    debug: Optional[DebugOverlay] = None


@dataclass
class SkippedRelationship:
    """A relationship that could not be drawn, with the reason"""
    relationship: Relationship
    reason: str

    @property
    def annotation(self) -> str:
        rel = self.relationship
        return f"Relationship {rel.from_table} -> {rel.to_table}: {self.reason}"


@dataclass
class Diagram:
    """
    Complete draw instructions for one schema.

    Relationships are drawn before tables; tables keep input order.
    """
    width: float
    height: float
    title: str
    subtitle: str = ''
    tables: List[TableDraw] = field(default_factory=list)
    relationships: List[RelationshipDraw] = field(default_factory=list)
    skipped: List[SkippedRelationship] = field(default_factory=list)
    placeholder: Optional[Tuple[str, ...]] = None

    @property
    def is_empty(self) -> bool:
        return self.placeholder is not None

    def strategy_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for rel in self.relationships:
            counts[rel.strategy.value] = counts.get(rel.strategy.value, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary form suitable for JSON"""
        data = asdict(self)
        for rel in data['relationships']:
            rel['strategy'] = rel['strategy'].value
        return data
