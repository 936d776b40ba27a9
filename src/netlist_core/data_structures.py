# src/netlist_core/data_structures.py
# Required for forward references in type hints (e.g., 'ComponentBase')
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple, TYPE_CHECKING

from .constants import NODE_LABEL_SEPARATOR

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from .components.base import ComponentBase
    from .extraction.config import ExtractionConfig


class PointId(NamedTuple):
    """Stable identity of a control point: owning component id plus local index."""
    component_id: str
    index: int

    def __str__(self) -> str:
        return f"{self.component_id}[{self.index}]"


@dataclass(frozen=True)
class ControlPoint:
    """
    A connection location as declared by a component, in the component's own
    (local, untransformed) coordinates.
    """
    name: str
    x: float
    y: float
    sticky: bool = True


@dataclass(frozen=True)
class Placement:
    """
    Where and how a component sits in the layout. Local point coordinates are
    mirrored (x -> -x) if requested, rotated counter-clockwise by
    `rotation_deg` about the local origin, then translated by (x, y).
    """
    x: float = 0.0
    y: float = 0.0
    rotation_deg: float = 0.0
    mirrored: bool = False


@dataclass(frozen=True)
class Point:
    """
    A control point with its resolved absolute position. Immutable for the
    duration of one extraction pass.
    """
    point_id: PointId
    x: float
    y: float
    sticky: bool
    name: str
    component_name: str

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def label(self) -> str:
        """Human-readable label, e.g. 'R1.1' or 'SW1.COM'."""
        return f"{self.component_name}{NODE_LABEL_SEPARATOR}{self.name}"


class EdgeSource(Enum):
    """Where an edge between two points comes from."""
    COINCIDENCE = "coincidence"  # Geometric: the points occupy the same spot.
    CONTINUITY = "continuity"    # Declared by the owning component.

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Edge:
    """
    An unordered pair of point identities. The endpoints are stored in sorted
    order so that Edge(a, b) == Edge(b, a).
    """
    a: PointId
    b: PointId
    source: EdgeSource
    # Position index for switch edges; None for unconditional edges.
    position: Optional[int] = None

    def __post_init__(self):
        if self.b < self.a:
            first, second = self.b, self.a
            object.__setattr__(self, 'a', first)
            object.__setattr__(self, 'b', second)

    @property
    def is_self_loop(self) -> bool:
        return self.a == self.b


@dataclass(frozen=True)
class Layout:
    """
    A placed set of components ready for extraction, as produced by the
    LayoutBuilder from a layout description. Component order is significant:
    it fixes point order, switch order and therefore configuration order.
    """
    name: str
    unit: str
    components: List[ComponentBase]
    extraction_config: ExtractionConfig
    source_file_path: Optional[Path] = None
    metadata: dict = field(default_factory=dict)
