# src/netlist_core/extraction/points.py
"""
The Point Registry: a flat, stably ordered list of every control point in the
layout with its absolute position resolved.

Order is components in input order, then points in index order. Every later
stage (coincidence, continuity, partition, assembly) addresses points through
this registry, so the order fixed here is what makes extraction deterministic.
"""
import logging
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from ..components.base import ComponentBase
from ..components.exceptions import ComponentError
from ..data_structures import ControlPoint, Placement, Point, PointId

logger = logging.getLogger(__name__)

# Exact rotation matrices for quarter turns, so that 90-degree placements do
# not pick up cos(pi/2) ~ 6e-17 noise.
_QUARTER_TURNS = {
    0: np.array([[1, 0], [0, 1]], dtype=float),
    1: np.array([[0, -1], [1, 0]], dtype=float),
    2: np.array([[-1, 0], [0, -1]], dtype=float),
    3: np.array([[0, 1], [-1, 0]], dtype=float),
}


def rotation_matrix(rotation_deg: float) -> np.ndarray:
    """Counter-clockwise 2x2 rotation matrix for `rotation_deg` degrees."""
    quarter, remainder = divmod(float(rotation_deg), 90.0)
    if remainder == 0.0:
        return _QUARTER_TURNS[int(quarter) % 4]
    theta = np.deg2rad(rotation_deg)
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s], [s, c]], dtype=float)


def transform_points(local: np.ndarray, placement: Placement) -> np.ndarray:
    """
    Applies a placement to an (N, 2) array of local coordinates: mirror across
    the vertical axis if requested, rotate about the local origin, translate.
    """
    if local.size == 0:
        return local.reshape(0, 2)
    pts = local.copy()
    if placement.mirrored:
        pts[:, 0] = -pts[:, 0]
    pts = pts @ rotation_matrix(placement.rotation_deg).T
    return pts + np.array([placement.x, placement.y], dtype=float)


class PointRegistry:
    """
    Immutable-by-convention container of resolved points.

    Attributes:
        points: Tuple of `Point` in registry order.
        positions: (N, 2) float array of absolute positions, row `k` belonging
                   to `points[k]`.
    """

    def __init__(self, points: Sequence[Point]):
        self.points: Tuple[Point, ...] = tuple(points)
        self._index: Dict[PointId, int] = {p.point_id: k for k, p in enumerate(self.points)}
        self._by_component: Dict[str, List[Point]] = {}
        for p in self.points:
            self._by_component.setdefault(p.point_id.component_id, []).append(p)
        if self.points:
            self.positions: np.ndarray = np.array([p.position for p in self.points], dtype=float)
        else:
            self.positions = np.zeros((0, 2), dtype=float)
        self.positions.setflags(write=False)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __contains__(self, point_id: PointId) -> bool:
        return point_id in self._index

    def index_of(self, point_id: PointId) -> int:
        """Registry position of `point_id`. Raises KeyError for unknown ids."""
        return self._index[point_id]

    def get(self, point_id: PointId) -> Point:
        return self.points[self._index[point_id]]

    def points_of(self, component_id: str) -> List[Point]:
        """The points of one component, in index order (empty if it has none)."""
        return list(self._by_component.get(component_id, ()))

    def component_ids(self) -> List[str]:
        return list(self._by_component)

    def __repr__(self) -> str:
        return f"PointRegistry({len(self.points)} points, {len(self._by_component)} components)"


def _resolve_component(component: ComponentBase) -> List[Point]:
    control_points: List[ControlPoint] = component.get_control_points()
    if not control_points:
        return []
    local = np.array([(cp.x, cp.y) for cp in control_points], dtype=float)
    absolute = transform_points(local, component.placement)
    return [
        Point(
            point_id=PointId(component.instance_id, index),
            x=float(absolute[index, 0]),
            y=float(absolute[index, 1]),
            sticky=cp.sticky,
            name=cp.name,
            component_name=component.name,
        )
        for index, cp in enumerate(control_points)
    ]


def build_point_registry(components: Iterable[ComponentBase]) -> PointRegistry:
    """
    Builds the registry for an ordered collection of components.

    Raises:
        ComponentError: If two components share an instance id, since point
                        identity would then be ambiguous.
    """
    points: List[Point] = []
    seen_ids = set()
    component_count = 0
    for component in components:
        if component.instance_id in seen_ids:
            raise ComponentError(
                component_id=component.instance_id,
                details="Another component in the layout already uses this id; point identities would collide.",
                component_type=component.component_type,
            )
        seen_ids.add(component.instance_id)
        component_count += 1
        points.extend(_resolve_component(component))
    registry = PointRegistry(points)
    logger.debug(f"Point registry built: {len(registry)} points from {component_count} components.")
    return registry
