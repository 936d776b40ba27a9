# src/netlist_core/extraction/coincidence.py
"""
The Coincidence Resolver: finds pairs of sticky points from different
components that occupy the same spot.

Geometry is expected to be grid-aligned already, so exact equality (after the
optional snap) is the primary rule; `tolerance` only absorbs floating-point
drift. Positions are quantized into square cells of edge
`max(tolerance, MIN_BUCKET_SIZE)` and each point is compared only against the
points in its own and the eight neighbouring cells.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..constants import DEFAULT_COINCIDENCE_TOLERANCE, MIN_BUCKET_SIZE
from ..data_structures import Edge, EdgeSource, Point
from .points import PointRegistry

logger = logging.getLogger(__name__)

_NEIGHBOUR_OFFSETS = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)]


def snap_positions(positions: np.ndarray, snap_grid: Optional[float]) -> np.ndarray:
    """Rounds an (N, 2) position array to the nearest multiple of `snap_grid`."""
    if snap_grid is None:
        return positions
    return np.round(positions / snap_grid) * snap_grid


def coincident(
    p: Point,
    q: Point,
    tolerance: float = DEFAULT_COINCIDENCE_TOLERANCE,
    snap_grid: Optional[float] = None,
) -> bool:
    """
    The coincidence relation on a single pair of points: the same point, or
    both sticky and within `tolerance` on each axis after snapping. Symmetric
    and reflexive. The component check lives in `resolve_coincidence`.
    """
    if p.point_id == q.point_id:
        return True
    if not (p.sticky and q.sticky):
        return False
    pos = snap_positions(np.array([p.position, q.position], dtype=float), snap_grid)
    dx, dy = np.abs(pos[0] - pos[1])
    return bool(dx <= tolerance and dy <= tolerance)


def resolve_coincidence(
    registry: PointRegistry,
    tolerance: float = DEFAULT_COINCIDENCE_TOLERANCE,
    snap_grid: Optional[float] = None,
) -> List[Edge]:
    """
    Returns one COINCIDENCE edge for every unordered pair of coincident sticky
    points belonging to different components. Edges come out in registry
    order of their first endpoint, then of their second. Pure function.
    """
    sticky_rows = [k for k, p in enumerate(registry.points) if p.sticky]
    if len(sticky_rows) < 2:
        return []

    positions = snap_positions(registry.positions[sticky_rows], snap_grid)
    cell = max(tolerance, MIN_BUCKET_SIZE)
    cells = np.floor(positions / cell).astype(np.int64)

    buckets: Dict[Tuple[int, int], List[int]] = defaultdict(list)
    for local, (cx, cy) in enumerate(cells):
        buckets[(int(cx), int(cy))].append(local)
    logger.debug(f"Coincidence: {len(sticky_rows)} sticky points in {len(buckets)} buckets (cell={cell}).")

    pairs = set()
    for (cx, cy), members in buckets.items():
        for dx, dy in _NEIGHBOUR_OFFSETS:
            neighbours = buckets.get((cx + dx, cy + dy))
            if not neighbours:
                continue
            for i in members:
                for j in neighbours:
                    if j <= i:
                        continue
                    a, b = sticky_rows[i], sticky_rows[j]
                    pa, pb = registry.points[a], registry.points[b]
                    if pa.point_id.component_id == pb.point_id.component_id:
                        continue
                    delta = np.abs(positions[i] - positions[j])
                    if delta[0] <= tolerance and delta[1] <= tolerance:
                        pairs.add((a, b))

    edges = [
        Edge(registry.points[a].point_id, registry.points[b].point_id, EdgeSource.COINCIDENCE)
        for a, b in sorted(pairs)
    ]
    logger.debug(f"Coincidence: found {len(edges)} coincident pairs.")
    return edges
