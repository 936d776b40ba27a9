# src/netlist_core/cache/keys.py
"""
Centralizes the generation of cache keys, so that every caller fingerprints
the same inputs the same way.
"""
from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..extraction.points import PointRegistry


def create_coincidence_key(registry: PointRegistry, tolerance: float, snap_grid: Optional[float]) -> Tuple:
    """
    Creates the cache key for a coincidence result.

    Coincidence depends on nothing but point identity, absolute position,
    stickiness and the matching parameters, so the key is exactly those, in
    registry order. Positions are keyed by their exact float value (`repr`);
    a position that moved by any amount is a different geometry.
    """
    points = tuple(
        (p.point_id.component_id, p.point_id.index, repr(p.x), repr(p.y), p.sticky)
        for p in registry.points
    )
    return ("coincidence", repr(float(tolerance)), repr(snap_grid), points)
