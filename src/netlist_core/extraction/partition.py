# src/netlist_core/extraction/partition.py
"""
The Partition Builder.

Unconditional edges (coincidence and AlwaysConnected continuity) are the same
for every configuration, so they are collapsed once into *base groups* with a
networkx graph. Each configuration then starts a fresh disjoint-set forest
over the base groups and unions only the active switch edges. Runs never share
mutable state.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import networkx as nx

from ..data_structures import Edge, PointId
from ..errors import FrameworkLogicError
from .points import PointRegistry
from .switches import Configuration, Switch

logger = logging.getLogger(__name__)


class DisjointSet:
    """
    Union-find over the integers `0..size-1`, with path halving and union by
    size. Membership is independent of the order of `union` calls; which
    element ends up as a root is not.
    """

    def __init__(self, size: int):
        self._parent: List[int] = list(range(size))
        self._size: List[int] = [1] * size

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, x: int) -> int:
        parent = self._parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(self, a: int, b: int) -> int:
        """Merges the sets of `a` and `b` and returns the surviving root."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return root_a
        if self._size[root_a] < self._size[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        self._size[root_a] += self._size[root_b]
        return root_a

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def groups(self) -> Dict[int, List[int]]:
        """Maps each root to its members in ascending order."""
        result: Dict[int, List[int]] = {}
        for x in range(len(self._parent)):
            result.setdefault(self.find(x), []).append(x)
        return result


@dataclass(frozen=True)
class BasePartition:
    """
    Points grouped by the unconditional edges alone.

    Attributes:
        group_of: For each registry row, the index of its base group.
        groups: Registry rows of each base group, ascending; groups ordered by
                their smallest row.
    """
    registry: PointRegistry
    group_of: Tuple[int, ...]
    groups: Tuple[Tuple[int, ...], ...]

    def group_index(self, point_id: PointId) -> int:
        return self.group_of[self.registry.index_of(point_id)]


@dataclass(frozen=True)
class Partition:
    """
    The partition for one configuration: registry row -> root. Roots are
    arbitrary representatives; only the induced grouping is meaningful.
    """
    registry: PointRegistry
    roots: Tuple[int, ...]

    def root_of(self, point_id: PointId) -> int:
        return self.roots[self.registry.index_of(point_id)]

    def connected(self, a: PointId, b: PointId) -> bool:
        return self.root_of(a) == self.root_of(b)

    def groups(self) -> List[List[PointId]]:
        """Point ids per group, in registry order; groups ordered by first member."""
        by_root: Dict[int, List[PointId]] = {}
        for row, root in enumerate(self.roots):
            by_root.setdefault(root, []).append(self.registry.points[row].point_id)
        return list(by_root.values())


def build_base_partition(registry: PointRegistry, unconditional_edges: Iterable[Edge]) -> BasePartition:
    """
    Collapses all unconditional edges into base groups using
    `networkx.connected_components`. Every point is a node, so isolated
    points become singleton groups.
    """
    graph = nx.Graph()
    graph.add_nodes_from(range(len(registry)))
    edge_count = 0
    for edge in unconditional_edges:
        if edge.a not in registry or edge.b not in registry:
            raise FrameworkLogicError(f"Edge {edge.a} - {edge.b} references a point missing from the registry.")
        graph.add_edge(registry.index_of(edge.a), registry.index_of(edge.b))
        edge_count += 1

    groups = sorted(tuple(sorted(component)) for component in nx.connected_components(graph))
    group_of = [0] * len(registry)
    for group_index, rows in enumerate(groups):
        for row in rows:
            group_of[row] = group_index
    logger.debug(f"Base partition: {len(registry)} points, {edge_count} unconditional edge(s), {len(groups)} base group(s).")
    return BasePartition(registry=registry, group_of=tuple(group_of), groups=tuple(groups))


def build_partition(base: BasePartition, switches: Sequence[Switch], configuration: Configuration) -> Partition:
    """
    Partitions all points for one configuration: a fresh DisjointSet over the
    base groups, plus the edges of each switch in its chosen position.
    """
    if len(switches) != len(configuration):
        raise FrameworkLogicError(
            f"Configuration {configuration} has {len(configuration)} entries for {len(switches)} switches."
        )
    forest = DisjointSet(len(base.groups))
    for switch, position in zip(switches, configuration):
        for edge in switch.edges_for_position(position):
            forest.union(base.group_index(edge.a), base.group_index(edge.b))

    # A point's root is the smallest row of the base group that represents its set.
    group_roots = [base.groups[forest.find(g)][0] for g in range(len(base.groups))]
    roots = tuple(group_roots[g] for g in base.group_of)
    return Partition(registry=base.registry, roots=roots)
