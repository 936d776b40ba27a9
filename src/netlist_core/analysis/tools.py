# src/netlist_core/analysis/tools.py
"""
Query and transformation helpers for extracted netlists, shared by analyzers.

Nodes can be addressed by `PointId` or by label ("R1.1"). Netlists are frozen;
`simplify` returns a new Netlist.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

import networkx as nx

from ..components.capabilities import IInternalLinkProvider
from ..data_structures import PointId
from ..extraction.results import Group, NetNode, Netlist

logger = logging.getLogger(__name__)

NodeRef = Union[PointId, str]

#: One hop through a component: (component id, from index, to index, link name).
LinkStep = Tuple[str, int, int, str]


def find_group(netlist: Netlist, node: NodeRef) -> Optional[Group]:
    """The group containing `node`, or None if the netlist does not have it."""
    return netlist.find_group(node)


def find_node(netlist: Netlist, node: NodeRef) -> Optional[NetNode]:
    for group in netlist.groups:
        for n in group.nodes:
            if n.point_id == node or n.label == node:
                return n
    return None


def find_nodes(
    netlist: Netlist,
    component_types: Optional[Iterable[str]] = None,
    point_name: Optional[str] = None,
    belong_to: Optional[Iterable[str]] = None,
) -> List[NetNode]:
    """
    All nodes matching every given filter, in netlist order.

    Args:
        component_types: Registered type strings of the owning component.
        point_name: Point name, compared case-insensitively.
        belong_to: Owning component ids.
    """
    types = set(component_types) if component_types is not None else None
    owners = set(belong_to) if belong_to is not None else None
    wanted_name = point_name.lower() if point_name is not None else None
    result = []
    for group in netlist.groups:
        for n in group.nodes:
            if types is not None and (n.component is None or n.component.component_type not in types):
                continue
            if owners is not None and n.point_id.component_id not in owners:
                continue
            if wanted_name is not None and n.point_name.lower() != wanted_name:
                continue
            result.append(n)
    return result


def find_groups(netlist: Netlist, predicate: Callable[[NetNode], bool]) -> List[Group]:
    """Groups with at least one node satisfying `predicate`."""
    return [g for g in netlist.groups if any(predicate(n) for n in g.nodes)]


def _canonical_group(nodes: Iterable[NetNode]) -> Group:
    return Group(tuple(sorted(nodes, key=lambda n: n.sort_key)))


def simplify(netlist: Netlist, merge: Iterable[NodeRef] = (), purge: Iterable[NodeRef] = ()) -> Netlist:
    """
    Returns a simplified copy of `netlist`.

    Every group containing a node in `merge` is fused into one group, and the
    merge nodes themselves are dropped from it (typically the two ends of a
    component treated as a short). Nodes in `purge` are then removed from all
    groups; groups left empty disappear. The result is re-sorted canonically
    and keeps the original switch setup.
    """
    merge_refs: Set[NodeRef] = set(merge)
    purge_refs: Set[NodeRef] = set(purge)

    def matches(n: NetNode, refs: Set[NodeRef]) -> bool:
        return n.point_id in refs or n.label in refs

    kept: List[List[NetNode]] = []
    merged: List[NetNode] = []
    for group in netlist.groups:
        if any(matches(n, merge_refs) for n in group.nodes):
            merged.extend(n for n in group.nodes if not matches(n, merge_refs))
        else:
            kept.append(list(group.nodes))
    if merged:
        kept.append(merged)

    groups = []
    for nodes in kept:
        remaining = [n for n in nodes if not matches(n, purge_refs)]
        if remaining:
            groups.append(_canonical_group(remaining))
    groups.sort(key=lambda g: g.first.sort_key)
    return Netlist(groups=tuple(groups), switch_settings=netlist.switch_settings)


def extract_component_groups(netlists: Sequence[Netlist]) -> List[List[str]]:
    """
    Components that are wired together in at least one configuration.

    Builds a networkx graph whose nodes are component ids and whose edges join
    components sharing a group in any netlist, and returns its connected
    components as sorted id lists, ordered by first id.
    """
    graph = nx.Graph()
    for netlist in netlists:
        for group in netlist.groups:
            ids = group.component_ids
            graph.add_nodes_from(ids)
            graph.add_edges_from(zip(ids, ids[1:]))
    return sorted(sorted(component) for component in nx.connected_components(graph))


def _internal_links(node: NetNode) -> List[Tuple[int, str]]:
    """(other index, link name) for every point of the owner internally linked to `node`."""
    component = node.component
    if component is None:
        return []
    provider = component.get_capability(IInternalLinkProvider)
    if provider is None:
        return []
    links = []
    for other in range(component.point_count):
        if other == node.point_id.index:
            continue
        name = provider.get_internal_link_name(component, other, node.point_id.index)
        if name is not None:
            links.append((other, name))
    return links


def find_all_paths(netlist: Netlist, node_a: NodeRef, node_b: NodeRef) -> List[List[LinkStep]]:
    """
    Every simple path from `node_a` to `node_b` that hops between groups
    through components' internal links (e.g. through the body of a resistor).

    Each path is the list of component hops taken, in order; an empty path
    means the two nodes already share a group. Returns [] if either node is
    missing or no path exists.
    """
    start = find_node(netlist, node_a)
    target = find_node(netlist, node_b)
    if start is None or target is None:
        return []
    all_paths: List[List[LinkStep]] = []
    _walk(netlist, start.point_id, target.point_id, [], all_paths, set())
    logger.debug(f"Found {len(all_paths)} path(s) between {start.label} and {target.label}.")
    return all_paths


def _walk(
    netlist: Netlist,
    current: PointId,
    target: PointId,
    path: List[LinkStep],
    all_paths: List[List[LinkStep]],
    visited: Set[PointId],
):
    group = netlist.find_group(current)
    if group is None:
        return
    if target in group:
        all_paths.append(path)
        return
    visited = visited | set(group.point_ids)
    for n in group.nodes:
        for other_index, link_name in _internal_links(n):
            next_point = PointId(n.point_id.component_id, other_index)
            if next_point in visited:
                continue
            step = (n.point_id.component_id, n.point_id.index, other_index, link_name)
            _walk(netlist, next_point, target, path + [step], all_paths, visited)


class TreeConnectionType(Enum):
    """How the children of a `Tree` are joined."""
    LEAF = "leaf"
    SERIES = "series"
    PARALLEL = "parallel"


@dataclass(frozen=True)
class Tree:
    """
    The series/parallel structure of the internal links between two nodes.

    A LEAF carries one `LinkStep`. A SERIES tree with no children is a direct
    connection (both nodes in one group).
    """
    connection_type: TreeConnectionType
    children: Tuple['Tree', ...] = ()
    step: Optional[LinkStep] = None

    @classmethod
    def leaf(cls, step: LinkStep) -> 'Tree':
        return cls(TreeConnectionType.LEAF, step=step)

    def leaves(self) -> List[LinkStep]:
        """Every link step in the tree, left to right."""
        if self.connection_type is TreeConnectionType.LEAF:
            return [self.step]
        return [step for child in self.children for step in child.leaves()]

    def __str__(self) -> str:
        if self.connection_type is TreeConnectionType.LEAF:
            return self.step[3]
        separator = " + " if self.connection_type is TreeConnectionType.SERIES else " || "
        parts = []
        for child in self.children:
            text = str(child)
            if child.connection_type is not TreeConnectionType.LEAF and child.connection_type is not self.connection_type:
                text = f"({text})"
            parts.append(text)
        return separator.join(parts)


def _series(steps: Sequence[LinkStep]) -> Tree:
    if len(steps) == 1:
        return Tree.leaf(steps[0])
    return Tree(TreeConnectionType.SERIES, tuple(Tree.leaf(s) for s in steps))


def _common_prefix(paths: Sequence[Tuple[LinkStep, ...]]) -> Tuple[LinkStep, ...]:
    prefix = []
    for steps in zip(*paths):
        if any(s != steps[0] for s in steps[1:]):
            break
        prefix.append(steps[0])
    return tuple(prefix)


def _branch_groups(paths: Sequence[Tuple[LinkStep, ...]]) -> List[List[Tuple[LinkStep, ...]]]:
    """
    Groups paths that start with the same step; paths left on their own are
    then grouped by their last step. Empty paths always stand alone.
    """
    by_first: Dict[Optional[LinkStep], List[Tuple[LinkStep, ...]]] = {}
    groups: List[List[Tuple[LinkStep, ...]]] = []
    for path in paths:
        if not path:
            groups.append([path])
            continue
        by_first.setdefault(path[0], []).append(path)
    by_last: Dict[LinkStep, List[Tuple[LinkStep, ...]]] = {}
    for members in by_first.values():
        if len(members) > 1:
            groups.append(members)
        else:
            by_last.setdefault(members[0][-1], []).append(members[0])
    groups.extend(by_last.values())
    return groups


def _merge_paths(paths: Sequence[Tuple[LinkStep, ...]]) -> Tree:
    """Folds distinct paths between the same two nodes into one series/parallel tree."""
    paths = list(dict.fromkeys(paths))
    if len(paths) == 1:
        return _series(paths[0])
    prefix = _common_prefix(paths)
    trimmed = [p[len(prefix):] for p in paths]
    suffix = tuple(reversed(_common_prefix([tuple(reversed(p)) for p in trimmed])))
    middles = [p[:len(p) - len(suffix)] for p in trimmed]
    parallel = Tree(
        TreeConnectionType.PARALLEL,
        tuple(_merge_paths(group) for group in _branch_groups(middles)),
    )
    if not prefix and not suffix:
        return parallel
    return Tree(
        TreeConnectionType.SERIES,
        tuple(Tree.leaf(s) for s in prefix) + (parallel,) + tuple(Tree.leaf(s) for s in suffix),
    )


def construct_tree_between(netlist: Netlist, node_a: NodeRef, node_b: NodeRef) -> Optional[Tree]:
    """
    The series/parallel tree of internal links connecting `node_a` to
    `node_b`, built from `find_all_paths`. Steps shared by every path at its
    start or end are pulled out in series around a parallel section.

    Returns None if either node is missing or the nodes are not linked.
    """
    paths = find_all_paths(netlist, node_a, node_b)
    if not paths:
        return None
    return _merge_paths([tuple(p) for p in paths])
