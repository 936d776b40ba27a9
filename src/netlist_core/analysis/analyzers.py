# src/netlist_core/analysis/analyzers.py
"""
Built-in netlist analyzers.
"""
import logging
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..components.base import ComponentBase
from ..components.capabilities import IContinuityProvider
from ..components.continuity import AlwaysConnected, PositionDependent
from ..extraction.partition import DisjointSet
from ..extraction.results import Netlist
from .base import Summary

logger = logging.getLogger(__name__)


def _internal_roots(component: ComponentBase, position: Optional[int]) -> List[int]:
    """
    Root of each of the component's point indices under its own continuity.
    For a switch, `position` selects the active connections; None means the
    position is unknown and the switch is treated as connecting nothing.
    """
    count = component.point_count
    forest = DisjointSet(count)
    continuity = component.get_capability(IContinuityProvider).get_continuity(component)
    if isinstance(continuity, AlwaysConnected):
        for i, j in continuity.pairs:
            if 0 <= i < count and 0 <= j < count:
                forest.union(i, j)
    elif isinstance(continuity, PositionDependent) and position is not None:
        for i in range(count):
            for j in range(i + 1, count):
                if continuity.predicate(i, j, position):
                    forest.union(i, j)
    return [forest.find(i) for i in range(count)]


class ShortedPinAnalyzer:
    """
    Reports groups that join two or more points of one component that the
    component itself does not connect, e.g. both leads of a resistor, or two
    switch lugs that are separate in the current position. One summary per
    netlist with at least one short.
    """
    name = "Shorted pins"

    def summarize(self, netlists: Sequence[Netlist]) -> List[Summary]:
        summaries = []
        for netlist in netlists:
            positions = {s.component_id: s.position for s in netlist.switch_settings}
            roots_cache: Dict[str, List[int]] = {}
            lines = []
            shorts: List[Tuple[str, Tuple[str, ...]]] = []
            for group in netlist.groups:
                by_component: Dict[str, list] = {}
                for node in group.nodes:
                    by_component.setdefault(node.point_id.component_id, []).append(node)
                for component_id, nodes in by_component.items():
                    if len(nodes) < 2 or nodes[0].component is None:
                        continue
                    component = nodes[0].component
                    if component_id not in roots_cache:
                        roots_cache[component_id] = _internal_roots(component, positions.get(component_id))
                    roots = roots_cache[component_id]
                    if len({roots[n.point_id.index] for n in nodes}) > 1:
                        labels = tuple(n.label for n in nodes)
                        shorts.append((component_id, labels))
                        lines.append(f"{component.name}: {', '.join(labels)} are shorted")
            if lines:
                summaries.append(Summary(
                    analyzer_name=self.name,
                    title=netlist.switch_setup_description or "(no switches)",
                    lines=tuple(lines),
                    data={'shorts': shorts},
                ))
        logger.debug(f"{self.name}: {len(summaries)} netlist(s) with shorts.")
        return summaries


class CircuitCountAnalyzer:
    """
    Counts, across all configurations, the connecting groups of each netlist
    and the number of distinct partitions the switches actually produce.
    """
    name = "Circuit count"

    def summarize(self, netlists: Sequence[Netlist]) -> List[Summary]:
        if not netlists:
            return []
        distinct: Dict[FrozenSet[FrozenSet], List[str]] = {}
        lines = []
        for netlist in netlists:
            key = frozenset(frozenset(g.point_ids) for g in netlist.multi_point_groups())
            distinct.setdefault(key, []).append(netlist.switch_setup_description)
            setup = netlist.switch_setup_description or "(no switches)"
            lines.append(f"{setup}: {len(netlist.multi_point_groups())} connected group(s)")
        lines.append(f"{len(distinct)} distinct circuit(s) across {len(netlists)} configuration(s)")
        return [Summary(
            analyzer_name=self.name,
            title=f"{len(distinct)} distinct circuit(s)",
            lines=tuple(lines),
            data={'configurations': len(netlists), 'distinct_circuits': len(distinct)},
        )]
