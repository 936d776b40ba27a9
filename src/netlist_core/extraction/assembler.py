# src/netlist_core/extraction/assembler.py
import logging
from typing import Dict, List, Optional, Sequence

from ..components.base import ComponentBase
from ..constants import NODE_LABEL_SEPARATOR
from .partition import Partition
from .points import PointRegistry
from .results import Group, NetNode, Netlist
from .switches import Configuration, Switch, describe_configuration

logger = logging.getLogger(__name__)


def assemble_netlist(
    registry: PointRegistry,
    partition: Partition,
    switches: Sequence[Switch],
    configuration: Configuration,
    components: Optional[Dict[str, ComponentBase]] = None,
) -> Netlist:
    """
    Turns a partition into a canonical Netlist.

    Points are grouped by root and the roots discarded. Nodes within a group
    are sorted by (lowercase label, label, point id) and groups by their first
    node, so the output depends only on the grouping, never on which element
    the union-find happened to choose as root. Singleton groups are kept.

    Args:
        components: Optional id -> component map, attached to each node for
                    analyzers that need capabilities.
    """
    by_root: Dict[int, List[NetNode]] = {}
    for row, point in enumerate(registry.points):
        component_id = point.point_id.component_id
        node = NetNode(
            point_id=point.point_id,
            component_name=point.component_name,
            point_name=point.name,
            label=f"{point.component_name}{NODE_LABEL_SEPARATOR}{point.name}",
            component=components.get(component_id) if components else None,
        )
        by_root.setdefault(partition.roots[row], []).append(node)

    groups = [Group(tuple(sorted(nodes, key=lambda n: n.sort_key))) for nodes in by_root.values()]
    groups.sort(key=lambda g: g.first.sort_key)

    netlist = Netlist(
        groups=tuple(groups),
        switch_settings=tuple(describe_configuration(switches, configuration)),
    )
    logger.debug(
        f"Assembled netlist [{netlist.switch_setup_description}]: {len(groups)} group(s), "
        f"{len(netlist.multi_point_groups())} connecting."
    )
    return netlist
