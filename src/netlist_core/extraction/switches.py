# src/netlist_core/extraction/switches.py
"""
The Switch Configuration Enumerator.

A configuration assigns one position index to every switch. The space is the
Cartesian product of `range(position_count)` over the switches in component
order, enumerated lexicographically with the first switch most significant.
Its size is checked against the configured bound *before* anything is
enumerated.
"""
import itertools
import logging
import math
from typing import Dict, Iterator, List, Sequence, Tuple

from ..components.base import ComponentBase
from ..components.continuity import PositionDependent
from ..components.exceptions import ComponentError
from ..constants import DEFAULT_OVERFLOW_POLICY, MAX_CONFIGURATIONS
from ..data_structures import Edge, EdgeSource, PointId
from .exceptions import ConfigurationOverflowError
from .results import SwitchSetting

logger = logging.getLogger(__name__)

#: One position index per switch, in switch order.
Configuration = Tuple[int, ...]


class Switch:
    """
    A component whose continuity is `PositionDependent`, paired with the point
    ids it owns. Edges per position are computed on first request and kept for
    the lifetime of this object, which is one extraction call.
    """

    def __init__(self, component: ComponentBase, continuity: PositionDependent, point_ids: Sequence[PointId]):
        self.component = component
        self.continuity = continuity
        self.point_ids: Tuple[PointId, ...] = tuple(point_ids)
        self._edges: Dict[int, Tuple[Edge, ...]] = {}

    @property
    def name(self) -> str:
        return self.component.name

    @property
    def position_count(self) -> int:
        return self.continuity.position_count

    def position_name(self, position: int) -> str:
        return self.continuity.position_name(position)

    def edges_for_position(self, position: int) -> Tuple[Edge, ...]:
        """
        The CONTINUITY edges active in `position`. The predicate is evaluated
        for every pair `index1 < index2` of the switch's points.

        Raises:
            ComponentError: If the predicate raises for any pair.
        """
        cached = self._edges.get(position)
        if cached is not None:
            return cached
        if not 0 <= position < self.position_count:
            raise IndexError(
                f"Position {position} out of range for switch '{self.name}' with {self.position_count} positions."
            )
        predicate = self.continuity.predicate
        edges = []
        for i, j in itertools.combinations(range(len(self.point_ids)), 2):
            try:
                connected = predicate(i, j, position)
            except Exception as e:
                raise ComponentError(
                    component_id=self.component.instance_id,
                    details=f"Switch predicate failed for points ({i}, {j}) in position {position}: {type(e).__name__}: {e}",
                    component_type=self.component.component_type,
                ) from e
            if connected:
                edges.append(Edge(self.point_ids[i], self.point_ids[j], EdgeSource.CONTINUITY, position))
        result = tuple(edges)
        self._edges[position] = result
        return result

    def __repr__(self) -> str:
        return f"Switch('{self.component.instance_id}', positions={self.position_count})"


def count_configurations(switches: Sequence[Switch]) -> int:
    """Size of the configuration space: product of position counts, 1 with no switches."""
    return math.prod(s.position_count for s in switches)


def check_configuration_bound(
    switches: Sequence[Switch],
    max_configurations: int = MAX_CONFIGURATIONS,
    overflow_policy: str = DEFAULT_OVERFLOW_POLICY,
) -> int:
    """
    Checks the configuration space against the bound and returns its size.

    Raises:
        ConfigurationOverflowError: If the size exceeds `max_configurations`
                                    and the policy is "error".
    """
    total = count_configurations(switches)
    if total > max_configurations:
        if overflow_policy == "warn":
            logger.warning(
                f"{len(switches)} switch(es) produce {total} configurations, above the limit of "
                f"{max_configurations}. Extracting anyway as requested by the 'warn' overflow policy."
            )
        else:
            raise ConfigurationOverflowError(
                switch_count=len(switches), configuration_count=total, limit=max_configurations
            )
    return total


def enumerate_configurations(
    switches: Sequence[Switch],
    max_configurations: int = MAX_CONFIGURATIONS,
    overflow_policy: str = DEFAULT_OVERFLOW_POLICY,
) -> Iterator[Configuration]:
    """
    Yields every configuration in lexicographic order. With zero switches it
    yields exactly one empty configuration. The bound is checked eagerly, on
    the call itself, not on first iteration.
    """
    total = check_configuration_bound(switches, max_configurations, overflow_policy)
    logger.debug(f"Enumerating {total} configuration(s) over {len(switches)} switch(es).")
    return itertools.product(*(range(s.position_count) for s in switches))


def describe_configuration(switches: Sequence[Switch], configuration: Configuration) -> List[SwitchSetting]:
    """Pairs each switch with its position in `configuration`."""
    if len(switches) != len(configuration):
        raise ValueError(
            f"Configuration {configuration} has {len(configuration)} entries for {len(switches)} switches."
        )
    return [
        SwitchSetting(
            component_id=switch.component.instance_id,
            switch_name=switch.name,
            position=position,
            position_name=switch.position_name(position),
        )
        for switch, position in zip(switches, configuration)
    ]
