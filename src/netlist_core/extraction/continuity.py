# src/netlist_core/extraction/continuity.py
"""
Collects the internal continuity of every component.

Each component is asked for its `IContinuityProvider` capability and the
result is dispatched over the closed set of `Continuity` variants:

- `AlwaysConnected` pairs become unconditional CONTINUITY edges, shared by
  every configuration.
- `PositionDependent` components become `Switch`es; their edges are deferred
  until a configuration picks a position.
- `NoContinuity` contributes nothing.

Malformed declarations fail fast with a `ComponentError` naming the component.
"""
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..components.base import ComponentBase
from ..components.capabilities import IContinuityProvider
from ..components.continuity import AlwaysConnected, NoContinuity, PositionDependent
from ..components.exceptions import ComponentError
from ..data_structures import Edge, EdgeSource
from ..errors import FrameworkLogicError
from .points import PointRegistry
from .switches import Switch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContinuityResult:
    """
    Attributes:
        unconditional_edges: CONTINUITY edges that hold in every configuration.
        switches: Position-dependent components, in component order.
    """
    unconditional_edges: Tuple[Edge, ...]
    switches: Tuple[Switch, ...]


def _fail(component: ComponentBase, details: str) -> ComponentError:
    return ComponentError(
        component_id=component.instance_id, details=details, component_type=component.component_type
    )


def _validate_switch(component: ComponentBase, continuity: PositionDependent):
    count = continuity.position_count
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise _fail(component, f"A switch needs at least one position, but declares position_count={count!r}.")
    if len(continuity.position_names) != count:
        raise _fail(
            component,
            f"Switch declares {count} positions but {len(continuity.position_names)} position names: "
            f"{list(continuity.position_names)}.",
        )
    if not callable(continuity.predicate):
        raise _fail(component, f"Switch predicate must be callable, got {type(continuity.predicate).__name__}.")


def collect_continuity(components: Sequence[ComponentBase], registry: PointRegistry) -> ContinuityResult:
    """
    Builds the unconditional edges and the switch list for an extraction call.

    Every switch position is evaluated once here, so a predicate that raises
    is reported before any configuration is partitioned. The evaluated edges
    are memoized on the `Switch` and reused by the partition builder.

    Raises:
        ComponentError: For a switch with fewer than one position, a position
                        name count that does not match, an AlwaysConnected pair
                        outside the component's point range, or a predicate
                        that raises.
    """
    unconditional: List[Edge] = []
    switches: List[Switch] = []

    for component in components:
        provider = component.get_capability(IContinuityProvider)
        if provider is None:
            raise FrameworkLogicError(
                f"Component '{component.instance_id}' provides no IContinuityProvider; "
                f"ComponentBase always supplies a default."
            )
        continuity = provider.get_continuity(component)
        point_ids = [p.point_id for p in registry.points_of(component.instance_id)]
        point_count = len(point_ids)

        if isinstance(continuity, AlwaysConnected):
            for i, j in continuity.pairs:
                if not (0 <= i < point_count and 0 <= j < point_count):
                    raise _fail(
                        component,
                        f"Continuity pair ({i}, {j}) is outside the point range 0..{point_count - 1}.",
                    )
                if i == j:
                    continue
                unconditional.append(Edge(point_ids[i], point_ids[j], EdgeSource.CONTINUITY))
        elif isinstance(continuity, PositionDependent):
            _validate_switch(component, continuity)
            switch = Switch(component, continuity, point_ids)
            for position in range(switch.position_count):
                switch.edges_for_position(position)
            switches.append(switch)
        elif isinstance(continuity, NoContinuity):
            continue
        else:
            raise _fail(
                component,
                f"Unsupported continuity declaration of type {type(continuity).__name__}. "
                f"Expected AlwaysConnected, PositionDependent or NoContinuity.",
            )

    logger.debug(
        f"Continuity: {len(unconditional)} unconditional edge(s), {len(switches)} switch(es)."
    )
    return ContinuityResult(unconditional_edges=tuple(unconditional), switches=tuple(switches))
