# src/netlist_core/components/capabilities.py
"""
Defines the capability architecture for netlist_core components.

Capabilities are `typing.Protocol` contracts that the extraction engine and
the analysis tools query a component for, instead of requiring every
component to inherit a monolithic set of abstract methods. A component class
declares an implementation by nesting a class decorated with `@provides`.

Key elements:
- ComponentCapability: A marker protocol for all capabilities.
- IContinuityProvider: Reports which of a component's own points are
  electrically identical, as one of the `Continuity` variants.
- IInternalLinkProvider: Names the internal element that links two points of
  a component (e.g. the body of a resistor between its leads). Used by path
  tracing in the analysis tools; it does not affect extraction.
- @provides: A class decorator that registers a nested class as the
  implementation of a capability.
- TCapability: A TypeVar for precise type-hinting of capability queries.
"""

import logging
from typing import (
    Optional,
    Protocol,
    Type,
    TypeVar,
    TYPE_CHECKING,
    runtime_checkable,
)

from .continuity import Continuity

# Use TYPE_CHECKING to import ComponentBase only for type analysis,
# preventing a circular import at runtime.
if TYPE_CHECKING:
    from .base import ComponentBase

logger = logging.getLogger(__name__)


@runtime_checkable
class ComponentCapability(Protocol):
    """
    A marker protocol for all component capabilities. Any class that provides
    a specific functionality to the engine should conform to a protocol that
    inherits from this one.
    """

    pass


# TCapability is bound to ComponentCapability so that a request for
# `IContinuityProvider` is known by the type checker to return one.
TCapability = TypeVar("TCapability", bound=ComponentCapability)


@runtime_checkable
class IContinuityProvider(ComponentCapability, Protocol):
    """
    Defines the capability of a component to report its internal continuity.

    CONTRACT:
    1.  The returned value is one of `AlwaysConnected`, `PositionDependent` or
        `NoContinuity`. Anything else is rejected by the engine.
    2.  Indices refer to positions in `component.get_control_points()`.
    3.  For `PositionDependent`, the predicate is a pure function of the two
        indices and the position. It is evaluated with `index1 < index2`.
    """

    def get_continuity(
        self,
        component: "ComponentBase",  # The component instance provides context.
    ) -> Continuity:
        ...


@runtime_checkable
class IInternalLinkProvider(ComponentCapability, Protocol):
    """
    Defines the capability of a component to name the internal element that
    joins two of its points, e.g. 'R1' between the two leads of resistor R1.
    Returns None when the two points are not internally linked.
    """

    def get_internal_link_name(
        self,
        component: "ComponentBase",
        index1: int,
        index2: int,
    ) -> Optional[str]:
        ...


def provides(capability_protocol: Type[ComponentCapability]):
    """
    A class decorator to register a class as an implementation for a capability.

    The decorator attaches `_implements_capability` to the decorated class;
    `ComponentBase.declare_capabilities` uses it for discovery.

    Args:
        capability_protocol: The capability Protocol (e.g., IContinuityProvider)
                             that this class implements.
    """

    def decorator(cls: Type) -> Type:
        if not isinstance(capability_protocol, type) or not issubclass(capability_protocol, ComponentCapability):
            raise TypeError(
                f"Decorator argument for @provides must be a ComponentCapability "
                f"Protocol, but got {capability_protocol}."
            )
        cls._implements_capability = capability_protocol
        logger.debug(
            f"Class '{cls.__name__}' registered as providing capability '{capability_protocol.__name__}'."
        )
        return cls

    return decorator
