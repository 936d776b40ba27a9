# src/netlist_core/components/base.py

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Type

from ..data_structures import ControlPoint, Placement
from .base_enums import PropertyKind
from .capabilities import (
    ComponentCapability, TCapability, IContinuityProvider, provides
)
from .continuity import Continuity, NO_CONTINUITY
from .exceptions import ComponentError


logger = logging.getLogger(__name__)


class ComponentBase(ABC):
    """
    The abstract base class for all placed components.

    A component owns an ordered sequence of control points (in local
    coordinates), a placement in the layout, a display name used in netlist
    labels, and a set of capabilities queried by the extraction engine. The
    class itself knows nothing about coincidence, switches configurations or
    partitions.
    """
    component_type_str: ClassVar[str] = "BaseComponent"

    def __init__(
        self,
        instance_id: str,
        name: Optional[str] = None,
        placement: Optional[Placement] = None,
        properties: Optional[Dict[str, Any]] = None,
        points: Optional[Sequence[Sequence[float]]] = None,
    ):
        """
        Initializes the base attributes of a component instance.

        Args:
            instance_id: Unique id of this component within the layout (e.g. 'R1').
            name: Display name used in node labels. Defaults to `instance_id`.
            placement: Position, rotation and mirroring. Defaults to the origin.
            properties: Already-converted property values (lengths in layout
                        units, counts as ints). Missing properties take the
                        class defaults; unknown ones are rejected.
            points: Explicit local point coordinates, for components whose
                    points are placed by the user (wires, leaded parts).
        """
        if not isinstance(instance_id, str) or not instance_id:
            raise ComponentError(
                component_id=str(instance_id),
                details="Component id must be a non-empty string.",
                component_type=type(self).component_type_str,
            )
        self.instance_id: str = instance_id
        self.name: str = name if name else instance_id
        self.placement: Placement = placement if placement is not None else Placement()
        self.component_type: str = type(self).component_type_str
        self.properties: Dict[str, Any] = self._merge_properties(properties or {})
        self.explicit_points: List[Tuple[float, float]] = self._coerce_points(points)

        # Each capability object is created only once per instance, on first request.
        self._capability_cache: Dict[Type[ComponentCapability], ComponentCapability] = {}
        logger.debug(f"Initialized {type(self).__name__} '{self.instance_id}'")

    def _merge_properties(self, provided: Dict[str, Any]) -> Dict[str, Any]:
        declared = type(self).declare_properties()
        unknown = sorted(set(provided) - set(declared))
        if unknown:
            raise ComponentError(
                component_id=self.instance_id,
                details=f"Unknown propert{'y' if len(unknown) == 1 else 'ies'} {unknown}. Declared properties are: {sorted(declared)}.",
                component_type=self.component_type,
            )
        merged = dict(type(self).property_defaults())
        merged.update(provided)
        missing = sorted(p for p in declared if p not in merged)
        if missing:
            raise ComponentError(
                component_id=self.instance_id,
                details=f"Missing required propert{'y' if len(missing) == 1 else 'ies'} {missing}.",
                component_type=self.component_type,
            )
        return merged

    def _coerce_points(self, points: Optional[Sequence[Sequence[float]]]) -> List[Tuple[float, float]]:
        if points is None:
            return []
        coerced = []
        for i, pt in enumerate(points):
            try:
                x, y = pt
                coerced.append((float(x), float(y)))
            except (TypeError, ValueError) as e:
                raise ComponentError(
                    component_id=self.instance_id,
                    details=f"Point {i} must be an (x, y) pair of numbers, got {pt!r}.",
                    component_type=self.component_type,
                ) from e
        return coerced

    @provides(IContinuityProvider)
    class ContinuityProvider:
        """
        Default implementation of the IContinuityProvider capability: no
        internal continuity. Leads of ordinary parts are distinct nodes unless
        something external joins them.
        """
        def get_continuity(self, component: "ComponentBase") -> Continuity:
            return NO_CONTINUITY

    @classmethod
    def declare_capabilities(cls) -> Dict[Type[ComponentCapability], Type]:
        """
        Discovers the capabilities map by walking the class hierarchy (MRO)
        and looking for nested classes decorated with `@provides`. Classes
        earlier in the MRO win, so a subclass overrides its parents.

        Returns:
            A dictionary mapping a capability Protocol to the nested class that
            provides its implementation.
        """
        discovered_capabilities = {}
        for base_class in cls.__mro__:
            # Only the class's own namespace, so that inherited members do not
            # shadow a more specific implementation declared under another name.
            for member_obj in vars(base_class).values():
                protocol = getattr(member_obj, '_implements_capability', None)
                if protocol is not None and protocol not in discovered_capabilities:
                    discovered_capabilities[protocol] = member_obj
        return discovered_capabilities

    def get_capability(self, capability_type: Type[TCapability]) -> Optional[TCapability]:
        """
        Queries the component instance for a specific capability.

        Args:
            capability_type: The Protocol class representing the desired capability.

        Returns:
            An instance of the capability implementation if supported, otherwise `None`.
        """
        if capability_type in self._capability_cache:
            return self._capability_cache[capability_type]

        impl_class = type(self).declare_capabilities().get(capability_type)
        if impl_class:
            instance = impl_class()
            self._capability_cache[capability_type] = instance
            return instance

        return None

    @classmethod
    def declare_properties(cls) -> Dict[str, PropertyKind]:
        """Declare property names and how their raw values are converted."""
        return {}

    @classmethod
    def property_defaults(cls) -> Dict[str, Any]:
        """Default values for optional properties, already converted."""
        return {}

    @abstractmethod
    def get_control_points(self) -> List[ControlPoint]:
        """
        Returns the component's control points, in local coordinates, in index
        order. The index of a point in this list is its identity within the
        component and the index used by continuity declarations.
        """
        pass

    @property
    def point_count(self) -> int:
        return len(self.get_control_points())

    def __str__(self) -> str:
        return f"{type(self).__name__}('{self.instance_id}')"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(instance_id='{self.instance_id}', name='{self.name}')"


# --- Global Component Registry and Decorator ---

COMPONENT_REGISTRY: Dict[str, Type[ComponentBase]] = {}


def register_component(type_str: str):
    """
    A class decorator to register a component class in the global component
    registry, making it available to layout descriptions under `type_str`.
    """
    def decorator(cls: Type[ComponentBase]):
        if not isinstance(cls, type) or not issubclass(cls, ComponentBase):
            raise TypeError(f"Class {getattr(cls, '__name__', cls)} must inherit from ComponentBase.")

        try:
            props = cls.declare_properties()
            if not isinstance(props, dict) or not all(
                isinstance(k, str) and k and isinstance(v, PropertyKind) for k, v in props.items()
            ):
                raise TypeError(
                    f"Component class '{cls.__name__}' violates API contract. "
                    f"declare_properties() must return a Dict[str, PropertyKind], but returned: {props!r}."
                )
            defaults = cls.property_defaults()
            undeclared_defaults = sorted(set(defaults) - set(props))
            if undeclared_defaults:
                raise TypeError(
                    f"Component class '{cls.__name__}' violates API contract. "
                    f"property_defaults() names undeclared properties: {undeclared_defaults}."
                )
        except TypeError:
            raise
        except Exception as e:
            raise TypeError(
                f"A failure occurred while attempting to validate the API contract of "
                f"component class '{cls.__name__}': {e}"
            ) from e

        if type_str in COMPONENT_REGISTRY:
            logger.warning(f"Component type '{type_str}' is being redefined/overwritten.")
        cls.component_type_str = type_str
        COMPONENT_REGISTRY[type_str] = cls
        logger.debug(f"Registered component type '{type_str}' -> {cls.__name__}")
        return cls
    return decorator
