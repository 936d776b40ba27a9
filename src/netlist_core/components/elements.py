# src/netlist_core/components/elements.py
"""
Concrete implementations of the non-switching components: connectors (wires,
jumpers, solder pads), leaded two-terminal parts and terminal strips.
"""

import logging
from typing import Dict, List, Optional

from ..data_structures import ControlPoint
from .base import ComponentBase, register_component
from .base_enums import PropertyKind
from .capabilities import IContinuityProvider, IInternalLinkProvider, provides
from .continuity import AlwaysConnected, Continuity
from .exceptions import ComponentError


logger = logging.getLogger(__name__)


def _require_point_count(component: ComponentBase, minimum: int, maximum: Optional[int] = None):
    """Checks the number of explicit points a user-placed component was given."""
    count = len(component.explicit_points)
    if count < minimum or (maximum is not None and count > maximum):
        expected = f"exactly {minimum}" if maximum == minimum else (
            f"at least {minimum}" if maximum is None else f"between {minimum} and {maximum}"
        )
        raise ComponentError(
            component_id=component.instance_id,
            details=f"Expected {expected} points, got {count}.",
            component_type=component.component_type,
        )


@register_component("Wire")
class Wire(ComponentBase):
    """
    A zero-resistance connector through two or more user-placed points.
    Consecutive points are always connected, so the whole wire is one node.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        _require_point_count(self, 2)

    def get_control_points(self) -> List[ControlPoint]:
        return [ControlPoint(str(i + 1), x, y) for i, (x, y) in enumerate(self.explicit_points)]

    @provides(IContinuityProvider)
    class ContinuityProvider:
        def get_continuity(self, component: 'Wire') -> Continuity:
            count = len(component.explicit_points)
            return AlwaysConnected(tuple((i, i + 1) for i in range(count - 1)))


@register_component("Jumper")
class Jumper(Wire):
    """A two-point wire link."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        _require_point_count(self, 2, 2)


@register_component("SolderPad")
class SolderPad(ComponentBase):
    """A single sticky pad. It only joins whatever lands on top of it."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.explicit_points:
            self.explicit_points = [(0.0, 0.0)]
        _require_point_count(self, 1, 1)

    def get_control_points(self) -> List[ControlPoint]:
        x, y = self.explicit_points[0]
        return [ControlPoint("1", x, y)]


class LeadedComponent(ComponentBase):
    """
    Base for two-terminal parts placed by their lead ends. The leads are
    distinct nodes; the body links them only for path tracing.
    """
    lead_names = ("1", "2")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        _require_point_count(self, 2, 2)

    def get_control_points(self) -> List[ControlPoint]:
        return [
            ControlPoint(lead, x, y)
            for lead, (x, y) in zip(type(self).lead_names, self.explicit_points)
        ]

    @classmethod
    def declare_properties(cls) -> Dict[str, PropertyKind]:
        return {"value": PropertyKind.TEXT}

    @classmethod
    def property_defaults(cls) -> Dict[str, object]:
        return {"value": ""}

    @provides(IInternalLinkProvider)
    class InternalLinkProvider:
        def get_internal_link_name(self, component: 'LeadedComponent', index1: int, index2: int) -> Optional[str]:
            if {index1, index2} == {0, 1}:
                return component.name
            return None


@register_component("Resistor")
class Resistor(LeadedComponent):
    """An axial resistor."""
    pass


@register_component("Capacitor")
class Capacitor(LeadedComponent):
    """A two-lead capacitor."""
    pass


@register_component("Diode")
class Diode(LeadedComponent):
    """A diode; leads are named anode and cathode."""
    lead_names = ("A", "K")


@register_component("TerminalStrip")
class TerminalStrip(ComponentBase):
    """
    A strip of `terminal_count` terminals, each with two holes: one on the
    top row (indices 0..n-1) and one on the bottom row (indices n..2n-1).
    Hole `i` is always connected to hole `i + terminal_count`.
    """

    @classmethod
    def declare_properties(cls) -> Dict[str, PropertyKind]:
        return {
            "terminal_count": PropertyKind.COUNT,
            "pitch": PropertyKind.LENGTH,
            "row_spacing": PropertyKind.LENGTH,
        }

    @classmethod
    def property_defaults(cls) -> Dict[str, object]:
        return {"terminal_count": 10, "pitch": 0.3, "row_spacing": 0.5}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        count = self.properties["terminal_count"]
        if not isinstance(count, int) or isinstance(count, bool) or count < 1:
            raise ComponentError(
                component_id=self.instance_id,
                details=f"Property 'terminal_count' must be a positive integer, got {count!r}.",
                component_type=self.component_type,
            )

    @property
    def terminal_count(self) -> int:
        return self.properties["terminal_count"]

    def get_control_points(self) -> List[ControlPoint]:
        pitch = self.properties["pitch"]
        row_spacing = self.properties["row_spacing"]
        top = [ControlPoint(f"T{i + 1}", i * pitch, 0.0) for i in range(self.terminal_count)]
        bottom = [ControlPoint(f"B{i + 1}", i * pitch, row_spacing) for i in range(self.terminal_count)]
        return top + bottom

    @provides(IContinuityProvider)
    class ContinuityProvider:
        def get_continuity(self, component: 'TerminalStrip') -> Continuity:
            n = component.terminal_count
            return AlwaysConnected(tuple((i, i + n) for i in range(n)))
