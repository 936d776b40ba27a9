# src/netlist_core/components/switches.py
"""
Switch components. Every class here reports `PositionDependent` continuity;
the extraction engine enumerates their positions and asks the predicate which
point pairs are connected in each one.
"""

import logging
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..data_structures import ControlPoint
from .base import ComponentBase, register_component
from .base_enums import PropertyKind
from .capabilities import IContinuityProvider, provides
from .continuity import Continuity, IndexPair, PositionDependent, normalize_pairs
from .exceptions import ComponentError


logger = logging.getLogger(__name__)


def _parse_choice(component: ComponentBase, prop: str, enum_cls) -> Enum:
    raw = component.properties[prop]
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(str(raw))
    except ValueError:
        raise ComponentError(
            component_id=component.instance_id,
            details=f"Property '{prop}' has unknown value '{raw}'. Allowed values: {[m.value for m in enum_cls]}.",
            component_type=component.component_type,
        ) from None


class ToggleType(Enum):
    """Contact arrangements of a miniature toggle switch."""
    SPST = "SPST"
    SPDT = "SPDT"
    DPDT = "DPDT"
    THREE_PDT = "3PDT"
    FOUR_PDT = "4PDT"
    FIVE_PDT = "5PDT"
    SPDT_OFF = "SPDT_off"
    DPDT_OFF = "DPDT_off"
    THREE_PDT_OFF = "3PDT_off"
    FOUR_PDT_OFF = "4PDT_off"
    FIVE_PDT_OFF = "5PDT_off"
    DP3T_MUSTANG = "DP3T_mustang"

    @property
    def poles(self) -> int:
        if self in (ToggleType.SPST, ToggleType.SPDT, ToggleType.SPDT_OFF):
            return 1
        if self in (ToggleType.DPDT, ToggleType.DPDT_OFF, ToggleType.DP3T_MUSTANG):
            return 2
        return int(self.value[0])

    @property
    def has_off(self) -> bool:
        return self.value.endswith("_off")

    @property
    def position_count(self) -> int:
        return 3 if self.has_off or self is ToggleType.DP3T_MUSTANG else 2


@register_component("MiniToggleSwitch")
class MiniToggleSwitch(ComponentBase):
    """
    A miniature toggle switch. Each pole has three lugs (two for SPST),
    indexed `pole * 3 + lug`. In position `k` lug `k` of every pole connects
    to lug `k + 1`; the `_off` variants disconnect everything in their third
    position, and the DP3T Mustang switch connects lug 0 to lug `k + 1`.
    """

    @classmethod
    def declare_properties(cls) -> Dict[str, PropertyKind]:
        return {"switch_type": PropertyKind.TEXT, "spacing": PropertyKind.LENGTH}

    @classmethod
    def property_defaults(cls) -> Dict[str, object]:
        return {"switch_type": "DPDT", "spacing": 0.2}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.switch_type: ToggleType = _parse_choice(self, "switch_type", ToggleType)

    def get_control_points(self) -> List[ControlPoint]:
        spacing = self.properties["spacing"]
        if self.switch_type is ToggleType.SPST:
            return [ControlPoint("1", 0.0, 0.0), ControlPoint("2", 0.0, spacing)]
        points = []
        for pole in range(self.switch_type.poles):
            for lug in range(3):
                index = pole * 3 + lug
                points.append(ControlPoint(str(index + 1), pole * spacing, lug * spacing))
        return points

    def position_name(self, position: int) -> str:
        if self.switch_type.has_off and position == 2:
            return "OFF"
        return f"ON{position + 1}"

    def are_points_connected(self, index1: int, index2: int, position: int) -> bool:
        switch_type = self.switch_type
        if switch_type is ToggleType.SPST:
            return position == 0
        if switch_type is ToggleType.DP3T_MUSTANG:
            return (index2 - index1) < 3 and index1 % 3 == 0 and index2 % 3 == position + 1
        if switch_type.has_off and position == 2:
            return False
        return (index2 - index1) < 3 and index1 % 3 == position and index2 % 3 == position + 1

    @provides(IContinuityProvider)
    class ContinuityProvider:
        def get_continuity(self, component: 'MiniToggleSwitch') -> Continuity:
            count = component.switch_type.position_count
            return PositionDependent(
                position_count=count,
                predicate=component.are_points_connected,
                position_names=tuple(component.position_name(k) for k in range(count)),
            )


class LeverType(Enum):
    """Lever (blade) switch variants."""
    DP3T = "DP3T"
    DP4T = "DP4T"
    DP3T_5POS = "DP3T_5pos"
    DP5T = "DP5T"
    FOUR_P5T = "4P5T"

    @property
    def point_count(self) -> int:
        return _LEVER_GEOMETRY[self][0]

    @property
    def position_count(self) -> int:
        return _LEVER_GEOMETRY[self][1]


# (point count, position count)
_LEVER_GEOMETRY = {
    LeverType.DP3T: (8, 3),
    LeverType.DP4T: (10, 4),
    LeverType.DP3T_5POS: (8, 5),
    LeverType.DP5T: (12, 5),
    LeverType.FOUR_P5T: (24, 5),
}


@register_component("LeverSwitch")
class LeverSwitch(ComponentBase):
    """
    A guitar lever switch. Lugs run in a single column; the common lugs and
    the lugs they reach in each position follow the physical wafer layout of
    each variant. Positions are named '1' through 'n'.
    """

    @classmethod
    def declare_properties(cls) -> Dict[str, PropertyKind]:
        return {"lever_type": PropertyKind.TEXT, "spacing": PropertyKind.LENGTH}

    @classmethod
    def property_defaults(cls) -> Dict[str, object]:
        return {"lever_type": "DP3T", "spacing": 0.1}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.lever_type: LeverType = _parse_choice(self, "lever_type", LeverType)

    def get_control_points(self) -> List[ControlPoint]:
        spacing = self.properties["spacing"]
        return [ControlPoint(str(i + 1), 0.0, i * spacing) for i in range(self.lever_type.point_count)]

    def are_points_connected(self, index1: int, index2: int, position: int) -> bool:
        lever_type = self.lever_type
        if lever_type is LeverType.DP3T:
            return (index1 == 1 and index2 == index1 + 2 * (position + 1)) or \
                (index2 == 6 and index2 == index1 + 2 * (3 - position))
        if lever_type is LeverType.DP4T:
            return (index1 == 1 and index2 == index1 + 2 * (position + 1)) or \
                (index2 == 8 and index2 == index1 + 2 * (4 - position))
        if lever_type is LeverType.DP3T_5POS:
            if position % 2 == 0:
                return (index1 == 1 and index2 == index1 + position + 2) or \
                    (index2 == 6 and index2 == index1 + 6 - position)
            return (index2 == 6 and (index1 == 2 or (index1 == 0 and position == 1) or (index1 == 4 and position == 3))) or \
                (index1 == 1 and (index2 == 5 or (index2 == 3 and position == 1) or (index2 == 7 and position == 3)))
        if lever_type is LeverType.DP5T:
            return (index1 == 0 or index2 == 11) and index2 - index1 == position + 1
        if lever_type is LeverType.FOUR_P5T:
            return (index1 in (0, 12) or index2 in (11, 23)) and index2 - index1 == position + 1
        return False

    @provides(IContinuityProvider)
    class ContinuityProvider:
        def get_continuity(self, component: 'LeverSwitch') -> Continuity:
            count = component.lever_type.position_count
            return PositionDependent(
                position_count=count,
                predicate=component.are_points_connected,
                position_names=tuple(str(k + 1) for k in range(count)),
            )


@register_component("GuitarToggleSwitch")
class GuitarToggleSwitch(ComponentBase):
    """
    A three-way pickup selector with four lugs. Lug 1 is the common; Treble
    joins lugs 1-2, Rhythm joins lugs 2-3, Middle joins all three.
    """
    POSITION_NAMES = ("Treble", "Middle", "Rhythm")

    @classmethod
    def declare_properties(cls) -> Dict[str, PropertyKind]:
        return {"spacing": PropertyKind.LENGTH}

    @classmethod
    def property_defaults(cls) -> Dict[str, object]:
        return {"spacing": 0.2}

    def get_control_points(self) -> List[ControlPoint]:
        spacing = self.properties["spacing"]
        return [ControlPoint(str(i + 1), i * spacing, 0.0) for i in range(4)]

    @staticmethod
    def are_points_connected(index1: int, index2: int, position: int) -> bool:
        if position == 0:
            return index1 == 1 and index2 == 2
        if position == 1:
            return index1 > 0
        if position == 2:
            return index1 == 2 and index2 == 3
        return False

    @provides(IContinuityProvider)
    class ContinuityProvider:
        def get_continuity(self, component: 'GuitarToggleSwitch') -> Continuity:
            return PositionDependent(
                position_count=len(GuitarToggleSwitch.POSITION_NAMES),
                predicate=GuitarToggleSwitch.are_points_connected,
                position_names=GuitarToggleSwitch.POSITION_NAMES,
            )


@register_component("TabulatedSwitch")
class TabulatedSwitch(ComponentBase):
    """
    A switch described entirely by data: user-placed points and, for every
    position, a name and the list of point index pairs it connects.
    """

    def __init__(
        self,
        *args,
        positions: Optional[Sequence[Tuple[str, Sequence[Sequence[int]]]]] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        if not positions:
            raise ComponentError(
                component_id=self.instance_id,
                details="A tabulated switch needs at least one position.",
                component_type=self.component_type,
            )
        self.position_names: Tuple[str, ...] = tuple(str(name) for name, _ in positions)
        tables: List[FrozenSet[IndexPair]] = []
        point_count = len(self.explicit_points)
        for name, pairs in positions:
            try:
                table = frozenset(normalize_pairs(pairs))
            except (TypeError, ValueError) as e:
                raise ComponentError(
                    component_id=self.instance_id,
                    details=f"Position '{name}' has a malformed connection list {pairs!r}: {e}",
                    component_type=self.component_type,
                ) from e
            out_of_range = sorted(p for p in table if p[0] < 0 or p[1] >= point_count)
            if out_of_range:
                raise ComponentError(
                    component_id=self.instance_id,
                    details=(
                        f"Position '{name}' connects point indices {out_of_range}, "
                        f"but the switch only has {point_count} points (indices 0..{point_count - 1})."
                    ),
                    component_type=self.component_type,
                )
            tables.append(table)
        self._tables: Tuple[FrozenSet[IndexPair], ...] = tuple(tables)

    def get_control_points(self) -> List[ControlPoint]:
        return [ControlPoint(str(i + 1), x, y) for i, (x, y) in enumerate(self.explicit_points)]

    def are_points_connected(self, index1: int, index2: int, position: int) -> bool:
        return (index1, index2) in self._tables[position]

    @provides(IContinuityProvider)
    class ContinuityProvider:
        def get_continuity(self, component: 'TabulatedSwitch') -> Continuity:
            return PositionDependent(
                position_count=len(component.position_names),
                predicate=component.are_points_connected,
                position_names=component.position_names,
            )
