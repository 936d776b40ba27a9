# src/netlist_core/extraction/results.py
"""
Defines the formal, immutable data contracts for extraction results.

A `Netlist` describes one switch configuration: every point of the layout
appears in exactly one `Group`, groups are sorted by their first member, and
members within a group are sorted by their canonical key. Equal inputs
therefore always produce equal (`==`) results.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union, TYPE_CHECKING

from ..data_structures import PointId

if TYPE_CHECKING:
    from ..components.base import ComponentBase


@dataclass(frozen=True)
class SwitchSetting:
    """
    The position of one switch within a configuration. `component_id` is the
    switch's identity; `switch_name` is only its display name and need not be
    unique.
    """
    component_id: str
    switch_name: str
    position: int
    position_name: str

    def __str__(self) -> str:
        return f"{self.switch_name}: {self.position_name}"


@dataclass(frozen=True)
class NetNode:
    """
    One point as it appears in a netlist.

    Attributes:
        point_id: Stable identity of the point.
        component_name: Display name of the owning component.
        point_name: Name of the point within its component.
        label: "<component name>.<point name>".
        component: The owning component. Excluded from equality, hashing and
                   repr; it is there so that analyzers can query capabilities.
    """
    point_id: PointId
    component_name: str
    point_name: str
    label: str
    component: Optional[ComponentBase] = field(default=None, compare=False, repr=False)

    @property
    def sort_key(self) -> Tuple[str, str, PointId]:
        """Case-insensitive label, then exact label, then point id."""
        return (self.label.lower(), self.label, self.point_id)

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Group:
    """A maximal set of points that are electrically connected in one configuration."""
    nodes: Tuple[NetNode, ...]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def __contains__(self, item: Union[PointId, str]) -> bool:
        if isinstance(item, PointId):
            return any(n.point_id == item for n in self.nodes)
        return any(n.label == item for n in self.nodes)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(n.label for n in self.nodes)

    @property
    def point_ids(self) -> Tuple[PointId, ...]:
        return tuple(n.point_id for n in self.nodes)

    @property
    def component_ids(self) -> Tuple[str, ...]:
        """Distinct owning component ids, in member order."""
        return tuple(dict.fromkeys(n.point_id.component_id for n in self.nodes))

    @property
    def first(self) -> NetNode:
        return self.nodes[0]

    def __str__(self) -> str:
        return " <-> ".join(self.labels)


@dataclass(frozen=True)
class Netlist:
    """
    The partition of all points for one switch configuration.

    Attributes:
        groups: Every group, sorted by first member.
        switch_settings: One setting per switch, in switch order.
    """
    groups: Tuple[Group, ...]
    switch_settings: Tuple[SwitchSetting, ...] = ()

    @property
    def configuration(self) -> Tuple[int, ...]:
        return tuple(s.position for s in self.switch_settings)

    @property
    def switch_setup_description(self) -> str:
        """E.g. "SW1: Middle, SW2: B"; empty with no switches."""
        return ", ".join(str(s) for s in self.switch_settings)

    @property
    def point_count(self) -> int:
        return sum(len(g) for g in self.groups)

    def multi_point_groups(self) -> Tuple[Group, ...]:
        """Groups with at least two members, the ones that actually connect something."""
        return tuple(g for g in self.groups if len(g) > 1)

    def find_group(self, item: Union[PointId, str]) -> Optional[Group]:
        """The group containing a point id or a node label, or None."""
        for group in self.groups:
            if item in group:
                return group
        return None

    def connected(self, a: Union[PointId, str], b: Union[PointId, str]) -> bool:
        group = self.find_group(a)
        return group is not None and b in group

    def __str__(self) -> str:
        header = self.switch_setup_description or "(no switches)"
        lines = [f"Netlist [{header}]"]
        lines.extend(f"  {group}" for group in self.groups)
        return "\n".join(lines)
