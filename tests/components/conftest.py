# tests/components/conftest.py

"""
Test configuration and fixtures for the component subsystem.

This file provides:

1.  **Continuity helpers:** fixtures that evaluate a component's declared
    continuity into plain index pairs, so that the tests read as tables of
    which lugs a switch joins in which position.

2.  **Helper components:** small base classes and inheriting components used
    to verify the capability discovery's MRO traversal and override rules.
    They are deliberately not registered, so they never leak into
    `COMPONENT_REGISTRY`.
"""

import itertools
from typing import Callable, List, Optional, Tuple

import pytest

from netlist_core.components import (
    AlwaysConnected, ComponentBase, IContinuityProvider, IInternalLinkProvider, PositionDependent, provides
)
from netlist_core.data_structures import ControlPoint


# --- Helper components for capability discovery ---

class TwoPointBase(ComponentBase):
    """Two fixed points with the default (empty) continuity."""
    component_type_str = "TwoPointBase"

    def get_control_points(self) -> List[ControlPoint]:
        return [ControlPoint("a", 0.0, 0.0), ControlPoint("b", 1.0, 0.0)]


class LinkedTwoPoint(TwoPointBase):
    """Overrides continuity and adds an internal link."""
    component_type_str = "LinkedTwoPoint"

    @provides(IContinuityProvider)
    class ContinuityProvider:
        def get_continuity(self, component):
            return AlwaysConnected(((0, 1),))

    @provides(IInternalLinkProvider)
    class InternalLinkProvider:
        def get_internal_link_name(self, component, index1, index2) -> Optional[str]:
            return "body"


class InheritingTwoPoint(LinkedTwoPoint):
    """Declares nothing itself; everything comes from its parents."""
    component_type_str = "InheritingTwoPoint"


# --- Continuity helpers ---

@pytest.fixture
def switch_pairs() -> Callable[[ComponentBase, int], List[Tuple[int, int]]]:
    """Returns a function listing the (i, j), i < j, pairs a switch joins in one position."""
    def _pairs(component: ComponentBase, position: int) -> List[Tuple[int, int]]:
        continuity = component.get_capability(IContinuityProvider).get_continuity(component)
        assert isinstance(continuity, PositionDependent)
        return [
            (i, j)
            for i, j in itertools.combinations(range(component.point_count), 2)
            if continuity.predicate(i, j, position)
        ]
    return _pairs


@pytest.fixture
def continuity_of() -> Callable[[ComponentBase], object]:
    def _continuity(component: ComponentBase):
        return component.get_capability(IContinuityProvider).get_continuity(component)
    return _continuity


@pytest.fixture
def discovery_classes():
    """The helper component hierarchy: (base, overriding child, inheriting grandchild)."""
    return TwoPointBase, LinkedTwoPoint, InheritingTwoPoint
