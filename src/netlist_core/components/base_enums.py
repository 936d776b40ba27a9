# src/netlist_core/components/base_enums.py
from enum import Enum, auto


class ContinuityKind(Enum):
    """
    The closed set of ways a component can declare continuity between its own
    points, as queried by the extraction engine.
    """
    ALWAYS_CONNECTED = auto()    # Fixed index pairs, independent of any state.
    POSITION_DEPENDENT = auto()  # Switch-like: pairs depend on the selected position.
    NONE = auto()                # Nothing beyond geometric coincidence.


class PropertyKind(Enum):
    """How a raw property value from a layout description is converted."""
    LENGTH = "length"  # pint length, converted to layout units.
    COUNT = "count"    # Positive integer.
    TEXT = "text"      # Free text or enumeration member name.
    FLAG = "flag"      # Boolean.

    def __str__(self):
        return self.value
