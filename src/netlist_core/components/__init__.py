# src/netlist_core/components/__init__.py
import logging
logger = logging.getLogger(__name__)

# Import base first to define registry and decorator
from .base import ComponentBase, COMPONENT_REGISTRY, register_component
from .base_enums import ContinuityKind, PropertyKind
from .capabilities import ComponentCapability, IContinuityProvider, IInternalLinkProvider, provides
from .continuity import (
    AlwaysConnected, Continuity, NoContinuity, NO_CONTINUITY, PositionDependent, SwitchPredicate
)
from .exceptions import ComponentError
# Import concrete elements to trigger registration
from .elements import (
    Wire, Jumper, SolderPad, LeadedComponent, Resistor, Capacitor, Diode, TerminalStrip
)
from .switches import (
    MiniToggleSwitch, ToggleType, LeverSwitch, LeverType, GuitarToggleSwitch, TabulatedSwitch
)

logger.info(f"Available component types: {list(COMPONENT_REGISTRY.keys())}")

__all__ = [
    "ComponentBase",
    "COMPONENT_REGISTRY",
    "register_component",
    "ContinuityKind",
    "PropertyKind",
    "ComponentCapability",
    "IContinuityProvider",
    "IInternalLinkProvider",
    "provides",
    "AlwaysConnected",
    "Continuity",
    "NoContinuity",
    "NO_CONTINUITY",
    "PositionDependent",
    "SwitchPredicate",
    "ComponentError",
    "Wire",
    "Jumper",
    "SolderPad",
    "LeadedComponent",
    "Resistor",
    "Capacitor",
    "Diode",
    "TerminalStrip",
    "MiniToggleSwitch",
    "ToggleType",
    "LeverSwitch",
    "LeverType",
    "GuitarToggleSwitch",
    "TabulatedSwitch",
]
