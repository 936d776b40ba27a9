# src/netlist_core/components/exceptions.py
"""
Defines the custom, diagnosable exceptions for the components subsystem.
This is the single source of truth for component-related, diagnosable errors.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report

@dataclass(eq=False)
class ComponentError(DiagnosableError):
    """
    The canonical, diagnosable exception for malformed component data.

    Raised when a component definition is internally inconsistent: a switch
    with fewer than one position, a continuity pair or switch table that
    references a point index outside the component's point range, an unknown
    property, or a predicate that fails when evaluated. Ignoring any of these
    would silently corrupt the extracted netlist, so they fail fast.
    """
    component_id: str
    details: str
    component_type: Optional[str] = None

    def __str__(self) -> str:
        return f"Component '{self.component_id}': {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the definitive diagnostic report for a malformed component."""
        component = self.component_id
        if self.component_type:
            component = f"{self.component_id} ({self.component_type})"
        return format_diagnostic_report(
            error_type="Malformed Component Data",
            details=self.details,
            suggestion="Check the component's properties and its continuity or switch definition. Point indices must lie within the component's point range and every switch needs at least one position.",
            context={'component': component}
        )
