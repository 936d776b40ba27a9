# src/netlist_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class NetlistCoreError(Exception):
    """Base class for all custom, user-facing errors in netlist_core."""
    pass

class LayoutBuildError(NetlistCoreError):
    """
    Raised when turning a layout description into placed components fails for
    any reason, from parsing to property conversion. The message is a
    pre-formatted, user-friendly diagnostic report.
    """
    pass

class ExtractionRunError(NetlistCoreError):
    """
    Raised by the file-level extraction facade when netlist extraction fails
    after a successful build (validation, malformed component data, or an
    oversized configuration space). The message is a pre-formatted diagnostic
    report and the original exception is chained.
    """
    pass

class FrameworkLogicError(NetlistCoreError):
    """
    Raised when an internal contract between two parts of the engine is
    violated. This always indicates a bug in netlist_core rather than bad input.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Common concrete base class for all internal exceptions that are diagnosable.

    It is a real `Exception` (usable in `except` clauses) and declares
    `get_diagnostic_report` abstract, so every subclass must be able to explain
    itself to the user.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Malformed Component").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (component, source file,
                 switch setup, user input).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "============== netlist_core: Actionable Diagnostic Report ==============",
        f"Error Type:     {error_type}",
    ]
    if component := context.get('component'):
        lines.append(f"Component:      {component}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if switch_setup := context.get('switch_setup'):
        lines.append(f"Switch Setup:   {switch_setup}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("========================================================================")
    return "\n".join(lines)
