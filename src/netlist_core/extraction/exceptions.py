# src/netlist_core/extraction/exceptions.py
"""
Defines custom, diagnosable exceptions specific to the extraction phase.

These represent failure modes that occur *after* a set of components has been
assembled and handed to the engine: an oversized configuration space, or an
unexpected failure in one of the extraction stages. Both inherit from
`DiagnosableError`, so the facade in `execution.py` can wrap them uniformly.
"""
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class ConfigurationOverflowError(DiagnosableError):
    """
    Raised before enumeration when the number of switch configurations (the
    product of all switch position counts) exceeds the configured limit.

    The caller can recover by raising `max_configurations`, choosing the
    "warn" overflow policy, or extracting with fewer switches.
    """
    switch_count: int
    configuration_count: int
    limit: int

    def __str__(self) -> str:
        return (
            f"{self.switch_count} switch(es) produce {self.configuration_count} configurations, "
            f"which exceeds the limit of {self.limit}."
        )

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Switch Configuration Space Too Large",
            details=str(self),
            suggestion=(
                "Increase 'max_configurations' in the extraction configuration, set "
                "'overflow_policy' to 'warn' to extract anyway, or reduce the number of "
                "multi-position switches in the layout."
            ),
            context={}
        )


@dataclass(eq=False)
class ExtractionError(DiagnosableError):
    """
    An internal, context-enriching exception for unexpected failures inside an
    extraction stage. The original exception is always chained.
    """
    stage: str
    details: str
    switch_setup: str = ""

    def __str__(self) -> str:
        return f"Extraction failed during {self.stage}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type=f"Extraction Failure ({self.stage})",
            details=self.details,
            suggestion="This may be a bug. Review the chained traceback for the root cause.",
            context={'switch_setup': self.switch_setup}
        )
