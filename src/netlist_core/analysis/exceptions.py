# src/netlist_core/analysis/exceptions.py
"""
Defines the diagnosable exception for analyzer failures.
"""
from dataclasses import dataclass

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class AnalyzerError(DiagnosableError):
    """
    Wraps an exception raised by one analyzer. `run_analyzers` records it as
    an `AnalyzerFailure` so that other analyzers, and the netlists themselves,
    are unaffected. The original exception is chained.
    """
    analyzer_name: str
    details: str

    def __str__(self) -> str:
        return f"Analyzer '{self.analyzer_name}' failed: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Netlist Analyzer Failure",
            details=str(self),
            suggestion="The extracted netlists are unaffected. Review the analyzer implementation and the chained traceback.",
            context={}
        )
