# src/netlist_core/validation/exceptions.py
"""
Defines the diagnosable exception raised when layout validation finds errors.
"""
from typing import List

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class LayoutValidationError(DiagnosableError):
    """
    Container for all error-level `ValidationIssue`s found in one validation
    pass, formatted into a single diagnostic report.
    """
    def __init__(self, issues: List[ValidationIssue]):
        """
        Args:
            issues: The complete list of issues found by the LayoutValidator.
                    Only those with a level of `ERROR` are kept.
        """
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        if not self.issues:
            summary_message = "LayoutValidationError was raised with no error-level issues."
        else:
            summary_message = (
                f"Layout validation failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {issue}" for issue in self.issues)
            )
        super().__init__(summary_message)

    def get_diagnostic_report(self) -> str:
        details = (
            f"One or more errors were found in the layout's components.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )
        context = {}
        if self.issues:
            context['component'] = self.issues[0].component_id or 'Multiple'
        return format_diagnostic_report(
            error_type="Layout Validation Error",
            details=details,
            suggestion="Review and correct all validation errors listed above before extracting.",
            context=context
        )
