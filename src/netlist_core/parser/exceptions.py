# src/netlist_core/parser/exceptions.py
"""
Defines custom, diagnosable exceptions for the parsing and schema validation stage.

`ParsingError` covers file-level and syntax problems; `SchemaValidationError`
covers YAML that loads but does not have the structure of a layout
description. Both derive from `DiagnosableError`, so the layout builder and the
extraction facade can report them uniformly.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all YAML parsing and schema validation errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the layout description file.",
            context={}
        )


@dataclass(eq=False)
class ParsingError(BaseParsingError):
    """
    Raised when a file is missing or unreadable, or its content is not a YAML
    mapping at all.
    """
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass(eq=False)
class SchemaValidationError(BaseParsingError):
    """
    Raised when the YAML is syntactically valid but does not conform to the
    layout description schema (missing keys, invalid identifiers, duplicate
    component ids, malformed points).
    """
    errors: Dict[str, Any]
    file_path: Path

    def _error_lines(self, prefix: str):
        return [f"  - {prefix} '{k}': {v}" for k, v in sorted(self.errors.items(), key=lambda kv: str(kv[0]))]

    def __str__(self):
        return (
            f"YAML schema validation failed for file '{self.file_path}':\n"
            + "\n".join(self._error_lines("In field"))
        )

    def get_diagnostic_report(self) -> str:
        details = (
            "The structure of the YAML file does not conform to the layout description schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n" + "\n".join(self._error_lines("Field"))
        )
        return format_diagnostic_report(
            error_type="YAML Schema Validation Error",
            details=details,
            suggestion="Correct the specified fields. Check for invalid identifiers (e.g., using '-' or '.'), duplicate component ids, and points that are not [x, y] pairs.",
            context={'source_file': self.file_path}
        )
