# src/netlist_core/parser/__init__.py
from .raw_data import ParsedComponentData, ParsedLayout
from .parser import LayoutParser
from .exceptions import ParsingError, SchemaValidationError

__all__ = [
    # IR Data Structures
    "ParsedComponentData",
    "ParsedLayout",
    # Parser and Exceptions
    "LayoutParser",
    "ParsingError",
    "SchemaValidationError",
]
