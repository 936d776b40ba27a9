# src/netlist_core/analysis/__init__.py
"""
Exposes the public interface of the analysis package.
"""
from .exceptions import AnalyzerError
from .base import AnalysisReport, AnalyzerFailure, INetlistAnalyzer, Summary, run_analyzers
from .tools import (
    Tree, TreeConnectionType, construct_tree_between, extract_component_groups, find_all_paths, find_group,
    find_groups, find_node, find_nodes, simplify
)
from .analyzers import CircuitCountAnalyzer, ShortedPinAnalyzer

__all__ = [
    "AnalyzerError",
    "AnalysisReport",
    "AnalyzerFailure",
    "INetlistAnalyzer",
    "Summary",
    "run_analyzers",
    "Tree",
    "TreeConnectionType",
    "construct_tree_between",
    "extract_component_groups",
    "find_all_paths",
    "find_group",
    "find_groups",
    "find_node",
    "find_nodes",
    "simplify",
    "CircuitCountAnalyzer",
    "ShortedPinAnalyzer",
]
