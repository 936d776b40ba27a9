# src/netlist_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("Netlist Core package initialized.")

from .units import ureg, pint, Quantity, LENGTH_DIMENSIONALITY
from .data_structures import Layout, Placement, PointId
from .components import COMPONENT_REGISTRY, ComponentBase, ComponentError
from .parser import LayoutParser
# Extraction is imported before the builder; the builder uses its config module.
from .extraction import (
    ExtractionConfig, Netlist, NetlistExtractor, extract_netlists, extract_netlists_from_file
)
from .layout_builder import LayoutBuilder
from .cache import CoincidenceCache
from .analysis import run_analyzers
from .errors import NetlistCoreError, LayoutBuildError, ExtractionRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity", "LENGTH_DIMENSIONALITY",
    # Data Structures
    "Layout", "Placement", "PointId",
    # Components
    "COMPONENT_REGISTRY", "ComponentBase", "ComponentError",
    # Parser
    "LayoutParser",
    # Builder
    "LayoutBuilder",
    # Extraction
    "ExtractionConfig", "Netlist", "NetlistExtractor", "extract_netlists", "extract_netlists_from_file",
    "CoincidenceCache",
    # Analysis
    "run_analyzers",
    # Top-Level Errors (Actionable Diagnostics)
    "NetlistCoreError", "LayoutBuildError", "ExtractionRunError",
]
