# src/netlist_core/extraction/__init__.py
"""
Public interface of the extraction package.
"""
import logging

logger = logging.getLogger(__name__)

# The configuration contract is imported first; the layout builder depends on it.
from .config import ExtractionConfig, ConfigParsingError, parse_extraction_config
from .exceptions import ConfigurationOverflowError, ExtractionError
from .results import Group, NetNode, Netlist, SwitchSetting
from .points import PointRegistry, build_point_registry, rotation_matrix, transform_points
from .coincidence import coincident, resolve_coincidence, snap_positions
from .switches import (
    Configuration, Switch, count_configurations, check_configuration_bound,
    describe_configuration, enumerate_configurations,
)
from .continuity import ContinuityResult, collect_continuity
from .partition import BasePartition, DisjointSet, Partition, build_base_partition, build_partition
from .assembler import assemble_netlist
from .engine import NetlistExtractor
from .execution import extract_netlists, extract_netlists_from_file

__all__ = [
    "ExtractionConfig",
    "ConfigParsingError",
    "parse_extraction_config",
    "ConfigurationOverflowError",
    "ExtractionError",
    "Group",
    "NetNode",
    "Netlist",
    "SwitchSetting",
    "PointRegistry",
    "build_point_registry",
    "rotation_matrix",
    "transform_points",
    "coincident",
    "resolve_coincidence",
    "snap_positions",
    "Configuration",
    "Switch",
    "count_configurations",
    "check_configuration_bound",
    "describe_configuration",
    "enumerate_configurations",
    "ContinuityResult",
    "collect_continuity",
    "BasePartition",
    "DisjointSet",
    "Partition",
    "build_base_partition",
    "build_partition",
    "assemble_netlist",
    "NetlistExtractor",
    "extract_netlists",
    "extract_netlists_from_file",
]
