# src/netlist_core/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

# The classes in this module define the Intermediate Representation (IR): the
# typed contract between the LayoutParser and the LayoutBuilder. Values are
# still raw (unit strings, bare numbers); conversion is the builder's job.


@dataclass(frozen=True)
class ParsedComponentData:
    """IR for one placed component of a layout description."""
    instance_id: str
    component_type: str
    source_yaml_path: Path
    name: Optional[str] = None
    raw_points: Optional[List[List[Any]]] = None
    raw_placement: Dict[str, Any] = field(default_factory=dict)
    raw_properties: Dict[str, Any] = field(default_factory=dict)
    # Only for data-described switches: [{name: ..., connections: [[i, j], ...]}, ...]
    raw_positions: Optional[List[Dict[str, Any]]] = None


@dataclass(frozen=True)
class ParsedLayout:
    """Top-level IR node representing a single parsed layout description file."""
    layout_name: str
    unit: str
    source_yaml_path: Path
    components: List[ParsedComponentData]
    raw_extraction_config: Optional[Dict[str, Any]] = None
