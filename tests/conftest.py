# tests/conftest.py
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from netlist_core.components import (
    GuitarToggleSwitch, Jumper, Resistor, SolderPad, TabulatedSwitch, Wire
)


# --- Component factories ---

@pytest.fixture
def make_pad() -> Callable[..., SolderPad]:
    """Returns a factory for single sticky points: make_pad('P1', x, y, name=None)."""
    def _make(component_id: str, x: float, y: float, name: str = None) -> SolderPad:
        return SolderPad(component_id, name=name, points=[(x, y)])
    return _make


@pytest.fixture
def make_tab_switch() -> Callable[..., TabulatedSwitch]:
    """Returns a factory for data-described switches: points plus (position name, pairs) rows."""
    def _make(component_id: str, points, positions, name: str = None) -> TabulatedSwitch:
        return TabulatedSwitch(component_id, name=name, points=points, positions=positions)
    return _make


@pytest.fixture
def three_way_switch(make_tab_switch) -> TabulatedSwitch:
    """Three points, three positions, each position joining one distinct pair."""
    return make_tab_switch(
        "S1",
        points=[(0.0, 0.0), (0.1, 0.0), (0.2, 0.0)],
        positions=[("A", [[0, 1]]), ("B", [[0, 2]]), ("C", [[1, 2]])],
    )


@pytest.fixture
def resistor_chain(make_pad) -> list:
    """Two resistors in series with a pad at each end and one isolated pad."""
    return [
        Resistor("R1", points=[(0.0, 0.0), (1.0, 0.0)]),
        Resistor("R2", points=[(1.0, 0.0), (2.0, 0.0)]),
        make_pad("A", 0.0, 0.0),
        make_pad("B", 2.0, 0.0),
        make_pad("C", 5.0, 5.0),
    ]


@pytest.fixture
def guitar_switch_with_wire() -> list:
    """A 3-way guitar switch whose lugs 3 and 4 are joined externally by a wire."""
    return [
        GuitarToggleSwitch("SW1"),
        Wire("W1", points=[(0.4, 0.0), (0.6, 0.0)]),
    ]


@pytest.fixture
def jumper_and_pad(make_pad) -> list:
    """A jumper whose second end lands on an unrelated pad."""
    return [
        Jumper("J1", points=[(0.0, 0.0), (1.0, 0.0)]),
        make_pad("P1", 1.0, 0.0),
    ]


# --- Layout description files ---

@pytest.fixture
def write_layout(tmp_path) -> Callable[..., Path]:
    """Writes dedented YAML to tmp_path and returns the file path."""
    def _write(content: str, filename: str = "layout.yaml") -> Path:
        path = tmp_path / filename
        path.write_text(textwrap.dedent(content))
        return path
    return _write


VALID_LAYOUT_YAML = """
layout_name: Tone Circuit
unit: inch
extraction:
  tolerance: 0.0001
  max_configurations: 100
components:
  - id: R1
    type: Resistor
    points: [[0, 0], ["2.54 mm", 0]]
    properties: {value: 10k}
  - id: P1
    type: SolderPad
    points: [[0.1, 0]]
  - id: SW1
    type: GuitarToggleSwitch
    name: Selector
    placement: {x: 1, y: 1, rotation: 90}
"""


@pytest.fixture
def valid_layout_file(write_layout) -> Path:
    return write_layout(VALID_LAYOUT_YAML)
