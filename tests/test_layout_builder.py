# tests/test_layout_builder.py
import pytest

from netlist_core.components import ComponentError, GuitarToggleSwitch, Resistor, TabulatedSwitch
from netlist_core.errors import LayoutBuildError
from netlist_core.extraction import ExtractionConfig
from netlist_core.layout_builder import LayoutBuilder
from netlist_core.parser import LayoutParser


@pytest.fixture
def build(write_layout):
    """Parses and builds a YAML snippet in one step."""
    def _build(content: str):
        return LayoutBuilder().build(LayoutParser().parse(write_layout(content)))
    return _build


class TestSuccessfulBuild:

    def test_components_are_instantiated_in_order(self, valid_layout_file):
        layout = LayoutBuilder().build(LayoutParser().parse(valid_layout_file))
        assert [type(c) for c in layout.components][0] is Resistor
        assert isinstance(layout.components[2], GuitarToggleSwitch)
        assert [c.instance_id for c in layout.components] == ["R1", "P1", "SW1"]
        assert layout.name == "Tone Circuit"
        assert layout.source_file_path == valid_layout_file.resolve()

    def test_lengths_are_converted_to_layout_unit(self, valid_layout_file):
        layout = LayoutBuilder().build(LayoutParser().parse(valid_layout_file))
        resistor = layout.components[0]
        assert resistor.explicit_points[1][0] == pytest.approx(0.1)
        assert resistor.properties["value"] == "10k"

    def test_placement_is_converted(self, valid_layout_file):
        switch = LayoutBuilder().build(LayoutParser().parse(valid_layout_file)).components[2]
        assert (switch.placement.x, switch.placement.y, switch.placement.rotation_deg) == (1.0, 1.0, 90.0)
        assert switch.name == "Selector"

    def test_extraction_block_becomes_config(self, valid_layout_file):
        config = LayoutBuilder().build(LayoutParser().parse(valid_layout_file)).extraction_config
        assert config == ExtractionConfig(tolerance=0.0001, max_configurations=100)

    def test_property_kinds(self, build):
        layout = build("""
        unit: mm
        components:
          - id: TS1
            type: TerminalStrip
            properties: {terminal_count: 4.0, pitch: "0.1 inch", row_spacing: 5}
        """)
        strip = layout.components[0]
        assert strip.properties == {"terminal_count": 4, "pitch": pytest.approx(2.54), "row_spacing": 5.0}
        assert isinstance(strip.properties["terminal_count"], int)
        assert strip.point_count == 8

    def test_angle_units(self, build):
        layout = build("""
        components:
          - {id: P1, type: SolderPad, placement: {rotation: "0.25 turn", mirrored: true}}
        """)
        placement = layout.components[0].placement
        assert placement.rotation_deg == pytest.approx(90.0)
        assert placement.mirrored is True

    def test_tabulated_switch_positions(self, build):
        layout = build("""
        components:
          - id: K1
            type: TabulatedSwitch
            points: [[0, 0], [0, 0.1]]
            positions:
              - {name: open, connections: []}
              - {name: closed, connections: [[1, 0]]}
        """)
        switch = layout.components[0]
        assert isinstance(switch, TabulatedSwitch)
        assert switch.position_names == ("open", "closed")
        assert switch.are_points_connected(0, 1, 1)


class TestBuildFailures:

    def test_unknown_component_type(self, build):
        with pytest.raises(LayoutBuildError, match="Unknown component type 'Flux'") as exc_info:
            build("""
            components:
              - {id: X1, type: Flux}
            """)
        assert isinstance(exc_info.value.__cause__, ComponentError)

    def test_unknown_property(self, build):
        with pytest.raises(LayoutBuildError, match="Unknown property"):
            build("""
            components:
              - {id: R1, type: Resistor, points: [[0, 0], [1, 0]], properties: {wattage: 2}}
            """)

    @pytest.mark.parametrize("count", ["2.5", "true"])
    def test_count_property_must_be_whole(self, build, count):
        with pytest.raises(LayoutBuildError, match="terminal_count"):
            build(f"""
            components:
              - {{id: TS1, type: TerminalStrip, properties: {{terminal_count: {count}}}}}
            """)

    def test_length_property_with_wrong_dimension(self, build):
        with pytest.raises(LayoutBuildError, match="spacing"):
            build("""
            components:
              - {id: SW1, type: GuitarToggleSwitch, properties: {spacing: "3 volt"}}
            """)

    def test_positions_on_a_fixed_switch(self, build):
        with pytest.raises(LayoutBuildError, match="positions"):
            build("""
            components:
              - id: SW1
                type: GuitarToggleSwitch
                positions: [{name: a, connections: []}]
            """)

    def test_point_count_checked_by_component(self, build):
        with pytest.raises(LayoutBuildError, match="Expected at least 2 points"):
            build("""
            components:
              - {id: W1, type: Wire, points: [[0, 0]]}
            """)

    def test_unit_must_be_a_length(self, build):
        with pytest.raises(LayoutBuildError, match="not a length unit"):
            build("""
            unit: second
            components:
              - {id: P1, type: SolderPad}
            """)

    def test_invalid_extraction_block(self, build):
        with pytest.raises(LayoutBuildError, match="Invalid Extraction Configuration"):
            build("""
            extraction: {tolerance: "2 kg"}
            components:
              - {id: P1, type: SolderPad}
            """)
