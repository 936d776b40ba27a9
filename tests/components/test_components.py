# tests/components/test_components.py

import pytest

from netlist_core.components import (
    COMPONENT_REGISTRY, NO_CONTINUITY, AlwaysConnected, Capacitor, ComponentBase, ComponentError, Diode,
    GuitarToggleSwitch, IContinuityProvider, IInternalLinkProvider, Jumper, LeverSwitch, LeverType,
    MiniToggleSwitch, PositionDependent, PropertyKind, Resistor, SolderPad, TabulatedSwitch, TerminalStrip,
    ToggleType, Wire, register_component
)


class TestRegistry:

    def test_library_is_registered(self):
        expected = {
            "Wire", "Jumper", "SolderPad", "Resistor", "Capacitor", "Diode", "TerminalStrip",
            "MiniToggleSwitch", "LeverSwitch", "GuitarToggleSwitch", "TabulatedSwitch",
        }
        assert expected <= set(COMPONENT_REGISTRY)
        assert COMPONENT_REGISTRY["Resistor"] is Resistor
        assert Capacitor.component_type_str == "Capacitor"

    def test_non_component_class_is_rejected(self):
        with pytest.raises(TypeError, match="must inherit from ComponentBase"):
            register_component("NotAComponent")(object)

    def test_malformed_property_declaration_is_rejected(self, discovery_classes):
        base, _, _ = discovery_classes

        class BadProperties(base):
            @classmethod
            def declare_properties(cls):
                return {"length": "length"}

        with pytest.raises(TypeError, match="violates API contract"):
            register_component("BadProperties")(BadProperties)
        assert "BadProperties" not in COMPONENT_REGISTRY

    def test_defaults_must_be_declared(self, discovery_classes):
        base, _, _ = discovery_classes

        class StrayDefault(base):
            @classmethod
            def declare_properties(cls):
                return {"pitch": PropertyKind.LENGTH}

            @classmethod
            def property_defaults(cls):
                return {"pitch": 0.1, "colour": "red"}

        with pytest.raises(TypeError, match="undeclared properties"):
            register_component("StrayDefault")(StrayDefault)


class TestCapabilityDiscovery:

    def test_default_continuity_is_none(self, discovery_classes, continuity_of):
        base, _, _ = discovery_classes
        component = base("X1")
        assert continuity_of(component) is NO_CONTINUITY
        assert component.get_capability(IInternalLinkProvider) is None

    def test_subclass_overrides_and_grandchild_inherits(self, discovery_classes, continuity_of):
        _, child, grandchild = discovery_classes
        for cls in (child, grandchild):
            component = cls("X1")
            assert continuity_of(component) == AlwaysConnected(((0, 1),))
            assert component.get_capability(IInternalLinkProvider).get_internal_link_name(component, 0, 1) == "body"

    def test_capability_instances_are_cached(self):
        wire = Wire("W1", points=[(0, 0), (1, 0)])
        assert wire.get_capability(IContinuityProvider) is wire.get_capability(IContinuityProvider)


class TestComponentBase:

    def test_name_defaults_to_id(self):
        assert SolderPad("P1").name == "P1"
        assert SolderPad("P1", name="GND").name == "GND"

    def test_empty_id_is_rejected(self):
        with pytest.raises(ComponentError):
            SolderPad("")

    def test_malformed_points_are_rejected(self):
        with pytest.raises(ComponentError, match=r"must be an \(x, y\) pair"):
            Wire("W1", points=[(0, 0), (1,)])

    def test_unknown_property_is_rejected(self):
        with pytest.raises(ComponentError, match="Unknown property") as exc_info:
            Resistor("R1", points=[(0, 0), (1, 0)], properties={"tolerance": "5%"})
        assert "value" in exc_info.value.details

    def test_diagnostic_report_names_component_and_type(self):
        with pytest.raises(ComponentError) as exc_info:
            Jumper("J1", points=[(0, 0)])
        report = exc_info.value.get_diagnostic_report()
        assert "Malformed Component Data" in report
        assert "J1 (Jumper)" in report


class TestConnectors:

    def test_wire_chains_consecutive_points(self, continuity_of):
        wire = Wire("W1", points=[(0, 0), (1, 0), (1, 1), (2, 1)])
        assert [cp.name for cp in wire.get_control_points()] == ["1", "2", "3", "4"]
        assert continuity_of(wire).pairs == ((0, 1), (1, 2), (2, 3))

    def test_wire_needs_two_points(self):
        with pytest.raises(ComponentError, match="at least 2"):
            Wire("W1", points=[(0, 0)])

    def test_jumper_has_exactly_two_points(self, continuity_of):
        assert continuity_of(Jumper("J1", points=[(0, 0), (3, 0)])).pairs == ((0, 1),)
        with pytest.raises(ComponentError, match="exactly 2"):
            Jumper("J1", points=[(0, 0), (1, 0), (2, 0)])

    def test_solder_pad(self, continuity_of):
        pad = SolderPad("P1")
        (point,) = pad.get_control_points()
        assert (point.name, point.x, point.y, point.sticky) == ("1", 0.0, 0.0, True)
        assert continuity_of(pad) is NO_CONTINUITY
        with pytest.raises(ComponentError, match="exactly 1"):
            SolderPad("P1", points=[(0, 0), (1, 1)])


class TestLeadedComponents:

    def test_leads_are_not_connected(self, continuity_of):
        assert continuity_of(Resistor("R1", points=[(0, 0), (1, 0)])) is NO_CONTINUITY

    def test_internal_link_is_named_after_the_component(self):
        resistor = Resistor("R1", name="Rtone", points=[(0, 0), (1, 0)])
        links = resistor.get_capability(IInternalLinkProvider)
        assert links.get_internal_link_name(resistor, 1, 0) == "Rtone"
        assert links.get_internal_link_name(resistor, 0, 0) is None

    def test_lead_names(self):
        diode = Diode("D1", points=[(0, 0), (1, 0)])
        assert [cp.name for cp in diode.get_control_points()] == ["A", "K"]
        assert Capacitor("C1", points=[(0, 0), (1, 0)], properties={"value": "47n"}).properties["value"] == "47n"


class TestTerminalStrip:

    def test_default_geometry(self, continuity_of):
        strip = TerminalStrip("TS1")
        points = strip.get_control_points()
        assert len(points) == 20
        assert (points[0].name, points[10].name, points[19].name) == ("T1", "B1", "B10")
        assert (points[12].x, points[12].y) == pytest.approx((0.6, 0.5))
        assert continuity_of(strip).pairs == tuple((i, i + 10) for i in range(10))

    @pytest.mark.parametrize("count", [0, -2])
    def test_terminal_count_must_be_positive(self, count):
        with pytest.raises(ComponentError, match="terminal_count"):
            TerminalStrip("TS1", properties={"terminal_count": count})


class TestMiniToggleSwitch:

    @pytest.mark.parametrize("switch_type, points, positions", [
        ("SPST", 2, 2),
        ("SPDT", 3, 2),
        ("DPDT", 6, 2),
        ("3PDT", 9, 2),
        ("4PDT_off", 12, 3),
        ("5PDT_off", 15, 3),
        ("DP3T_mustang", 6, 3),
    ])
    def test_geometry_and_position_count(self, switch_type, points, positions, continuity_of):
        switch = MiniToggleSwitch("SW1", properties={"switch_type": switch_type})
        assert switch.point_count == points
        assert continuity_of(switch).position_count == positions

    def test_default_is_dpdt(self, switch_pairs):
        switch = MiniToggleSwitch("SW1")
        assert switch.switch_type is ToggleType.DPDT
        assert switch_pairs(switch, 0) == [(0, 1), (3, 4)]
        assert switch_pairs(switch, 1) == [(1, 2), (4, 5)]

    def test_lug_layout(self):
        points = MiniToggleSwitch("SW1").get_control_points()
        assert (points[4].name, points[4].x, points[4].y) == ("5", 0.2, 0.2)

    def test_spst(self, switch_pairs):
        switch = MiniToggleSwitch("SW1", properties={"switch_type": "SPST"})
        assert switch_pairs(switch, 0) == [(0, 1)]
        assert switch_pairs(switch, 1) == []

    def test_off_position(self, switch_pairs, continuity_of):
        switch = MiniToggleSwitch("SW1", properties={"switch_type": "DPDT_off"})
        assert continuity_of(switch).position_names == ("ON1", "ON2", "OFF")
        assert switch_pairs(switch, 2) == []

    def test_mustang_connects_from_the_first_lug(self, switch_pairs, continuity_of):
        switch = MiniToggleSwitch("SW1", properties={"switch_type": "DP3T_mustang"})
        assert continuity_of(switch).position_names == ("ON1", "ON2", "ON3")
        assert switch_pairs(switch, 0) == [(0, 1), (3, 4)]
        assert switch_pairs(switch, 1) == [(0, 2), (3, 5)]

    def test_unknown_type_lists_allowed_values(self):
        with pytest.raises(ComponentError, match="Allowed values") as exc_info:
            MiniToggleSwitch("SW1", properties={"switch_type": "DPDT_xyz"})
        assert "3PDT_off" in exc_info.value.details


class TestLeverSwitch:

    @pytest.mark.parametrize("lever_type, points, positions", [
        ("DP3T", 8, 3),
        ("DP4T", 10, 4),
        ("DP3T_5pos", 8, 5),
        ("DP5T", 12, 5),
        ("4P5T", 24, 5),
    ])
    def test_geometry_and_position_count(self, lever_type, points, positions, continuity_of):
        switch = LeverSwitch("L1", properties={"lever_type": lever_type})
        assert switch.point_count == points
        continuity = continuity_of(switch)
        assert continuity.position_count == positions
        assert continuity.position_names == tuple(str(k + 1) for k in range(positions))

    def test_dp3t(self, switch_pairs):
        switch = LeverSwitch("L1")
        assert switch.lever_type is LeverType.DP3T
        assert [switch_pairs(switch, p) for p in range(3)] == [
            [(0, 6), (1, 3)],
            [(1, 5), (2, 6)],
            [(1, 7), (4, 6)],
        ]

    def test_dp4t_first_position(self, switch_pairs):
        assert switch_pairs(LeverSwitch("L1", properties={"lever_type": "DP4T"}), 0) == [(0, 8), (1, 3)]

    def test_dp3t_5pos_in_between_position(self, switch_pairs):
        switch = LeverSwitch("L1", properties={"lever_type": "DP3T_5pos"})
        assert switch_pairs(switch, 0) == [(0, 6), (1, 3)]
        assert switch_pairs(switch, 1) == [(0, 6), (1, 3), (1, 5), (2, 6)]

    def test_dp5t(self, switch_pairs):
        switch = LeverSwitch("L1", properties={"lever_type": "DP5T"})
        assert switch_pairs(switch, 0) == [(0, 1), (10, 11)]
        assert switch_pairs(switch, 4) == [(0, 5), (6, 11)]

    def test_4p5t(self, switch_pairs):
        switch = LeverSwitch("L1", properties={"lever_type": "4P5T"})
        assert switch_pairs(switch, 0) == [(0, 1), (10, 11), (12, 13), (22, 23)]


class TestGuitarToggleSwitch:

    def test_positions(self, switch_pairs, continuity_of):
        switch = GuitarToggleSwitch("SW1")
        assert continuity_of(switch).position_names == ("Treble", "Middle", "Rhythm")
        assert switch_pairs(switch, 0) == [(1, 2)]
        assert switch_pairs(switch, 1) == [(1, 2), (1, 3), (2, 3)]
        assert switch_pairs(switch, 2) == [(2, 3)]

    def test_spacing_property(self):
        points = GuitarToggleSwitch("SW1", properties={"spacing": 0.5}).get_control_points()
        assert [cp.x for cp in points] == [0.0, 0.5, 1.0, 1.5]


class TestTabulatedSwitch:

    def test_table_lookup(self, switch_pairs, continuity_of):
        switch = TabulatedSwitch(
            "K1", points=[(0, 0), (0, 1), (0, 2)],
            positions=[("left", [[1, 0]]), ("right", [[2, 1], [1, 2]])],
        )
        continuity = continuity_of(switch)
        assert isinstance(continuity, PositionDependent)
        assert continuity.position_names == ("left", "right")
        assert switch_pairs(switch, 0) == [(0, 1)]
        assert switch_pairs(switch, 1) == [(1, 2)]

    def test_needs_a_position(self):
        with pytest.raises(ComponentError, match="at least one position"):
            TabulatedSwitch("K1", points=[(0, 0)], positions=[])

    def test_pairs_must_reference_existing_points(self):
        with pytest.raises(ComponentError, match=r"indices \[\(0, 2\)\]"):
            TabulatedSwitch("K1", points=[(0, 0), (0, 1)], positions=[("on", [[0, 2]])])

    def test_malformed_pairs(self):
        with pytest.raises(ComponentError, match="malformed"):
            TabulatedSwitch("K1", points=[(0, 0), (0, 1)], positions=[("on", [[0]])])
