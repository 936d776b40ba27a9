# tests/test_validation.py
import logging

import pytest

from netlist_core.components import Resistor, Wire
from netlist_core.validation import (
    LayoutIssueCode, LayoutValidationError, LayoutValidator, ValidationIssueLevel
)


def codes(issues):
    return [(issue.level, issue.code) for issue in issues]


class TestLayoutValidator:

    def test_clean_layout_has_no_issues(self, resistor_chain):
        assert LayoutValidator(resistor_chain).validate() == []

    def test_duplicate_ids_are_errors(self, make_pad):
        issues = LayoutValidator([make_pad("P1", 0, 0), make_pad("P1", 1, 0), make_pad("P1", 2, 0)]).validate()
        assert codes(issues) == [(ValidationIssueLevel.ERROR, "ID_DUPLICATE")]
        assert issues[0].component_id == "P1"
        assert issues[0].details == {"count": 3}

    def test_duplicate_display_names_are_warnings(self, make_pad, caplog):
        components = [make_pad("P1", 0, 0, name="GND"), make_pad("P2", 1, 0, name="GND")]
        with caplog.at_level(logging.WARNING):
            issues = LayoutValidator(components).validate()
        assert codes(issues) == [(ValidationIssueLevel.WARNING, "LABEL_DUPLICATE_NAME")]
        assert issues[0].details["component_ids"] == ["P1", "P2"]
        assert "LABEL_DUPLICATE_NAME" in caplog.text

    def test_component_without_points_is_info(self, make_tab_switch):
        issues = LayoutValidator([make_tab_switch("S1", [], [("a", []), ("b", [])])]).validate()
        assert codes(issues) == [(ValidationIssueLevel.INFO, "GEOM_NO_POINTS")]

    def test_single_position_switch_is_info(self, make_tab_switch):
        issues = LayoutValidator([make_tab_switch("S1", [(0, 0), (1, 0)], [("on", [[0, 1]])])]).validate()
        assert codes(issues) == [(ValidationIssueLevel.INFO, "SWITCH_SINGLE_POSITION")]

    def test_issue_messages_use_templates(self):
        message = LayoutIssueCode.ID_DUPLICATE.format_message(component_id="X", count=2)
        assert message == "Component id 'X' is used by 2 components; point identities would collide."

    def test_issue_string_includes_level_and_code(self, make_pad):
        (issue,) = LayoutValidator([make_pad("P1", 0, 0), make_pad("P1", 1, 0)]).validate()
        text = str(issue)
        assert text.startswith("[ERROR - ID_DUPLICATE]")
        assert "count=2" in text

    def test_validation_order_is_deterministic(self, make_pad, make_tab_switch):
        components = [
            make_tab_switch("S1", [(0, 0), (1, 0)], [("on", [[0, 1]])]),
            make_pad("P1", 0, 0, name="N"),
            make_pad("P2", 0, 0, name="N"),
            Wire("W1", points=[(0, 0), (1, 0)]),
            Wire("W1", points=[(2, 0), (3, 0)]),
        ]
        assert [i.code for i in LayoutValidator(components).validate()] == [
            "ID_DUPLICATE", "LABEL_DUPLICATE_NAME", "SWITCH_SINGLE_POSITION",
        ]


class TestLayoutValidationError:

    def test_keeps_only_error_level_issues(self, make_pad):
        issues = LayoutValidator([
            make_pad("P1", 0, 0), make_pad("P1", 1, 0), make_pad("P2", 2, 0, name="P1"),
        ]).validate()
        error = LayoutValidationError(issues)
        assert [i.code for i in error.issues] == ["ID_DUPLICATE"]
        assert "1 error(s)" in str(error)

    def test_diagnostic_report_names_the_component(self, make_pad):
        issues = LayoutValidator([make_pad("P1", 0, 0), make_pad("P1", 1, 0)]).validate()
        report = LayoutValidationError(issues).get_diagnostic_report()
        assert "Layout Validation Error" in report
        assert "Component:      P1" in report

    def test_resistor_names_can_repeat_ids_cannot(self):
        components = [Resistor("R1", name="R", points=[(0, 0), (1, 0)]), Resistor("R2", name="R", points=[(2, 0), (3, 0)])]
        issues = LayoutValidator(components).validate()
        assert all(issue.level != ValidationIssueLevel.ERROR for issue in issues)
        with pytest.raises(LayoutValidationError):
            raise LayoutValidationError(LayoutValidator([components[0], components[0]]).validate())
