# src/netlist_core/layout_builder.py

"""
Defines the LayoutBuilder, which turns a parsed layout description (IR) into a
`Layout` of placed, extraction-ready components.

Its responsibilities are:

1.  **Type Resolution:** Mapping each component's type string to a class in
    `COMPONENT_REGISTRY`.
2.  **Unit Conversion:** Converting every length (points, placement offsets,
    LENGTH properties) into the layout's geometric unit with `pint`, and every
    angle into degrees.
3.  **Top-Level Error Handling:** Catching any `DiagnosableError` raised while
    building and re-raising it as a single `LayoutBuildError` whose message is
    the root cause's diagnostic report.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import pint

from .components.base import COMPONENT_REGISTRY, ComponentBase
from .components.base_enums import PropertyKind
from .components.exceptions import ComponentError
from .components.switches import TabulatedSwitch
from .data_structures import Layout, Placement
from .errors import DiagnosableError, LayoutBuildError, format_diagnostic_report
from .extraction.config import ConfigParsingError, parse_extraction_config
from .parser.raw_data import ParsedComponentData, ParsedLayout
from .units import LENGTH_DIMENSIONALITY, to_degrees, to_layout_length, ureg

logger = logging.getLogger(__name__)

_CONVERSION_ERRORS = (ValueError, TypeError, pint.PintError)


class LayoutBuilder:
    """
    Synthesizes a `Layout` from a `ParsedLayout`. Component order in the
    description is preserved, since it fixes point and switch order.
    """

    def build(self, parsed_layout: ParsedLayout) -> Layout:
        """
        The build-time entry point.

        Raises:
            LayoutBuildError: For any failure, with the root cause chained.
        """
        logger.info(f"--- Starting layout synthesis for '{parsed_layout.layout_name}' ---")
        try:
            unit = self._check_unit(parsed_layout.unit)
            config = parse_extraction_config(parsed_layout.raw_extraction_config, unit)
            components = [self._build_component(comp_ir, unit) for comp_ir in parsed_layout.components]
            layout = Layout(
                name=parsed_layout.layout_name,
                unit=unit,
                components=components,
                extraction_config=config,
                source_file_path=parsed_layout.source_yaml_path,
            )
            logger.info(f"--- Layout synthesis for '{layout.name}' successful: {len(components)} component(s). ---")
            return layout

        except DiagnosableError as e:
            raise LayoutBuildError(e.get_diagnostic_report()) from e

        except ConfigParsingError as e:
            report = format_diagnostic_report(
                error_type="Invalid Extraction Configuration",
                details=str(e),
                suggestion="Check the 'unit' and 'extraction' sections of the layout description.",
                context={'source_file': parsed_layout.source_yaml_path}
            )
            raise LayoutBuildError(report) from e

        except Exception as e:
            report = format_diagnostic_report(
                error_type=f"An Unexpected Error Occurred ({type(e).__name__})",
                details=f"The layout builder encountered an unexpected internal error: {e}",
                suggestion="This may indicate a bug in netlist_core. Please review the traceback.",
                context={'source_file': parsed_layout.source_yaml_path}
            )
            raise LayoutBuildError(report) from e

    @staticmethod
    def _check_unit(unit: str) -> str:
        try:
            dimensionality = ureg.Unit(unit).dimensionality
        except _CONVERSION_ERRORS as e:
            raise ConfigParsingError(f"Unknown layout unit '{unit}': {e}") from e
        if dimensionality != LENGTH_DIMENSIONALITY:
            raise ConfigParsingError(f"Layout unit '{unit}' is not a length unit.")
        return unit

    def _build_component(self, comp_ir: ParsedComponentData, unit: str) -> ComponentBase:
        component_class = COMPONENT_REGISTRY.get(comp_ir.component_type)
        if component_class is None:
            raise ComponentError(
                component_id=comp_ir.instance_id,
                details=(
                    f"Unknown component type '{comp_ir.component_type}'. "
                    f"Available types: {sorted(COMPONENT_REGISTRY)}."
                ),
                component_type=comp_ir.component_type,
            )

        def fail(details: str) -> ComponentError:
            return ComponentError(
                component_id=comp_ir.instance_id, details=details, component_type=comp_ir.component_type
            )

        declared = component_class.declare_properties()
        properties: Dict[str, Any] = {}
        for prop_name, raw_value in comp_ir.raw_properties.items():
            kind = declared.get(prop_name)
            if kind is None:
                # Unknown names are rejected by the component itself, with the full declared list.
                properties[prop_name] = raw_value
                continue
            try:
                properties[prop_name] = self._convert_property(kind, raw_value, unit)
            except _CONVERSION_ERRORS as e:
                raise fail(f"Property '{prop_name}' = {raw_value!r} could not be converted to a {kind.value}: {e}") from e

        points: Optional[List[Tuple[float, float]]] = None
        if comp_ir.raw_points is not None:
            try:
                points = [(to_layout_length(x, unit), to_layout_length(y, unit)) for x, y in comp_ir.raw_points]
            except _CONVERSION_ERRORS as e:
                raise fail(f"Points {comp_ir.raw_points!r} could not be converted to '{unit}': {e}") from e

        try:
            placement = self._convert_placement(comp_ir.raw_placement, unit)
        except _CONVERSION_ERRORS as e:
            raise fail(f"Placement {comp_ir.raw_placement!r} could not be converted: {e}") from e

        kwargs: Dict[str, Any] = dict(
            instance_id=comp_ir.instance_id,
            name=comp_ir.name,
            placement=placement,
            properties=properties,
            points=points,
        )
        if comp_ir.raw_positions is not None:
            if not issubclass(component_class, TabulatedSwitch):
                raise ComponentError(
                    component_id=comp_ir.instance_id,
                    details="Only data-described switches (TabulatedSwitch) accept a 'positions' table.",
                    component_type=comp_ir.component_type,
                )
            kwargs['positions'] = [
                (str(entry['name']), entry.get('connections', [])) for entry in comp_ir.raw_positions
            ]

        component = component_class(**kwargs)
        logger.debug(f"Built component {component!r} with {component.point_count} point(s).")
        return component

    @staticmethod
    def _convert_property(kind: PropertyKind, raw_value: Any, unit: str) -> Any:
        if kind is PropertyKind.LENGTH:
            return to_layout_length(raw_value, unit)
        if kind is PropertyKind.COUNT:
            if isinstance(raw_value, bool):
                raise TypeError("expected an integer, got a boolean")
            if isinstance(raw_value, float) and not raw_value.is_integer():
                raise ValueError("expected a whole number")
            return int(raw_value)
        if kind is PropertyKind.FLAG:
            if not isinstance(raw_value, bool):
                raise TypeError(f"expected true or false, got {type(raw_value).__name__}")
            return raw_value
        return str(raw_value)

    @staticmethod
    def _convert_placement(raw_placement: Dict[str, Any], unit: str) -> Placement:
        if not raw_placement:
            return Placement()
        return Placement(
            x=to_layout_length(raw_placement.get('x', 0.0), unit),
            y=to_layout_length(raw_placement.get('y', 0.0), unit),
            rotation_deg=to_degrees(raw_placement.get('rotation', 0.0)),
            mirrored=bool(raw_placement.get('mirrored', False)),
        )
