# src/netlist_core/units.py
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")

# The drafting unit used by most hobby layout tools.
ureg.define("mil = 0.001 inch")

# --- Canonical dimensionality objects for explicit checks ---
LENGTH_DIMENSIONALITY = ureg.parse_expression('meter').dimensionality
ANGLE_DIMENSIONALITY = ureg.parse_expression('degree').dimensionality

#: Geometric unit assumed for bare numbers when a layout does not declare one.
DEFAULT_LAYOUT_UNIT = "inch"


def to_layout_length(value: Union[str, float, int, Quantity], layout_unit: str = DEFAULT_LAYOUT_UNIT) -> float:
    """
    Converts a length given as a pint string ('0.1 in', '2.54 mm'), a Quantity,
    or a bare number (already in layout units) to a float in `layout_unit`.

    Raises:
        pint.DimensionalityError: If the value is not a length.
        pint.UndefinedUnitError: If the unit string is unknown.
        ValueError: If the value cannot be interpreted at all.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a length, got boolean {value!r}.")
    if isinstance(value, (int, float)):
        return float(value)
    qty = ureg.Quantity(value) if isinstance(value, str) else value
    if not isinstance(qty, Quantity):
        raise ValueError(f"Could not interpret {value!r} as a length.")
    if qty.dimensionless:
        # A bare number written as a string ('0.1') is taken in layout units.
        return float(qty.magnitude)
    if qty.dimensionality != LENGTH_DIMENSIONALITY:
        raise pint.DimensionalityError(qty.units, ureg.Unit(layout_unit))
    return float(qty.to(layout_unit).magnitude)


def to_degrees(value: Union[str, float, int, Quantity]) -> float:
    """Converts an angle ('90 deg', '0.5 turn', or a bare number of degrees) to degrees."""
    if isinstance(value, bool):
        raise ValueError(f"Expected an angle, got boolean {value!r}.")
    if isinstance(value, (int, float)):
        return float(value)
    qty = ureg.Quantity(value) if isinstance(value, str) else value
    if qty.dimensionless and not qty.unitless:
        # pint treats angles as dimensionless; radians/degrees carry units.
        return float(qty.to('degree').magnitude)
    if qty.unitless:
        return float(qty.magnitude)
    raise pint.DimensionalityError(qty.units, ureg.degree)
