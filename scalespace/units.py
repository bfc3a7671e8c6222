"""
Unit-tagged physical quantities.

Every length and angle crossing the library boundary is a pint Quantity.
Computation happens on magnitudes in the canonical units (metres, radians);
results are handed back as quantities so callers convert only at
presentation.
"""

from typing import Any

import pint

from .errors import unit_mismatch

ureg = pint.UnitRegistry()
Quantity = ureg.Quantity

# Canonical internal units
LENGTH_UNIT = "meter"
ANGLE_UNIT = "radian"


def length(value: float, unit: str = LENGTH_UNIT) -> Quantity:
    """Create a length quantity, e.g. ``length(384400, "kilometer")``."""
    quantity = Quantity(float(value), unit)
    return require_length(quantity)


def angle(value: float, unit: str = ANGLE_UNIT) -> Quantity:
    """Create an angle quantity, e.g. ``angle(0.5, "degree")``."""
    quantity = Quantity(float(value), unit)
    return require_angle(quantity)


def is_quantity(value: Any) -> bool:
    return isinstance(value, pint.Quantity)


def require_length(value: Any, name: str = "length") -> Quantity:
    """
    Check that a value is a length quantity.

    Args:
        value: Candidate quantity
        name: Parameter name used in the error detail

    Returns:
        The value unchanged

    Raises:
        UnitError: If the value is untagged or not a length
    """
    if not is_quantity(value) or not value.check("[length]"):
        raise unit_mismatch("length", value, name)
    return value


def require_angle(value: Any, name: str = "angle") -> Quantity:
    """
    Check that a value is an angle quantity.

    Radians are dimensionless in pint, so any dimensionless quantity is
    accepted; bare numbers are not.

    Raises:
        UnitError: If the value is untagged or not an angle
    """
    if not is_quantity(value) or not value.is_compatible_with(ANGLE_UNIT):
        raise unit_mismatch("angle", value, name)
    return value


def to_meters(value: Any, name: str = "length") -> float:
    return require_length(value, name).to(LENGTH_UNIT).magnitude


def to_radians(value: Any, name: str = "angle") -> float:
    return require_angle(value, name).to(ANGLE_UNIT).magnitude


def is_length_unit(unit: str) -> bool:
    """Check whether a unit name parses and measures length."""
    try:
        return Quantity(1.0, unit).check("[length]")
    except (pint.UndefinedUnitError, pint.DefinitionSyntaxError, AttributeError, ValueError):
        return False
